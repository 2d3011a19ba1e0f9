import re

HOSTED_SERVICE_PATTERN = re.compile(
    r"https://thegraph\.com/hosted-service/subgraph/([\w-]+)/([\w-]+)"
)
SUBGRAPH_NAME_URL = "https://api.thegraph.com/subgraphs/name/{org}/{name}"

ADDRESS_PATTERN = re.compile(r"^0x[0-9a-fA-F]{40}$")


def adjust_url(api_url: str) -> str:
    """Rewrite a hosted-service explorer URL into its query endpoint.

    Any other URL is returned unchanged.
    """
    match = HOSTED_SERVICE_PATTERN.search(api_url)
    if not match:
        return api_url
    return SUBGRAPH_NAME_URL.format(org=match.group(1), name=match.group(2))


def is_address(value: str) -> bool:
    return bool(ADDRESS_PATTERN.match(value.strip())) if isinstance(value, str) else False


def normalize_address(address: str) -> str:
    return address.strip().lower()
