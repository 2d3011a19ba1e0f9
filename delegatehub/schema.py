from typing import Any, Dict, List
from urllib.parse import urlparse

from .normalize import is_address

REQUIRED_STR_FIELDS = ["delegation_type", "delegation_contract", "delegation_api"]
OPTIONAL_STR_FIELDS = [
    "hub_url",
    "space",
    "ens_api",
]
URL_FIELDS = ["delegation_api", "hub_url", "ens_api"]


def _is_non_empty_str(v: Any) -> bool:
    return isinstance(v, str) and v.strip() != ""


def _valid_url(v: str) -> bool:
    try:
        p = urlparse(v)
        return bool(p.scheme in ("http", "https") and p.netloc)
    except ValueError:
        return False


def validate_config(data: Dict[str, Any]) -> List[str]:
    """
    Returns a list of validation error messages. Empty list means valid.
    Checks shape only; whether the endpoints serve the expected schema
    is not verified.
    """
    errors: List[str] = []

    for f in REQUIRED_STR_FIELDS:
        if f not in data or data[f] is None:
            errors.append(f"Missing required field: {f}")
        elif not _is_non_empty_str(data[f]):
            errors.append(f"Field '{f}' must be a non-empty string")

    for f in OPTIONAL_STR_FIELDS:
        if data.get(f) is not None and not isinstance(data[f], str):
            errors.append(f"Field '{f}' must be a string if provided")

    contract = data.get("delegation_contract")
    if _is_non_empty_str(contract) and not is_address(contract):
        errors.append("Field 'delegation_contract' must be a 0x-prefixed 20-byte address")

    for f in URL_FIELDS:
        value = data.get(f)
        if _is_non_empty_str(value) and not _valid_url(value):
            errors.append(f"Field '{f}' must be a valid absolute URL (scheme + host)")

    return errors
