"""
Orchestration settings.

Values come from explicit arguments first, then environment variables
(optionally loaded from a .env file by :func:`delegatehub.env.load_env`).
"""

import os
from dataclasses import asdict, dataclass
from typing import Optional

from .schema import validate_config

DEFAULT_HUB_URL = "https://hub.snapshot.org/graphql"
DEFAULT_ENS_API = "https://api.thegraph.com/subgraphs/name/ensdomains/ens"
DEFAULT_DELEGATION_TYPE = "compound-governor"


class ConfigError(ValueError):
    """Raised when the settings are incomplete or malformed."""
    pass


@dataclass(frozen=True)
class DelegatesConfig:
    delegation_type: str
    delegation_contract: str
    delegation_api: str
    hub_url: str = DEFAULT_HUB_URL
    space: Optional[str] = None
    ens_api: str = DEFAULT_ENS_API

    def __post_init__(self):
        errors = validate_config(asdict(self))
        if errors:
            raise ConfigError("Invalid delegates config: " + "; ".join(errors))


def load_config(
    delegation_type: Optional[str] = None,
    delegation_contract: Optional[str] = None,
    delegation_api: Optional[str] = None,
    hub_url: Optional[str] = None,
    space: Optional[str] = None,
    ens_api: Optional[str] = None,
) -> DelegatesConfig:
    """
    Build a DelegatesConfig from arguments, falling back to env vars.

    Env vars:
        DELEGATION_TYPE, DELEGATION_CONTRACT, DELEGATION_API,
        SNAPSHOT_HUB_URL, SNAPSHOT_SPACE, ENS_API

    Raises:
        ConfigError: If required values are missing or malformed
    """
    return DelegatesConfig(
        delegation_type=delegation_type or os.getenv("DELEGATION_TYPE") or DEFAULT_DELEGATION_TYPE,
        delegation_contract=delegation_contract or os.getenv("DELEGATION_CONTRACT"),
        delegation_api=delegation_api or os.getenv("DELEGATION_API"),
        hub_url=hub_url or os.getenv("SNAPSHOT_HUB_URL") or DEFAULT_HUB_URL,
        space=space or os.getenv("SNAPSHOT_SPACE"),
        ens_api=ens_api or os.getenv("ENS_API") or DEFAULT_ENS_API,
    )
