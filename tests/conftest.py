"""
Pytest configuration and shared fixtures.
"""

import copy
from typing import Any, Dict, List, Optional

import pytest
import requests

from delegatehub.config import DelegatesConfig
from delegatehub.logger import get_logger, reset_logger

UNI_TOKEN = "0x1f9840a85d5aF5bf1D1762F925BDADdC4201F984"
GOVERNANCE_API = "https://api.thegraph.com/subgraphs/name/ianlapham/governance-tracking"


class FakeTransport:
    """Returns queued responses in order and records every call.

    Set ``gate`` to an asyncio.Event (inside the running loop) to hold
    requests in flight until it is set.
    """

    def __init__(self, responses: Optional[List[Any]] = None):
        self.responses = list(responses or [])
        self.calls = []
        self.gate = None

    async def request(self, endpoint, query, source="subgraph"):
        self.calls.append((endpoint, query, source))
        if self.gate is not None:
            await self.gate.wait()
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return copy.deepcopy(response)


class FakeResolver:
    def __init__(self, names: Optional[Dict[str, str]] = None, error: Optional[Exception] = None):
        self.names = names or {}
        self.error = error
        self.calls = []

    async def resolve(self, identifier):
        self.calls.append(identifier)
        if self.error is not None:
            raise self.error
        return self.names.get(identifier)


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, body: Any = None, status_code: int = 200, invalid_json: bool = False):
        self.body = body
        self.status_code = status_code
        self.invalid_json = invalid_json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} Error", response=self)

    def json(self):
        if self.invalid_json:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self.body


def delegate_entity(index: int) -> Dict[str, Any]:
    return {
        "id": f"0x{index + 1:040x}",
        "delegatedVotes": str(1000 - index),
        "delegatedVotesRaw": str((1000 - index) * 10**18),
        "tokenHoldersRepresentedAmount": index + 1,
    }


def delegates_page(size: int, start: int = 0) -> Dict[str, Any]:
    return {
        "delegates": [delegate_entity(i) for i in range(start, start + size)],
        "governance": {
            "delegatedVotes": "20000",
            "totalTokenHolders": "400",
            "totalDelegates": "120",
        },
    }


@pytest.fixture(autouse=True)
def quiet_logger(tmp_path):
    """Route the global logger to a temp dir with console output off."""
    reset_logger()
    logger = get_logger(log_dir=tmp_path / "logs", enable_console=False)
    yield logger
    reset_logger()


@pytest.fixture
def config() -> DelegatesConfig:
    return DelegatesConfig(
        delegation_type="compound-governor",
        delegation_contract=UNI_TOKEN,
        delegation_api=GOVERNANCE_API,
        space="uniswap",
    )


@pytest.fixture
def valid_config_data() -> Dict[str, Any]:
    return {
        "delegation_type": "compound-governor",
        "delegation_contract": UNI_TOKEN,
        "delegation_api": GOVERNANCE_API,
        "hub_url": "https://hub.snapshot.org/graphql",
        "space": "uniswap",
    }


@pytest.fixture
def make_transport():
    return FakeTransport


@pytest.fixture
def make_resolver():
    return FakeResolver


@pytest.fixture
def make_response():
    return FakeResponse


@pytest.fixture
def make_page():
    return delegates_page


@pytest.fixture
def sample_activity() -> Dict[str, Any]:
    """Hub response with activity for two delegates, newest first."""
    return {
        "votes": [
            {"voter": "0xAAaA000000000000000000000000000000000001", "created": 1700000300, "choice": 1, "vp": 1500.5},
            {"voter": "0xbbbb000000000000000000000000000000000002", "created": 1700000200, "choice": [1, 2], "vp": 20},
            {"voter": "0xaaaa000000000000000000000000000000000001", "created": 1700000100, "choice": 2, "vp": 1400},
        ],
        "proposals": [
            {"author": "0xBBBB000000000000000000000000000000000002", "created": 1700000050, "title": "Deploy on new chain"},
        ],
    }
