"""
Name resolution.

Turns a user-supplied identifier (hex address or ENS name) into a
canonical lower-cased address. An unknown name is a valid outcome and
resolves to ``None``; only transport failures raise.
"""

from typing import Optional, Protocol

from .normalize import is_address, normalize_address
from .queries import ENS_RESOLVED_ADDRESS
from .transport import GraphQLQuery, GraphQLTransport


class NameResolver(Protocol):
    async def resolve(self, identifier: str) -> Optional[str]:
        ...


class EnsSubgraphResolver:
    """Resolve ENS names through the ENS subgraph."""

    def __init__(self, ens_api: str, transport: Optional[GraphQLTransport] = None):
        self.ens_api = ens_api
        self.transport = transport or GraphQLTransport()

    async def resolve(self, identifier: str) -> Optional[str]:
        if not identifier or not identifier.strip():
            return None
        if is_address(identifier):
            return normalize_address(identifier)

        name = identifier.strip().lower()
        data = await self.transport.request(
            self.ens_api,
            GraphQLQuery(ENS_RESOLVED_ADDRESS, {"name": name}),
            source="ens",
        )
        for domain in data.get("domains") or []:
            resolved = (domain or {}).get("resolvedAddress") or {}
            if resolved.get("id"):
                return normalize_address(resolved["id"])
        return None
