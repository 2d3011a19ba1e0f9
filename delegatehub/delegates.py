"""
Delegate directory orchestration.

Drives the paged delegate listing, single-delegate lookup and the
votes/proposals aggregation, writing results into a DelegatesState.

Error policy:
- List fetches log failures and raise the sticky
  ``has_delegates_load_failed`` flag; already loaded data is kept.
- Single-delegate fetches log failures and leave ``delegate`` empty
  without setting any flag.
- Aggregation logs failures and leaves the previous mapping in place.
- Balance queries and ``set_delegate`` propagate errors to the caller.
"""

from typing import Dict, Iterable, List, Optional

from .config import DelegatesConfig
from .logger import StructuredLogger, get_logger
from .models import ActivityBucket, Delegate, Proposal, Vote
from .normalize import normalize_address
from .queries import DELEGATE_VOTES_AND_PROPOSALS
from .resolver import EnsSubgraphResolver, NameResolver
from .state import DelegatesState
from .strategies import create_standard_config
from .transactions import TransactionError, TransactionSender
from .transport import GraphQLQuery, GraphQLTransport

DELEGATES_LIMIT = 18


class Delegates:
    """Orchestrates delegate queries for one delegation config."""

    def __init__(
        self,
        config: DelegatesConfig,
        transport: Optional[GraphQLTransport] = None,
        resolver: Optional[NameResolver] = None,
        sender: Optional[TransactionSender] = None,
        logger: Optional[StructuredLogger] = None,
    ):
        self.config = config
        self.strategy = create_standard_config(config.delegation_type)
        self.transport = transport or GraphQLTransport()
        self.resolver = resolver or EnsSubgraphResolver(config.ens_api, self.transport)
        self.sender = sender
        self.logger = logger or get_logger()
        self.state = DelegatesState()

    async def _fetch_delegates(self, order_by: str, skip: int = 0) -> List[Delegate]:
        query = self.strategy.get_delegates_query(
            skip=skip, first=DELEGATES_LIMIT, order_by=order_by
        )
        data = await self.transport.request(self.config.delegation_api, query, source="subgraph")
        return self.strategy.format_delegates_response(data)

    async def fetch_delegates(self, order_by: str) -> None:
        """Load the first page, replacing the current list."""
        state = self.state
        if state.is_loading_delegates:
            return
        state.is_loading_delegates = True

        try:
            page = await self._fetch_delegates(order_by)
            state.delegates = page
            state.has_more_delegates = len(page) == DELEGATES_LIMIT
            state.has_delegates_load_failed = False
            self.logger.debug("Fetched delegates", order_by=order_by, count=len(page))
        except Exception as e:
            self.logger.error("Failed to fetch delegates", order_by=order_by, error=str(e))
            state.has_delegates_load_failed = True
        finally:
            state.is_loading_delegates = False

    async def fetch_more_delegates(self, order_by: str) -> None:
        """Append the next page to the current list.

        The offset is the current list length; the caller must pass the
        same ``order_by`` that produced the list.
        """
        state = self.state
        if not state.delegates or state.is_loading_more_delegates:
            return
        state.is_loading_more_delegates = True

        try:
            page = await self._fetch_delegates(order_by, skip=len(state.delegates))
            state.delegates = [*state.delegates, *page]
            state.has_more_delegates = len(page) == DELEGATES_LIMIT
            state.has_delegates_load_failed = False
            self.logger.debug(
                "Fetched more delegates", order_by=order_by, count=len(page), total=len(state.delegates)
            )
        except Exception as e:
            self.logger.error("Failed to fetch more delegates", order_by=order_by, error=str(e))
            state.has_delegates_load_failed = True
        finally:
            state.is_loading_more_delegates = False

    async def fetch_delegate(self, identifier: str) -> None:
        """Resolve ``identifier`` and load that delegate.

        An address with no delegate entity yields a zero-valued record.
        ``resolved_address`` is cleared on entry, so it stays None when
        resolution fails or raises.
        """
        state = self.state
        if state.is_loading_delegate:
            return
        state.delegate = None
        state.resolved_address = None
        state.is_loading_delegate = True

        try:
            state.resolved_address = await self.resolver.resolve(identifier)
            if not state.resolved_address:
                self.logger.info("Delegate identifier not resolved", identifier=identifier)
                return

            query = self.strategy.get_delegate_query(state.resolved_address)
            data = dict(
                await self.transport.request(self.config.delegation_api, query, source="subgraph")
            )
            if not data.get("delegate"):
                data["delegate"] = self.strategy.init_empty_delegate(state.resolved_address)

            state.delegate = self.strategy.format_delegate_response(data)
        except Exception as e:
            self.logger.error("Failed to fetch delegate", identifier=identifier, error=str(e))
        finally:
            state.is_loading_delegate = False

    async def fetch_delegate_balance(self, address: str) -> float:
        query = self.strategy.get_balance_query(address.lower())
        data = await self.transport.request(self.config.delegation_api, query, source="subgraph")
        return self.strategy.format_balance_response(data)

    async def set_delegate(self, address: str) -> str:
        """Submit a delegation to ``address``; failures propagate."""
        if self.sender is None:
            raise TransactionError("No transaction sender configured")
        method = self.strategy.get_contract_delegate_method()
        return await self.sender.send_transaction(
            self.config.delegation_contract, method, [address]
        )

    async def fetch_delegate_votes_and_proposals(
        self, delegates: Iterable[str], space: Optional[str] = None
    ) -> Dict[str, ActivityBucket]:
        """
        Partition the votes and proposals of ``delegates`` within ``space``.

        Every requested address gets a bucket, keyed by its lower-cased
        form, even with no activity. ``delegates_stats`` is replaced only
        once the mapping is complete.

        Returns:
            The new mapping, or {} when nothing was stored (including when
            no space is given or configured)
        """
        addresses = list(delegates)
        space = space or self.config.space
        if not space:
            self.logger.warning("No space set; skipping votes and proposals", delegates=len(addresses))
            return {}

        query = GraphQLQuery(
            DELEGATE_VOTES_AND_PROPOSALS, {"delegates": addresses, "space": space}
        )
        try:
            data = await self.transport.request(self.config.hub_url, query, source="hub")
            if not data:
                return {}

            stats = {normalize_address(a): ActivityBucket() for a in addresses}
            for raw in data.get("votes") or []:
                vote = Vote.from_dict(raw)
                stats[normalize_address(vote.voter)].votes.append(vote)
            for raw in data.get("proposals") or []:
                proposal = Proposal.from_dict(raw)
                stats[normalize_address(proposal.author)].proposals.append(proposal)
        except Exception as e:
            self.logger.error(
                "Failed to fetch delegate votes and proposals", space=space, error=str(e)
            )
            return {}

        self.state.delegates_stats = stats
        return stats
