"""Compound-style governor tokens (COMP, UNI and forks) indexed by the governance subgraph."""

from typing import Any, Dict, List, Optional

from ..models import Delegate
from ..normalize import normalize_address
from ..transport import GraphQLQuery
from .base import ContractMethod, DelegationStrategy

GOVERNANCE_FIELDS = """
  governance(id: "GOVERNANCE") {
    delegatedVotes
    totalTokenHolders
    totalDelegates
  }
"""

DELEGATE_FIELDS = """
    id
    delegatedVotes
    delegatedVotesRaw
    tokenHoldersRepresentedAmount
"""

DELEGATES_QUERY = (
    "query Delegates($first: Int!, $skip: Int!, $orderBy: Delegate_orderBy!) {\n"
    "  delegates(\n"
    "    first: $first\n"
    "    skip: $skip\n"
    "    orderBy: $orderBy\n"
    "    orderDirection: desc\n"
    "    where: { tokenHoldersRepresentedAmount_gte: 0 }\n"
    "  ) {" + DELEGATE_FIELDS + "  }" + GOVERNANCE_FIELDS + "}"
)

DELEGATE_QUERY = (
    "query Delegate($id: ID!) {\n"
    "  delegate(id: $id) {" + DELEGATE_FIELDS + "  }" + GOVERNANCE_FIELDS + "}"
)

BALANCE_QUERY = """query Balance($id: ID!) {
  account: tokenHolder(id: $id) {
    tokenBalance
  }
}"""

DELEGATE_ABI = [
    {
        "inputs": [{"internalType": "address", "name": "delegatee", "type": "address"}],
        "name": "delegate",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
]


def _to_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _percentage(part: float, total: float) -> float:
    if not total:
        return 0.0
    return part / total * 100


class CompoundGovernorStrategy(DelegationStrategy):
    delegation_type = "compound-governor"

    def get_delegates_query(self, skip: int, first: int, order_by: str) -> GraphQLQuery:
        return GraphQLQuery(
            DELEGATES_QUERY,
            {"first": first, "skip": skip, "orderBy": order_by},
        )

    def get_delegate_query(self, address: str) -> GraphQLQuery:
        return GraphQLQuery(DELEGATE_QUERY, {"id": normalize_address(address)})

    def get_balance_query(self, address: str) -> GraphQLQuery:
        return GraphQLQuery(BALANCE_QUERY, {"id": address})

    def _format_delegate(self, raw: Dict[str, Any], governance: Optional[Dict[str, Any]]) -> Delegate:
        governance = governance or {}
        delegated_votes = _to_float(raw.get("delegatedVotes"))
        represented = int(_to_float(raw.get("tokenHoldersRepresentedAmount")))
        return Delegate(
            id=normalize_address(raw["id"]),
            delegated_votes=delegated_votes,
            delegated_votes_raw=str(raw.get("delegatedVotesRaw") or "0"),
            token_holders_represented_amount=represented,
            delegators_percentage=_percentage(
                represented, _to_float(governance.get("totalTokenHolders"))
            ),
            votes_percentage=_percentage(
                delegated_votes, _to_float(governance.get("delegatedVotes"))
            ),
        )

    def format_delegates_response(self, data: Dict[str, Any]) -> List[Delegate]:
        governance = data.get("governance")
        return [self._format_delegate(raw, governance) for raw in data.get("delegates") or []]

    def format_delegate_response(self, data: Dict[str, Any]) -> Delegate:
        return self._format_delegate(data["delegate"], data.get("governance"))

    def format_balance_response(self, data: Dict[str, Any]) -> float:
        account = data.get("account") or {}
        return _to_float(account.get("tokenBalance"))

    def init_empty_delegate(self, address: str) -> Dict[str, Any]:
        return {
            "id": normalize_address(address),
            "delegatedVotes": "0",
            "delegatedVotesRaw": "0",
            "tokenHoldersRepresentedAmount": 0,
        }

    def get_contract_delegate_method(self) -> ContractMethod:
        return ContractMethod(action="delegate", abi=DELEGATE_ABI)
