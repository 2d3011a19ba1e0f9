"""
Capability set every delegation scheme supplies.

The orchestration layer only ever calls through this interface; it never
branches on which scheme is active.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List

from ..models import Delegate
from ..transport import GraphQLQuery


@dataclass(frozen=True)
class ContractMethod:
    """Contract call used to submit a delegation.

    ``abi`` is the JSON ABI handed to web3; ``action`` names the function in
    it that takes the delegatee as its arguments.
    """

    action: str
    abi: List[Dict[str, Any]] = field(default_factory=list)


class DelegationStrategy(ABC):
    delegation_type: str = ""

    @abstractmethod
    def get_delegates_query(self, skip: int, first: int, order_by: str) -> GraphQLQuery:
        ...

    @abstractmethod
    def get_delegate_query(self, address: str) -> GraphQLQuery:
        ...

    @abstractmethod
    def get_balance_query(self, address: str) -> GraphQLQuery:
        ...

    @abstractmethod
    def format_delegates_response(self, data: Dict[str, Any]) -> List[Delegate]:
        ...

    @abstractmethod
    def format_delegate_response(self, data: Dict[str, Any]) -> Delegate:
        """Format a response whose ``delegate`` entity is guaranteed present."""

    @abstractmethod
    def format_balance_response(self, data: Dict[str, Any]) -> float:
        ...

    @abstractmethod
    def init_empty_delegate(self, address: str) -> Dict[str, Any]:
        """Raw delegate entity with zero values for an address never delegated to."""

    @abstractmethod
    def get_contract_delegate_method(self) -> ContractMethod:
        ...
