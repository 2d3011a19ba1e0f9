"""Query strategies per delegation scheme."""

from typing import Dict, Type

from .base import ContractMethod, DelegationStrategy
from .compound_governor import CompoundGovernorStrategy

STRATEGIES: Dict[str, Type[DelegationStrategy]] = {
    CompoundGovernorStrategy.delegation_type: CompoundGovernorStrategy,
}


class UnknownDelegationTypeError(ValueError):
    """Raised when no strategy is registered for a delegation type."""
    pass


def create_standard_config(delegation_type: str) -> DelegationStrategy:
    """Instantiate the strategy registered for ``delegation_type``."""
    strategy_cls = STRATEGIES.get(delegation_type)
    if strategy_cls is None:
        supported = ", ".join(sorted(STRATEGIES))
        raise UnknownDelegationTypeError(
            f"Unsupported delegation type '{delegation_type}'. Use one of: {supported}"
        )
    return strategy_cls()


__all__ = [
    "ContractMethod",
    "DelegationStrategy",
    "CompoundGovernorStrategy",
    "STRATEGIES",
    "UnknownDelegationTypeError",
    "create_standard_config",
]
