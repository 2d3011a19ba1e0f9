from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .models import ActivityBucket, Delegate


@dataclass
class DelegatesState:
    """Observable fields read by the presentation layer.

    Only :class:`delegatehub.delegates.Delegates` writes to these. Each
    ``is_loading_*`` flag doubles as the reentrancy guard of its operation.
    """

    delegates: List[Delegate] = field(default_factory=list)
    delegate: Optional[Delegate] = None
    delegates_stats: Dict[str, ActivityBucket] = field(default_factory=dict)
    is_loading_delegates: bool = False
    is_loading_more_delegates: bool = False
    is_loading_delegate: bool = False
    has_delegates_load_failed: bool = False
    has_more_delegates: bool = False
    resolved_address: Optional[str] = None
