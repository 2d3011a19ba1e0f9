"""
Record types produced by query strategies and the activity aggregator.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class Delegate:
    """A delegate entry keyed by its lower-cased address."""

    id: str
    delegated_votes: float = 0.0
    delegated_votes_raw: str = "0"
    token_holders_represented_amount: int = 0
    delegators_percentage: float = 0.0
    votes_percentage: float = 0.0


@dataclass
class Vote:
    created: int
    voter: str
    choice: Any
    voting_power: float

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Vote":
        return cls(
            created=int(data.get("created") or 0),
            voter=data["voter"],
            choice=data.get("choice"),
            voting_power=float(data.get("vp") or 0),
        )


@dataclass
class Proposal:
    created: int
    author: str
    title: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Proposal":
        return cls(
            created=int(data.get("created") or 0),
            author=data["author"],
            title=data.get("title") or "",
        )


@dataclass
class ActivityBucket:
    """Votes cast and proposals authored by one delegate, in feed order."""

    votes: List[Vote] = field(default_factory=list)
    proposals: List[Proposal] = field(default_factory=list)
