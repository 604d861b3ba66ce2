"""Outcome records produced by move resolution."""

from dataclasses import dataclass, field
from typing import Dict, Any, Optional, List, Tuple

from ..core.enums import MoveKind


@dataclass(frozen=True)
class MergeTransaction:
    """One player's share conversion and cash bonus in a merger."""
    player_name: str
    old_stock: int
    new_stock: int
    total_stock: int
    bonus: float


@dataclass
class MergeResult:
    """Everything a merger did, computed before any state changed."""
    dominant_id: int
    loser_id: int
    dominant_name: str
    loser_name: str
    transactions: List[MergeTransaction] = field(default_factory=list)
    total_new_stock: int = 0
    price_increase: float = 0.0
    cells_relabelled: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "dominant": self.dominant_name,
            "loser": self.loser_name,
            "total_new_stock": self.total_new_stock,
            "price_increase": round(self.price_increase, 2),
            "cells_relabelled": self.cells_relabelled,
            "transactions": [t.__dict__ for t in self.transactions],
        }


@dataclass
class MoveOutcome:
    """Result of processing one selection."""
    kind: MoveKind
    position: Optional[Tuple[int, int]] = None
    company_id: Optional[int] = None
    founded_company_id: Optional[int] = None
    mergers: List[MergeResult] = field(default_factory=list)
    absorbed_outposts: List[Tuple[int, int]] = field(default_factory=list)
    star_bonuses: int = 0
    game_over: bool = False

    def get_action_data(self) -> Dict[str, Any]:
        """Get serializable data about this outcome."""
        return {
            "kind": self.kind.value,
            "position": self.position,
            "company_id": self.company_id,
            "founded_company_id": self.founded_company_id,
            "mergers": [m.to_dict() for m in self.mergers],
            "absorbed_outposts": list(self.absorbed_outposts),
            "star_bonuses": self.star_bonuses,
            "game_over": self.game_over,
        }
