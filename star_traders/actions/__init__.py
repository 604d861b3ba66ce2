"""Move resolution, bankruptcy and trading actions."""

from .base_action import MoveOutcome, MergeResult, MergeTransaction
from .move_catalog import select_moves
from .move_resolver import process_move, resolve_position
from .merger import merge_companies
from .bankruptcy import bankrupt_player, bankrupt_company
from .exchange import buy_shares, sell_shares, bid_for_shares, credit_limit, borrow, repay

__all__ = [
    "MoveOutcome",
    "MergeResult",
    "MergeTransaction",
    "select_moves",
    "process_move",
    "resolve_position",
    "merge_companies",
    "bankrupt_player",
    "bankrupt_company",
    "buy_shares",
    "sell_shares",
    "bid_for_shares",
    "credit_limit",
    "borrow",
    "repay",
]
