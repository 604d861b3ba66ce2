"""Company merger algorithm."""

import logging

from ..core.constants import MERGE_STOCK_RATIO, MERGE_BONUS_RATE, MERGE_PRICE_DIVIDER
from ..core.exceptions import InvalidCompanyError
from ..game.game_state import GameState
from ..game.board import is_company
from .base_action import MergeResult, MergeTransaction


def choose_dominant(game_state: GameState, a: int, b: int):
    """Return (dominant, loser) ids for a merger of ``a`` and ``b``.

    The first operand survives only when its value is strictly greater;
    equal values go to the second operand.
    """
    value_a = game_state.companies[a].value
    value_b = game_state.companies[b].value
    if value_b < value_a:
        return a, b
    return b, a


def merge_companies(game_state: GameState, a: int, b: int) -> MergeResult:
    """Merge two on-map companies; the more valuable one absorbs the other.

    Every in-game player's stock in the loser converts at MERGE_STOCK_RATIO
    (rounded down) into the dominant company and earns a cash bonus
    proportional to their share of the loser. All transactions are
    computed before anything is applied. Every map cell of the loser is
    relabelled to the dominant id.
    """
    for company_id in (a, b):
        if not is_company(company_id) or not game_state.companies[company_id].on_map:
            raise InvalidCompanyError(
                f"Company {company_id} is not on the map",
                error_code="NOT_ON_MAP",
                context={"company_id": company_id}
            )
    if a == b:
        raise InvalidCompanyError(
            f"Cannot merge company {a} with itself",
            error_code="SELF_MERGE",
            context={"company_id": a}
        )

    dominant_id, loser_id = choose_dominant(game_state, a, b)
    dominant = game_state.companies[dominant_id]
    loser = game_state.companies[loser_id]

    result = MergeResult(
        dominant_id=dominant_id,
        loser_id=loser_id,
        dominant_name=dominant.name,
        loser_name=loser.name,
    )

    credits = []
    for player in game_state.players:
        if not player.in_game:
            continue
        old_stock = player.stock_owned[loser_id]
        new_stock = int(old_stock * MERGE_STOCK_RATIO)
        bonus = MERGE_BONUS_RATE * player.ownership_fraction(loser) * loser.share_price
        credits.append((player, new_stock, bonus))
        result.transactions.append(MergeTransaction(
            player_name=player.name,
            old_stock=old_stock,
            new_stock=new_stock,
            total_stock=player.stock_owned[dominant_id] + new_stock,
            bonus=bonus,
        ))
        result.total_new_stock += new_stock

    for player, new_stock, bonus in credits:
        player.stock_owned[dominant_id] += new_stock
        player.stock_owned[loser_id] = 0
        player.cash += bonus

    result.price_increase = loser.share_price / (
        game_state.random_stream.uniform_float_01() + MERGE_PRICE_DIVIDER
    )
    dominant.stock_issued += result.total_new_stock
    dominant.max_stock += result.total_new_stock
    dominant.share_price += result.price_increase

    loser.dissolve()
    result.cells_relabelled = game_state.galaxy.relabel(loser_id, dominant_id)

    logging.info(f"{loser.name} has merged into {dominant.name}")
    game_state._log_action("company_merged", result.to_dict())
    return result
