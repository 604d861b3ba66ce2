"""Player and company bankruptcy."""

from dataclasses import dataclass, field
from typing import Dict, Union
import logging

from ..core.constants import MAX_COMPANIES
from ..core.exceptions import InvalidCompanyError
from ..game.game_state import GameState
from ..entities.player import Player


@dataclass
class CompanyBankruptcy:
    """What the bank did when it wound up a company."""
    company_id: int
    company_name: str
    assets_taken: bool
    payout_rate: float = 0.0
    old_share_price: float = 0.0
    payouts: Dict[str, float] = field(default_factory=dict)
    cells_cleared: int = 0


def bankrupt_player(game_state: GameState, player: Union[int, Player, None] = None,
                    forced: bool = False) -> Dict[int, int]:
    """Take a player out of the game.

    Every share goes back to its company (reducing ``stock_issued``), and
    cash and debt are both wiped. Ends the game if nobody is left. Returns
    the confiscated share count per company id.
    """
    if player is None:
        player = game_state.current_player
    player = game_state.get_player(player)

    confiscated = {}
    for company_id in range(MAX_COMPANIES):
        owned = player.stock_owned[company_id]
        if owned:
            confiscated[company_id] = owned
        game_state.companies[company_id].stock_issued -= owned
        player.stock_owned[company_id] = 0

    player.cash = 0.0
    player.debt = 0.0
    player.in_game = False

    how = "declared bankrupt by the Interstellar Trading Bank" if forced else "declared bankruptcy"
    logging.info(f"{player.name} has {how}")
    game_state._log_action("player_bankrupt", {
        "player": player.name,
        "forced": forced,
        "confiscated": confiscated,
    })

    if not game_state.active_players:
        game_state.end_game("all_bankrupt")

    return confiscated


def bankrupt_company(game_state: GameState, company_id: int,
                     assets_taken: bool, payout_rate: float = 0.0) -> CompanyBankruptcy:
    """Wind up an on-map company.

    Unless all assets were taken, every in-game shareholder is paid
    ``payout_rate`` of the share price per share owned. The company's
    counters are zeroed, its cells become empty space and every holding
    in it is cancelled.
    """
    company = game_state.companies[company_id]
    if not company.on_map:
        raise InvalidCompanyError(
            f"Company {company_id} is not on the map",
            error_code="NOT_ON_MAP",
            context={"company_id": company_id}
        )

    record = CompanyBankruptcy(
        company_id=company_id,
        company_name=company.name,
        assets_taken=assets_taken,
        payout_rate=0.0 if assets_taken else payout_rate,
        old_share_price=company.share_price,
    )

    if not assets_taken:
        for player in game_state.players:
            if player.in_game:
                payout = player.stock_owned[company_id] * company.share_price * payout_rate
                player.cash += payout
                record.payouts[player.name] = payout

    for player in game_state.players:
        player.stock_owned[company_id] = 0

    company.dissolve(clear_price=True)
    record.cells_cleared = game_state.galaxy.clear_company(company_id)

    logging.info(f"{company.name} has been declared bankrupt by the Interstellar Trading Bank"
                 + (" (all assets taken)" if assets_taken else f" (paying {payout_rate:.2%} of share value)"))
    game_state._log_action("company_bankrupt", {
        "company": company.name,
        "assets_taken": assets_taken,
        "payout_rate": record.payout_rate,
        "payouts": record.payouts,
    })
    return record
