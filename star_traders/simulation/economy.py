"""Economic adjustment, run once after every move.

The steps run in a fixed order and each reads what the one before it
wrote. Random draws are made in exactly this order, so replaying the same
stream replays the same economy:

1. rare company bankruptcy
2. drift in one company's return
3. upper clamp on every return
4. drift in one company's share price
5. dividends for the current player
6. drift and upper clamp on the interest rate
7. interest on the current player's debt
8. overdraft seizure and possible forced bankruptcy
"""

from dataclasses import dataclass, field
from typing import Dict, Optional
import logging

from ..core.constants import (
    MAX_COMPANIES, COMPANY_BANKRUPTCY, ALL_ASSETS_TAKEN,
    CHANGE_COMPANY_RETURN, COMPANY_RETURN_INC, MAX_COMPANY_RETURN, RETURN_DIVIDER,
    INC_SHARE_PRICE, DEC_SHARE_PRICE, PRICE_CHANGE_RATE, OWNERSHIP_BONUS,
    CHANGE_INTEREST_RATE, INTEREST_RATE_INC, MAX_INTEREST_RATE, INTEREST_RATE_DIVIDER,
    MAX_OVERDRAFT, PROB_BANKRUPTCY, ROUNDING_AMOUNT
)
from ..game.game_state import GameState
from ..actions.bankruptcy import CompanyBankruptcy, bankrupt_company, bankrupt_player


@dataclass
class AdjustmentReport:
    """Everything that happened during one economic adjustment."""

    player_name: Optional[str] = None
    company_bankruptcy: Optional[CompanyBankruptcy] = None
    return_changes: Dict[int, float] = field(default_factory=dict)
    price_change: Optional[float] = None
    price_change_company: Optional[int] = None
    dividends: float = 0.0
    interest_rate_before: float = 0.0
    interest_rate_after: float = 0.0
    interest_charged: float = 0.0
    impounded: float = 0.0
    forced_bankruptcy: bool = False

    @property
    def interest_rate_changed(self) -> bool:
        return self.interest_rate_before != self.interest_rate_after

    def get_summary(self) -> Dict[str, object]:
        return {
            "player": self.player_name,
            "company_bankrupt": self.company_bankruptcy.company_name if self.company_bankruptcy else None,
            "return_changes": dict(self.return_changes),
            "price_change": self.price_change,
            "dividends": round(self.dividends, 2),
            "interest_rate": round(self.interest_rate_after, 4),
            "interest_charged": round(self.interest_charged, 2),
            "impounded": round(self.impounded, 2),
            "forced_bankruptcy": self.forced_bankruptcy,
        }


def adjust_values(game_state: GameState) -> AdjustmentReport:
    """Evolve companies, pay the current player and settle their debt."""
    rng = game_state.random_stream
    companies = game_state.companies
    player = game_state.current_player

    report = AdjustmentReport(
        player_name=player.name if player else None,
        interest_rate_before=game_state.interest_rate,
    )

    # Company bankruptcy
    if rng.uniform_float_01() > (1.0 - COMPANY_BANKRUPTCY):
        which = rng.uniform_int(MAX_COMPANIES)
        if companies[which].on_map:
            if rng.uniform_float_01() < ALL_ASSETS_TAKEN:
                report.company_bankruptcy = bankrupt_company(game_state, which, assets_taken=True)
            else:
                rate = rng.uniform_float_01()
                report.company_bankruptcy = bankrupt_company(
                    game_state, which, assets_taken=False, payout_rate=rate
                )

    # Company return drift
    if rng.uniform_float_01() < CHANGE_COMPANY_RETURN:
        which = rng.uniform_int(MAX_COMPANIES)
        if companies[which].on_map:
            companies[which].share_return *= rng.uniform_float_01() + COMPANY_RETURN_INC
            report.return_changes[which] = companies[which].share_return

    # Keep returns from growing too large
    for company in companies:
        if company.on_map and company.share_return > MAX_COMPANY_RETURN:
            company.share_return /= rng.uniform_float_01() + RETURN_DIVIDER
            report.return_changes[company.company_id] = company.share_return

    # Share price drift
    if rng.uniform_float_01() < INC_SHARE_PRICE:
        which = rng.uniform_int(MAX_COMPANIES)
        company = companies[which]
        if company.on_map:
            change = rng.uniform_float_01() * company.share_price * PRICE_CHANGE_RATE
            if rng.uniform_float_01() < DEC_SHARE_PRICE:
                change = -change
            company.share_price += change
            report.price_change = change
            report.price_change_company = which
            logging.debug(f"{company.name} share price changed by {change:.2f}")

    if player is not None and player.in_game:
        report.dividends = pay_dividends(game_state)

    # Interest rate drift
    if rng.uniform_float_01() < CHANGE_INTEREST_RATE:
        game_state.interest_rate *= rng.uniform_float_01() + INTEREST_RATE_INC
    if game_state.interest_rate > MAX_INTEREST_RATE:
        game_state.interest_rate /= rng.uniform_float_01() + INTEREST_RATE_DIVIDER
    report.interest_rate_after = game_state.interest_rate
    if report.interest_rate_changed:
        logging.debug(f"Interest rate now {game_state.interest_rate:.2%}")

    if player is None:
        return report

    # Compound the current player's debt
    new_debt = player.debt * (1.0 + game_state.interest_rate)
    report.interest_charged = new_debt - player.debt
    player.debt = new_debt

    # Overdraft
    if game_state.total_value(player) <= -MAX_OVERDRAFT:
        impounded = min(player.cash, player.debt)
        player.cash -= impounded
        player.debt -= impounded
        if player.cash < ROUNDING_AMOUNT:
            player.cash = 0.0
        if player.debt < ROUNDING_AMOUNT:
            player.debt = 0.0
        report.impounded = impounded
        logging.info(f"The Interstellar Trading Bank impounded {impounded:.2f} from {player.name}")
        game_state._log_action("cash_impounded", {"player": player.name, "amount": impounded})

        if game_state.total_value(player) <= 0.0 and rng.uniform_float_01() < PROB_BANKRUPTCY:
            bankrupt_player(game_state, player, forced=True)
            report.forced_bankruptcy = True

    return report


def pay_dividends(game_state: GameState) -> float:
    """Credit the current player with this turn's dividends; returns the amount."""
    player = game_state.current_player
    total = 0.0
    for company in game_state.companies:
        if company.on_map and company.stock_issued != 0:
            owned = player.stock_owned[company.company_id]
            dividend = (owned * company.share_price * company.share_return
                        + (owned / company.stock_issued) * company.share_price * OWNERSHIP_BONUS)
            player.cash += dividend
            total += dividend
    return total
