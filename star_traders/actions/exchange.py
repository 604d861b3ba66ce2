"""Stock exchange and bank operations for the current player.

These are the operations the trading phase is made of: buying and selling
shares, bidding for a company to issue more stock, and borrowing from or
repaying the Interstellar Trading Bank. Every failure raises a
``TradingError`` subclass and leaves the game untouched.
"""

from dataclasses import dataclass
from typing import Dict, Any
import logging

from ..core.constants import BID_CHANCE, MAX_SHARES_BIDDED, CREDIT_LIMIT_RATE, ROUNDING_AMOUNT
from ..core.exceptions import (
    CompanyNotOnMapError, SharesUnavailableError, InsufficientFundsError,
    CreditLimitExceededError, BidAlreadyUsedError, PlayerNotActiveError,
    raise_if_game_ended, raise_if_insufficient_funds
)
from ..entities.company import Company
from ..entities.player import Player
from ..game.game_state import GameState
from ..utils.validation import GameValidator, Validator


@dataclass(frozen=True)
class TradeReceipt:
    """A completed share trade."""
    player_name: str
    company_name: str
    shares: int
    price: float
    total: float

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.__dict__)


def _trading_player(game_state: GameState, action_name: str) -> Player:
    raise_if_game_ended(game_state, action_name)
    player = game_state.current_player
    if player is None or not player.in_game:
        raise PlayerNotActiveError(
            f"Cannot {action_name} - current player is out of the game",
            error_code="PLAYER_OUT",
            context={"player": player.name if player else None}
        )
    return player


def _listed_company(game_state: GameState, company_id: int) -> Company:
    GameValidator.validate_company_id(company_id)
    company = game_state.companies[company_id]
    if not company.on_map:
        raise CompanyNotOnMapError(
            f"{company.name} is not trading",
            error_code="NOT_ON_MAP",
            context={"company_id": company_id}
        )
    return company


def buy_shares(game_state: GameState, company_id: int, count: int) -> TradeReceipt:
    """Buy newly issued shares in an on-map company at the current price."""
    player = _trading_player(game_state, "buy shares")
    company = _listed_company(game_state, company_id)
    GameValidator.validate_share_count(count)

    if count > company.shares_available:
        raise SharesUnavailableError(
            f"{company.name} only has {company.shares_available} shares available",
            error_code="SHARES_UNAVAILABLE",
            context={"requested": count, "available": company.shares_available}
        )

    cost = count * company.share_price
    raise_if_insufficient_funds(cost, player.cash, f"{count} shares of {company.name}")

    player.cash -= cost
    player.stock_owned[company_id] += count
    company.stock_issued += count

    receipt = TradeReceipt(player.name, company.name, count, company.share_price, cost)
    logging.info(f"{player.name} bought {count} shares of {company.name} for {cost:.2f}")
    game_state._log_action("shares_bought", receipt.to_dict())
    return receipt


def sell_shares(game_state: GameState, company_id: int, count: int) -> TradeReceipt:
    """Sell shares back to the company at the current price."""
    player = _trading_player(game_state, "sell shares")
    company = _listed_company(game_state, company_id)
    GameValidator.validate_share_count(count)

    owned = player.stock_owned[company_id]
    if count > owned:
        raise SharesUnavailableError(
            f"{player.name} only owns {owned} shares of {company.name}",
            error_code="SHARES_NOT_OWNED",
            context={"requested": count, "owned": owned}
        )

    proceeds = count * company.share_price
    player.cash += proceeds
    player.stock_owned[company_id] -= count
    company.stock_issued -= count

    receipt = TradeReceipt(player.name, company.name, count, company.share_price, proceeds)
    logging.info(f"{player.name} sold {count} shares of {company.name} for {proceeds:.2f}")
    game_state._log_action("shares_sold", receipt.to_dict())
    return receipt


def bid_for_shares(game_state: GameState, company_id: int) -> int:
    """Ask a company to make more shares available.

    Each player may bid once per turn. Returns how many extra shares the
    company will issue, or 0 if it turned the bid down.
    """
    player = _trading_player(game_state, "bid for shares")
    company = _listed_company(game_state, company_id)

    if player.bid_used:
        raise BidAlreadyUsedError(
            f"{player.name} has already bid for shares this turn",
            error_code="BID_USED",
            context={"player": player.name}
        )

    player.bid_used = True
    rng = game_state.random_stream
    issued = 0
    if rng.uniform_float_01() < BID_CHANCE:
        issued = 1 + rng.uniform_int(MAX_SHARES_BIDDED)
        company.max_stock += issued

    if issued:
        logging.info(f"{company.name} will issue {issued} more shares")
    else:
        logging.info(f"{company.name} turned down a bid from {player.name}")
    game_state._log_action("shares_bid", {
        "player": player.name,
        "company": company.name,
        "issued": issued,
    })
    return issued


def credit_limit(game_state: GameState) -> float:
    """How much more the current player may borrow."""
    player = game_state.current_player
    limit = (game_state.total_value(player) + player.debt) * CREDIT_LIMIT_RATE - player.debt
    return max(0.0, limit)


def borrow(game_state: GameState, amount: float) -> float:
    """Borrow from the bank; the loan is added to both cash and debt."""
    player = _trading_player(game_state, "borrow")
    Validator.validate_positive(amount, "amount")

    limit = credit_limit(game_state)
    if amount > limit:
        raise CreditLimitExceededError(
            f"Loan of {amount:.2f} exceeds credit limit of {limit:.2f}",
            error_code="CREDIT_LIMIT",
            context={"amount": round(amount, 2), "limit": round(limit, 2)}
        )

    player.cash += amount
    player.debt += amount
    logging.info(f"{player.name} borrowed {amount:.2f}")
    game_state._log_action("loan_taken", {"player": player.name, "amount": amount})
    return player.debt


def repay(game_state: GameState, amount: float) -> float:
    """Repay part or all of the current player's debt from cash."""
    player = _trading_player(game_state, "repay")
    Validator.validate_positive(amount, "amount")

    if amount > player.debt:
        raise InsufficientFundsError(
            f"Repayment of {amount:.2f} exceeds debt of {player.debt:.2f}",
            error_code="OVERPAYMENT",
            context={"amount": round(amount, 2), "debt": round(player.debt, 2)}
        )
    raise_if_insufficient_funds(amount, player.cash, "loan repayment")

    player.cash -= amount
    player.debt -= amount
    if player.debt < ROUNDING_AMOUNT:
        player.debt = 0.0
    logging.info(f"{player.name} repaid {amount:.2f}")
    game_state._log_action("loan_repaid", {"player": player.name, "amount": amount})
    return player.debt
