"""Player entity for Star Traders."""

from dataclasses import dataclass, field
from typing import Dict, List, Any

from ..core.constants import MAX_COMPANIES, INITIAL_CASH
from ..utils.validation import GameValidator, Validator
from .base import BaseEntity
from .company import Company


@dataclass
class Player(BaseEntity):
    """A player's ledger entry: cash, debt and shares per company."""

    name: str = ""
    cash: float = INITIAL_CASH
    debt: float = 0.0
    stock_owned: List[int] = field(default_factory=lambda: [0] * MAX_COMPANIES)
    in_game: bool = True

    # Set by the exchange when the player bids for new shares; cleared each turn
    bid_used: bool = False

    def validate(self) -> None:
        """Validate player state."""
        GameValidator.validate_player_name(self.name)
        Validator.validate_non_negative(self.debt, "debt")
        Validator.validate_list_length(self.stock_owned, MAX_COMPANIES, MAX_COMPANIES, "stock_owned")
        for count in self.stock_owned:
            Validator.validate_non_negative(count, "stock_owned")

    @property
    def total_shares(self) -> int:
        return sum(self.stock_owned)

    def portfolio_value(self, companies: List[Company]) -> float:
        """Market value of all shares held in on-map companies."""
        return sum(
            self.stock_owned[company.company_id] * company.share_price
            for company in companies
            if company.on_map
        )

    def total_value(self, companies: List[Company]) -> float:
        """Net worth: cash minus debt plus market value of held shares."""
        return self.cash - self.debt + self.portfolio_value(companies)

    def ownership_fraction(self, company: Company) -> float:
        """Share of the company's issued stock this player holds."""
        if company.stock_issued == 0:
            return 0.0
        return self.stock_owned[company.company_id] / company.stock_issued

    def get_portfolio_summary(self, companies: List[Company]) -> Dict[str, Any]:
        """Holdings summary used by status displays."""
        holdings = {}
        for company in companies:
            owned = self.stock_owned[company.company_id]
            if company.on_map and owned:
                holdings[company.name] = {
                    "shares": owned,
                    "price": round(company.share_price, 2),
                    "value": round(owned * company.share_price, 2),
                    "ownership": round(self.ownership_fraction(company), 4),
                }

        return {
            "name": self.name,
            "in_game": self.in_game,
            "cash": round(self.cash, 2),
            "debt": round(self.debt, 2),
            "holdings": holdings,
            "total_shares": self.total_shares,
            "total_value": round(self.total_value(companies), 2),
        }

    def __str__(self) -> str:
        status = "in game" if self.in_game else "bankrupt"
        return f"{self.name} ({status}, cash {self.cash:.2f}, debt {self.debt:.2f})"


def create_starting_player(name: str) -> Player:
    """Create a player with the standard starting cash."""
    return Player(name=name, cash=INITIAL_CASH)
