"""Company entity and the company registry helpers."""

from dataclasses import dataclass
from typing import List

from ..core.constants import (
    MAX_COMPANIES, COMPANY_NAMES, COMPANY_LETTERS, INITIAL_RETURN,
    INITIAL_SHARE_PRICE, INITIAL_STOCK_ISSUED, INITIAL_MAX_STOCK,
    SHARE_PRICE_INC_EXTRA, GROWING_RETURN_CHANGE, GROWING_RETURN_INC
)
from ..core.random_stream import RandomStream
from ..utils.validation import GameValidator, Validator
from .base import BaseEntity


@dataclass
class Company(BaseEntity):
    """An interstellar shipping company.

    The id doubles as the value written into galaxy map cells the company
    occupies. A company that is not on the map keeps its slot and name so
    the id can be reused by the next founding.
    """

    company_id: int = 0
    name: str = ""
    share_price: float = 0.0
    share_return: float = INITIAL_RETURN
    stock_issued: int = 0
    max_stock: int = 0
    on_map: bool = False

    def validate(self) -> None:
        """Validate company state."""
        GameValidator.validate_company_id(self.company_id)
        Validator.validate_type(self.name, str, "name")
        Validator.validate_non_negative(self.stock_issued, "stock_issued")
        Validator.validate_non_negative(self.max_stock, "max_stock")

    @property
    def letter(self) -> str:
        """Map letter for this company (A..H)."""
        return COMPANY_LETTERS[self.company_id]

    @property
    def value(self) -> float:
        """Market weight used to decide which company survives a merger."""
        return self.share_price * self.stock_issued * self.share_return

    @property
    def shares_available(self) -> int:
        """Shares the company could still sell to players."""
        return max(0, self.max_stock - self.stock_issued)

    def found(self) -> None:
        """Put the company on the map with its starting values."""
        self.share_price = INITIAL_SHARE_PRICE
        self.share_return = INITIAL_RETURN
        self.stock_issued = INITIAL_STOCK_ISSUED
        self.max_stock = INITIAL_MAX_STOCK
        self.on_map = True

    def dissolve(self, clear_price: bool = False) -> None:
        """Take the company off the map.

        Mergers only zero the stock counters; bankruptcies also wipe the
        share price and return.
        """
        if clear_price:
            self.share_price = 0.0
            self.share_return = 0.0
        self.stock_issued = 0
        self.max_stock = 0
        self.on_map = False

    def increase_share_price(self, inc: float, rng: RandomStream) -> None:
        """Grow share price, available stock and possibly return by ``inc``.

        Draws three random floats, or four when the return changes.
        """
        self.share_price += inc * (1.0 + rng.uniform_float_01() * SHARE_PRICE_INC_EXTRA)
        self.max_stock = int(self.max_stock + inc / (rng.uniform_float_01() * 10.0 + 5.0))

        if rng.uniform_float_01() < GROWING_RETURN_CHANGE:
            self.share_return *= rng.uniform_float_01() + GROWING_RETURN_INC

    def __str__(self) -> str:
        status = "on map" if self.on_map else "off map"
        return f"{self.letter}: {self.name} ({status}, {self.share_price:.2f}/share)"


def create_company_registry() -> List[Company]:
    """Create one off-map company per available slot."""
    return [
        Company(company_id=i, name=COMPANY_NAMES[i])
        for i in range(MAX_COMPANIES)
    ]


def next_free_company_id(companies: List[Company]):
    """Lowest id of a company not on the map, or None when all are."""
    for company in companies:
        if not company.on_map:
            return company.company_id
    return None
