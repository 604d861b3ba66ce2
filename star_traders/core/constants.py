"""Game constants for the Star Traders engine."""

from .enums import CellType


# Galaxy Map
MAX_X = 38                      # Map dimensions MAX_X x MAX_Y
MAX_Y = 14
STAR_RATIO = 0.10               # 10% of the map should be stars

# Turns and moves
NUMBER_MOVES = 20               # Choices on the map per turn
DEFAULT_MAX_TURN = 50
MIN_MAX_TURN = 10

# Players
MIN_PLAYERS = 1
MAX_PLAYERS = 8
MAX_PLAYER_NAME_LENGTH = 48
INITIAL_CASH = 6000.00
MAX_OVERDRAFT = 1000.00         # How far net worth may go negative
PROB_BANKRUPTCY = 0.07          # Chance of forced bankruptcy once overdrawn

# Companies
MAX_COMPANIES = 8
INITIAL_STOCK_ISSUED = 5
INITIAL_MAX_STOCK = 50
INITIAL_SHARE_PRICE = 60.00
INITIAL_RETURN = 0.05

COMPANY_NAMES = (
    "Altair Starways",
    "Betelgeuse, Ltd",
    "Capella Freight Co",
    "Denebola Shippers",
    "Eridani Expediters",
    "Fornax Express",
    "Gemeni Inc",
    "Hercules and Co",
)

# Share price increments
SHARE_PRICE_INC = 60.00         # Company grows by one cell
SHARE_PRICE_INC_OUTPOST = 70.00 # Company absorbs an outpost
SHARE_PRICE_INC_OUTSTAR = 70.00 # Extra, per star next to an absorbed outpost
SHARE_PRICE_INC_STAR = 300.00   # Per star next to the move cell
SHARE_PRICE_INC_EXTRA = 0.50    # Random extra factor on every increment
GROWING_RETURN_CHANGE = 0.25    # Chance the return changes as a company grows
GROWING_RETURN_INC = 0.60       # Lower bound of that return factor

# Mergers
MERGE_STOCK_RATIO = 0.50        # Share of old stock credited in the new company
MERGE_BONUS_RATE = 10.0         # Cash bonus multiplier on ownership fraction
MERGE_PRICE_DIVIDER = 1.50      # Lower bound of the damping divisor

# Company bankruptcy
COMPANY_BANKRUPTCY = 0.01
ALL_ASSETS_TAKEN = 0.20

# Share price and return drift
INC_SHARE_PRICE = 0.30          # Chance of changing a share price
DEC_SHARE_PRICE = 0.65          # Chance that change is a decrease
PRICE_CHANGE_RATE = 0.25        # Up to 25% of the price
CHANGE_COMPANY_RETURN = 0.40
COMPANY_RETURN_INC = 0.75       # Lower bound of the return factor
MAX_COMPANY_RETURN = 0.40
RETURN_DIVIDER = 1.50
OWNERSHIP_BONUS = 2.00

# Stock exchange
BID_CHANCE = 0.75
MAX_SHARES_BIDDED = 200

# Bank
INITIAL_INTEREST_RATE = 0.10
CHANGE_INTEREST_RATE = 0.30
INTEREST_RATE_INC = 0.65        # Lower bound of the interest factor
MAX_INTEREST_RATE = 0.30
INTEREST_RATE_DIVIDER = 1.50
CREDIT_LIMIT_RATE = 2.00

ROUNDING_AMOUNT = 0.01          # Smaller amounts round to zero

# Text representation of map cells
CELL_SYMBOLS = {
    CellType.EMPTY: ".",
    CellType.OUTPOST: "+",
    CellType.STAR: "*",
}
COMPANY_LETTERS = "ABCDEFGH"
