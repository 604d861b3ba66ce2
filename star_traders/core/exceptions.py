"""Custom exceptions for the Star Traders engine."""


class StarTradersError(Exception):
    """Base exception for all Star Traders errors."""

    def __init__(self, message: str, error_code: str = None, context: dict = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}

    def __str__(self):
        base_msg = self.message
        if self.error_code:
            base_msg = f"[{self.error_code}] {base_msg}"
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base_msg = f"{base_msg} (Context: {context_str})"
        return base_msg


# Game State Exceptions
class GameStateError(StarTradersError):
    """Errors related to game state management."""
    pass


class InvalidGameStateError(GameStateError):
    """Game state is in an invalid condition."""
    pass


class GameAlreadyEndedError(GameStateError):
    """Attempted action on a game that has already ended."""
    pass


# Player Exceptions
class PlayerError(StarTradersError):
    """Errors related to player operations."""
    pass


class InvalidPlayerError(PlayerError):
    """Invalid player index or player state."""
    pass


class PlayerNotActiveError(PlayerError):
    """Action attempted by a player who is out of the game."""
    pass


# Action Exceptions
class ActionError(StarTradersError):
    """Errors related to move resolution."""
    pass


class InvalidSelectionError(ActionError):
    """Selection is neither in the current catalog nor a sentinel."""
    pass


class InvalidMoveError(ActionError):
    """Coordinate is off the map or not an empty cell."""
    pass


class InvalidCompanyError(ActionError):
    """Company id out of range or company not on the map."""
    pass


# Trading Exceptions
class TradingError(StarTradersError):
    """Errors related to the stock exchange and the bank."""
    pass


class CompanyNotOnMapError(TradingError):
    """Trading attempted in a company that is not on the map."""
    pass


class SharesUnavailableError(TradingError):
    """Not enough shares to buy or sell."""
    pass


class InsufficientFundsError(TradingError):
    """Player lacks the cash for the transaction."""
    pass


class CreditLimitExceededError(TradingError):
    """Loan request exceeds the player's credit limit."""
    pass


class BidAlreadyUsedError(TradingError):
    """Player already bid for new shares this turn."""
    pass


# Simulation Exceptions
class SimulationError(StarTradersError):
    """Errors related to simulation execution."""
    pass


# Validation Exceptions
class ValidationError(StarTradersError):
    """Errors related to input validation."""
    pass


class InvalidInputError(ValidationError):
    """Invalid input provided."""
    pass


class RangeValidationError(ValidationError):
    """Value outside valid range."""
    pass


class TypeValidationError(ValidationError):
    """Invalid type provided."""
    pass


class ConstraintViolationError(ValidationError):
    """Input violates constraints."""
    pass


# Utility functions for exception handling
def raise_if_game_ended(game_state, action_name: str = "action"):
    """Raise GameAlreadyEndedError if the game has ended."""
    if game_state.is_completed:
        raise GameAlreadyEndedError(
            f"Cannot perform {action_name} - game has already ended",
            error_code="GAME_ENDED",
            context={"action": action_name, "turn": game_state.turn_number}
        )


def raise_if_insufficient_funds(required: float, available: float, what: str):
    """Raise InsufficientFundsError if not enough cash."""
    if available < required:
        raise InsufficientFundsError(
            f"Insufficient cash for {what}: need {required:.2f}, have {available:.2f}",
            error_code="INSUFFICIENT_FUNDS",
            context={"required": round(required, 2), "available": round(available, 2)}
        )
