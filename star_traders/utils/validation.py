"""Input validation utilities for the Star Traders engine."""

import re
from typing import Any, List, Type, Union

from ..core.exceptions import (
    InvalidInputError, RangeValidationError,
    TypeValidationError, ConstraintViolationError
)
from ..core.constants import (
    MAX_PLAYERS, MIN_PLAYERS, MIN_MAX_TURN, MAX_PLAYER_NAME_LENGTH, MAX_COMPANIES
)


class Validator:
    """Base validator class with common validation methods."""

    @staticmethod
    def validate_type(value: Any, expected_type: Type, field_name: str = "value") -> None:
        """Validate that value is of expected type."""
        if not isinstance(value, expected_type):
            raise TypeValidationError(
                f"{field_name} must be of type {expected_type.__name__}, got {type(value).__name__}",
                error_code="TYPE_MISMATCH",
                context={"field": field_name, "expected": expected_type.__name__, "actual": type(value).__name__}
            )

    @staticmethod
    def validate_range(value: Union[int, float], min_val: Union[int, float],
                      max_val: Union[int, float], field_name: str = "value") -> None:
        """Validate that value is within specified range."""
        if not min_val <= value <= max_val:
            raise RangeValidationError(
                f"{field_name} must be between {min_val} and {max_val}, got {value}",
                error_code="OUT_OF_RANGE",
                context={"field": field_name, "value": value, "min": min_val, "max": max_val}
            )

    @staticmethod
    def validate_positive(value: Union[int, float], field_name: str = "value") -> None:
        """Validate that value is positive."""
        if value <= 0:
            raise RangeValidationError(
                f"{field_name} must be positive, got {value}",
                error_code="NOT_POSITIVE",
                context={"field": field_name, "value": value}
            )

    @staticmethod
    def validate_non_negative(value: Union[int, float], field_name: str = "value") -> None:
        """Validate that value is non-negative."""
        if value < 0:
            raise RangeValidationError(
                f"{field_name} must be non-negative, got {value}",
                error_code="NEGATIVE",
                context={"field": field_name, "value": value}
            )

    @staticmethod
    def validate_string_length(value: str, max_length: int, min_length: int = 0,
                              field_name: str = "value") -> None:
        """Validate string length."""
        if not min_length <= len(value) <= max_length:
            raise RangeValidationError(
                f"{field_name} length must be between {min_length} and {max_length}, got {len(value)}",
                error_code="INVALID_LENGTH",
                context={"field": field_name, "length": len(value), "min": min_length, "max": max_length}
            )

    @staticmethod
    def validate_list_length(value: List, min_length: int = 0, max_length: int = None,
                            field_name: str = "list") -> None:
        """Validate list length."""
        if len(value) < min_length:
            raise RangeValidationError(
                f"{field_name} must have at least {min_length} items, got {len(value)}",
                error_code="LIST_TOO_SHORT",
                context={"field": field_name, "length": len(value), "min": min_length}
            )

        if max_length is not None and len(value) > max_length:
            raise RangeValidationError(
                f"{field_name} must have at most {max_length} items, got {len(value)}",
                error_code="LIST_TOO_LONG",
                context={"field": field_name, "length": len(value), "max": max_length}
            )

    @staticmethod
    def validate_unique_list(value: List, field_name: str = "list") -> None:
        """Validate that list contains unique items."""
        if len(value) != len(set(value)):
            raise ConstraintViolationError(
                f"{field_name} must contain unique items",
                error_code="DUPLICATE_ITEMS",
                context={"field": field_name, "length": len(value), "unique_count": len(set(value))}
            )


class GameValidator(Validator):
    """Validator for game-specific inputs."""

    @staticmethod
    def validate_player_count(count: int) -> None:
        GameValidator.validate_type(count, int, "player_count")
        GameValidator.validate_range(count, MIN_PLAYERS, MAX_PLAYERS, "player_count")

    @staticmethod
    def validate_player_name(name: str) -> None:
        """Validate player name."""
        GameValidator.validate_type(name, str, "player_name")
        GameValidator.validate_string_length(name.strip(), MAX_PLAYER_NAME_LENGTH, 1, "player_name")

        if re.search(r'[\x00-\x1f]', name):
            raise InvalidInputError(
                "Player name cannot contain control characters",
                error_code="INVALID_NAME",
                context={"name": name}
            )

    @staticmethod
    def validate_player_names(names: List[str]) -> None:
        """Validate a full roster of player names."""
        GameValidator.validate_type(names, list, "player_names")
        GameValidator.validate_player_count(len(names))
        for name in names:
            GameValidator.validate_player_name(name)
        GameValidator.validate_unique_list(names, "player_names")

    @staticmethod
    def validate_max_turns(max_turns: int) -> None:
        GameValidator.validate_type(max_turns, int, "max_turns")
        if max_turns < MIN_MAX_TURN:
            raise RangeValidationError(
                f"max_turns must be at least {MIN_MAX_TURN}, got {max_turns}",
                error_code="OUT_OF_RANGE",
                context={"field": "max_turns", "value": max_turns, "min": MIN_MAX_TURN}
            )

    @staticmethod
    def validate_company_id(company_id: int) -> None:
        GameValidator.validate_type(company_id, int, "company_id")
        GameValidator.validate_range(company_id, 0, MAX_COMPANIES - 1, "company_id")

    @staticmethod
    def validate_share_count(count: int) -> None:
        GameValidator.validate_type(count, int, "share_count")
        GameValidator.validate_positive(count, "share_count")
