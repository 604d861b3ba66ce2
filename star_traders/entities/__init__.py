"""Game entity definitions."""

from .player import Player
from .company import Company
from .base import BaseEntity

__all__ = ["Player", "Company", "BaseEntity"]
