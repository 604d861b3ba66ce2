"""Random number sources consumed by the engine.

The engine draws from a single stream per session, and the order of draws
is part of its observable behaviour: given the same stream and the same
selections, a game replays identically. Tests substitute one of the
deterministic streams below.
"""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Union
import random

from .exceptions import SimulationError


class RandomStream(ABC):
    """Source of uniform random numbers."""

    @abstractmethod
    def uniform_float_01(self) -> float:
        """Return a float in [0.0, 1.0)."""
        pass

    @abstractmethod
    def uniform_int(self, limit: int) -> int:
        """Return an int in [0, limit)."""
        pass


class SeededRandomStream(RandomStream):
    """Random stream backed by a private ``random.Random`` instance."""

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = random.Random(seed)

    def uniform_float_01(self) -> float:
        return self._rng.random()

    def uniform_int(self, limit: int) -> int:
        if limit <= 0:
            raise SimulationError(f"uniform_int limit must be positive, got {limit}")
        return self._rng.randrange(limit)


class ScriptedRandomStream(RandomStream):
    """Replays a fixed script of values, in order.

    Floats in the script answer ``uniform_float_01`` and ints answer
    ``uniform_int``. A draw of the wrong kind, an int outside the requested
    limit or running off the end of the script raises ``SimulationError``,
    which makes the engine's draw order checkable.
    """

    def __init__(self, values: Iterable[Union[int, float]]):
        self._values: List[Union[int, float]] = list(values)
        self._position = 0

    @property
    def remaining(self) -> int:
        return len(self._values) - self._position

    def _next(self, kind: str):
        if self._position >= len(self._values):
            raise SimulationError(
                f"Random script exhausted on {kind} draw",
                error_code="SCRIPT_EXHAUSTED",
                context={"position": self._position}
            )
        value = self._values[self._position]
        self._position += 1
        return value

    def uniform_float_01(self) -> float:
        value = self._next("float")
        if not isinstance(value, float):
            raise SimulationError(
                f"Expected a float draw, script has {value!r}",
                error_code="SCRIPT_MISMATCH",
                context={"position": self._position - 1}
            )
        return value

    def uniform_int(self, limit: int) -> int:
        value = self._next("int")
        if isinstance(value, float) or not 0 <= value < limit:
            raise SimulationError(
                f"Expected an int draw below {limit}, script has {value!r}",
                error_code="SCRIPT_MISMATCH",
                context={"position": self._position - 1}
            )
        return value


class FixedRandomStream(RandomStream):
    """Always returns the same values.

    With the default float of 0.95 none of the probabilistic economic
    events fire, so tests can reason about exact arithmetic.

    Integer draws never vary, so every catalog draw lands on the same
    cell. ``select_moves`` can only finish with ``number_moves == 1``
    (and only if that cell is empty); with more moves it loops forever.
    """

    def __init__(self, float_value: float = 0.95, int_value: int = 0):
        self.float_value = float_value
        self.int_value = int_value
        self.float_draws = 0
        self.int_draws = 0

    def uniform_float_01(self) -> float:
        self.float_draws += 1
        return self.float_value

    def uniform_int(self, limit: int) -> int:
        self.int_draws += 1
        return min(self.int_value, limit - 1)
