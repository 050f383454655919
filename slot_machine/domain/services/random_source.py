"""Injectable random sources"""
from abc import ABC, abstractmethod
from itertools import cycle
from typing import Iterable, Optional

import numpy as np


class RandomSource(ABC):
    """Source of uniform floats in [0, 1)"""

    @abstractmethod
    def next(self) -> float:
        pass

    def randrange(self, n: int) -> int:
        """Uniform integer in [0, n)"""
        return min(int(self.next() * n), n - 1)

    def uniform(self, low: float, high: float) -> float:
        return low + (high - low) * self.next()


class NumpyRandomSource(RandomSource):
    """numpy Generator backed source, seedable for reproducible sessions"""

    def __init__(self, seed: Optional[int] = None):
        self._rng = np.random.default_rng(seed)

    def next(self) -> float:
        return float(self._rng.random())


class SequenceRandomSource(RandomSource):
    """Replays a fixed sequence of values, cycling when it runs out"""

    def __init__(self, values: Iterable[float]):
        values = list(values)
        if not values:
            raise ValueError("SequenceRandomSource needs at least one value")
        for value in values:
            if not 0.0 <= value < 1.0:
                raise ValueError(f"Random value out of range [0, 1): {value}")
        self._values = cycle(values)
        self.calls = 0

    def next(self) -> float:
        self.calls += 1
        return next(self._values)
