"""Dense vectors of the local subdomain."""

from __future__ import annotations

import random
from typing import Iterable

import numpy as np


class Vector:
    """A dense local vector of doubles."""

    def __init__(self, local_length: int) -> None:
        if local_length < 0:
            raise ValueError("vector length must be non-negative")
        self.values = np.zeros(local_length, dtype=np.float64)

    @classmethod
    def from_values(cls, values: Iterable[float]) -> "Vector":
        """Build a vector holding a copy of the given values."""
        data = np.array(list(values), dtype=np.float64)
        vec = cls(0)
        vec.values = data
        return vec

    @property
    def local_length(self) -> int:
        return int(self.values.shape[0])

    def __len__(self) -> int:
        return self.local_length

    def __repr__(self) -> str:
        return f"Vector({self.values.tolist()!r})"

    def zero(self) -> None:
        """Set every entry to zero."""
        self.values[:] = 0.0

    def scale_value(self, index: int, value: float) -> None:
        """Multiply the entry at ``index`` by ``value``."""
        if not 0 <= index < self.local_length:
            raise IndexError(f"index {index} out of range for length {self.local_length}")
        self.values[index] *= value

    def fill_random(self, rng=None) -> None:
        """Fill with pseudo-random values in [1, 2].

        ``rng`` is any object with a ``random()`` method returning a float in
        [0, 1), such as ``random.Random`` or a numpy ``Generator``.
        """
        if rng is None:
            rng = random.Random()
        self.values[:] = [rng.random() + 1.0 for _ in range(self.local_length)]

    def copy_to(self, other: "Vector") -> None:
        """Copy this vector into the leading entries of ``other``."""
        n = self.local_length
        if other.local_length < n:
            raise ValueError("destination vector is shorter than source")
        other.values[:n] = self.values