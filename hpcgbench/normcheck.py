"""Statistics over repeated residual-norm samples."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

VARIANCE_THRESHOLD = 1.0e-6


@dataclass(frozen=True)
class NormsResult:
    """Mean and variance of a set of norm samples and the pass verdict."""

    values: tuple[float, ...]
    mean: float
    variance: float
    passed: bool

    @property
    def samples(self) -> int:
        return len(self.values)


def check_norms(values: Sequence[float]) -> NormsResult:
    """Compute mean and variance of the samples; pass if variance < 1e-6."""
    samples = tuple(float(v) for v in values)
    if not samples:
        raise ValueError("at least one norm sample is required")
    n = len(samples)
    first = samples[0]
    mean = first + sum(v - first for v in samples) / n
    variance = sum((v - mean) * (v - mean) for v in samples) / n
    return NormsResult(
        values=samples,
        mean=mean,
        variance=variance,
        passed=variance < VARIANCE_THRESHOLD,
    )