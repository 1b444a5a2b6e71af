"""
Batch helpers for producing many draws from one sampler.

Parallel generation is left to the caller: give each worker its own sampler
and its own seeded source instead of sharing an instance between threads.
"""

import math
from collections.abc import Iterable, Iterator, MutableSequence
from dataclasses import dataclass

from .base import Sampler
from .validation import require_int_at_least


def fill(sampler: Sampler, buffer: MutableSequence[float]) -> MutableSequence[float]:
    """Overwrite every slot of buffer with a draw from sampler."""
    return sampler.fill(buffer)


def fill_normalized(
    sampler: Sampler, buffer: MutableSequence[float], mean: float, stdev: float
) -> MutableSequence[float]:
    """Fill buffer and rescale each draw with sampler.normalize()."""
    return sampler.fill_normalized(buffer, mean, stdev)


def sample_array(sampler: Sampler, n: int) -> list[float]:
    """Return a new list of n draws."""
    require_int_at_least("n", n, 0)
    return sampler.fill([0.0] * n)


class SampleSequence:
    """
    Lazy sequence of n draws.

    Each iteration pulls n fresh values from the sampler, so iterating twice
    gives two different runs rather than a replay of the first.
    """

    def __init__(self, sampler: Sampler, n: int):
        self.sampler = sampler
        self.n = require_int_at_least("n", n, 0)

    def __len__(self) -> int:
        return self.n

    def __iter__(self) -> Iterator[float]:
        for _ in range(self.n):
            yield self.sampler.next()

    def __repr__(self) -> str:
        return f"SampleSequence({self.sampler!r}, n={self.n})"


@dataclass
class SampleSummary:
    """Running moments of a batch of draws."""

    count: int = 0
    mean: float = math.nan
    variance: float = math.nan
    minimum: float = math.nan
    maximum: float = math.nan

    @property
    def stdev(self) -> float:
        return math.sqrt(self.variance)

    def as_dict(self) -> dict[str, float]:
        return {
            "count": self.count,
            "mean": self.mean,
            "variance": self.variance,
            "stdev": self.stdev,
            "min": self.minimum,
            "max": self.maximum,
        }


def summarize(values: Iterable[float]) -> SampleSummary:
    """Mean, sample variance and range in one pass (Welford's update)."""
    count = 0
    mean = 0.0
    m2 = 0.0
    lo = math.inf
    hi = -math.inf
    for x in values:
        count += 1
        delta = x - mean
        mean += delta / count
        m2 += delta * (x - mean)
        lo = min(lo, x)
        hi = max(hi, x)

    if count == 0:
        return SampleSummary()
    variance = m2 / (count - 1) if count > 1 else 0.0
    return SampleSummary(count=count, mean=mean, variance=variance, minimum=lo, maximum=hi)
