"""
Base contract for every distribution sampler.

A sampler turns draws from a UniformSource into values that follow one
distribution. Parameters are validated when they are assigned, so next() never
raises for a domain error. Several algorithms are unbounded accept/reject
loops; they terminate with probability one but have no iteration cap, since a
cap would bias the output. rejection_count reports how many candidates were
thrown away, for diagnostics only.

Samplers keep per-call state (spare Gaussian values, cached log-gamma terms),
so one instance must not be shared between threads. Give each worker its own
sampler, and its own seeded source when results must be reproducible.
"""

import math
from abc import ABC, abstractmethod
from collections.abc import Iterator, MutableSequence
from typing import Any

from ..sources.uniform_source import SeedableSource, UniformSource, as_source


class Sampler(ABC):
    """Base class for distribution samplers."""

    name = "sampler"

    def __init__(self, source: Any = None):
        self._source = as_source(source)
        self._rejections = 0

    # -- source handling -------------------------------------------------

    @property
    def source(self) -> UniformSource:
        """Uniform source this sampler (and every sub-sampler it owns) draws from."""
        return self._source

    @source.setter
    def source(self, value: Any) -> None:
        self._source = as_source(value)
        for child in self._children():
            child.source = self._source

    def _children(self) -> list["Sampler"]:
        """Sub-samplers exclusively owned by this sampler."""
        return []

    def _uniform(self) -> float:
        return self._source.next_double()

    def _reject(self) -> None:
        self._rejections += 1

    @property
    def rejection_count(self) -> int:
        """Rejected candidates so far, including those of owned sub-samplers."""
        return self._rejections + sum(child.rejection_count for child in self._children())

    # -- sampling --------------------------------------------------------

    @abstractmethod
    def next(self) -> float:
        """Draw a single value."""
        pass

    def fill(self, buffer: MutableSequence[float]) -> MutableSequence[float]:
        """Overwrite every slot of buffer with a fresh draw."""
        for i in range(len(buffer)):
            buffer[i] = self.next()
        return buffer

    def fill_normalized(
        self, buffer: MutableSequence[float], mean: float, stdev: float
    ) -> MutableSequence[float]:
        """Fill buffer, then map each draw through normalize()."""
        self.fill(buffer)
        for i in range(len(buffer)):
            buffer[i] = self.normalize(buffer[i], mean, stdev)
        return buffer

    def normalize(self, value: float, mean: float, stdev: float) -> float:
        """Shift and scale a canonical draw."""
        return value * stdev + mean

    def samples(self) -> Iterator[float]:
        """Endless stream of draws."""
        while True:
            yield self.next()

    def sample(self, n: int) -> list[float]:
        """Return n draws as a list."""
        return [self.next() for _ in range(n)]

    def reset(self, seed: int | None = None) -> bool:
        """
        Reseed the underlying source.

        Returns False, leaving the sampler untouched, when the source does not
        implement SeedableSource.
        """
        if not isinstance(self._source, SeedableSource):
            return False
        self._source.reset(seed)
        self._on_reset()
        return True

    def _on_reset(self) -> None:
        """Drop state carried between draws so a reseed restarts the sequence."""
        for child in self._children():
            child._on_reset()

    # -- moments ---------------------------------------------------------

    @property
    def mean(self) -> float:
        return math.nan

    @property
    def variance(self) -> float:
        return math.nan

    @property
    def stdev(self) -> float:
        return math.sqrt(self.variance)

    def parameters(self) -> dict[str, Any]:
        """Current parameter values, keyed by name."""
        return {}

    def __repr__(self) -> str:
        params = ", ".join(f"{k}={v!r}" for k, v in self.parameters().items())
        return f"{type(self).__name__}({params})"
