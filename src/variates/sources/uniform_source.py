"""
Uniform [0, 1) sources that feed every sampler.

A source is anything that hands out uniformly distributed doubles. Sources that
can be reseeded implement SeedableSource; samplers check for that capability
with isinstance() rather than looking for a method by name.
"""

import logging
import random
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)


class UniformSource(ABC):
    """Base class for uniform [0, 1) sources."""

    @abstractmethod
    def next_double(self) -> float:
        """Return the next value in [0, 1)."""
        pass

    def __call__(self) -> float:
        return self.next_double()


class SeedableSource(UniformSource):
    """A uniform source whose sequence can be restarted from a seed."""

    @abstractmethod
    def reset(self, seed: int | None = None) -> None:
        """Reseed the source. None reseeds from system entropy."""
        pass


class RandomSource(SeedableSource):
    """Seedable source backed by a private random.Random engine."""

    def __init__(self, seed: int | None = None):
        self._seed = seed
        self._rng = random.Random(seed)

    @property
    def seed(self) -> int | None:
        return self._seed

    def next_double(self) -> float:
        return self._rng.random()

    def reset(self, seed: int | None = None) -> None:
        self._seed = seed
        self._rng.seed(seed)

    def __repr__(self) -> str:
        return f"RandomSource(seed={self._seed!r})"


class CallableSource(UniformSource):
    """
    Adapt a zero-argument function to the UniformSource interface.

    The wrapped function is opaque, so this source is never reseedable.
    """

    def __init__(self, func: Callable[[], float]):
        if not callable(func):
            raise TypeError(f"Uniform source must be callable, got {type(func).__name__}")
        self.func = func

    def next_double(self) -> float:
        return self.func()

    def __repr__(self) -> str:
        return f"CallableSource({self.func!r})"


class ThreadLocalSource(SeedableSource):
    """
    Process-wide default engine.

    One object is shared by every sampler that was not given its own source, but
    each thread draws from its own random.Random, so concurrent use never touches
    shared engine state. reset() reseeds the calling thread's engine only.

    With a seed, the first engine created uses the seed itself and the n-th
    later one uses "seed:n", so threads get distinct streams that repeat from
    run to run when threads start in the same order. Without a seed every
    engine is seeded from system entropy.
    """

    def __init__(self, seed: int | None = None):
        self._seed = seed
        self._local = threading.local()
        self._spawned = 0
        self._spawn_lock = threading.Lock()

    def _engine_seed(self) -> int | str | None:
        if self._seed is None:
            return None
        with self._spawn_lock:
            index = self._spawned
            self._spawned += 1
        return self._seed if index == 0 else f"{self._seed}:{index}"

    def _engine(self) -> random.Random:
        rng = getattr(self._local, "rng", None)
        if rng is None:
            rng = random.Random(self._engine_seed())
            self._local.rng = rng
        return rng

    def next_double(self) -> float:
        return self._engine().random()

    def reset(self, seed: int | None = None) -> None:
        logger.debug("Reseeding default source for thread %s", threading.get_ident())
        self._engine().seed(seed)

    def __repr__(self) -> str:
        return f"ThreadLocalSource(seed={self._seed!r})"


def as_source(obj: Any) -> UniformSource:
    """
    Coerce obj into a UniformSource.

    None selects the process-wide default source, a UniformSource is returned
    unchanged and any other callable is wrapped in a CallableSource.
    """
    if obj is None:
        from ..defaults import get_default_source

        return get_default_source()
    if isinstance(obj, UniformSource):
        return obj
    if callable(obj):
        return CallableSource(obj)
    raise TypeError(f"Cannot use {type(obj).__name__} as a uniform source")
