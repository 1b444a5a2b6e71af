"""Uniform [0, 1) sources consumed by the samplers."""

from .uniform_source import (
    CallableSource,
    RandomSource,
    SeedableSource,
    ThreadLocalSource,
    UniformSource,
    as_source,
)

__all__ = [
    "UniformSource",
    "SeedableSource",
    "RandomSource",
    "CallableSource",
    "ThreadLocalSource",
    "as_source",
]
