"""Tests for the shared sampler contract: fill, normalize, reset and sub-sampler ownership."""

import math
from array import array

from variates.sources import CallableSource, RandomSource
from variates.statistics import (
    Cauchy,
    FisherSnedecor,
    Logistic,
    Normal,
    StudentT,
    Uniform,
)


def test_fill_overwrites_every_slot(source: RandomSource) -> None:
    buffer = array("d", [-1.0] * 50)
    Uniform(source=source).fill(buffer)
    assert all(0.0 <= x <= 1.0 for x in buffer)


def test_fill_normalized_uses_linear_rescale() -> None:
    sampler = Uniform(source=lambda: 0.25)
    buffer = [0.0] * 3
    sampler.fill_normalized(buffer, mean=1.0, stdev=2.0)
    assert buffer == [1.5, 1.5, 1.5]


def test_logistic_normalize_uses_its_own_spread() -> None:
    sampler = Logistic(source=lambda: 0.5)
    spread = math.pi / math.sqrt(3.0)
    assert sampler.normalize(spread, mean=10.0, stdev=2.0) == 12.0
    assert Normal().normalize(1.0, mean=10.0, stdev=2.0) == 12.0


def test_reset_with_seed_repeats_sequence() -> None:
    """An odd count leaves a spare Gaussian behind; reset must discard it."""
    sampler = Normal(source=RandomSource())
    assert sampler.reset(99) is True
    first = sampler.sample(7)
    assert sampler.has_spare
    assert sampler.reset(99) is True
    assert sampler.sample(7) == first


def test_reset_on_independent_runs_matches() -> None:
    a = StudentT(5, source=RandomSource())
    b = StudentT(5, source=RandomSource())
    a.reset(2024)
    b.reset(2024)
    assert a.sample(100) == b.sample(100)


def test_reset_on_non_seedable_source_returns_false() -> None:
    values = iter([0.1, 0.2, 0.3, 0.4])
    sampler = Uniform(source=CallableSource(lambda: next(values)))
    assert sampler.reset(None) is False
    assert sampler.reset(5) is False
    assert sampler.next() == 0.1


def test_rejection_count_grows_for_rejection_samplers(source: RandomSource) -> None:
    sampler = Cauchy(source=source)
    sampler.sample(2000)
    assert sampler.rejection_count > 0


def test_source_assignment_reaches_owned_samplers() -> None:
    sampler = FisherSnedecor(3, 4, source=RandomSource(1))
    replacement = RandomSource(2)
    sampler.source = replacement
    assert sampler._numerator.source is replacement
    assert sampler._denominator.source is replacement
    assert sampler._numerator._gamma.source is replacement


def test_samples_iterator_is_endless(source: RandomSource) -> None:
    stream = Uniform(source=source).samples()
    assert len([next(stream) for _ in range(25)]) == 25


def test_repr_lists_parameters() -> None:
    assert repr(Normal(1.0, 2.0)) == "Normal(mean=1.0, stdev=2.0)"
