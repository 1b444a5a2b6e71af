"""Tests for configuration-driven sampler construction."""

import math

import pytest

from variates.statistics import (
    ChiSquare,
    DistributionFactory,
    InvalidParameterError,
    LogNormal,
    Normal,
    StudentT,
    Uniform,
)


@pytest.mark.parametrize("name", DistributionFactory.available())
def test_every_distribution_builds_with_defaults(name: str) -> None:
    sampler = DistributionFactory.create({"distribution": name, "seed": 3})
    assert sampler.name == name
    value = sampler.next()
    assert isinstance(value, float)
    assert not math.isnan(value)


def test_seed_key_makes_samplers_reproducible() -> None:
    config = {"distribution": "gamma", "shape": 2.5, "seed": 17}
    a = DistributionFactory.create(config)
    b = DistributionFactory.create(config)
    assert a.sample(50) == b.sample(50)


@pytest.mark.parametrize(
    ("alias", "cls"),
    [("Gaussian", Normal), ("chi2", ChiSquare), ("student-t", StudentT), ("lognormal", LogNormal)],
)
def test_aliases(alias: str, cls) -> None:
    assert isinstance(DistributionFactory.create({"distribution": alias}), cls)


def test_parameter_aliases() -> None:
    uniform = DistributionFactory.create({"distribution": "uniform", "min": 2, "max": 5})
    assert isinstance(uniform, Uniform)
    assert (uniform.low, uniform.high) == (2.0, 5.0)

    normal = DistributionFactory.create({"distribution": "normal", "mean": 1, "variance": 4})
    assert normal.stdev == 2.0

    exponential = DistributionFactory.create({"distribution": "exponential", "mean": 4})
    assert exponential.rate == 0.25

    log_normal = DistributionFactory.create({"distribution": "log_normal", "mu": 0, "sigma": 1})
    assert log_normal.sigma == pytest.approx(1.0)


def test_unknown_distribution_raises() -> None:
    with pytest.raises(ValueError, match="Unknown distribution type"):
        DistributionFactory.create({"distribution": "zipf"})


def test_out_of_domain_parameter_raises() -> None:
    with pytest.raises(InvalidParameterError):
        DistributionFactory.create({"distribution": "beta", "a": -1})
    with pytest.raises(InvalidParameterError):
        DistributionFactory.create({"distribution": "triangular", "lower": 0, "upper": 1, "mode": 1})


def test_config_is_not_mutated() -> None:
    config = {"distribution": "poisson", "mean": 3, "seed": 1}
    DistributionFactory.create(config)
    assert config == {"distribution": "poisson", "mean": 3, "seed": 1}


def test_categorical_from_value_mapping() -> None:
    sampler = DistributionFactory.create(
        {"distribution": "categorical", "values": {"ok": 0.9, "error": 0.1}, "seed": 2}
    )
    assert sampler.categories == ["ok", "error"]
    assert sampler.probabilities == pytest.approx([0.9, 0.1])
    assert sampler.next_category() in ("ok", "error")


def test_stable_and_conway_maxwell_poisson_parameters() -> None:
    stable = DistributionFactory.create({"distribution": "alpha-stable", "alpha": 1.2, "beta": -0.5})
    assert (stable.alpha, stable.beta) == (1.2, -0.5)
    cmp = DistributionFactory.create({"distribution": "cmp", "lambda": 2.0, "nu": 1.5})
    assert (cmp.lam, cmp.nu) == (2.0, 1.5)
