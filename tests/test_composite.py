"""Tests for rejection-based and composite samplers."""

import math
from statistics import fmean, variance

import pytest

from variates.sources import RandomSource
from variates.statistics import (
    Beta,
    Chi,
    ChiSquare,
    Erlang,
    FisherSnedecor,
    Gamma,
    InvalidParameterError,
    InverseGamma,
    LogNormal,
    StudentT,
)


@pytest.mark.parametrize("shape", [0.3, 0.5, 1.0, 3.5, 20.0])
def test_gamma_moments_across_both_branches(source: RandomSource, shape: float) -> None:
    values = Gamma(shape, source=source).sample(100_000)
    assert min(values) >= 0.0
    tolerance = 6.0 * math.sqrt(shape / len(values))
    assert abs(fmean(values) - shape) < tolerance


def test_gamma_scale_multiplies_draws(source: RandomSource) -> None:
    sampler = Gamma(2.0, scale=3.0, source=source)
    assert sampler.mean == 6.0
    assert sampler.variance == 18.0
    assert fmean(sampler.sample(100_000)) == pytest.approx(6.0, abs=0.1)


def test_gamma_shape_change_switches_branch(source: RandomSource) -> None:
    sampler = Gamma(0.5, source=source)
    sampler.shape = 4.0
    assert fmean(sampler.sample(50_000)) == pytest.approx(4.0, abs=0.06)
    sampler.shape = 0.8
    assert fmean(sampler.sample(50_000)) == pytest.approx(0.8, abs=0.03)


def test_gamma_rejects_bad_parameters() -> None:
    with pytest.raises(InvalidParameterError):
        Gamma(0.0)
    with pytest.raises(InvalidParameterError):
        Gamma(1.0, scale=-1.0)


def test_beta_samples_in_unit_interval(source: RandomSource) -> None:
    values = Beta(0.7, 3.0, source=source).sample(50_000)
    assert all(0.0 <= x <= 1.0 for x in values)


def test_beta_symmetric_mean(source: RandomSource) -> None:
    values = Beta(2.0, 2.0, source=source).sample(100_000)
    assert fmean(values) == pytest.approx(0.5, abs=0.005)


def test_beta_moment_properties(source: RandomSource) -> None:
    sampler = Beta(2.0, 5.0, source=source)
    assert sampler.mean == pytest.approx(2.0 / 7.0)
    assert sampler.variance == pytest.approx(10.0 / (49.0 * 8.0))
    values = sampler.sample(100_000)
    assert fmean(values) == pytest.approx(sampler.mean, abs=0.005)
    assert variance(values) == pytest.approx(sampler.variance, rel=0.05)


def test_beta_rejects_non_positive_shape() -> None:
    with pytest.raises(InvalidParameterError):
        Beta(0.0, 1.0)
    sampler = Beta()
    with pytest.raises(InvalidParameterError):
        sampler.b = -2.0


def test_chi_square_gamma_path_matches_textbook_moments(source: RandomSource) -> None:
    sampler = ChiSquare(4.0, source=source)
    values = [sampler.next_gamma() for _ in range(100_000)]
    assert fmean(values) == pytest.approx(4.0, abs=0.1)
    assert variance(values) == pytest.approx(8.0, rel=0.05)


def test_chi_square_uniform_sum_path_is_kept_distinct(source: RandomSource) -> None:
    sampler = ChiSquare(6.0, method="uniform_sum", source=source)
    values = sampler.sample(100_000)
    assert all(0.0 <= x <= 6.0 for x in values)
    assert sampler.mean == 2.0
    assert fmean(values) == pytest.approx(2.0, abs=0.02)


def test_chi_square_rejects_unknown_method() -> None:
    with pytest.raises(InvalidParameterError):
        ChiSquare(3.0, method="normal_sum")


def test_chi_square_dof_change_reparameterizes_gamma() -> None:
    sampler = ChiSquare(3.0)
    sampler.dof = 10.0
    assert sampler._gamma.shape == 5.0


def test_student_t_large_dof_moments(source: RandomSource) -> None:
    sampler = StudentT(10.0, source=source)
    values = sampler.sample(200_000)
    assert abs(fmean(values)) < 0.02
    assert variance(values) == pytest.approx(1.25, abs=0.05)


def test_student_t_small_dof_is_symmetric(source: RandomSource) -> None:
    values = StudentT(1.5, source=source).sample(100_000)
    positive = sum(1 for x in values if x > 0) / len(values)
    assert positive == pytest.approx(0.5, abs=0.01)


def test_student_t_moment_properties() -> None:
    assert StudentT(5.0).variance == pytest.approx(5.0 / 3.0)
    assert math.isinf(StudentT(2.0).variance)
    assert math.isnan(StudentT(1.0).mean)


def test_student_t_dof_change_updates_chi_square() -> None:
    sampler = StudentT(3.0)
    sampler.dof = 8.0
    assert sampler._chi_square.dof == 8.0


def test_f_distribution_mean(source: RandomSource) -> None:
    sampler = FisherSnedecor(5.0, 10.0, source=source)
    values = sampler.sample(100_000)
    assert min(values) >= 0.0
    assert sampler.mean == 1.25
    assert fmean(values) == pytest.approx(1.25, abs=0.05)


def test_f_distribution_owns_separate_chi_squares() -> None:
    sampler = FisherSnedecor(2.0, 2.0)
    assert sampler._numerator is not sampler._denominator
    sampler.dof2 = 12.0
    assert sampler._denominator.dof == 12.0
    assert sampler._numerator.dof == 2.0


def test_log_normal_reparameterization() -> None:
    sampler = LogNormal(2.0, 3.0)
    sigma2 = math.log(1.0 + 3.0 / 4.0)
    assert sampler.sigma == pytest.approx(math.sqrt(sigma2))
    assert sampler.mu == pytest.approx(math.log(2.0) - sigma2 / 2.0)
    assert sampler.mean == pytest.approx(2.0)
    assert sampler.variance == pytest.approx(3.0)


def test_log_normal_setters_push_into_owned_normal() -> None:
    sampler = LogNormal(2.0, 3.0)
    sampler.mean = 5.0
    assert sampler.mean == pytest.approx(5.0)
    assert sampler.variance == pytest.approx(3.0)
    assert sampler._normal.stdev == pytest.approx(math.sqrt(math.log(1.0 + 3.0 / 25.0)))
    sampler.variance = 10.0
    assert sampler.mean == pytest.approx(5.0)
    assert sampler.variance == pytest.approx(10.0)


def test_log_normal_sample_mean(source: RandomSource) -> None:
    values = LogNormal(2.0, 3.0, source=source).sample(200_000)
    assert min(values) > 0.0
    assert fmean(values) == pytest.approx(2.0, abs=0.05)


def test_log_normal_from_normal() -> None:
    sampler = LogNormal.from_normal(0.0, 1.0)
    assert sampler.mean == pytest.approx(math.exp(0.5))
    assert sampler.mu == pytest.approx(0.0, abs=1e-12)
    assert sampler.sigma == pytest.approx(1.0)


def test_log_normal_rejects_non_positive_mean() -> None:
    with pytest.raises(InvalidParameterError):
        LogNormal(0.0, 1.0)
    with pytest.raises(InvalidParameterError):
        LogNormal(1.0, -1.0)


def test_erlang_mean(source: RandomSource) -> None:
    sampler = Erlang(3, 2.0, source=source)
    assert sampler.mean == 1.5
    assert fmean(sampler.sample(100_000)) == pytest.approx(1.5, abs=0.03)
    with pytest.raises(InvalidParameterError):
        Erlang(0, 1.0)


def test_chi_mean(source: RandomSource) -> None:
    sampler = Chi(3.0, source=source)
    assert sampler.mean == pytest.approx(2.0 * math.sqrt(2.0 / math.pi))
    assert fmean(sampler.sample(100_000)) == pytest.approx(sampler.mean, abs=0.02)


def test_inverse_gamma_mean(source: RandomSource) -> None:
    sampler = InverseGamma(5.0, 2.0, source=source)
    assert sampler.mean == 0.5
    assert fmean(sampler.sample(100_000)) == pytest.approx(0.5, abs=0.01)
    assert math.isinf(InverseGamma(1.0).mean)
