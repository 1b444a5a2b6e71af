"""Distribution samplers and batch helpers."""

from .base import Sampler
from .batch import SampleSequence, SampleSummary, fill, fill_normalized, sample_array, summarize
from .composite import (
    Beta,
    Chi,
    ChiSquare,
    Erlang,
    FisherSnedecor,
    Gamma,
    InverseGamma,
    LogNormal,
    StudentT,
)
from .continuous import (
    Cauchy,
    Exponential,
    Logistic,
    Normal,
    Pareto,
    Power,
    Stable,
    Triangular,
    Uniform,
    Weibull,
)
from .discrete import (
    Binomial,
    Categorical,
    ConwayMaxwellPoisson,
    DiscreteSampler,
    Geometric,
    Poisson,
)
from .factory import DistributionFactory
from .validation import InvalidParameterError

__all__ = [
    "Sampler",
    "DiscreteSampler",
    "InvalidParameterError",
    "Uniform",
    "Normal",
    "Exponential",
    "Cauchy",
    "Logistic",
    "Pareto",
    "Power",
    "Weibull",
    "Triangular",
    "Stable",
    "Gamma",
    "ChiSquare",
    "Beta",
    "StudentT",
    "FisherSnedecor",
    "LogNormal",
    "Erlang",
    "Chi",
    "InverseGamma",
    "Poisson",
    "Binomial",
    "Geometric",
    "Categorical",
    "ConwayMaxwellPoisson",
    "DistributionFactory",
    "SampleSequence",
    "SampleSummary",
    "fill",
    "fill_normalized",
    "sample_array",
    "summarize",
]
