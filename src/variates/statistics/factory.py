"""Build samplers from configuration dictionaries (YAML profiles, CLI flags)."""

from typing import Any

from ..sources.uniform_source import RandomSource
from .base import Sampler
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
from .discrete import Binomial, Categorical, ConwayMaxwellPoisson, Geometric, Poisson

_ALIASES = {
    "gaussian": "normal",
    "exp": "exponential",
    "lognormal": "log_normal",
    "chi2": "chi_square",
    "chisquare": "chi_square",
    "chi_squared": "chi_square",
    "t": "student_t",
    "studentt": "student_t",
    "fisher_snedecor": "f",
    "inversegamma": "inverse_gamma",
    "alpha_stable": "stable",
    "cmp": "conway_maxwell_poisson",
    "com_poisson": "conway_maxwell_poisson",
}

_NAMES = (
    "uniform",
    "normal",
    "exponential",
    "gamma",
    "beta",
    "chi_square",
    "student_t",
    "f",
    "poisson",
    "binomial",
    "geometric",
    "cauchy",
    "logistic",
    "log_normal",
    "pareto",
    "power",
    "weibull",
    "triangular",
    "erlang",
    "chi",
    "inverse_gamma",
    "categorical",
    "stable",
    "conway_maxwell_poisson",
)


def _normalize_name(name: str) -> str:
    key = str(name).strip().lower().replace("-", "_")
    return _ALIASES.get(key, key)


class DistributionFactory:
    """Factory for creating samplers from configuration dictionaries."""

    @classmethod
    def available(cls) -> list[str]:
        """Canonical distribution names accepted by create()."""
        return list(_NAMES)

    @classmethod
    def create(cls, config: dict[str, Any], source: Any = None) -> Sampler:
        """
        Create a sampler from a configuration dictionary.

        Examples:
            {"distribution": "normal", "mean": 100, "stdev": 20}
            {"distribution": "triangular", "lower": 1, "upper": 9, "mode": 3}
            {"distribution": "binomial", "trials": 40, "probability": 0.2, "seed": 7}

        A "seed" key gives the sampler its own RandomSource and takes precedence
        over the source argument.
        """
        dist_type = _normalize_name(config.get("distribution", "normal"))
        if "seed" in config and config["seed"] is not None:
            source = RandomSource(int(config["seed"]))

        if dist_type == "uniform":
            return Uniform(
                low=config.get("low", config.get("min", 0.0)),
                high=config.get("high", config.get("max", 1.0)),
                source=source,
            )

        if dist_type == "normal":
            stdev = config.get("stdev", config.get("stddev"))
            if stdev is None and "variance" in config:
                return Normal.with_mean_variance(
                    config.get("mean", 0.0), config["variance"], source=source
                )
            return Normal(
                mean=config.get("mean", 0.0),
                stdev=1.0 if stdev is None else stdev,
                source=source,
            )

        if dist_type == "exponential":
            rate = config.get("rate", config.get("lambda"))
            if rate is None and "mean" in config:
                mean = float(config["mean"])
                rate = 1.0 / mean if mean > 0 else mean
            return Exponential(rate=1.0 if rate is None else rate, source=source)

        if dist_type == "gamma":
            return Gamma(
                shape=config.get("shape", 1.0),
                scale=config.get("scale", 1.0),
                source=source,
            )

        if dist_type == "beta":
            return Beta(
                a=config.get("a", config.get("alpha", 1.0)),
                b=config.get("b", config.get("beta", 1.0)),
                source=source,
            )

        if dist_type == "chi_square":
            return ChiSquare(
                dof=config.get("dof", 1.0),
                method=config.get("method", "gamma"),
                source=source,
            )

        if dist_type == "student_t":
            return StudentT(dof=config.get("dof", 1.0), source=source)

        if dist_type == "f":
            return FisherSnedecor(
                dof1=config.get("dof1", 1.0),
                dof2=config.get("dof2", 1.0),
                source=source,
            )

        if dist_type == "poisson":
            return Poisson(
                mean=config.get("mean", config.get("lambda", 1.0)),
                source=source,
            )

        if dist_type == "binomial":
            return Binomial(
                trials=config.get("trials", config.get("n", 1)),
                probability=config.get("probability", config.get("p", 0.5)),
                source=source,
            )

        if dist_type == "geometric":
            return Geometric(
                probability=config.get("probability", config.get("p", 0.5)),
                source=source,
            )

        if dist_type == "cauchy":
            return Cauchy(source=source)

        if dist_type == "logistic":
            return Logistic(source=source)

        if dist_type == "log_normal":
            if "mu" in config or "sigma" in config:
                return LogNormal.from_normal(
                    config.get("mu", 0.0), config.get("sigma", 1.0), source=source
                )
            return LogNormal(
                mean=config.get("mean", 1.0),
                variance=config.get("variance", 1.0),
                source=source,
            )

        if dist_type == "pareto":
            return Pareto(shape=config.get("shape", 1.0), source=source)

        if dist_type == "power":
            return Power(exponent=config.get("exponent", config.get("n", 1.0)), source=source)

        if dist_type == "weibull":
            return Weibull(shape=config.get("shape", config.get("alpha", 1.0)), source=source)

        if dist_type == "triangular":
            return Triangular(
                lower=config.get("lower", 0.0),
                upper=config.get("upper", 1.0),
                mode=config.get("mode", 0.5),
                source=source,
            )

        if dist_type == "erlang":
            return Erlang(
                shape=config.get("shape", 1),
                rate=config.get("rate", 1.0),
                source=source,
            )

        if dist_type == "chi":
            return Chi(dof=config.get("dof", 1.0), source=source)

        if dist_type == "inverse_gamma":
            return InverseGamma(
                shape=config.get("shape", 1.0),
                scale=config.get("scale", 1.0),
                source=source,
            )

        if dist_type == "categorical":
            values = config.get("values")
            if isinstance(values, dict):
                return Categorical(
                    weights=list(values.values()),
                    categories=list(values.keys()),
                    source=source,
                )
            return Categorical(
                weights=config.get("weights", config.get("p", [1.0])),
                categories=config.get("categories"),
                source=source,
            )

        if dist_type == "stable":
            return Stable(
                alpha=config.get("alpha", 2.0),
                beta=config.get("beta", 0.0),
                scale=config.get("scale", 1.0),
                location=config.get("location", 0.0),
                source=source,
            )

        if dist_type == "conway_maxwell_poisson":
            return ConwayMaxwellPoisson(
                lam=config.get("lam", config.get("lambda", 1.0)),
                nu=config.get("nu", 1.0),
                source=source,
            )

        raise ValueError(f"Unknown distribution type: {dist_type}")
