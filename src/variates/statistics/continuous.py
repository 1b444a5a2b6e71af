"""
Primitive continuous samplers.

Each of these draws straight from the uniform source, by inverting the
cumulative distribution function, a short rejection loop or a closed-form
transform of a few uniforms. None of them depends on another sampler.
"""

import math
from typing import Any

from .base import Sampler
from .validation import (
    InvalidParameterError,
    require_finite,
    require_non_negative,
    require_positive,
)

_UNIT_LENGTH_TOLERANCE = 1e-12
_UNIT_ALPHA_TOLERANCE = 1e-12


class Uniform(Sampler):
    """
    Continuous uniform distribution over the closed interval [low, high].

    The interval is stored exactly as given; an inverted pair is not swapped.
    """

    name = "uniform"

    def __init__(self, low: float = 0.0, high: float = 1.0, source: Any = None):
        super().__init__(source)
        self._low = require_finite("low", low)
        self._high = require_finite("high", high)

    @property
    def low(self) -> float:
        return self._low

    @low.setter
    def low(self, value: float) -> None:
        self._low = require_finite("low", value)

    @property
    def high(self) -> float:
        return self._high

    @high.setter
    def high(self, value: float) -> None:
        self._high = require_finite("high", value)

    def next(self) -> float:
        u = self._uniform()
        length = self._high - self._low
        if abs(length - 1.0) < _UNIT_LENGTH_TOLERANCE:
            value = u + self._low
        else:
            value = u * length + self._low
        # rounding in u * length + low can land just past the upper bound
        lo, hi = min(self._low, self._high), max(self._low, self._high)
        return min(max(value, lo), hi)

    @property
    def mean(self) -> float:
        return (self._low + self._high) / 2.0

    @property
    def variance(self) -> float:
        return (self._high - self._low) ** 2 / 12.0

    def parameters(self) -> dict[str, Any]:
        return {"low": self._low, "high": self._high}


class Normal(Sampler):
    """
    Normal (Gaussian) distribution via the Marsaglia polar method.

    Every accepted pair of candidates yields two independent standard normal
    values. The second one is kept as a spare and returned by the following
    call. The spare is stored unscaled, so changing mean or stdev between the
    two calls applies the new parameters to it; reset() discards it.
    """

    name = "normal"

    def __init__(self, mean: float = 0.0, stdev: float = 1.0, source: Any = None):
        super().__init__(source)
        self._mean = require_finite("mean", mean)
        self._stdev = require_non_negative("stdev", stdev)
        self._spare: float | None = None

    @classmethod
    def with_mean_variance(cls, mean: float, variance: float, source: Any = None) -> "Normal":
        return cls(mean, math.sqrt(require_non_negative("variance", variance)), source)

    @classmethod
    def with_mean_precision(cls, mean: float, precision: float, source: Any = None) -> "Normal":
        return cls(mean, 1.0 / math.sqrt(require_positive("precision", precision)), source)

    @property
    def mean(self) -> float:
        return self._mean

    @mean.setter
    def mean(self, value: float) -> None:
        self._mean = require_finite("mean", value)

    @property
    def stdev(self) -> float:
        return self._stdev

    @stdev.setter
    def stdev(self, value: float) -> None:
        self._stdev = require_non_negative("stdev", value)

    @property
    def variance(self) -> float:
        return self._stdev * self._stdev

    @variance.setter
    def variance(self, value: float) -> None:
        self._stdev = math.sqrt(require_non_negative("variance", value))

    @property
    def precision(self) -> float:
        return 1.0 / self.variance if self._stdev > 0 else math.inf

    @precision.setter
    def precision(self, value: float) -> None:
        self._stdev = 1.0 / math.sqrt(require_positive("precision", value))

    @property
    def has_spare(self) -> bool:
        return self._spare is not None

    def next_standard(self) -> float:
        """Draw from N(0, 1), consuming the spare value first if one is held."""
        if self._spare is not None:
            value = self._spare
            self._spare = None
            return value

        while True:
            r1 = 2.0 * self._uniform() - 1.0
            r2 = 2.0 * self._uniform() - 1.0
            s = r1 * r1 + r2 * r2
            # s == 0 would divide by zero below
            if 0.0 < s <= 1.0:
                break
            self._reject()

        factor = math.sqrt(-2.0 * math.log(s) / s)
        self._spare = r2 * factor
        return r1 * factor

    def next(self) -> float:
        return self._mean + self._stdev * self.next_standard()

    def _on_reset(self) -> None:
        self._spare = None
        super()._on_reset()

    def parameters(self) -> dict[str, Any]:
        return {"mean": self._mean, "stdev": self._stdev}


class Exponential(Sampler):
    """Exponential distribution with rate lambda (mean 1/lambda)."""

    name = "exponential"

    def __init__(self, rate: float = 1.0, source: Any = None):
        super().__init__(source)
        self._rate = require_positive("rate", rate)

    @property
    def rate(self) -> float:
        return self._rate

    @rate.setter
    def rate(self, value: float) -> None:
        self._rate = require_positive("rate", value)

    def next(self) -> float:
        # 1 - u lies in (0, 1], so the log is always defined
        return -math.log(1.0 - self._uniform()) / self._rate

    @property
    def mean(self) -> float:
        return 1.0 / self._rate

    @property
    def variance(self) -> float:
        return 1.0 / (self._rate * self._rate)

    def parameters(self) -> dict[str, Any]:
        return {"rate": self._rate}


class Cauchy(Sampler):
    """
    Standard Cauchy distribution by ratio of uniforms.

    Mean and variance are undefined and reported as nan.
    """

    name = "cauchy"

    def next(self) -> float:
        while True:
            x = 1.0 - self._uniform()
            y = 2.0 * self._uniform() - 1.0
            if x * x + y * y <= 1.0:
                return y / x
            self._reject()


class Logistic(Sampler):
    """
    Standard logistic distribution by inversion.

    Its standard deviation is pi / sqrt(3) rather than 1, so normalize()
    rescales by that factor before applying the requested spread.
    """

    name = "logistic"

    _SPREAD = math.pi / math.sqrt(3.0)

    def next(self) -> float:
        u = self._uniform()
        while u == 0.0:
            u = self._uniform()
        return math.log((1.0 - u) / u)

    def normalize(self, value: float, mean: float, stdev: float) -> float:
        return value * stdev / self._SPREAD + mean

    @property
    def mean(self) -> float:
        return 0.0

    @property
    def variance(self) -> float:
        return self._SPREAD * self._SPREAD


class Pareto(Sampler):
    """Pareto distribution with shape c and unit scale; support [1, inf)."""

    name = "pareto"

    def __init__(self, shape: float = 1.0, source: Any = None):
        super().__init__(source)
        self._shape = require_positive("shape", shape)

    @property
    def shape(self) -> float:
        return self._shape

    @shape.setter
    def shape(self, value: float) -> None:
        self._shape = require_positive("shape", value)

    def next(self) -> float:
        return (1.0 - self._uniform()) ** (-1.0 / self._shape)

    @property
    def mean(self) -> float:
        c = self._shape
        return c / (c - 1.0) if c > 1.0 else math.inf

    @property
    def variance(self) -> float:
        c = self._shape
        if c <= 2.0:
            return math.inf
        return c / ((c - 1.0) ** 2 * (c - 2.0))

    def parameters(self) -> dict[str, Any]:
        return {"shape": self._shape}


class Power(Sampler):
    """Power-function distribution with density (n + 1) x^n on [0, 1]."""

    name = "power"

    def __init__(self, exponent: float = 1.0, source: Any = None):
        super().__init__(source)
        self._exponent = require_positive("exponent", exponent)

    @property
    def exponent(self) -> float:
        return self._exponent

    @exponent.setter
    def exponent(self, value: float) -> None:
        self._exponent = require_positive("exponent", value)

    def next(self) -> float:
        return self._uniform() ** (1.0 / (self._exponent + 1.0))

    @property
    def mean(self) -> float:
        k = self._exponent + 1.0
        return k / (k + 1.0)

    @property
    def variance(self) -> float:
        k = self._exponent + 1.0
        return k / ((k + 2.0) * (k + 1.0) ** 2)

    def parameters(self) -> dict[str, Any]:
        return {"exponent": self._exponent}


class Weibull(Sampler):
    """Weibull distribution with shape alpha and unit scale."""

    name = "weibull"

    def __init__(self, shape: float = 1.0, source: Any = None):
        super().__init__(source)
        self._shape = require_positive("shape", shape)

    @property
    def shape(self) -> float:
        return self._shape

    @shape.setter
    def shape(self, value: float) -> None:
        self._shape = require_positive("shape", value)

    def next(self) -> float:
        return (-math.log(1.0 - self._uniform())) ** (1.0 / self._shape)

    @property
    def mean(self) -> float:
        return math.gamma(1.0 + 1.0 / self._shape)

    @property
    def variance(self) -> float:
        m = self.mean
        return math.gamma(1.0 + 2.0 / self._shape) - m * m

    def parameters(self) -> dict[str, Any]:
        return {"shape": self._shape}


class Triangular(Sampler):
    """
    Triangular distribution on [lower, upper] peaking at mode.

    The mode must lie strictly inside the interval. An inverted lower/upper
    pair is swapped on assignment. The mode's relative position inside the
    interval is cached and re-derived whenever any bound changes.
    """

    name = "triangular"

    def __init__(
        self,
        lower: float = 0.0,
        upper: float = 1.0,
        mode: float = 0.5,
        source: Any = None,
    ):
        super().__init__(source)
        self._set_parameters(lower, upper, mode)

    def _set_parameters(self, lower: float, upper: float, mode: float) -> None:
        lower = require_finite("lower", lower)
        upper = require_finite("upper", upper)
        mode = require_finite("mode", mode)
        if lower > upper:
            lower, upper = upper, lower
        if not lower < mode < upper:
            raise InvalidParameterError("mode", mode, f"strictly between {lower} and {upper}")
        self._lower = lower
        self._upper = upper
        self._mode = mode
        self._mode_std = (mode - lower) / (upper - lower)

    @property
    def lower(self) -> float:
        return self._lower

    @lower.setter
    def lower(self, value: float) -> None:
        self._set_parameters(value, self._upper, self._mode)

    @property
    def upper(self) -> float:
        return self._upper

    @upper.setter
    def upper(self, value: float) -> None:
        self._set_parameters(self._lower, value, self._mode)

    @property
    def mode(self) -> float:
        return self._mode

    @mode.setter
    def mode(self, value: float) -> None:
        self._set_parameters(self._lower, self._upper, value)

    @property
    def mode_position(self) -> float:
        """Mode rescaled to [0, 1] relative to the interval."""
        return self._mode_std

    def next(self) -> float:
        u = self._uniform()
        m = self._mode_std
        if u <= m:
            result = math.sqrt(m * u)
        else:
            result = 1.0 - math.sqrt((1.0 - m) * (1.0 - u))
        return self._lower + (self._upper - self._lower) * result

    @property
    def mean(self) -> float:
        return (self._lower + self._upper + self._mode) / 3.0

    @property
    def variance(self) -> float:
        a, b, c = self._lower, self._upper, self._mode
        return (a * a + b * b + c * c - a * b - a * c - b * c) / 18.0

    def parameters(self) -> dict[str, Any]:
        return {"lower": self._lower, "upper": self._upper, "mode": self._mode}


class Stable(Sampler):
    """
    Alpha-stable distribution by the Chambers-Mallows-Stuck method.

    alpha in (0, 2] sets the tail weight and beta in [-1, 1] the skew. Each draw
    combines a uniform angle in (-pi/2, pi/2) with a unit exponential. alpha = 2
    is a normal with variance 2 scale^2; alpha = 1, beta = 0 is Cauchy. The mean
    exists only for alpha > 1 and the variance only for alpha = 2.
    """

    name = "stable"

    def __init__(
        self,
        alpha: float = 2.0,
        beta: float = 0.0,
        scale: float = 1.0,
        location: float = 0.0,
        source: Any = None,
    ):
        super().__init__(source)
        self._set_parameters(alpha, beta, scale, location)

    def _set_parameters(self, alpha: float, beta: float, scale: float, location: float) -> None:
        alpha = require_positive("alpha", alpha)
        if alpha > 2.0:
            raise InvalidParameterError("alpha", alpha, "in (0, 2]")
        beta = require_finite("beta", beta)
        if not -1.0 <= beta <= 1.0:
            raise InvalidParameterError("beta", beta, "in [-1, 1]")
        self._alpha = alpha
        self._beta = beta
        self._scale = require_positive("scale", scale)
        self._location = require_finite("location", location)

        self._unit_alpha = abs(alpha - 1.0) < _UNIT_ALPHA_TOLERANCE
        if not self._unit_alpha:
            skew = beta * math.tan(math.pi * alpha / 2.0)
            self._shift = math.atan(skew) / alpha
            self._factor = (1.0 + skew * skew) ** (1.0 / (2.0 * alpha))

    @property
    def alpha(self) -> float:
        return self._alpha

    @alpha.setter
    def alpha(self, value: float) -> None:
        self._set_parameters(value, self._beta, self._scale, self._location)

    @property
    def beta(self) -> float:
        return self._beta

    @beta.setter
    def beta(self, value: float) -> None:
        self._set_parameters(self._alpha, value, self._scale, self._location)

    @property
    def scale(self) -> float:
        return self._scale

    @scale.setter
    def scale(self, value: float) -> None:
        self._set_parameters(self._alpha, self._beta, value, self._location)

    @property
    def location(self) -> float:
        return self._location

    @location.setter
    def location(self, value: float) -> None:
        self._set_parameters(self._alpha, self._beta, self._scale, value)

    def next_standard(self) -> float:
        """Draw with scale 1 and location 0."""
        while True:
            u = self._uniform()
            w = -math.log(1.0 - self._uniform())
            # u == 0 puts the angle on -pi/2 and w == 0 divides by zero
            if u > 0.0 and w > 0.0:
                try:
                    return self._combine(math.pi * (u - 0.5), w)
                except (OverflowError, ZeroDivisionError):
                    # only reachable for alpha close to 0, where powers leave float range
                    pass
            self._reject()

    def _combine(self, v: float, w: float) -> float:
        if self._unit_alpha:
            half_pi = math.pi / 2.0
            part = half_pi + self._beta * v
            return (part * math.tan(v) - self._beta * math.log(half_pi * w * math.cos(v) / part)) / half_pi

        a = self._alpha
        angle = a * (v + self._shift)
        return (
            self._factor
            * math.sin(angle)
            / math.cos(v) ** (1.0 / a)
            * (math.cos(v - angle) / w) ** ((1.0 - a) / a)
        )

    def next(self) -> float:
        x = self._scale * self.next_standard() + self._location
        if self._unit_alpha:
            x += 2.0 / math.pi * self._beta * self._scale * math.log(self._scale)
        return x

    @property
    def mean(self) -> float:
        return self._location if self._alpha > 1.0 else math.nan

    @property
    def variance(self) -> float:
        if abs(self._alpha - 2.0) < _UNIT_ALPHA_TOLERANCE:
            return 2.0 * self._scale * self._scale
        return math.inf

    def parameters(self) -> dict[str, Any]:
        return {
            "alpha": self._alpha,
            "beta": self._beta,
            "scale": self._scale,
            "location": self._location,
        }
