"""
Samplers built on rejection loops or on other samplers.

Gamma and Beta run their own accept/reject loops. ChiSquare, StudentT,
FisherSnedecor, LogNormal, Chi and InverseGamma each own private sub-sampler
instances; a sub-sampler is never shared between two composites, always draws
from its owner's source and is reparameterized whenever the owner's parameters
change.
"""

import logging
import math
from typing import Any

from .base import Sampler
from .continuous import Normal
from .validation import (
    InvalidParameterError,
    require_int_at_least,
    require_non_negative,
    require_positive,
)

logger = logging.getLogger(__name__)


class Gamma(Sampler):
    """
    Gamma distribution with shape N and scale theta.

    For N > 1 candidates come from a Cauchy envelope centred on N - 1 (tangent
    of a uniform angle, drawn as a point in the half unit disc). For N <= 1 a
    two-case Ahrens-Dieter draw mixes x = u^(1/N) on [0, 1] with an exponential
    tail on [1, inf). Both are unbounded rejection loops; very small or very
    large N raise the expected number of rejections.
    """

    name = "gamma"

    def __init__(self, shape: float = 1.0, scale: float = 1.0, source: Any = None):
        super().__init__(source)
        self._scale = require_positive("scale", scale)
        self._set_shape(shape)

    def _set_shape(self, value: float) -> None:
        self._shape = require_positive("shape", value)
        if self._shape > 1.0:
            self._offset = self._shape - 1.0
            self._spread = math.sqrt(2.0 * self._shape - 1.0)
        else:
            self._threshold = math.e / (self._shape + math.e)

    @property
    def shape(self) -> float:
        return self._shape

    @shape.setter
    def shape(self, value: float) -> None:
        self._set_shape(value)

    @property
    def scale(self) -> float:
        return self._scale

    @scale.setter
    def scale(self, value: float) -> None:
        self._scale = require_positive("scale", value)

    def next_standard(self) -> float:
        """Draw from Gamma(shape, 1)."""
        if self._shape > 1.0:
            return self._large_shape()
        return self._small_shape()

    def _large_shape(self) -> float:
        am = self._offset
        t = self._spread
        while True:
            while True:
                x = self._uniform()
                y = 2.0 * self._uniform() - 1.0
                if x > 0.0 and x * x + y * y <= 1.0:
                    break
                self._reject()
            y = y / x
            candidate = t * y + am
            if candidate <= 0.0:
                self._reject()
                continue
            ratio = (1.0 + y * y) * math.exp(am * math.log(candidate / am) - t * y)
            if self._uniform() <= ratio:
                return candidate
            self._reject()

    def _small_shape(self) -> float:
        n = self._shape
        while True:
            u = self._uniform()
            v = 1.0 - self._uniform()
            w = self._uniform()
            if u < self._threshold:
                x = v ** (1.0 / n)
                if w <= math.exp(-x):
                    return x
            else:
                x = 1.0 - math.log(v)
                if w <= x ** (n - 1.0):
                    return x
            self._reject()

    def next(self) -> float:
        return self._scale * self.next_standard()

    @property
    def mean(self) -> float:
        return self._shape * self._scale

    @property
    def variance(self) -> float:
        return self._shape * self._scale * self._scale

    def parameters(self) -> dict[str, Any]:
        return {"shape": self._shape, "scale": self._scale}


class ChiSquare(Sampler):
    """
    Chi-square distribution with N degrees of freedom.

    Two draws are available and they do not agree:

    - next_gamma() returns 2 * Gamma(N / 2), the textbook chi-square variate.
      StudentT, FisherSnedecor and Chi always use this one.
    - next_uniform_sum() adds the squares of int(N) raw uniform draws (at least
      one). This is not chi-square distributed; its mean is N / 3. It is kept
      for callers that were built against that sequence.

    next() uses the draw selected by ``method`` ("gamma" unless told otherwise),
    and mean/variance describe whichever method is selected.
    """

    name = "chi_square"

    METHODS = ("gamma", "uniform_sum")

    def __init__(self, dof: float = 1.0, method: str = "gamma", source: Any = None):
        super().__init__(source)
        if method not in self.METHODS:
            raise InvalidParameterError("method", method, f"one of {', '.join(self.METHODS)}")
        self.method = method
        self._dof = require_positive("dof", dof)
        self._gamma = Gamma(self._dof / 2.0, source=self._source)

    def _children(self) -> list[Sampler]:
        return [self._gamma]

    @property
    def dof(self) -> float:
        return self._dof

    @dof.setter
    def dof(self, value: float) -> None:
        self._dof = require_positive("dof", value)
        self._gamma.shape = self._dof / 2.0
        logger.debug("ChiSquare reparameterized gamma shape to %s", self._gamma.shape)

    def next_gamma(self) -> float:
        return 2.0 * self._gamma.next_standard()

    def next_uniform_sum(self) -> float:
        total = 0.0
        for _ in range(max(1, int(self._dof))):
            u = self._uniform()
            total += u * u
        return total

    def next(self) -> float:
        if self.method == "uniform_sum":
            return self.next_uniform_sum()
        return self.next_gamma()

    @property
    def mean(self) -> float:
        if self.method == "uniform_sum":
            return max(1, int(self._dof)) / 3.0
        return self._dof

    @property
    def variance(self) -> float:
        if self.method == "uniform_sum":
            return max(1, int(self._dof)) * 4.0 / 45.0
        return 2.0 * self._dof

    def parameters(self) -> dict[str, Any]:
        return {"dof": self._dof, "method": self.method}


class Beta(Sampler):
    """
    Beta distribution by Johnk's method.

    Draws x = u1^(1/a), y = u2^(1/b) until x + y <= 1 and returns x / (x + y).
    """

    name = "beta"

    def __init__(self, a: float = 1.0, b: float = 1.0, source: Any = None):
        super().__init__(source)
        self._a = require_positive("a", a)
        self._b = require_positive("b", b)

    @property
    def a(self) -> float:
        return self._a

    @a.setter
    def a(self, value: float) -> None:
        self._a = require_positive("a", value)

    @property
    def b(self) -> float:
        return self._b

    @b.setter
    def b(self, value: float) -> None:
        self._b = require_positive("b", value)

    def next(self) -> float:
        inv_a = 1.0 / self._a
        inv_b = 1.0 / self._b
        while True:
            x = self._uniform() ** inv_a
            y = self._uniform() ** inv_b
            total = x + y
            # both terms can underflow to zero for tiny a and b
            if 0.0 < total <= 1.0:
                return x / total
            self._reject()

    @property
    def mean(self) -> float:
        return self._a / (self._a + self._b)

    @property
    def variance(self) -> float:
        a, b = self._a, self._b
        s = a + b
        return a * b / (s * s * (s + 1.0))

    def parameters(self) -> dict[str, Any]:
        return {"a": self._a, "b": self._b}


class StudentT(Sampler):
    """
    Student's t distribution with N degrees of freedom.

    N <= 2 divides a standard normal by sqrt(ChiSquare(N) / N). N > 2 uses
    Marsaglia's rejection method: with a standard normal a and an exponential
    draw, accept while exp(-b - c) <= 1 - b, where b = a^2 / (N - 2).
    """

    name = "student_t"

    def __init__(self, dof: float = 1.0, source: Any = None):
        super().__init__(source)
        self._dof = require_positive("dof", dof)
        self._normal = Normal(source=self._source)
        self._chi_square = ChiSquare(self._dof, source=self._source)

    def _children(self) -> list[Sampler]:
        return [self._normal, self._chi_square]

    @property
    def dof(self) -> float:
        return self._dof

    @dof.setter
    def dof(self, value: float) -> None:
        self._dof = require_positive("dof", value)
        self._chi_square.dof = self._dof

    def next(self) -> float:
        n = self._dof
        if n <= 2.0:
            while True:
                chi = self._chi_square.next_gamma()
                if chi > 0.0:
                    return self._normal.next_standard() / math.sqrt(chi / n)
                self._reject()

        while True:
            a = self._normal.next_standard()
            b = a * a / (n - 2.0)
            c = math.log(1.0 - self._uniform()) / (1.0 - n / 2.0)
            if math.exp(-b - c) <= 1.0 - b:
                return a / math.sqrt((1.0 - 2.0 / n) * (1.0 - b))
            self._reject()

    @property
    def mean(self) -> float:
        return 0.0 if self._dof > 1.0 else math.nan

    @property
    def variance(self) -> float:
        n = self._dof
        if n > 2.0:
            return n / (n - 2.0)
        return math.inf if n > 1.0 else math.nan

    def parameters(self) -> dict[str, Any]:
        return {"dof": self._dof}


class FisherSnedecor(Sampler):
    """F distribution: ratio of two scaled, independent chi-square draws."""

    name = "f"

    def __init__(self, dof1: float = 1.0, dof2: float = 1.0, source: Any = None):
        super().__init__(source)
        self._dof1 = require_positive("dof1", dof1)
        self._dof2 = require_positive("dof2", dof2)
        self._numerator = ChiSquare(self._dof1, source=self._source)
        self._denominator = ChiSquare(self._dof2, source=self._source)

    def _children(self) -> list[Sampler]:
        return [self._numerator, self._denominator]

    @property
    def dof1(self) -> float:
        return self._dof1

    @dof1.setter
    def dof1(self, value: float) -> None:
        self._dof1 = require_positive("dof1", value)
        self._numerator.dof = self._dof1

    @property
    def dof2(self) -> float:
        return self._dof2

    @dof2.setter
    def dof2(self, value: float) -> None:
        self._dof2 = require_positive("dof2", value)
        self._denominator.dof = self._dof2

    def next(self) -> float:
        while True:
            top = self._numerator.next_gamma()
            bottom = self._denominator.next_gamma()
            if bottom > 0.0:
                return (top * self._dof2) / (bottom * self._dof1)
            self._reject()

    @property
    def mean(self) -> float:
        d2 = self._dof2
        return d2 / (d2 - 2.0) if d2 > 2.0 else math.nan

    @property
    def variance(self) -> float:
        d1, d2 = self._dof1, self._dof2
        if d2 <= 4.0:
            return math.nan
        return 2.0 * d2 * d2 * (d1 + d2 - 2.0) / (d1 * (d2 - 2.0) ** 2 * (d2 - 4.0))

    def parameters(self) -> dict[str, Any]:
        return {"dof1": self._dof1, "dof2": self._dof2}


class LogNormal(Sampler):
    """
    Log-normal distribution parameterized by its own mean and variance.

    The pair is converted to the mean mu and stdev sigma of the owned Normal:
    sigma^2 = ln(1 + variance / mean^2), mu = ln(mean) - sigma^2 / 2. Both
    normal-space values are derived from the new pair before either is pushed,
    and the public mean and variance are then recomputed from mu and sigma.
    """

    name = "log_normal"

    def __init__(self, mean: float = 1.0, variance: float = 1.0, source: Any = None):
        super().__init__(source)
        self._normal = Normal(source=self._source)
        self._set_moments(mean, variance)

    @classmethod
    def from_normal(cls, mu: float, sigma: float, source: Any = None) -> "LogNormal":
        """Build from the mean and stdev of the underlying normal."""
        sigma = require_non_negative("sigma", sigma)
        s2 = sigma * sigma
        mean = math.exp(mu + s2 / 2.0)
        variance = math.expm1(s2) * math.exp(2.0 * mu + s2)
        return cls(mean, variance, source)

    def _children(self) -> list[Sampler]:
        return [self._normal]

    def _set_moments(self, mean: float, variance: float) -> None:
        mean = require_positive("mean", mean)
        variance = require_non_negative("variance", variance)
        sigma2 = math.log1p(variance / (mean * mean))
        mu = math.log(mean) - sigma2 / 2.0

        self._normal.mean = mu
        self._normal.stdev = math.sqrt(sigma2)

        self._mean = math.exp(mu + sigma2 / 2.0)
        self._variance = math.expm1(sigma2) * math.exp(2.0 * mu + sigma2)

    @property
    def mean(self) -> float:
        return self._mean

    @mean.setter
    def mean(self, value: float) -> None:
        self._set_moments(value, self._variance)

    @property
    def variance(self) -> float:
        return self._variance

    @variance.setter
    def variance(self, value: float) -> None:
        self._set_moments(self._mean, value)

    @property
    def mu(self) -> float:
        return self._normal.mean

    @property
    def sigma(self) -> float:
        return self._normal.stdev

    def next(self) -> float:
        return math.exp(self._normal.next())

    def parameters(self) -> dict[str, Any]:
        return {"mean": self._mean, "variance": self._variance}


class Erlang(Sampler):
    """Erlang distribution: sum of k independent exponentials with the given rate."""

    name = "erlang"

    def __init__(self, shape: int = 1, rate: float = 1.0, source: Any = None):
        super().__init__(source)
        self._shape = require_int_at_least("shape", shape, 1)
        self._rate = require_positive("rate", rate)

    @property
    def shape(self) -> int:
        return self._shape

    @shape.setter
    def shape(self, value: int) -> None:
        self._shape = require_int_at_least("shape", value, 1)

    @property
    def rate(self) -> float:
        return self._rate

    @rate.setter
    def rate(self, value: float) -> None:
        self._rate = require_positive("rate", value)

    def next(self) -> float:
        # summing logs avoids underflow of the running product for large k
        total = 0.0
        for _ in range(self._shape):
            total -= math.log(1.0 - self._uniform())
        return total / self._rate

    @property
    def mean(self) -> float:
        return self._shape / self._rate

    @property
    def variance(self) -> float:
        return self._shape / (self._rate * self._rate)

    def parameters(self) -> dict[str, Any]:
        return {"shape": self._shape, "rate": self._rate}


class Chi(Sampler):
    """Chi distribution: square root of a chi-square draw."""

    name = "chi"

    def __init__(self, dof: float = 1.0, source: Any = None):
        super().__init__(source)
        self._dof = require_positive("dof", dof)
        self._chi_square = ChiSquare(self._dof, source=self._source)

    def _children(self) -> list[Sampler]:
        return [self._chi_square]

    @property
    def dof(self) -> float:
        return self._dof

    @dof.setter
    def dof(self, value: float) -> None:
        self._dof = require_positive("dof", value)
        self._chi_square.dof = self._dof

    def next(self) -> float:
        return math.sqrt(self._chi_square.next_gamma())

    @property
    def mean(self) -> float:
        k = self._dof
        return math.sqrt(2.0) * math.exp(math.lgamma((k + 1.0) / 2.0) - math.lgamma(k / 2.0))

    @property
    def variance(self) -> float:
        m = self.mean
        return self._dof - m * m

    def parameters(self) -> dict[str, Any]:
        return {"dof": self._dof}


class InverseGamma(Sampler):
    """Inverse-gamma distribution: scale divided by a Gamma(shape) draw."""

    name = "inverse_gamma"

    def __init__(self, shape: float = 1.0, scale: float = 1.0, source: Any = None):
        super().__init__(source)
        self._scale = require_positive("scale", scale)
        self._gamma = Gamma(shape, source=self._source)

    def _children(self) -> list[Sampler]:
        return [self._gamma]

    @property
    def shape(self) -> float:
        return self._gamma.shape

    @shape.setter
    def shape(self, value: float) -> None:
        self._gamma.shape = value

    @property
    def scale(self) -> float:
        return self._scale

    @scale.setter
    def scale(self, value: float) -> None:
        self._scale = require_positive("scale", value)

    def next(self) -> float:
        while True:
            g = self._gamma.next_standard()
            if g > 0.0:
                return self._scale / g
            self._reject()

    @property
    def mean(self) -> float:
        a = self.shape
        return self._scale / (a - 1.0) if a > 1.0 else math.inf

    @property
    def variance(self) -> float:
        a = self.shape
        if a <= 2.0:
            return math.inf
        return self._scale * self._scale / ((a - 1.0) ** 2 * (a - 2.0))

    def parameters(self) -> dict[str, Any]:
        return {"shape": self.shape, "scale": self._scale}
