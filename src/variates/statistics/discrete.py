"""
Discrete samplers: Poisson, Binomial, Geometric, Categorical and
Conway-Maxwell-Poisson.

Values are returned as floats holding whole numbers so they fit the common
Sampler interface; next_int() gives the same draw as an int.
"""

import bisect
import math
from collections.abc import Sequence
from typing import Any

from .base import Sampler
from .validation import (
    InvalidParameterError,
    require_finite,
    require_int_at_least,
    require_non_negative,
    require_positive,
    require_probability,
)

# below this mean Poisson counts products of uniforms directly
_POISSON_DIRECT_LIMIT = 12.0
# below this trial count Binomial simulates every Bernoulli trial
_BINOMIAL_DIRECT_LIMIT = 25
# Conway-Maxwell-Poisson terms this far (in log space) below the peak are dropped
_CMP_LOG_CUTOFF = 40.0
_CMP_MAX_TERMS = 1_000_000


class DiscreteSampler(Sampler):
    """Sampler whose draws are whole numbers."""

    def next_int(self) -> int:
        return int(self.next())


class Poisson(DiscreteSampler):
    """
    Poisson distribution with mean lambda.

    lambda < 12 multiplies uniforms until the product drops below exp(-lambda).
    Larger means use rejection from a Cauchy-shaped envelope; sqrt(2 lambda),
    ln(lambda) and lambda ln(lambda) - lgamma(lambda + 1) are cached and only
    recomputed when lambda changes.
    """

    name = "poisson"

    def __init__(self, mean: float = 1.0, source: Any = None):
        super().__init__(source)
        self._set_mean(mean)

    def _set_mean(self, value: float) -> None:
        self._lambda = require_non_negative("mean", value)
        self._exp_neg = math.exp(-self._lambda)
        if self._lambda >= _POISSON_DIRECT_LIMIT:
            self._sq = math.sqrt(2.0 * self._lambda)
            self._log_mean = math.log(self._lambda)
            self._g = self._lambda * self._log_mean - math.lgamma(self._lambda + 1.0)

    @property
    def mean(self) -> float:
        return self._lambda

    @mean.setter
    def mean(self, value: float) -> None:
        self._set_mean(value)

    @property
    def variance(self) -> float:
        return self._lambda

    def next(self) -> float:
        if self._lambda < _POISSON_DIRECT_LIMIT:
            count = -1
            product = 1.0
            while True:
                count += 1
                product *= self._uniform()
                if product <= self._exp_neg:
                    return float(count)

        while True:
            while True:
                y = math.tan(math.pi * self._uniform())
                em = self._sq * y + self._lambda
                if em >= 0.0:
                    break
                self._reject()
            em = math.floor(em)
            t = 0.9 * (1.0 + y * y) * math.exp(em * self._log_mean - math.lgamma(em + 1.0) - self._g)
            if self._uniform() <= t:
                return float(em)
            self._reject()

    def parameters(self) -> dict[str, Any]:
        return {"mean": self._lambda}


class Binomial(DiscreteSampler):
    """
    Binomial distribution: successes in n trials with success probability p.

    Works on p' = min(p, 1 - p) and mirrors the count when p > 0.5. Fewer than
    25 trials are simulated one by one; when n p' < 1 the waiting-time product
    method is used; otherwise a rejection method with a Cauchy (tangent)
    envelope. The log-gamma and log-probability terms that method needs belong
    to this instance and are recomputed only when n or p changes.
    """

    name = "binomial"

    def __init__(self, trials: int = 1, probability: float = 0.5, source: Any = None):
        super().__init__(source)
        self._trials = require_int_at_least("trials", trials, 0)
        self._p = require_probability("probability", probability)
        self._refresh()

    def _refresh(self) -> None:
        self._flipped = self._p > 0.5
        self._p_small = 1.0 - self._p if self._flipped else self._p
        self._am = self._trials * self._p_small
        self._exp_neg_am = math.exp(-self._am)
        if self._trials < _BINOMIAL_DIRECT_LIMIT or self._am < 1.0:
            self._cache_key: tuple[int, float] | None = None
            return
        key = (self._trials, self._p_small)
        if getattr(self, "_cache_key", None) == key:
            return
        pc = 1.0 - self._p_small
        self._lgamma_n1 = math.lgamma(self._trials + 1.0)
        self._plog = math.log(self._p_small)
        self._pclog = math.log(pc)
        self._sq = math.sqrt(2.0 * self._am * pc)
        self._cache_key = key

    @property
    def trials(self) -> int:
        return self._trials

    @trials.setter
    def trials(self, value: int) -> None:
        self._trials = require_int_at_least("trials", value, 0)
        self._refresh()

    @property
    def probability(self) -> float:
        return self._p

    @probability.setter
    def probability(self, value: float) -> None:
        self._p = require_probability("probability", value)
        self._refresh()

    def next(self) -> float:
        n = self._trials
        p = self._p_small

        if n < _BINOMIAL_DIRECT_LIMIT:
            count = 0
            for _ in range(n):
                if self._uniform() < p:
                    count += 1
        elif self._am < 1.0:
            count = n
            t = 1.0
            for j in range(n + 1):
                t *= self._uniform()
                if t < self._exp_neg_am:
                    count = j
                    break
        else:
            count = self._rejection()

        if self._flipped:
            count = n - count
        return float(count)

    def _rejection(self) -> int:
        en = float(self._trials)
        while True:
            while True:
                y = math.tan(math.pi * self._uniform())
                em = self._sq * y + self._am
                if 0.0 <= em < en + 1.0:
                    break
                self._reject()
            em = math.floor(em)
            t = (
                1.2
                * self._sq
                * (1.0 + y * y)
                * math.exp(
                    self._lgamma_n1
                    - math.lgamma(em + 1.0)
                    - math.lgamma(en - em + 1.0)
                    + em * self._plog
                    + (en - em) * self._pclog
                )
            )
            if self._uniform() <= t:
                return int(em)
            self._reject()

    @property
    def mean(self) -> float:
        return self._trials * self._p

    @property
    def variance(self) -> float:
        return self._trials * self._p * (1.0 - self._p)

    def parameters(self) -> dict[str, Any]:
        return {"trials": self._trials, "probability": self._p}


class Geometric(DiscreteSampler):
    """
    Geometric distribution: number of trials up to and including the first success.

    p < 0.3 inverts the distribution function in closed form; larger p simply
    counts trials, which needs few draws on average.
    """

    name = "geometric"

    _INVERSION_LIMIT = 0.3

    def __init__(self, probability: float = 0.5, source: Any = None):
        super().__init__(source)
        self._set_probability(probability)

    def _set_probability(self, value: float) -> None:
        value = require_finite("probability", value)
        if not 0.0 < value <= 1.0:
            raise InvalidParameterError("probability", value, "in (0, 1]")
        self._p = value
        self._log_q = math.log1p(-value) if value < 1.0 else -math.inf

    @property
    def probability(self) -> float:
        return self._p

    @probability.setter
    def probability(self, value: float) -> None:
        self._set_probability(value)

    def next(self) -> float:
        if self._p < self._INVERSION_LIMIT:
            u = self._uniform()
            while u == 0.0:
                u = self._uniform()
            return float(math.ceil(math.log1p(-u) / self._log_q))

        count = 1
        while self._uniform() > self._p:
            count += 1
        return float(count)

    @property
    def mean(self) -> float:
        return 1.0 / self._p

    @property
    def variance(self) -> float:
        return (1.0 - self._p) / (self._p * self._p)

    def parameters(self) -> dict[str, Any]:
        return {"probability": self._p}


def _invert_table(cumulative: list[float], u: float) -> int:
    """Index of the first cumulative entry above u * total."""
    target = u * cumulative[-1]
    return min(bisect.bisect_right(cumulative, target), len(cumulative) - 1)


class Categorical(DiscreteSampler):
    """
    Categorical distribution over the indices 0 .. k - 1.

    Weights need not sum to one. The cumulative table is built once per set of
    weights and each draw is a binary search into it, so a category with zero
    weight is never drawn. Optional labels map indices back to categories.

    Example:
        sampler = Categorical([0.5, 0.3, 0.2], categories=["gpt-4", "gpt-3.5", "claude"])
        sampler.next_category()
    """

    name = "categorical"

    def __init__(
        self,
        weights: Sequence[float] = (1.0,),
        categories: Sequence[Any] | None = None,
        source: Any = None,
    ):
        super().__init__(source)
        self._categories: list[Any] | None = None
        self._set_weights(weights)
        self.categories = categories

    def _set_weights(self, weights: Sequence[float]) -> None:
        if isinstance(weights, (str, bytes)) or not isinstance(weights, Sequence) or not weights:
            raise InvalidParameterError("weights", weights, "a non-empty list of numbers")
        values = [require_non_negative(f"weights[{i}]", w) for i, w in enumerate(weights)]
        if self._categories is not None and len(values) != len(self._categories):
            raise InvalidParameterError("weights", weights, f"{len(self._categories)} entries")

        cumulative = []
        total = 0.0
        for w in values:
            total += w
            cumulative.append(total)
        if total <= 0.0:
            raise InvalidParameterError("weights", weights, "a list with a positive sum")
        self._weights = values
        self._cumulative = cumulative

    @property
    def weights(self) -> list[float]:
        return list(self._weights)

    @weights.setter
    def weights(self, value: Sequence[float]) -> None:
        self._set_weights(value)

    @property
    def categories(self) -> list[Any] | None:
        return None if self._categories is None else list(self._categories)

    @categories.setter
    def categories(self, value: Sequence[Any] | None) -> None:
        if value is None:
            self._categories = None
            return
        labels = list(value)
        if len(labels) != len(self._weights):
            raise InvalidParameterError("categories", value, f"{len(self._weights)} labels")
        self._categories = labels

    @property
    def probabilities(self) -> list[float]:
        total = self._cumulative[-1]
        return [w / total for w in self._weights]

    def next(self) -> float:
        return float(_invert_table(self._cumulative, self._uniform()))

    def next_category(self) -> Any:
        """Draw a label; the index itself when no labels were given."""
        index = self.next_int()
        return index if self._categories is None else self._categories[index]

    @property
    def mean(self) -> float:
        return sum(k * p for k, p in enumerate(self.probabilities))

    @property
    def variance(self) -> float:
        m = self.mean
        return sum((k - m) ** 2 * p for k, p in enumerate(self.probabilities))

    def parameters(self) -> dict[str, Any]:
        return {"weights": self._weights}


class ConwayMaxwellPoisson(DiscreteSampler):
    """
    Conway-Maxwell-Poisson distribution: P(k) proportional to lam^k / (k!)^nu.

    nu = 1 is Poisson(lam), nu = 0 with lam < 1 is geometric on {0, 1, ...} and
    large nu approaches Bernoulli(lam / (1 + lam)). The normalizing series has
    no closed form, so the probabilities are tabulated (in log space, until the
    terms fall far below the peak) when the parameters change. Draws invert that
    table and the moments are read from it.
    """

    name = "conway_maxwell_poisson"

    def __init__(self, lam: float = 1.0, nu: float = 1.0, source: Any = None):
        super().__init__(source)
        self._set_parameters(lam, nu)

    def _set_parameters(self, lam: float, nu: float) -> None:
        lam = require_positive("lam", lam)
        nu = require_non_negative("nu", nu)
        if nu == 0.0 and lam >= 1.0:
            raise InvalidParameterError("lam", lam, "< 1 when nu is 0")
        if (lam, nu) == getattr(self, "_table_key", None):
            return

        log_lam = math.log(lam)
        logs = [0.0]
        peak = 0.0
        k = 0
        while True:
            k += 1
            if k > _CMP_MAX_TERMS:
                raise InvalidParameterError(
                    "lam", lam, f"small enough for the series with nu={nu} to converge"
                )
            term = logs[-1] + log_lam - nu * math.log(k)
            logs.append(term)
            peak = max(peak, term)
            # terms only shrink once lam / (k + 1)^nu < 1
            if log_lam < nu * math.log(k + 1) and term < peak - _CMP_LOG_CUTOFF:
                break

        cumulative = []
        total = 0.0
        first = 0.0
        second = 0.0
        for i, t in enumerate(logs):
            w = math.exp(t - peak)
            total += w
            first += i * w
            second += i * i * w
            cumulative.append(total)

        self._lam = lam
        self._nu = nu
        self._cumulative = cumulative
        self._mean = first / total
        self._variance = max(second / total - self._mean * self._mean, 0.0)
        self._table_key = (lam, nu)

    @property
    def lam(self) -> float:
        return self._lam

    @lam.setter
    def lam(self, value: float) -> None:
        self._set_parameters(value, self._nu)

    @property
    def nu(self) -> float:
        return self._nu

    @nu.setter
    def nu(self, value: float) -> None:
        self._set_parameters(self._lam, value)

    def next(self) -> float:
        return float(_invert_table(self._cumulative, self._uniform()))

    @property
    def mean(self) -> float:
        return self._mean

    @property
    def variance(self) -> float:
        return self._variance

    def parameters(self) -> dict[str, Any]:
        return {"lam": self._lam, "nu": self._nu}
