"""Distribution families used for both scoring and simulation.

Each family holds its (constrained) parameters and pairs an elementwise
log-density with a sampler, so that any field scored under a family is
simulated from exactly the same parameterisation. Parameters broadcast against
the observations, which lets a per-observation mean and a scalar mean share one
implementation.

Log-densities are evaluated directly in log space. Observations outside a
family's support are not rejected and yield non-finite values.
"""

from abc import abstractmethod

import equinox as eqx
import jax.numpy as jnp
import jax.random as jrandom
import jax.scipy.stats as jstats
from jaxtyping import Array, ArrayLike, PRNGKeyArray


class Distribution(eqx.Module):
    @abstractmethod
    def log_prob(self, x: ArrayLike) -> Array:
        """Elementwise log-density (or log-mass) of ``x``."""

    @abstractmethod
    def sample(self, key: PRNGKeyArray, shape: tuple[int, ...]) -> Array:
        """Draw an array of independent samples with the given ``shape``."""


class Normal(Distribution):
    loc: Array
    scale: Array

    def log_prob(self, x: ArrayLike) -> Array:
        return jstats.norm.logpdf(x, loc=self.loc, scale=self.scale)

    def sample(self, key: PRNGKeyArray, shape: tuple[int, ...]) -> Array:
        loc = jnp.broadcast_to(self.loc, shape)
        return loc + self.scale * jrandom.normal(key, shape, dtype=loc.dtype)


class Binomial(Distribution):
    """Successes out of a fixed number of ``trials``."""

    trials: Array
    prob: Array

    def log_prob(self, x: ArrayLike) -> Array:
        # binom.logpmf has a 0/0 derivative at prob 0 or 1, so those are
        # scored as point masses on 0 and trials
        interior = (self.prob > 0) & (self.prob < 1)
        prob = jnp.where(interior, self.prob, 0.5)
        point_mass = jnp.where(self.prob > 0, self.trials, 0)
        degenerate = jnp.where(x == point_mass, 0.0, -jnp.inf)
        return jnp.where(
            interior, jstats.binom.logpmf(x, self.trials, prob), degenerate
        )

    def sample(self, key: PRNGKeyArray, shape: tuple[int, ...]) -> Array:
        return jrandom.binomial(key, self.trials, self.prob, shape=shape)


class Poisson(Distribution):
    rate: Array

    def log_prob(self, x: ArrayLike) -> Array:
        return jstats.poisson.logpmf(x, self.rate)

    def sample(self, key: PRNGKeyArray, shape: tuple[int, ...]) -> Array:
        return jrandom.poisson(key, self.rate, shape=shape)


class NegativeBinomial2(Distribution):
    """Negative binomial parameterised by its mean and variance.

    Equivalent to the ``(size, prob)`` form with ``size = mean**2 / (var - mean)``
    and ``prob = mean / var``; only defined for ``var > mean``.
    """

    mean: Array
    var: Array

    @property
    def size(self) -> Array:
        return jnp.square(self.mean) / (self.var - self.mean)

    @property
    def prob(self) -> Array:
        return self.mean / self.var

    def log_prob(self, x: ArrayLike) -> Array:
        return jstats.nbinom.logpmf(x, self.size, self.prob)

    def sample(self, key: PRNGKeyArray, shape: tuple[int, ...]) -> Array:
        # gamma-poisson mixture
        gamma_key, poisson_key = jrandom.split(key)
        odds = (1 - self.prob) / self.prob
        rate = jrandom.gamma(gamma_key, self.size, shape=shape) * odds
        return jrandom.poisson(poisson_key, rate, shape=shape)


class Gamma(Distribution):
    shape: Array
    scale: Array

    def log_prob(self, x: ArrayLike) -> Array:
        return jstats.gamma.logpdf(x, self.shape, scale=self.scale)

    def sample(self, key: PRNGKeyArray, shape: tuple[int, ...]) -> Array:
        return jrandom.gamma(key, self.shape, shape=shape) * self.scale
