"""Tests for :mod:`nlljax.model.distributions`."""

import math

import jax
import jax.numpy as jnp
import jax.random as jrandom
import pytest

from nlljax.model.distributions import (
    Binomial,
    Gamma,
    NegativeBinomial2,
    Normal,
    Poisson,
)


def test_normal_log_prob_matches_closed_form() -> None:
    x, loc, scale = 1.3, 0.5, 2.0
    expected = (
        -0.5 * math.log(2 * math.pi) - math.log(scale) - 0.5 * ((x - loc) / scale) ** 2
    )
    log_p = Normal(loc=jnp.array(loc), scale=jnp.array(scale)).log_prob(x)
    assert float(log_p) == pytest.approx(expected, rel=1e-5)


def test_binomial_log_prob_matches_closed_form() -> None:
    log_p = Binomial(trials=jnp.array(10), prob=jnp.array(0.5)).log_prob(5.0)
    expected = math.log(math.comb(10, 5) * 0.5**10)
    assert float(log_p) == pytest.approx(expected, rel=1e-5)
    assert -float(log_p) == pytest.approx(1.4016, abs=1e-3)


def test_poisson_log_prob_matches_closed_form() -> None:
    log_p = Poisson(rate=jnp.array(2.0)).log_prob(3.0)
    expected = 3 * math.log(2.0) - 2.0 - math.log(6.0)
    assert float(log_p) == pytest.approx(expected, rel=1e-5)


def test_negative_binomial_uses_mean_and_variance() -> None:
    # mean 2, var 6 -> size 1, prob 1/3
    distribution = NegativeBinomial2(mean=jnp.array(2.0), var=jnp.array(6.0))
    assert float(distribution.size) == pytest.approx(1.0)
    assert float(distribution.prob) == pytest.approx(1 / 3)

    expected = math.log((1 / 3) * (2 / 3) ** 3)
    assert float(distribution.log_prob(3.0)) == pytest.approx(expected, rel=1e-5)


def test_gamma_log_prob_uses_shape_and_scale() -> None:
    x, shape, scale = 2.0, 2.0, 1.5
    expected = (
        (shape - 1) * math.log(x)
        - x / scale
        - math.lgamma(shape)
        - shape * math.log(scale)
    )
    log_p = Gamma(shape=jnp.array(shape), scale=jnp.array(scale)).log_prob(x)
    assert float(log_p) == pytest.approx(expected, rel=1e-5)


def test_poisson_outside_support_is_not_finite() -> None:
    log_p = Poisson(rate=jnp.array(1.0)).log_prob(-1.0)
    assert not jnp.isfinite(log_p)


def test_normal_sample_broadcasts_per_observation_loc() -> None:
    loc = jnp.array([0.0, 100.0, -100.0])
    draws = Normal(loc=loc, scale=jnp.array(1e-3)).sample(jrandom.PRNGKey(0), (3,))
    assert draws.shape == (3,)
    assert jnp.allclose(draws, loc, atol=0.1)


def test_normal_sample_broadcasts_scalar_loc() -> None:
    draws = Normal(loc=jnp.array(2.0), scale=jnp.array(1.0)).sample(
        jrandom.PRNGKey(0), (5,)
    )
    assert draws.shape == (5,)


@pytest.mark.parametrize(
    "distribution, mean, var",
    [
        (Binomial(trials=jnp.array(10), prob=jnp.array(0.3)), 3.0, 2.1),
        (Poisson(rate=jnp.array(4.0)), 4.0, 4.0),
        (NegativeBinomial2(mean=jnp.array(5.0), var=jnp.array(15.0)), 5.0, 15.0),
        (Gamma(shape=jnp.array(2.0), scale=jnp.array(1.5)), 3.0, 4.5),
    ],
    ids=["binomial", "poisson", "negative_binomial", "gamma"],
)
def test_sample_moments(distribution, mean: float, var: float) -> None:
    draws = distribution.sample(jrandom.PRNGKey(0), (200_000,))
    assert float(jnp.mean(draws)) == pytest.approx(mean, rel=0.02)
    assert float(jnp.var(draws)) == pytest.approx(var, rel=0.05)


@pytest.mark.parametrize(
    "distribution",
    [
        Binomial(trials=jnp.array(10), prob=jnp.array(0.3)),
        Poisson(rate=jnp.array(4.0)),
        NegativeBinomial2(mean=jnp.array(5.0), var=jnp.array(15.0)),
    ],
    ids=["binomial", "poisson", "negative_binomial"],
)
def test_count_samples_are_non_negative_integers(distribution) -> None:
    draws = distribution.sample(jrandom.PRNGKey(1), (1000,))
    assert jnp.all(draws >= 0)
    assert jnp.all(draws == jnp.round(draws))


@pytest.mark.parametrize(
    "prob, x, expected",
    [(0.0, 0.0, 0.0), (0.0, 1.0, -math.inf), (1.0, 10.0, 0.0), (1.0, 9.0, -math.inf)],
)
def test_binomial_boundary_prob_is_point_mass(prob: float, x: float, expected) -> None:
    log_p = Binomial(trials=jnp.array(10), prob=jnp.array(prob)).log_prob(x)
    assert float(log_p) == expected


@pytest.mark.parametrize("prob", [0.0, 1.0])
def test_binomial_gradient_is_finite_at_boundary_prob(prob: float) -> None:
    def log_p(p):
        return Binomial(trials=jnp.array(10), prob=p).log_prob(10.0 * prob)

    assert jnp.isfinite(jax.grad(log_p)(jnp.array(prob)))
