"""Tests for :mod:`nlljax.model.simulate`."""

import jax
import jax.numpy as jnp
import jax.random as jrandom
import pytest

from nlljax.model import evaluate, registry, simulate
from nlljax.model.fe0 import FE0, FE0Data, FE0Parameters


@pytest.mark.parametrize("model_label", list(registry.models))
def test_simulate_then_score_has_no_domain_violations(model_label) -> None:
    model = registry.models[model_label]()
    data = registry.data_templates[model_label](20)
    parameters = registry.parameter_settings[model_label]["base"]

    def round_trip(key):
        simulated = simulate.simulate(key, model, data, parameters)
        return evaluate.negative_log_likelihood(model, simulated, parameters)

    keys = jrandom.split(jrandom.PRNGKey(0), 1000)
    nlls = jax.vmap(round_trip)(keys)

    assert nlls.shape == (1000,)
    assert jnp.all(jnp.isfinite(nlls))


def test_simulate_ignores_observed_values() -> None:
    parameters = FE0Parameters(mu=2.0, log_resid_sd=0.0)
    key = jrandom.PRNGKey(7)
    from_zeros = simulate.simulate(key, FE0(), FE0Data(y=jnp.zeros(4)), parameters)
    from_ones = simulate.simulate(key, FE0(), FE0Data(y=jnp.ones(4)), parameters)
    assert jnp.array_equal(from_zeros.y, from_ones.y)


def test_simulated_counts_are_in_support() -> None:
    model = registry.models["multi_dist"]()
    data = registry.data_templates["multi_dist"](500)
    parameters = registry.parameter_settings["multi_dist"]["base"]

    simulated = simulate.simulate(jrandom.PRNGKey(2), model, data, parameters)

    for field in ("B", "P", "NB"):
        values = getattr(simulated, field)
        assert jnp.issubdtype(values.dtype, jnp.floating), field
        assert jnp.all(values >= 0), field
        assert jnp.all(values == jnp.round(values)), field
    assert jnp.all(simulated.B <= model.trials)
    assert jnp.all(simulated.G > 0)


def test_integer_counts_are_promoted_to_float() -> None:
    model = registry.models["multi_dist"]()
    counts = jnp.zeros(3, dtype=jnp.int32)
    data = model.data_cls(B=counts, P=counts, NB=counts, G=jnp.ones(3))
    parameters = registry.parameter_settings["multi_dist"]["base"]

    simulated = simulate.simulate(jrandom.PRNGKey(0), model, data, parameters)
    assert jnp.issubdtype(simulated.P.dtype, jnp.floating)


def test_simulate_replicates_batches_every_leaf() -> None:
    model = registry.models["fe"]()
    data = registry.data_templates["fe"](6)
    parameters = registry.parameter_settings["fe"]["base"]
    key = jrandom.PRNGKey(0)

    replicates = simulate.simulate_replicates(key, model, data, parameters, 4)

    assert replicates.y.shape == (4, 6)
    assert replicates.X.shape == (4, 6, 2)

    first = simulate.simulate(jrandom.split(key, 4)[0], model, data, parameters)
    assert jnp.allclose(replicates.y[0], first.y)


def test_simulate_replicates_mean_follows_linear_predictor() -> None:
    model = registry.models["fe"]()
    data = registry.data_templates["fe"](5)
    parameters = registry.parameter_settings["fe"]["base"]

    replicates = simulate.simulate_replicates(
        jrandom.PRNGKey(11), model, data, parameters, 4000
    )

    expected = data.X @ parameters.beta
    assert jnp.allclose(jnp.mean(replicates.y, axis=0), expected, atol=0.05)


def test_simulate_replicates_requires_positive_count() -> None:
    with pytest.raises(ValueError, match="num_replicates"):
        simulate.simulate_replicates(
            jrandom.PRNGKey(0),
            FE0(),
            FE0Data(y=jnp.zeros(3)),
            FE0Parameters(mu=0.0, log_resid_sd=0.0),
            0,
        )
