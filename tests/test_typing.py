"""Tests for the record types in :mod:`nlljax.model.typing`."""

import jax
import jax.numpy as jnp

from nlljax.model.fe import FEData, FEParameters
from nlljax.model.fe0 import FE0Parameters


def test_fields_follow_declaration_order() -> None:
    assert FEData.fields() == ("y", "X")
    assert FEParameters.fields() == ("log_resid_sd", "beta")
    assert FEData.observation_fields == ("y",)
    assert FEParameters.vector_fields == ("beta",)


def test_fields_are_converted_to_arrays() -> None:
    parameters = FE0Parameters(mu=2.0, log_resid_sd=0)
    assert isinstance(parameters.mu, jax.Array)
    assert parameters.mu.shape == ()
    assert set(parameters.as_dict()) == {"mu", "log_resid_sd"}


def test_ravel_round_trip() -> None:
    parameters = FEParameters(log_resid_sd=0.5, beta=jnp.array([1.0, 2.0, 3.0]))
    flat, unravel = parameters.ravel()

    assert jnp.array_equal(flat, jnp.array([0.5, 1.0, 2.0, 3.0]))
    restored = unravel(flat)
    assert isinstance(restored, FEParameters)
    assert jnp.array_equal(restored.beta, parameters.beta)


def test_records_are_pytrees() -> None:
    data = FEData(y=jnp.zeros(3), X=jnp.ones((3, 2)))
    doubled = jax.tree_util.tree_map(lambda leaf: 2 * leaf, data)
    assert isinstance(doubled, FEData)
    assert jnp.array_equal(doubled.X, 2 * jnp.ones((3, 2)))
    assert doubled.observation_count == 3
