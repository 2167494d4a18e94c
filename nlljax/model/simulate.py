"""Utilities for simulating replacement datasets from a model."""

import logging
from functools import partial

import equinox as eqx
import jax
import jax.numpy as jnp
import jax.random as jrandom
from jaxtyping import Array, PRNGKeyArray

import nlljax.model.typing as nlltyping
from nlljax.model.base import Model
from nlljax.model.transforms import constrain

logger = logging.getLogger(__name__)


def draw[DataT: nlltyping.Data](
    key: PRNGKeyArray,
    model: Model[DataT, nlltyping.Parameters],
    data: DataT,
    constrained: dict[str, Array],
) -> DataT:
    """Redraw every observation field of ``data`` from ``constrained`` parameters.

    Each field uses its own key split from ``key``. Covariates are untouched and
    the result has the same type and shapes as ``data``. Count draws are
    promoted to floating point.
    """
    distributions = model.observation_model(data, constrained)
    field_keys = jrandom.split(key, len(distributions))

    names = tuple(distributions)
    replacements = []
    for field_key, (field, distribution) in zip(field_keys, distributions.items()):
        observed = getattr(data, field)
        sample = distribution.sample(field_key, jnp.shape(observed))
        replacements.append(sample.astype(jnp.result_type(observed, float)))

    return eqx.tree_at(
        lambda d: tuple(getattr(d, field) for field in names),
        data,
        tuple(replacements),
    )


def simulate[DataT: nlltyping.Data, ParametersT: nlltyping.Parameters](
    key: PRNGKeyArray,
    model: Model[DataT, ParametersT],
    data: DataT,
    parameters: ParametersT,
) -> DataT:
    """Simulate a replacement for ``data`` under ``parameters``.

    ``data`` only supplies shapes and covariates; the contents of its
    observation fields are ignored. The same ``key`` always gives the same draw.
    """
    model.check_shapes(data, parameters)
    logger.debug(
        "simulating %s with %d observations",
        type(model).__name__,
        data.observation_count,
    )
    constrained, _ = constrain(parameters, model.transforms)
    return draw(key, model, data, constrained)


def simulate_replicates[DataT: nlltyping.Data, ParametersT: nlltyping.Parameters](
    key: PRNGKeyArray,
    model: Model[DataT, ParametersT],
    data: DataT,
    parameters: ParametersT,
    num_replicates: int,
) -> DataT:
    """Simulate ``num_replicates`` independent datasets in one vectorised call.

    Every leaf of the returned record, covariates included, gains a leading
    replicate axis of length ``num_replicates``.
    """
    if num_replicates < 1:
        raise ValueError(f"num_replicates must be >= 1, got {num_replicates}")

    replicate_keys = jrandom.split(key, num_replicates)
    return jax.vmap(
        partial(simulate, model=model, data=data, parameters=parameters)
    )(replicate_keys)
