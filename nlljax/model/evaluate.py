"""Likelihood evaluation and the single score/simulate entry point."""

import logging

import jax.numpy as jnp
from jaxtyping import Array, PRNGKeyArray, Scalar

import nlljax.model.typing as nlltyping
from nlljax.model.base import EvaluationResult, Mode, Model
from nlljax.model.simulate import draw
from nlljax.model.transforms import constrain

logger = logging.getLogger(__name__)


def _log_likelihood_terms(
    model: Model,
    data: nlltyping.Data,
    constrained: dict[str, Array],
) -> dict[str, Array]:
    return {
        field: distribution.log_prob(getattr(data, field))
        for field, distribution in model.observation_model(data, constrained).items()
    }


def _negative_log_likelihood(
    model: Model,
    data: nlltyping.Data,
    constrained: dict[str, Array],
) -> Scalar:
    nll = jnp.zeros(())
    for terms in _log_likelihood_terms(model, data, constrained).values():
        nll = nll - jnp.sum(terms)
    return nll


def log_likelihood_terms[DataT: nlltyping.Data, ParametersT: nlltyping.Parameters](
    model: Model[DataT, ParametersT],
    data: DataT,
    parameters: ParametersT,
) -> dict[str, Array]:
    """Return the per-observation log-density of every observation field."""
    model.check_shapes(data, parameters)
    constrained, _ = constrain(parameters, model.transforms)
    return _log_likelihood_terms(model, data, constrained)


def negative_log_likelihood[DataT: nlltyping.Data, ParametersT: nlltyping.Parameters](
    model: Model[DataT, ParametersT],
    data: DataT,
    parameters: ParametersT,
) -> Scalar:
    """Return ``-log p(data | parameters)`` summed over every observation field.

    Fields are independent, so the total is a plain sum of per-field totals.
    Data outside a family's support gives a non-finite result.
    """
    model.check_shapes(data, parameters)
    constrained, _ = constrain(parameters, model.transforms)
    return _negative_log_likelihood(model, data, constrained)


def report(
    model: Model,
    parameters: nlltyping.Parameters,
) -> dict[str, Array]:
    """Return the reportable quantities implied by ``parameters``."""
    _, reported = constrain(parameters, model.transforms)
    return reported


def evaluate[DataT: nlltyping.Data, ParametersT: nlltyping.Parameters](
    model: Model[DataT, ParametersT],
    data: DataT,
    parameters: ParametersT,
    mode: Mode | str,
    *,
    key: PRNGKeyArray | None = None,
) -> EvaluationResult[DataT]:
    """Evaluate ``model`` in either score or simulate mode.

    In score mode the result carries the negative log-likelihood of ``data``.
    In simulate mode ``key`` is required, ``data`` is only used for its shapes
    and covariates, and the result carries a freshly simulated dataset instead.
    Reported quantities are returned in both modes.
    """
    mode = Mode.parse(mode)
    model.check_shapes(data, parameters)
    logger.debug(
        "evaluating %s in %s mode with %d observations",
        type(model).__name__,
        mode.value,
        data.observation_count,
    )

    constrained, reported = constrain(parameters, model.transforms)
    if mode is Mode.SCORE:
        return EvaluationResult(
            nll=_negative_log_likelihood(model, data, constrained),
            reported=reported,
        )

    if key is None:
        raise ValueError("simulate mode requires a PRNG key")
    return EvaluationResult(
        nll=None,
        reported=reported,
        simulated=draw(key, model, data, constrained),
    )
