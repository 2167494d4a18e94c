"""Differentiable objective over a flat parameter vector.

:func:`make_objective` binds a model to one dataset and exposes the negative
log-likelihood, its gradient and its Hessian as jitted functions of a single
flat vector, which is the form external optimisers expect. The flat layout is
the one produced by :meth:`~nlljax.model.typing.Record.ravel` on the starting
parameters.
"""

import logging
from dataclasses import dataclass
from typing import Callable

import jax
from jaxtyping import Array, PRNGKeyArray, Scalar

import nlljax.model.typing as nlltyping
from nlljax.model.base import Model
from nlljax.model.evaluate import negative_log_likelihood, report
from nlljax.model.simulate import simulate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Objective[DataT: nlltyping.Data, ParametersT: nlltyping.Parameters]:
    model: Model[DataT, ParametersT]
    data: DataT
    par: Array
    unravel: Callable[[Array], ParametersT]
    fn: Callable[[Array], Scalar]
    gr: Callable[[Array], Array]
    he: Callable[[Array], Array]

    def parameters(self, flat: Array | None = None) -> ParametersT:
        return self.unravel(self.par if flat is None else flat)

    def report(self, flat: Array | None = None) -> dict[str, Array]:
        return report(self.model, self.parameters(flat))

    def simulate(self, key: PRNGKeyArray, flat: Array | None = None) -> DataT:
        return simulate(key, self.model, self.data, self.parameters(flat))


def make_objective[DataT: nlltyping.Data, ParametersT: nlltyping.Parameters](
    model: Model[DataT, ParametersT],
    data: DataT,
    parameters: ParametersT,
) -> Objective[DataT, ParametersT]:
    """Bind ``model`` to ``data``, starting the flat vector at ``parameters``."""
    model.check_shapes(data, parameters)
    par, unravel = parameters.ravel()
    logger.debug(
        "built objective for %s with %d free parameters", type(model).__name__, par.size
    )

    def nll(flat: Array) -> Scalar:
        return negative_log_likelihood(model, data, unravel(flat))

    return Objective(
        model=model,
        data=data,
        par=par,
        unravel=unravel,
        fn=jax.jit(nll),
        gr=jax.jit(jax.grad(nll)),
        he=jax.jit(jax.hessian(nll)),
    )
