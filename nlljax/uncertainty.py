"""Standard errors for parameters and reported quantities.

The covariance of the free parameters is the inverse Hessian of the negative
log-likelihood. Reported quantities get standard errors by the delta method,
``sqrt(diag(J @ cov @ J.T))`` with ``J`` the Jacobian of the reported values
with respect to the flat parameter vector. Both are only meaningful at (or
near) a minimum; a Hessian that is not positive definite is not repaired and
the resulting NaNs are returned as is.
"""

import equinox as eqx
import jax
import jax.flatten_util
import jax.numpy as jnp
from jaxtyping import Array, Float, Scalar

import nlljax.model.typing as nlltyping
from nlljax.objective import Objective


class ReportedQuantity(eqx.Module):
    value: Scalar
    stderr: Scalar


class Uncertainty[ParametersT: nlltyping.Parameters](eqx.Module):
    parameters: ParametersT
    parameter_stderr: ParametersT
    covariance: Float[Array, "p p"]
    reported: dict[str, ReportedQuantity]


def report_uncertainty[ParametersT: nlltyping.Parameters](
    objective: Objective[nlltyping.Data, ParametersT],
    flat: Array | None = None,
) -> Uncertainty[ParametersT]:
    """Evaluate parameter and reported-quantity uncertainty at ``flat``.

    ``flat`` defaults to the objective's starting vector.
    """
    flat = objective.par if flat is None else flat
    covariance = jnp.linalg.inv(objective.he(flat))

    values = objective.report(flat)
    _, unravel_reported = jax.flatten_util.ravel_pytree(values)

    def flat_report(x: Array) -> Array:
        reported_flat, _ = jax.flatten_util.ravel_pytree(objective.report(x))
        return reported_flat

    jacobian = jax.jacfwd(flat_report)(flat)
    variance = jnp.einsum("ij,jk,ik->i", jacobian, covariance, jacobian)
    stderr = unravel_reported(jnp.sqrt(variance))

    return Uncertainty(
        parameters=objective.parameters(flat),
        parameter_stderr=objective.unravel(jnp.sqrt(jnp.diag(covariance))),
        covariance=covariance,
        reported={
            name: ReportedQuantity(value=value, stderr=stderr[name])
            for name, value in values.items()
        },
    )
