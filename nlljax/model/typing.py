"""Record types for datasets and parameter vectors.

Both are immutable ``equinox`` modules, so they are pytrees that pass straight
through ``jax.jit``, ``jax.vmap`` and ``jax.grad``. Leaves are converted to
arrays on construction, so plain Python floats and lists are accepted.
Parameter fields are always stored as floating point.

Feature lengths (number of observations, number of regression coefficients)
are only known at call time, so shape consistency is checked by
:meth:`nlljax.model.base.Model.check_shapes` rather than by the records.
"""

import dataclasses
import typing
from typing import ClassVar

import equinox as eqx
import jax
import jax.flatten_util
import jax.numpy as jnp


def array_field(**kwargs) -> typing.Any:
    """Record field whose value is passed through ``jnp.asarray``."""
    return eqx.field(converter=jnp.asarray, **kwargs)


def _as_float_array(x) -> jax.Array:
    x = jnp.asarray(x)
    return x.astype(jnp.result_type(x, float))


def float_field(**kwargs) -> typing.Any:
    """Record field stored as a floating point array, promoting integers."""
    return eqx.field(converter=_as_float_array, **kwargs)


class Record(eqx.Module):
    """Named collection of arrays."""

    @classmethod
    def fields(cls) -> tuple[str, ...]:
        return tuple(f.name for f in dataclasses.fields(cls))

    def as_dict(self) -> dict[str, jax.Array]:
        return {name: getattr(self, name) for name in self.fields()}

    def ravel(self) -> tuple[jax.Array, typing.Callable[[jax.Array], typing.Self]]:
        """Flatten every leaf into one vector, returning it with its inverse."""
        return jax.flatten_util.ravel_pytree(self)


class Data(Record):
    """Observed data for one evaluation.

    ``observation_fields`` lists the 1-D vectors that are scored, and replaced
    when simulating. Any other field is a covariate.
    """

    observation_fields: ClassVar[tuple[str, ...]] = ()

    @property
    def observation_count(self) -> int:
        first, *_ = self.observation_fields
        return jnp.shape(getattr(self, first))[0]


class Parameters(Record):
    """Free parameters on the unconstrained scale.

    Fields named in ``vector_fields`` are 1-D, everything else is a scalar.
    """

    vector_fields: ClassVar[tuple[str, ...]] = ()
