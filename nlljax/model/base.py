"""Model contract shared by every shipped model.

A model is a declaration, not a computation. It names its data and parameter
record types, says how each raw parameter is mapped onto its natural scale,
and binds each observation field to a distribution family via
``observation_model``. Scoring (:mod:`nlljax.model.evaluate`) and simulation
(:mod:`nlljax.model.simulate`) both consume that single declaration, so the
two modes cannot disagree on a distribution or its parameterisation.

Adding a model means:

1. Subclass :class:`~nlljax.model.typing.Data` and
   :class:`~nlljax.model.typing.Parameters`.
2. Declare ``transforms`` keyed by raw parameter field name.
3. Implement ``observation_model`` returning one distribution per field in
   ``Data.observation_fields``.
4. Extend ``check_shapes`` if the model has covariates.
"""

import enum
import typing
from typing import ClassVar

import equinox as eqx
import jax.numpy as jnp
from jaxtyping import Array, Scalar

import nlljax.model.typing as nlltyping
from nlljax.errors import ShapeMismatchError, UnknownModeError
from nlljax.model.distributions import Distribution
from nlljax.model.transforms import ParameterTransform


class Mode(enum.Enum):
    SCORE = "score"
    SIMULATE = "simulate"

    @classmethod
    def parse(cls, mode: "Mode | str") -> "Mode":
        if isinstance(mode, cls):
            return mode
        try:
            return cls(mode)
        except ValueError:
            raise UnknownModeError(
                f"Unknown mode {mode!r}, expected one of {[m.value for m in cls]}"
            ) from None


class EvaluationResult[DataT: nlltyping.Data](eqx.Module):
    """Output of one :func:`~nlljax.model.evaluate.evaluate` call.

    ``nll`` is only set in score mode and ``simulated`` only in simulate mode.
    ``reported`` is always populated.
    """

    nll: Scalar | None
    reported: dict[str, Array]
    simulated: DataT | None = None


class Model[DataT: nlltyping.Data, ParametersT: nlltyping.Parameters]:
    data_cls: type[DataT]
    parameter_cls: type[ParametersT]
    transforms: ClassVar[typing.Mapping[str, ParameterTransform]]

    def observation_model(
        self,
        data: DataT,
        constrained: dict[str, Array],
    ) -> dict[str, Distribution]:
        """Return the distribution of every observation field."""
        raise NotImplementedError

    def check_shapes(self, data: DataT, parameters: ParametersT) -> None:
        """Raise :class:`ShapeMismatchError` if inputs cannot be evaluated together."""
        name = type(self).__name__
        if not isinstance(data, self.data_cls):
            raise ShapeMismatchError(
                f"{name} expects {self.data_cls.__name__} data, "
                f"got {type(data).__name__}"
            )
        if not isinstance(parameters, self.parameter_cls):
            raise ShapeMismatchError(
                f"{name} expects {self.parameter_cls.__name__} parameters, "
                f"got {type(parameters).__name__}"
            )

        lengths = {}
        for field in data.observation_fields:
            shape = jnp.shape(getattr(data, field))
            if len(shape) != 1:
                raise ShapeMismatchError(
                    f"{name}: data field {field!r} must be 1-D, got shape {shape}"
                )
            lengths[field] = shape[0]
        if len(set(lengths.values())) > 1:
            raise ShapeMismatchError(
                f"{name}: observation fields differ in length {lengths}"
            )

        for field in parameters.fields():
            ndim = jnp.ndim(getattr(parameters, field))
            expected = 1 if field in parameters.vector_fields else 0
            if ndim != expected:
                raise ShapeMismatchError(
                    f"{name}: parameter {field!r} must have {expected} dimension(s), "
                    f"got {ndim}"
                )
