"""Fixed-effects Gaussian regression."""

from collections import OrderedDict
from typing import ClassVar

import jax.numpy as jnp
from jaxtyping import Array, Float, Scalar

from nlljax.errors import ShapeMismatchError
from nlljax.model.base import Model
from nlljax.model.distributions import Distribution, Normal
from nlljax.model.transforms import ParameterTransform
from nlljax.model.typing import Data, Parameters, array_field, float_field


class FEData(Data):
    """Responses ``y`` and their ``n x p`` design matrix ``X``."""

    y: Float[Array, " n"] = array_field()
    X: Float[Array, "n p"] = array_field()

    observation_fields: ClassVar = ("y",)


class FEParameters(Parameters):
    log_resid_sd: Scalar = float_field()
    beta: Float[Array, " p"] = float_field()

    vector_fields: ClassVar = ("beta",)


class FE(Model[FEData, FEParameters]):
    """``y[i] ~ Normal((X @ beta)[i], resid_sd)``, ``resid_sd = exp(log_resid_sd)``."""

    data_cls = FEData
    parameter_cls = FEParameters
    transforms: ClassVar = OrderedDict(
        log_resid_sd=ParameterTransform("resid_sd", "log"),
        beta=ParameterTransform("beta", "identity"),
    )

    def observation_model(
        self,
        data: FEData,
        constrained: dict[str, Array],
    ) -> dict[str, Distribution]:
        linear_predictor = data.X @ constrained["beta"]
        return {"y": Normal(loc=linear_predictor, scale=constrained["resid_sd"])}

    def check_shapes(self, data: FEData, parameters: FEParameters) -> None:
        super().check_shapes(data, parameters)
        design_shape = jnp.shape(data.X)
        if len(design_shape) != 2:
            raise ShapeMismatchError(
                f"FE: design matrix X must be 2-D, got shape {design_shape}"
            )
        rows, columns = design_shape
        if rows != data.observation_count:
            raise ShapeMismatchError(
                f"FE: X has {rows} rows but y has {data.observation_count} entries"
            )
        coefficients = jnp.shape(parameters.beta)[0]
        if columns != coefficients:
            raise ShapeMismatchError(
                f"FE: X has {columns} columns but beta has {coefficients} entries"
            )
