"""Intercept-only Gaussian model."""

from collections import OrderedDict
from typing import ClassVar

from jaxtyping import Array, Float, Scalar

from nlljax.model.base import Model
from nlljax.model.distributions import Distribution, Normal
from nlljax.model.transforms import ParameterTransform
from nlljax.model.typing import Data, Parameters, array_field, float_field


class FE0Data(Data):
    y: Float[Array, " n"] = array_field()

    observation_fields: ClassVar = ("y",)


class FE0Parameters(Parameters):
    mu: Scalar = float_field()
    log_resid_sd: Scalar = float_field()


class FE0(Model[FE0Data, FE0Parameters]):
    """``y[i] ~ Normal(mu, resid_sd)`` with ``resid_sd = exp(log_resid_sd)``."""

    data_cls = FE0Data
    parameter_cls = FE0Parameters
    transforms: ClassVar = OrderedDict(
        mu=ParameterTransform("mu", "identity"),
        log_resid_sd=ParameterTransform("resid_sd", "log"),
    )

    def observation_model(
        self,
        data: FE0Data,
        constrained: dict[str, Array],
    ) -> dict[str, Distribution]:
        return {"y": Normal(loc=constrained["mu"], scale=constrained["resid_sd"])}
