"""Four independent count and positive-valued likelihoods in one model.

``B``, ``P``, ``NB`` and ``G`` are scored against binomial, Poisson, negative
binomial and gamma families respectively. No parameter is shared between the
four, so the total NLL is the sum of four independent contributions.
"""

from collections import OrderedDict
from typing import ClassVar

from jaxtyping import Array, Float, Scalar

from nlljax.model.base import Model
from nlljax.model.distributions import (
    Binomial,
    Distribution,
    Gamma,
    NegativeBinomial2,
    Poisson,
)
from nlljax.model.transforms import ParameterTransform
from nlljax.model.typing import Data, Parameters, array_field, float_field


class MultiDistData(Data):
    B: Float[Array, " n"] = array_field()
    P: Float[Array, " n"] = array_field()
    NB: Float[Array, " n"] = array_field()
    G: Float[Array, " n"] = array_field()

    observation_fields: ClassVar = ("B", "P", "NB", "G")


class MultiDistParameters(Parameters):
    logit_prob: Scalar = float_field()
    log_lambda: Scalar = float_field()
    log_mu: Scalar = float_field()
    log_var: Scalar = float_field()
    log_shape: Scalar = float_field()
    log_scale: Scalar = float_field()


class MultiDist(Model[MultiDistData, MultiDistParameters]):
    data_cls = MultiDistData
    parameter_cls = MultiDistParameters
    transforms: ClassVar = OrderedDict(
        logit_prob=ParameterTransform("prob", "logit"),
        log_lambda=ParameterTransform("lambda", "log"),
        log_mu=ParameterTransform("mu", "log"),
        log_var=ParameterTransform("var", "log"),
        log_shape=ParameterTransform("shape", "log"),
        log_scale=ParameterTransform("scale", "log"),
    )

    trials: ClassVar[int] = 10

    def observation_model(
        self,
        data: MultiDistData,
        constrained: dict[str, Array],
    ) -> dict[str, Distribution]:
        return {
            "B": Binomial(trials=self.trials, prob=constrained["prob"]),
            "P": Poisson(rate=constrained["lambda"]),
            "NB": NegativeBinomial2(mean=constrained["mu"], var=constrained["var"]),
            "G": Gamma(shape=constrained["shape"], scale=constrained["scale"]),
        }
