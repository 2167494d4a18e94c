"""Central registry for the shipped models, parameter presets and data templates.

To register a new model:

1. Add its label to :data:`ModelLabel`.
2. Insert the model class into :data:`models` under the same label.
3. Provide parameter presets in :data:`parameter_settings`, keyed first by
   model label and then by preset name (e.g. ``"base"``). Presets are on the
   unconstrained scale; :func:`~nlljax.model.transforms.inverse_transform`
   converts natural-scale values.
4. Register a callable in :data:`data_templates` that builds a correctly
   shaped dataset for a given number of observations.

Labels must be consistent across all registries.
"""

import logging
import typing
from dataclasses import dataclass

import jax.numpy as jnp
import jax.random as jrandom

from . import fe, fe0, multi_dist
from .base import Model
from .simulate import simulate
from .transforms import inverse_transform
from .typing import Data, Parameters

logger = logging.getLogger(__name__)

ModelLabel = typing.Literal["fe", "fe0", "multi_dist"]

models: dict[ModelLabel, type[Model]] = {
    "fe": fe.FE,
    "fe0": fe0.FE0,
    "multi_dist": multi_dist.MultiDist,
}

parameter_settings: dict[ModelLabel, dict[str, Parameters]] = {
    "fe": {
        "base": fe.FEParameters(
            log_resid_sd=inverse_transform(0.5, "log"),
            beta=jnp.array([1.0, 2.0]),
        ),
        "noisy": fe.FEParameters(
            log_resid_sd=inverse_transform(3.0, "log"),
            beta=jnp.array([1.0, 2.0]),
        ),
    },
    "fe0": {
        "base": fe0.FE0Parameters(
            mu=jnp.array(2.0),
            log_resid_sd=inverse_transform(1.0, "log"),
        ),
    },
    "multi_dist": {
        "base": multi_dist.MultiDistParameters(
            logit_prob=inverse_transform(0.3, "logit"),
            log_lambda=inverse_transform(4.0, "log"),
            log_mu=inverse_transform(5.0, "log"),
            log_var=inverse_transform(15.0, "log"),
            log_shape=inverse_transform(2.0, "log"),
            log_scale=inverse_transform(1.5, "log"),
        ),
    },
}


def _fe_template(observation_count: int) -> fe.FEData:
    # intercept and slope on an evenly spaced covariate
    covariate = jnp.linspace(0.0, 1.0, observation_count)
    design = jnp.stack([jnp.ones(observation_count), covariate], axis=1)
    return fe.FEData(y=jnp.zeros(observation_count), X=design)


def _fe0_template(observation_count: int) -> fe0.FE0Data:
    return fe0.FE0Data(y=jnp.zeros(observation_count))


def _multi_dist_template(observation_count: int) -> multi_dist.MultiDistData:
    zeros = jnp.zeros(observation_count)
    return multi_dist.MultiDistData(B=zeros, P=zeros, NB=zeros, G=zeros)


data_templates: dict[ModelLabel, typing.Callable[[int], Data]] = {
    "fe": _fe_template,
    "fe0": _fe0_template,
    "multi_dist": _multi_dist_template,
}


@dataclass(kw_only=True, frozen=True, slots=True)
class DataConfig:
    """Recipe for a synthetic dataset drawn from a registered preset."""

    target_model_label: ModelLabel
    generative_parameter_label: str
    observation_count: int
    seed: int

    @property
    def dataset_name(self) -> str:
        dataset_name = self.target_model_label
        dataset_name += f"-{self.generative_parameter_label}"
        dataset_name += f"-d{self.seed}"
        dataset_name += f"-n{self.observation_count}"
        return dataset_name

    @property
    def target(self) -> Model:
        return models[self.target_model_label]()

    @property
    def generative_parameters(self) -> Parameters:
        return parameter_settings[self.target_model_label][
            self.generative_parameter_label
        ]

    @property
    def template(self) -> Data:
        return data_templates[self.target_model_label](self.observation_count)

    @classmethod
    def from_dict(cls, config_dict: dict[str, typing.Any]) -> "DataConfig":
        return cls(
            target_model_label=config_dict["target_model_label"],
            generative_parameter_label=config_dict["generative_parameter_label"],
            observation_count=config_dict["observation_count"],
            seed=config_dict["seed"],
        )

    def generate(self) -> Data:
        """Simulate the dataset described by this config."""
        logger.info("generating dataset %s", self.dataset_name)
        return simulate(
            jrandom.PRNGKey(self.seed),
            self.target,
            self.template,
            self.generative_parameters,
        )
