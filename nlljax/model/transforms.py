"""Maps from unconstrained free parameters onto their natural scale.

The catalog is fixed:

* ``"log"``: ``exp(raw)``, onto ``(0, inf)``. Used for scales, rates and shapes.
* ``"logit"``: ``1 / (1 + exp(-raw))``, onto ``(0, 1)``. Used for probabilities.
* ``"identity"``: ``raw``, for location terms and regression coefficients.

Log and logit outputs are always reported so that a differentiation backend
can attach standard errors to them (see :mod:`nlljax.uncertainty`). Raw inputs
are not validated; non-finite values pass straight through.
"""

import typing
from dataclasses import dataclass
from typing import Callable

import jax.numpy as jnp
from jax.scipy.special import expit, logit
from jaxtyping import Array

from nlljax.model.typing import Parameters

TransformKind = typing.Literal["log", "logit", "identity"]


_catalog: dict[TransformKind, tuple[Callable[[Array], Array], bool]] = {
    "log": (jnp.exp, True),
    "logit": (expit, True),
    "identity": (lambda raw: raw, False),
}


def transform(raw: Array, kind: TransformKind) -> tuple[Array, bool]:
    """Return ``(constrained_value, is_reportable)`` for ``raw`` under ``kind``."""
    try:
        fn, reportable = _catalog[kind]
    except KeyError:
        raise ValueError(
            f"Unknown transform kind {kind!r}, expected one of {tuple(_catalog)}"
        ) from None
    return fn(jnp.asarray(raw)), reportable


@dataclass(frozen=True, slots=True)
class ParameterTransform:
    """Declares that a raw parameter field maps to quantity ``name`` via ``kind``."""

    name: str
    kind: TransformKind


def constrain(
    parameters: Parameters,
    transforms: typing.Mapping[str, ParameterTransform],
) -> tuple[dict[str, Array], dict[str, Array]]:
    """Apply ``transforms`` (keyed by raw field name) to ``parameters``.

    Returns every constrained value, and the reportable subset, both keyed by
    constrained name in declaration order.
    """
    constrained: dict[str, Array] = {}
    reported: dict[str, Array] = {}
    for field, declaration in transforms.items():
        value, reportable = transform(getattr(parameters, field), declaration.kind)
        constrained[declaration.name] = value
        if reportable:
            reported[declaration.name] = value
    return constrained, reported


def inverse_transform(value: Array, kind: TransformKind) -> Array:
    """Map a natural-scale value back onto the unconstrained scale."""
    if kind == "log":
        return jnp.log(value)
    if kind == "logit":
        return logit(value)
    if kind == "identity":
        return jnp.asarray(value)
    raise ValueError(f"Unknown transform kind {kind!r}")
