"""Negative log-likelihood scoring and simulation for small statistical models.

Every model runs in two modes sharing one declaration: ``score`` returns the
NLL of observed data, ``simulate`` redraws the data from the same
distributions. Both report the model's derived quantities.
"""

# Re-export the commonly used pieces from the package root so ``import nlljax``
# is enough for typical use.

from .errors import ShapeMismatchError, UnknownModeError
from .model import evaluate, simulate
from .model.base import EvaluationResult, Mode, Model
from .model.fe import FE, FEData, FEParameters
from .model.fe0 import FE0, FE0Data, FE0Parameters
from .model.multi_dist import MultiDist, MultiDistData, MultiDistParameters
from .objective import Objective, make_objective
from .uncertainty import ReportedQuantity, Uncertainty, report_uncertainty

__all__ = [
    "evaluate",
    "simulate",
    "EvaluationResult",
    "Mode",
    "Model",
    "FE",
    "FEData",
    "FEParameters",
    "FE0",
    "FE0Data",
    "FE0Parameters",
    "MultiDist",
    "MultiDistData",
    "MultiDistParameters",
    "Objective",
    "make_objective",
    "ReportedQuantity",
    "Uncertainty",
    "report_uncertainty",
    "ShapeMismatchError",
    "UnknownModeError",
]
