"""Core abstractions and shipped models.

Re-exports the model contract, the distribution catalog and the scoring and
simulation helpers so that they are available under :mod:`nlljax.model`.
"""

from . import evaluate as _evaluate_module
from . import simulate as _simulate_module
from .base import EvaluationResult, Mode, Model
from .distributions import (
    Binomial,
    Distribution,
    Gamma,
    NegativeBinomial2,
    Normal,
    Poisson,
)
from .fe import FE, FEData, FEParameters
from .fe0 import FE0, FE0Data, FE0Parameters
from .multi_dist import MultiDist, MultiDistData, MultiDistParameters
from .transforms import ParameterTransform, constrain, transform

# Re-export the submodules so ``from nlljax.model import evaluate`` returns the
# documented modules.
evaluate = _evaluate_module
simulate = _simulate_module

# Convenience aliases for the most commonly used helpers.
evaluate_model = _evaluate_module.evaluate
negative_log_likelihood = _evaluate_module.negative_log_likelihood
log_likelihood_terms = _evaluate_module.log_likelihood_terms
report = _evaluate_module.report
simulate_data = _simulate_module.simulate
simulate_replicates = _simulate_module.simulate_replicates

__all__ = [
    "evaluate",
    "simulate",
    "EvaluationResult",
    "Mode",
    "Model",
    "Distribution",
    "Normal",
    "Binomial",
    "Poisson",
    "NegativeBinomial2",
    "Gamma",
    "FE",
    "FEData",
    "FEParameters",
    "FE0",
    "FE0Data",
    "FE0Parameters",
    "MultiDist",
    "MultiDistData",
    "MultiDistParameters",
    "ParameterTransform",
    "constrain",
    "transform",
    "evaluate_model",
    "negative_log_likelihood",
    "log_likelihood_terms",
    "report",
    "simulate_data",
    "simulate_replicates",
]
