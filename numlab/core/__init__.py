"""
core

Обчислювальне ядро numlab. Типове використання:

    from numlab.core import run_method
    result = run_method("bisection", {"function": "x^2 - 2", "a": 1, "b": 2,
                                      "tolerance": 1e-6, "maxIterations": 50})
"""

from .bisection import BisectionMethod, BisectionParams
from .differentiation import DifferentiationParams, NumericalDifferentiation
from .errors import (
    DivergenceError,
    EvaluationError,
    NonConvergenceWarning,
    NumericalMethodError,
    StabilityWarning,
    ValidationError,
)
from .expression import Expression, compile_expression, evaluate
from .fixed_point import FixedPointMethod, FixedPointParams
from .gauss_seidel import GaussSeidelMethod
from .integration import IntegrationParams, NumericalIntegration
from .iteration_result import IterationRecord, MethodResult, WarningEntry
from .jacobi import JacobiMethod
from .lagrange import LagrangeInterpolation, LagrangeParams
from .linear_base import LinearSystemParams
from .logger import EventLog, LogEvent, Logger
from .method_base import NumericalMethod
from .newton import NewtonMethod, NewtonParams
from .registry import METHODS, create_method, run_method
from .results_summary import ResultsSummary

__all__ = [
    "BisectionMethod",
    "BisectionParams",
    "DifferentiationParams",
    "NumericalDifferentiation",
    "DivergenceError",
    "EvaluationError",
    "NonConvergenceWarning",
    "NumericalMethodError",
    "StabilityWarning",
    "ValidationError",
    "Expression",
    "compile_expression",
    "evaluate",
    "FixedPointMethod",
    "FixedPointParams",
    "GaussSeidelMethod",
    "IntegrationParams",
    "NumericalIntegration",
    "IterationRecord",
    "MethodResult",
    "WarningEntry",
    "JacobiMethod",
    "LagrangeInterpolation",
    "LagrangeParams",
    "LinearSystemParams",
    "EventLog",
    "LogEvent",
    "Logger",
    "NumericalMethod",
    "NewtonMethod",
    "NewtonParams",
    "METHODS",
    "create_method",
    "run_method",
    "ResultsSummary",
]
