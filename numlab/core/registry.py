"""
registry.py

Реєстр чисельних методів для вибору в GUI / з коду.

Формат:
    - METHODS: ключ -> MethodInfo (назва, клас, опис полів форми);
    - create_method(key, options) -> екземпляр NumericalMethod;
    - run_method(key, params, log, callback) -> MethodResult.

Ключі:
    "bisection", "newton", "fixed_point",
    "jacobi", "gauss_seidel",
    "lagrange", "differentiation", "integration"
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Type

from .bisection import BisectionMethod
from .differentiation import SCHEMES, NumericalDifferentiation
from .errors import ValidationError
from .fixed_point import FixedPointMethod
from .gauss_seidel import GaussSeidelMethod
from .integration import NumericalIntegration
from .iteration_result import MethodResult
from .jacobi import JacobiMethod
from .lagrange import LagrangeInterpolation
from .logger import Logger
from .method_base import IterationCallback, NumericalMethod
from .newton import NewtonMethod

# Типи полів форми параметрів
FIELD_FUNCTION = "function"
FIELD_NUMBER = "number"
FIELD_INT = "int"
FIELD_VECTOR = "vector"
FIELD_MATRIX = "matrix"
FIELD_CHOICE = "choice"


@dataclass(frozen=True)
class ParamField:
    """
    Опис одного поля параметрів (для побудови форми в GUI).

    name    - ім'я поля dataclass-а параметрів
    label   - підпис у формі
    kind    - function | number | int | vector | matrix | choice
    default - текст за замовчуванням
    choices - допустимі значення для kind == "choice"
    """
    name: str
    label: str
    kind: str
    default: str = ""
    choices: Tuple[str, ...] = ()


@dataclass(frozen=True)
class MethodInfo:
    key: str
    name: str
    method_class: Type[NumericalMethod]
    fields: Tuple[ParamField, ...]
    # поле траси, яке показується на графіку збіжності
    plot_field: Optional[str] = "error"


_TOL = ParamField("tolerance", "Точність (tol)", FIELD_NUMBER, "1e-6")
_MAX_ITER = ParamField("max_iterations", "Макс. ітерацій", FIELD_INT, "100")

_LINEAR_FIELDS = (
    ParamField("matrix", "Матриця A (рядки через ;)", FIELD_MATRIX, "10 -1 2; -1 11 -1; 2 -1 10"),
    ParamField("vector", "Вектор b", FIELD_VECTOR, "6 25 -11"),
    ParamField("initial_guess", "Початковий вектор x0", FIELD_VECTOR, "0 0 0"),
    _TOL,
    _MAX_ITER,
)

METHODS: Dict[str, MethodInfo] = {
    "bisection": MethodInfo(
        key="bisection",
        name="Метод бісекції",
        method_class=BisectionMethod,
        fields=(
            ParamField("function", "f(x)", FIELD_FUNCTION, "x^2 - 2"),
            ParamField("a", "a", FIELD_NUMBER, "1"),
            ParamField("b", "b", FIELD_NUMBER, "2"),
            _TOL,
            _MAX_ITER,
        ),
    ),
    "newton": MethodInfo(
        key="newton",
        name="Метод Ньютона–Рафсона",
        method_class=NewtonMethod,
        fields=(
            ParamField("function", "f(x)", FIELD_FUNCTION, "x^2 - 2"),
            ParamField("x0", "x0", FIELD_NUMBER, "1"),
            _TOL,
            _MAX_ITER,
        ),
    ),
    "fixed_point": MethodInfo(
        key="fixed_point",
        name="Метод простої ітерації",
        method_class=FixedPointMethod,
        fields=(
            ParamField("function", "g(x)", FIELD_FUNCTION, "cos(x)"),
            ParamField("x0", "x0", FIELD_NUMBER, "0.5"),
            _TOL,
            _MAX_ITER,
        ),
    ),
    "jacobi": MethodInfo(
        key="jacobi",
        name="Метод Якобі",
        method_class=JacobiMethod,
        fields=_LINEAR_FIELDS,
    ),
    "gauss_seidel": MethodInfo(
        key="gauss_seidel",
        name="Метод Гаусса–Зейделя",
        method_class=GaussSeidelMethod,
        fields=_LINEAR_FIELDS,
    ),
    "lagrange": MethodInfo(
        key="lagrange",
        name="Інтерполяція Лагранжа",
        method_class=LagrangeInterpolation,
        fields=(
            ParamField("x_points", "Вузли x_i", FIELD_VECTOR, "0 1 2"),
            ParamField("y_points", "Значення y_i", FIELD_VECTOR, "1 2 5"),
            ParamField("x_eval", "x для обчислення", FIELD_NUMBER, "1.5"),
        ),
        plot_field="partial_sum",
    ),
    "differentiation": MethodInfo(
        key="differentiation",
        name="Чисельне диференціювання",
        method_class=NumericalDifferentiation,
        fields=(
            ParamField("function", "f(x)", FIELD_FUNCTION, "sin(x)"),
            ParamField("x", "x", FIELD_NUMBER, "1"),
            ParamField("h", "Крок h", FIELD_NUMBER, "0.01"),
            ParamField("method", "Схема", FIELD_CHOICE, "central", SCHEMES),
        ),
        plot_field=None,
    ),
    "integration": MethodInfo(
        key="integration",
        name="Чисельне інтегрування",
        method_class=NumericalIntegration,
        fields=(
            ParamField("function", "f(x)", FIELD_FUNCTION, "x^2"),
            ParamField("a", "a", FIELD_NUMBER, "0"),
            ParamField("b", "b", FIELD_NUMBER, "1"),
            ParamField("n", "Підвідрізків n", FIELD_INT, "100"),
        ),
        plot_field="partial_sum",
    ),
}


def get_method_info(method_key: str) -> MethodInfo:
    try:
        return METHODS[method_key]
    except KeyError:
        raise ValidationError(
            f"Невідомий метод: '{method_key}'. Доступні: {', '.join(METHODS)}"
        ) from None


def create_method(
    method_key: str,
    options: Optional[Dict[str, Any]] = None,
) -> NumericalMethod:
    """
    Створити відповідний NumericalMethod по ключу.

    options:
        Налаштування конкретного методу (derivative_step, divergence_threshold,
        diagonal_tolerance, verify_tolerance, step_ladder, ...).
    """
    method_info = get_method_info(method_key)
    return method_info.method_class(options=options)


def run_method(
    method_key: str,
    params: Any,
    log: Optional[Logger] = None,
    callback: Optional[IterationCallback] = None,
    options: Optional[Dict[str, Any]] = None,
) -> MethodResult:
    """Створити метод і одразу виконати його з параметрами params."""
    return create_method(method_key, options).run(params, log=log, callback=callback)


__all__ = [
    "FIELD_FUNCTION",
    "FIELD_NUMBER",
    "FIELD_INT",
    "FIELD_VECTOR",
    "FIELD_MATRIX",
    "FIELD_CHOICE",
    "ParamField",
    "MethodInfo",
    "METHODS",
    "get_method_info",
    "create_method",
    "run_method",
]
