"""
newton.py

Метод Ньютона–Рафсона для пошуку кореня f(x) = 0 як стратегія NumericalMethod.

Ідея:
    x_{k+1} = x_k - f(x_k) / f'(x_k),
    де f'(x_k) наближується центральною різницею з кроком h = 1e-4.

Зупинка:
    |x_{k+1} - x_k| < tol  або  |f(x_k)| < tol.

Фатальні ситуації:
    - |f'(x_k)| < 1e-10             -> EvaluationError (похідна замала);
    - |x_{k+1}| > 1e10 або NaN/∞    -> DivergenceError.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from .differentiation import central_derivative
from .errors import DivergenceError, EvaluationError, NonConvergenceWarning
from .expression import compile_expression
from .iteration_result import STOPPED_BY_MAX_ITER, STOPPED_BY_TOLERANCE, MethodResult
from .method_base import (
    NumericalMethod,
    RunContext,
    require_function_text,
    require_iteration_budget,
    require_number,
)


@dataclass(frozen=True)
class NewtonParams:
    function: str
    x0: float
    tolerance: float
    max_iterations: int


class NewtonMethod(NumericalMethod):
    """
    Метод Ньютона–Рафсона з чисельною похідною.

    Налаштування (options):
        derivative_step      : крок h центральної різниці (default: 1e-4)
        min_derivative       : поріг |f'(x)|, нижче якого метод зупиняється
                               з помилкою (default: 1e-10)
        divergence_threshold : поріг |x_{k+1}| для виявлення розбіжності
                               (default: 1e10)
    """

    params_type = NewtonParams
    default_name = "Newton-Raphson"

    def _validate_impl(self, params: NewtonParams) -> None:
        require_function_text(params.function)
        require_number(params.x0, "x0")
        require_iteration_budget(params.tolerance, params.max_iterations)

    def _run_impl(self, params: NewtonParams, ctx: RunContext) -> MethodResult:
        h: float = float(self.options.get("derivative_step", 1e-4))
        min_derivative: float = float(self.options.get("min_derivative", 1e-10))
        threshold: float = float(self.options.get("divergence_threshold", 1e10))

        f = ctx.counted(compile_expression(params.function))
        tol = float(params.tolerance)
        x = float(params.x0)

        ctx.log.info(f"Початкове наближення: x0 = {x}")
        ctx.log.info(f"Функція f(x) = {params.function}")

        for k in range(1, params.max_iterations + 1):
            fx = f(x)
            dfx = central_derivative(f, x, h)

            if abs(dfx) < min_derivative:
                raise EvaluationError(
                    f"Похідна замала в точці x = {x}: f'(x) = {dfx}; "
                    f"метод Ньютона не може продовжити"
                )

            x_next = x - fx / dfx
            error = abs(x_next - x)

            ctx.record(x=x, fx=fx, dfx=dfx, x_next=x_next, error=error)
            ctx.log.info(
                f"Ітерація {k}: x = {x}, f(x) = {fx}, f'(x) = {dfx}, "
                f"x_next = {x_next}, похибка = {error}"
            )

            if error < tol or abs(fx) < tol:
                ctx.log.success(f"Збіжність досягнута за {k} ітерацій")
                ctx.log.success(f"Знайдений корінь: {x_next}")
                return ctx.finish(x_next, converged=True, stopped_by=STOPPED_BY_TOLERANCE)

            if not math.isfinite(x_next) or abs(x_next) > threshold:
                raise DivergenceError(
                    f"Метод розбігається з початковим наближенням x0 = {params.x0} "
                    f"(x = {x_next} на ітерації {k})",
                    iteration=k,
                    value=x_next,
                )

            x = x_next

        ctx.warn(
            "Досягнуто максимальної кількості ітерацій без збіжності",
            NonConvergenceWarning,
        )
        return ctx.finish(x, converged=False, stopped_by=STOPPED_BY_MAX_ITER)


__all__ = [
    "NewtonParams",
    "NewtonMethod",
]
