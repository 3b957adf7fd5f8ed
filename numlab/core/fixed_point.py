"""
fixed_point.py

Метод простої ітерації (нерухомої точки) для рівняння x = g(x).

    x_{k+1} = g(x_k)

Зупинка: |x_{k+1} - x_k| < tol.
Умова стискання не перевіряється; розбіжність ловиться за величиною ітерату.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from .errors import DivergenceError, NonConvergenceWarning
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
class FixedPointParams:
    function: str
    x0: float
    tolerance: float
    max_iterations: int


class FixedPointMethod(NumericalMethod):
    """
    Метод простої ітерації x = g(x).

    Налаштування (options):
        divergence_threshold : поріг |x_{k+1}| для виявлення розбіжності
                               (default: 1e10)
    """

    params_type = FixedPointParams
    default_name = "Fixed-point iteration"

    def _validate_impl(self, params: FixedPointParams) -> None:
        require_function_text(params.function)
        require_number(params.x0, "x0")
        require_iteration_budget(params.tolerance, params.max_iterations)

    def _run_impl(self, params: FixedPointParams, ctx: RunContext) -> MethodResult:
        threshold: float = float(self.options.get("divergence_threshold", 1e10))

        # NaN/∞ від g(x) перевіряються нижче як розбіжність
        g = ctx.counted(compile_expression(params.function, allow_non_finite=True))
        tol = float(params.tolerance)
        x = float(params.x0)

        ctx.log.info(f"Початкове наближення: x0 = {x}")
        ctx.log.info(f"Функція g(x) = {params.function}")

        for k in range(1, params.max_iterations + 1):
            x_next = g(x)
            error = abs(x_next - x)

            ctx.record(x=x, gx=x_next, error=error)
            ctx.log.info(f"Ітерація {k}: x = {x}, g(x) = {x_next}, похибка = {error}")

            if error < tol:
                ctx.log.success(f"Збіжність досягнута за {k} ітерацій")
                ctx.log.success(f"Нерухома точка: {x_next}")
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
    "FixedPointParams",
    "FixedPointMethod",
]
