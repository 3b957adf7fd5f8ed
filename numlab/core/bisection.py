"""
bisection.py

Метод бісекції (ділення відрізка навпіл) як стратегія NumericalMethod.

Ідея:
    c_k = (a_k + b_k) / 2,
    якщо f(a_k) * f(c_k) < 0  ->  [a_k, c_k],
    інакше                    ->  [c_k, b_k].

Зупинка: |f(c_k)| < tol або (b_k - a_k) / 2 < tol.
"""

from __future__ import annotations

from dataclasses import dataclass

from .errors import NonConvergenceWarning, ValidationError
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
class BisectionParams:
    function: str
    a: float
    b: float
    tolerance: float
    max_iterations: int


class BisectionMethod(NumericalMethod):
    """
    Метод бісекції.

    Вимоги до параметрів:
        - a < b;
        - f(a) * f(b) <= 0 (знаки на кінцях різні або один з них корінь).
    """

    params_type = BisectionParams
    default_name = "Bisection"

    def _validate_impl(self, params: BisectionParams) -> None:
        require_function_text(params.function)
        a = require_number(params.a, "a")
        b = require_number(params.b, "b")
        require_iteration_budget(params.tolerance, params.max_iterations)

        if a >= b:
            raise ValidationError("Ліва межа a повинна бути меншою за праву межу b")

        f = compile_expression(params.function)
        if f(a) * f(b) > 0:
            raise ValidationError(
                "Знаки f(a) та f(b) повинні відрізнятися (signs must differ)"
            )

    def _run_impl(self, params: BisectionParams, ctx: RunContext) -> MethodResult:
        f = ctx.counted(compile_expression(params.function))
        tol = float(params.tolerance)

        a = float(params.a)
        b = float(params.b)
        fa = f(a)
        fb = f(b)
        ctx.log.info(f"f({a}) = {fa}, f({b}) = {fb}")

        for k in range(1, params.max_iterations + 1):
            c = (a + b) / 2.0
            fc = f(c)
            error = abs(b - a) / 2.0

            ctx.record(a=a, b=b, c=c, fa=fa, fb=fb, fc=fc, error=error)
            ctx.log.info(f"Ітерація {k}: c = {c}, f(c) = {fc}, похибка = {error}")

            if abs(fc) < tol or error < tol:
                ctx.log.success(f"Збіжність досягнута за {k} ітерацій")
                ctx.log.success(f"Знайдений корінь: {c}")
                return ctx.finish(c, converged=True, stopped_by=STOPPED_BY_TOLERANCE)

            # Зберігаємо зміну знака на новому відрізку
            if fa * fc < 0:
                b, fb = c, fc
            else:
                a, fa = c, fc

        ctx.warn(
            "Досягнуто максимальної кількості ітерацій без збіжності",
            NonConvergenceWarning,
        )
        return ctx.finish(
            (a + b) / 2.0,
            converged=False,
            stopped_by=STOPPED_BY_MAX_ITER,
        )


__all__ = [
    "BisectionParams",
    "BisectionMethod",
]
