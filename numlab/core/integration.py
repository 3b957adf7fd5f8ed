"""
integration.py

Чисельне інтегрування на [a, b] з n підвідрізками.

Основний результат - складена формула трапецій:
    I ≈ h · Σ w_i · f(x_i),   h = (b - a) / n,
    w_0 = w_n = 1/2, інакше w_i = 1.

Для парного n додатково рахується формула Сімпсона (для порівняння у логах
та в details); повертається завжди значення за трапеціями.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from .errors import ValidationError
from .expression import compile_expression
from .iteration_result import STOPPED_BY_COMPLETED, MethodResult
from .method_base import (
    NumericalMethod,
    RunContext,
    require_function_text,
    require_number,
    require_positive_int,
)


@dataclass(frozen=True)
class IntegrationParams:
    function: str
    a: float
    b: float
    n: int


def simpson_from_values(fx: np.ndarray, h: float) -> Optional[float]:
    """
    Складена формула Сімпсона за вже обчисленими f(x_0..x_n).
    Повертає None, якщо n = len(fx) - 1 непарне.
    """
    n = len(fx) - 1
    if n % 2 != 0:
        return None
    total = fx[0] + fx[-1] + 4.0 * np.sum(fx[1:-1:2]) + 2.0 * np.sum(fx[2:-1:2])
    return float(h / 3.0 * total)


class NumericalIntegration(NumericalMethod):
    """Складені формули трапецій та Сімпсона."""

    params_type = IntegrationParams
    default_name = "Numerical integration"

    def _validate_impl(self, params: IntegrationParams) -> None:
        require_function_text(params.function)
        a = require_number(params.a, "a")
        b = require_number(params.b, "b")
        require_positive_int(params.n, "n")
        if a >= b:
            raise ValidationError("Ліва межа a повинна бути меншою за праву межу b")

    def _run_impl(self, params: IntegrationParams, ctx: RunContext) -> MethodResult:
        f = ctx.counted(compile_expression(params.function))
        a = float(params.a)
        b = float(params.b)
        n = int(params.n)
        h = (b - a) / n

        ctx.log.info(f"Функція: {params.function}")
        ctx.log.info(f"Інтервал: [{a}, {b}], підвідрізків: {n}, крок h = {h}")

        log_every = max(1, n // 10)
        fx = np.empty(n + 1, dtype=float)
        weighted_sum = 0.0

        for i in range(n + 1):
            x = a + i * h
            fx[i] = f(x)
            weight = 0.5 if i in (0, n) else 1.0
            weighted_sum += weight * fx[i]

            ctx.record(
                i=i,
                x=x,
                fx=float(fx[i]),
                weight=weight,
                contribution=weight * float(fx[i]) * h,
                partial_sum=weighted_sum * h,
            )
            if i % log_every == 0:
                ctx.log.info(f"Вузол {i}: x = {x:.4f}, f(x) = {fx[i]:.6f}")

        trapezoid = weighted_sum * h
        details = {"h": h}

        simpson = simpson_from_values(fx, h)
        if simpson is not None:
            difference = abs(trapezoid - simpson)
            details["simpson"] = simpson
            details["difference"] = difference
            ctx.log.info(f"Формула трапецій: {trapezoid}")
            ctx.log.info(f"Формула Сімпсона: {simpson}")
            ctx.log.info(f"Різниця: {difference}")

        ctx.log.success(f"∫[{a}, {b}] {params.function} dx ≈ {trapezoid:.8f}")

        return ctx.finish(
            trapezoid,
            converged=True,
            stopped_by=STOPPED_BY_COMPLETED,
            details=details,
        )


__all__ = [
    "IntegrationParams",
    "simpson_from_values",
    "NumericalIntegration",
]
