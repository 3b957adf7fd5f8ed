"""
lagrange.py

Інтерполяційний поліном Лагранжа.

    P(x) = Σ_i y_i · L_i(x),
    L_i(x) = Π_{j≠i} (x - x_j) / (x_i - x_j)

Після обчислення P(x_eval) поліном перевіряється у всіх вузлах:
|P(x_i) - y_i| має бути не більше 1e-10 (інакше попередження).
Точка поза [min x_i, max x_i] означає екстраполяцію (попередження).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

import numpy as np

from .errors import StabilityWarning, ValidationError
from .iteration_result import STOPPED_BY_COMPLETED, MethodResult
from .method_base import NumericalMethod, RunContext, require_number, require_vector


@dataclass(frozen=True)
class LagrangeParams:
    x_points: Sequence[float]
    y_points: Sequence[float]
    x_eval: float


def basis_polynomial(x_points: np.ndarray, i: int, x: float) -> float:
    """L_i(x) для вузлів x_points."""
    others = np.delete(x_points, i)
    return float(np.prod((x - others) / (x_points[i] - others)))


def interpolate(x_points: Sequence[float], y_points: Sequence[float], x: float) -> float:
    """P(x) без трасування."""
    xs = np.asarray(x_points, dtype=float)
    ys = np.asarray(y_points, dtype=float)
    return float(sum(ys[i] * basis_polynomial(xs, i, x) for i in range(len(xs))))


def polynomial_expression(x_points: Sequence[float], y_points: Sequence[float]) -> str:
    """
    Текстова форма Лагранжа, наприклад:
        1.0000 * (x - 1) / -1.0000 * (x - 2) / -2.0000 + 2.0000 * ...
    Доданки з |y_i| < 1e-10 пропускаються.
    """
    terms: List[str] = []
    for i, (xi, yi) in enumerate(zip(x_points, y_points)):
        if abs(yi) < 1e-10:
            continue
        factors = [
            f"(x - {xj:g}) / {xi - xj:.4f}"
            for j, xj in enumerate(x_points)
            if j != i
        ]
        terms.append(" * ".join([f"{yi:.4f}"] + factors))
    if not terms:
        return "0"
    return " + ".join(terms).replace("+ -", "- ")


class LagrangeInterpolation(NumericalMethod):
    """
    Інтерполяція Лагранжа в точці x_eval.

    Налаштування (options):
        verify_tolerance : допустима похибка P(x_i) - y_i у вузлах (default: 1e-10)
    """

    params_type = LagrangeParams
    default_name = "Lagrange interpolation"

    def _validate_impl(self, params: LagrangeParams) -> None:
        xs = require_vector(params.x_points, "xPoints")
        ys = require_vector(params.y_points, "yPoints")

        if len(xs) != len(ys):
            raise ValidationError(
                f"xPoints та yPoints повинні мати однакову довжину ({len(xs)} != {len(ys)})"
            )
        if len(xs) < 2:
            raise ValidationError("Для інтерполяції потрібно щонайменше 2 точки")
        if len(set(xs)) != len(xs):
            raise ValidationError("Значення x не повинні повторюватися")

        require_number(params.x_eval, "xEval")

    def _check_stability(self, params: LagrangeParams, ctx: RunContext) -> None:
        xs = require_vector(params.x_points, "xPoints")
        x_eval = float(params.x_eval)
        lo, hi = min(xs), max(xs)
        if x_eval < lo or x_eval > hi:
            ctx.warn(
                f"x = {x_eval} поза інтервалом [{lo}, {hi}]: виконується "
                f"екстраполяція, результат може бути менш надійним",
                StabilityWarning,
            )

    def _run_impl(self, params: LagrangeParams, ctx: RunContext) -> MethodResult:
        verify_tol: float = float(self.options.get("verify_tolerance", 1e-10))

        xs_list = require_vector(params.x_points, "xPoints")
        ys_list = require_vector(params.y_points, "yPoints")
        xs = np.asarray(xs_list, dtype=float)
        ys = np.asarray(ys_list, dtype=float)
        x_eval = float(params.x_eval)
        n = len(xs)

        ctx.log.info(f"Кількість точок: {n}")
        for xi, yi in zip(xs_list, ys_list):
            ctx.log.info(f"  ({xi}, {yi})")
        ctx.log.info(f"Точка обчислення: x = {x_eval}")

        total = 0.0
        for i in range(n):
            numerator = 1.0
            denominator = 1.0
            factors: List[str] = []
            for j in range(n):
                if j == i:
                    continue
                numerator *= x_eval - xs_list[j]
                denominator *= xs_list[i] - xs_list[j]
                factors.append(f"({x_eval:g} - {xs_list[j]:g})")

            li = basis_polynomial(xs, i, x_eval)
            term = ys_list[i] * li
            total += term

            ctx.record(
                i=i,
                x_i=xs_list[i],
                y_i=ys_list[i],
                L_i=li,
                numerator=numerator,
                denominator=denominator,
                term=term,
                partial_sum=total,
                basis_expression=" × ".join(factors) + f" / {denominator:.4f}",
            )
            ctx.log.info(
                f"Доданок {i}: L_{i}({x_eval}) = {li:.6f}, y_{i}·L_{i} = {term:.6f}"
            )

        polynomial = polynomial_expression(xs_list, ys_list)
        ctx.log.info(f"Поліном: P(x) = {polynomial}")

        ctx.log.info("Перевірка інтерполяції у вузлах:")
        max_error = 0.0
        for i in range(n):
            p_xi = interpolate(xs, ys, xs_list[i])
            err = abs(p_xi - ys_list[i])
            max_error = max(max_error, err)
            ctx.log.info(f"  P({xs_list[i]}) = {p_xi:.6f}, y_{i} = {ys_list[i]}, похибка = {err:.2e}")

        if max_error > verify_tol:
            ctx.warn(
                f"Максимальна похибка інтерполяції у вузлах: {max_error:.2e}",
                StabilityWarning,
            )

        ctx.log.success(f"Інтерпольоване значення: P({x_eval}) = {total:.8f}")

        return ctx.finish(
            total,
            converged=True,
            stopped_by=STOPPED_BY_COMPLETED,
            details={
                "polynomial": polynomial,
                "max_verification_error": max_error,
            },
        )


__all__ = [
    "LagrangeParams",
    "basis_polynomial",
    "interpolate",
    "polynomial_expression",
    "LagrangeInterpolation",
]
