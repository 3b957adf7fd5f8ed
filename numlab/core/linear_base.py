"""
linear_base.py

Спільна частина ітераційних методів для систем лінійних рівнянь A·x = b
(Якобі, Гаусс–Зейдель).

Що тут:
    - LinearSystemParams        : параметри (matrix, vector, initial_guess, ...);
    - LinearIterativeMethod     : базовий клас зі спільною валідацією,
                                  попередженнями про діагональну домінантність,
                                  обчисленням похибки/нев'язки та захистом
                                  від розбіжності;
    - max_norm_error, residual_norm, relative_error : допоміжні норми.

Конкретний метод реалізує лише _sweep(A, b, x) -> x_new.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, List, Sequence, Tuple

import numpy as np

from .errors import DivergenceError, NonConvergenceWarning, StabilityWarning, ValidationError
from .iteration_result import STOPPED_BY_MAX_ITER, STOPPED_BY_TOLERANCE, MethodResult
from .method_base import (
    NumericalMethod,
    RunContext,
    require_iteration_budget,
    require_vector,
)


@dataclass(frozen=True)
class LinearSystemParams:
    matrix: Sequence[Sequence[float]]
    vector: Sequence[float]
    initial_guess: Sequence[float]
    tolerance: float
    max_iterations: int


# ---------------------------------------------------------------------------
# Норми
# ---------------------------------------------------------------------------

def max_norm_error(x_new: np.ndarray, x_old: np.ndarray) -> float:
    """max_i |x_new[i] - x_old[i]|"""
    return float(np.max(np.abs(x_new - x_old)))


def residual_norm(A: np.ndarray, x: np.ndarray, b: np.ndarray) -> float:
    """||A·x - b||_2"""
    return float(np.linalg.norm(A @ x - b))


def relative_error(x_new: np.ndarray, x_old: np.ndarray) -> float:
    """
    ||x_new - x_old||_2 / ||x_new||_2.

    0, якщо обидві норми нульові; ∞, якщо нульова лише ||x_new||.
    """
    diff = float(np.linalg.norm(x_new - x_old))
    norm = float(np.linalg.norm(x_new))
    if norm == 0.0:
        return 0.0 if diff == 0.0 else math.inf
    return diff / norm


def _as_tuple(x: np.ndarray) -> Tuple[float, ...]:
    return tuple(float(v) for v in x)


def _format_vector(x: Sequence[float]) -> str:
    return "[" + ", ".join(f"{v:.6f}" for v in x) + "]"


# ---------------------------------------------------------------------------
# Базовий клас
# ---------------------------------------------------------------------------

class LinearIterativeMethod(NumericalMethod):
    """
    Базовий клас ітераційних методів для A·x = b.

    Налаштування (options):
        diagonal_tolerance   : мінімальний |a_ii| (default: 1e-10)
        divergence_threshold : поріг max|x_i| для виявлення розбіжності
                               (default: 1e10)
    """

    params_type = LinearSystemParams

    def _validate_impl(self, params: LinearSystemParams) -> None:
        A = self._matrix(params.matrix)
        n = len(A)

        b = require_vector(params.vector, "vector")
        if len(b) != n:
            raise ValidationError(
                f"Вектор вільних членів повинен мати розмір {n}, отримано {len(b)}"
            )

        x0 = require_vector(params.initial_guess, "initialGuess")
        if len(x0) != n:
            raise ValidationError(
                f"Початковий вектор повинен мати розмір {n}, отримано {len(x0)}"
            )

        require_iteration_budget(params.tolerance, params.max_iterations)

        diag_tol = float(self.options.get("diagonal_tolerance", 1e-10))
        for i in range(n):
            if abs(A[i][i]) < diag_tol:
                raise ValidationError(
                    f"Діагональний елемент ({i + 1},{i + 1}) нульовий або надто малий"
                )

    @staticmethod
    def _matrix(matrix: Any) -> List[List[float]]:
        if hasattr(matrix, "tolist"):
            matrix = matrix.tolist()
        if isinstance(matrix, (str, bytes)) or not isinstance(matrix, Sequence):
            raise ValidationError("Матриця коефіцієнтів повинна бути списком рядків")

        n = len(matrix)
        if n == 0:
            raise ValidationError("Матриця коефіцієнтів не може бути порожньою")

        rows = [require_vector(row, f"matrix[{i}]") for i, row in enumerate(matrix)]
        for row in rows:
            if len(row) != n:
                raise ValidationError("Матриця повинна бути квадратною")
        return rows

    def _check_stability(self, params: LinearSystemParams, ctx: RunContext) -> None:
        A = np.asarray(self._matrix(params.matrix), dtype=float)
        for i in range(A.shape[0]):
            off_diag = float(np.sum(np.abs(A[i]))) - abs(float(A[i, i]))
            if abs(float(A[i, i])) <= off_diag:
                ctx.warn(
                    f"Рядок {i + 1}: матриця не є строго діагонально домінантною, "
                    f"метод може не збігатися",
                    StabilityWarning,
                )

    # ------------------------------------------------------------------
    # Цикл
    # ------------------------------------------------------------------

    def _run_impl(self, params: LinearSystemParams, ctx: RunContext) -> MethodResult:
        threshold: float = float(self.options.get("divergence_threshold", 1e10))

        A = np.asarray(self._matrix(params.matrix), dtype=float)
        b = np.asarray(require_vector(params.vector, "vector"), dtype=float)
        x = np.asarray(require_vector(params.initial_guess, "initialGuess"), dtype=float)
        tol = float(params.tolerance)
        n = A.shape[0]

        ctx.log.info(f"Система {n}x{n} рівнянь")
        ctx.log.info(f"Початковий вектор: {_format_vector(x)}")

        for k in range(1, params.max_iterations + 1):
            x_old = x
            x = self._sweep(A, b, x_old.copy())

            error = max_norm_error(x, x_old)
            residual = residual_norm(A, x, b)
            values = {
                "x_old": _as_tuple(x_old),
                "x_new": _as_tuple(x),
                "error": error,
                "residual": residual,
            }
            values.update(self._extra_values(x, x_old))
            ctx.record(**values)

            ctx.log.info(f"Ітерація {k}: x = {_format_vector(x)}")
            ctx.log.info(f"  похибка = {error:.8f}, нев'язка = {residual:.8f}")

            if self._converged(values, tol):
                ctx.log.success(f"Збіжність досягнута за {k} ітерацій")
                ctx.log.success(f"Розв'язок: {_format_vector(x)}")
                return ctx.finish(
                    _as_tuple(x),
                    converged=True,
                    stopped_by=STOPPED_BY_TOLERANCE,
                    details={"residual": residual},
                )

            if not np.all(np.isfinite(x)) or float(np.max(np.abs(x))) > threshold:
                raise DivergenceError(
                    f"Ітерації розбігаються на кроці {k}: x = {_format_vector(x)}",
                    iteration=k,
                    value=float(np.max(np.abs(x))),
                )

        ctx.warn(
            "Досягнуто максимальної кількості ітерацій без збіжності",
            NonConvergenceWarning,
        )
        ctx.log.warning(f"Найкраще наближення: {_format_vector(x)}")
        return ctx.finish(
            _as_tuple(x),
            converged=False,
            stopped_by=STOPPED_BY_MAX_ITER,
            details={"residual": residual_norm(A, x, b)},
        )

    # ------------------------------------------------------------------
    # Хуки
    # ------------------------------------------------------------------

    def _sweep(self, A: np.ndarray, b: np.ndarray, x: np.ndarray) -> np.ndarray:
        """Один прохід методу; x можна змінювати на місці."""
        raise NotImplementedError

    def _extra_values(self, x_new: np.ndarray, x_old: np.ndarray) -> dict:
        return {}

    def _converged(self, values: dict, tol: float) -> bool:
        return values["error"] < tol


__all__ = [
    "LinearSystemParams",
    "max_norm_error",
    "residual_norm",
    "relative_error",
    "LinearIterativeMethod",
]
