"""
jacobi.py

Метод Якобі для A·x = b.

    x_i^{(k+1)} = (b_i - Σ_{j≠i} a_ij · x_j^{(k)}) / a_ii

Увесь новий вектор обчислюється з попереднього ітерату і підміняється
в кінці проходу. Зупинка: max|x^{(k+1)} - x^{(k)}| < tol.
"""

from __future__ import annotations

import numpy as np

from .linear_base import LinearIterativeMethod


class JacobiMethod(LinearIterativeMethod):
    default_name = "Jacobi"

    def _sweep(self, A: np.ndarray, b: np.ndarray, x: np.ndarray) -> np.ndarray:
        diag = np.diag(A)
        off_diag = A @ x - diag * x
        return (b - off_diag) / diag


__all__ = ["JacobiMethod"]
