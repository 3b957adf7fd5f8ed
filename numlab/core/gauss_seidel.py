"""
gauss_seidel.py

Метод Гаусса–Зейделя для A·x = b.

    x_i^{(k+1)} = (b_i - Σ_{j<i} a_ij · x_j^{(k+1)} - Σ_{j>i} a_ij · x_j^{(k)}) / a_ii

Оновлення на місці: для j < i вже використовуються нові значення.
Зупинка: max-норма зміни < tol АБО відносна похибка ||Δx|| / ||x|| < tol.
"""

from __future__ import annotations

import numpy as np

from .linear_base import LinearIterativeMethod, relative_error


class GaussSeidelMethod(LinearIterativeMethod):
    default_name = "Gauss-Seidel"

    def _sweep(self, A: np.ndarray, b: np.ndarray, x: np.ndarray) -> np.ndarray:
        n = A.shape[0]
        for i in range(n):
            s = float(A[i] @ x) - A[i, i] * x[i]
            x[i] = (b[i] - s) / A[i, i]
        return x

    def _extra_values(self, x_new: np.ndarray, x_old: np.ndarray) -> dict:
        return {"relative_error": relative_error(x_new, x_old)}

    def _converged(self, values: dict, tol: float) -> bool:
        return values["error"] < tol or values["relative_error"] < tol


__all__ = ["GaussSeidelMethod"]
