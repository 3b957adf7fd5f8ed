"""
results_summary.py

Зведена таблиця результатів кількох запусків (наприклад, Якобі проти
Гаусса–Зейделя на одній системі).

Працює поверх MethodResult:
    - method_name
    - value
    - n_iter
    - converged
    - stopped_by
    - details["func_evals"], details["residual"] (якщо є)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .iteration_result import MethodResult


@dataclass
class ResultsSummary:
    """
    Зведення результатів роботи кількох методів.

    Приклад використання:
        summary = ResultsSummary()
        summary.add_run(jacobi_result)
        summary.add_run(seidel_result)
        rows = summary.as_rows()  # для GUI / pandas / CSV
    """
    runs: List[MethodResult] = field(default_factory=list)

    def add_run(self, run: MethodResult) -> None:
        """Додати результат одного методу до зведення."""
        self.runs.append(run)

    # ------------------------------------------------------------------
    # Перетворення в "табличний" вигляд
    # ------------------------------------------------------------------

    def as_rows(self) -> List[Dict[str, Any]]:
        """
        Повернути список dict-рядків, придатних для:
            - створення pandas.DataFrame,
            - виводу в GUI-таблицю.

        Поля рядка:
            method, value, n_iter, converged, stopped_by,
            func_evals, residual, warnings
        """
        rows: List[Dict[str, Any]] = []

        for run in self.runs:
            value = list(run.value) if isinstance(run.value, tuple) else run.value
            rows.append(
                {
                    "method": run.method_name,
                    "value": value,
                    "n_iter": run.n_iter,
                    "converged": run.converged,
                    "stopped_by": run.stopped_by,
                    "func_evals": run.details.get("func_evals"),
                    "residual": run.details.get("residual"),
                    "warnings": len(run.warnings),
                }
            )

        return rows

    # ------------------------------------------------------------------
    # Вибір "найкращого" методу
    # ------------------------------------------------------------------

    def best_by_iterations(self) -> Optional[MethodResult]:
        """
        Повернути збіжний run з найменшою кількістю ітерацій.
        Якщо збіжних запусків немає, повертає None.
        """
        best_run = None

        for run in self.runs:
            if not run.converged:
                continue
            if best_run is None or run.n_iter < best_run.n_iter:
                best_run = run

        return best_run

    # ------------------------------------------------------------------
    # Опційно: повернути pandas.DataFrame
    # ------------------------------------------------------------------

    def to_dataframe(self):
        """
        Повернути pandas.DataFrame зі зведеною таблицею.

        Вимога: встановлений пакет pandas.
        """
        try:
            import pandas as pd  # type: ignore
        except ImportError as exc:  # pragma: no cover
            raise RuntimeError(
                "Для використання ResultsSummary.to_dataframe() "
                "потрібно встановити пакет 'pandas'."
            ) from exc

        return pd.DataFrame(self.as_rows())


__all__ = ["ResultsSummary"]
