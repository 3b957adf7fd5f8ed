"""
app.py

Контролер для GUI-застосунку numlab.

Зв'язує:
    - ui.MainWindow (PyQt6)
    - core.registry (створення методу за ключем)
    - core.logger.EventLog (журнал; панель журналу - підписник)
    - ui.parsing (текст полів форми -> параметри)

Функціонал:
    - реагує на сигнал MainWindow.methodRequested(MethodConfig);
    - розбирає параметри та запускає обраний метод;
    - у callback додає рядки в таблицю ітерацій;
    - після завершення оновлює графіки та підсумок;
    - у режимі "Порівняти Якобі та Гаусса–Зейделя" показує зведену таблицю.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from PyQt6.QtWidgets import QApplication

from numlab.core.errors import NumericalMethodError
from numlab.core.expression import compile_expression
from numlab.core.iteration_result import MethodResult
from numlab.core.lagrange import interpolate
from numlab.core.logger import EventLog
from numlab.core.registry import MethodInfo, create_method, get_method_info
from numlab.core.results_summary import ResultsSummary
from numlab.ui.control_panel import LINEAR_METHOD_KEYS, MethodConfig
from numlab.ui.dialogs import show_error, show_summary
from numlab.ui.main_window import MainWindow
from numlab.ui.parsing import build_params
from numlab.ui.styles import apply_app_style

logger = logging.getLogger(__name__)

FunctionPlot = Tuple[
    Callable[[float], float],
    Tuple[float, float],
    Sequence[Tuple[float, float]],
    str,
]


def _padded(values: Sequence[float], pad: float = 0.25) -> Tuple[float, float]:
    lo, hi = min(values), max(values)
    span = max(hi - lo, 1.0)
    return lo - pad * span, hi + pad * span


def function_plot_args(
    method_key: str,
    params: Dict[str, Any],
    result: MethodResult,
) -> Optional[FunctionPlot]:
    """
    Що малювати на вкладці "Функція" для результату методу:
    (функція, відрізок, позначені точки, заголовок) або None.
    """
    records = result.iterations

    if method_key == "bisection":
        f = compile_expression(params["function"])
        points = [(rec["c"], rec["fc"]) for rec in records]
        return f, (params["a"], params["b"]), points, f"f(x) = {params['function']}"

    if method_key == "newton":
        f = compile_expression(params["function"])
        points = [(rec["x"], rec["fx"]) for rec in records]
        xs = [p[0] for p in points] + [float(result.value)]
        return f, _padded(xs), points, f"f(x) = {params['function']}"

    if method_key == "fixed_point":
        g = compile_expression(params["function"])
        points = [(rec["x"], rec["gx"]) for rec in records]
        xs = [p[0] for p in points] + [float(result.value)]
        return g, _padded(xs), points, f"g(x) = {params['function']}"

    if method_key == "differentiation":
        f = compile_expression(params["function"])
        x, h = params["x"], params["h"]
        span = max(10 * h, 1.0)
        return f, (x - span, x + span), [(x, f(x))], f"f(x) = {params['function']}"

    if method_key == "integration":
        f = compile_expression(params["function"])
        return f, (params["a"], params["b"]), [], f"f(x) = {params['function']}"

    if method_key == "lagrange":
        xs, ys = params["x_points"], params["y_points"]

        def poly(x: float) -> float:
            return interpolate(xs, ys, x)

        points: List[Tuple[float, float]] = list(zip(xs, ys))
        points.append((params["x_eval"], float(result.value)))
        return poly, _padded(list(xs) + [params["x_eval"]], 0.1), points, "P(x)"

    return None


class NumlabController:
    """
    Контролер: одна точка, де GUI зустрічається з обчислювальним ядром.
    """

    def __init__(self, window: MainWindow, log: Optional[EventLog] = None) -> None:
        self.window = window
        self.log = log if log is not None else EventLog()
        self.log.subscribe(self.window.append_log_event)

        self.window.methodRequested.connect(self.on_method_requested)

    # ------------------------------------------------------------------
    # Обробник сигналу від GUI
    # ------------------------------------------------------------------

    def on_method_requested(self, cfg: MethodConfig) -> None:
        """Головний вхід: натиснута кнопка "Запустити"."""
        try:
            method_info = get_method_info(cfg.method_key)
            params = build_params(method_info, cfg.field_texts)
        except NumericalMethodError as exc:
            self._report_error("Некоректні параметри", exc)
            return

        if cfg.compare_linear:
            self._run_linear_comparison(method_info, params)
        else:
            self._run_single_method(method_info, params)

    # ------------------------------------------------------------------
    # Запуск одного методу
    # ------------------------------------------------------------------

    def _run_single_method(self, method_info: MethodInfo, params: Dict[str, Any]) -> None:
        method = create_method(method_info.key)

        try:
            result = method.run(params, log=self.log, callback=self.window.add_record)
        except NumericalMethodError as exc:
            self._report_error(f"Помилка методу: {method_info.name}", exc)
            return
        except Exception as exc:  # noqa: BLE001 (межа контролера)
            logger.exception("Непередбачена помилка під час %s", method_info.key)
            self._report_error(f"Непередбачена помилка: {method_info.name}", exc)
            return

        self._show_result(method_info, params, result)

    # ------------------------------------------------------------------
    # Порівняння Якобі та Гаусса–Зейделя
    # ------------------------------------------------------------------

    def _run_linear_comparison(
        self,
        method_info: MethodInfo,
        params: Dict[str, Any],
    ) -> None:
        summary = ResultsSummary()
        shown: Optional[MethodResult] = None

        for key in LINEAR_METHOD_KEYS:
            try:
                result = create_method(key).run(params, log=self.log)
            except NumericalMethodError as exc:
                self._report_error(f"Помилка методу: {get_method_info(key).name}", exc)
                return

            summary.add_run(result)
            if key == method_info.key:
                shown = result

        if shown is not None:
            # у таблиці показуємо трасу обраного методу
            self.window.trace_table.populate(shown.iterations)
            self._show_result(method_info, params, shown)
        show_summary(self.window, summary)

    # ------------------------------------------------------------------
    # Вивід
    # ------------------------------------------------------------------

    def _show_result(
        self,
        method_info: MethodInfo,
        params: Dict[str, Any],
        result: MethodResult,
    ) -> None:
        self.window.show_result(result)
        self.window.plot_view.plot_convergence(result.iterations, method_info.plot_field)

        plot = function_plot_args(method_info.key, params, result)
        if plot is not None:
            func, interval, points, title = plot
            self.window.plot_view.plot_function(func, interval, points, title)

        state = "збіжність" if result.converged else "без збіжності"
        self.window.statusBar().showMessage(
            f"{result.method_name}: {state}, ітерацій: {result.n_iter}"
        )

    def _report_error(self, title: str, exc: Exception) -> None:
        show_error(self.window, str(exc), title=title)
        self.window.statusBar().showMessage(f"Помилка: {exc}")
        self.window.show_result(None)


# ---------------------------------------------------------------------------
# Точка входу
# ---------------------------------------------------------------------------

def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = QApplication(sys.argv)
    apply_app_style(app)

    window = MainWindow()
    _controller = NumlabController(window)

    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
