"""
plot_view.py

Графіки numlab (matplotlib у Qt):
    - "Збіжність": обране поле траси (похибка, часткова сума) від k;
    - "Функція":   f(x) на відрізку з позначеними точками (ітерати, вузли).

Кожна сторінка має власну панель інструментів matplotlib (масштаб, зсув,
збереження у файл). Сторінки перемикаються списком над графіком.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Sequence, Tuple

import numpy as np
from matplotlib.axes import Axes
from matplotlib.backends.backend_qtagg import FigureCanvasQTAgg as FigureCanvas
from matplotlib.backends.backend_qtagg import NavigationToolbar2QT as NavigationToolbar
from matplotlib.figure import Figure
from PyQt6.QtWidgets import (
    QComboBox,
    QHBoxLayout,
    QLabel,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from numlab.core.errors import EvaluationError
from numlab.core.iteration_result import IterationRecord
from .styles import MARGIN, PALETTE, SPACING

PAGE_CONVERGENCE = "convergence"
PAGE_FUNCTION = "function"

# ключ -> (назва у списку, текст-заглушка)
_PAGES: Dict[str, Tuple[str, str]] = {
    PAGE_CONVERGENCE: ("Збіжність", "Графік збіжності з'явиться після запуску"),
    PAGE_FUNCTION: ("Функція", "Графік функції з'явиться після запуску"),
}


@dataclass
class PlotPage:
    """Одна сторінка: фігура, полотно та осі."""
    figure: Figure
    canvas: FigureCanvas
    axes: Axes

    def reset(self) -> Axes:
        ax = self.axes
        ax.clear()
        ax.set_facecolor(PALETTE.surface_alt)
        ax.tick_params(colors=PALETTE.text_muted, labelsize=9)
        for spine in ax.spines.values():
            spine.set_color(PALETTE.border)
        ax.grid(True, color=PALETTE.border, linestyle=":", linewidth=0.6)
        for text in (ax.title, ax.xaxis.label, ax.yaxis.label):
            text.set_color(PALETTE.text_main)
        return ax

    def message(self, text: str) -> None:
        ax = self.reset()
        ax.grid(False)
        ax.text(
            0.5, 0.5, text,
            transform=ax.transAxes, ha="center", va="center",
            color=PALETTE.text_muted,
        )
        self.canvas.draw_idle()

    def draw(self) -> None:
        self.figure.tight_layout()
        self.canvas.draw_idle()


class PlotView(QWidget):
    """
    Використання (з app.py):
        view.plot_convergence(result.iterations, "error")
        view.plot_function(f, (a, b), points, "f(x) = ...")
    """

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.pages: Dict[str, PlotPage] = {}
        self._keys = list(_PAGES)
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(MARGIN, MARGIN, MARGIN, MARGIN)
        layout.setSpacing(SPACING)

        header = QHBoxLayout()
        header.addWidget(QLabel("Графік:", self))
        self.combo_page = QComboBox(self)
        self.combo_page.addItems([title for title, _ in _PAGES.values()])
        header.addWidget(self.combo_page, stretch=1)
        layout.addLayout(header)

        self.stacked = QStackedWidget(self)
        for key in self._keys:
            self.stacked.addWidget(self._create_page(key))
        layout.addWidget(self.stacked, stretch=1)

        self.combo_page.currentIndexChanged.connect(self.stacked.setCurrentIndex)
        self.show_placeholder()

    def _create_page(self, key: str) -> QWidget:
        figure = Figure(facecolor=PALETTE.surface_alt)
        canvas = FigureCanvas(figure)
        self.pages[key] = PlotPage(figure, canvas, figure.add_subplot(111))

        container = QWidget(self.stacked)
        box = QVBoxLayout(container)
        box.setContentsMargins(0, 0, 0, 0)
        box.addWidget(NavigationToolbar(canvas, container))
        box.addWidget(canvas, stretch=1)
        return container

    def _show_page(self, key: str) -> None:
        self.combo_page.setCurrentIndex(self._keys.index(key))

    # ------------------------------------------------------------------
    # Публічні методи
    # ------------------------------------------------------------------
    def show_placeholder(self) -> None:
        for key, (_, text) in _PAGES.items():
            self.pages[key].message(text)

    def plot_convergence(
        self,
        records: Sequence[IterationRecord],
        field_name: Optional[str],
    ) -> None:
        """Поле field_name кожного запису від k; лог-шкала, якщо всі значення > 0."""
        page = self.pages[PAGE_CONVERGENCE]
        if not records or field_name is None or field_name not in records[0].values:
            page.message("Для цього методу графік збіжності не будується")
            return

        ks = [rec.index for rec in records]
        ys = np.array([float(rec[field_name]) for rec in records], dtype=float)
        finite = ys[np.isfinite(ys)]

        ax = page.reset()
        ax.plot(ks, ys, "o-", color=PALETTE.accent, linewidth=1.4, markersize=4)
        if len(finite) > 1 and np.all(finite > 0):
            ax.set_yscale("log")
        ax.set_xlabel("k")
        ax.set_ylabel(field_name)
        ax.set_title(f"{field_name} (k)")

        page.draw()
        self._show_page(PAGE_CONVERGENCE)

    def plot_function(
        self,
        func: Callable[[float], float],
        interval: Tuple[float, float],
        points: Sequence[Tuple[float, float]] = (),
        title: str = "f(x)",
        grid_size: int = 400,
    ) -> None:
        """
        Графік func на interval. Точки, де func не обчислюється, стають
        розривами лінії. points - позначки (ітерати, вузли інтерполяції).
        """
        lo, hi = interval
        if hi - lo < 1e-12:
            lo, hi = lo - 1.0, hi + 1.0

        xs = np.linspace(lo, hi, grid_size)
        ys = np.full_like(xs, np.nan)
        for i, x in enumerate(xs):
            try:
                ys[i] = func(float(x))
            except EvaluationError:
                continue

        page = self.pages[PAGE_FUNCTION]
        ax = page.reset()
        ax.axhline(0.0, color=PALETTE.text_muted, linewidth=0.8)
        ax.plot(xs, ys, color=PALETTE.accent, linewidth=1.6)
        if points:
            px, py = zip(*points)
            ax.scatter(px, py, color=PALETTE.warning, s=28, zorder=5)
        ax.set_xlabel("x")
        ax.set_title(title)

        page.draw()


__all__ = ["PAGE_CONVERGENCE", "PAGE_FUNCTION", "PlotPage", "PlotView"]
