"""
Головне вікно numlab:
    - зліва: панель керування (метод + параметри);
    - справа: графіки над вкладками "Ітерації" / "Журнал";
    - під вкладками: короткий підсумок запуску.
"""

from __future__ import annotations
from typing import Optional

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QAction
from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QSplitter,
    QStatusBar,
    QTabWidget,
    QVBoxLayout,
    QWidget,
)

from numlab.core.iteration_result import IterationRecord, MethodResult
from numlab.core.logger import LogEvent
from .control_panel import ControlPanelWidget, MethodConfig
from .dialogs import show_about
from .log_view import LogPanelWidget
from .plot_view import PlotView
from .styles import MARGIN, SPACING, apply_label_muted
from .table_view import TraceTableWidget, format_cell


class MainWindow(QMainWindow):
    """
    Головне вікно GUI. Саме нічого не обчислює: передає MethodConfig
    контролеру через сигнал methodRequested.
    """

    methodRequested = pyqtSignal(MethodConfig)

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)

        self.setWindowTitle("numlab - чисельні методи")
        self.resize(1380, 860)

        self._create_actions()
        self._create_menu()
        self._create_status_bar()
        self._create_content()
        self._connect_signals()

    # ----------------------------------------------------------------------
    # Menu + actions
    # ----------------------------------------------------------------------
    def _create_actions(self) -> None:
        self.action_exit = QAction("Вихід", self, shortcut="Ctrl+Q")
        self.action_about = QAction("Про програму", self)

    def _create_menu(self) -> None:
        menu = self.menuBar()
        menu.addMenu("Файл").addAction(self.action_exit)
        menu.addMenu("Довідка").addAction(self.action_about)

    def _create_status_bar(self) -> None:
        status = QStatusBar(self)
        self.setStatusBar(status)
        status.showMessage("Готово")

    # ----------------------------------------------------------------------
    # CONTENT LAYOUT
    # ----------------------------------------------------------------------
    def _create_content(self) -> None:
        central = QWidget(self)
        self.setCentralWidget(central)

        root = QHBoxLayout(central)
        root.setContentsMargins(MARGIN, MARGIN, MARGIN, MARGIN)
        root.setSpacing(SPACING)

        self.control_panel = ControlPanelWidget(central)
        self.control_panel.setMinimumWidth(380)
        root.addWidget(self.control_panel, stretch=2)

        right = QWidget(central)
        right_layout = QVBoxLayout(right)
        right_layout.setContentsMargins(0, 0, 0, 0)
        right_layout.setSpacing(SPACING)

        splitter = QSplitter(Qt.Orientation.Vertical, right)
        self.plot_view = PlotView(splitter)
        splitter.addWidget(self.plot_view)

        self.tabs = QTabWidget(splitter)
        self.trace_table = TraceTableWidget(self.tabs)
        self.log_panel = LogPanelWidget(self.tabs)
        self.tabs.addTab(self.trace_table, "Ітерації")
        self.tabs.addTab(self.log_panel, "Журнал")
        splitter.addWidget(self.tabs)
        splitter.setStretchFactor(0, 3)
        splitter.setStretchFactor(1, 2)

        right_layout.addWidget(splitter)

        self.label_result = QLabel(right)
        apply_label_muted(self.label_result)
        right_layout.addWidget(self.label_result)

        root.addWidget(right, stretch=5)
        self.show_result(None)

    # ------------------------------------------------------------------
    # Signals
    # ------------------------------------------------------------------
    def _connect_signals(self) -> None:
        self.action_exit.triggered.connect(self.close)
        self.action_about.triggered.connect(lambda: show_about(self))

        self.control_panel.exitRequested.connect(self.close)
        self.control_panel.clearRequested.connect(self._on_clear_requested)
        self.control_panel.runRequested.connect(self._on_run_requested)

    def _on_run_requested(self, cfg: MethodConfig) -> None:
        self.clear_results()
        self.statusBar().showMessage(f"Запуск: {self.control_panel.current_method().name}")
        self.methodRequested.emit(cfg)

    def _on_clear_requested(self) -> None:
        self.clear_results()
        self.log_panel.clear()
        self.statusBar().showMessage("Очищено")

    # ------------------------------------------------------------------
    # PUBLIC API (для app.py)
    # ------------------------------------------------------------------
    def clear_results(self) -> None:
        """Очистити таблицю, графіки та підсумок."""
        self.trace_table.clear_table()
        self.plot_view.show_placeholder()
        self.show_result(None)

    def add_record(self, record: IterationRecord) -> None:
        self.trace_table.add_record(record)

    def append_log_event(self, event: LogEvent) -> None:
        self.log_panel.append_event(event)

    def show_result(self, result: Optional[MethodResult]) -> None:
        """Рядок підсумку під вкладками."""
        if result is None:
            self.label_result.setText("Результат: –")
            return

        parts = [
            f"Результат: {format_cell(result.value)}",
            f"ітерацій: {result.n_iter}",
            f"зупинка: {result.stopped_by}",
            f"викликів f: {result.details.get('func_evals', '–')}",
        ]
        if result.warnings:
            parts.append(f"попереджень: {len(result.warnings)}")
        self.label_result.setText(",  ".join(parts))
