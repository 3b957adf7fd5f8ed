"""
ui/dialogs.py

Стандартні діалоги для GUI-застосунку:

    - show_error     – повідомлення про помилку
    - show_about     – вікно "Про програму"
    - show_summary   – діалог зі зведеною таблицею ResultsSummary
"""

from __future__ import annotations

from typing import Any, Optional

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QDialog,
    QDialogButtonBox,
    QHeaderView,
    QLabel,
    QMessageBox,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from numlab.core.results_summary import ResultsSummary
from .styles import MARGIN, SPACING, apply_label_muted, apply_table_style
from .table_view import format_cell


def show_error(parent: Optional[QWidget], message: str, title: str = "Помилка") -> None:
    """
    Показати діалог помилки з червоною іконкою.
    """
    dlg = QMessageBox(parent)
    dlg.setIcon(QMessageBox.Icon.Critical)
    dlg.setWindowTitle(title)
    dlg.setText(message)
    dlg.setStandardButtons(QMessageBox.StandardButton.Ok)
    dlg.exec()


def show_about(parent: Optional[QWidget]) -> None:
    QMessageBox.about(
        parent,
        "Про програму",
        (
            "<b>numlab</b><br/>"
            "Класичні чисельні методи над текстовими функціями від x.<br/><br/>"
            "<b>Реалізовані методи:</b>"
            "<ul>"
            "<li>Бісекція, Ньютон–Рафсон, проста ітерація</li>"
            "<li>Якобі, Гаусс–Зейдель</li>"
            "<li>Інтерполяція Лагранжа</li>"
            "<li>Чисельне диференціювання (forward / backward / central)</li>"
            "<li>Чисельне інтегрування (трапеції, Сімпсон)</li>"
            "</ul>"
        ),
    )


_STOP_REASONS = {
    "tolerance": "Досягнуто точності",
    "max_iter": "Досягнуто граничної кількості ітерацій",
    "completed": "Прямий метод (без ітерацій)",
}


class SummaryDialog(QDialog):
    """
    Діалог зі зведеною таблицею результатів кількох методів.
    """

    COLUMNS = (
        ("method", "Метод"),
        ("value", "Результат"),
        ("n_iter", "Ітерацій"),
        ("residual", "Нев'язка"),
        ("stopped_by", "Причина зупинки"),
        ("warnings", "Попереджень"),
    )

    def __init__(self, parent: Optional[QWidget], summary: ResultsSummary) -> None:
        super().__init__(parent)
        self.summary = summary

        self.setWindowTitle("Зведена таблиця результатів")
        self.setModal(True)
        self.resize(820, 320)

        self._build_ui()
        self._populate()

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(MARGIN, MARGIN, MARGIN, MARGIN)
        layout.setSpacing(SPACING)

        self.label_title = QLabel("Однакові вхідні дані для всіх методів", self)
        apply_label_muted(self.label_title)

        self.table = QTableWidget(self)
        self.table.setColumnCount(len(self.COLUMNS))
        self.table.setHorizontalHeaderLabels([title for _, title in self.COLUMNS])
        apply_table_style(self.table)
        self.table.horizontalHeader().setSectionResizeMode(QHeaderView.ResizeMode.Interactive)

        self.label_best = QLabel(self)

        buttons = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok,
            orientation=Qt.Orientation.Horizontal,
            parent=self,
        )
        buttons.accepted.connect(self.accept)

        layout.addWidget(self.label_title)
        layout.addWidget(self.table)
        layout.addWidget(self.label_best)
        layout.addWidget(buttons)

    def _populate(self) -> None:
        rows: list[dict[str, Any]] = self.summary.as_rows()
        self.table.setRowCount(len(rows))

        for row_idx, row in enumerate(rows):
            for col, (key, _) in enumerate(self.COLUMNS):
                value = row.get(key)
                if key == "stopped_by":
                    text = _STOP_REASONS.get(value, str(value))
                elif value is None:
                    text = ""
                else:
                    text = format_cell(value)
                self.table.setItem(row_idx, col, QTableWidgetItem(text))

        best = self.summary.best_by_iterations()
        if best is None:
            self.label_best.setText("Жоден метод не досяг точності")
        else:
            self.label_best.setText(
                f"Найменше ітерацій: {best.method_name} ({best.n_iter})"
            )


def show_summary(parent: Optional[QWidget], summary: ResultsSummary) -> None:
    dlg = SummaryDialog(parent, summary)
    dlg.exec()
