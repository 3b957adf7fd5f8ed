"""
table_view.py

Таблиця траси методу.

Функціонал:
    - колонки будуються з ключів першого IterationRecord ("k" + поля методу);
    - хелпери:
        clear_table()
        add_record(record)
        populate(records)
"""

from __future__ import annotations

from typing import Any, Iterable, List, Optional

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QAbstractItemView,
    QLabel,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from numlab.core.iteration_result import IterationRecord
from .styles import MARGIN, SPACING, apply_table_style

# Підписи колонок для відомих полів траси
COLUMN_LABELS = {
    "fa": "f(a)",
    "fb": "f(b)",
    "fc": "f(c)",
    "fx": "f(x)",
    "dfx": "f'(x)",
    "gx": "g(x)",
    "x_next": "x_next",
    "x_old": "x^(k)",
    "x_new": "x^(k+1)",
    "relative_error": "відн. похибка",
    "residual": "нев'язка",
    "error": "похибка",
    "partial_sum": "часткова сума",
    "basis_expression": "L_i вираз",
    "error_estimate": "оцінка похибки",
}


def format_cell(value: Any) -> str:
    """Текст комірки: числа у форматі %.8g, вектори як [..]."""
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, float):
        return f"{value:.8g}"
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(format_cell(v) for v in value) + "]"
    return str(value)


class TraceTableWidget(QWidget):
    """
    Обгортка над QTableWidget для траси будь-якого методу.
    Набір колонок фіксується першим доданим записом.
    """

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._columns: List[str] = []
        self._build_ui()

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)
        root.setSpacing(SPACING)

        self.title = QLabel("Ітерації", self)
        self.title.setContentsMargins(MARGIN, 0, 0, 0)
        root.addWidget(self.title)

        self.table = QTableWidget(self)
        apply_table_style(self.table)
        self.table.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self.table.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.table.verticalHeader().setDefaultSectionSize(22)
        root.addWidget(self.table)

    # ------------------------------------------------------------------
    # Публічне API
    # ------------------------------------------------------------------

    def clear_table(self) -> None:
        """Очистити рядки та колонки таблиці."""
        self._columns = []
        self.table.setRowCount(0)
        self.table.setColumnCount(0)

    def add_record(self, record: IterationRecord) -> None:
        row_data = record.as_row()

        if not self._columns:
            self._columns = list(row_data.keys())
            self.table.setColumnCount(len(self._columns))
            self.table.setHorizontalHeaderLabels(
                [COLUMN_LABELS.get(c, c) for c in self._columns]
            )

        row = self.table.rowCount()
        self.table.insertRow(row)

        for col, key in enumerate(self._columns):
            item = QTableWidgetItem(format_cell(row_data.get(key, "")))
            item.setTextAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
            self.table.setItem(row, col, item)

    def populate(self, records: Iterable[IterationRecord]) -> None:
        """Повністю перезаповнити таблицю трасою."""
        self.clear_table()
        for rec in records:
            self.add_record(rec)
