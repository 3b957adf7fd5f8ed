"""
styles.py

Темна тема для numlab.

Таблиця стилів збирається з правил (селектор -> властивості), щоб кольори
бралися лише з PALETTE, а не дублювалися рядками по всьому файлу.

Окремо:
    - LEVEL_COLORS : колір рядка журналу за рівнем події;
    - apply_*      : точкові стилі для окремих віджетів.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QColor, QFont, QPalette
from PyQt6.QtWidgets import (
    QApplication,
    QGroupBox,
    QHeaderView,
    QLabel,
    QPushButton,
    QTableWidget,
)

from numlab.core.logger import LEVEL_ERROR, LEVEL_INFO, LEVEL_SUCCESS, LEVEL_WARNING

MARGIN = 12
SPACING = 8
RADIUS = 5

FONT_FAMILY = "Segoe UI"
MONO_FAMILY = "Consolas"
FONT_SIZE = 10

Rule = Tuple[str, Dict[str, str]]


@dataclass(frozen=True)
class AppPalette:
    background: str = "#121417"
    surface: str = "#1a1d22"
    surface_alt: str = "#22262d"

    text_main: str = "#e4e8ef"
    text_muted: str = "#8f99a8"
    text_inverse: str = "#121417"

    accent: str = "#4fa3e0"
    accent_alt: str = "#72bdf0"

    success: str = "#6cc788"
    warning: str = "#e5b454"
    error: str = "#ec6b6b"

    border: str = "#2c323b"


PALETTE = AppPalette()

# Колір рядка панелі журналу за рівнем події
LEVEL_COLORS: Dict[str, str] = {
    LEVEL_INFO: PALETTE.text_main,
    LEVEL_SUCCESS: PALETTE.success,
    LEVEL_WARNING: PALETTE.warning,
    LEVEL_ERROR: PALETTE.error,
}


def _frame(bg: str) -> Dict[str, str]:
    """Фон + тонка рамка + заокруглення."""
    return {
        "background-color": bg,
        "border": f"1px solid {PALETTE.border}",
        "border-radius": f"{RADIUS}px",
    }


def _rules() -> List[Rule]:
    p = PALETTE
    return [
        ("QWidget", {
            "background-color": p.background,
            "color": p.text_main,
            "font-family": f'"{FONT_FAMILY}"',
            "font-size": f"{FONT_SIZE}pt",
        }),
        ("QGroupBox", {**_frame(p.surface), "margin-top": "14px"}),
        ("QGroupBox::title", {
            "subcontrol-origin": "margin",
            "left": "10px",
            "padding": "0 4px",
            "color": p.accent,
            "font-weight": "600",
        }),
        ("QMenuBar, QStatusBar", {"background-color": p.surface, "color": p.text_muted}),
        ("QMenu", _frame(p.surface_alt)),
        ("QMenuBar::item:selected, QMenu::item:selected", {
            "background-color": p.accent,
            "color": p.text_inverse,
        }),
        ("QPushButton", {
            **_frame(p.accent),
            "color": p.text_inverse,
            "padding": "6px 14px",
            "font-weight": "600",
        }),
        ("QPushButton:hover", {"background-color": p.accent_alt}),
        ("QLineEdit, QComboBox, QTextEdit", {
            **_frame(p.surface),
            "padding": "5px 7px",
            "color": p.text_main,
        }),
        ("QLineEdit:focus, QComboBox:focus", {"border": f"1px solid {p.accent}"}),
        ("QCheckBox::indicator", {
            **_frame(p.surface_alt),
            "width": "15px",
            "height": "15px",
        }),
        ("QCheckBox::indicator:checked", {"background": p.accent}),
        ("QTableWidget", {
            **_frame(p.surface),
            "gridline-color": p.border,
            "alternate-background-color": p.surface_alt,
            "selection-background-color": p.accent,
            "selection-color": p.text_inverse,
        }),
        ("QHeaderView::section", {
            "background-color": p.surface_alt,
            "padding": "5px",
            "border": "none",
            "font-weight": "600",
        }),
        ("QTabWidget::pane", _frame(p.surface)),
        ("QTabBar::tab", {
            "padding": "6px 12px",
            "background": p.surface_alt,
            "color": p.text_muted,
        }),
        ("QTabBar::tab:selected", {"background": p.surface, "color": p.text_main}),
        ("QSplitter::handle", {"background-color": p.border}),
    ]


def _render(rules: Iterable[Rule]) -> str:
    blocks = []
    for selector, props in rules:
        body = "\n".join(f"    {key}: {value};" for key, value in props.items())
        blocks.append(f"{selector} {{\n{body}\n}}")
    return "\n\n".join(blocks)


def build_app_stylesheet() -> str:
    return _render(_rules())


def apply_app_style(app: QApplication) -> None:
    """Палітра Qt + шрифт + таблиця стилів для всього застосунку."""
    qt_palette = app.palette()
    roles = {
        QPalette.ColorRole.Window: PALETTE.background,
        QPalette.ColorRole.Base: PALETTE.surface,
        QPalette.ColorRole.AlternateBase: PALETTE.surface_alt,
        QPalette.ColorRole.Text: PALETTE.text_main,
        QPalette.ColorRole.WindowText: PALETTE.text_main,
        QPalette.ColorRole.Highlight: PALETTE.accent,
    }
    for role, color in roles.items():
        qt_palette.setColor(role, QColor(color))

    app.setPalette(qt_palette)
    app.setFont(QFont(FONT_FAMILY, FONT_SIZE))
    app.setStyleSheet(build_app_stylesheet())


def apply_groupbox_flat_style(group: QGroupBox) -> None:
    group.setContentsMargins(MARGIN, MARGIN, MARGIN, MARGIN)


def apply_table_style(table: QTableWidget) -> None:
    header = table.horizontalHeader()
    header.setSectionResizeMode(QHeaderView.ResizeMode.ResizeToContents)
    header.setStretchLastSection(True)
    header.setDefaultAlignment(Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignVCenter)

    table.verticalHeader().setVisible(False)
    table.setAlternatingRowColors(True)
    table.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)


def apply_button_secondary(btn: QPushButton) -> None:
    p = PALETTE
    btn.setStyleSheet(
        _render([
            ("QPushButton", {**_frame(p.surface_alt), "color": p.text_main}),
            ("QPushButton:hover", {"border-color": p.accent}),
        ])
    )


def apply_label_muted(lbl: QLabel) -> None:
    lbl.setStyleSheet(f"color: {PALETTE.text_muted};")


__all__ = [
    "MARGIN",
    "SPACING",
    "RADIUS",
    "FONT_FAMILY",
    "MONO_FAMILY",
    "FONT_SIZE",
    "AppPalette",
    "PALETTE",
    "LEVEL_COLORS",
    "build_app_stylesheet",
    "apply_app_style",
    "apply_groupbox_flat_style",
    "apply_table_style",
    "apply_button_secondary",
    "apply_label_muted",
]
