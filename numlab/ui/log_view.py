"""
log_view.py

Панель журналу: підписник EventLog, кожна подія - рядок кольору свого рівня.
"""

from __future__ import annotations

import html
from typing import Optional

from PyQt6.QtWidgets import QLabel, QTextEdit, QVBoxLayout, QWidget

from numlab.core.logger import LogEvent
from .styles import LEVEL_COLORS, MONO_FAMILY, PALETTE, SPACING


class LogPanelWidget(QWidget):
    """
    Використання:
        panel = LogPanelWidget()
        event_log.subscribe(panel.append_event)
    """

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(SPACING)

        layout.addWidget(QLabel("Журнал", self))

        self.text = QTextEdit(self)
        self.text.setReadOnly(True)
        self.text.setStyleSheet(f"font-family: \"{MONO_FAMILY}\"; font-size: 9pt;")
        layout.addWidget(self.text)

    def append_event(self, event: LogEvent) -> None:
        color = LEVEL_COLORS.get(event.level, PALETTE.text_main)
        self.text.append(
            f'<span style="color:{color}">{html.escape(event.format())}</span>'
        )

    def clear(self) -> None:
        self.text.clear()
