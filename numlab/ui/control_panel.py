"""
control_panel.py

Панель керування для GUI:
    - вибір методу (з реєстру numlab.core.registry.METHODS);
    - форма параметрів, що перебудовується під обраний метод;
    - опція "Порівняти Якобі та Гаусса–Зейделя";
    - кнопки: Запустити, Очистити, Вихід.

Видає назовні:
    - сигнал runRequested(MethodConfig)
    - сигнал clearRequested()
    - сигнал exitRequested()
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Union

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QFormLayout,
    QGroupBox,
    QHBoxLayout,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from numlab.core.registry import FIELD_CHOICE, METHODS, MethodInfo
from .styles import (
    MARGIN,
    SPACING,
    apply_button_secondary,
    apply_groupbox_flat_style,
)

LINEAR_METHOD_KEYS = ("jacobi", "gauss_seidel")


# ---------------------------------------------------------------------------
# Конфігурація запуску
# ---------------------------------------------------------------------------

@dataclass
class MethodConfig:
    method_key: str
    # ім'я поля -> введений текст (розбір у numlab.ui.parsing)
    field_texts: Dict[str, str] = field(default_factory=dict)
    compare_linear: bool = False


# ---------------------------------------------------------------------------
# Віджет панелі керування
# ---------------------------------------------------------------------------

class ControlPanelWidget(QWidget):
    """
    Ліва панель керування.

    Сигнали:
        runRequested(MethodConfig) – натиснуто "Запустити"
        clearRequested()           – натиснуто "Очистити"
        exitRequested()            – натиснуто "Вихід"
    """

    runRequested = pyqtSignal(MethodConfig)
    clearRequested = pyqtSignal()
    exitRequested = pyqtSignal()

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._inputs: Dict[str, Union[QLineEdit, QComboBox]] = {}
        self._build_ui()
        self._connect_signals()
        self._rebuild_form()

    # ------------------------------------------------------------------
    # Побудова UI
    # ------------------------------------------------------------------

    def _build_ui(self) -> None:
        self.setObjectName("controlPanel")

        main_layout = QVBoxLayout(self)
        main_layout.setContentsMargins(MARGIN, MARGIN, MARGIN, MARGIN)
        main_layout.setSpacing(SPACING)

        # Блок 1. Метод
        self.method_group = QGroupBox("Метод", self)
        apply_groupbox_flat_style(self.method_group)

        method_layout = QVBoxLayout(self.method_group)
        method_layout.setContentsMargins(MARGIN, MARGIN, MARGIN, MARGIN)
        method_layout.setSpacing(SPACING)

        self.combo_method = QComboBox(self.method_group)
        for key, method_info in METHODS.items():
            self.combo_method.addItem(method_info.name, key)

        self.check_compare = QCheckBox(
            "Порівняти Якобі та Гаусса–Зейделя",
            self.method_group,
        )

        method_layout.addWidget(self.combo_method)
        method_layout.addWidget(self.check_compare)
        main_layout.addWidget(self.method_group)

        # Блок 2. Параметри
        self.params_group = QGroupBox("Параметри", self)
        apply_groupbox_flat_style(self.params_group)

        self.form_layout = QFormLayout(self.params_group)
        self.form_layout.setContentsMargins(MARGIN, MARGIN, MARGIN, MARGIN)
        self.form_layout.setSpacing(SPACING)
        main_layout.addWidget(self.params_group)

        # Нижній ряд кнопок
        buttons_row = QHBoxLayout()
        buttons_row.setContentsMargins(0, SPACING, 0, 0)
        buttons_row.setSpacing(SPACING)

        self.button_run = QPushButton("Запустити", self)
        self.button_clear = QPushButton("Очистити", self)
        self.button_exit = QPushButton("Вихід", self)

        apply_button_secondary(self.button_clear)
        apply_button_secondary(self.button_exit)

        buttons_row.addWidget(self.button_run)
        buttons_row.addWidget(self.button_clear)
        buttons_row.addStretch(1)
        buttons_row.addWidget(self.button_exit)

        main_layout.addLayout(buttons_row)
        main_layout.addStretch(1)

    def _rebuild_form(self) -> None:
        """Перебудувати форму під поля обраного методу."""
        while self.form_layout.rowCount() > 0:
            self.form_layout.removeRow(0)
        self._inputs.clear()

        method_info = self.current_method()
        for fld in method_info.fields:
            if fld.kind == FIELD_CHOICE:
                widget = QComboBox(self.params_group)
                widget.addItems(list(fld.choices))
                widget.setCurrentText(fld.default)
            else:
                widget = QLineEdit(fld.default, self.params_group)
            self._inputs[fld.name] = widget
            self.form_layout.addRow(fld.label, widget)

        self.check_compare.setEnabled(method_info.key in LINEAR_METHOD_KEYS)

    # ------------------------------------------------------------------
    # Сигнали
    # ------------------------------------------------------------------

    def _connect_signals(self) -> None:
        self.combo_method.currentIndexChanged.connect(self._on_method_changed)
        self.button_run.clicked.connect(self._on_run_clicked)
        self.button_clear.clicked.connect(self._on_clear_clicked)
        self.button_exit.clicked.connect(self._on_exit_clicked)

    # ------------------------------------------------------------------
    # Стан
    # ------------------------------------------------------------------

    def current_method(self) -> MethodInfo:
        return METHODS[self.combo_method.currentData()]

    def build_config(self) -> MethodConfig:
        """Зібрати MethodConfig з поточного стану контролів."""
        texts: Dict[str, str] = {}
        for name, widget in self._inputs.items():
            if isinstance(widget, QComboBox):
                texts[name] = widget.currentText()
            else:
                texts[name] = widget.text()

        method_info = self.current_method()
        return MethodConfig(
            method_key=method_info.key,
            field_texts=texts,
            compare_linear=self.check_compare.isChecked() and method_info.key in LINEAR_METHOD_KEYS,
        )

    def _on_method_changed(self, _index: int) -> None:
        self._rebuild_form()

    def _on_run_clicked(self) -> None:
        self.runRequested.emit(self.build_config())

    def _on_clear_clicked(self) -> None:
        self.clearRequested.emit()

    def _on_exit_clicked(self) -> None:
        self.exitRequested.emit()
