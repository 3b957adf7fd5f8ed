"""
iteration_result.py

Структури даних для трасування ітерацій та підсумку запуску методу.
Використовуються як у методах, так і в GUI (таблиця, графік, зведення).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Tuple, Type, Union

# Результат: скаляр (корінь, інтеграл, ...) або вектор (лінійні системи)
ResultValue = Union[float, Tuple[float, ...]]

STOPPED_BY_TOLERANCE = "tolerance"
STOPPED_BY_MAX_ITER = "max_iter"
STOPPED_BY_COMPLETED = "completed"


@dataclass(frozen=True)
class IterationRecord:
    """
    Знімок одного кроку методу.

    Атрибути:
        index  - номер ітерації (1, 2, 3, ...)
        values - поля, специфічні для методу (a, b, c, f(c), error, residual, ...)
    """
    index: int
    values: Mapping[str, Any]

    def __getitem__(self, key: str) -> Any:
        return self.values[key]

    def get(self, key: str, default: Any = None) -> Any:
        return self.values.get(key, default)

    def as_row(self) -> Dict[str, Any]:
        """Рядок для таблиці: {"k": index, ...values}."""
        row: Dict[str, Any] = {"k": self.index}
        row.update(self.values)
        return row


def make_record(index: int, **values: Any) -> IterationRecord:
    """Створити IterationRecord з незмінним словником значень."""
    return IterationRecord(index=index, values=MappingProxyType(dict(values)))


@dataclass(frozen=True)
class WarningEntry:
    """
    Нефатальне попередження, що виникло під час запуску.

    Атрибути:
        category - NonConvergenceWarning або StabilityWarning
        message  - текст попередження
    """
    category: Type[Warning]
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class MethodResult:
    """
    Підсумок одного запуску методу.

    Атрибути:
        method_name - людська назва методу
        value       - знайдене значення (float або tuple для систем)
        iterations  - траса IterationRecord
        converged   - чи досягнуто точності
        stopped_by  - "tolerance", "max_iter" або "completed"
                      (для прямих методів: Лагранж, диференціювання, інтегрування)
        warnings    - нефатальні попередження (WarningEntry)
        details     - додаткова інформація (Сімпсон, поліном, func_evals, ...)
    """
    method_name: str
    value: ResultValue
    iterations: Tuple[IterationRecord, ...]
    converged: bool
    stopped_by: str
    warnings: Tuple[WarningEntry, ...] = ()
    details: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def n_iter(self) -> int:
        return len(self.iterations)

    def as_dict(self) -> Dict[str, Any]:
        """Структура {result, iterations} для Presenter."""
        value = list(self.value) if isinstance(self.value, tuple) else self.value
        rows: List[Dict[str, Any]] = [rec.as_row() for rec in self.iterations]
        return {"result": value, "iterations": rows}


__all__ = [
    "ResultValue",
    "STOPPED_BY_TOLERANCE",
    "STOPPED_BY_MAX_ITER",
    "STOPPED_BY_COMPLETED",
    "IterationRecord",
    "make_record",
    "WarningEntry",
    "MethodResult",
]
