"""
logger.py

Журнал подій обчислення (Logger).

Кожен метод отримує "приймач подій" явно, у виклику run(...):
    log.info(...), log.success(...), log.warning(...), log.error(...)

EventLog:
    - зберігає LogEvent у пам'яті (для панелі логів / тестів);
    - сповіщає підписників (GUI підписується через subscribe());
    - дублює кожну подію у стандартний logging (ієрархія "numlab").
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional, Protocol, Tuple

LEVEL_INFO = "info"
LEVEL_SUCCESS = "success"
LEVEL_WARNING = "warning"
LEVEL_ERROR = "error"

LEVELS: Tuple[str, ...] = (LEVEL_INFO, LEVEL_SUCCESS, LEVEL_WARNING, LEVEL_ERROR)

_STDLIB_LEVELS = {
    LEVEL_INFO: logging.INFO,
    LEVEL_SUCCESS: logging.INFO,
    LEVEL_WARNING: logging.WARNING,
    LEVEL_ERROR: logging.ERROR,
}


@dataclass(frozen=True)
class LogEvent:
    """
    Одна подія журналу.

    Атрибути:
        timestamp - час створення події
        level     - "info" | "success" | "warning" | "error"
        message   - текст повідомлення
    """
    timestamp: datetime
    level: str
    message: str

    def format(self) -> str:
        return f"[{self.timestamp:%H:%M:%S}] {self.message}"


class Logger(Protocol):
    """Інтерфейс приймача подій, який очікують методи."""

    def info(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


LogListener = Callable[[LogEvent], None]


class EventLog:
    """
    Реалізація Logger за замовчуванням.

    Використання:
        log = EventLog()
        log.subscribe(panel.append_event)
        method.run(params, log=log)
        log.events  # список LogEvent
    """

    def __init__(self, name: str = "numlab") -> None:
        self.events: List[LogEvent] = []
        self._listeners: List[LogListener] = []
        self._logger = logging.getLogger(name)

    # ------------------------------------------------------------------
    # Рівні
    # ------------------------------------------------------------------

    def info(self, message: str) -> None:
        self._log(LEVEL_INFO, message)

    def success(self, message: str) -> None:
        self._log(LEVEL_SUCCESS, message)

    def warning(self, message: str) -> None:
        self._log(LEVEL_WARNING, message)

    def error(self, message: str) -> None:
        self._log(LEVEL_ERROR, message)

    # ------------------------------------------------------------------
    # Підписники та історія
    # ------------------------------------------------------------------

    def subscribe(self, listener: LogListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: LogListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def messages(self, level: Optional[str] = None) -> List[str]:
        """Тексти подій (опційно лише заданого рівня)."""
        return [e.message for e in self.events if level is None or e.level == level]

    def clear(self) -> None:
        self.events.clear()

    def _log(self, level: str, message: str) -> None:
        event = LogEvent(timestamp=datetime.now(), level=level, message=message)
        self.events.append(event)

        if level == LEVEL_SUCCESS:
            self._logger.log(_STDLIB_LEVELS[level], "SUCCESS: %s", message)
        else:
            self._logger.log(_STDLIB_LEVELS[level], "%s", message)

        for listener in list(self._listeners):
            listener(event)


__all__ = [
    "LEVEL_INFO",
    "LEVEL_SUCCESS",
    "LEVEL_WARNING",
    "LEVEL_ERROR",
    "LEVELS",
    "LogEvent",
    "Logger",
    "LogListener",
    "EventLog",
]
