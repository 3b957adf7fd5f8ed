"""
method_base.py

Базові класи та спільна валідація для чисельних методів (Strategy).

Ідея:
    - Є абстрактний клас NumericalMethod, від якого наслідуються всі методи:
        * BisectionMethod, NewtonMethod, FixedPointMethod
        * JacobiMethod, GaussSeidelMethod
        * LagrangeInterpolation
        * NumericalDifferentiation, NumericalIntegration
    - Кожен метод реалізує _validate_impl() та _run_impl(),
      а користувач/GUI викликає validate() та run().

Життєвий цикл run():
    параметри -> validate -> (попередження стійкості) -> цикл -> MethodResult

Стан одного запуску (траса, попередження, лічильник викликів f) живе
в RunContext і не зберігається в екземплярі методу між викликами.
"""

from __future__ import annotations

import dataclasses
import math
from abc import ABC, abstractmethod
from numbers import Integral, Real
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Type

from .errors import NumericalMethodError, StabilityWarning, ValidationError
from .iteration_result import (
    IterationRecord,
    MethodResult,
    ResultValue,
    WarningEntry,
    make_record,
)
from .logger import EventLog, Logger

IterationCallback = Callable[[IterationRecord], None]
ScalarFunction = Callable[[float], float]

# Імена полів з таблиці параметрів (camelCase) -> поля dataclass-ів
PARAM_ALIASES: Dict[str, str] = {
    "maxIterations": "max_iterations",
    "initialGuess": "initial_guess",
    "xPoints": "x_points",
    "yPoints": "y_points",
    "xEval": "x_eval",
}


# ---------------------------------------------------------------------------
# Спільні перевірки
# ---------------------------------------------------------------------------

def require_function_text(value: Any, name: str = "function") -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"Функція '{name}' не може бути порожньою")
    return value


def require_number(value: Any, name: str) -> float:
    """Скінченне дійсне число (bool не вважається числом)."""
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ValidationError(f"Параметр '{name}' повинен бути числом, отримано: {value!r}")
    result = float(value)
    if not math.isfinite(result):
        raise ValidationError(f"Параметр '{name}' повинен бути скінченним числом")
    return result


def require_positive(value: Any, name: str) -> float:
    result = require_number(value, name)
    if result <= 0.0:
        raise ValidationError(f"Параметр '{name}' повинен бути більшим за нуль")
    return result


def require_positive_int(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise ValidationError(f"Параметр '{name}' повинен бути цілим числом, отримано: {value!r}")
    if value <= 0:
        raise ValidationError(f"Параметр '{name}' повинен бути більшим за нуль")
    return int(value)


def require_vector(values: Any, name: str) -> List[float]:
    """Послідовність скінченних чисел."""
    if hasattr(values, "tolist"):
        # numpy.ndarray
        values = values.tolist()
    if isinstance(values, (str, bytes)) or not isinstance(values, Sequence):
        raise ValidationError(f"Параметр '{name}' повинен бути списком чисел")
    return [require_number(v, f"{name}[{i}]") for i, v in enumerate(values)]


def require_iteration_budget(tolerance: Any, max_iterations: Any) -> None:
    require_positive(tolerance, "tolerance")
    require_positive_int(max_iterations, "maxIterations")


# ---------------------------------------------------------------------------
# Стан одного запуску
# ---------------------------------------------------------------------------

class RunContext:
    """
    Стан одного виклику run(): траса, попередження, лічильник викликів f.

    Методи:
        record(**values)        - додати IterationRecord (та викликати callback)
        warn(message, category) - нефатальне попередження (у лог та у результат)
        counted(f)              - обгортка, що рахує виклики f
        finish(...)             - зібрати незмінний MethodResult
    """

    def __init__(
        self,
        method_name: str,
        log: Logger,
        callback: Optional[IterationCallback] = None,
    ) -> None:
        self.method_name = method_name
        self.log = log
        self.callback = callback
        self.records: List[IterationRecord] = []
        self.warnings: List[WarningEntry] = []
        self.func_evals: int = 0

    def record(self, **values: Any) -> IterationRecord:
        rec = make_record(len(self.records) + 1, **values)
        self.records.append(rec)
        if self.callback is not None:
            self.callback(rec)
        return rec

    def warn(self, message: str, category: Type[Warning] = StabilityWarning) -> None:
        self.warnings.append(WarningEntry(category, message))
        self.log.warning(message)

    def counted(self, func: ScalarFunction) -> ScalarFunction:
        def wrapper(x: float) -> float:
            self.func_evals += 1
            return func(x)

        return wrapper

    def finish(
        self,
        value: ResultValue,
        converged: bool,
        stopped_by: str,
        details: Optional[Mapping[str, Any]] = None,
    ) -> MethodResult:
        info: Dict[str, Any] = {"func_evals": self.func_evals}
        if details:
            info.update(details)
        return MethodResult(
            method_name=self.method_name,
            value=value,
            iterations=tuple(self.records),
            converged=converged,
            stopped_by=stopped_by,
            warnings=tuple(self.warnings),
            details=MappingProxyType(info),
        )


# ---------------------------------------------------------------------------
# Базовий клас NumericalMethod (Strategy)
# ---------------------------------------------------------------------------

class NumericalMethod(ABC):
    """
    Абстрактний базовий клас для всіх чисельних методів.

    Кожен конкретний метод:
        - наслідується від NumericalMethod;
        - задає params_type (frozen dataclass параметрів);
        - реалізує _validate_impl() та _run_impl();
        - за потреби переозначає _check_stability() для попереджень.

    Використання:
        method = BisectionMethod()
        result = method.run({"function": "x^2-2", "a": 1, "b": 2,
                             "tolerance": 1e-6, "maxIterations": 50})
    """

    params_type: Type[Any]
    default_name: str = "Numerical method"

    def __init__(
        self,
        options: Optional[Dict[str, Any]] = None,
        name: Optional[str] = None,
    ) -> None:
        """
        Parameters
        ----------
        options : Optional[dict]
            Налаштування методу (пороги, крок похідної тощо).
        name : Optional[str]
            Людяна назва методу (для логів/таблиць).
        """
        self.options: Dict[str, Any] = dict(options or {})
        self.name: str = name or self.default_name

    # ------------------------------------------------------------------
    # Параметри
    # ------------------------------------------------------------------

    def coerce_params(self, params: Any) -> Any:
        """
        Привести параметри до self.params_type.

        Приймає або екземпляр dataclass, або словник (snake_case чи
        camelCase ключі з таблиці параметрів).
        """
        if isinstance(params, self.params_type):
            return params
        if not isinstance(params, Mapping):
            raise ValidationError(
                f"{self.name}: параметри повинні бути {self.params_type.__name__} "
                f"або словником, отримано: {type(params).__name__}"
            )

        fields = {f.name: f for f in dataclasses.fields(self.params_type)}
        kwargs: Dict[str, Any] = {}
        for key, value in params.items():
            field_name = PARAM_ALIASES.get(key, key)
            if field_name not in fields:
                raise ValidationError(f"{self.name}: невідомий параметр '{key}'")
            kwargs[field_name] = value

        missing = [
            name
            for name, f in fields.items()
            if name not in kwargs
            and f.default is dataclasses.MISSING
            and f.default_factory is dataclasses.MISSING
        ]
        if missing:
            raise ValidationError(
                f"{self.name}: бракує параметрів: {', '.join(missing)}"
            )

        return self.params_type(**kwargs)

    # ------------------------------------------------------------------
    # Публічний контракт
    # ------------------------------------------------------------------

    def validate(self, params: Any) -> None:
        """Перевірити параметри; при помилці -> ValidationError."""
        self._validate_impl(self.coerce_params(params))

    def run(
        self,
        params: Any,
        log: Optional[Logger] = None,
        callback: Optional[IterationCallback] = None,
    ) -> MethodResult:
        """
        Виконати метод.

        Parameters
        ----------
        params : dataclass або dict
            Параметри методу.
        log : Optional[Logger]
            Приймач подій; якщо None, створюється новий EventLog.
        callback : Optional[Callable[[IterationRecord], None]]
            Викликається після кожного запису в трасу (для GUI).

        Returns
        -------
        MethodResult
        """
        log = log if log is not None else EventLog()
        log.info(f"Запуск методу: {self.name}")

        try:
            p = self.coerce_params(params)
            self._validate_impl(p)
        except NumericalMethodError as exc:
            log.error(f"{self.name}: {exc}")
            raise

        ctx = RunContext(self.name, log, callback)
        self._check_stability(p, ctx)

        try:
            return self._run_impl(p, ctx)
        except NumericalMethodError as exc:
            log.error(f"{self.name}: {exc}")
            raise

    # ------------------------------------------------------------------
    # Хуки для конкретних методів
    # ------------------------------------------------------------------

    @abstractmethod
    def _validate_impl(self, params: Any) -> None:
        raise NotImplementedError

    def _check_stability(self, params: Any, ctx: RunContext) -> None:
        """Нефатальні попередження перед запуском. За замовчуванням нічого."""

    @abstractmethod
    def _run_impl(self, params: Any, ctx: RunContext) -> MethodResult:
        raise NotImplementedError


__all__ = [
    "IterationCallback",
    "ScalarFunction",
    "PARAM_ALIASES",
    "require_function_text",
    "require_number",
    "require_positive",
    "require_positive_int",
    "require_vector",
    "require_iteration_budget",
    "RunContext",
    "NumericalMethod",
]
