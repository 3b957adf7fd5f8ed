"""
errors.py

Ієрархія помилок та попереджень для чисельних методів.

Фатальні (переривають run()):
    - ValidationError  – некоректні вхідні параметри (до початку ітерацій);
    - EvaluationError  – помилка розбору/обчислення виразу, надто мала похідна;
    - DivergenceError  – ітерація "втекла" за поріг або стала NaN/∞.

Нефатальні (лише логуються та потрапляють у MethodResult.warnings):
    - NonConvergenceWarning – вичерпано ліміт ітерацій;
    - StabilityWarning      – діагональна домінантність, екстраполяція,
                              похибка інтерполяції, небезпечний крок h.
"""

from __future__ import annotations

from typing import Optional


class NumericalMethodError(Exception):
    """Базовий клас для всіх фатальних помилок чисельних методів."""


class ValidationError(NumericalMethodError, ValueError):
    """Некоректні або поза областю визначення вхідні параметри."""


class EvaluationError(NumericalMethodError, ValueError):
    """
    Помилка розбору чи обчислення виразу.

    Атрибути:
        position - позиція символу у виразі (для помилок розбору), або None
    """

    def __init__(self, message: str, position: Optional[int] = None) -> None:
        super().__init__(message)
        self.position = position


class DivergenceError(NumericalMethodError, ArithmeticError):
    """
    Ітераційний процес розбігається.

    Атрибути:
        iteration - номер ітерації, на якій виявлено розбіжність
        value     - значення, що перевищило поріг (може бути NaN/∞)
    """

    def __init__(
        self,
        message: str,
        iteration: Optional[int] = None,
        value: Optional[float] = None,
    ) -> None:
        super().__init__(message)
        self.iteration = iteration
        self.value = value


class NonConvergenceWarning(UserWarning):
    """Вичерпано ліміт ітерацій без досягнення точності."""


class StabilityWarning(UserWarning):
    """Інформаційне попередження про можливу чисельну нестійкість."""


__all__ = [
    "NumericalMethodError",
    "ValidationError",
    "EvaluationError",
    "DivergenceError",
    "NonConvergenceWarning",
    "StabilityWarning",
]
