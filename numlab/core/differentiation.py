"""
differentiation.py

Чисельне диференціювання скінченними різницями.

Схеми:
    forward  : f'(x) ≈ (f(x+h) - f(x)) / h
    backward : f'(x) ≈ (f(x) - f(x-h)) / h
    central  : f'(x) ≈ (f(x+h) - f(x-h)) / (2h)

Оцінка похибки відсікання:
    forward/backward : |h * f''(x) / 2|,  f'' – друга різниця з того ж боку;
    central          : |h^2 * f''''(x) / 6|, f'''' – п'ятиточкова четверта різниця.

Додатково виконується "аналіз збіжності": та сама схема для ряду кроків
h×10, h×5, h×2, h, h/2, h/5, h/10 (лише для логу, на результат не впливає).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from .errors import EvaluationError, StabilityWarning, ValidationError
from .expression import compile_expression
from .iteration_result import STOPPED_BY_COMPLETED, MethodResult
from .method_base import (
    NumericalMethod,
    RunContext,
    ScalarFunction,
    require_function_text,
    require_number,
    require_positive,
)

SCHEME_FORWARD = "forward"
SCHEME_BACKWARD = "backward"
SCHEME_CENTRAL = "central"
SCHEMES: Tuple[str, ...] = (SCHEME_FORWARD, SCHEME_BACKWARD, SCHEME_CENTRAL)

# Множники кроку для аналізу збіжності
DEFAULT_STEP_LADDER: Tuple[float, ...] = (10.0, 5.0, 2.0, 1.0, 1 / 2, 1 / 5, 1 / 10)


# ---------------------------------------------------------------------------
# Скінченні різниці
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FiniteDifference:
    """
    Результат однієї схеми скінченних різниць.

    Атрибути:
        scheme         - "forward" | "backward" | "central"
        formula        - текстова формула схеми
        x, h           - точка та крок
        samples        - трійки (мітка, x_i, f(x_i)), використані у формулі
        derivative     - наближення f'(x)
        error_estimate - оцінка похибки відсікання
    """
    scheme: str
    formula: str
    x: float
    h: float
    samples: Tuple[Tuple[str, float, float], ...]
    derivative: float
    error_estimate: float

    def as_values(self) -> Dict[str, Any]:
        values: Dict[str, Any] = {
            "scheme": self.scheme,
            "formula": self.formula,
            "x": self.x,
            "h": self.h,
        }
        for label, xi, fi in self.samples:
            if label != "x":
                values[label] = xi
            values[f"f({label})"] = fi
        values["derivative"] = self.derivative
        values["error_estimate"] = self.error_estimate
        return values


def forward_difference(f: ScalarFunction, x: float, h: float) -> FiniteDifference:
    fx = f(x)
    fxh = f(x + h)
    fx2h = f(x + 2 * h)

    derivative = (fxh - fx) / h
    second = (fx2h - 2 * fxh + fx) / (h * h)

    return FiniteDifference(
        scheme=SCHEME_FORWARD,
        formula="f'(x) ≈ [f(x+h) - f(x)] / h",
        x=x,
        h=h,
        samples=(("x", x, fx), ("x+h", x + h, fxh)),
        derivative=derivative,
        error_estimate=abs(h * second / 2),
    )


def backward_difference(f: ScalarFunction, x: float, h: float) -> FiniteDifference:
    fx = f(x)
    fxh = f(x - h)
    fx2h = f(x - 2 * h)

    derivative = (fx - fxh) / h
    second = (fx - 2 * fxh + fx2h) / (h * h)

    return FiniteDifference(
        scheme=SCHEME_BACKWARD,
        formula="f'(x) ≈ [f(x) - f(x-h)] / h",
        x=x,
        h=h,
        samples=(("x", x, fx), ("x-h", x - h, fxh)),
        derivative=derivative,
        error_estimate=abs(h * second / 2),
    )


def central_difference(f: ScalarFunction, x: float, h: float) -> FiniteDifference:
    f_plus = f(x + h)
    f_minus = f(x - h)
    fx = f(x)
    f_plus2 = f(x + 2 * h)
    f_minus2 = f(x - 2 * h)

    derivative = (f_plus - f_minus) / (2 * h)
    fourth = (f_plus2 - 4 * f_plus + 6 * fx - 4 * f_minus + f_minus2) / h ** 4

    return FiniteDifference(
        scheme=SCHEME_CENTRAL,
        formula="f'(x) ≈ [f(x+h) - f(x-h)] / (2h)",
        x=x,
        h=h,
        samples=(("x", x, fx), ("x-h", x - h, f_minus), ("x+h", x + h, f_plus)),
        derivative=derivative,
        error_estimate=abs(h * h * fourth / 6),
    )


_SCHEME_FUNCS = {
    SCHEME_FORWARD: forward_difference,
    SCHEME_BACKWARD: backward_difference,
    SCHEME_CENTRAL: central_difference,
}


def central_derivative(f: ScalarFunction, x: float, h: float = 1e-4) -> float:
    """
    Похідна за центральною різницею (лише два виклики f).

    f'(x) ≈ (f(x + h) - f(x - h)) / (2h)
    """
    return (f(x + h) - f(x - h)) / (2.0 * h)


# ---------------------------------------------------------------------------
# Метод
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DifferentiationParams:
    function: str
    x: float
    h: float
    method: str


class NumericalDifferentiation(NumericalMethod):
    """
    Чисельне диференціювання у точці.

    Налаштування (options):
        step_ladder : множники h для аналізу збіжності
                      (default: 10, 5, 2, 1, 1/2, 1/5, 1/10)
    """

    params_type = DifferentiationParams
    default_name = "Numerical differentiation"

    def _validate_impl(self, params: DifferentiationParams) -> None:
        require_function_text(params.function)
        require_number(params.x, "x")
        require_positive(params.h, "h")
        if params.method not in SCHEMES:
            raise ValidationError(
                f"Схема повинна бути однією з: {', '.join(SCHEMES)}"
            )

    def _check_stability(self, params: DifferentiationParams, ctx: RunContext) -> None:
        h = float(params.h)
        if h > 1:
            ctx.warn(
                f"Крок h = {h} завеликий, результат може бути неточним (похибка відсікання)",
                StabilityWarning,
            )
        if h < 1e-10:
            ctx.warn(
                f"Крок h = {h} замалий, можливі похибки округлення",
                StabilityWarning,
            )

    def _run_impl(self, params: DifferentiationParams, ctx: RunContext) -> MethodResult:
        f = ctx.counted(compile_expression(params.function))
        x = float(params.x)
        h = float(params.h)
        scheme = _SCHEME_FUNCS[params.method]

        ctx.log.info(f"Функція: {params.function}")
        ctx.log.info(f"Точка x = {x}, крок h = {h}, схема: {params.method}")

        main = scheme(f, x, h)
        ctx.record(**main.as_values())

        convergence = self._convergence_analysis(scheme, f, x, h, ctx)

        ctx.log.success(f"f'({x}) ≈ {main.derivative:.8f}")
        ctx.log.info(f"Оцінка похибки: {main.error_estimate:.2e}")

        return ctx.finish(
            main.derivative,
            converged=True,
            stopped_by=STOPPED_BY_COMPLETED,
            details={
                "scheme": main.scheme,
                "formula": main.formula,
                "error_estimate": main.error_estimate,
                "convergence": tuple(convergence),
            },
        )

    def _convergence_analysis(
        self,
        scheme,
        f: ScalarFunction,
        x: float,
        h: float,
        ctx: RunContext,
    ) -> List[Dict[str, float]]:
        ladder = tuple(self.options.get("step_ladder", DEFAULT_STEP_LADDER))
        rows: List[Dict[str, float]] = []

        ctx.log.info("Аналіз збіжності для різних h:")
        for factor in ladder:
            h_test = h * float(factor)
            try:
                test = scheme(f, x, h_test)
            except EvaluationError as exc:
                ctx.log.info(f"  h = {h_test:.2e}: обчислення неможливе ({exc})")
                continue

            rows.append(
                {
                    "h": h_test,
                    "derivative": test.derivative,
                    "error_estimate": test.error_estimate,
                }
            )
            ctx.log.info(
                f"  h = {h_test:.2e}: f'(x) ≈ {test.derivative:.8f}, "
                f"оцінка похибки ≈ {test.error_estimate:.2e}"
            )

        return rows


__all__ = [
    "SCHEME_FORWARD",
    "SCHEME_BACKWARD",
    "SCHEME_CENTRAL",
    "SCHEMES",
    "DEFAULT_STEP_LADDER",
    "FiniteDifference",
    "forward_difference",
    "backward_difference",
    "central_difference",
    "central_derivative",
    "DifferentiationParams",
    "NumericalDifferentiation",
]
