"""
expression.py

Безпечний обчислювач текстових математичних виразів від однієї змінної x.

Підтримується:
    - числа: 2, 0.5, .5, 1e-3, 2.5E+4;
    - змінна: x;
    - оператори: + - * / ^ (унарні + та -), дужки;
    - функції: sin, cos, tan, log (натуральний), sqrt, exp.

Схема:
    текст --tokenize()--> токени --_Parser--> AST --Expression(x)--> float

Пріоритети (від найвищого):
    ^          (правоасоціативний: 2^3^2 = 2^9)
    унарні + - (тому -x^2 = -(x^2))
    * /
    + -

Жодного eval()/exec(): тільки обхід дерева, тому будь-який ідентифікатор,
крім x та функцій зі списку, відкидається ще на етапі розбору.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple, Union

from .errors import EvaluationError

VARIABLE_NAME = "x"

# Білий список функцій
FUNCTIONS: Dict[str, Callable[[float], float]] = {
    "sin": math.sin,
    "cos": math.cos,
    "tan": math.tan,
    "log": math.log,
    "sqrt": math.sqrt,
    "exp": math.exp,
}

BINARY_OPERATORS = "+-*/^"

_TOO_DEEP = "Вираз надто глибоко вкладений"


# ---------------------------------------------------------------------------
# Токенізація
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Token:
    """
    Один токен виразу.

    Атрибути:
        kind     - "num", "id" або "op"
        text     - текст токена
        position - позиція першого символу у вихідному рядку
    """
    kind: str
    text: str
    position: int


_TOKEN_RE = re.compile(
    r"""
    (?P<ws>\s+)
  | (?P<num>(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)
  | (?P<id>[A-Za-z_][A-Za-z_0-9]*)
  | (?P<op>[-+*/^()])
    """,
    re.VERBOSE,
)


def tokenize(text: str) -> List[Token]:
    """Розбити рядок на токени. Невідомий символ -> EvaluationError."""
    tokens: List[Token] = []
    pos = 0
    n = len(text)

    while pos < n:
        match = _TOKEN_RE.match(text, pos)
        if match is None:
            raise EvaluationError(
                f"Недопустимий символ '{text[pos]}' у позиції {pos}",
                position=pos,
            )

        kind = match.lastgroup
        if kind != "ws":
            tokens.append(Token(kind=kind, text=match.group(), position=pos))
        pos = match.end()

    return tokens


# ---------------------------------------------------------------------------
# Вузли AST
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Number:
    value: float

    def evaluate(self, x: float) -> float:
        return self.value


@dataclass(frozen=True)
class Variable:
    name: str = VARIABLE_NAME

    def evaluate(self, x: float) -> float:
        return x


@dataclass(frozen=True)
class UnaryOp:
    op: str
    operand: "Node"

    def evaluate(self, x: float) -> float:
        value = self.operand.evaluate(x)
        return -value if self.op == "-" else value


@dataclass(frozen=True)
class BinaryOp:
    op: str
    left: "Node"
    right: "Node"

    def evaluate(self, x: float) -> float:
        a = self.left.evaluate(x)
        b = self.right.evaluate(x)

        if self.op == "+":
            return a + b
        if self.op == "-":
            return a - b
        if self.op == "*":
            return a * b
        if self.op == "/":
            return a / b
        # "^": math.pow не повертає комплексних чисел, на відміну від **
        return math.pow(a, b)


@dataclass(frozen=True)
class FunctionCall:
    name: str
    argument: "Node"

    def evaluate(self, x: float) -> float:
        return FUNCTIONS[self.name](self.argument.evaluate(x))


Node = Union[Number, Variable, UnaryOp, BinaryOp, FunctionCall]


# ---------------------------------------------------------------------------
# Рекурсивний спуск
# ---------------------------------------------------------------------------

class _Parser:
    """
    Граматика:
        expression := term (("+" | "-") term)*
        term       := unary (("*" | "/") unary)*
        unary      := ("+" | "-") unary | power
        power      := primary ("^" unary)?
        primary    := NUMBER | "x" | FUNC "(" expression ")" | "(" expression ")"
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self.tokens = tokenize(text)
        self.index = 0

    # ------------------------------------------------------------------
    # Службові методи
    # ------------------------------------------------------------------

    def _peek(self) -> Optional[Token]:
        if self.index < len(self.tokens):
            return self.tokens[self.index]
        return None

    def _advance(self) -> Token:
        token = self.tokens[self.index]
        self.index += 1
        return token

    def _accept_op(self, ops: str) -> Optional[Token]:
        token = self._peek()
        if token is not None and token.kind == "op" and token.text in ops:
            return self._advance()
        return None

    def _expect_op(self, op: str) -> Token:
        token = self._peek()
        if token is None:
            raise EvaluationError(
                f"Очікувався '{op}', але вираз закінчився",
                position=len(self.text),
            )
        if token.kind != "op" or token.text != op:
            raise EvaluationError(
                f"Очікувався '{op}', знайдено '{token.text}' у позиції {token.position}",
                position=token.position,
            )
        return self._advance()

    # ------------------------------------------------------------------
    # Правила граматики
    # ------------------------------------------------------------------

    def parse(self) -> Node:
        if not self.tokens:
            raise EvaluationError("Порожній вираз", position=0)

        node = self._expression()

        token = self._peek()
        if token is not None:
            raise EvaluationError(
                f"Зайвий токен '{token.text}' у позиції {token.position}",
                position=token.position,
            )
        return node

    def _expression(self) -> Node:
        node = self._term()
        while True:
            token = self._accept_op("+-")
            if token is None:
                return node
            node = BinaryOp(token.text, node, self._term())

    def _term(self) -> Node:
        node = self._unary()
        while True:
            token = self._accept_op("*/")
            if token is None:
                return node
            node = BinaryOp(token.text, node, self._unary())

    def _unary(self) -> Node:
        token = self._accept_op("+-")
        if token is not None:
            return UnaryOp(token.text, self._unary())
        return self._power()

    def _power(self) -> Node:
        base = self._primary()
        if self._accept_op("^") is not None:
            # права асоціативність: показник знову розбирається як unary
            return BinaryOp("^", base, self._unary())
        return base

    def _primary(self) -> Node:
        token = self._peek()
        if token is None:
            raise EvaluationError(
                "Неочікуваний кінець виразу",
                position=len(self.text),
            )

        if token.kind == "num":
            self._advance()
            return Number(float(token.text))

        if token.kind == "id":
            self._advance()
            if token.text == VARIABLE_NAME:
                return Variable()
            if token.text in FUNCTIONS:
                self._expect_op("(")
                argument = self._expression()
                self._expect_op(")")
                return FunctionCall(token.text, argument)
            raise EvaluationError(
                f"Невідомий ідентифікатор '{token.text}' у позиції {token.position} "
                f"(дозволено: {VARIABLE_NAME}, {', '.join(FUNCTIONS)})",
                position=token.position,
            )

        if token.text == "(":
            self._advance()
            node = self._expression()
            self._expect_op(")")
            return node

        raise EvaluationError(
            f"Неочікуваний токен '{token.text}' у позиції {token.position}",
            position=token.position,
        )


def _contains_variable(node: Node) -> bool:
    if isinstance(node, Variable):
        return True
    if isinstance(node, UnaryOp):
        return _contains_variable(node.operand)
    if isinstance(node, BinaryOp):
        return _contains_variable(node.left) or _contains_variable(node.right)
    if isinstance(node, FunctionCall):
        return _contains_variable(node.argument)
    return False


# ---------------------------------------------------------------------------
# Скомпільований вираз
# ---------------------------------------------------------------------------

class Expression:
    """
    Скомпільований вираз f(x), який можна викликати як функцію.

    Приклад:
        f = compile_expression("x^2 - 2")
        f(1.5)   # 0.25

    allow_non_finite:
        якщо True, NaN/∞ повертаються як є (для методів, які самі
        перевіряють розбіжність): переповнення дає ∞, ділення на нуль NaN;
        інакше -> EvaluationError.
    """

    def __init__(self, source: str, root: Node, allow_non_finite: bool = False) -> None:
        self.source = source
        self.root = root
        self.allow_non_finite = allow_non_finite

    @property
    def variables_used(self) -> Tuple[str, ...]:
        return (VARIABLE_NAME,) if _contains_variable(self.root) else ()

    def __call__(self, x: float) -> float:
        x_val = float(x)
        try:
            value = float(self.root.evaluate(x_val))
        except RecursionError:
            raise EvaluationError(_TOO_DEEP) from None
        except ZeroDivisionError as exc:
            if self.allow_non_finite:
                return math.nan
            raise EvaluationError(
                f"Ділення на нуль при x = {x_val} у виразі '{self.source}'"
            ) from exc
        except OverflowError as exc:
            if self.allow_non_finite:
                return math.inf
            raise EvaluationError(
                f"Переповнення при x = {x_val} у виразі '{self.source}'"
            ) from exc
        except ValueError as exc:
            # math domain error: log(-1), sqrt(-1), (-8)^(1/3), ...
            raise EvaluationError(
                f"Значення поза областю визначення при x = {x_val} "
                f"у виразі '{self.source}': {exc}"
            ) from exc

        if not self.allow_non_finite and not math.isfinite(value):
            raise EvaluationError(
                f"Вираз '{self.source}' при x = {x_val} дає {value}"
            )
        return value

    def __repr__(self) -> str:
        return f"Expression({self.source!r})"


def compile_expression(source: str, allow_non_finite: bool = False) -> Expression:
    """
    Розібрати текст у вираз. Помилки синтаксису та невідомі символи
    -> EvaluationError.
    """
    if not isinstance(source, str):
        raise EvaluationError(
            f"Вираз повинен бути рядком, отримано: {type(source).__name__}"
        )
    try:
        root = _Parser(source).parse()
    except RecursionError:
        raise EvaluationError(_TOO_DEEP, position=0) from None
    return Expression(source, root, allow_non_finite=allow_non_finite)


def evaluate(expr: Union[str, Expression], x: float) -> float:
    """Обчислити вираз (текст або вже скомпільований) у точці x."""
    if isinstance(expr, Expression):
        return expr(x)
    return compile_expression(expr)(x)


__all__ = [
    "FUNCTIONS",
    "Token",
    "tokenize",
    "Number",
    "Variable",
    "UnaryOp",
    "BinaryOp",
    "FunctionCall",
    "Expression",
    "compile_expression",
    "evaluate",
]
