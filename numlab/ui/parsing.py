"""
parsing.py

Перетворення тексту з полів форми в параметри методу. Без залежності
від Qt, щоб тестувати без дисплея.

Формати:
    число   : "1e-6", "-2.5"
    вектор  : "1 2 3" або "1, 2, 3"
    матриця : рядки через ";", елементи через пробіл або кому
              "4 -1 0; -1 4 -1; 0 -1 4"
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Mapping

from numlab.core.errors import ValidationError
from numlab.core.registry import (
    FIELD_CHOICE,
    FIELD_FUNCTION,
    FIELD_INT,
    FIELD_MATRIX,
    FIELD_NUMBER,
    FIELD_VECTOR,
    MethodInfo,
)

_SEPARATORS = re.compile(r"[\s,]+")


def parse_number(text: str, name: str = "значення") -> float:
    try:
        return float(text.strip())
    except ValueError:
        raise ValidationError(f"Поле '{name}': '{text}' не є числом") from None


def parse_int(text: str, name: str = "значення") -> int:
    try:
        return int(text.strip())
    except ValueError:
        raise ValidationError(f"Поле '{name}': '{text}' не є цілим числом") from None


def parse_vector(text: str, name: str = "вектор") -> List[float]:
    parts = [p for p in _SEPARATORS.split(text.strip()) if p]
    if not parts:
        raise ValidationError(f"Поле '{name}' не може бути порожнім")
    return [parse_number(p, name) for p in parts]


def parse_matrix(text: str, name: str = "матриця") -> List[List[float]]:
    rows = [r for r in text.strip().split(";") if r.strip()]
    if not rows:
        raise ValidationError(f"Поле '{name}' не може бути порожнім")
    return [parse_vector(r, name) for r in rows]


def build_params(method_info: MethodInfo, texts: Mapping[str, str]) -> Dict[str, Any]:
    """
    Зібрати словник параметрів для method_info.method_class з тексту полів форми.

    texts: ім'я поля -> введений текст.
    """
    params: Dict[str, Any] = {}
    for fld in method_info.fields:
        text = texts.get(fld.name, "")
        if fld.kind == FIELD_NUMBER:
            params[fld.name] = parse_number(text, fld.label)
        elif fld.kind == FIELD_INT:
            params[fld.name] = parse_int(text, fld.label)
        elif fld.kind == FIELD_VECTOR:
            params[fld.name] = parse_vector(text, fld.label)
        elif fld.kind == FIELD_MATRIX:
            params[fld.name] = parse_matrix(text, fld.label)
        elif fld.kind in (FIELD_FUNCTION, FIELD_CHOICE):
            params[fld.name] = text.strip()
        else:
            raise ValueError(f"Невідомий тип поля: {fld.kind}")
    return params


__all__ = [
    "parse_number",
    "parse_int",
    "parse_vector",
    "parse_matrix",
    "build_params",
]
