"""Разбор текстовых ответов пользователя в типизированные значения.

Диапазоны здесь не проверяются: этим занимается `ValidationService`.
"""
from __future__ import annotations

import re
from typing import Optional, Tuple

from watermark_app.exceptions import (
    InvalidPositionInputError,
    InvalidPositionMethodError,
    InvalidTransparencyColorError,
    NotAnIntegerError,
)
from watermark_app.models.watermark_model import PlacementMethod

_INTEGER_RE = re.compile(r"[+-]?\d+")
_COLOR_TRIPLE_RE = re.compile(r"\d+ \d+ \d+")
# Значения вне 32-битного знакового целого считаются нечисловыми
_INT_MIN = -(2 ** 31)
_INT_MAX = 2 ** 31 - 1


def _to_int_or_none(text: str) -> Optional[int]:
    if _INTEGER_RE.fullmatch(text) is None:
        return None
    value = int(text)
    if not _INT_MIN <= value <= _INT_MAX:
        return None
    return value


class InputParser:
    def is_yes(self, answer: str, ignore_case: bool = True) -> bool:
        if ignore_case:
            answer = answer.lower()
        return answer == "yes"

    def parse_opacity(self, text: str) -> int:
        value = _to_int_or_none(text)
        if value is None:
            raise NotAnIntegerError()
        return value

    def parse_color_triple(self, text: str) -> Tuple[int, int, int]:
        """Разбирает "R G B": ровно три неотрицательных целых через одиночный пробел."""
        if _COLOR_TRIPLE_RE.fullmatch(text) is None:
            raise InvalidTransparencyColorError()
        red, green, blue = (int(part) for part in text.split(" "))
        return red, green, blue

    def parse_position(self, text: str) -> Tuple[int, int]:
        parts = [_to_int_or_none(part) for part in text.split(" ")]
        if len(parts) != 2 or parts[0] is None or parts[1] is None:
            raise InvalidPositionInputError()
        return parts[0], parts[1]

    def parse_placement_method(self, text: str) -> PlacementMethod:
        try:
            return PlacementMethod(text)
        except ValueError as exc:
            raise InvalidPositionMethodError() from exc
