"""Параметры наложения: цвет, режим прозрачности, размещение, непрозрачность.

Варианты режима и размещения заданы отдельными неизменяемыми классами;
сервисы различают их через `isinstance`.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union


@dataclass(frozen=True)
class Color:
    """RGB-тройка; сравнение по значению компонент."""
    red: int
    green: int
    blue: int

    def as_tuple(self) -> Tuple[int, int, int]:
        return self.red, self.green, self.blue


@dataclass(frozen=True)
class UseAlphaChannel:
    """Прозрачность берётся из собственного альфа-канала водяного знака."""


@dataclass(frozen=True)
class ColorKey:
    """Альфа водяного знака не учитывается; `color` (если задан) считается прозрачным."""
    color: Optional[Color] = None


TransparencyMode = Union[UseAlphaChannel, ColorKey]


@dataclass(frozen=True)
class SinglePlacement:
    """Водяной знак рисуется один раз со смещением от левого верхнего угла."""
    x_offset: int
    y_offset: int


@dataclass(frozen=True)
class GridPlacement:
    """Водяной знак повторяется по всему изображению (x mod w, y mod h)."""


Placement = Union[SinglePlacement, GridPlacement]


class PlacementMethod(str, Enum):
    SINGLE = "single"
    GRID = "grid"


@dataclass(frozen=True)
class WatermarkSettings:
    """Всё, что нужно композитору помимо двух изображений."""
    transparency: TransparencyMode
    opacity: int
    placement: Placement

    @property
    def transparency_color(self) -> Optional[Color]:
        if isinstance(self.transparency, ColorKey):
            return self.transparency.color
        return None
