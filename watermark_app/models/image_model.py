"""Модель растрового изображения.

Принципы:
- SRP: только структура данных и доступ к пикселям, без логики наложения.
- Пиксели хранятся в собственном массиве numpy формы (height, width, 4), uint8, RGBA.
- У 24-битного изображения альфа всегда 255: она имеет смысл только при 32 битах.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

import numpy as np

from watermark_app.config import ALPHA_BITS_PER_PIXEL

Rgba = Tuple[int, int, int, int]


@dataclass(frozen=True, eq=False)
class RasterImage:
    """Изображение и его формат пикселей.

    Fields:
        pixels: Массив (height, width, 4) uint8 в порядке R, G, B, A.
        color_components: Число цветовых компонент (без альфы), как у исходного файла.
        bits_per_pixel: Бит на пиксель исходного файла (24 для RGB, 32 для RGBA).
        path: Путь к исходному файлу, если изображение загружено с диска.
        size_bytes: Размер файла, если доступен.
    """
    pixels: np.ndarray
    color_components: int = 3
    bits_per_pixel: int = 24
    path: Optional[Path] = None
    size_bytes: Optional[int] = None

    def __post_init__(self) -> None:
        # Буфер всегда собственный: вызывающий код не видит изменений через set_pixel
        pixels = np.array(self.pixels, dtype=np.uint8)
        if pixels.ndim != 3 or pixels.shape[2] != 4:
            raise ValueError(f"Ожидался массив (h, w, 4), получен {pixels.shape}")
        if pixels.shape[0] < 1 or pixels.shape[1] < 1:
            raise ValueError("Размеры изображения должны быть положительными")
        object.__setattr__(self, "pixels", pixels)
        if not self.has_alpha:
            self.pixels[..., 3] = 255

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RasterImage):
            return NotImplemented
        return (
            self.color_components == other.color_components
            and self.bits_per_pixel == other.bits_per_pixel
            and self.path == other.path
            and self.size_bytes == other.size_bytes
            and np.array_equal(self.pixels, other.pixels)
        )

    @classmethod
    def filled(
        cls,
        width: int,
        height: int,
        rgba: Rgba = (0, 0, 0, 255),
        bits_per_pixel: int = 24,
        color_components: int = 3,
    ) -> "RasterImage":
        """Создаёт изображение, залитое одним цветом."""
        if width < 1 or height < 1:
            raise ValueError("Размеры изображения должны быть положительными")
        pixels = np.empty((height, width, 4), dtype=np.uint8)
        pixels[...] = rgba
        return cls(pixels=pixels, color_components=color_components, bits_per_pixel=bits_per_pixel)

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def has_alpha(self) -> bool:
        return self.bits_per_pixel == ALPHA_BITS_PER_PIXEL

    @property
    def rgb(self) -> np.ndarray:
        """Вид на цветовые каналы (h, w, 3) без копирования."""
        return self.pixels[..., :3]

    @property
    def alpha(self) -> np.ndarray:
        """Вид на альфа-канал (h, w)."""
        return self.pixels[..., 3]

    def get_pixel(self, x: int, y: int) -> Rgba:
        self._check_bounds(x, y)
        r, g, b, a = self.pixels[y, x]
        return int(r), int(g), int(b), int(a)

    def set_pixel(self, x: int, y: int, rgba: Rgba) -> None:
        self._check_bounds(x, y)
        r, g, b, a = rgba
        for value in (r, g, b, a):
            if not 0 <= value <= 255:
                raise ValueError(f"Значение канала вне 0..255: {value}")
        self.pixels[y, x] = (r, g, b, a if self.has_alpha else 255)

    def copy(self) -> "RasterImage":
        return RasterImage(
            pixels=self.pixels,
            color_components=self.color_components,
            bits_per_pixel=self.bits_per_pixel,
            path=self.path,
            size_bytes=self.size_bytes,
        )

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Пиксель ({x}, {y}) вне изображения {self.width}×{self.height}")
