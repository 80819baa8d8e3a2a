"""Наложение водяного знака на изображение.

Правило смешивания для пары пикселей (основа i, знак w, непрозрачность p):
1. альфа w равна 0 или RGB w совпадает с цветом-ключом -> пиксель основы без изменений;
2. альфа w равна 255 -> канал = (p * w + (100 - p) * i) // 100;
3. иначе -> InvalidWatermarkPixelError, композиция прерывается целиком.

Размещения "один раз" и "сеткой" применяют одно и то же правило к массивам numpy;
результат совпадает с попиксельным проходом.
"""
from __future__ import annotations

from typing import Optional, Tuple

import numpy as np

from watermark_app.exceptions import InvalidWatermarkPixelError
from watermark_app.models.image_model import RasterImage, Rgba
from watermark_app.models.watermark_model import (
    Color,
    GridPlacement,
    SinglePlacement,
    TransparencyMode,
    UseAlphaChannel,
    WatermarkSettings,
)
from watermark_app.services.validation_service import ValidationService

Rgb = Tuple[int, int, int]


def blend_pixel(base: Rgb, watermark: Rgba, opacity: int, transparency_color: Optional[Color] = None) -> Rgb:
    """Смешивает один пиксель основы с пикселем водяного знака."""
    red, green, blue, alpha = watermark
    if alpha == 0 or (transparency_color is not None and (red, green, blue) == transparency_color.as_tuple()):
        return base
    if alpha != 255:
        raise InvalidWatermarkPixelError()
    i_red, i_green, i_blue = base
    return (
        (opacity * red + (100 - opacity) * i_red) // 100,
        (opacity * green + (100 - opacity) * i_green) // 100,
        (opacity * blue + (100 - opacity) * i_blue) // 100,
    )


class WatermarkService:
    def __init__(self, validation_service: Optional[ValidationService] = None) -> None:
        self._validation = validation_service or ValidationService()

    def compose(self, base: RasterImage, watermark: RasterImage, settings: WatermarkSettings) -> RasterImage:
        """Проверяет параметры и накладывает водяной знак.

        Args:
            base: Основное изображение (не изменяется).
            watermark: Водяной знак (не изменяется).
            settings: Режим прозрачности, непрозрачность и размещение.

        Returns:
            Новое 24-битное RGB-изображение размера основы.

        Raises:
            WatermarkError: любая ошибка проверки или недопустимый пиксель знака.
        """
        self._validation.validate_settings(base, watermark, settings)
        placement = settings.placement
        if isinstance(placement, SinglePlacement):
            return self.apply_single(
                base, watermark, settings.transparency, settings.opacity, placement.x_offset, placement.y_offset
            )
        if isinstance(placement, GridPlacement):
            return self.apply_grid(base, watermark, settings.transparency, settings.opacity)
        raise TypeError(f"Неизвестное размещение: {placement!r}")

    def apply_single(
        self,
        base: RasterImage,
        watermark: RasterImage,
        transparency: TransparencyMode,
        opacity: int,
        x_offset: int,
        y_offset: int,
    ) -> RasterImage:
        """Один водяной знак со смещением; вне его прямоугольника основа копируется как есть."""
        out = self._output_buffer(base)
        rows = slice(y_offset, y_offset + watermark.height)
        cols = slice(x_offset, x_offset + watermark.width)
        out[rows, cols, :3] = self._blend(out[rows, cols, :3], watermark.pixels, transparency, opacity)
        return RasterImage(pixels=out, color_components=3, bits_per_pixel=24)

    def apply_grid(
        self,
        base: RasterImage,
        watermark: RasterImage,
        transparency: TransparencyMode,
        opacity: int,
    ) -> RasterImage:
        """Водяной знак повторяется по всей основе: пиксель (x, y) берёт (x mod w, y mod h)."""
        out = self._output_buffer(base)
        rows = np.arange(base.height) % watermark.height
        cols = np.arange(base.width) % watermark.width
        tiled = watermark.pixels[np.ix_(rows, cols)]
        out[..., :3] = self._blend(out[..., :3], tiled, transparency, opacity)
        return RasterImage(pixels=out, color_components=3, bits_per_pixel=24)

    # ---------- Вспомогательные функции ----------
    def _output_buffer(self, base: RasterImage) -> np.ndarray:
        # Альфа основы отбрасывается: результат всегда непрозрачный RGB
        out = base.pixels.copy()
        out[..., 3] = 255
        return out

    def _blend(
        self,
        base_rgb: np.ndarray,
        watermark_rgba: np.ndarray,
        transparency: TransparencyMode,
        opacity: int,
    ) -> np.ndarray:
        """Векторная версия `blend_pixel` для областей одинаковой формы."""
        wm_rgb = watermark_rgba[..., :3].astype(np.int32)
        if isinstance(transparency, UseAlphaChannel):
            alpha = watermark_rgba[..., 3]
            key = None
        else:
            # В режиме цвета-ключа альфа знака не учитывается
            alpha = np.full(watermark_rgba.shape[:2], 255, dtype=np.uint8)
            key = transparency.color

        illegal = (alpha != 0) & (alpha != 255)
        if illegal.any():
            raise InvalidWatermarkPixelError()

        keep_base = alpha == 0
        if key is not None:
            keep_base |= np.all(wm_rgb == np.array(key.as_tuple(), dtype=np.int32), axis=-1)

        base_i32 = base_rgb.astype(np.int32)
        blended = (opacity * wm_rgb + (100 - opacity) * base_i32) // 100
        return np.where(keep_base[..., None], base_i32, blended).astype(np.uint8)
