"""Проверка входных данных перед наложением водяного знака.

Принципы:
- SRP: только проверки; ничего не читает с диска и не меняет изображения.
- Fail-fast: каждая проверка либо возвращает нормализованное значение, либо
  бросает типизированное исключение из `watermark_app.exceptions`.
"""
from __future__ import annotations

import re
from typing import Sequence, Tuple

from watermark_app.config import (
    OPACITY_MAX,
    OPACITY_MIN,
    REQUIRED_COLOR_COMPONENTS,
    SUPPORTED_BITS_PER_PIXEL,
)
from watermark_app.exceptions import (
    AlphaChannelUnavailableError,
    DimensionMismatchError,
    InvalidBitsPerPixelError,
    InvalidColorComponentsError,
    InvalidFileNameError,
    OpacityOutOfRangeError,
    PositionInputOutOfRangeError,
    TransparencyColorOutOfRangeError,
)
from watermark_app.models.image_model import RasterImage
from watermark_app.models.watermark_model import (
    Color,
    ColorKey,
    SinglePlacement,
    TransparencyMode,
    UseAlphaChannel,
    WatermarkSettings,
)

_OUTPUT_FILENAME_RE = re.compile(r".+\.(jpg|png)", re.DOTALL)


class ValidationService:
    def validate_pixel_format(self, image: RasterImage, label: str) -> None:
        """Проверяет число цветовых компонент (3) и глубину (24 или 32 бита).

        Args:
            image: Проверяемое изображение.
            label: Подпись для сообщения об ошибке ("image", "watermark").

        Raises:
            InvalidColorComponentsError: если компонент не 3.
            InvalidBitsPerPixelError: если глубина не 24 и не 32 бита.
        """
        if image.color_components != REQUIRED_COLOR_COMPONENTS:
            raise InvalidColorComponentsError(label)
        if image.bits_per_pixel not in SUPPORTED_BITS_PER_PIXEL:
            raise InvalidBitsPerPixelError(label)

    def validate_dimensions(self, base: RasterImage, watermark: RasterImage) -> None:
        """Основа не может быть меньше водяного знака ни по одной оси.

        Проверка действует и для сетки, хотя тайлинг без неё обошёлся бы.
        """
        if base.width < watermark.width or base.height < watermark.height:
            raise DimensionMismatchError()

    def validate_opacity(self, value: int) -> int:
        if not OPACITY_MIN <= value <= OPACITY_MAX:
            raise OpacityOutOfRangeError()
        return value

    def validate_color_key(self, triple: Sequence[int]) -> Color:
        if len(triple) != 3 or any(not 0 <= channel <= 255 for channel in triple):
            raise TransparencyColorOutOfRangeError()
        red, green, blue = triple
        return Color(red, green, blue)

    def position_range(self, base: RasterImage, watermark: RasterImage) -> Tuple[int, int]:
        """Максимальные допустимые смещения (x, y) для одиночного размещения."""
        return base.width - watermark.width, base.height - watermark.height

    def validate_single_offset(self, x: int, y: int, base: RasterImage, watermark: RasterImage) -> Tuple[int, int]:
        max_x, max_y = self.position_range(base, watermark)
        if not (0 <= x <= max_x and 0 <= y <= max_y):
            raise PositionInputOutOfRangeError()
        return x, y

    def validate_transparency_mode(self, watermark: RasterImage, mode: TransparencyMode) -> None:
        if isinstance(mode, UseAlphaChannel) and not watermark.has_alpha:
            raise AlphaChannelUnavailableError()

    def validate_output_filename(self, file_name: str) -> str:
        """Возвращает тег формата ("jpg" или "png") по имени выходного файла.

        Raises:
            InvalidFileNameError: если имя не вида `<что-то>.jpg` / `<что-то>.png`.
        """
        match = _OUTPUT_FILENAME_RE.fullmatch(file_name)
        if match is None:
            raise InvalidFileNameError()
        return match.group(1)

    def validate_settings(self, base: RasterImage, watermark: RasterImage, settings: WatermarkSettings) -> None:
        """Все проверки одной композиции в порядке fail-fast."""
        self.validate_pixel_format(base, "image")
        self.validate_pixel_format(watermark, "watermark")
        self.validate_dimensions(base, watermark)
        self.validate_transparency_mode(watermark, settings.transparency)
        self.validate_opacity(settings.opacity)
        if isinstance(settings.transparency, ColorKey) and settings.transparency.color is not None:
            self.validate_color_key(settings.transparency.color.as_tuple())
        if isinstance(settings.placement, SinglePlacement):
            self.validate_single_offset(settings.placement.x_offset, settings.placement.y_offset, base, watermark)
