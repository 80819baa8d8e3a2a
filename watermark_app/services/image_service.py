"""Чтение и запись изображений через Pillow.

Принципы:
- SRP: класс отвечает только за декодирование/кодирование и извлечение формата пикселей.
- Формат (число цветовых компонент, бит на пиксель) берётся из режима Pillow
  и сырого режима декодера исходного файла; пиксели всегда хранятся как RGBA.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple

import numpy as np
from PIL import Image, ImageMode, UnidentifiedImageError

from watermark_app.config import OUTPUT_FORMATS
from watermark_app.exceptions import ImageDecodeError, ImageEncodeError, InexistentFileError
from watermark_app.models.image_model import RasterImage
from watermark_app.services.validation_service import ValidationService

# Режимы, у которых число бит не равно 8 на канал
_MODE_BITS = {"1": 1, "P": 8, "PA": 16, "I": 32, "F": 32, "I;16": 16, "I;16B": 16, "I;16L": 16, "I;16N": 16}
_PALETTE_MODES = ("P", "PA")
_ALPHA_BANDS = ("A", "a")


def pixel_format(mode: str, rawmode: Optional[str] = None) -> Tuple[int, int]:
    """Возвращает (число цветовых компонент, бит на пиксель) для режима Pillow.

    `rawmode` берётся из декодера файла: у 16-битных PNG режим "RGB"/"RGBA",
    а глубина видна только в нём ("RGB;16B" -> 48 бит).

    Примеры: "RGB" -> (3, 24), "RGBA" -> (3, 32), "L" -> (1, 8), "P" -> (3, 8).
    """
    bands = ImageMode.getmode(mode).bands
    alpha_bands = sum(1 for band in bands if band in _ALPHA_BANDS)
    if mode in _PALETTE_MODES:
        components = 3
    else:
        components = len(bands) - alpha_bands
    bits_per_band = 16 if rawmode is not None and ";16" in rawmode else 8
    bits = _MODE_BITS.get(mode, len(bands) * bits_per_band)
    return components, bits


def _rawmode(pil_image: Image.Image) -> Optional[str]:
    # tile очищается после load(), читать до декодирования
    if not pil_image.tile:
        return None
    args = pil_image.tile[0][3]
    if isinstance(args, tuple):
        args = args[0] if args else None
    return args if isinstance(args, str) else None


class ImageService:
    def __init__(self, validation_service: Optional[ValidationService] = None) -> None:
        self._validation = validation_service or ValidationService()

    def load_image(self, file_path: str | Path) -> RasterImage:
        """Загружает изображение с диска.

        Args:
            file_path: Путь до файла изображения.

        Returns:
            `RasterImage` с пикселями RGBA и форматом исходного файла.

        Raises:
            InexistentFileError: если путь не существует или не указывает на файл.
            ImageDecodeError: если файл не распознан как изображение.
        """
        path = Path(file_path)
        if not path.exists() or not path.is_file():
            raise InexistentFileError(str(file_path))

        try:
            with Image.open(path) as pil_image:
                rawmode = _rawmode(pil_image)
                pil_image.load()
                components, bits = pixel_format(pil_image.mode, rawmode)
                pixels = np.array(pil_image.convert("RGBA"), dtype=np.uint8)
        except (UnidentifiedImageError, OSError, ValueError) as exc:
            raise ImageDecodeError(str(file_path)) from exc

        try:
            size_bytes: Optional[int] = path.stat().st_size
        except OSError:
            size_bytes = None

        return RasterImage(
            pixels=pixels,
            color_components=components,
            bits_per_pixel=bits,
            path=path,
            size_bytes=size_bytes,
        )

    def to_pil(self, image: RasterImage) -> Image.Image:
        """RGB-представление для Pillow (альфа у 24-битных изображений не нужна)."""
        if image.has_alpha:
            return Image.fromarray(image.pixels)
        return Image.fromarray(np.ascontiguousarray(image.rgb))

    def save_image(self, image: RasterImage, file_name: str) -> Path:
        """Сохраняет изображение; формат определяется расширением (jpg или png).

        Raises:
            InvalidFileNameError: если расширение не jpg/png.
            ImageEncodeError: если Pillow не смог записать файл.
        """
        extension = self._validation.validate_output_filename(file_name)
        path = Path(file_name)
        try:
            self.to_pil(image).convert("RGB").save(path, format=OUTPUT_FORMATS[extension])
        except (OSError, ValueError) as exc:
            raise ImageEncodeError(file_name) from exc
        return path
