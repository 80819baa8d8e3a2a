"""Настройки приложения: ограничения форматов, значения по умолчанию, логирование."""
from __future__ import annotations

import logging
import os

# Формат пикселей, который принимает валидатор
REQUIRED_COLOR_COMPONENTS = 3
SUPPORTED_BITS_PER_PIXEL = (24, 32)
ALPHA_BITS_PER_PIXEL = 32

# Сохранение результата: расширение -> формат Pillow
OUTPUT_FORMATS = {"jpg": "JPEG", "png": "PNG"}

OPACITY_MIN = 0
OPACITY_MAX = 100
DEFAULT_OPACITY = 50

# Окно
APPEARANCE_MODE = "system"
COLOR_THEME = "blue"
WINDOW_TITLE = "Image Watermark"
WINDOW_MIN_SIZE = (900, 600)

# Логирование (только фронтенды: терминал и контроллер окна)
LOG_FORMAT = "%(levelname)s:%(message)s"
LOG_LEVEL = os.environ.get("WATERMARK_LOG_LEVEL", "WARNING").upper()


def configure_logging(level: str | None = None) -> None:
    """Настраивает корневой логгер один раз за запуск."""
    logging.basicConfig(level=(level or LOG_LEVEL).upper(), format=LOG_FORMAT)
