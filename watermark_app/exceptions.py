"""Иерархия исключений приложения.

Принципы:
- Все ошибки наследуются от `WatermarkError`, чтобы фронтенды (терминал, окно)
  ловили одно базовое исключение и показывали `str(exc)` пользователю.
- Тексты сообщений совпадают с теми, что видит пользователь в терминальной сессии.
"""
from __future__ import annotations


class WatermarkError(Exception):
    """Базовое исключение для всех ошибок наложения водяного знака."""


# ---------- Файлы ----------
class InexistentFileError(WatermarkError):
    def __init__(self, file_name: str) -> None:
        super().__init__(f"The file {file_name} doesn't exist.")
        self.file_name = file_name


class ImageDecodeError(WatermarkError):
    def __init__(self, file_name: str) -> None:
        super().__init__(f"The file {file_name} isn't a readable image.")
        self.file_name = file_name


class ImageEncodeError(WatermarkError):
    def __init__(self, file_name: str) -> None:
        super().__init__(f"The image {file_name} couldn't be saved.")
        self.file_name = file_name


class InvalidFileNameError(WatermarkError):
    def __init__(self) -> None:
        super().__init__('The output file extension isn\'t "jpg" or "png".')


# ---------- Формат изображений ----------
class ImageFormatError(WatermarkError):
    """Изображение не подходит по формату пикселей."""

    def __init__(self, message: str, label: str) -> None:
        super().__init__(message)
        self.label = label


class InvalidColorComponentsError(ImageFormatError):
    def __init__(self, label: str) -> None:
        super().__init__(f"The number of {label} color components isn't 3.", label)


class InvalidBitsPerPixelError(ImageFormatError):
    def __init__(self, label: str) -> None:
        super().__init__(f"The {label} isn't 24 or 32-bit.", label)


class DimensionMismatchError(WatermarkError):
    def __init__(self) -> None:
        super().__init__("The watermark's dimensions are larger.")


class AlphaChannelUnavailableError(WatermarkError):
    def __init__(self) -> None:
        super().__init__("The watermark doesn't have an alpha channel.")


class InvalidWatermarkPixelError(WatermarkError):
    """Пиксель водяного знака с альфой не 0 и не 255; композиция прерывается целиком."""

    def __init__(self) -> None:
        super().__init__("The watermark image has some pixels with alpha channel not equal to 0 or 255")


# ---------- Диапазоны ----------
class InputRangeError(WatermarkError):
    """Значение разобрано, но лежит вне допустимого диапазона."""


class OpacityOutOfRangeError(InputRangeError):
    def __init__(self) -> None:
        super().__init__("The transparency percentage is out of range.")


class TransparencyColorOutOfRangeError(InputRangeError):
    def __init__(self) -> None:
        super().__init__("The transparency color input is invalid.")


class PositionInputOutOfRangeError(InputRangeError):
    def __init__(self) -> None:
        super().__init__("The position input is out of range.")


# ---------- Разбор ввода ----------
class InputParseError(WatermarkError):
    """Текст пользователя не удалось разобрать."""


class NotAnIntegerError(InputParseError):
    def __init__(self) -> None:
        super().__init__("The transparency percentage isn't an integer number.")


class InvalidTransparencyColorError(InputParseError):
    def __init__(self) -> None:
        super().__init__("The transparency color input is invalid.")


class InvalidPositionInputError(InputParseError):
    def __init__(self) -> None:
        super().__init__("The position input is invalid.")


class InvalidPositionMethodError(WatermarkError):
    def __init__(self) -> None:
        super().__init__("The position method input is invalid.")
