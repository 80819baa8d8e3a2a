"""Терминальная сессия: параметры наложения спрашиваются у пользователя по очереди.

Запуск: `watermark-cli` или `python -m watermark_app.cli`.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Optional, Sequence

from watermark_app.config import configure_logging
from watermark_app.exceptions import WatermarkError
from watermark_app.models.image_model import RasterImage
from watermark_app.models.watermark_model import (
    ColorKey,
    GridPlacement,
    Placement,
    PlacementMethod,
    SinglePlacement,
    TransparencyMode,
    UseAlphaChannel,
    WatermarkSettings,
)
from watermark_app.services.image_service import ImageService
from watermark_app.services.input_parser import InputParser
from watermark_app.services.validation_service import ValidationService
from watermark_app.services.watermark_service import WatermarkService

logger = logging.getLogger(__name__)

Reply = Callable[[str], str]


def ask(message: str) -> str:
    """Печатает вопрос и читает ответ из stdin."""
    print(message)
    return input()


class TerminalSession:
    """Один проход: два файла, прозрачность, непрозрачность, размещение, имя результата.

    Каждый ответ проверяется сразу после ввода, поэтому ошибка прерывает сессию
    до следующего вопроса.
    """
    def __init__(
        self,
        reply: Reply = ask,
        image_service: Optional[ImageService] = None,
        validation_service: Optional[ValidationService] = None,
        input_parser: Optional[InputParser] = None,
        watermark_service: Optional[WatermarkService] = None,
    ) -> None:
        self._reply = reply
        self._validation = validation_service or ValidationService()
        self._images = image_service or ImageService(self._validation)
        self._parser = input_parser or InputParser()
        self._watermarks = watermark_service or WatermarkService(self._validation)

    def run(self) -> Path:
        base = self._load("Input the image filename:", "image")
        watermark = self._load("Input the watermark image filename:", "watermark")
        self._validation.validate_dimensions(base, watermark)

        transparency = self._ask_transparency(watermark)
        opacity = self._validation.validate_opacity(
            self._parser.parse_opacity(self._reply("Input the watermark transparency percentage (Integer 0-100):"))
        )
        placement = self._ask_placement(base, watermark)
        settings = WatermarkSettings(transparency=transparency, opacity=opacity, placement=placement)

        output = self._watermarks.compose(base, watermark, settings)
        logger.info("Composite ready: %s×%s, %s", output.width, output.height, settings)

        file_name = self._reply("Input the output image filename (jpg or png extension):")
        path = self._images.save_image(output, file_name)
        print(f"The watermarked image {file_name} has been created.")
        return path

    # ---- Вопросы ----
    def _load(self, question: str, label: str) -> RasterImage:
        image = self._images.load_image(self._reply(question))
        self._validation.validate_pixel_format(image, label)
        logger.debug("Loaded %s %s: %s×%s, %s bpp", label, image.path, image.width, image.height, image.bits_per_pixel)
        return image

    def _ask_transparency(self, watermark: RasterImage) -> TransparencyMode:
        if watermark.has_alpha:
            if self._parser.is_yes(self._reply("Do you want to use the watermark's Alpha channel?")):
                return UseAlphaChannel()
            return ColorKey()
        if self._parser.is_yes(self._reply("Do you want to set a transparency color?"), ignore_case=False):
            triple = self._parser.parse_color_triple(self._reply("Input a transparency color ([Red] [Green] [Blue]):"))
            return ColorKey(self._validation.validate_color_key(triple))
        return ColorKey()

    def _ask_placement(self, base: RasterImage, watermark: RasterImage) -> Placement:
        method = self._parser.parse_placement_method(self._reply("Choose the position method (single, grid):"))
        if method is PlacementMethod.GRID:
            return GridPlacement()
        max_x, max_y = self._validation.position_range(base, watermark)
        x, y = self._parser.parse_position(self._reply(f"Input the watermark position ([x 0-{max_x}] [y 0-{max_y}]):"))
        self._validation.validate_single_offset(x, y, base, watermark)
        return SinglePlacement(x, y)


def arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Overlay a watermark image onto an image, answering questions in the terminal.")
    parser.add_argument("--log-level", default=None, help="Logging level (DEBUG, INFO, WARNING, ...)")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = arg_parser().parse_args(argv)
    configure_logging(args.log_level)
    try:
        TerminalSession().run()
    except WatermarkError as exc:
        logger.debug("Session aborted", exc_info=exc)
        print(exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
