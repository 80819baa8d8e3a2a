"""Контроллер приложения: оркестрация UI и сервисов наложения.

SOLID:
- SRP: класс связывает UI и сервисы; алгоритмы наложения и проверки живут в сервисах.
- DIP: зависит от сервисов как от ролей; конкретные реализации подставляются полями.
Clean Code:
- Любая `WatermarkError` показывается в строке состояния и не роняет окно.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from tkinter import filedialog, TclError
from typing import Optional, Tuple

import customtkinter as ctk

from watermark_app.exceptions import WatermarkError
from watermark_app.models.image_model import RasterImage
from watermark_app.models.watermark_model import (
    ColorKey,
    GridPlacement,
    PlacementMethod,
    SinglePlacement,
    UseAlphaChannel,
    WatermarkSettings,
)
from watermark_app.services.image_service import ImageService
from watermark_app.services.input_parser import InputParser
from watermark_app.services.validation_service import ValidationService
from watermark_app.services.watermark_service import WatermarkService
from watermark_app.ui.bottom_bar import BottomBar
from watermark_app.ui.image_viewer import ImageViewer
from watermark_app.ui.sidebar import Sidebar

logger = logging.getLogger(__name__)

IMAGE_FILETYPES = (
    ("Images", "*.png *.jpg *.jpeg *.bmp *.gif *.tiff *.webp"),
    ("All files", "*.*"),
)
OUTPUT_FILETYPES = (("PNG", "*.png"), ("JPEG", "*.jpg"))


@dataclass
class AppController:
    """Связывает элементы UI с прикладной логикой.

    Ответственности:
    - Загрузка основы и водяного знака через `ImageService` с проверкой формата.
    - Сбор параметров из сайдбара в `WatermarkSettings`.
    - Пересчёт предпросмотра через `WatermarkService` при каждом изменении.
    - Сохранение результата и вывод сообщений в строку состояния.
    """
    viewer: ImageViewer
    sidebar: Sidebar
    bottom: BottomBar
    window: ctk.CTk

    _image_service: ImageService = ImageService()
    _validation_service: ValidationService = ValidationService()
    _input_parser: InputParser = InputParser()
    _watermark_service: WatermarkService = WatermarkService()
    _base: Optional[RasterImage] = None
    _watermark: Optional[RasterImage] = None
    _composite: Optional[RasterImage] = None

    def bind_events(self) -> None:
        """Регистрирует обработчики событий между UI-компонентами."""
        self.sidebar.on_open_base = self._handle_open_base
        self.sidebar.on_open_watermark = self._handle_open_watermark
        self.sidebar.on_parameters_change = self.refresh_preview
        self.sidebar.on_save = self._handle_save

        self.viewer.on_cursor_move = self._handle_cursor_move
        self.viewer.on_zoom_change = self.bottom.set_zoom_percent

        self.bottom.on_zoom_change = self.viewer.set_zoom_percent
        self.bottom.on_zoom_fit = self._handle_zoom_fit
        self.bottom.on_compare_mode_change = self.viewer.set_compare_mode
        self.bottom.on_wipe_change = self.viewer.set_wipe_percent

    # ---- Handlers ----
    def _handle_open_base(self) -> None:
        image = self._open_image("Выберите изображение", "image")
        if image is None:
            return
        self._base = image
        self.sidebar.set_base_info(image)
        self.viewer.set_base_image(self._image_service.to_pil(image))
        self.bottom.set_zoom_percent(self.viewer.get_zoom_percent())
        self.refresh_preview()

    def _handle_open_watermark(self) -> None:
        image = self._open_image("Выберите водяной знак", "watermark")
        if image is None:
            return
        self._watermark = image
        self.sidebar.set_watermark_info(image)
        self.refresh_preview()

    def _handle_save(self) -> None:
        if self._composite is None:
            self.bottom.show_error("Нет результата для сохранения")
            return
        try:
            file_name = filedialog.asksaveasfilename(
                title="Сохранить результат", defaultextension=".png", filetypes=OUTPUT_FILETYPES
            )
        except TclError:
            return
        if not file_name:
            return
        self.save_composite(file_name)

    def _handle_cursor_move(self, x: Optional[int], y: Optional[int], rgba: Optional[Tuple[int, int, int, int]]) -> None:
        self.sidebar.update_cursor_info(x, y, rgba)

    def _handle_zoom_fit(self) -> None:
        self.viewer.set_zoom_to_fit()
        self.bottom.set_zoom_percent(self.viewer.get_zoom_percent())

    # ---- Logic ----
    def build_settings(self) -> WatermarkSettings:
        """Собирает параметры из сайдбара; разбор и диапазоны проверяются здесь же.

        Raises:
            WatermarkError: если какое-то поле не разбирается или вне диапазона.
        """
        if self.sidebar.get_use_alpha():
            transparency = UseAlphaChannel()
        else:
            key_text = self.sidebar.get_color_key_text()
            if key_text is None:
                transparency = ColorKey()
            else:
                triple = self._input_parser.parse_color_triple(key_text)
                transparency = ColorKey(self._validation_service.validate_color_key(triple))

        opacity = self._validation_service.validate_opacity(self.sidebar.get_opacity())

        method = self._input_parser.parse_placement_method(self.sidebar.get_placement_method())
        if method is PlacementMethod.GRID:
            placement = GridPlacement()
        else:
            x, y = self._input_parser.parse_position(self.sidebar.get_position_text())
            placement = SinglePlacement(x, y)
        return WatermarkSettings(transparency=transparency, opacity=opacity, placement=placement)

    def refresh_preview(self) -> None:
        """Пересчитывает результат; при ошибке показывает её и оставляет только основу."""
        self._composite = None
        if self._base is None or self._watermark is None:
            return
        try:
            self._validation_service.validate_dimensions(self._base, self._watermark)
            max_x, max_y = self._validation_service.position_range(self._base, self._watermark)
            self.sidebar.set_position_range(max_x, max_y)
            settings = self.build_settings()
            self._composite = self._watermark_service.compose(self._base, self._watermark, settings)
        except WatermarkError as exc:
            logger.info("Preview rejected: %s", exc)
            self.viewer.set_composite_image(None)
            self.bottom.show_error(str(exc))
            return
        self.viewer.set_composite_image(self._image_service.to_pil(self._composite))
        self.bottom.show_message(f"{self._composite.width} × {self._composite.height} px, {settings.opacity}%")

    def save_composite(self, file_name: str) -> None:
        if self._composite is None:
            return
        try:
            self._image_service.save_image(self._composite, file_name)
        except WatermarkError as exc:
            logger.warning("Save failed: %s", exc)
            self.bottom.show_error(str(exc))
            return
        logger.info("Saved %s", file_name)
        self.bottom.show_message(f"The watermarked image {file_name} has been created.")

    # ---- Helpers ----
    def _open_image(self, title: str, label: str) -> Optional[RasterImage]:
        try:
            file_path = filedialog.askopenfilename(title=title, filetypes=IMAGE_FILETYPES)
        except TclError:
            # Silent fail if dialog cannot open
            return None
        if not file_path:
            return None
        try:
            image = self._image_service.load_image(file_path)
            self._validation_service.validate_pixel_format(image, label)
        except WatermarkError as exc:
            logger.warning("Cannot use %s %s: %s", label, file_path, exc)
            self.bottom.show_error(str(exc))
            return None
        logger.info("Loaded %s %s (%s×%s, %s bpp)", label, file_path, image.width, image.height, image.bits_per_pixel)
        return image
