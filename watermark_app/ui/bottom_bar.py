"""Нижняя панель: масштаб, режим сравнения и строка состояния."""
from __future__ import annotations

from typing import Callable, Optional

import customtkinter as ctk

from watermark_app.ui.image_viewer import COMPARE_MODES

ZOOM_PRESETS = (25, 50, 100, 200, 400)
ERROR_COLOR = "#D9534F"


class BottomBar(ctk.CTkFrame):
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, height=72, **kwargs)

        # callbacks
        self.on_zoom_change: Optional[Callable[[int], None]] = None
        self.on_zoom_fit: Optional[Callable[[], None]] = None
        self.on_compare_mode_change: Optional[Callable[[str], None]] = None
        self.on_wipe_change: Optional[Callable[[int], None]] = None

        self.grid_columnconfigure(1, weight=1)  # slider stretches

        # Zoom controls
        ctk.CTkLabel(self, text="Масштаб").grid(row=0, column=0, padx=(10, 6), pady=(8, 2), sticky="w")
        self._zoom_value = ctk.StringVar(value="100%")
        self._zoom_slider = ctk.CTkSlider(self, from_=10, to=400, number_of_steps=390, command=self._on_zoom_slider)
        self._zoom_slider.set(100)
        self._zoom_slider.grid(row=0, column=1, padx=6, pady=(8, 2), sticky="ew")
        ctk.CTkLabel(self, textvariable=self._zoom_value, width=48, anchor="w").grid(
            row=0, column=2, padx=(6, 12), pady=(8, 2), sticky="w"
        )
        self._presets = ctk.CTkSegmentedButton(
            self, values=["Fit", *(f"{p}%" for p in ZOOM_PRESETS)], command=self._on_preset_click
        )
        self._presets.grid(row=0, column=3, padx=6, pady=(8, 2), sticky="w")

        # Compare: основа против результата
        self._compare_menu = ctk.CTkOptionMenu(self, values=list(COMPARE_MODES), command=self._on_compare_mode)
        self._compare_menu.set("Нет")
        self._compare_menu.grid(row=0, column=4, padx=6, pady=(8, 2), sticky="w")

        self._wipe_slider = ctk.CTkSlider(self, from_=0, to=100, number_of_steps=100, command=self._on_wipe_slider)
        self._wipe_slider.set(50)
        self._toggle_wipe_slider(visible=False)

        # Status line
        self._status = ctk.StringVar(value="Откройте изображение и водяной знак")
        self._status_label = ctk.CTkLabel(self, textvariable=self._status, anchor="w")
        self._default_text_color = self._status_label.cget("text_color")
        self._status_label.grid(row=1, column=0, columnspan=6, padx=10, pady=(2, 8), sticky="ew")

    # public API (sync from controller)
    def set_zoom_percent(self, percent: int) -> None:
        self._zoom_slider.set(percent)
        self._zoom_value.set(f"{percent}%")
        self._presets.set(f"{percent}%" if percent in ZOOM_PRESETS else "")

    def show_message(self, text: str) -> None:
        self._status_label.configure(text_color=self._default_text_color)
        self._status.set(text)

    def show_error(self, text: str) -> None:
        self._status_label.configure(text_color=ERROR_COLOR)
        self._status.set(text)

    # events
    def _on_zoom_slider(self, value: float) -> None:
        percent = int(round(value))
        self._zoom_value.set(f"{percent}%")
        if self.on_zoom_change:
            self.on_zoom_change(percent)

    def _on_preset_click(self, value: str) -> None:
        if value == "Fit":
            if self.on_zoom_fit:
                self.on_zoom_fit()
        elif self.on_zoom_change:
            self.on_zoom_change(int(value.rstrip("%")))

    def _on_compare_mode(self, value: str) -> None:
        self._toggle_wipe_slider(visible=(value == "Шторка"))
        if self.on_compare_mode_change:
            self.on_compare_mode_change(value)

    def _on_wipe_slider(self, value: float) -> None:
        if self.on_wipe_change:
            self.on_wipe_change(int(round(value)))

    def _toggle_wipe_slider(self, visible: bool) -> None:
        if visible:
            self._wipe_slider.grid(row=0, column=5, padx=6, pady=(8, 2), sticky="ew")
        else:
            self._wipe_slider.grid_remove()
