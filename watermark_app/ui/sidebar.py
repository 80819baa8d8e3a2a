"""Боковая панель: файлы, информация, параметры наложения, сохранение.

Принципы:
- SRP: только UI параметров; разбор и проверка значений делаются в контроллере.
- ISP: параметры отдаются как есть через компактные методы `get_*`, события через `on_*`.
"""
from __future__ import annotations

from typing import Callable, Optional, Tuple

import customtkinter as ctk

from watermark_app.config import DEFAULT_OPACITY, OPACITY_MAX, OPACITY_MIN
from watermark_app.models.image_model import RasterImage
from watermark_app.models.watermark_model import PlacementMethod


def _rgba_to_hex(rgba: Tuple[int, int, int, int]) -> str:
    """Преобразует RGBA в HEX (без альфа)."""
    r, g, b, _a = rgba
    return f"#{r:02X}{g:02X}{b:02X}"


def _format_size(size_bytes: Optional[int]) -> str:
    if size_bytes is None:
        return "—"
    value = float(size_bytes)
    for label in ("Б", "КБ", "МБ"):
        if value < 1024:
            return f"{int(value)} {label}" if label == "Б" else f"{value:.1f} {label}"
        value /= 1024
    return f"{value:.1f} ГБ"


def describe_image(image: RasterImage) -> str:
    """Краткое описание для панели: имя, размеры, формат пикселей, размер файла."""
    name = image.path.name if image.path is not None else "—"
    alpha = "есть альфа" if image.has_alpha else "без альфы"
    return (
        f"{name}\n"
        f"{image.width} × {image.height} px\n"
        f"{image.color_components} компоненты, {image.bits_per_pixel} бит ({alpha})\n"
        f"{_format_size(image.size_bytes)}"
    )


class Sidebar(ctk.CTkFrame):
    """Панель с блоками: файлы, информация, курсор, прозрачность, размещение."""
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, width=300, **kwargs)

        self.grid_columnconfigure(0, weight=1)

        # Callbacks
        self.on_open_base: Optional[Callable[[], None]] = None
        self.on_open_watermark: Optional[Callable[[], None]] = None
        self.on_parameters_change: Optional[Callable[[], None]] = None
        self.on_save: Optional[Callable[[], None]] = None

        bold = ctk.CTkFont(size=16, weight="bold")

        # Files
        ctk.CTkLabel(self, text="Файлы", font=bold).grid(row=0, column=0, padx=8, pady=(8, 4), sticky="w")
        self._open_base_btn = ctk.CTkButton(self, text="Открыть изображение…", command=self._emit_open_base)
        self._open_base_btn.grid(row=1, column=0, padx=8, pady=(0, 4), sticky="ew")
        self._open_wm_btn = ctk.CTkButton(self, text="Открыть водяной знак…", command=self._emit_open_watermark)
        self._open_wm_btn.grid(row=2, column=0, padx=8, pady=(0, 8), sticky="ew")

        # Info section
        self._base_info = ctk.StringVar(value="Изображение: —")
        self._wm_info = ctk.StringVar(value="Водяной знак: —")
        ctk.CTkLabel(self, textvariable=self._base_info, wraplength=270, anchor="w", justify="left").grid(
            row=3, column=0, padx=8, pady=(0, 4), sticky="ew"
        )
        ctk.CTkLabel(self, textvariable=self._wm_info, wraplength=270, anchor="w", justify="left").grid(
            row=4, column=0, padx=8, pady=(0, 8), sticky="ew"
        )

        # Cursor section
        self._cursor_val = ctk.StringVar(value="Курсор: —")
        ctk.CTkLabel(self, textvariable=self._cursor_val, anchor="w", justify="left").grid(
            row=5, column=0, padx=8, pady=(0, 8), sticky="ew"
        )

        # Transparency
        ctk.CTkLabel(self, text="Прозрачность", font=bold).grid(row=6, column=0, padx=8, pady=(8, 4), sticky="w")
        self._use_alpha = ctk.BooleanVar(value=False)
        self._alpha_switch = ctk.CTkSwitch(
            self, text="Использовать альфа-канал", variable=self._use_alpha, command=self._on_transparency_change
        )
        self._alpha_switch.grid(row=7, column=0, padx=8, pady=(0, 4), sticky="w")
        self._alpha_switch.configure(state="disabled")

        self._use_color_key = ctk.BooleanVar(value=False)
        self._color_key_check = ctk.CTkCheckBox(
            self, text="Цвет прозрачности (R G B)", variable=self._use_color_key, command=self._on_transparency_change
        )
        self._color_key_check.grid(row=8, column=0, padx=8, pady=(0, 4), sticky="w")
        self._color_key_val = ctk.StringVar(value="255 255 255")
        self._color_key_entry = ctk.CTkEntry(self, textvariable=self._color_key_val, width=140)
        self._color_key_entry.grid(row=9, column=0, padx=8, pady=(0, 8), sticky="w")
        self._color_key_entry.bind("<Return>", self._on_entry_commit)
        self._color_key_entry.bind("<FocusOut>", self._on_entry_commit)

        # Opacity
        self._opacity_val = ctk.StringVar(value=f"Непрозрачность: {DEFAULT_OPACITY}%")
        ctk.CTkLabel(self, textvariable=self._opacity_val, anchor="w").grid(row=10, column=0, padx=8, pady=(0, 2), sticky="w")
        self._opacity_slider = ctk.CTkSlider(
            self,
            from_=OPACITY_MIN,
            to=OPACITY_MAX,
            number_of_steps=OPACITY_MAX - OPACITY_MIN,
            command=self._on_opacity_change,
        )
        self._opacity_slider.set(DEFAULT_OPACITY)
        self._opacity_slider.grid(row=11, column=0, padx=8, pady=(0, 8), sticky="ew")

        # Placement
        ctk.CTkLabel(self, text="Размещение", font=bold).grid(row=12, column=0, padx=8, pady=(8, 4), sticky="w")
        self._placement_buttons = ctk.CTkSegmentedButton(
            self, values=[m.value for m in PlacementMethod], command=self._on_placement_change
        )
        self._placement_buttons.set(PlacementMethod.SINGLE.value)
        self._placement_buttons.grid(row=13, column=0, padx=8, pady=(0, 4), sticky="w")
        self._position_hint = ctk.StringVar(value="Позиция (x y)")
        self._position_label = ctk.CTkLabel(self, textvariable=self._position_hint, anchor="w")
        self._position_val = ctk.StringVar(value="0 0")
        self._position_entry = ctk.CTkEntry(self, textvariable=self._position_val, width=140)
        self._position_entry.bind("<Return>", self._on_entry_commit)
        self._position_entry.bind("<FocusOut>", self._on_entry_commit)
        self._toggle_position_controls(visible=True)

        # filler
        self.grid_rowconfigure(99, weight=1)

        self._save_btn = ctk.CTkButton(self, text="Сохранить результат…", command=self._emit_save)
        self._save_btn.grid(row=100, column=0, padx=8, pady=(8, 8), sticky="ew")

    # ---- Public API ----
    def set_base_info(self, image: RasterImage) -> None:
        self._base_info.set(f"Изображение: {describe_image(image)}")

    def set_watermark_info(self, image: RasterImage) -> None:
        """Показывает метаданные знака и включает переключатель альфы только при 32 битах."""
        self._wm_info.set(f"Водяной знак: {describe_image(image)}")
        if image.has_alpha:
            self._alpha_switch.configure(state="normal")
            self._use_alpha.set(True)
        else:
            self._use_alpha.set(False)
            self._alpha_switch.configure(state="disabled")
        self._sync_color_key_state()

    def set_position_range(self, max_x: int, max_y: int) -> None:
        self._position_hint.set(f"Позиция ([x 0-{max_x}] [y 0-{max_y}])")

    def update_cursor_info(self, x: Optional[int], y: Optional[int], rgba: Optional[Tuple[int, int, int, int]]) -> None:
        """Обновляет информацию по курсору (координаты, RGBA, HEX)."""
        if x is None or y is None or rgba is None:
            self._cursor_val.set("Курсор: —")
            return
        r, g, b, a = rgba
        self._cursor_val.set(f"Курсор: ({x}, {y})  RGBA {r}, {g}, {b}, {a}  {_rgba_to_hex(rgba)}")

    def get_use_alpha(self) -> bool:
        return bool(self._use_alpha.get())

    def get_color_key_text(self) -> Optional[str]:
        """Текст цвета-ключа или None, если ключ выключен."""
        if not self._use_color_key.get():
            return None
        return self._color_key_val.get()

    def get_opacity(self) -> int:
        return int(round(self._opacity_slider.get()))

    def get_placement_method(self) -> str:
        return self._placement_buttons.get()

    def get_position_text(self) -> str:
        return self._position_val.get()

    # ---- Events ----
    def _emit_open_base(self) -> None:
        if self.on_open_base:
            self.on_open_base()

    def _emit_open_watermark(self) -> None:
        if self.on_open_watermark:
            self.on_open_watermark()

    def _emit_save(self) -> None:
        if self.on_save:
            self.on_save()

    def _emit_parameters_change(self) -> None:
        if self.on_parameters_change:
            self.on_parameters_change()

    def _on_transparency_change(self) -> None:
        self._sync_color_key_state()
        self._emit_parameters_change()

    def _on_opacity_change(self, value: float) -> None:
        self._opacity_val.set(f"Непрозрачность: {int(round(value))}%")
        self._emit_parameters_change()

    def _on_placement_change(self, value: str) -> None:
        self._toggle_position_controls(visible=(value == PlacementMethod.SINGLE.value))
        self._emit_parameters_change()

    def _on_entry_commit(self, _event: object) -> None:
        self._emit_parameters_change()

    # ---- Helpers ----
    def _sync_color_key_state(self) -> None:
        # Цвет-ключ работает только без альфа-канала
        state = "disabled" if self._use_alpha.get() else "normal"
        self._color_key_check.configure(state=state)
        self._color_key_entry.configure(state=state)

    def _toggle_position_controls(self, visible: bool) -> None:
        if visible:
            self._position_label.grid(row=14, column=0, padx=8, pady=(0, 2), sticky="w")
            self._position_entry.grid(row=15, column=0, padx=8, pady=(0, 8), sticky="w")
        else:
            self._position_label.grid_remove()
            self._position_entry.grid_remove()
