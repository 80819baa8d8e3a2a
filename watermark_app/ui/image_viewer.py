"""Виджет предпросмотра: основа и результат наложения, масштаб, панорамирование, сравнение.

Принципы:
- SRP: только отображение и взаимодействие мышью; результат готовит контроллер.
- Исходные изображения не масштабируются на месте: на каждый кадр делается копия нужного размера.
"""
from __future__ import annotations

from typing import Callable, Optional, Tuple

import customtkinter as ctk
import tkinter as tk
from PIL import Image, ImageTk

MIN_SCALE = 0.1
MAX_SCALE = 4.0
SIDE_BY_SIDE_GAP = 16

# "Нет" | "Шторка" | "2-up" -> внутренние режимы
COMPARE_MODES = {"Нет": "off", "Шторка": "wipe", "2-up": "side_by_side"}


def _clamp_scale(scale: float) -> float:
    return max(MIN_SCALE, min(MAX_SCALE, scale))


class ImageViewer(ctk.CTkFrame):
    """Канва «до/после»: основа слева или под шторкой, результат справа или поверх."""
    def __init__(self, master: ctk.CTk | tk.Misc, **kwargs) -> None:
        super().__init__(master, **kwargs)
        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(0, weight=1)

        bg = "#1f1f1f" if ctk.get_appearance_mode().lower() == "dark" else "#f2f2f2"
        self._canvas = tk.Canvas(self, highlightthickness=0, bg=bg)
        self._canvas.grid(row=0, column=0, sticky="nsew")

        self._base_image: Optional[Image.Image] = None
        self._composite_image: Optional[Image.Image] = None
        # ссылки на PhotoImage, иначе Tk освобождает их до отрисовки
        self._tk_images: list[ImageTk.PhotoImage] = []

        self._scale: float = 1.0
        self._top_left: Optional[Tuple[int, int]] = None
        self._pan_anchor: Optional[Tuple[int, int, int, int]] = None  # canvas x, y, top-left x, y

        self._compare_mode: str = "off"
        self._wipe_ratio: float = 0.5

        self.on_cursor_move: Optional[Callable[[Optional[int], Optional[int], Optional[Tuple[int, int, int, int]]], None]] = None
        self.on_zoom_change: Optional[Callable[[int], None]] = None

        self._canvas.bind("<Configure>", lambda _e: self._render())
        self._canvas.bind("<Motion>", self._on_mouse_move)
        self._canvas.bind("<Leave>", lambda _e: self._emit_cursor(None, None, None))
        self._canvas.bind("<MouseWheel>", self._on_mouse_wheel)  # Windows/macOS
        self._canvas.bind("<Button-4>", self._on_mouse_wheel)  # Linux scroll up
        self._canvas.bind("<Button-5>", self._on_mouse_wheel)  # Linux scroll down
        self._canvas.bind("<ButtonPress-1>", self._on_pan_start)
        self._canvas.bind("<B1-Motion>", self._on_pan_move)
        self._canvas.bind("<ButtonRelease-1>", lambda _e: setattr(self, "_pan_anchor", None))

    # ---- Public API ----
    def set_base_image(self, image: Image.Image) -> None:
        """Новая основа: результат сбрасывается, масштаб подгоняется под окно."""
        self._base_image = image.convert("RGBA")
        self._composite_image = None
        self.set_zoom_to_fit()

    def set_composite_image(self, image: Optional[Image.Image]) -> None:
        self._composite_image = image.convert("RGBA") if image is not None else None
        self._render()

    def set_zoom_to_fit(self) -> None:
        self._scale = self._fit_scale()
        self._top_left = None
        self._render()

    def set_zoom_percent(self, zoom_percent: int) -> None:
        self._scale = _clamp_scale(zoom_percent / 100.0)
        self._render()

    def get_zoom_percent(self) -> int:
        return int(round(self._scale * 100))

    def set_compare_mode(self, mode: str) -> None:
        self._compare_mode = COMPARE_MODES.get(mode, "off")
        self._top_left = None
        self._render()

    def set_wipe_percent(self, percent: int) -> None:
        self._wipe_ratio = max(0.0, min(1.0, percent / 100.0))
        if self._compare_mode == "wipe":
            self._render()

    # ---- Rendering ----
    def _scaled_size(self) -> Tuple[int, int]:
        assert self._base_image is not None
        w, h = self._base_image.size
        return max(1, int(w * self._scale)), max(1, int(h * self._scale))

    def _fit_scale(self) -> float:
        if self._base_image is None:
            return 1.0
        canvas_w = max(1, self._canvas.winfo_width())
        canvas_h = max(1, self._canvas.winfo_height())
        w, h = self._base_image.size
        return _clamp_scale(min(canvas_w / w, canvas_h / h))

    def _render(self) -> None:
        self._canvas.delete("all")
        self._tk_images.clear()
        if self._base_image is None:
            return

        sw, sh = self._scaled_size()
        before = self._base_image.resize((sw, sh), Image.Resampling.LANCZOS)
        after = None
        if self._composite_image is not None:
            # NEAREST: на предпросмотре видны отдельные пиксели знака
            after = self._composite_image.resize((sw, sh), Image.Resampling.NEAREST)

        side_by_side = self._compare_mode == "side_by_side" and after is not None
        content_w = sw * 2 + SIDE_BY_SIDE_GAP if side_by_side else sw
        ox, oy = self._clamp_top_left(content_w, sh)

        if after is None:
            self._draw(before, ox, oy)
        elif side_by_side:
            self._draw(before, ox, oy)
            self._draw(after, ox + sw + SIDE_BY_SIDE_GAP, oy)
        elif self._compare_mode == "wipe":
            split = int(round(sw * self._wipe_ratio))
            self._draw(before.crop((0, 0, split, sh)), ox, oy)
            self._draw(after.crop((split, 0, sw, sh)), ox + split, oy)
        else:
            self._draw(after, ox, oy)

    def _draw(self, image: Image.Image, x: int, y: int) -> None:
        if image.width < 1 or image.height < 1:
            return
        tk_image = ImageTk.PhotoImage(image)
        self._tk_images.append(tk_image)
        self._canvas.create_image(x, y, image=tk_image, anchor="nw")

    def _clamp_top_left(self, content_w: int, content_h: int) -> Tuple[int, int]:
        """Центрирует меньшее окна содержимое и не даёт увести большее за край."""
        canvas_w = self._canvas.winfo_width()
        canvas_h = self._canvas.winfo_height()

        def axis(content: int, canvas: int, current: Optional[int]) -> int:
            if content <= canvas:
                return (canvas - content) // 2
            if current is None:
                return 0
            return max(canvas - content, min(0, current))

        cur_x, cur_y = self._top_left if self._top_left is not None else (None, None)
        self._top_left = (axis(content_w, canvas_w, cur_x), axis(content_h, canvas_h, cur_y))
        return self._top_left

    # ---- Cursor ----
    def _emit_cursor(self, x: Optional[int], y: Optional[int], rgba: Optional[Tuple[int, int, int, int]]) -> None:
        if self.on_cursor_move:
            self.on_cursor_move(x, y, rgba)

    def _on_mouse_move(self, event: tk.Event) -> None:
        if self._base_image is None or self._top_left is None:
            return
        sw, sh = self._scaled_size()
        dx = event.x - self._top_left[0]
        dy = event.y - self._top_left[1]
        from_composite = self._composite_image is not None and self._compare_mode == "off"
        if self._compare_mode == "side_by_side" and self._composite_image is not None and dx >= sw + SIDE_BY_SIDE_GAP:
            dx -= sw + SIDE_BY_SIDE_GAP
            from_composite = True
        elif self._compare_mode == "wipe" and self._composite_image is not None:
            from_composite = dx >= int(round(sw * self._wipe_ratio))

        if not (0 <= dx < sw and 0 <= dy < sh):
            self._emit_cursor(None, None, None)
            return
        x = min(int(dx / self._scale), self._base_image.width - 1)
        y = min(int(dy / self._scale), self._base_image.height - 1)
        source = self._composite_image if from_composite else self._base_image
        self._emit_cursor(x, y, source.getpixel((x, y)))

    # ---- Zoom and pan ----
    def _on_mouse_wheel(self, event: tk.Event) -> None:
        if self._base_image is None or self._top_left is None:
            return
        # X11 присылает Button-4/5 без delta
        up = getattr(event, "num", None) == 4 or getattr(event, "delta", 0) > 0
        new_scale = _clamp_scale(self._scale * (1.1 if up else 1 / 1.1))
        if abs(new_scale - self._scale) < 1e-6:
            return
        # точка под курсором остаётся на месте
        ox, oy = self._top_left
        ix = (event.x - ox) / self._scale
        iy = (event.y - oy) / self._scale
        self._scale = new_scale
        self._top_left = (int(round(event.x - ix * new_scale)), int(round(event.y - iy * new_scale)))
        self._render()
        if self.on_zoom_change:
            self.on_zoom_change(self.get_zoom_percent())

    def _on_pan_start(self, event: tk.Event) -> None:
        if self._top_left is None:
            return
        self._canvas.focus_set()
        self._pan_anchor = (event.x, event.y, *self._top_left)

    def _on_pan_move(self, event: tk.Event) -> None:
        if self._pan_anchor is None:
            return
        sx, sy, ox, oy = self._pan_anchor
        self._top_left = (ox + event.x - sx, oy + event.y - sy)
        self._render()
