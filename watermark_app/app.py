import customtkinter as ctk

from watermark_app.config import APPEARANCE_MODE, COLOR_THEME, WINDOW_MIN_SIZE, WINDOW_TITLE
from watermark_app.controllers.app_controller import AppController
from watermark_app.ui.image_viewer import ImageViewer
from watermark_app.ui.sidebar import Sidebar
from watermark_app.ui.bottom_bar import BottomBar


class WatermarkApp(ctk.CTk):
    def __init__(self) -> None:
        super().__init__()
        ctk.set_appearance_mode(APPEARANCE_MODE)
        ctk.set_default_color_theme(COLOR_THEME)

        self.title(WINDOW_TITLE)
        self.minsize(*WINDOW_MIN_SIZE)

        # root layout: left preview, right parameters
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=0)

        self._viewer = ImageViewer(self)
        self._viewer.grid(row=0, column=0, sticky="nsew", padx=(12, 6), pady=(12, 6))

        self._sidebar = Sidebar(self)
        self._sidebar.grid(row=0, column=1, sticky="ns", padx=(6, 12), pady=(12, 6))

        self._bottom = BottomBar(self)
        self._bottom.grid(row=1, column=0, columnspan=2, sticky="ew", padx=12, pady=(0, 12))

        self._controller = AppController(viewer=self._viewer, sidebar=self._sidebar, bottom=self._bottom, window=self)
        self._controller.bind_events()
