"""Точка входа в оконное приложение."""
from watermark_app.app import WatermarkApp
from watermark_app.config import configure_logging


def main() -> None:
    """Создаёт и запускает главное окно приложения."""
    configure_logging()
    app = WatermarkApp()
    app.mainloop()


if __name__ == "__main__":
    main()
