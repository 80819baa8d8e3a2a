import numpy as np
import pytest
from PIL import Image

from watermark_app.models.image_model import RasterImage


@pytest.fixture()
def make_image():
    """Фабрика изображений, залитых одним цветом."""
    def _make(width, height, rgba=(0, 0, 0, 255), bits_per_pixel=24, color_components=3):
        return RasterImage.filled(width, height, rgba, bits_per_pixel=bits_per_pixel, color_components=color_components)

    return _make


@pytest.fixture()
def checker_watermark():
    """Водяной знак 2×2 RGBA с четырьмя разными непрозрачными цветами."""
    pixels = np.array(
        [
            [[255, 0, 0, 255], [0, 255, 0, 255]],
            [[0, 0, 255, 255], [255, 255, 255, 255]],
        ],
        dtype=np.uint8,
    )
    return RasterImage(pixels=pixels, bits_per_pixel=32)


@pytest.fixture()
def write_png(tmp_path):
    """Сохраняет массив (h, w, 3|4) в PNG и возвращает путь строкой."""
    def _write(name, array, mode=None):
        path = tmp_path / name
        image = Image.fromarray(np.asarray(array, dtype=np.uint8))
        if mode is not None:
            image = image.convert(mode)
        image.save(path)
        return str(path)

    return _write
