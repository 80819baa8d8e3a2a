import numpy as np
import pytest

from watermark_app.exceptions import (
    AlphaChannelUnavailableError,
    DimensionMismatchError,
    InvalidWatermarkPixelError,
    PositionInputOutOfRangeError,
)
from watermark_app.models.image_model import RasterImage
from watermark_app.models.watermark_model import (
    Color,
    ColorKey,
    GridPlacement,
    SinglePlacement,
    UseAlphaChannel,
    WatermarkSettings,
)
from watermark_app.services.watermark_service import WatermarkService, blend_pixel


@pytest.fixture()
def service():
    return WatermarkService()


def test_half_opacity_single_example(service, make_image):
    base = make_image(4, 4, (0, 0, 0, 255))
    watermark = make_image(2, 2, (255, 255, 255, 255), bits_per_pixel=32)
    settings = WatermarkSettings(UseAlphaChannel(), 50, SinglePlacement(1, 1))

    out = service.compose(base, watermark, settings)

    for y in range(4):
        for x in range(4):
            expected = (127, 127, 127, 255) if 1 <= x <= 2 and 1 <= y <= 2 else (0, 0, 0, 255)
            assert out.get_pixel(x, y) == expected


def test_full_opacity_copies_watermark_and_zero_keeps_base(service, make_image):
    base = make_image(3, 3, (10, 20, 30, 255))
    watermark = make_image(3, 3, (200, 150, 100, 255))

    full = service.compose(base, watermark, WatermarkSettings(ColorKey(), 100, SinglePlacement(0, 0)))
    none = service.compose(base, watermark, WatermarkSettings(ColorKey(), 0, SinglePlacement(0, 0)))

    assert full.get_pixel(1, 1)[:3] == (200, 150, 100)
    assert none.get_pixel(1, 1)[:3] == (10, 20, 30)


def test_blend_truncates_toward_zero(service, make_image):
    base = make_image(1, 1, (1, 2, 3, 255))
    watermark = make_image(1, 1, (254, 100, 0, 255))

    out = service.compose(base, watermark, WatermarkSettings(ColorKey(), 33, SinglePlacement(0, 0)))

    assert out.get_pixel(0, 0)[:3] == ((33 * 254 + 67 * 1) // 100, (33 * 100 + 67 * 2) // 100, (67 * 3) // 100)


@pytest.mark.parametrize("placement", [SinglePlacement(0, 0), GridPlacement()])
def test_translucent_watermark_pixel_aborts(service, make_image, placement):
    base = make_image(4, 4)
    watermark = make_image(2, 2, (255, 255, 255, 255), bits_per_pixel=32)
    watermark.set_pixel(1, 0, (255, 255, 255, 128))

    with pytest.raises(InvalidWatermarkPixelError):
        service.compose(base, watermark, WatermarkSettings(UseAlphaChannel(), 50, placement))


def test_color_key_mode_ignores_alpha_plane(service, make_image):
    base = make_image(2, 2, (0, 0, 0, 255))
    watermark = make_image(2, 2, (100, 100, 100, 128), bits_per_pixel=32)

    out = service.compose(base, watermark, WatermarkSettings(ColorKey(), 100, GridPlacement()))

    assert out.get_pixel(0, 0)[:3] == (100, 100, 100)


def test_fully_transparent_pixels_keep_base(service, make_image):
    base = make_image(2, 2, (9, 9, 9, 255))
    watermark = make_image(2, 2, (255, 0, 0, 255), bits_per_pixel=32)
    watermark.set_pixel(0, 0, (255, 0, 0, 0))

    out = service.compose(base, watermark, WatermarkSettings(UseAlphaChannel(), 100, SinglePlacement(0, 0)))

    assert out.get_pixel(0, 0)[:3] == (9, 9, 9)
    assert out.get_pixel(1, 0)[:3] == (255, 0, 0)


def test_color_key_pixel_is_never_blended(service, make_image, checker_watermark):
    base = make_image(2, 2, (50, 50, 50, 255))
    key = ColorKey(Color(0, 255, 0))

    out = service.compose(base, checker_watermark, WatermarkSettings(key, 100, SinglePlacement(0, 0)))

    assert out.get_pixel(1, 0)[:3] == (50, 50, 50)
    assert out.get_pixel(0, 0)[:3] == (255, 0, 0)


def test_alpha_mode_does_not_consult_color_key(make_image):
    watermark = make_image(1, 1, (0, 255, 0, 255), bits_per_pixel=32)
    settings = WatermarkSettings(UseAlphaChannel(), 100, SinglePlacement(0, 0))

    assert settings.transparency_color is None
    out = WatermarkService().compose(make_image(1, 1), watermark, settings)
    assert out.get_pixel(0, 0)[:3] == (0, 255, 0)


def test_grid_wraps_watermark_coordinates(service, make_image, checker_watermark):
    base = make_image(5, 3, (0, 0, 0, 255))

    out = service.compose(base, checker_watermark, WatermarkSettings(UseAlphaChannel(), 100, GridPlacement()))

    for y in range(3):
        for x in range(5):
            assert out.get_pixel(x, y)[:3] == checker_watermark.get_pixel(x % 2, y % 2)[:3]


def test_single_leaves_pixels_outside_footprint(service, checker_watermark):
    rng = np.random.default_rng(7)
    pixels = rng.integers(0, 256, size=(6, 7, 4), dtype=np.uint8)
    base = RasterImage(pixels=pixels, bits_per_pixel=24)

    out = service.compose(base, checker_watermark, WatermarkSettings(UseAlphaChannel(), 60, SinglePlacement(3, 2)))

    mask = np.ones((6, 7), dtype=bool)
    mask[2:4, 3:5] = False
    assert np.array_equal(out.rgb[mask], base.rgb[mask])
    assert not np.array_equal(out.rgb[2:4, 3:5], base.rgb[2:4, 3:5])


def test_output_is_opaque_rgb_and_inputs_untouched(service, make_image, checker_watermark):
    base = make_image(3, 3, (40, 40, 40, 0), bits_per_pixel=32)
    base_before = base.pixels.copy()
    watermark_before = checker_watermark.pixels.copy()

    out = service.compose(base, checker_watermark, WatermarkSettings(ColorKey(), 50, GridPlacement()))

    assert out.bits_per_pixel == 24
    assert out.color_components == 3
    assert (out.width, out.height) == (3, 3)
    assert np.all(out.alpha == 255)
    assert np.array_equal(base.pixels, base_before)
    assert np.array_equal(checker_watermark.pixels, watermark_before)


def test_grid_still_requires_base_not_smaller(service, make_image):
    base = make_image(3, 5)
    watermark = make_image(4, 2)

    with pytest.raises(DimensionMismatchError):
        service.compose(base, watermark, WatermarkSettings(ColorKey(), 50, GridPlacement()))


def test_offset_boundary(service, make_image):
    base = make_image(5, 4)
    watermark = make_image(2, 3)

    service.compose(base, watermark, WatermarkSettings(ColorKey(), 50, SinglePlacement(3, 1)))
    with pytest.raises(PositionInputOutOfRangeError):
        service.compose(base, watermark, WatermarkSettings(ColorKey(), 50, SinglePlacement(4, 1)))
    with pytest.raises(PositionInputOutOfRangeError):
        service.compose(base, watermark, WatermarkSettings(ColorKey(), 50, SinglePlacement(3, 2)))


def test_alpha_mode_needs_alpha_channel(service, make_image):
    with pytest.raises(AlphaChannelUnavailableError):
        service.compose(make_image(2, 2), make_image(1, 1), WatermarkSettings(UseAlphaChannel(), 50, GridPlacement()))


def test_blend_pixel_rule():
    assert blend_pixel((0, 0, 0), (255, 255, 255, 255), 50) == (127, 127, 127)
    assert blend_pixel((1, 2, 3), (9, 9, 9, 0), 100) == (1, 2, 3)
    assert blend_pixel((1, 2, 3), (9, 9, 9, 255), 100, Color(9, 9, 9)) == (1, 2, 3)
    with pytest.raises(InvalidWatermarkPixelError):
        blend_pixel((1, 2, 3), (9, 9, 9, 1), 100)


def test_vectorised_grid_matches_pixel_rule(service):
    rng = np.random.default_rng(11)
    base = RasterImage(pixels=rng.integers(0, 256, size=(7, 9, 4), dtype=np.uint8))
    wm_pixels = rng.integers(0, 4, size=(3, 4, 4), dtype=np.uint8) * 85
    wm_pixels[..., 3] = rng.choice([0, 255], size=(3, 4))
    watermark = RasterImage(pixels=wm_pixels, bits_per_pixel=32)
    opacity = 37

    out = service.apply_grid(base, watermark, UseAlphaChannel(), opacity)

    for y in range(base.height):
        for x in range(base.width):
            expected = blend_pixel(base.get_pixel(x, y)[:3], watermark.get_pixel(x % 4, y % 3), opacity)
            assert out.get_pixel(x, y)[:3] == expected
