import pytest

from watermark_app.exceptions import (
    AlphaChannelUnavailableError,
    DimensionMismatchError,
    ImageFormatError,
    InvalidBitsPerPixelError,
    InvalidColorComponentsError,
    InvalidFileNameError,
    OpacityOutOfRangeError,
    PositionInputOutOfRangeError,
    TransparencyColorOutOfRangeError,
)
from watermark_app.models.watermark_model import (
    Color,
    ColorKey,
    GridPlacement,
    SinglePlacement,
    UseAlphaChannel,
    WatermarkSettings,
)
from watermark_app.services.validation_service import ValidationService


@pytest.fixture()
def validator():
    return ValidationService()


def test_pixel_format_accepts_24_and_32_bit(validator, make_image):
    validator.validate_pixel_format(make_image(1, 1), "image")
    validator.validate_pixel_format(make_image(1, 1, bits_per_pixel=32), "watermark")


def test_pixel_format_rejects_wrong_components(validator, make_image):
    gray = make_image(1, 1, bits_per_pixel=8, color_components=1)

    with pytest.raises(InvalidColorComponentsError) as info:
        validator.validate_pixel_format(gray, "watermark")

    # компоненты проверяются раньше глубины
    assert str(info.value) == "The number of watermark color components isn't 3."
    assert isinstance(info.value, ImageFormatError)


def test_pixel_format_rejects_wrong_depth(validator, make_image):
    palette = make_image(1, 1, bits_per_pixel=8)

    with pytest.raises(InvalidBitsPerPixelError, match="The image isn't 24 or 32-bit."):
        validator.validate_pixel_format(palette, "image")


@pytest.mark.parametrize("size", [(3, 4), (4, 3), (2, 2)])
def test_dimensions_reject_smaller_base(validator, make_image, size):
    with pytest.raises(DimensionMismatchError, match="The watermark's dimensions are larger."):
        validator.validate_dimensions(make_image(*size), make_image(4, 4))


def test_dimensions_accept_equal_size(validator, make_image):
    validator.validate_dimensions(make_image(4, 4), make_image(4, 4))


@pytest.mark.parametrize("value", [0, 50, 100])
def test_opacity_in_range(validator, value):
    assert validator.validate_opacity(value) == value


@pytest.mark.parametrize("value", [-1, 101])
def test_opacity_out_of_range(validator, value):
    with pytest.raises(OpacityOutOfRangeError):
        validator.validate_opacity(value)


def test_color_key(validator):
    assert validator.validate_color_key((0, 128, 255)) == Color(0, 128, 255)
    with pytest.raises(TransparencyColorOutOfRangeError):
        validator.validate_color_key((0, 256, 0))
    with pytest.raises(TransparencyColorOutOfRangeError):
        validator.validate_color_key((0, 0))


def test_single_offset_range(validator, make_image):
    base, watermark = make_image(10, 6), make_image(4, 4)

    assert validator.position_range(base, watermark) == (6, 2)
    assert validator.validate_single_offset(6, 2, base, watermark) == (6, 2)
    assert validator.validate_single_offset(0, 0, base, watermark) == (0, 0)
    for x, y in [(7, 0), (0, 3), (-1, 0), (0, -1)]:
        with pytest.raises(PositionInputOutOfRangeError):
            validator.validate_single_offset(x, y, base, watermark)


def test_transparency_mode(validator, make_image):
    validator.validate_transparency_mode(make_image(1, 1, bits_per_pixel=32), UseAlphaChannel())
    validator.validate_transparency_mode(make_image(1, 1), ColorKey())
    with pytest.raises(AlphaChannelUnavailableError):
        validator.validate_transparency_mode(make_image(1, 1), UseAlphaChannel())


@pytest.mark.parametrize("name, tag", [("out.png", "png"), ("dir/out.jpg", "jpg"), ("a.b.png", "png")])
def test_output_filename_ok(validator, name, tag):
    assert validator.validate_output_filename(name) == tag


@pytest.mark.parametrize("name", [".png", "out.jpeg", "out.PNG", "out.gif", "out", "out.png.txt"])
def test_output_filename_rejected(validator, name):
    with pytest.raises(InvalidFileNameError, match='The output file extension isn\'t "jpg" or "png".'):
        validator.validate_output_filename(name)


def test_settings_fail_fast_order(validator, make_image):
    gray_base = make_image(1, 1, bits_per_pixel=8, color_components=1)
    big_watermark = make_image(5, 5, bits_per_pixel=8)
    settings = WatermarkSettings(ColorKey(), 500, SinglePlacement(9, 9))

    with pytest.raises(InvalidColorComponentsError, match="image"):
        validator.validate_settings(gray_base, big_watermark, settings)
    with pytest.raises(InvalidBitsPerPixelError, match="watermark"):
        validator.validate_settings(make_image(1, 1), big_watermark, settings)
    with pytest.raises(DimensionMismatchError):
        validator.validate_settings(make_image(1, 1), make_image(5, 5), settings)
    with pytest.raises(OpacityOutOfRangeError):
        validator.validate_settings(make_image(5, 5), make_image(5, 5), settings)


def test_settings_grid_skips_offset_check(validator, make_image):
    validator.validate_settings(make_image(5, 5), make_image(2, 2), WatermarkSettings(ColorKey(), 10, GridPlacement()))
