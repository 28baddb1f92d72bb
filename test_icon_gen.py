"""Tests for the generated tray icon."""

from datetime import date

from icon_gen import create_icon_image


def test_icon_is_64px_rgba():
    img = create_icon_image(date(2024, 3, 15))
    assert img.size == (64, 64)
    assert img.mode == "RGBA"


def test_icon_has_header_band_and_text():
    img = create_icon_image(date(2024, 3, 28))
    # Header band is drawn in the accent colour
    assert img.getpixel((32, 8))[:3] == (0x00, 0x78, 0xD4)
    # Some dark pixels from the day number below the band
    body = img.crop((4, 20, 60, 60)).convert("L")
    assert min(body.getdata()) < 100
