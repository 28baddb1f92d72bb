"""Generate the system-tray icon (64×64 PIL Image, in-memory)."""

from datetime import date

from PIL import Image, ImageDraw, ImageFont

ACCENT = "#0078D4"


def _fit_font(draw: ImageDraw.ImageDraw, text: str, max_w: int, max_h: int):
    """Return the largest truetype font that fits, or the default bitmap font."""
    font_size = 60
    while font_size > 8:
        try:
            font = ImageFont.truetype("DejaVuSans-Bold.ttf", font_size)
        except OSError:
            try:
                font = ImageFont.truetype("segoeuib.ttf", font_size)
            except OSError:
                return ImageFont.load_default()
        bbox = draw.textbbox((0, 0), text, font=font)
        if bbox[2] - bbox[0] <= max_w and bbox[3] - bbox[1] <= max_h:
            return font
        font_size -= 1
    return ImageFont.load_default()


def create_icon_image(today: date | None = None) -> Image.Image:
    """Return a 64×64 RGBA tear-off calendar page showing the day of month."""
    size = 64
    band = 16
    today = today or date.today()
    text = str(today.day)

    img = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    draw = ImageDraw.Draw(img)
    draw.rectangle((0, 0, size - 1, size - 1), fill="white", outline=ACCENT)
    draw.rectangle((0, 0, size - 1, band), fill=ACCENT)

    font = _fit_font(draw, text, size - 8, size - band - 8)
    # Centre the visible pixels below the header band
    bbox = draw.textbbox((0, 0), text, font=font)
    x = (size - (bbox[2] - bbox[0])) / 2 - bbox[0]
    y = band + (size - band - (bbox[3] - bbox[1])) / 2 - bbox[1]
    draw.text((x, y), text, fill="black", font=font)

    return img
