import math
from typing import Tuple

from PIL import Image, ImageDraw, ImageFilter

from .fonts import load_bold_font

RGB = Tuple[int, int, int]

SIZE = 512
CORNER_RADIUS = round(SIZE / 32)
LABEL_BAR_HEIGHT = 107
SHADOW_HEIGHT = 10
SHADOW_MAX_ALPHA = 0.5
GLYPH_SHADOW_BLUR = 20
LABEL_COLOR: RGB = (0x33, 0x33, 0x33)
WHITE: RGB = (255, 255, 255)


def parse_hex(color: str) -> RGB:
    """
    Parse '#RRGGBB' or '#RGB' into an RGB tuple.
    """
    s = color.strip().lstrip("#")
    if len(s) == 3:
        s = "".join(ch * 2 for ch in s)
    if len(s) != 6:
        raise ValueError(f"Invalid hex color: {color!r}")
    return (int(s[0:2], 16), int(s[2:4], 16), int(s[4:6], 16))


def rounded_mask(size: int = SIZE, radius: int = CORNER_RADIUS) -> Image.Image:
    mask = Image.new("L", (size, size), 0)
    ImageDraw.Draw(mask).rounded_rectangle(
        [0, 0, size - 1, size - 1], radius=radius, fill=255
    )
    return mask


def diagonal_gradient(start: RGB, end: RGB, size: int = SIZE) -> Image.Image:
    """
    Linear gradient along the top-left to bottom-right diagonal.
    """
    span = 2 * (size - 1) or 1
    weights = Image.new("L", (size, size))
    weights.putdata([((x + y) * 255) // span for y in range(size) for x in range(size)])
    return Image.composite(
        Image.new("RGBA", (size, size), end + (255,)),
        Image.new("RGBA", (size, size), start + (255,)),
        weights,
    )


def draw_label_bar(img: Image.Image, bar_height: int = LABEL_BAR_HEIGHT) -> None:
    """
    Opaque white bar along the bottom edge. Bottom corners follow the icon's
    rounding; top corners stay square.
    """
    w, h = img.size
    ImageDraw.Draw(img).rounded_rectangle(
        [0, h - bar_height, w - 1, h - 1],
        radius=CORNER_RADIUS,
        fill=WHITE + (255,),
        corners=(False, False, True, True),
    )


def draw_bar_shadow(
    img: Image.Image,
    bar_height: int = LABEL_BAR_HEIGHT,
    shadow_height: int = SHADOW_HEIGHT,
) -> Image.Image:
    """
    Soft shadow just above the bar: transparent at the top, half-opaque black
    where it meets the bar.
    """
    w, h = img.size
    overlay = Image.new("RGBA", (w, h), (0, 0, 0, 0))
    draw = ImageDraw.Draw(overlay)

    top = h - bar_height - shadow_height
    for i in range(shadow_height):
        alpha = round(255 * SHADOW_MAX_ALPHA * (i + 0.5) / shadow_height)
        draw.line([(0, top + i), (w, top + i)], fill=(0, 0, 0, alpha))

    return Image.alpha_composite(img, overlay)


def draw_label(
    img: Image.Image, text: str, bar_height: int = LABEL_BAR_HEIGHT
) -> None:
    """
    Letter-spaced bold label, centered in the bar.
    """
    w, h = img.size
    spaced = " ".join(text)
    font = load_bold_font(math.floor(bar_height * 0.5))

    draw = ImageDraw.Draw(img)
    left, top, right, bottom = draw.textbbox((0, 0), spaced, font=font)
    x = (w - (right - left)) / 2 - left
    y = h - bar_height / 2 - (bottom - top) / 2 - top
    draw.text((x, y), spaced, font=font, fill=LABEL_COLOR)


def compose_background(start_color: str, end_color: str, text: str) -> Image.Image:
    """
    Gradient background, label bar, bar shadow and label, transparent outside
    the rounded corners.
    """
    canvas = Image.new("RGBA", (SIZE, SIZE), (0, 0, 0, 0))
    canvas.paste(
        diagonal_gradient(parse_hex(start_color), parse_hex(end_color)),
        (0, 0),
        rounded_mask(),
    )

    draw_label_bar(canvas)
    canvas = draw_bar_shadow(canvas)
    draw_label(canvas, text)
    return canvas


def glyph_layer(
    glyph: Image.Image,
    position: Tuple[int, int],
    size: int = SIZE,
    blur: int = GLYPH_SHADOW_BLUR,
) -> Image.Image:
    """
    Full-canvas layer holding the glyph over a blurred black copy of its
    silhouette (no offset).
    """
    glyph = glyph.convert("RGBA")

    silhouette = Image.new("RGBA", glyph.size, (0, 0, 0, 255))
    silhouette.putalpha(glyph.getchannel("A"))

    shadow = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    shadow.paste(silhouette, position)
    shadow = shadow.filter(ImageFilter.GaussianBlur(blur / 2))

    placed = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    placed.paste(glyph, position)
    return Image.alpha_composite(shadow, placed)
