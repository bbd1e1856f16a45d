from typing import List

from PIL import ImageFont

BOLD_FONTS: List[str] = [
    # Linux
    "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationSans-Bold.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans-Bold.ttf",
    # macOS
    "/System/Library/Fonts/Supplemental/Arial Bold.ttf",
    "/Library/Fonts/Arial Bold.ttf",
    # Windows
    "C:/Windows/Fonts/arialbd.ttf",
    "C:/Windows/Fonts/calibrib.ttf",
    # Bare names are resolved through Pillow's font search path
    "DejaVuSans-Bold.ttf",
    "arialbd.ttf",
]


def load_bold_font(size: int) -> ImageFont.ImageFont:
    """
    Load a bold sans-serif TrueType font at the given pixel size.
    Tries common system fonts first so the label never renders with a
    pixelated bitmap face, then falls back to Pillow's scalable default.
    """
    for font_file in BOLD_FONTS:
        try:
            return ImageFont.truetype(font_file, size=size)
        except OSError:
            continue

    return ImageFont.load_default(size=size)
