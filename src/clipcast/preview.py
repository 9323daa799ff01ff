"""Draw zoom keyframe boxes over the output frame as a storyboard.

Renders every keyframe of a schedule as an outlined box on a canvas the
size of the output frame (optionally scaled down), labelled with its
index and timestamp. Useful for eyeballing where the camera goes
without decoding any video.
"""

from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from .common import Size, parse_hex_color


# ── Constants ────────────────────────────────────────────────────

PREVIEW_MAX_WIDTH = 960          # storyboard is scaled down to at most this width
BOX_COLORS = [
    (80, 220, 120),
    (240, 70, 70),
    (90, 160, 250),
    (250, 200, 60),
    (200, 110, 240),
]
FULL_FRAME_COLOR = (136, 136, 136)
LABEL_FONT_SIZE = 14

FONT_PATHS = [
    Path.home() / ".local/share/fonts/Inter.ttc",
    Path("/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf"),
]


def load_font(size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    """Load Inter (or fallback) at the given size."""
    for font_path in FONT_PATHS:
        if font_path.exists():
            try:
                return ImageFont.truetype(str(font_path), size=size, index=0)
            except (OSError, IndexError):
                continue
    return ImageFont.load_default()


def render_zoom_preview(
    schedule,
    output_size: Size,
    background: str = "#1e1e1e",
    max_width: int = PREVIEW_MAX_WIDTH,
) -> Image.Image:
    """Draw a zoom schedule as a storyboard image.

    Args:
        schedule: List of ZoomKeyframe, as from calculate_zoom_schedule.
        output_size: Output frame size the boxes are expressed in.
        background: Canvas color as '#RRGGBB'.
        max_width: Scale the canvas down to at most this width.

    Returns:
        RGB Pillow image.
    """
    out_w, out_h = output_size
    scale = min(1.0, max_width / out_w)
    width, height = max(1, round(out_w * scale)), max(1, round(out_h * scale))

    canvas = np.full((height, width, 3), parse_hex_color(background), dtype=np.uint8)
    img = Image.fromarray(canvas)
    draw = ImageDraw.Draw(img)
    font = load_font(LABEL_FONT_SIZE)

    for i, kf in enumerate(schedule):
        x, y, w, h = (v * scale for v in kf.zoom_box)
        is_full = (w * h) >= width * height - 1
        color = FULL_FRAME_COLOR if is_full else BOX_COLORS[i % len(BOX_COLORS)]

        right = min(x + w, width - 1)
        bottom = min(y + h, height - 1)
        draw.rectangle([x, y, right, bottom], outline=color, width=2)
        draw.text((x + 4, y + 4), f"#{i} {kf.timestamp / 1000:.2f}s", fill=color, font=font)

    return img


def save_zoom_preview(schedule, output_size: Size, path: str | Path, **kwargs) -> None:
    """Render and write a storyboard PNG, creating parent directories."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    render_zoom_preview(schedule, output_size, **kwargs).save(str(p))
