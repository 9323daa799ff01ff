"""Shared geometry types and small utilities.

Contains: point/size/rect value types, id generation, color parsing,
and path variable resolution.
"""

import re
import uuid
from typing import NamedTuple


# ── Geometry ───────────────────────────────────────────────────────


class Point(NamedTuple):
    x: float
    y: float


class Size(NamedTuple):
    width: float
    height: float


class Rect(NamedTuple):
    """Axis-aligned box in pixel space, top-left origin."""

    x: float
    y: float
    width: float
    height: float

    def contains(self, point: Point) -> bool:
        """Closed containment test (edges count as inside)."""
        return (
            self.x <= point.x <= self.x + self.width
            and self.y <= point.y <= self.y + self.height
        )


def full_frame(size: Size) -> Rect:
    """Rect covering the whole frame of the given size."""
    return Rect(0.0, 0.0, float(size.width), float(size.height))


# ── Identity ───────────────────────────────────────────────────────


def new_id() -> str:
    """Return a fresh globally-unique id."""
    return str(uuid.uuid4())


# ── Color utilities ────────────────────────────────────────────────


def parse_hex_color(hex_str: str) -> tuple[int, int, int]:
    """Convert '#RRGGBB' or 'RRGGBB' string to (R, G, B) tuple."""
    hex_str = hex_str.lstrip("#")
    if len(hex_str) != 6 or not all(c in "0123456789abcdefABCDEF" for c in hex_str):
        raise ValueError(f"Invalid hex color: '#{hex_str}'")
    return (int(hex_str[0:2], 16), int(hex_str[2:4], 16), int(hex_str[4:6], 16))


# ── Path utilities ─────────────────────────────────────────────────


def resolve_path_vars(text: str, paths: dict[str, str]) -> str:
    """Replace ${name} variables in a string using the paths dict."""
    def _replace(match):
        key = match.group(1)
        if key not in paths:
            raise ValueError(f"Unknown path variable: ${{{key}}}")
        return paths[key]
    return re.sub(r"\$\{(\w+)\}", _replace, text)
