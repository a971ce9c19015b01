# draw_commands.py
from dataclasses import dataclass


@dataclass(frozen=True)
class CircleCommand:
    """A stroked circle."""
    center_x: float
    center_y: float
    radius: float
    stroke_width: float


@dataclass(frozen=True)
class LineCommand:
    x1: float
    y1: float
    x2: float
    y2: float
    stroke_width: float


@dataclass(frozen=True)
class PointCommand:
    """A single dot whose size is the stroke width."""
    x: float
    y: float
    stroke_width: float


@dataclass(frozen=True)
class TextCommand:
    """Text drawn with its baseline starting at (x, y)."""
    text: str
    x: float
    y: float
    font_family: str
    font_size: float
