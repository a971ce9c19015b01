# dial_layout.py
"""
Geometry and layout for the analog clock face.

Every function here is a pure function of the drawing area size and a
time sample. The only state kept between redraws is the geometry of the
last seen area size, memoized by DialLayoutEngine.compute_geometry.
"""
import logging
import math
import threading
from collections import namedtuple
from dataclasses import dataclass

from draw_commands import CircleCommand, LineCommand, PointCommand, TextCommand

logger = logging.getLogger(__name__)

MINOR_TICK_LAST_INDEX = 60
MAJOR_TICK_LAST_INDEX = 30
NUMERALS = range(1, 13)


class DegenerateGeometryError(ValueError):
    """The drawing area has a zero or negative dimension."""


@dataclass(frozen=True)
class DialStyle:
    """Fixed measurements and stroke widths of the clock face."""
    padding: int = 50
    outer_margin: int = 32
    font_family: str = "Sans"
    font_size: float = 64.0
    face_stroke_width: float = 32.0
    hour_hand_width: float = 16.0
    minute_hand_width: float = 8.0
    second_hand_width: float = 4.0
    major_tick_width: float = 10.0
    minor_tick_width: float = 4.0
    # Minute and second hands use the hour hand length for their y offset.
    mirror_hour_hand_y_scale: bool = False


@dataclass(frozen=True)
class DialGeometry:
    width: int
    height: int
    padding: int
    outer_margin: int
    center_x: int
    center_y: int
    min_dimension: int
    face_radius: int
    dial_radius: int
    hour_hand_length: int
    minute_hand_length: int

    @classmethod
    def from_area(cls, width, height, padding=50, outer_margin=32):
        """Derives the dial measurements for a width x height drawing area."""
        usable_width, usable_height = max(0, int(width)), max(0, int(height))
        min_dimension = min(usable_width, usable_height)
        half = min_dimension // 2
        face_radius = max(0, half - outer_margin)
        dial_radius = max(0, half - padding - 2 * outer_margin)
        return cls(
            width=int(width),
            height=int(height),
            padding=padding,
            outer_margin=outer_margin,
            center_x=usable_width // 2,
            center_y=usable_height // 2,
            min_dimension=min_dimension,
            face_radius=face_radius,
            dial_radius=dial_radius,
            hour_hand_length=dial_radius // 2,
            minute_hand_length=dial_radius - dial_radius // 4,
        )

    @property
    def is_degenerate(self):
        return self.width <= 0 or self.height <= 0

    @property
    def tick_radius(self):
        return self.dial_radius + self.padding


@dataclass(frozen=True)
class TimeSample:
    hour24: int
    minute: int
    second: int

    @classmethod
    def from_datetime(cls, dt):
        return cls(hour24=dt.hour, minute=dt.minute, second=dt.second)


@dataclass(frozen=True)
class HandVector:
    angle_radians: float
    length: float

    def endpoint(self, center_x, center_y, y_length=None):
        """Returns the tip of the hand drawn from (center_x, center_y)."""
        y_length = self.length if y_length is None else y_length
        return (center_x + math.cos(self.angle_radians) * self.length,
                center_y + math.sin(self.angle_radians) * y_length)


HandSet = namedtuple("HandSet", ["hour", "minute", "second"])


@dataclass(frozen=True)
class TickPoint:
    x: float
    y: float
    is_major: bool
    angle_radians: float


@dataclass(frozen=True)
class NumeralGlyph:
    text: str
    width: float
    height: float
    x: float
    y: float
    angle_radians: float


def to_hour12(hour24):
    """
    Converts a 0-23 hour to the value used for the hour hand position.
    Noon and midnight both map to 12, never 0.
    """
    if hour24 > 12:
        return hour24 - 12
    if hour24 == 0:
        return 12
    return hour24


def _clock_angle(position):
    """Angle for a position on the 60-step dial, with 0 at twelve o'clock."""
    return math.pi * position / 30 - math.pi / 2


def compute_hands(geometry, time):
    """Returns the hour, minute and second hand vectors for a time sample."""
    hour_position = (to_hour12(time.hour24) + time.minute / 60.0) * 5
    return HandSet(
        hour=HandVector(_clock_angle(hour_position), geometry.hour_hand_length),
        minute=HandVector(_clock_angle(time.minute), geometry.minute_hand_length),
        # The second hand shares the minute hand length.
        second=HandVector(_clock_angle(time.second), geometry.minute_hand_length),
    )


def _ticks(geometry, last_index, step, is_major):
    radius = geometry.tick_radius
    points = []
    for index in range(last_index + 1):
        angle = step * index
        points.append(TickPoint(
            x=geometry.center_x + math.cos(angle) * radius,
            y=geometry.center_y + math.sin(angle) * radius,
            is_major=is_major,
            angle_radians=angle,
        ))
    return points


def minor_ticks(geometry):
    """61 minute marks; the first and last coincide."""
    return _ticks(geometry, MINOR_TICK_LAST_INDEX, math.pi / 30, False)


def major_ticks(geometry):
    """31 hour marks, going two and a half times around the dial."""
    return _ticks(geometry, MAJOR_TICK_LAST_INDEX, math.pi / 6, True)


def numeral_positions(geometry, measure_text):
    """
    Places the numerals 1 to 12 on the dial radius.

    `measure_text` returns the (width, height) bounding box of a string in
    the face font. The anchor is the baseline-left point that centers the
    glyph on its position.
    """
    glyphs = []
    for number in NUMERALS:
        text = str(number)
        glyph_width, glyph_height = measure_text(text)
        angle = math.pi / 6 * (number - 3)
        glyphs.append(NumeralGlyph(
            text=text,
            width=glyph_width,
            height=glyph_height,
            x=geometry.center_x + math.cos(angle) * geometry.dial_radius - glyph_width / 2,
            y=geometry.center_y + math.sin(angle) * geometry.dial_radius + glyph_height / 2,
            angle_radians=angle,
        ))
    return glyphs


class DialLayoutEngine:
    """
    Turns a drawing area size and a time sample into draw commands.

    The host calls compute_geometry with the current allocation on every
    frame; geometry is only recomputed when the size changes.
    """

    compute_hands = staticmethod(compute_hands)
    minor_ticks = staticmethod(minor_ticks)
    major_ticks = staticmethod(major_ticks)
    numeral_positions = staticmethod(numeral_positions)

    def __init__(self, style=None):
        self.style = style or DialStyle()
        self._cache = None
        self._cache_lock = threading.Lock()

    def compute_geometry(self, width, height):
        key = (width, height)
        with self._cache_lock:
            cached = self._cache
            if cached is not None and cached[0] == key:
                return cached[1]
            geometry = DialGeometry.from_area(width, height, self.style.padding, self.style.outer_margin)
            # Key and geometry are swapped in together.
            self._cache = (key, geometry)
        logger.debug("Dial geometry recomputed for %sx%s: face_radius=%s dial_radius=%s",
                     width, height, geometry.face_radius, geometry.dial_radius)
        return geometry

    def dial_outline(self, geometry):
        return CircleCommand(geometry.center_x, geometry.center_y, geometry.face_radius,
                             self.style.face_stroke_width)

    def _hand_line(self, geometry, hand, stroke_width, y_length=None):
        x2, y2 = hand.endpoint(geometry.center_x, geometry.center_y, y_length)
        return LineCommand(geometry.center_x, geometry.center_y, x2, y2, stroke_width)

    def render(self, geometry, time, measure_text):
        """Returns the draw commands for one frame, in paint order."""
        if geometry.is_degenerate:
            raise DegenerateGeometryError(
                f"Cannot lay out a {geometry.width}x{geometry.height} drawing area")

        style = self.style
        hands = compute_hands(geometry, time)
        y_length = geometry.hour_hand_length if style.mirror_hour_hand_y_scale else None

        commands = [self.dial_outline(geometry)]
        commands.append(self._hand_line(geometry, hands.hour, style.hour_hand_width))
        commands.append(self._hand_line(geometry, hands.minute, style.minute_hand_width, y_length))
        commands.append(self._hand_line(geometry, hands.second, style.second_hand_width, y_length))
        commands.extend(
            TextCommand(glyph.text, glyph.x, glyph.y, style.font_family, style.font_size)
            for glyph in numeral_positions(geometry, measure_text)
        )
        commands.extend(PointCommand(p.x, p.y, style.major_tick_width) for p in major_ticks(geometry))
        commands.extend(PointCommand(p.x, p.y, style.minor_tick_width) for p in minor_ticks(geometry))
        return commands

    def paint_frame(self, context, width, height, time, measure_text, rasterizer):
        """
        Lays out one frame and hands it to `rasterizer.draw(context, commands)`.
        Returns False, drawing nothing, for a degenerate area or a missing time.
        """
        geometry = self.compute_geometry(width, height)
        if geometry.is_degenerate:
            logger.debug("Skipping clock frame for %sx%s area.", width, height)
            return False
        if time is None:
            return False
        rasterizer.draw(context, self.render(geometry, time, measure_text))
        return True
