# cairo_rasterizer.py
import gi
import logging
import math

import cairo

from draw_commands import CircleCommand, LineCommand, PointCommand, TextCommand

gi.require_version("Gdk", "4.0")
gi.require_version("Pango", "1.0")
gi.require_version("PangoCairo", "1.0")
from gi.repository import Gdk, Pango, PangoCairo

logger = logging.getLogger(__name__)


def font_description(font_family, font_size):
    """A Pango font for `font_family` at `font_size` pixels."""
    font_desc = Pango.FontDescription.from_string(font_family)
    font_desc.set_absolute_size(font_size * Pango.SCALE)
    return font_desc


class PangoTextMeasurer:
    """
    Measures strings in a fixed font with PangoCairo. Results are the ink
    extents in pixels, cached per string.
    """
    def __init__(self, font_family="Sans", font_size=64.0):
        self.font_family = font_family
        self.font_size = font_size
        self._extents = {}
        surface = cairo.ImageSurface(cairo.FORMAT_ARGB32, 1, 1)
        self._layout = PangoCairo.create_layout(cairo.Context(surface))
        self._layout.set_font_description(font_description(font_family, font_size))

    def __call__(self, text):
        if text not in self._extents:
            self._layout.set_text(text, -1)
            ink, _logical = self._layout.get_pixel_extents()
            self._extents[text] = (ink.width, ink.height)
        return self._extents[text]


class CairoRasterizer:
    """Paints draw commands onto a cairo context in a single colour."""

    def __init__(self, color=(0.0, 0.0, 0.0, 1.0)):
        self.color = color
        self._fonts = {}
        self._handlers = {
            CircleCommand: self._draw_circle,
            LineCommand: self._draw_line,
            PointCommand: self._draw_point,
            TextCommand: self._draw_text,
        }

    def draw(self, context, commands):
        context.save()
        context.set_antialias(cairo.ANTIALIAS_DEFAULT)
        context.set_source_rgba(*self.color)
        for command in commands:
            handler = self._handlers.get(type(command))
            if handler is None:
                raise TypeError(f"Unsupported draw command: {command!r}")
            handler(context, command)
        context.restore()

    def _draw_circle(self, context, circle):
        context.new_path()
        context.set_line_width(circle.stroke_width)
        context.arc(circle.center_x, circle.center_y, circle.radius, 0, 2 * math.pi)
        context.stroke()

    def _draw_line(self, context, line):
        context.new_path()
        context.set_line_width(line.stroke_width)
        context.set_line_cap(cairo.LINE_CAP_ROUND)
        context.move_to(line.x1, line.y1)
        context.line_to(line.x2, line.y2)
        context.stroke()

    def _draw_point(self, context, point):
        size = point.stroke_width
        context.new_path()
        context.rectangle(point.x - size / 2, point.y - size / 2, size, size)
        context.fill()

    def _draw_text(self, context, text):
        key = (text.font_family, text.font_size)
        if key not in self._fonts:
            self._fonts[key] = font_description(text.font_family, text.font_size)
        layout = PangoCairo.create_layout(context)
        layout.set_font_description(self._fonts[key])
        layout.set_text(text.text, -1)
        # Pango places the layout by its top-left corner; the anchor is the baseline.
        baseline = layout.get_baseline() / Pango.SCALE
        context.new_path()
        context.move_to(text.x, text.y - baseline)
        PangoCairo.show_layout(context, layout)


def parse_rgba(color_str):
    """Parses any CSS colour Gdk understands into a cairo (r, g, b, a) tuple."""
    rgba = Gdk.RGBA()
    if not rgba.parse(color_str):
        raise ValueError(f"Not a colour: {color_str!r}")
    return rgba.red, rgba.green, rgba.blue, rgba.alpha


def render_to_png(engine, width, height, time_sample, path, background=None, rasterizer=None):
    """
    Renders a single frame to a PNG file without a display.
    Returns False when the area is degenerate and nothing was written.
    """
    if width <= 0 or height <= 0:
        logger.warning("Snapshot skipped: cannot lay out a %sx%s drawing area", width, height)
        return False

    surface = cairo.ImageSurface(cairo.FORMAT_ARGB32, width, height)
    context = cairo.Context(surface)
    if background:
        context.set_source_rgba(*background)
        context.paint()
    measurer = PangoTextMeasurer(engine.style.font_family, engine.style.font_size)
    if not engine.paint_frame(context, width, height, time_sample, measurer, rasterizer or CairoRasterizer()):
        return False
    surface.write_to_png(path)
    logger.info("Snapshot of %sx%s written to %s", width, height, path)
    return True
