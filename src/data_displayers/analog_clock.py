# data_displayers/analog_clock.py
import gi
import logging

from data_displayer import DataDisplayer
from cairo_rasterizer import CairoRasterizer, PangoTextMeasurer
from config_model import coerce_clock_value, get_clock_config_model
from dial_layout import DialLayoutEngine, DialStyle
from redraw_scheduler import RedrawScheduler
from utils import populate_defaults_from_model

gi.require_version("Gtk", "4.0")
from gi.repository import Gtk, GLib

logger = logging.getLogger(__name__)


class AnalogClockDisplayer(DataDisplayer):

    def __init__(self, data_source, config, style=None):
        self._current_time_data = {}
        self.engine = DialLayoutEngine(style or DialStyle())
        self.rasterizer = CairoRasterizer()
        self.measure_text = PangoTextMeasurer(self.engine.style.font_family, self.engine.style.font_size)

        super().__init__(data_source, config)
        populate_defaults_from_model(self.config, get_clock_config_model())
        self.scheduler = RedrawScheduler(self._on_redraw_tick, GLib.timeout_add, GLib.source_remove,
                                         interval_ms=coerce_clock_value(self.config, "update_interval_ms"))
        self.widget.connect("realize", self._start_visual_update_timer)
        self.widget.connect("unrealize", self._stop_visual_update_timer)

    def _create_widget(self):
        self.drawing_area = Gtk.DrawingArea(name="analog-clock-drawing-area", hexpand=True, vexpand=True)
        self.drawing_area.set_draw_func(self.on_draw_clock)
        return self.drawing_area

    def _start_visual_update_timer(self, widget=None):
        self._refresh_time()
        self.scheduler.start()

    def _stop_visual_update_timer(self, widget=None):
        self.scheduler.stop()

    def _refresh_time(self):
        if self.data_source:
            self.update_display(self.data_source.get_data())

    def _on_redraw_tick(self):
        if not self.widget.get_realized():
            return False
        self._refresh_time()
        self.drawing_area.queue_draw()
        return True

    def apply_styles(self, style=None):
        """Swaps in a new dial style; the geometry cache starts over with it."""
        if style is not None:
            self.engine = DialLayoutEngine(style)
            self.measure_text = PangoTextMeasurer(style.font_family, style.font_size)
        if self.widget.get_realized():
            self._start_visual_update_timer()
        self.drawing_area.queue_draw()

    def update_display(self, data):
        if not data:
            return
        self._current_time_data = data

    def on_draw_clock(self, area, context, width, height):
        self.engine.paint_frame(context, width, height, self._current_time_data.get("time_sample"),
                                self.measure_text, self.rasterizer)

    def close(self):
        self._stop_visual_update_timer()
        super().close()
