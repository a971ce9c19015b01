# main.py
import os
import sys
import signal
import logging

sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

import gi
gi.require_version("Gtk", "4.0")
from gi.repository import Gtk, Gio, GLib

from cairo_rasterizer import parse_rgba, render_to_png
from config_manager import config_manager
from data_displayers.analog_clock import AnalogClockDisplayer
from data_sources.analog_clock import AnalogClockDataSource
from dial_layout import DialLayoutEngine, TimeSample
from logging_config import setup_logging
from utils import parse_clock_time, parse_size

APP_VERSION = "1.0.0"
DEFAULT_WINDOW_SIZE = (500, 500)
DEFAULT_SNAPSHOT_SIZE = "500x500"

logger = logging.getLogger(__name__)


def write_snapshot(options, manager=config_manager):
    """
    Renders one frame for the --snapshot option. Returns the process exit
    status: 1 for a bad --size, --time or background colour, or a frame
    that could not be drawn.
    """
    try:
        width, height = parse_size(options.get('size', DEFAULT_SNAPSHOT_SIZE))
        if 'time' in options:
            hour, minute, second = parse_clock_time(options['time'])
            time_sample = TimeSample(hour, minute, second)
        else:
            time_sample = AnalogClockDataSource(manager.get_clock_config()).get_time_sample()
        background = parse_rgba(manager.get_clock_value("background_color"))
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    engine = DialLayoutEngine(manager.get_dial_style())
    if not render_to_png(engine, width, height, time_sample, options['snapshot'], background):
        return 1
    return 0


class MainWindow(Gtk.ApplicationWindow):
    def __init__(self, app):
        super().__init__(title="gClock", application=app)
        self.app = app

        clock_config = config_manager.get_clock_config()
        self.data_source = AnalogClockDataSource(clock_config)
        self.displayer = AnalogClockDisplayer(self.data_source, clock_config, config_manager.get_dial_style())
        self.set_child(self.displayer.get_widget())
        self.load_window_dimensions()

    def load_window_dimensions(self):
        window_config = config_manager.get_window_config()
        try:
            width = int(window_config.get("width", DEFAULT_WINDOW_SIZE[0]))
            height = int(window_config.get("height", DEFAULT_WINDOW_SIZE[1]))
        except ValueError as e:
            logger.warning("Invalid window size in config (%s), using defaults.", e)
            width, height = DEFAULT_WINDOW_SIZE
        self.set_default_size(width, height)

    def save_window_dimensions(self):
        width, height = self.get_width(), self.get_height()
        if width > 0 and height > 0:
            config_manager.save_window_config({"width": width, "height": height})

    def do_close_request(self):
        self.save_window_dimensions()
        config_manager.save(immediate=True)
        self.displayer.close()
        self.data_source.close()
        return False


class ClockApp(Gtk.Application):
    def __init__(self, **kwargs):
        super().__init__(application_id="com.example.gclock",
                         flags=Gio.ApplicationFlags.HANDLES_COMMAND_LINE | Gio.ApplicationFlags.NON_UNIQUE,
                         **kwargs)
        self.window = None

        # Options must be registered before app.run() is called.
        self.add_main_option(
            "config", 0, GLib.OptionFlags.NONE, GLib.OptionArg.STRING,
            "Load a specific config file", "FILEPATH")
        self.add_main_option(
            "snapshot", ord("s"), GLib.OptionFlags.NONE, GLib.OptionArg.STRING,
            "Render one frame to a PNG file and exit", "FILEPATH")
        self.add_main_option(
            "size", 0, GLib.OptionFlags.NONE, GLib.OptionArg.STRING,
            f"Snapshot size (default {DEFAULT_SNAPSHOT_SIZE})", "WIDTHxHEIGHT")
        self.add_main_option(
            "time", ord("t"), GLib.OptionFlags.NONE, GLib.OptionArg.STRING,
            "Snapshot time instead of the current time", "HH:MM:SS")
        self.add_main_option(
            "debug", ord("d"), GLib.OptionFlags.NONE, GLib.OptionArg.NONE,
            "Enable debug logging", None)
        self.add_main_option(
            "version", ord("v"), GLib.OptionFlags.NONE, GLib.OptionArg.NONE,
            "Show application version and exit", None)

    def do_activate(self):
        if not self.window or not self.window.is_visible():
            self.window = MainWindow(self)
        self.window.present()

    def do_command_line(self, command_line):
        options = command_line.get_options_dict().end().unpack()

        if 'version' in options:
            print(f"gClock {APP_VERSION}")
            return 0

        setup_logging(logging.DEBUG if 'debug' in options else logging.INFO)

        if 'config' in options:
            config_path = options['config']
            if not os.path.isfile(config_path):
                print(f"Error: Config file not found: {config_path}. Exiting.", file=sys.stderr)
                return 1
            logger.info("Loading configuration from: %s", config_path)
            if not config_manager.load(config_path):
                print(f"Error: Could not parse config file: {config_path}. Exiting.", file=sys.stderr)
                return 1
            config_manager.config_file = config_path

        if 'snapshot' in options:
            return write_snapshot(options)

        self.activate()
        return 0

    def do_startup(self):
        Gtk.Application.do_startup(self)

        for sig in [signal.SIGINT, signal.SIGTERM]:
            GLib.unix_signal_add(GLib.PRIORITY_DEFAULT, sig, self.on_signal, sig)

        action = Gio.SimpleAction.new("quit", None)
        action.connect("activate", self.on_quit)
        self.add_action(action)
        self.set_accels_for_action("app.quit", ["<Control>q"])

    def on_quit(self, *args):
        if self.window and self.window.is_visible():
            self.window.close()
        self.quit()

    def on_signal(self, signum):
        logger.info("Caught signal %s, attempting graceful shutdown.", signum)
        self.on_quit()
        return True


def main():
    app = ClockApp()
    return app.run(sys.argv)


if __name__ == "__main__":
    sys.exit(main())
