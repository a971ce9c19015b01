import configparser
import io
import logging
import os
import threading

from config_model import coerce_clock_value, get_clock_config_model, iter_options
from dial_layout import DialStyle
from utils import populate_defaults_from_model

logger = logging.getLogger(__name__)

config_home = os.environ.get("XDG_CONFIG_HOME")
if config_home:
    APP_CONFIG_DIR = os.path.join(config_home, "gClock")
else:
    APP_CONFIG_DIR = os.path.expanduser("~/.config/gClock")

DEFAULT_CONFIG_FILE = os.path.join(APP_CONFIG_DIR, "clock.ini")

CLOCK_SECTION = "clock"
WINDOW_SECTION = "window"

_STYLE_KEYS = (
    "padding", "outer_margin", "font_family", "font_size",
    "face_stroke_width", "hour_hand_width", "minute_hand_width", "second_hand_width",
    "major_tick_width", "minor_tick_width", "mirror_hour_hand_y_scale",
)


def _new_parser():
    parser = configparser.ConfigParser(interpolation=None)
    parser.optionxform = str
    return parser


class ConfigManager:
    def __init__(self, config_file=None):
        self.config_file = config_file or DEFAULT_CONFIG_FILE
        self.config = _new_parser()
        self.load()

        # --- Debounce State ---
        self._save_timer = None
        self._save_lock = threading.Lock()

    def load(self, filepath=None):
        load_path = filepath if filepath else self.config_file
        current_config_backup = self.config
        self.config = _new_parser()

        if os.path.exists(load_path):
            try:
                self.config.read(load_path, encoding='utf-8')
                logger.info("Configuration loaded from %s", load_path)
                return True
            except configparser.Error as e:
                logger.error("Error reading config file %s: %s. Restoring previous config.", load_path, e)
                self.config = current_config_backup
                return False
        else:
            if filepath:
                logger.error("Config file not found: %s", load_path)
                self.config = current_config_backup
                return False
            logger.info("Config file %s not found. A new default configuration will be created on save.", load_path)
            return True

    def save(self, filepath=None, immediate=False):
        """
        Saves configuration. Background saves are debounced by one second;
        an explicit path or immediate=True writes synchronously.
        """
        # Serialize on the calling thread
        config_data = io.StringIO()
        self.config.write(config_data)
        serialized_data = config_data.getvalue()
        config_data.close()

        target_path = filepath if filepath else self.config_file

        if filepath or immediate:
            self.cancel_pending_save()
            return self._write_to_disk(target_path, serialized_data)

        with self._save_lock:
            if self._save_timer:
                self._save_timer.cancel()
            self._save_timer = threading.Timer(1.0, self._write_to_disk, args=[target_path, serialized_data])
            self._save_timer.daemon = True
            self._save_timer.start()
        return True

    def cancel_pending_save(self):
        with self._save_lock:
            if self._save_timer:
                self._save_timer.cancel()
                self._save_timer = None

    def _write_to_disk(self, save_path, data_string):
        try:
            directory = os.path.dirname(save_path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(save_path, "w", encoding='utf-8') as f:
                f.write(data_string)
            logger.info("Configuration saved to %s", save_path)
            return True
        except OSError as e:
            logger.error("Error writing config file %s: %s", save_path, e)
            return False

    def is_valid_config_file(self, filepath):
        if not filepath or not os.path.exists(filepath):
            return False

        temp_parser = _new_parser()
        try:
            temp_parser.read(filepath, encoding='utf-8')
        except configparser.Error as e:
            logger.warning("File %s is not a valid INI file: %s", filepath, e)
            return False
        if not temp_parser.has_section(CLOCK_SECTION):
            logger.warning("File %s is missing [%s] section.", filepath, CLOCK_SECTION)
            return False
        return True

    def get_clock_config(self):
        """The [clock] section as a dict of raw strings, with model defaults filled in."""
        clock_config = {}
        if self.config.has_section(CLOCK_SECTION):
            clock_config.update(self.config.items(CLOCK_SECTION))
        populate_defaults_from_model(clock_config, get_clock_config_model())
        return clock_config

    def get_clock_value(self, key):
        return coerce_clock_value(self.get_clock_config(), key)

    def update_clock_config(self, clock_config_dict):
        if not self.config.has_section(CLOCK_SECTION):
            self.config.add_section(CLOCK_SECTION)
        for key, value in clock_config_dict.items():
            self.config.set(CLOCK_SECTION, str(key), str(value))

    def get_dial_style(self):
        """Builds the DialStyle from the [clock] section."""
        clock_config = self.get_clock_config()
        values = {}
        for option in iter_options(get_clock_config_model()):
            if option.key in _STYLE_KEYS:
                values[option.key] = option.coerce(clock_config.get(option.key))
        return DialStyle(**values)

    def get_window_config(self):
        if self.config.has_section(WINDOW_SECTION):
            return dict(self.config.items(WINDOW_SECTION))
        return {}

    def save_window_config(self, window_config_dict):
        if not self.config.has_section(WINDOW_SECTION):
            self.config.add_section(WINDOW_SECTION)
        for key, value in window_config_dict.items():
            self.config.set(WINDOW_SECTION, str(key), str(value))


config_manager = ConfigManager()
