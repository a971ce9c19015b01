# config_model.py
import logging

from utils import parse_bool

logger = logging.getLogger(__name__)


class ConfigOption:
    """
    A data class to define a single configuration option.
    """
    def __init__(self, key, option_type, label, default,
                 min_val=None, max_val=None, tooltip=None):
        self.key = key
        # Valid types: "string", "bool", "int", "float", "color", "timezone"
        self.type = option_type
        self.label = label
        self.default = default
        self.min_val = min_val
        self.max_val = max_val
        self.tooltip = tooltip

    def coerce(self, raw):
        """
        Converts a raw (string) config value to the option's type, clamped to
        [min_val, max_val]. Values that cannot be converted give the default.
        """
        if raw is None:
            return self.default
        try:
            if self.type == "bool":
                value = parse_bool(raw)
                if value is None:
                    raise ValueError(f"not a boolean: {raw!r}")
            elif self.type == "int":
                value = int(float(raw))
            elif self.type == "float":
                value = float(raw)
            else:
                return str(raw)
        except (TypeError, ValueError) as e:
            logger.warning("Invalid value for '%s' (%s), using default %r", self.key, e, self.default)
            return self.default

        if self.min_val is not None and value < self.min_val:
            value = type(value)(self.min_val)
        if self.max_val is not None and value > self.max_val:
            value = type(value)(self.max_val)
        return value


def get_clock_config_model():
    return {
        "Dial": [
            ConfigOption("padding", "int", "Padding (px):", 50, 0, 500),
            ConfigOption("outer_margin", "int", "Outer Margin (px):", 32, 0, 500),
            ConfigOption("font_family", "string", "Numeral Font:", "Sans"),
            ConfigOption("font_size", "float", "Numeral Size:", 64.0, 1.0, 512.0),
            ConfigOption("background_color", "color", "Snapshot Background:", "rgba(255,255,255,1)"),
        ],
        "Strokes": [
            ConfigOption("face_stroke_width", "float", "Face Outline (px):", 32.0, 0.0, 200.0),
            ConfigOption("hour_hand_width", "float", "Hour Hand (px):", 16.0, 0.0, 200.0),
            ConfigOption("minute_hand_width", "float", "Minute Hand (px):", 8.0, 0.0, 200.0),
            ConfigOption("second_hand_width", "float", "Second Hand (px):", 4.0, 0.0, 200.0),
            ConfigOption("major_tick_width", "float", "Hour Marks (px):", 10.0, 0.0, 200.0),
            ConfigOption("minor_tick_width", "float", "Minute Marks (px):", 4.0, 0.0, 200.0),
            ConfigOption("mirror_hour_hand_y_scale", "bool", "Scale minute/second hand height like the hour hand", False,
                         tooltip="Draws the minute and second hand tips with the hour hand length as the vertical offset"),
        ],
        "Time": [
            ConfigOption("timezone", "timezone", "Timezone:", "local", tooltip="'local' or a tz database name"),
            ConfigOption("update_interval_ms", "int", "Redraw Interval (ms):", 1000, 50, 60000),
        ],
    }


def iter_options(model):
    for section in model.values():
        yield from section


def coerce_clock_value(config, key):
    """Reads `key` from a raw [clock] config dict, coerced through its option."""
    for option in iter_options(get_clock_config_model()):
        if option.key == key:
            return option.coerce(config.get(key))
    raise KeyError(key)
