import re

_SIZE_RE = re.compile(r'^\s*(\d+)\s*[xX]\s*(\d+)\s*$')
_TIME_RE = re.compile(r'^\s*(\d{1,2}):(\d{2})(?::(\d{2}))?\s*$')


def populate_defaults_from_model(config, model):
    """
    Helper function to populate a configuration dictionary with default values
    from a given configuration model.
    """
    for section in model.values():
        for option in section:
            config.setdefault(option.key, str(option.default))


def parse_bool(value):
    """Returns True/False for common spellings, None if unrecognised."""
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("1", "true", "yes", "on"):
        return True
    if text in ("0", "false", "no", "off"):
        return False
    return None


def parse_size(text):
    """Parses 'WIDTHxHEIGHT' into a (width, height) tuple of ints."""
    match = _SIZE_RE.match(text or "")
    if not match:
        raise ValueError(f"Expected a size like 500x500, got {text!r}")
    return int(match.group(1)), int(match.group(2))


def parse_clock_time(text):
    """Parses 'HH:MM' or 'HH:MM:SS' into an (hour, minute, second) tuple."""
    match = _TIME_RE.match(text or "")
    if not match:
        raise ValueError(f"Expected a time like 13:45:00, got {text!r}")
    hour, minute = int(match.group(1)), int(match.group(2))
    second = int(match.group(3) or 0)
    if hour > 23 or minute > 59 or second > 59:
        raise ValueError(f"Time out of range: {text!r}")
    return hour, minute, second
