# /data_sources/analog_clock.py
import datetime
import logging

import pytz

from data_source import DataSource
from dial_layout import TimeSample

logger = logging.getLogger(__name__)

LOCAL_TIMEZONE = "local"


class AnalogClockDataSource(DataSource):
    """Supplies the current wall-clock time as a TimeSample for each redraw."""
    def __init__(self, config, now_func=datetime.datetime.now):
        super().__init__(config)
        self._now_func = now_func

    def _resolve_timezone(self):
        tz_name = self.config.get("timezone", LOCAL_TIMEZONE) or LOCAL_TIMEZONE
        if tz_name == LOCAL_TIMEZONE:
            return None
        try:
            return pytz.timezone(tz_name)
        except pytz.UnknownTimeZoneError:
            logger.warning("Unknown timezone '%s', falling back to local time.", tz_name)
            self.config["timezone"] = LOCAL_TIMEZONE
            return None

    def get_data(self):
        now = self._now_func(self._resolve_timezone())
        return {
            "datetime": now,
            "time_sample": TimeSample.from_datetime(now),
        }

    def get_time_sample(self):
        return self.get_data()["time_sample"]
