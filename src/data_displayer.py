# /data_displayer.py
from abc import ABC, abstractmethod


class DataDisplayer(ABC):
    """Owns the widget that shows one data source."""
    def __init__(self, data_source, config):
        self._data_source = data_source
        self.config = config
        self.widget = self._create_widget()

    @property
    def data_source(self):
        return self._data_source

    @abstractmethod
    def _create_widget(self):
        pass

    def get_widget(self):
        return self.widget

    def close(self):
        """Drops the data source reference so the displayer can be collected."""
        self._data_source = None
