# data_source.py
from abc import ABC, abstractmethod


class DataSource(ABC):
    """
    Abstract base class for data sources. Each subclass supplies one kind
    of data to a displayer, configured from a plain dict.
    """
    def __init__(self, config):
        self.config = config

    @abstractmethod
    def get_data(self):
        """
        Fetches and returns the current data (e.g., a float, string, dict).
        Should return None on failure.
        """
        pass

    def close(self):
        """Optional cleanup method for data sources."""
        pass
