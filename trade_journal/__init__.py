"""Trade journal engine: position aggregation from fills and performance analytics."""

__version__ = "0.1.0"
