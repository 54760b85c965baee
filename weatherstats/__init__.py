"""Historical weather records for a list of cities, gathered by threaded producers and consumers."""

__version__ = "0.1.0"