"""Myanmar Kyat currency converter service."""

__version__ = "0.1.0"
