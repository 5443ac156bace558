"""PPC dashboard reporting proxy."""

__version__ = "0.1.0"
