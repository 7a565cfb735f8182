"""CadetMart inventory dashboard authentication."""

__version__ = "0.1.0"
