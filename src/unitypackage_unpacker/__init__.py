"""Unpack .unitypackage archives into their original project layout."""

__version__ = "0.1.0"
