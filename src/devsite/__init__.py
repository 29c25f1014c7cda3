"""Personal website and blog server."""

__version__ = "0.5.0"
