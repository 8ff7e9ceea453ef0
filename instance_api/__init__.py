"""Instance Command API: drive messaging instances through HTTP conversation commands."""

__version__ = "0.1.0"
