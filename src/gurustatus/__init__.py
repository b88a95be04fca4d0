"""Teacher employment status and headmaster tenure rules."""

__version__ = "0.1.0"
