"""Terminal system monitor for Linux: parsers, collectors, a plain report and a curses dashboard."""

__version__ = "0.1.0"
__all__ = ["__version__"]