"""line-menu: pick one line from piped input with a fuzzy query."""

__version__ = "0.1.0"
