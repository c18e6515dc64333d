"""Package version, reported in the client identification header."""

__version__ = "0.1.0"
