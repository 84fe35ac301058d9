"""parley - conversation membership and messaging backend."""

__version__ = "1.0.0"
