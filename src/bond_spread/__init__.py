"""Treasury / corporate bond yield alignment and credit spread toolkit."""

__version__ = "0.1.0"
