"""Random Chat — anonymous two-party pairing chat service."""

__version__ = "1.0.0"
