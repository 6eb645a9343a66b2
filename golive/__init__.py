"""go-live: keyboard-driven terminal menu navigator."""

__version__ = "0.1.0"
