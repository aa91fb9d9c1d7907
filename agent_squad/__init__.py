"""Agent Squad - multi-agent development chat backend."""

__version__ = "1.0.0"
