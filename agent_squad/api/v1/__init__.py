"""API v1 routers."""

from . import turns, conversations, personas

__all__ = ["turns", "conversations", "personas"]
