"""LLM provider boundary."""

from .gateway import LLMGateway

__all__ = ["LLMGateway"]
