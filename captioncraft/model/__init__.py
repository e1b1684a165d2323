"""Hosted model client adapters."""

from .adapter import DEFAULT_MODEL, GeminiClient
from .interfaces import ModelClientProtocol

__all__ = ["DEFAULT_MODEL", "GeminiClient", "ModelClientProtocol"]
