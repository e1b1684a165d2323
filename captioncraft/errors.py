"""Exception hierarchy shared by the caption pipeline."""

from __future__ import annotations

__all__ = [
    "CaptionCraftError",
    "ConfigurationError",
    "InputValidationError",
    "EncodingError",
    "ModelInvocationError",
    "ResponseFormatError",
    "NoJsonFoundError",
    "MalformedJsonError",
]


class CaptionCraftError(RuntimeError):
    """Base class for every error raised by the caption pipeline."""


class ConfigurationError(CaptionCraftError):
    """Raised when required configuration (such as the API key) is missing or invalid."""


class InputValidationError(CaptionCraftError, ValueError):
    """Raised when a generation request is built from empty or conflicting input."""


class EncodingError(CaptionCraftError):
    """Raised when an image source cannot be read or decoded."""


class ModelInvocationError(CaptionCraftError):
    """Raised when the hosted model cannot be reached or rejects the request."""


class ResponseFormatError(CaptionCraftError):
    """Raised when the model response does not carry a usable JSON object."""


class NoJsonFoundError(ResponseFormatError):
    """Raised when the response text contains no ``{`` at all."""


class MalformedJsonError(ResponseFormatError):
    """Raised when the brace-delimited fragment is not valid JSON."""
