from __future__ import annotations

"""CaptionCraft: short, medium and long captions from text or images."""

from importlib import import_module
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:  # pragma: no cover - type checking helper
    from .config import AppConfig, load_settings
    from .session import GenerationController, SessionState

__all__ = ["AppConfig", "load_settings", "GenerationController", "SessionState"]


def __getattr__(name: str) -> Any:  # pragma: no cover - dispatch helper
    if name in {"AppConfig", "load_settings"}:
        module = import_module(".config", __name__)
    elif name in {"GenerationController", "SessionState"}:
        module = import_module(".session", __name__)
    else:
        raise AttributeError(name)

    value = getattr(module, name)
    globals()[name] = value
    return value
