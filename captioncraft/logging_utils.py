from __future__ import annotations

import time
import traceback
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Awaitable, Callable, Iterable, Optional, TextIO, Union

from rich.console import Console
from rich.theme import Theme

_LOG_LEVELS = {"DEBUG": 10, "INFO": 20, "WARN": 30, "ERROR": 40}
_REDACTED = "***"


def _normalize_level(level: str) -> str:
    level = level.upper().strip()
    return "WARN" if level == "WARNING" else level


def _should_emit(configured: str, requested: str) -> bool:
    return _LOG_LEVELS.get(requested, 100) >= _LOG_LEVELS.get(configured, 20)


@dataclass(slots=True)
class RunLogger:
    """Step-tagged logger for generation requests.

    Every configured secret is replaced with ``***`` before a line is printed
    or written to the log file.
    """

    console: Optional[Console]
    level: str = "INFO"
    logfile: Optional[Path] = None
    secrets: tuple[str, ...] = field(default=(), repr=False)
    _plain_file: Optional[TextIO] = field(init=False, repr=False, default=None)

    def __post_init__(self) -> None:
        self.level = _normalize_level(self.level)
        self.secrets = tuple(secret for secret in self.secrets if secret)
        if self.logfile:
            self.logfile.parent.mkdir(parents=True, exist_ok=True)
            self._plain_file = self.logfile.open("a", encoding="utf-8")

    def close(self) -> None:
        if self._plain_file:
            self._plain_file.close()
            self._plain_file = None

    def redact(self, text: str) -> str:
        for secret in self.secrets:
            text = text.replace(secret, _REDACTED)
        return text

    def log(
        self,
        step: str,
        message: str,
        level: str = "INFO",
        elapsed_ms: Optional[float] = None,
    ) -> None:
        level = _normalize_level(level)
        if not _should_emit(self.level, level):
            return
        now = datetime.now().strftime("%H:%M:%S.%f")[:-3]
        step_fmt = step.upper().ljust(7)
        level_fmt = level.ljust(5)
        suffix = f" (ms={elapsed_ms:.0f})" if elapsed_ms is not None else ""
        line = self.redact(f"[{now}] [{level_fmt}] [{step_fmt}] {message}{suffix}")
        style = {
            "DEBUG": "dim",
            "INFO": "white",
            "WARN": "yellow",
            "ERROR": "red",
        }.get(level, "white")
        if self.console is not None:
            self.console.print(line, style=style, highlight=False, soft_wrap=True, markup=False)
        else:  # pragma: no cover - console fallback
            print(line)
        if self._plain_file:
            self._plain_file.write(line + "\n")
            self._plain_file.flush()

    def log_exception(self, step: str, message: str, exc: BaseException) -> None:
        """Log ``message`` with the exception type and its formatted traceback."""

        trace = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)).rstrip()
        self.log(step, f"{message}: {type(exc).__name__}: {exc}\n{trace}", level="ERROR")

    def _render(self, message: Union[str, Callable[[Any], str]], result: Any) -> str:
        if not callable(message):
            return message
        try:
            return message(result)
        except Exception:
            return "<failed to render message>"

    def timed(
        self,
        step: str,
        message: Union[str, Callable[[Any], str]],
        func: Callable[..., Any],
        *args: Any,
        level: str = "INFO",
        **kwargs: Any,
    ) -> Any:
        start = time.perf_counter()
        try:
            result = func(*args, **kwargs)
        except Exception as exc:
            elapsed = (time.perf_counter() - start) * 1000.0
            self.log(step, f"error: {exc}", level="ERROR", elapsed_ms=elapsed)
            raise
        elapsed = (time.perf_counter() - start) * 1000.0
        self.log(step, self._render(message, result), level=level, elapsed_ms=elapsed)
        return result

    async def atimed(
        self,
        step: str,
        message: Union[str, Callable[[Any], str]],
        awaitable: Awaitable[Any],
        *,
        level: str = "INFO",
    ) -> Any:
        start = time.perf_counter()
        try:
            result = await awaitable
        except Exception as exc:
            elapsed = (time.perf_counter() - start) * 1000.0
            self.log(step, f"error: {exc}", level="ERROR", elapsed_ms=elapsed)
            raise
        elapsed = (time.perf_counter() - start) * 1000.0
        self.log(step, self._render(message, result), level=level, elapsed_ms=elapsed)
        return result


def create_logger(
    level: str = "INFO",
    logfile: Optional[Path] = None,
    *,
    secrets: Iterable[str] = (),
) -> RunLogger:
    console = Console(theme=Theme({"repr.number": "cyan"}), stderr=True)
    return RunLogger(console=console, level=level, logfile=logfile, secrets=tuple(secrets))


__all__ = ["RunLogger", "create_logger"]
