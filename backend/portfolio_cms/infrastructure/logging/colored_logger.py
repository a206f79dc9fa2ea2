"""Colored pipeline logger — ANSI-colored console output for the migration run.

Each migration stage gets its own colour so a start-up run reads at a glance:

    CHECK     Blue     — migration flag lookup
    FETCH     Cyan     — remote "already has data" check
    COPY      Green    — legacy records written to the remote store
    SKIP      Yellow   — collection left alone
    ERROR     Red      — failed record or collection
    COMPLETE  Green    — collection marked migrated
"""

import logging
import time
from contextlib import contextmanager
from typing import Any


# ── ANSI Color Codes ─────────────────────────────────────────────────

class _Colors:
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    CYAN = "\033[96m"
    WHITE = "\033[97m"
    GRAY = "\033[90m"


Stage = tuple[str, str, str]


class PipelineStage:
    """Migration stages as (label, colour, icon)."""

    CHECK = ("CHECK", _Colors.BLUE, "🔎")
    FETCH = ("FETCH", _Colors.CYAN, "☁️")
    COPY = ("COPY", _Colors.GREEN, "📦")
    SKIP = ("SKIP", _Colors.YELLOW, "⏭️")
    RUN = ("MIGRATION", _Colors.WHITE, "⚙️")
    ERROR = ("ERROR", _Colors.RED, "❌")
    COMPLETE = ("COMPLETE", _Colors.GREEN, "✅")


def _kv(kwargs: dict[str, Any], color: str) -> str:
    if not kwargs:
        return ""
    details = " | ".join(f"{k}={v}" for k, v in kwargs.items())
    return f" {color}({details}){_Colors.RESET}"


class PipelineLogger:
    """Color-coded logger for multi-step runs such as the legacy data migration.

    Usage:
        plog = PipelineLogger("MigrationRunner")
        plog.step_start(PipelineStage.CHECK, "skills")
        plog.step_skip("skills", reason="already migrated")
    """

    def __init__(self, component_name: str):
        self._logger = logging.getLogger(component_name)

    def step_start(self, stage: Stage, message: str, **kwargs: Any) -> None:
        label, color, icon = stage
        formatted = (
            f"{color}{_Colors.BOLD}{icon} [{label}]{_Colors.RESET} "
            f"{color}{message}{_Colors.RESET}"
        )
        self._logger.info(formatted + _kv(kwargs, _Colors.GRAY))

    def step_complete(self, stage: Stage, message: str, **kwargs: Any) -> None:
        label, color, icon = stage
        formatted = (
            f"{color}{icon} [{label}]{_Colors.RESET} "
            f"{_Colors.GREEN}✓ {message}{_Colors.RESET}"
        )
        self._logger.info(formatted + _kv(kwargs, _Colors.GRAY))

    def step_skip(self, message: str, **kwargs: Any) -> None:
        label, color, icon = PipelineStage.SKIP
        formatted = f"{color}{icon} [{label}]{_Colors.RESET} {_Colors.DIM}{message}{_Colors.RESET}"
        self._logger.info(formatted + _kv(kwargs, _Colors.GRAY))

    def step_error(self, stage: Stage, message: str, error: BaseException | None = None) -> None:
        label, _, _ = stage
        formatted = (
            f"{_Colors.RED}{_Colors.BOLD}❌ [{label}]{_Colors.RESET} "
            f"{_Colors.RED}{message}{_Colors.RESET}"
        )
        if error:
            formatted += f" {_Colors.DIM}→ {type(error).__name__}: {error}{_Colors.RESET}"
        self._logger.error(formatted)

    def detail(self, message: str, **kwargs: Any) -> None:
        formatted = f"   {_Colors.GRAY}├─ {message}{_Colors.RESET}"
        self._logger.info(formatted + _kv(kwargs, _Colors.DIM))

    @contextmanager
    def timed_step(self, stage: Stage, message: str, **kwargs: Any):
        """Log start and end of a block with its elapsed time.

        Usage:
            with plog.timed_step(PipelineStage.RUN, "Legacy data migration"):
                await runner.run_all()
        """
        self.step_start(stage, message, **kwargs)
        start = time.perf_counter()
        try:
            yield
        except Exception as exc:
            self.step_error(stage, f"{message} failed after {time.perf_counter() - start:.2f}s", error=exc)
            raise
        else:
            self.step_complete(stage, f"{message} in {time.perf_counter() - start:.2f}s", **kwargs)
