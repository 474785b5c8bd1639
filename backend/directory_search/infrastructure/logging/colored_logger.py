"""Colored search pipeline logger: ANSI-colored console logging per search stage.

Makes it easy to follow one smart search through the terminal:

    Blue    - Query analysis (extraction, intent, filter)
    Magenta - Collection fan-out
    Yellow  - Suggestions / explanation
    Green   - Completion
    Red     - Errors
    Gray    - Timing / stats
"""

import logging
import time
from contextlib import contextmanager
from typing import Any


class _Colors:
    """ANSI escape codes for terminal colors."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    CYAN = "\033[96m"
    GRAY = "\033[90m"


class SearchStage:
    """Predefined search stages with colors."""

    ANALYZE = ("ANALYZE", _Colors.BLUE)
    FAN_OUT = ("FAN_OUT", _Colors.MAGENTA)
    SUGGEST = ("SUGGEST", _Colors.YELLOW)
    COMPLETE = ("COMPLETE", _Colors.GREEN)
    ERROR = ("ERROR", _Colors.RED)


def _format_details(kwargs: dict[str, Any]) -> str:
    details = " | ".join(f"{k}={v}" for k, v in kwargs.items())
    return f" {_Colors.GRAY}({details}){_Colors.RESET}"


class SearchPipelineLogger:
    """Color-coded logger for the smart search pipeline.

    Usage:
        log = SearchPipelineLogger(__name__)
        with log.timed_step(SearchStage.FAN_OUT, "Searching collections", limit=20):
            outcome = await orchestrator.execute(search_filter)
    """

    def __init__(self, component_name: str):
        self._logger = logging.getLogger(component_name)

    def step_start(self, stage: tuple[str, str], message: str, **kwargs: Any) -> None:
        label, color = stage
        formatted = f"{color}{_Colors.BOLD}[{label}]{_Colors.RESET} {color}{message}{_Colors.RESET}"
        if kwargs:
            formatted += _format_details(kwargs)
        self._logger.info(formatted)

    def step_complete(self, stage: tuple[str, str], message: str, **kwargs: Any) -> None:
        label, color = stage
        formatted = f"{color}[{label}]{_Colors.RESET} {_Colors.GREEN}✓ {message}{_Colors.RESET}"
        if kwargs:
            formatted += _format_details(kwargs)
        self._logger.info(formatted)

    def step_error(self, stage: tuple[str, str], message: str, error: Exception | None = None) -> None:
        label, _ = stage
        formatted = f"{_Colors.RED}{_Colors.BOLD}[{label}]{_Colors.RESET} {_Colors.RED}{message}{_Colors.RESET}"
        if error:
            formatted += f" {_Colors.DIM}{type(error).__name__}: {error}{_Colors.RESET}"
        self._logger.error(formatted)

    def stats(self, **kwargs: Any) -> None:
        parts = [f"{k}: {v}" for k, v in kwargs.items()]
        self._logger.info(f"   {_Colors.GRAY}{' | '.join(parts)}{_Colors.RESET}")

    @contextmanager
    def timed_step(self, stage: tuple[str, str], message: str, **kwargs: Any):
        """Log start and end of a step with elapsed time; errors are logged and re-raised."""
        self.step_start(stage, message, **kwargs)
        start = time.perf_counter()
        try:
            yield
        except Exception as e:
            elapsed = time.perf_counter() - start
            self.step_error(stage, f"{message} failed after {elapsed:.3f}s", error=e)
            raise
        else:
            elapsed = time.perf_counter() - start
            self.step_complete(stage, f"{message} ({elapsed:.3f}s)")
