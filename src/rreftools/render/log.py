from __future__ import annotations

import logging

from rreftools.elimination.steps import Step
from .narrative import describe, format_rows


class LoggingSink:
    """Send each step narrative to a logger; snapshots go out at DEBUG."""

    def __init__(self, logger: logging.Logger | None = None, level: int = logging.INFO):
        self.logger = logger if logger is not None else logging.getLogger("rreftools.trace")
        self.level = level

    def emit(self, step: Step) -> None:
        self.logger.log(self.level, "[%s] %s", step.kind.value, describe(step))
        if self.logger.isEnabledFor(logging.DEBUG):
            for row in format_rows(step.snapshot):
                self.logger.debug("  %s", " ".join(row))
