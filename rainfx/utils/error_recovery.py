"""Per-tick error containment for the frame loop."""

from __future__ import annotations

import traceback
from collections import deque
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable

import structlog

logger = structlog.get_logger()


@dataclass
class CrashReport:
    """Report of a failed frame tick."""
    frame: int
    timestamp: str
    context: str
    exception_type: str
    exception_message: str
    traceback: str


class TickGuard:
    """Runs frame work so that a failure never escapes a single tick.

    Attributes:
        total_failures: Failed ticks since creation
        consecutive_failures: Failed ticks since the last good one
        reports: Most recent crash reports
    """

    def __init__(self, max_reports: int = 20) -> None:
        self.total_failures = 0
        self.consecutive_failures = 0
        self.reports: deque[CrashReport] = deque(maxlen=max_reports)

    def run(self, func: Callable[..., Any], *args: Any, frame: int = 0, **kwargs: Any) -> Any:
        """Call ``func``; on any exception log a report and return None."""
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            self._handle_failure(e, getattr(func, "__name__", repr(func)), frame)
            return None
        self.consecutive_failures = 0
        return result

    def _handle_failure(self, exception: Exception, context: str, frame: int) -> None:
        self.total_failures += 1
        self.consecutive_failures += 1

        report = CrashReport(
            frame=frame,
            timestamp=datetime.now().isoformat(),
            context=context,
            exception_type=type(exception).__name__,
            exception_message=str(exception),
            traceback=traceback.format_exc(),
        )
        self.reports.append(report)

        # Only the first failure of a streak carries the traceback
        if self.consecutive_failures == 1:
            logger.error(
                "tick_failed",
                frame=frame,
                context=context,
                exception=report.exception_type,
                message=report.exception_message,
                exc_info=exception,
            )
        else:
            logger.warning(
                "tick_failed_again",
                frame=frame,
                exception=report.exception_type,
                streak=self.consecutive_failures,
            )

    def get_recovery_stats(self) -> dict:
        """Get failure statistics."""
        return {
            "total_failures": self.total_failures,
            "consecutive_failures": self.consecutive_failures,
            "last_exception": self.reports[-1].exception_type if self.reports else None,
        }
