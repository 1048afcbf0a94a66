"""Run-level collection of collaborator failures.

Parser and introspector failures are downgraded to diagnostics at the call
site; the collector keeps the underlying exception details for the run so
they can be shown once in the report or written next to it.
"""

import json
import logging
import threading
import traceback
import uuid
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class ErrorSeverity(str, Enum):
    """Collaborator failure severity levels."""
    CRITICAL = "critical"  # Setup failures that end the run
    ERROR = "error"        # A document or class lookup failed
    WARNING = "warning"    # Degraded but usable input


@dataclass
class ErrorContext:
    """Where a collaborator failure happened."""
    operation: str                  # e.g. "parse_resource_document"
    component: str                  # e.g. "FhirParser"
    unit_id: str | None = None
    file: str | None = None
    subject: str | None = None      # element id or class name


@dataclass
class CollectedError:
    """A single collaborator failure."""
    error_id: str
    run_id: str
    timestamp: str
    severity: ErrorSeverity
    error_type: str
    message: str
    context: dict[str, Any]
    traceback_lines: list[str]

    def to_dict(self) -> dict[str, Any]:
        return {
            "errorId": self.error_id,
            "runId": self.run_id,
            "timestamp": self.timestamp,
            "severity": self.severity.value,
            "errorType": self.error_type,
            "message": self.message,
            "context": self.context,
            "traceback": self.traceback_lines,
        }


class ErrorCollector:
    """Collects collaborator failures for one linting run.

    Workers validate units concurrently, so collection is guarded by a lock.
    """

    def __init__(self, command: str = "validate"):
        self.command = command
        self.start_time = datetime.now(UTC)
        self.run_id = self._generate_run_id()
        self.errors: list[CollectedError] = []
        self._lock = threading.Lock()

        logger.debug(f"Initialized error collector for run {self.run_id}")

    def collect_error(
        self,
        error: BaseException,
        context: ErrorContext,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
    ) -> str:
        """Record an exception with its context and return its short id."""
        error_id = str(uuid.uuid4())[:8]
        collected = CollectedError(
            error_id=error_id,
            run_id=self.run_id,
            timestamp=datetime.now(UTC).isoformat(),
            severity=severity,
            error_type=type(error).__name__,
            message=str(error),
            context=asdict(context),
            traceback_lines=traceback.format_exception(type(error), error, error.__traceback__),
        )

        with self._lock:
            self.errors.append(collected)

        logger.debug(f"Collected error {error_id}: {collected.error_type} - {collected.message}")
        return error_id

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def get_error_counts(self) -> dict[str, int]:
        """Get error counts by severity."""
        counts = {severity.value: 0 for severity in ErrorSeverity}
        for error in self.errors:
            counts[error.severity.value] += 1
        return counts

    def to_dict(self) -> dict[str, Any]:
        end_time = datetime.now(UTC)
        return {
            "runId": self.run_id,
            "command": self.command,
            "startedAt": self.start_time.isoformat(),
            "completedAt": end_time.isoformat(),
            "durationSeconds": (end_time - self.start_time).total_seconds(),
            "totalErrors": len(self.errors),
            "errorsBySeverity": self.get_error_counts(),
            "errors": [error.to_dict() for error in self.errors],
        }

    def flush_to_filesystem(self, output_dir: Path) -> Path | None:
        """Write collected errors to ``<output_dir>/_errors/<run_id>.json``.

        Returns:
            Path to the written file, or None if nothing was collected
        """
        if not self.errors:
            logger.debug(f"No errors to flush for run {self.run_id}")
            return None

        errors_dir = output_dir / "_errors"
        errors_dir.mkdir(parents=True, exist_ok=True)

        error_file = errors_dir / f"{self.run_id}.json"
        with open(error_file, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)

        logger.info(f"Flushed {len(self.errors)} collaborator errors to: {error_file}")
        return error_file

    def _generate_run_id(self) -> str:
        # run-YYYYMMDD-HHMMSS-{short_uuid}
        timestamp_part = self.start_time.strftime("run-%Y%m%d-%H%M%S")
        return f"{timestamp_part}-{str(uuid.uuid4())[:8]}"
