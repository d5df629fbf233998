"""Append-only report collector shared by every generation stage."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Dict, List

from .logging import get_logger

INFO = "info"
ERROR = "error"


@dataclass
class Report:
    """A single diagnostic entry recorded during generation."""

    subject: Any
    category: str
    message: str
    type: str


class Diagnostics:
    """Collects info and error reports for one generation run.

    The collector is owned by whoever calls ``generate``. Callers that run
    several generations with one instance must call :meth:`reset` (or
    :meth:`drain`) between runs so reports do not leak across runs.
    """

    def __init__(self) -> None:
        self._reports: List[Report] = []
        self.logger = get_logger("diagnostics")

    def info(self, subject: Any, category: str, message: str) -> None:
        self._reports.append(Report(subject=subject, category=category, message=message, type=INFO))

    def error(self, subject: Any, category: str, message: str) -> None:
        self._reports.append(Report(subject=subject, category=category, message=message, type=ERROR))
        self.logger.error("The %s throws: %s", category, message)

    @property
    def reports(self) -> List[Report]:
        return list(self._reports)

    @property
    def infos(self) -> List[Report]:
        return [report for report in self._reports if report.type == INFO]

    @property
    def errors(self) -> List[Report]:
        return [report for report in self._reports if report.type == ERROR]

    @property
    def had_errors(self) -> bool:
        return any(report.type == ERROR for report in self._reports)

    @property
    def exit_status(self) -> int:
        return 1 if self.had_errors else 0

    def reset(self) -> None:
        """Forget every report collected so far."""
        self._reports.clear()

    def drain(self) -> List[Report]:
        """Return the collected reports and reset the collector."""
        drained = list(self._reports)
        self._reports.clear()
        return drained

    def summarize(self, level: int = 2) -> List[str]:
        """Return the human-readable conclusion lines for a verbosity level.

        Level 0 is silent, 1 lists counts per category, 2 adds each message
        and 3 also appends the reported subject.
        """
        if level <= 0:
            return []

        lines: List[str] = []
        for label, reports in (("messages", self.infos), ("errors", self.errors)):
            if not reports:
                continue
            grouped: Dict[str, int] = defaultdict(int)
            for report in reports:
                grouped[report.category] += 1
            lines.append(f"You have {label} from {len(reports)} objects in groups:")
            for category, count in grouped.items():
                lines.append(f"  {category}: {count}")
            if level > 1:
                for report in reports:
                    line = f"Check {report.category} with {report.message}"
                    if level == 3:
                        line += f" {_subject_label(report.subject)!r}"
                    lines.append(line)
        return lines

    def conclusion(self, level: int = 2) -> None:
        """Log the summary produced by :meth:`summarize`."""
        for line in self.summarize(level):
            self.logger.info(line)

    def __len__(self) -> int:
        return len(self._reports)


def _subject_label(subject: Any) -> Any:
    # Comment areas are reported by their tag value.
    return getattr(subject, "value", subject)


__all__ = ["Diagnostics", "Report", "INFO", "ERROR"]
