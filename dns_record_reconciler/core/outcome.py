"""
Outcome - Structured results of a reconciliation

The core never renders results itself; callers decide how to display an
Outcome and which severities should change their exit behaviour.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, Optional


class Severity(str, Enum):
    OK = "ok"
    WARNING = "warning"
    FATAL = "fatal"


class OutcomeStatus(str, Enum):
    SKIPPED = "skipped"
    CREATED = "created"
    UPSERTED = "upserted"
    DELETED = "deleted"
    NOTHING_TO_DELETE = "nothing_to_delete"
    WARNING = "warning"
    FAILED = "failed"


@dataclass(frozen=True)
class Outcome:
    """Result of reconciling or deleting one record."""

    name: str
    type: str
    status: OutcomeStatus
    action: Optional[str] = None
    error: Optional[Exception] = None
    response: Any = None

    @property
    def severity(self) -> Severity:
        if self.status == OutcomeStatus.FAILED:
            return Severity.FATAL
        if self.status == OutcomeStatus.WARNING:
            return Severity.WARNING
        return Severity.OK

    @property
    def changed(self) -> bool:
        return self.status in (
            OutcomeStatus.CREATED,
            OutcomeStatus.UPSERTED,
            OutcomeStatus.DELETED,
        )

    @classmethod
    def fatal(cls, name: str, record_type: str, error: Exception, action: Optional[str] = None):
        """Outcome for a record whose error escaped to the caller."""
        return cls(name=name, type=record_type, status=OutcomeStatus.FAILED, action=action, error=error)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type,
            "status": self.status.value,
            "severity": self.severity.value,
            "action": self.action,
            "error": str(self.error) if self.error is not None else None,
        }


@dataclass
class RunSummary:
    total: int
    changed: int
    unchanged: int
    warnings: int
    failures: int

    @classmethod
    def from_outcomes(cls, outcomes: Iterable[Outcome]) -> "RunSummary":
        total = changed = unchanged = warnings = failures = 0
        for outcome in outcomes:
            total += 1
            if outcome.severity == Severity.FATAL:
                failures += 1
            elif outcome.severity == Severity.WARNING:
                warnings += 1
            elif outcome.changed:
                changed += 1
            else:
                unchanged += 1
        return cls(
            total=total,
            changed=changed,
            unchanged=unchanged,
            warnings=warnings,
            failures=failures,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "changed": self.changed,
            "unchanged": self.unchanged,
            "warnings": self.warnings,
            "failures": self.failures,
        }
