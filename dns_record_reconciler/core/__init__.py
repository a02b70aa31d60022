"""
Core record reconciliation functionality.

This package contains the normalizer, current state lookup, decision
logic and change applier that converge one declared record at a time.
"""

from .outcome import Outcome, OutcomeStatus, RunSummary, Severity
from .reconciler import Action, decide, decide_delete
from .record_manager import RecordManager, delete, reconcile
from .record_spec import DesiredRecord, build_desired_record, normalize_name

__all__ = [
    "Action",
    "DesiredRecord",
    "Outcome",
    "OutcomeStatus",
    "RecordManager",
    "RunSummary",
    "Severity",
    "build_desired_record",
    "decide",
    "decide_delete",
    "delete",
    "normalize_name",
    "reconcile",
]
