"""
Reconciler - Decide the change that converges a record

This module compares a desired record against the current record held by
the provider. The decision is a pure function of its inputs, which is what
makes repeated reconciliation idempotent.
"""

from enum import Enum
from typing import Optional

from .record_spec import CurrentRecord, DesiredRecord


class Action(str, Enum):
    NOOP = "NOOP"
    CREATE = "CREATE"
    UPSERT = "UPSERT"
    DELETE = "DELETE"
    NOTHING_TO_DELETE = "NOTHING_TO_DELETE"


def is_unchanged(desired: DesiredRecord, current: Optional[CurrentRecord]) -> bool:
    """Check whether the current record already matches every populated desired field."""
    return current is not None and desired.canonical() == current


def decide(desired: DesiredRecord, current: Optional[CurrentRecord]) -> Action:
    """
    Decide how to converge ``current`` to ``desired``.

    Returns NOOP when the records are canonically equal. Otherwise returns
    UPSERT when the declaration allows overwriting and CREATE when it does
    not; whether the provider accepts a CREATE over an existing record set
    is left to the provider.
    """
    if is_unchanged(desired, current):
        return Action.NOOP
    if desired.overwrite:
        return Action.UPSERT
    return Action.CREATE


def decide_delete(desired: DesiredRecord, current: Optional[CurrentRecord]) -> Action:
    """Decide whether a delete request has anything to delete."""
    if current is None:
        return Action.NOTHING_TO_DELETE
    return Action.DELETE
