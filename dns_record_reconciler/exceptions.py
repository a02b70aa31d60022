"""
Exceptions raised by the DNS Record Reconciler.

Configuration errors are always surfaced to the caller. Provider service
errors are subject to the record's ``fail_on_error`` policy.
"""

from typing import Optional


class ReconcilerError(Exception):
    """Base class for all reconciler errors."""


class ConfigurationError(ReconcilerError):
    """Raised when a desired record declaration is malformed."""


class ProviderServiceError(ReconcilerError):
    """Raised when the DNS provider rejects or fails a request."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        operation: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.operation = operation

    def __str__(self) -> str:
        if self.code:
            return f"{self.code}: {self.message}"
        return self.message
