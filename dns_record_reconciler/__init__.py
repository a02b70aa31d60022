"""
DNS Record Reconciler - Idempotent DNS record management

Reconciles declared DNS records (standard, alias, weighted and
geolocation-routed) against a hosted zone, applying only the change
needed to converge the zone to the declaration.
"""

__version__ = "1.0.0"
__author__ = "DNS Record Reconciler Team"
__description__ = "Idempotent reconciliation of DNS records against hosted zones"

from .core.outcome import Outcome, OutcomeStatus, Severity
from .core.record_manager import RecordManager, delete, reconcile
from .core.record_spec import DesiredRecord, build_desired_record
from .exceptions import ConfigurationError, ProviderServiceError, ReconcilerError
from .providers.dns_client import DNSClient

__all__ = [
    "ConfigurationError",
    "DNSClient",
    "DesiredRecord",
    "Outcome",
    "OutcomeStatus",
    "ProviderServiceError",
    "ReconcilerError",
    "RecordManager",
    "Severity",
    "build_desired_record",
    "delete",
    "reconcile",
]
