"""
Base DNS provider interface.

This module defines the abstract base class that all DNS providers must
implement, together with the listing page and change batch types that
cross the provider boundary.

Raw records exchanged with a provider are plain dictionaries of the form::

    {
        "name": "app.example.com.",
        "type": "A",
        "ttl": 300,                                  # optional
        "resource_records": [{"value": "10.0.0.1"}], # optional
        "alias_target": {...},                       # optional
        "set_identifier": "eu",                      # optional
        "weight": 10,                                # optional
        "geo_location": {"country_code": "DE"},      # optional
    }
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Optional

CREATE = "CREATE"
UPSERT = "UPSERT"
DELETE = "DELETE"


@dataclass
class RecordPage:
    """One page of a zone listing."""

    records: List[Dict] = field(default_factory=list)
    truncated: bool = False
    next_name: Optional[str] = None
    next_type: Optional[str] = None
    next_identifier: Optional[str] = None


@dataclass(frozen=True)
class Change:
    """A single create/upsert/delete entry of a change batch."""

    action: str
    record_set: Dict


@dataclass(frozen=True)
class ChangeRequest:
    """An atomic change batch for one hosted zone."""

    zone_id: str
    comment: str
    changes: List[Change]


class DNSProvider(ABC):
    """Abstract base class for DNS providers."""

    @abstractmethod
    def list_records(
        self,
        zone_id: str,
        start_name: Optional[str] = None,
        start_type: Optional[str] = None,
        start_identifier: Optional[str] = None,
    ) -> RecordPage:
        """List record sets of a zone, starting at or after ``start_name``."""

    @abstractmethod
    def submit_change(self, request: ChangeRequest) -> Dict:
        """Submit a change batch, raising ProviderServiceError on failure."""


# The capability the reconciliation core depends on
ProviderClient = DNSProvider
