"""
Mock DNS provider for testing and demonstration.

This module provides a mock DNS provider that stores record sets in memory
and records every request it receives, for safe testing and demonstration
purposes.
"""

import copy
import logging
import threading
from typing import Dict, List, Optional, Tuple

from ..exceptions import ProviderServiceError
from .base_provider import CREATE, DELETE, UPSERT, ChangeRequest, DNSProvider, RecordPage

logger = logging.getLogger(__name__)


def _record_key(record: Dict) -> Tuple[str, str, Optional[str]]:
    return (record["name"], record["type"], record.get("set_identifier"))


class MockDNSProvider(DNSProvider):
    """
    In-memory DNS provider.

    The seeded listing is returned in its seeded order regardless of the
    requested start name, like a stubbed API response. When ``page_size`` is
    set the listing is split into truncated pages whose continuation markers
    resume where the previous page ended.

    Submitted change batches are recorded in ``submitted`` and applied to the
    in-memory listing, so a later listing reflects them.
    """

    def __init__(
        self,
        config: Dict = None,
        records: Optional[List[Dict]] = None,
        page_size: Optional[int] = None,
    ):
        """Initialize mock provider."""
        config = config or {}
        if records is None:
            records = config.get("records", [])
        self.records = [copy.deepcopy(record) for record in records]
        self.page_size = page_size or config.get("page_size")
        self.list_calls: List[Dict] = []
        self.submitted: List[ChangeRequest] = []
        self._pending_errors: List[ProviderServiceError] = []
        self._lock = threading.Lock()
        logger.info("Mock DNS provider initialized")

    def seed(self, records: List[Dict]) -> None:
        """Replace the listing with the given raw records."""
        self.records = [copy.deepcopy(record) for record in records]

    def fail_next_submit(self, error: ProviderServiceError) -> None:
        """Make the next submit_change call raise ``error``."""
        self._pending_errors.append(error)

    def list_records(
        self,
        zone_id: str,
        start_name: Optional[str] = None,
        start_type: Optional[str] = None,
        start_identifier: Optional[str] = None,
    ) -> RecordPage:
        """List seeded record sets, one page at a time."""
        with self._lock:
            return self._list(zone_id, start_name, start_type, start_identifier)

    def _list(self, zone_id, start_name, start_type, start_identifier) -> RecordPage:
        self.list_calls.append(
            {
                "zone_id": zone_id,
                "start_name": start_name,
                "start_type": start_type,
                "start_identifier": start_identifier,
            }
        )

        offset = 0
        if start_type is not None:
            marker = (start_name, start_type, start_identifier)
            for i, record in enumerate(self.records):
                if _record_key(record) == marker:
                    offset = i
                    break

        if not self.page_size:
            records = self.records[offset:]
            logger.info(f"Mock: Retrieved {len(records)} records")
            return RecordPage(records=copy.deepcopy(records))

        end = offset + self.page_size
        records = self.records[offset:end]
        page = RecordPage(records=copy.deepcopy(records))
        if end < len(self.records):
            next_name, next_type, next_identifier = _record_key(self.records[end])
            page.truncated = True
            page.next_name = next_name
            page.next_type = next_type
            page.next_identifier = next_identifier

        logger.info(f"Mock: Retrieved {len(records)} records (truncated={page.truncated})")
        return page

    def submit_change(self, request: ChangeRequest) -> Dict:
        """Record a change batch and apply it to the in-memory listing."""
        with self._lock:
            return self._apply(request)

    def _apply(self, request: ChangeRequest) -> Dict:
        self.submitted.append(request)

        if self._pending_errors:
            error = self._pending_errors.pop(0)
            logger.info(f"Mock: Failing change batch with {error}")
            raise error

        records = copy.deepcopy(self.records)
        for change in request.changes:
            key = _record_key(change.record_set)
            index = next(
                (i for i, record in enumerate(records) if _record_key(record) == key),
                None,
            )

            if change.action == CREATE:
                if index is not None:
                    raise ProviderServiceError(
                        f"Tried to create resource record set {key[0]} type {key[1]} but it already exists",
                        code="InvalidChangeBatch",
                        operation="submit_change",
                    )
                records.append(copy.deepcopy(change.record_set))
            elif change.action == UPSERT:
                if index is None:
                    records.append(copy.deepcopy(change.record_set))
                else:
                    records[index] = copy.deepcopy(change.record_set)
            elif change.action == DELETE:
                if index is None:
                    raise ProviderServiceError(
                        f"Tried to delete resource record set {key[0]} type {key[1]} but it was not found",
                        code="InvalidChangeBatch",
                        operation="submit_change",
                    )
                del records[index]
            else:
                raise ProviderServiceError(
                    f"Unknown change action {change.action}",
                    code="InvalidInput",
                    operation="submit_change",
                )

            logger.info(f"Mock: {change.action} {key[0]}[{key[1]}]")

        # Batches are atomic: nothing is applied unless every change succeeds
        self.records = records
        return {
            "change_info": {
                "id": f"/change/MOCK{len(self.submitted)}",
                "status": "INSYNC",
                "comment": request.comment,
            }
        }
