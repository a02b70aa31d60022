"""
Record Manager - Caller-facing reconciliation API

This module wires normalization, current state lookup, the decision and
the change applier together. ``reconcile`` and ``delete`` handle a single
record; RecordManager processes a list of declarations, optionally on a
pool of worker threads since independent records share no state.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Mapping, Optional, Tuple, Union

from ..exceptions import ConfigurationError, ReconcilerError
from ..providers.base_provider import DNSProvider
from ..providers.mock_provider import MockDNSProvider
from .change_applier import apply_change, build_record_set
from .current_state import fetch_current_for
from .outcome import Outcome, OutcomeStatus
from .reconciler import Action, decide, decide_delete
from .record_spec import DesiredRecord, build_desired_record

logger = logging.getLogger(__name__)

DesiredConfig = Union[DesiredRecord, Mapping]


def _as_desired(desired_config: DesiredConfig) -> DesiredRecord:
    if isinstance(desired_config, DesiredRecord):
        return desired_config
    return build_desired_record(desired_config)


def reconcile(desired_config: DesiredConfig, zone_id: str, provider: DNSProvider) -> Outcome:
    """
    Converge one record to its declaration.

    Args:
        desired_config: Record declaration or an already normalized record
        zone_id: Hosted zone identifier
        provider: DNS provider holding the zone

    Returns:
        Outcome with status skipped, created, upserted or warning

    Raises:
        ConfigurationError: If the declaration is malformed
        ProviderServiceError: If the zone cannot be listed, or the change
            fails and the record sets ``fail_on_error``
    """
    desired = _as_desired(desired_config)
    current = fetch_current_for(desired, zone_id, provider)
    action = decide(desired, current)

    if action == Action.NOOP:
        logger.info(f"Record has not changed, skipping: {desired.describe()}")
        return Outcome(
            name=desired.name,
            type=desired.type,
            status=OutcomeStatus.SKIPPED,
            action=action.value,
        )

    outcome = apply_change(action, desired, zone_id, provider)
    if outcome.status == OutcomeStatus.UPSERTED:
        logger.info(f"Record created/modified: {desired.describe()}")
    elif outcome.status == OutcomeStatus.CREATED:
        logger.info(f"Record created: {desired.describe()}")
    return outcome


def delete(desired_config: DesiredConfig, zone_id: str, provider: DNSProvider) -> Outcome:
    """
    Delete one record if the zone holds it.

    Returns:
        Outcome with status nothing_to_delete, deleted or warning
    """
    desired = _as_desired(desired_config)
    current = fetch_current_for(desired, zone_id, provider)
    action = decide_delete(desired, current)

    if action == Action.NOTHING_TO_DELETE:
        logger.info("There is nothing to delete.")
        return Outcome(
            name=desired.name,
            type=desired.type,
            status=OutcomeStatus.NOTHING_TO_DELETE,
            action=action.value,
        )

    outcome = apply_change(action, desired, zone_id, provider)
    if outcome.status == OutcomeStatus.DELETED:
        logger.info(f"Record deleted: {desired.name}")
    return outcome


class RecordManager:
    """Processes record declarations against a DNS provider."""

    def __init__(self, dns_client: DNSProvider, max_workers: int = 1):
        """Initialize record manager with DNS client."""
        self.dns_client = dns_client
        self.max_workers = max(1, max_workers)

    def reconcile(self, desired_config: DesiredConfig, zone_id: str) -> Outcome:
        return reconcile(desired_config, zone_id, self.dns_client)

    def delete(self, desired_config: DesiredConfig, zone_id: str) -> Outcome:
        return delete(desired_config, zone_id, self.dns_client)

    def process_records(
        self,
        declarations: List[Mapping],
        zone_id: Optional[str] = None,
        delete_records: bool = False,
    ) -> List[Outcome]:
        """
        Reconcile (or delete) every declared record.

        All declarations are normalized before any provider call, so a
        malformed declaration aborts the run without changing the zone.
        Errors escaping a single record are turned into fatal outcomes and
        do not stop the remaining records.

        Args:
            declarations: Record declarations, each optionally carrying its
                own ``zone_id`` and ``mock`` flag
            zone_id: Zone for declarations without their own
            delete_records: Delete the declared records instead of reconciling them

        Returns:
            One outcome per declaration, in declaration order
        """
        jobs = [self._plan(declaration, zone_id, delete_records) for declaration in declarations]
        operation = "delete" if delete_records else "reconcile"
        logger.info(f"Processing {len(jobs)} records ({operation})")

        if self.max_workers > 1 and len(jobs) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                return list(executor.map(lambda job: self._run(job, delete_records), jobs))
        return [self._run(job, delete_records) for job in jobs]

    def _plan(
        self, declaration: Mapping, zone_id: Optional[str], delete_records: bool
    ) -> Tuple[DesiredRecord, str, DNSProvider]:
        desired = build_desired_record(declaration)
        record_zone = declaration.get("zone_id") or zone_id
        if not record_zone:
            raise ConfigurationError(f"No zone_id given for {desired.describe()}")

        provider = self.dns_client
        if declaration.get("mock"):
            provider = MockDNSProvider()
            if delete_records:
                # Give the delete something to find
                provider.seed([build_record_set(desired)])

        return desired, record_zone, provider

    def _run(self, job: Tuple[DesiredRecord, str, DNSProvider], delete_records: bool) -> Outcome:
        desired, zone_id, provider = job
        operation = delete if delete_records else reconcile
        try:
            return operation(desired, zone_id, provider)
        except ReconcilerError as e:
            logger.error(f"Failed to process record {desired.describe()}: {e}")
            return Outcome.fatal(desired.name, desired.type, e)
