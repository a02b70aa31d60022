"""
Change Applier - Build and submit change batches

This module turns a decided action into a provider change batch, submits
it, and applies the record's error policy: provider errors are reported
and downgraded to a warning unless the record sets ``fail_on_error``.
"""

import logging
from typing import Dict

from ..exceptions import ProviderServiceError
from ..providers.base_provider import Change, ChangeRequest, DNSProvider
from .outcome import Outcome, OutcomeStatus
from .reconciler import Action
from .record_spec import DesiredRecord

logger = logging.getLogger(__name__)

COMMENT_PREFIX = "DNS Record Reconciler"

APPLIED_STATUS = {
    Action.CREATE: OutcomeStatus.CREATED,
    Action.UPSERT: OutcomeStatus.UPSERTED,
    Action.DELETE: OutcomeStatus.DELETED,
}


def build_record_set(desired: DesiredRecord) -> Dict:
    """
    Build the record set payload for a desired record.

    An alias target replaces ttl and values. Routed records carry their
    set identifier and weight or geolocation ahead of ttl and values.
    """
    record_set = {"name": desired.name, "type": desired.type}
    record_set.update(desired.routing.to_payload())

    if desired.alias_target is not None:
        record_set["alias_target"] = desired.alias_target.to_payload()
    else:
        record_set["ttl"] = desired.ttl
        record_set["resource_records"] = [{"value": value} for value in sorted(desired.values)]

    return record_set


def build_change_request(action: Action, desired: DesiredRecord, zone_id: str) -> ChangeRequest:
    """Build a single-change batch for ``desired``."""
    if action not in APPLIED_STATUS:
        raise ValueError(f"Action {action.value} does not submit a change")

    return ChangeRequest(
        zone_id=zone_id,
        comment=f"{COMMENT_PREFIX}: {desired.name}",
        changes=[Change(action=action.value, record_set=build_record_set(desired))],
    )


def apply_change(
    action: Action, desired: DesiredRecord, zone_id: str, provider: DNSProvider
) -> Outcome:
    """
    Submit the change for ``action`` and report the outcome.

    Raises:
        ProviderServiceError: If the provider fails and the record sets
            ``fail_on_error``
    """
    request = build_change_request(action, desired, zone_id)

    try:
        response = provider.submit_change(request)
    except ProviderServiceError as e:
        if desired.fail_on_error:
            raise
        logger.error(f"Error with {action.value} request: {request}")
        logger.error(f"{desired.describe()}: {e}")
        return Outcome(
            name=desired.name,
            type=desired.type,
            status=OutcomeStatus.WARNING,
            action=action.value,
            error=e,
        )

    logger.debug(f"Changed record - {action.value}: {response}")
    return Outcome(
        name=desired.name,
        type=desired.type,
        status=APPLIED_STATUS[action],
        action=action.value,
        response=response,
    )
