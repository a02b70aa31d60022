"""
Current State - Fetch the live record for a declaration

This module queries a DNS provider for the record set matching a name and
type and normalizes it into the same canonical shape as a DesiredRecord.
A missing record is a normal state and is returned as None.
"""

import logging
from typing import Dict, Optional

from ..providers.base_provider import DNSProvider
from .record_spec import (
    NO_ROUTING,
    AliasTarget,
    CurrentRecord,
    DesiredRecord,
    RecordSet,
    Routing,
    WeightedRouting,
    geo_routing_from_mapping,
)

logger = logging.getLogger(__name__)

# Route53 lists the wildcard label in its octal escaped form
ESCAPED_WILDCARD = "\\052"


def decode_name(name: str) -> str:
    """Decode an escaped wildcard label in a listed record name."""
    return name.replace(ESCAPED_WILDCARD, "*")


def routing_from_raw(raw: Dict) -> Routing:
    set_identifier = raw.get("set_identifier")
    if raw.get("geo_location"):
        return geo_routing_from_mapping(raw["geo_location"], set_identifier)
    if raw.get("weight") is not None:
        return WeightedRouting(set_identifier=set_identifier, weight=int(raw["weight"]))
    return NO_ROUTING


def normalize_current_record(raw: Dict) -> CurrentRecord:
    """
    Normalize a raw listed record into canonical form.

    Alias records populate only name, type, routing and alias target; all
    others populate ttl and values sorted by their literal value.
    """
    name = decode_name(raw["name"])
    routing = routing_from_raw(raw)

    if raw.get("alias_target"):
        return RecordSet(
            name=name,
            type=raw["type"],
            routing=routing,
            alias_target=AliasTarget.from_mapping(raw["alias_target"]),
        )

    values = sorted(rr["value"] for rr in raw.get("resource_records") or [])
    return RecordSet(
        name=name,
        type=raw["type"],
        routing=routing,
        ttl=raw.get("ttl"),
        values=tuple(values),
    )


def _matches(
    raw: Dict, name: str, record_type: str, set_identifier: Optional[str]
) -> bool:
    if decode_name(raw.get("name", "")) != name or raw.get("type") != record_type:
        return False
    if set_identifier is not None:
        return raw.get("set_identifier") == set_identifier
    return True


def fetch_current_record(
    provider: DNSProvider,
    zone_id: str,
    name: str,
    record_type: str,
    set_identifier: Optional[str] = None,
) -> Optional[CurrentRecord]:
    """
    Fetch the current record set for a name and type.

    Args:
        provider: The DNS provider to query
        zone_id: Hosted zone identifier
        name: Fully-qualified record name
        record_type: Record type
        set_identifier: Only match the record set with this identifier

    Returns:
        The normalized current record, or None if the zone has no match
    """
    page = provider.list_records(zone_id, start_name=name)
    marker = (name, None, None)

    while True:
        for raw in page.records:
            if _matches(raw, name, record_type, set_identifier):
                current = normalize_current_record(raw)
                logger.debug(f"Current record for {name}[{record_type}]: {current}")
                return current

        if not page.truncated:
            break

        # The listing is ordered by name and starts at it, so a next page
        # beginning at another name cannot hold a match
        if decode_name(page.next_name or "") != name:
            break

        next_marker = (page.next_name, page.next_type, page.next_identifier)
        if next_marker == marker:
            logger.warning(
                f"Listing of zone {zone_id} did not advance past {page.next_name}, stopping"
            )
            break
        marker = next_marker

        logger.debug(f"Listing of zone {zone_id} truncated, continuing at {page.next_name}")
        page = provider.list_records(
            zone_id,
            start_name=page.next_name,
            start_type=page.next_type,
            start_identifier=page.next_identifier,
        )

    logger.debug(f"No current record for {name}[{record_type}] in zone {zone_id}")
    return None


def fetch_current_for(
    desired: DesiredRecord, zone_id: str, provider: DNSProvider
) -> Optional[CurrentRecord]:
    """Fetch the current record set matching a desired record's identity."""
    return fetch_current_record(
        provider,
        zone_id,
        desired.name,
        desired.type,
        set_identifier=desired.set_identifier,
    )
