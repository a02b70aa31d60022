"""
Record Spec - Canonical record representation

This module turns a raw record declaration (a mapping of property values)
into an immutable DesiredRecord, and defines the canonical RecordSet shape
that both desired and current records are compared in.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Tuple, Union

from ..exceptions import ConfigurationError
from ..utils.validators import validate_record_name, validate_record_type, validate_ttl

logger = logging.getLogger(__name__)

DEFAULT_TTL = 3600

KNOWN_PROPERTIES = {
    "name",
    "type",
    "value",
    "values",
    "ttl",
    "weight",
    "set_identifier",
    "geo_location",
    "geo_location_country",
    "geo_location_continent",
    "geo_location_subdivision",
    "alias_target",
    "overwrite",
    "fail_on_error",
    # consumed by callers, not by the record itself
    "zone_id",
    "mock",
}

# Alias target keys are accepted in either the snake_case form used in
# declarations or the form returned by the Route53 API.
ALIAS_TARGET_KEYS = {
    "hosted_zone_id": "hosted_zone_id",
    "HostedZoneId": "hosted_zone_id",
    "dns_name": "dns_name",
    "DNSName": "dns_name",
    "evaluate_target_health": "evaluate_target_health",
    "EvaluateTargetHealth": "evaluate_target_health",
}

GEO_LOCATION_KEYS = {
    "country_code": "country_code",
    "CountryCode": "country_code",
    "continent_code": "continent_code",
    "ContinentCode": "continent_code",
    "subdivision_code": "subdivision_code",
    "SubdivisionCode": "subdivision_code",
}


def normalize_name(name: str) -> str:
    """Return ``name`` in fully-qualified form, with exactly one trailing dot appended if missing."""
    if name.endswith("."):
        return name
    return name + "."


def normalize_values(value) -> Tuple[str, ...]:
    """Coerce a scalar or a sequence of values into a sorted tuple."""
    if value is None:
        return ()
    if isinstance(value, str):
        values = [value]
    elif isinstance(value, (list, tuple, set, frozenset)):
        values = list(value)
    else:
        raise ConfigurationError(
            f"Record values must be a string or a list of strings, got {type(value).__name__}"
        )

    for item in values:
        if not isinstance(item, str):
            raise ConfigurationError(f"Record value {item!r} is not a string")

    return tuple(sorted(values))


@dataclass(frozen=True)
class NoRouting:
    """Simple routing: a single record set for the name and type."""

    @property
    def set_identifier(self) -> Optional[str]:
        return None

    def to_payload(self) -> Dict:
        return {}


@dataclass(frozen=True)
class WeightedRouting:
    """Weighted routing among record sets sharing a name and type."""

    set_identifier: Optional[str]
    weight: int

    def to_payload(self) -> Dict:
        payload = {"weight": self.weight}
        if self.set_identifier is not None:
            payload["set_identifier"] = self.set_identifier
        return payload


@dataclass(frozen=True)
class GeoRouting:
    """Geolocation routing by country (optionally subdivision) or continent."""

    set_identifier: Optional[str]
    country_code: Optional[str] = None
    continent_code: Optional[str] = None
    subdivision_code: Optional[str] = None

    def geo_location(self) -> Dict[str, str]:
        location = {}
        if self.country_code is not None:
            location["country_code"] = self.country_code
        if self.continent_code is not None:
            location["continent_code"] = self.continent_code
        if self.subdivision_code is not None:
            location["subdivision_code"] = self.subdivision_code
        return location

    def to_payload(self) -> Dict:
        payload = {"geo_location": self.geo_location()}
        if self.set_identifier is not None:
            payload["set_identifier"] = self.set_identifier
        return payload


Routing = Union[NoRouting, WeightedRouting, GeoRouting]

NO_ROUTING = NoRouting()


@dataclass(frozen=True)
class AliasTarget:
    """A provider resource that an alias record points at."""

    hosted_zone_id: str
    dns_name: str
    evaluate_target_health: bool = False

    @classmethod
    def from_mapping(cls, mapping: Mapping) -> "AliasTarget":
        """Build an alias target from a declaration or a provider listing."""
        if not isinstance(mapping, Mapping):
            raise ConfigurationError("alias_target must be a mapping")

        fields = {}
        for key, item in mapping.items():
            if key not in ALIAS_TARGET_KEYS:
                raise ConfigurationError(f"Unknown alias_target property '{key}'")
            fields[ALIAS_TARGET_KEYS[key]] = item

        for required in ("hosted_zone_id", "dns_name"):
            if not fields.get(required):
                raise ConfigurationError(f"alias_target requires '{required}'")

        return cls(
            hosted_zone_id=fields["hosted_zone_id"],
            dns_name=normalize_name(fields["dns_name"]),
            evaluate_target_health=_flag(fields, "evaluate_target_health", False),
        )

    def to_payload(self) -> Dict:
        return {
            "hosted_zone_id": self.hosted_zone_id,
            "dns_name": self.dns_name,
            "evaluate_target_health": self.evaluate_target_health,
        }


@dataclass(frozen=True)
class RecordSet:
    """
    Canonical record shape used for comparison.

    Alias records carry ``alias_target`` and leave ``ttl``/``values`` empty;
    all other records carry ``ttl`` and sorted ``values``.
    """

    name: str
    type: str
    routing: Routing = NO_ROUTING
    ttl: Optional[int] = None
    values: Tuple[str, ...] = ()
    alias_target: Optional[AliasTarget] = None


# A record as currently held by the provider
CurrentRecord = RecordSet


@dataclass(frozen=True)
class DesiredRecord:
    """A declared record after normalization."""

    name: str
    type: str
    ttl: int = DEFAULT_TTL
    values: Tuple[str, ...] = ()
    routing: Routing = NO_ROUTING
    alias_target: Optional[AliasTarget] = None
    overwrite: bool = True
    fail_on_error: bool = False

    @property
    def set_identifier(self) -> Optional[str]:
        return self.routing.set_identifier

    def canonical(self) -> RecordSet:
        """Return the populated fields in the shape current records are compared in."""
        if self.alias_target is not None:
            return RecordSet(
                name=self.name,
                type=self.type,
                routing=self.routing,
                alias_target=self.alias_target,
            )
        return RecordSet(
            name=self.name,
            type=self.type,
            routing=self.routing,
            ttl=self.ttl,
            values=self.values,
        )

    def describe(self) -> str:
        return f"{self.name}[{self.type}]"


def geo_routing_from_mapping(mapping, set_identifier: Optional[str]) -> GeoRouting:
    """Build geolocation routing from a ``geo_location`` mapping."""
    if not isinstance(mapping, Mapping):
        raise ConfigurationError("geo_location must be a mapping")

    fields = {}
    for key, item in mapping.items():
        if key not in GEO_LOCATION_KEYS:
            raise ConfigurationError(f"Unknown geo_location property '{key}'")
        fields[GEO_LOCATION_KEYS[key]] = item

    if not fields:
        raise ConfigurationError("geo_location must not be empty")
    if "subdivision_code" in fields and "country_code" not in fields:
        raise ConfigurationError("geo_location subdivision_code requires country_code")

    return GeoRouting(set_identifier=set_identifier, **fields)


def resolve_routing(config: Mapping) -> Routing:
    """
    Resolve the routing mode of a declaration.

    Precedence is fixed: country, then continent, then a raw geo_location
    mapping, then weight. A subdivision is composed into the country
    route and is meaningless without one. Routed records must carry a
    set_identifier.
    """
    set_identifier = config.get("set_identifier")
    country = config.get("geo_location_country")
    continent = config.get("geo_location_continent")
    subdivision = config.get("geo_location_subdivision")
    geo_location = config.get("geo_location")
    weight = config.get("weight")

    if subdivision and not country:
        raise ConfigurationError(
            "geo_location_subdivision requires geo_location_country to be set"
        )

    routing = None
    if country:
        routing = GeoRouting(
            set_identifier=set_identifier,
            country_code=country,
            subdivision_code=subdivision or None,
        )
    elif continent:
        routing = GeoRouting(set_identifier=set_identifier, continent_code=continent)
    elif geo_location:
        routing = geo_routing_from_mapping(geo_location, set_identifier)

    if routing is not None and weight is not None:
        raise ConfigurationError(
            "A record cannot use both geolocation and weighted routing"
        )

    if routing is None and weight is not None:
        try:
            weight = int(weight)
        except (TypeError, ValueError):
            raise ConfigurationError(f"Invalid weight {weight!r}")
        if isinstance(config.get("weight"), bool) or not 0 <= weight <= 255:
            raise ConfigurationError(f"Weight must be between 0 and 255, got {weight}")
        routing = WeightedRouting(set_identifier=set_identifier, weight=weight)

    if routing is None:
        return NO_ROUTING

    # Record sets sharing a name and type are told apart by their identifier
    if not set_identifier:
        raise ConfigurationError("Weighted and geolocation records require a set_identifier")
    return routing


def _flag(config: Mapping, key: str, default: bool) -> bool:
    flag = config.get(key, default)
    if flag is None:
        return default
    if not isinstance(flag, bool):
        raise ConfigurationError(f"'{key}' must be true or false, got {flag!r}")
    return flag


def build_desired_record(config: Mapping) -> DesiredRecord:
    """
    Normalize a raw record declaration into a DesiredRecord.

    Args:
        config: Mapping of record properties (name, type, value(s), ttl,
            routing properties, alias_target, overwrite, fail_on_error)

    Returns:
        The normalized, immutable DesiredRecord

    Raises:
        ConfigurationError: If the declaration is malformed
    """
    if not isinstance(config, Mapping):
        raise ConfigurationError("Record declaration must be a mapping")

    unknown = sorted(set(config) - KNOWN_PROPERTIES)
    if unknown:
        logger.warning(f"Ignoring unknown record properties: {', '.join(unknown)}")

    name = config.get("name")
    if not name or not isinstance(name, str):
        raise ConfigurationError("Record declaration requires a 'name'")
    if not validate_record_name(name):
        raise ConfigurationError(f"Invalid record name '{name}'")

    record_type = config.get("type")
    if not record_type or not isinstance(record_type, str):
        raise ConfigurationError(f"Record '{name}' requires a 'type'")
    if not validate_record_type(record_type):
        raise ConfigurationError(f"Invalid record type '{record_type}' for '{name}'")

    ttl = config.get("ttl")
    if ttl is None:
        ttl = DEFAULT_TTL
    if not validate_ttl(ttl):
        raise ConfigurationError(f"Invalid TTL {ttl!r} for '{name}'")

    if "values" in config and "value" in config:
        raise ConfigurationError(f"Record '{name}' sets both 'value' and 'values'")
    values = normalize_values(config.get("values", config.get("value")))

    alias_target = config.get("alias_target")
    if alias_target is not None:
        alias_target = AliasTarget.from_mapping(alias_target)

    return DesiredRecord(
        name=normalize_name(name),
        type=record_type.upper(),
        ttl=ttl,
        values=values,
        routing=resolve_routing(config),
        alias_target=alias_target,
        overwrite=_flag(config, "overwrite", True),
        fail_on_error=_flag(config, "fail_on_error", False),
    )
