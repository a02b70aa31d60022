"""
AWS Route53 DNS provider implementation.

This module provides Route53 integration using boto3. Credentials are
taken from an explicit ProviderConfig, falling back to the default boto3
credential chain (environment, shared config, instance profile).
"""

import logging
from dataclasses import dataclass, fields
from typing import Dict, Mapping, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..exceptions import ConfigurationError, ProviderServiceError
from .base_provider import ChangeRequest, DNSProvider, RecordPage

logger = logging.getLogger(__name__)

DEFAULT_REGION = "us-east-1"
DEFAULT_ROLE_SESSION_NAME = "dns-record-reconciler"

# Property names accepted for compatibility with older configurations
CONFIG_ALIASES = {
    "aws_access_key_id": "aws_access_key",
    "aws_region": "region",
}

ALIAS_TARGET_WIRE_KEYS = {
    "hosted_zone_id": "HostedZoneId",
    "dns_name": "DNSName",
    "evaluate_target_health": "EvaluateTargetHealth",
}

GEO_LOCATION_WIRE_KEYS = {
    "country_code": "CountryCode",
    "continent_code": "ContinentCode",
    "subdivision_code": "SubdivisionCode",
}

RECORD_WIRE_KEYS = {
    "name": "Name",
    "type": "Type",
    "ttl": "TTL",
    "set_identifier": "SetIdentifier",
    "weight": "Weight",
}


@dataclass(frozen=True)
class ProviderConfig:
    """Connection settings for the Route53 provider."""

    region: Optional[str] = DEFAULT_REGION
    aws_access_key: Optional[str] = None
    aws_secret_access_key: Optional[str] = None
    aws_session_token: Optional[str] = None
    aws_assume_role_arn: Optional[str] = None
    aws_role_session_name: Optional[str] = None
    endpoint_url: Optional[str] = None

    @classmethod
    def from_dict(cls, config: Optional[Mapping]) -> "ProviderConfig":
        """Build a ProviderConfig from the ``route53`` section of the config file."""
        config = config or {}
        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in config.items():
            key = CONFIG_ALIASES.get(key, key)
            if key not in known:
                raise ConfigurationError(f"Unknown route53 provider setting '{key}'")
            values[key] = value

        if bool(values.get("aws_access_key")) != bool(values.get("aws_secret_access_key")):
            raise ConfigurationError(
                "aws_access_key and aws_secret_access_key must be supplied together"
            )
        return cls(**values)


def _map_keys(mapping: Mapping, key_map: Mapping) -> Dict:
    return {key_map[key]: value for key, value in mapping.items() if key in key_map}


def record_to_wire(record_set: Mapping) -> Dict:
    """Translate a raw record set into the Route53 ResourceRecordSet shape."""
    wire = _map_keys(record_set, RECORD_WIRE_KEYS)
    if "geo_location" in record_set:
        wire["GeoLocation"] = _map_keys(record_set["geo_location"], GEO_LOCATION_WIRE_KEYS)
    if "alias_target" in record_set:
        wire["AliasTarget"] = _map_keys(record_set["alias_target"], ALIAS_TARGET_WIRE_KEYS)
    if "resource_records" in record_set:
        wire["ResourceRecords"] = [
            {"Value": rr["value"]} for rr in record_set["resource_records"]
        ]
    return wire


def record_from_wire(wire: Mapping) -> Dict:
    """Translate a Route53 ResourceRecordSet into a raw record set."""
    record = _map_keys(wire, {v: k for k, v in RECORD_WIRE_KEYS.items()})
    if "GeoLocation" in wire:
        record["geo_location"] = _map_keys(
            wire["GeoLocation"], {v: k for k, v in GEO_LOCATION_WIRE_KEYS.items()}
        )
    if "AliasTarget" in wire:
        record["alias_target"] = _map_keys(
            wire["AliasTarget"], {v: k for k, v in ALIAS_TARGET_WIRE_KEYS.items()}
        )
    if wire.get("ResourceRecords"):
        record["resource_records"] = [
            {"value": rr["Value"]} for rr in wire["ResourceRecords"]
        ]
    return record


def _service_error(error: Exception, operation: str) -> ProviderServiceError:
    """Translate a botocore exception into a ProviderServiceError."""
    if isinstance(error, ClientError):
        details = error.response.get("Error", {})
        return ProviderServiceError(
            details.get("Message") or str(error),
            code=details.get("Code"),
            operation=operation,
        )
    return ProviderServiceError(str(error), code=type(error).__name__, operation=operation)


class Route53Provider(DNSProvider):
    """Route53 DNS provider implementation using boto3."""

    def __init__(self, config: Optional[ProviderConfig] = None, client=None):
        """Initialize Route53 provider, building a client unless one is supplied."""
        self.config = config or ProviderConfig()
        self.client = client if client is not None else self._create_client()
        logger.info(f"Route53 provider initialized (region {self.config.region})")

    def _create_client(self):
        session = self._create_session()
        return session.client("route53", endpoint_url=self.config.endpoint_url)

    def _create_session(self) -> boto3.session.Session:
        config = self.config
        if config.aws_access_key and config.aws_secret_access_key:
            session = boto3.session.Session(
                aws_access_key_id=config.aws_access_key,
                aws_secret_access_key=config.aws_secret_access_key,
                aws_session_token=config.aws_session_token,
                region_name=config.region,
            )
        else:
            logger.info(
                "No AWS credentials supplied, going to attempt to use automatic credentials from IAM or ENV"
            )
            session = boto3.session.Session(region_name=config.region)

        if config.aws_assume_role_arn:
            session = self._assume_role(session)
        return session

    def _assume_role(self, session: boto3.session.Session) -> boto3.session.Session:
        """Exchange the base session for temporary credentials of the configured role."""
        role_session_name = self.config.aws_role_session_name or DEFAULT_ROLE_SESSION_NAME
        try:
            response = session.client("sts").assume_role(
                RoleArn=self.config.aws_assume_role_arn,
                RoleSessionName=role_session_name,
            )
        except (ClientError, BotoCoreError) as e:
            raise _service_error(e, "assume_role") from e

        credentials = response["Credentials"]
        logger.info(f"Assumed role {self.config.aws_assume_role_arn} as {role_session_name}")
        return boto3.session.Session(
            aws_access_key_id=credentials["AccessKeyId"],
            aws_secret_access_key=credentials["SecretAccessKey"],
            aws_session_token=credentials["SessionToken"],
            region_name=self.config.region,
        )

    def list_records(
        self,
        zone_id: str,
        start_name: Optional[str] = None,
        start_type: Optional[str] = None,
        start_identifier: Optional[str] = None,
    ) -> RecordPage:
        """List one page of record sets of a hosted zone."""
        params = {"HostedZoneId": zone_id}
        if start_name:
            params["StartRecordName"] = start_name
        if start_type:
            params["StartRecordType"] = start_type
        if start_identifier:
            params["StartRecordIdentifier"] = start_identifier

        try:
            response = self.client.list_resource_record_sets(**params)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to list records of zone {zone_id}: {e}")
            raise _service_error(e, "list_records") from e

        records = [record_from_wire(rr) for rr in response.get("ResourceRecordSets", [])]
        logger.debug(f"Retrieved {len(records)} record sets from zone {zone_id}")
        return RecordPage(
            records=records,
            truncated=response.get("IsTruncated", False),
            next_name=response.get("NextRecordName"),
            next_type=response.get("NextRecordType"),
            next_identifier=response.get("NextRecordIdentifier"),
        )

    def submit_change(self, request: ChangeRequest) -> Dict:
        """Submit a change batch to Route53."""
        change_batch = {
            "Comment": request.comment,
            "Changes": [
                {"Action": change.action, "ResourceRecordSet": record_to_wire(change.record_set)}
                for change in request.changes
            ],
        }

        try:
            response = self.client.change_resource_record_sets(
                HostedZoneId=request.zone_id, ChangeBatch=change_batch
            )
        except (ClientError, BotoCoreError) as e:
            raise _service_error(e, "submit_change") from e

        logger.debug(f"Change batch submitted: {response.get('ChangeInfo')}")
        return response
