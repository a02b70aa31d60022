"""
DNS provider implementations.

This package contains the provider interface consumed by the
reconciliation core, the AWS Route53 implementation and an in-memory
mock provider.
"""

from .base_provider import (
    CREATE,
    DELETE,
    UPSERT,
    Change,
    ChangeRequest,
    DNSProvider,
    ProviderClient,
    RecordPage,
)
from .dns_client import DNSClient
from .mock_provider import MockDNSProvider
from .route53_provider import ProviderConfig, Route53Provider

__all__ = [
    "CREATE",
    "DELETE",
    "UPSERT",
    "Change",
    "ChangeRequest",
    "DNSClient",
    "DNSProvider",
    "MockDNSProvider",
    "ProviderClient",
    "ProviderConfig",
    "RecordPage",
    "Route53Provider",
]
