"""
DNS Client - Unified interface for DNS provider APIs

This module provides a common interface for the supported DNS providers,
currently AWS Route53 and the in-memory mock provider.
"""

import logging
from typing import Dict, Optional

from .base_provider import ChangeRequest, DNSProvider, RecordPage
from .mock_provider import MockDNSProvider
from .route53_provider import ProviderConfig, Route53Provider

logger = logging.getLogger(__name__)


class DNSClient(DNSProvider):
    """Unified DNS client that supports multiple providers."""

    def __init__(self, config: Dict):
        """Initialize DNS client with configuration."""
        self.config = config or {}
        self.provider = self._get_provider()

    def _get_provider(self) -> DNSProvider:
        """Get DNS provider based on configuration."""
        provider_name = self.config.get("default_provider", "route53")
        provider_config = self.config.get("dns_providers", {}).get(provider_name) or {}

        if provider_name == "route53":
            return Route53Provider(ProviderConfig.from_dict(provider_config))
        elif provider_name == "mock":
            return MockDNSProvider(provider_config)
        else:
            logger.warning(f"Unknown provider '{provider_name}', using mock provider")
            return MockDNSProvider()

    def list_records(
        self,
        zone_id: str,
        start_name: Optional[str] = None,
        start_type: Optional[str] = None,
        start_identifier: Optional[str] = None,
    ) -> RecordPage:
        """List record sets of a zone."""
        return self.provider.list_records(zone_id, start_name, start_type, start_identifier)

    def submit_change(self, request: ChangeRequest) -> Dict:
        """Submit a change batch."""
        return self.provider.submit_change(request)
