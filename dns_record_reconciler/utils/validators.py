"""
Validators - Input validation for declared DNS records

This module provides validation functions for record names, record types
and TTLs so that malformed declarations are rejected before any provider
call is made.
"""

import logging

import dns.exception
import dns.name
import dns.rdatatype

logger = logging.getLogger(__name__)

# Largest TTL accepted by DNS (RFC 2181, section 8)
MAX_TTL = 2147483647


def validate_record_name(name: str) -> bool:
    """
    Validate a DNS record name.

    Wildcard labels and a trailing dot are accepted. Octal escapes such as
    ``\\052`` are parsed the way a zone file would parse them.

    Args:
        name: The record name to validate

    Returns:
        True if valid, False otherwise
    """
    if not name or not isinstance(name, str):
        return False

    try:
        parsed = dns.name.from_text(name)
    except dns.exception.DNSException as e:
        logger.warning(f"Invalid record name '{name}': {e}")
        return False

    # The root name alone is never a record we manage
    if parsed == dns.name.root:
        logger.warning("Record name cannot be the DNS root")
        return False

    return True


def validate_record_type(record_type: str) -> bool:
    """
    Validate a DNS record type mnemonic (A, AAAA, CNAME, TXT, ...).

    Args:
        record_type: The record type to validate

    Returns:
        True if valid, False otherwise
    """
    if not record_type or not isinstance(record_type, str):
        return False

    try:
        dns.rdatatype.from_text(record_type)
    except dns.exception.DNSException as e:
        logger.warning(f"Invalid record type '{record_type}': {e}")
        return False

    return True


def validate_ttl(ttl) -> bool:
    """Check that a TTL is a non-negative integer within the DNS range."""
    if isinstance(ttl, bool) or not isinstance(ttl, int):
        return False
    return 0 <= ttl <= MAX_TTL
