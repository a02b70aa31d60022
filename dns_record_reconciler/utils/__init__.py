"""
Utility functions and helpers.

This package contains the validation helpers used by the record
normalizer.
"""

from .validators import validate_record_name, validate_record_type, validate_ttl

__all__ = ["validate_record_name", "validate_record_type", "validate_ttl"]
