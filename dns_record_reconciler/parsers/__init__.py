"""
Record declaration parsers.
"""

from .records_file import RecordsFileParser

__all__ = ["RecordsFileParser"]
