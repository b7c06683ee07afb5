"""Core tsformat library exports."""

from tsformat.lib.errors import ErrorCode
from tsformat.lib.format import Format
from tsformat.lib.special import Special

__all__ = ["ErrorCode", "Format", "Special"]
