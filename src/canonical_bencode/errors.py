"""
Exceptions raised by the bencode codec.
"""
from typing import Optional

__all__ = [
    "BencodeError",
    "BencodeDecodeError",
    "TrailingDataError",
    "NestingDepthError",
]


class BencodeError(ValueError):
    """Base class for all bencode codec errors."""


class BencodeDecodeError(BencodeError):
    """
    Raised when input is not a well-formed bencode value.

    ``position`` is the byte offset at which the problem was detected, or
    ``None`` when no offset applies.
    """
    def __init__(self, reason: str, position: Optional[int] = None):
        self.reason = reason
        self.position = position
        if position is not None:
            message = f"{reason} (at byte {position})"
        else:
            message = reason
        super().__init__(message)


class TrailingDataError(BencodeDecodeError):
    """Raised by a strict decode when bytes remain after the top-level value."""


class NestingDepthError(BencodeDecodeError):
    """Raised when lists/dictionaries are nested deeper than the decoder allows."""
