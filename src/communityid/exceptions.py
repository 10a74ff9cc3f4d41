"""Community ID exception classes."""

from __future__ import annotations


class CommunityIDError(Exception):
    """Base exception for all Community ID errors."""


class AddressFamilyError(CommunityIDError):
    """Flow endpoints belong to different address families."""


class CommunityIDFormatError(CommunityIDError):
    """Community ID string could not be parsed (prefix, base64, length)."""


class UnknownProtocolError(CommunityIDError):
    """Protocol number is not one of the protocols covered by Community ID."""
