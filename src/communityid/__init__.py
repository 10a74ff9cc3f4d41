"""
communityid: Community ID flow hashing for Python.

This library computes the Community ID of a network flow: a deterministic,
direction-independent fingerprint that lets independent sensors, log
pipelines and correlation engines agree on an identifier for the same
conversation.

Example:
    >>> from communityid import Flow, Protocol
    >>> flow = Flow(Protocol.UDP, "192.168.1.42", 4242, "8.8.8.8", 53)
    >>> flow.community_id_v1().base64()
    '1:vTdrngJjlP5eZ9mw9JtnKyn99KM='
"""

from __future__ import annotations

from .community_id import CommunityID, CommunityIDv1
from .exceptions import (
    AddressFamilyError,
    CommunityIDError,
    CommunityIDFormatError,
    UnknownProtocolError,
)
from .flow import Flow
from .protocol import Protocol

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Flow hashing
    "Flow",
    "Protocol",
    "CommunityID",
    "CommunityIDv1",
    # Exceptions
    "CommunityIDError",
    "AddressFamilyError",
    "CommunityIDFormatError",
    "UnknownProtocolError",
]
