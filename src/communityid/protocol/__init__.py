"""Protocol layer components for Community ID flow canonicalization.

This package contains the IANA protocol numbers covered by Community ID and
the ICMP/ICMPv6 request/reply pairing tables.

Reference: Community ID Flow Hashing specification, v1
"""

from .common import Protocol
from .icmp import (
    ICMPType,
    ICMPv6Type,
    is_one_way,
    pair,
)

__all__ = [
    # Common types
    "Protocol",
    # ICMP pairing
    "ICMPType",
    "ICMPv6Type",
    "is_one_way",
    "pair",
]
