"""ICMP/ICMPv6 request/reply pairing tables.

ICMP has no ports, so Community ID uses the ICMP type and code in their place.
To make both directions of an ICMP exchange hash to the same value, the
request type and its reply type are treated as a port pair: a flow whose
source type is a known request (or reply) has its destination selector
replaced by the matching reply (or request) type.

ICMP types without a defined counterpart have no notion of a response. Such
flows are "one-way": their endpoints are never reordered, so the two
directions produce distinct Community IDs.

Classes:
    - ICMPType: ICMP (IPv4) message types taking part in pairing
    - ICMPv6Type: ICMPv6 message types taking part in pairing

Reference: Community ID Flow Hashing specification, v1
    - RFC 792 / RFC 950 / RFC 1256: ICMP message types
    - RFC 4443 / RFC 4861 / RFC 2710 / RFC 3775: ICMPv6 message types
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import IntEnum
from types import MappingProxyType

from .common import Protocol

# =============================================================================
# ICMP Message Types
# =============================================================================


class ICMPType(IntEnum):
    ECHO_REPLY = 0
    ECHO = 8
    ROUTER_ADVERT = 9
    ROUTER_SOLICIT = 10
    TIMESTAMP = 13
    TIMESTAMP_REPLY = 14
    INFO = 15
    INFO_REPLY = 16
    MASK = 17
    MASK_REPLY = 18


class ICMPv6Type(IntEnum):
    ECHO_REQUEST = 128
    ECHO_REPLY = 129
    MLD_LISTENER_QUERY = 130
    MLD_LISTENER_REPORT = 131
    ND_ROUTER_SOLICIT = 133
    ND_ROUTER_ADVERT = 134
    ND_NEIGHBOR_SOLICIT = 135
    ND_NEIGHBOR_ADVERT = 136
    WRU_REQUEST = 139  # Who-are-you request (node information query)
    WRU_REPLY = 140  # Who-are-you reply
    HAAD_REQUEST = 144  # Home agent address discovery request
    HAAD_REPLY = 145  # Home agent address discovery reply


# =============================================================================
# Pairing Descriptors
# =============================================================================


@dataclass(frozen=True, kw_only=True)
class _PairDescriptor:
    request: int  # Type sent by the initiating endpoint
    reply: int  # Type sent back by the responding endpoint


# =============================================================================
# Pairing Tables
# =============================================================================


_ICMPPairTable: tuple[_PairDescriptor, ...] = (
    _PairDescriptor(request=ICMPType.ECHO, reply=ICMPType.ECHO_REPLY),
    _PairDescriptor(request=ICMPType.TIMESTAMP, reply=ICMPType.TIMESTAMP_REPLY),
    _PairDescriptor(request=ICMPType.INFO, reply=ICMPType.INFO_REPLY),
    _PairDescriptor(request=ICMPType.MASK, reply=ICMPType.MASK_REPLY),
    # Router solicitation is answered by an advertisement
    _PairDescriptor(request=ICMPType.ROUTER_SOLICIT, reply=ICMPType.ROUTER_ADVERT),
)


_ICMPv6PairTable: tuple[_PairDescriptor, ...] = (
    _PairDescriptor(request=ICMPv6Type.ECHO_REQUEST, reply=ICMPv6Type.ECHO_REPLY),
    _PairDescriptor(request=ICMPv6Type.MLD_LISTENER_QUERY, reply=ICMPv6Type.MLD_LISTENER_REPORT),
    _PairDescriptor(request=ICMPv6Type.ND_ROUTER_SOLICIT, reply=ICMPv6Type.ND_ROUTER_ADVERT),
    _PairDescriptor(request=ICMPv6Type.ND_NEIGHBOR_SOLICIT, reply=ICMPv6Type.ND_NEIGHBOR_ADVERT),
    _PairDescriptor(request=ICMPv6Type.WRU_REQUEST, reply=ICMPv6Type.WRU_REPLY),
    _PairDescriptor(request=ICMPv6Type.HAAD_REQUEST, reply=ICMPv6Type.HAAD_REPLY),
)


def _build_counterparts(table: tuple[_PairDescriptor, ...]) -> Mapping[int, int]:
    """Build a read-only type -> counterpart type lookup covering both directions.

    Args:
        table: Pairing table of request/reply descriptors

    Returns:
        Read-only mapping from each request to its reply and each reply to its request

    Raises:
        ValueError: If a type appears in more than one pair
    """
    counterparts: dict[int, int] = {}

    for descriptor in table:
        for this_type, other_type in ((descriptor.request, descriptor.reply), (descriptor.reply, descriptor.request)):
            if this_type in counterparts:
                raise ValueError(f"ICMP type {this_type} is paired more than once")

            counterparts[int(this_type)] = int(other_type)

    return MappingProxyType(counterparts)


_ICMP_COUNTERPARTS = _build_counterparts(_ICMPPairTable)
_ICMPV6_COUNTERPARTS = _build_counterparts(_ICMPv6PairTable)

_COUNTERPARTS_BY_PROTOCOL: Mapping[Protocol, Mapping[int, int]] = MappingProxyType(
    {
        Protocol.ICMP: _ICMP_COUNTERPARTS,
        Protocol.ICMPV6: _ICMPV6_COUNTERPARTS,
    }
)

# =============================================================================
# Pairing Functions
# =============================================================================


def pair(proto: Protocol, type_a: int, type_b: int) -> tuple[int, int, bool]:
    """Resolve the selector pair of a flow, applying ICMP request/reply pairing.

    For ICMP and ICMPv6, if type_a is a known request or reply type, the second
    selector is replaced by its counterpart type, whatever the caller passed.
    Otherwise both selectors are kept and the flow is marked one-way.

    Protocols other than ICMP/ICMPv6 pass through unchanged and are never one-way.

    Args:
        proto: Flow protocol
        type_a: Source selector (ICMP type for ICMP flows)
        type_b: Destination selector (ICMP code for ICMP flows)

    Returns:
        Tuple of (type_a, paired type_b, one_way)
    """
    counterparts = _COUNTERPARTS_BY_PROTOCOL.get(proto)

    if counterparts is None:
        return type_a, type_b, False

    counterpart = counterparts.get(type_a)

    if counterpart is None:
        return type_a, type_b, True

    return type_a, counterpart, False


def is_one_way(proto: Protocol, icmp_type: int) -> bool:
    """Check if a flow of this protocol and source selector has no reverse direction."""
    return pair(proto, icmp_type, 0)[2]
