"""Flow value object and endpoint canonicalization.

A Flow is the 5-tuple a Community ID is computed from: protocol, two
addresses and two transport selectors (ports for TCP/UDP/SCTP, ICMP type and
code for ICMP/ICMPv6).

Canonicalization reduces a flow to a direction-independent endpoint order:
    - One-way flows keep the order given by the caller
    - All other flows put the (address, selector) pair that sorts lower first,
      comparing addresses by their network-order octets

Reference: Community ID Flow Hashing specification, v1
"""

from __future__ import annotations

from dataclasses import dataclass, field
from ipaddress import IPv4Address, IPv6Address, ip_address
from typing import TypeAlias

from .community_id import CommunityIDv1
from .exceptions import AddressFamilyError
from .hashing import hash_v1
from .protocol import Protocol, pair

IPAddress: TypeAlias = IPv4Address | IPv6Address

SELECTOR_MIN = 0
SELECTOR_MAX = 0xFFFF


def _to_address(value: str | bytes | IPAddress) -> IPAddress:
    if isinstance(value, (IPv4Address, IPv6Address)):
        return value

    return ip_address(value)


@dataclass(frozen=True)
class Flow:
    """Immutable network flow between two endpoints.

    Selectors are stored exactly as given. ICMP request/reply pairing is applied
    when the flow is canonicalized, so a flow keeps the caller's view of it.

    Attributes:
        proto: IP protocol of the flow
        src_addr: Source address (IPv4 or IPv6)
        src_selector: Source port, or ICMP type for ICMP flows
        dst_addr: Destination address, same family as src_addr
        dst_selector: Destination port, or ICMP code for ICMP flows
        has_selectors: False for flows built without selectors (see Flow.partial)
        one_way: True if the endpoints are never reordered during canonicalization

    Raises:
        UnknownProtocolError: If proto is a raw number outside the supported protocols
        AddressFamilyError: If the two addresses are of different families
        TypeError: If a selector is not an int
        ValueError: If an address is malformed or a selector does not fit in 16 bits
    """

    proto: Protocol
    src_addr: IPAddress
    src_selector: int
    dst_addr: IPAddress
    dst_selector: int

    has_selectors: bool = field(default=True, kw_only=True)

    one_way: bool = field(init=False)

    def __post_init__(self) -> None:
        # Frozen dataclass: normalized values are written through object.__setattr__
        object.__setattr__(self, "proto", Protocol.from_number(self.proto))
        object.__setattr__(self, "src_addr", _to_address(self.src_addr))
        object.__setattr__(self, "dst_addr", _to_address(self.dst_addr))

        if self.src_addr.version != self.dst_addr.version:
            raise AddressFamilyError(
                f"Flow endpoints must share an address family, got IPv{self.src_addr.version} "
                f"source {self.src_addr} and IPv{self.dst_addr.version} destination {self.dst_addr}"
            )

        for name in ("src_selector", "dst_selector"):
            selector = getattr(self, name)
            if not isinstance(selector, int):
                raise TypeError(f"{name} must be an int, got {type(selector).__name__}")
            if not SELECTOR_MIN <= selector <= SELECTOR_MAX:
                raise ValueError(f"{name} {selector} out of range, must be between {SELECTOR_MIN} and {SELECTOR_MAX}")

        if not self.has_selectors and (self.src_selector or self.dst_selector):
            raise ValueError("Flow without selectors cannot carry non-zero selectors")

        if self.has_selectors:
            one_way = pair(self.proto, self.src_selector, self.dst_selector)[2]
        else:
            one_way = True

        object.__setattr__(self, "one_way", one_way)

    @classmethod
    def partial(
        cls,
        proto: Protocol | int,
        src_addr: str | bytes | IPAddress,
        dst_addr: str | bytes | IPAddress,
    ) -> Flow:
        """Create a flow without selectors.

        Used for protocols or packets where no ports are available (e.g. IP
        fragments). Both selectors are 0 and the flow is one-way, so the
        endpoints keep the order given.

        Args:
            proto: IP protocol of the flow
            src_addr: Source address
            dst_addr: Destination address

        Returns:
            One-way Flow with zero selectors
        """
        return cls(proto, src_addr, 0, dst_addr, 0, has_selectors=False)

    def reversed(self) -> Flow:
        """Return the same flow as seen from the destination endpoint."""
        return Flow(
            self.proto,
            self.dst_addr,
            self.dst_selector,
            self.src_addr,
            self.src_selector,
            has_selectors=self.has_selectors,
        )

    def canonicalize(self) -> tuple[IPAddress, int, IPAddress, int]:
        """Order the endpoints of this flow independently of its direction.

        Returns:
            Tuple of (low address, low selector, high address, high selector)
        """
        if not self.has_selectors:
            return self.src_addr, self.src_selector, self.dst_addr, self.dst_selector

        src_selector, dst_selector, one_way = pair(self.proto, self.src_selector, self.dst_selector)

        if one_way:
            return self.src_addr, src_selector, self.dst_addr, dst_selector

        if (self.src_addr.packed, src_selector) > (self.dst_addr.packed, dst_selector):
            return self.dst_addr, dst_selector, self.src_addr, src_selector

        return self.src_addr, src_selector, self.dst_addr, dst_selector

    def community_id_v1(self, seed: int = 0) -> CommunityIDv1:
        """Compute the version 1 Community ID of this flow.

        Args:
            seed: 16-bit seed mixed into the hash (default 0)

        Returns:
            CommunityIDv1 wrapping the 20-byte SHA-1 digest

        Raises:
            TypeError: If seed is not an int
            ValueError: If seed does not fit in 16 bits
        """
        return CommunityIDv1(hash_v1(self, seed))
