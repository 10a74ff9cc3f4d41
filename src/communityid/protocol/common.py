"""Common types shared across protocol components.

This module contains the IP protocol numbers that take part in Community ID
computation. The numeric value of each member is written verbatim into the
hash input.

Reference: IANA Assigned Internet Protocol Numbers
"""

from __future__ import annotations

from enum import IntEnum
from ipaddress import IPv4Address, IPv6Address
from typing import TYPE_CHECKING

from ..exceptions import UnknownProtocolError

if TYPE_CHECKING:
    from ..flow import Flow


class Protocol(IntEnum):
    """IP protocols recognized by the Community ID v1 algorithm.

    - ICMP and ICMPV6 use the ICMP type/code in place of ports
    - TCP, UDP and SCTP use transport ports
    """

    ICMP = 1
    TCP = 6
    UDP = 17
    ICMPV6 = 58
    SCTP = 132

    @classmethod
    def from_number(cls, number: int) -> Protocol:
        """Convert a raw IANA protocol number into a Protocol.

        Args:
            number: Protocol number as found in the IP header (0-255)

        Returns:
            The matching Protocol member

        Raises:
            UnknownProtocolError: If the number is not a recognized protocol
        """
        try:
            return cls(number)
        except ValueError as e:
            raise UnknownProtocolError(f"Protocol number {number!r} is not supported by Community ID") from e

    def flow(
        self,
        src_addr: str | IPv4Address | IPv6Address,
        src_selector: int,
        dst_addr: str | IPv4Address | IPv6Address,
        dst_selector: int,
    ) -> Flow:
        """Build a Flow of this protocol between two endpoints."""
        from ..flow import Flow

        return Flow(self, src_addr, src_selector, dst_addr, dst_selector)
