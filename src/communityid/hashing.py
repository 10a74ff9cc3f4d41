"""Community ID v1 hash input serialization and digest computation.

The v1 hash input is the concatenation, without delimiters, of:

    seed (2 bytes, big-endian)
    low endpoint address (4 or 16 bytes, network order)
    high endpoint address (4 or 16 bytes, network order)
    protocol number (1 byte)
    padding (1 byte, always zero)
    low endpoint selector (2 bytes, big-endian)
    high endpoint selector (2 bytes, big-endian)

"Low" and "high" refer to the canonical endpoint order produced by
Flow.canonicalize(). The digest is the SHA-1 of that input.

Reference: Community ID Flow Hashing specification, v1
"""

from __future__ import annotations

import hashlib
import struct
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .flow import Flow

# =============================================================================
# v1 Layout Constants
# =============================================================================


V1_SEED_FORMAT = "!H"  # Seed: 16-bit unsigned, network order
V1_TRAILER_FORMAT = "!BBHH"  # Protocol, padding, low selector, high selector

V1_PADDING = 0x00  # Reserved, must be zero for v1

V1_DIGEST_SIZE = 20  # SHA-1 output length in bytes

SEED_MIN = 0
SEED_MAX = 0xFFFF

# =============================================================================
# Hashing Functions
# =============================================================================


def _validate_seed(seed: int) -> None:
    if not isinstance(seed, int):
        raise TypeError(f"Seed must be an int, got {type(seed).__name__}")
    if not SEED_MIN <= seed <= SEED_MAX:
        raise ValueError(f"Seed {seed} out of range, must be between {SEED_MIN} and {SEED_MAX}")


def serialize_v1(flow: Flow, seed: int = 0) -> bytes:
    """Serialize a flow into the Community ID v1 hash input.

    Args:
        flow: Flow to serialize
        seed: 16-bit seed mixed into the hash (default 0)

    Returns:
        Hash input bytes (18 bytes for IPv4 flows, 42 bytes for IPv6 flows)

    Raises:
        TypeError: If seed is not an int
        ValueError: If seed does not fit in 16 bits
    """
    _validate_seed(seed)

    low_addr, low_selector, high_addr, high_selector = flow.canonicalize()

    return b"".join(
        (
            struct.pack(V1_SEED_FORMAT, seed),
            low_addr.packed,
            high_addr.packed,
            struct.pack(V1_TRAILER_FORMAT, flow.proto, V1_PADDING, low_selector, high_selector),
        )
    )


def hash_v1(flow: Flow, seed: int = 0) -> bytes:
    """Compute the 20-byte Community ID v1 digest of a flow.

    Args:
        flow: Flow to hash
        seed: 16-bit seed mixed into the hash (default 0)

    Returns:
        SHA-1 digest of the v1 hash input

    Raises:
        TypeError: If seed is not an int
        ValueError: If seed does not fit in 16 bits
    """
    return hashlib.sha1(serialize_v1(flow, seed), usedforsecurity=False).digest()
