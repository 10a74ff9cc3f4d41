"""Versioned Community ID values and their string renderings.

A Community ID is a digest tagged with the version of the algorithm that
produced it. Versions are distinct hashes, not distinct renderings of the same
bytes, so each version is its own class and two IDs are equal only if both the
version and the digest match.

Classes:
    - CommunityID: Base class for all Community ID versions
    - CommunityIDv1: SHA-1 based Community ID (version 1)

String forms:
    - Base64: "<version>:" + standard base64 of the digest, with padding
    - Hex: "<version>:" + lowercase hex of the digest

Only the base64 form can be parsed back (CommunityID.from_string).

Reference: Community ID Flow Hashing specification, v1
"""

from __future__ import annotations

from abc import ABC
from base64 import b64decode, b64encode
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, ClassVar, Self

from .exceptions import CommunityIDFormatError
from .hashing import V1_DIGEST_SIZE

if TYPE_CHECKING:
    from pydantic import GetCoreSchemaHandler
    from pydantic_core import CoreSchema

VERSION_SEPARATOR = ":"


@dataclass(frozen=True)
class CommunityID(ABC):
    """Base class for a versioned Community ID.

    Subclasses define the version number and the digest size of their hash.

    Attributes:
        digest: Raw digest bytes produced by the version's hash
        version: Algorithm version (class constant)
        digest_size: Expected digest length in bytes (class constant)
    """

    version: ClassVar[int]
    digest_size: ClassVar[int]

    digest: bytes

    def __post_init__(self) -> None:
        if type(self) is CommunityID:
            raise TypeError("CommunityID is abstract, construct a version class such as CommunityIDv1")

        object.__setattr__(self, "digest", bytes(self.digest))

        if len(self.digest) != self.digest_size:
            raise ValueError(
                f"Community ID v{self.version} digest must be {self.digest_size} bytes, got {len(self.digest)}"
            )

    def base64(self) -> str:
        """Render as "<version>:<base64 digest>", e.g. "1:vTdrngJjlP5eZ9mw9JtnKyn99KM="."""
        return f"{self.version}{VERSION_SEPARATOR}{b64encode(self.digest).decode('ascii')}"

    def hex(self) -> str:
        """Render as "<version>:<lowercase hex digest>"."""
        return f"{self.version}{VERSION_SEPARATOR}{self.digest.hex()}"

    def __str__(self) -> str:
        return self.base64()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.hex()!r})"

    @classmethod
    def from_string(cls, text: str) -> Self:
        """Parse the base64 form of a Community ID.

        The text is split once on the first ':'. The prefix selects the version
        and the remainder must be standard base64 decoding to exactly the
        digest size of that version.

        Args:
            text: Community ID string, e.g. "1:vTdrngJjlP5eZ9mw9JtnKyn99KM="

        Returns:
            CommunityID instance of the matching version

        Raises:
            CommunityIDFormatError: If the separator is missing, the version is
                unknown (or not a version of cls), the base64 is invalid, or the
                decoded digest has the wrong length
        """
        version, separator, encoded = text.partition(VERSION_SEPARATOR)

        if not separator:
            raise CommunityIDFormatError(f"Missing '{VERSION_SEPARATOR}' in Community ID {text!r}")

        id_class = _VersionTable.get(version)

        if id_class is None or not issubclass(id_class, cls):
            raise CommunityIDFormatError(f"Unknown Community ID version {version!r}")

        try:
            digest = b64decode(encoded, validate=True)
        except ValueError as e:
            raise CommunityIDFormatError(f"Invalid base64 in Community ID {text!r}: {e}") from e

        if len(digest) != id_class.digest_size:
            raise CommunityIDFormatError(
                f"Community ID v{version} digest must be {id_class.digest_size} bytes, got {len(digest)}"
            )

        return id_class(digest)

    @classmethod
    def _from_pydantic(cls, value: str) -> Self:
        try:
            return cls.from_string(value)
        except CommunityIDFormatError as e:
            # pydantic only converts ValueError into a validation error
            raise ValueError(str(e)) from e

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: GetCoreSchemaHandler) -> CoreSchema:
        """Let pydantic models hold Community IDs, exchanged as their base64 form."""
        from pydantic_core import core_schema

        from_str_schema = core_schema.chain_schema(
            [
                core_schema.str_schema(),
                core_schema.no_info_plain_validator_function(cls._from_pydantic),
            ]
        )

        return core_schema.json_or_python_schema(
            json_schema=from_str_schema,
            python_schema=core_schema.union_schema(
                [
                    core_schema.is_instance_schema(cls),
                    from_str_schema,
                ]
            ),
            serialization=core_schema.to_string_ser_schema(),
        )


@dataclass(frozen=True, repr=False)
class CommunityIDv1(CommunityID):
    """Community ID version 1: SHA-1 over the canonical flow tuple.

    Reference: Community ID Flow Hashing specification, v1
    """

    version: ClassVar[int] = 1
    digest_size: ClassVar[int] = V1_DIGEST_SIZE


# =============================================================================
# Version Lookup Table
# =============================================================================


_VersionTable: Mapping[str, type[CommunityID]] = MappingProxyType(
    {
        str(CommunityIDv1.version): CommunityIDv1,
    }
)
