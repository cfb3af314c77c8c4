"""
Merkle Content Capability

Anything stored in a tree must be able to digest itself and compare itself
with another content item. Both operations may fail; failures surface as
ContentHashingException / ContentEqualityException.

Shipped content types:
- BytesContent: raw bytes
- TextContent: UTF-8 text
- CanonicalContent: any JSON-able object or Pydantic model, hashed through
  canonical JSON so equal objects always produce equal leaves
"""
from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from bloomtree.crypto.hashing import HashPolicy, digest_with_policy
from bloomtree.schemas.canonical import canonical_equals, dumps_canonical
from bloomtree.schemas.errors import (
    BloomTreeException,
    ContentEqualityException,
    ContentHashingException,
)


@runtime_checkable
class Content(Protocol):
    """Capability required of every item stored in a MerkleTree."""

    def hash(self) -> bytes:
        """Return the digest of this item."""
        ...

    def equals(self, other: "Content") -> bool:
        """Return True if ``other`` is the same item."""
        ...


def content_digest(content: Content, leaf_index: int | None = None) -> bytes:
    """Call ``content.hash()``, wrapping foreign failures."""
    try:
        return content.hash()
    except BloomTreeException:
        raise
    except Exception as e:
        raise ContentHashingException(
            message=f"Content failed to hash: {e}",
            leaf_index=leaf_index,
            details={"content_type": type(content).__name__},
        ) from e


def content_equals(content: Content, other: Content) -> bool:
    """Call ``content.equals(other)``, wrapping foreign failures."""
    try:
        return bool(content.equals(other))
    except BloomTreeException:
        raise
    except Exception as e:
        raise ContentEqualityException(
            message=f"Content failed to compare: {e}",
            details={
                "content_type": type(content).__name__,
                "other_type": type(other).__name__,
            },
        ) from e


@dataclass(frozen=True)
class BytesContent:
    """Raw bytes content."""

    data: bytes
    hash_policy: HashPolicy = field(default=hashlib.sha256, repr=False)

    def hash(self) -> bytes:
        return digest_with_policy(self.hash_policy, self.data)

    def equals(self, other: Content) -> bool:
        return (
            isinstance(other, BytesContent)
            and other.hash_policy is self.hash_policy
            and other.data == self.data
        )

    def __str__(self) -> str:
        return self.data.hex()


@dataclass(frozen=True)
class TextContent:
    """UTF-8 text content."""

    text: str
    hash_policy: HashPolicy = field(default=hashlib.sha256, repr=False)

    def hash(self) -> bytes:
        return digest_with_policy(self.hash_policy, self.text.encode("utf-8"))

    def equals(self, other: Content) -> bool:
        return (
            isinstance(other, TextContent)
            and other.hash_policy is self.hash_policy
            and other.text == self.text
        )

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class CanonicalContent:
    """
    Structured content hashed via canonical JSON.

    Rule: digest = policy(dumps_canonical(value).encode("utf-8"))

    Two CanonicalContent items are equal when they share a hash policy and
    their canonical JSON is identical, so {"a": 1, "b": 2} equals {"b": 2, "a": 1}.
    """

    value: Any
    hash_policy: HashPolicy = field(default=hashlib.sha256, repr=False)

    def hash(self) -> bytes:
        return digest_with_policy(self.hash_policy, dumps_canonical(self.value).encode("utf-8"))

    def equals(self, other: Content) -> bool:
        return (
            isinstance(other, CanonicalContent)
            and other.hash_policy is self.hash_policy
            and canonical_equals(self.value, other.value)
        )

    def __str__(self) -> str:
        return dumps_canonical(self.value)


__all__ = [
    "Content",
    "content_digest",
    "content_equals",
    "BytesContent",
    "TextContent",
    "CanonicalContent",
]
