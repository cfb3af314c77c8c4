"""
Common test fixtures shared by all modules.

Provides factory functions for:
- TextContent sequences
- MerkleTree instances (with and without Bloom filters)
- Content types whose capabilities fail on demand
"""

import hashlib
from dataclasses import dataclass, field
from typing import Optional

from bloomtree.crypto.hashing import HashPolicy
from bloomtree.merkle import MerkleTree, TextContent


# =============================================================================
# Content Factories
# =============================================================================

def make_text_contents(
    count: int,
    prefix: str = "item",
    hash_policy: HashPolicy = hashlib.sha256,
) -> list[TextContent]:
    """Create ``count`` distinct TextContent items: item0, item1, ..."""
    return [TextContent(f"{prefix}{i}", hash_policy=hash_policy) for i in range(count)]


def make_tree(
    count: int,
    false_positive_rate: Optional[float] = None,
    hash_policy: HashPolicy = hashlib.sha256,
    prefix: str = "item",
) -> MerkleTree:
    """Create a tree over ``count`` TextContent items."""
    contents = make_text_contents(count, prefix=prefix, hash_policy=hash_policy)
    return MerkleTree(contents, hash_policy=hash_policy, false_positive_rate=false_positive_rate)


def make_letter_tree(
    letters: str = "ABCD",
    false_positive_rate: Optional[float] = None,
) -> MerkleTree:
    """Create a tree with one TextContent per letter, e.g. {A, B, C, D}."""
    return MerkleTree(
        [TextContent(letter) for letter in letters],
        false_positive_rate=false_positive_rate,
    )


# =============================================================================
# Misbehaving Content
# =============================================================================

@dataclass
class FailingHashContent:
    """Content whose hash() raises once ``fail`` is set."""

    text: str
    fail: bool = False

    def hash(self) -> bytes:
        if self.fail:
            raise RuntimeError("disk on fire")
        return hashlib.sha256(self.text.encode("utf-8")).digest()

    def equals(self, other) -> bool:
        return isinstance(other, FailingHashContent) and other.text == self.text


@dataclass
class FailingEqualsContent:
    """Content whose equals() always raises."""

    text: str

    def hash(self) -> bytes:
        return hashlib.sha256(self.text.encode("utf-8")).digest()

    def equals(self, other) -> bool:
        raise RuntimeError("comparison backend unavailable")


@dataclass(eq=False)
class CountingContent:
    """Content that records its text in ``calls`` every time equals() runs."""

    text: str
    calls: list = field(default_factory=list)

    def hash(self) -> bytes:
        return hashlib.sha256(self.text.encode("utf-8")).digest()

    def equals(self, other) -> bool:
        self.calls.append(self.text)
        return isinstance(other, CountingContent) and other.text == self.text
