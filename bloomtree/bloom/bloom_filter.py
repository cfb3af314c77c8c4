"""
Bloom Filter Implementation
Fixed-size bit array with one-sided-error set membership.

This module provides:
- Optimal parameter estimation for (n, p)
- Double hashing (Kirsch-Mitzenmacher) over two MurmurHash3 x64_128 digests
- Add / test / test-and-add, merge, copy, clear and equality

Hashing Rules (Hard Contracts):
1. Base hashes: h0, h1 = murmur3_128(data); h2, h3 = murmur3_128(data || 0x01)
2. i-th location: h[i % 2] + i * h[2 + ((i + i % 2) % 4) // 2]  (mod 2^64)
3. Bit position: location mod m

False positives are possible, false negatives are not. There is no
per-item removal; clear_all() resets the whole filter.
"""
from __future__ import annotations

import logging
import math
import struct
from typing import Iterable, Sequence

import mmh3
from bitarray import bitarray

from bloomtree.schemas.errors import BloomParameterMismatchException


logger = logging.getLogger(__name__)

_UINT64_MASK = (1 << 64) - 1
_EXTRA_BYTE = b"\x01"


def _as_bytes(data: bytes | bytearray | memoryview | str) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


def estimate_parameters(n: int, p: float) -> tuple[int, int]:
    """
    Estimate bit-array size m and hash count k for n items at rate p.

    m = ceil(-n * ln(p) / ln(2)^2)
    k = ceil(ln(2) * m / n)

    Both are rounded up so the filter is never under-sized.

    Args:
        n: Expected number of items (>= 1)
        p: Target false positive probability, 0 < p < 1

    Returns:
        (m, k)

    Raises:
        ValueError: If n < 1 or p is outside (0, 1)
    """
    if n < 1:
        raise ValueError(f"Expected item count must be positive, got {n}")
    if not 0.0 < p < 1.0:
        raise ValueError(f"False positive rate must be in (0, 1), got {p}")

    m = math.ceil(-1 * n * math.log(p) / math.pow(math.log(2), 2))
    k = math.ceil(math.log(2) * m / n)
    return m, k


def base_hashes(data: bytes) -> tuple[int, int, int, int]:
    """Return the four unsigned 64-bit base hashes of ``data``."""
    v1, v2 = mmh3.hash64(data, seed=0, x64arch=True, signed=False)
    v3, v4 = mmh3.hash64(data + _EXTRA_BYTE, seed=0, x64arch=True, signed=False)
    return v1, v2, v3, v4


def location(h: Sequence[int], i: int) -> int:
    """i-th hashed location (pre-modulo, wrapped to 64 bits)."""
    return (h[i % 2] + i * h[2 + ((i + (i % 2)) % 4) // 2]) & _UINT64_MASK


def locations(data: bytes | str, k: int) -> list[int]:
    """
    Return the k raw hash locations of ``data``.

    Useful to test membership against externally stored bit positions
    without owning a filter (see BloomFilter.test_locations).
    """
    h = base_hashes(_as_bytes(data))
    return [location(h, i) for i in range(k)]


class BloomFilter:
    """
    Bloom filter with m bits and k hash rounds.

    m and k are fixed at construction; both are clamped to at least 1.

    Example:
        >>> bf = BloomFilter.with_estimates(1000, 0.01)
        >>> bf.add(b"hello").test(b"hello")
        True
    """

    __slots__ = ("_m", "_k", "_bits")

    def __init__(self, m: int, k: int) -> None:
        self._m = max(1, int(m))
        self._k = max(1, int(k))
        self._bits = bitarray(self._m, endian="little")
        self._bits.setall(0)

    # ------------------------------------------------------------------
    # Alternative constructors
    # ------------------------------------------------------------------

    @classmethod
    def new(cls, m: int, k: int) -> "BloomFilter":
        """Create an empty filter with m bits and k hash rounds."""
        return cls(m, k)

    @classmethod
    def with_estimates(cls, n: int, p: float) -> "BloomFilter":
        """Create a filter sized for about n items at false positive rate p."""
        m, k = estimate_parameters(n, p)
        return cls(m, k)

    @classmethod
    def from_words(cls, words: Sequence[int], k: int) -> "BloomFilter":
        """
        Wrap existing bit data given as unsigned 64-bit words.

        m is 64 * len(words). Bit i lives in word i // 64 at position i % 64.
        """
        bits = bitarray(endian="little")
        bits.frombytes(struct.pack(f"<{len(words)}Q", *words))
        return cls.from_bits(bits, k)

    @classmethod
    def from_bits(cls, bits: bitarray, k: int) -> "BloomFilter":
        """Wrap an existing bitarray (copied); m is its length."""
        bf = cls(len(bits), k)
        if len(bits):
            copied = bitarray(endian="little")
            copied.extend(bits)
            bf._bits = copied
        return bf

    # ------------------------------------------------------------------
    # Parameters
    # ------------------------------------------------------------------

    @property
    def m(self) -> int:
        return self._m

    @property
    def k(self) -> int:
        return self._k

    @property
    def cap(self) -> int:
        """Capacity of the filter in bits (m)."""
        return self._m

    @property
    def bits(self) -> bitarray:
        """A copy of the underlying bit array."""
        return self._bits.copy()

    def __len__(self) -> int:
        return self._m

    # ------------------------------------------------------------------
    # Membership
    # ------------------------------------------------------------------

    def _positions(self, data: bytes | str) -> Iterable[int]:
        h = base_hashes(_as_bytes(data))
        m = self._m
        return (location(h, i) % m for i in range(self._k))

    def add(self, data: bytes | str) -> "BloomFilter":
        """Add data to the filter. Returns the filter (allows chaining)."""
        for pos in self._positions(data):
            self._bits[pos] = 1
        return self

    def test(self, data: bytes | str) -> bool:
        """
        True if data may be in the set, False if it definitely is not.
        """
        return all(self._bits[pos] for pos in self._positions(data))

    def __contains__(self, data: bytes | str) -> bool:
        return self.test(data)

    def test_and_add(self, data: bytes | str) -> bool:
        """
        Equivalent to test(data) followed by add(data), hashing once.

        Returns the membership result before insertion.
        """
        present = True
        for pos in self._positions(data):
            if not self._bits[pos]:
                present = False
            self._bits[pos] = 1
        return present

    def test_locations(self, locs: Iterable[int]) -> bool:
        """True if every location (taken mod m) is set."""
        return all(self._bits[loc % self._m] for loc in locs)

    # ------------------------------------------------------------------
    # Set operations
    # ------------------------------------------------------------------

    def merge(self, other: "BloomFilter") -> "BloomFilter":
        """
        In-place union with ``other``.

        Raises:
            BloomParameterMismatchException: If m or k differ
        """
        if self._m != other._m:
            raise BloomParameterMismatchException(
                message=f"m's don't match: {self._m} != {other._m}",
                details={"m": self._m, "other_m": other._m},
            )
        if self._k != other._k:
            raise BloomParameterMismatchException(
                message=f"k's don't match: {self._k} != {other._k}",
                details={"k": self._k, "other_k": other._k},
            )
        self._bits |= other._bits
        return self

    def copy(self) -> "BloomFilter":
        """New filter with identical parameters and bits."""
        return BloomFilter(self._m, self._k).merge(self)

    def clear_all(self) -> "BloomFilter":
        """Reset every bit to 0. Returns the filter."""
        self._bits.setall(0)
        return self

    def equal(self, other: "BloomFilter") -> bool:
        """True iff m, k and all bits match."""
        return self._m == other._m and self._k == other._k and self._bits == other._bits

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BloomFilter):
            return NotImplemented
        return self.equal(other)

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    def estimate_false_positive_rate(self, n: int, rounds: int = 100_000) -> float:
        """
        Empirically measure the false positive rate after storing n items.

        Inserts n big-endian uint32 keys 0..n-1, then tests ``rounds`` keys
        starting at n + 1. Clears the filter before and after.
        """
        self.clear_all()
        for i in range(n):
            self.add(struct.pack(">I", i & 0xFFFFFFFF))
        fp = 0
        for i in range(rounds):
            if self.test(struct.pack(">I", (i + n + 1) & 0xFFFFFFFF)):
                fp += 1
        self.clear_all()
        rate = fp / rounds if rounds else 0.0
        logger.debug(f"Empirical false positive rate m={self._m} k={self._k} n={n}: {rate:.5f}")
        return rate

    def __repr__(self) -> str:
        return f"BloomFilter(m={self._m}, k={self._k}, set_bits={self._bits.count()})"


__all__ = [
    "estimate_parameters",
    "base_hashes",
    "location",
    "locations",
    "BloomFilter",
]
