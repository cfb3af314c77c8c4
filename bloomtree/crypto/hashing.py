"""
Hashing Utilities
Hash policies and digest helpers for Merkle commitments.

A hash policy is a stateless factory returning a fresh streaming
accumulator with ``update(bytes)`` and ``digest() -> bytes``.
``hashlib.sha256`` is the default policy; any hashlib constructor
(or a callable with the same shape) can be injected.

Security/Determinism Notes:
- Always hash raw bytes exactly as given
- A new accumulator is created per digest; policies hold no state
"""
from __future__ import annotations

import hashlib
from typing import Callable, Protocol

from bloomtree.schemas.errors import HashPolicyException, UnknownHashAlgorithmException


class HashAccumulator(Protocol):
    """Streaming hash state, as returned by hashlib constructors."""

    def update(self, data: bytes, /) -> None: ...

    def digest(self) -> bytes: ...


HashPolicy = Callable[[], HashAccumulator]

DEFAULT_HASH_ALGORITHM = "sha256"

# Named policies usable from configuration
HASH_POLICIES: dict[str, HashPolicy] = {
    "sha256": hashlib.sha256,
    "sha512": hashlib.sha512,
    "sha3_256": hashlib.sha3_256,
    "blake2b": hashlib.blake2b,
    "blake2s": hashlib.blake2s,
}


def get_hash_policy(name: str) -> HashPolicy:
    """
    Look up a hash policy by name.

    Args:
        name: Algorithm name (case-insensitive, "-" accepted for "_")

    Returns:
        Factory producing fresh accumulators

    Raises:
        UnknownHashAlgorithmException: If the name is not registered
    """
    key = name.lower().replace("-", "_")
    try:
        return HASH_POLICIES[key]
    except KeyError:
        raise UnknownHashAlgorithmException(name) from None


def digest_with_policy(policy: HashPolicy, *chunks: bytes) -> bytes:
    """
    Feed ``chunks`` in order through a fresh accumulator and return the digest.

    Raises:
        HashPolicyException: If the policy fails to create, write or sum
    """
    try:
        accumulator = policy()
        for chunk in chunks:
            accumulator.update(chunk)
        return accumulator.digest()
    except Exception as e:
        raise HashPolicyException(
            message=f"Hash policy failed: {e}",
            details={"policy": getattr(policy, "__name__", repr(policy))},
        ) from e


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def hash_concat(left: bytes, right: bytes, policy: HashPolicy = hashlib.sha256) -> bytes:
    """
    Hash the concatenation of two digests: policy(left || right).

    This is the internal-node rule of the Merkle tree.
    """
    return digest_with_policy(policy, left, right)


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


__all__ = [
    "HashAccumulator",
    "HashPolicy",
    "DEFAULT_HASH_ALGORITHM",
    "HASH_POLICIES",
    "get_hash_policy",
    "digest_with_policy",
    "sha256",
    "hash_concat",
    "to_hex",
    "from_hex",
]
