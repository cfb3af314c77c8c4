"""
Core cryptographic utilities.

Hash policies and digest helpers used by the Merkle tree.
"""
from .hashing import (
    HashAccumulator,
    HashPolicy,
    DEFAULT_HASH_ALGORITHM,
    HASH_POLICIES,
    get_hash_policy,
    digest_with_policy,
    sha256,
    hash_concat,
    to_hex,
    from_hex,
)

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
