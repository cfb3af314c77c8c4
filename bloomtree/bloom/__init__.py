"""
Bloom Filter

Probabilistic membership index attached to Merkle tree nodes.

Usage:
    from bloomtree.bloom import BloomFilter, estimate_parameters

    m, k = estimate_parameters(n=1000, p=0.01)
    bf = BloomFilter(m, k).add(b"item")
    assert bf.test(b"item")
"""
from .bloom_filter import (
    estimate_parameters,
    base_hashes,
    location,
    locations,
    BloomFilter,
)

__all__ = [
    "estimate_parameters",
    "base_hashes",
    "location",
    "locations",
    "BloomFilter",
]
