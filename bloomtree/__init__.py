"""
bloomtree - Merkle trees with per-node Bloom filter acceleration.

    from bloomtree import MerkleTree, TextContent

    tree = MerkleTree([TextContent("a"), TextContent("b")], false_positive_rate=0.01)
    proof = tree.get_multi_proof(TextContent("a"))
"""

__version__ = "0.1.0"

from bloomtree.bloom import BloomFilter, estimate_parameters
from bloomtree.merkle import (
    BytesContent,
    CanonicalContent,
    Content,
    MerkleTree,
    TextContent,
    verify_multi_proof,
)
from bloomtree.schemas import MultiProof, ProofStep

__all__ = [
    "BloomFilter",
    "estimate_parameters",
    "Content",
    "BytesContent",
    "TextContent",
    "CanonicalContent",
    "MerkleTree",
    "MultiProof",
    "ProofStep",
    "verify_multi_proof",
]
