"""
Merkle Tree with Bloom Filter Acceleration

Deterministic Merkle tree construction over Content items, whole-tree and
per-content verification, and multi-proof generation/verification.

Commitment Rules:
1. Leaf hashing: content.hash()
2. Parent hashing: policy(left + right)
3. Padding: duplicate the last leaf once if the leaf count is odd;
   an odd internal level pairs its last node with itself
4. Empty contents: EmptyContentsException

Usage:
    from bloomtree.merkle import MerkleTree, TextContent, verify_multi_proof

    contents = [TextContent(s) for s in ("a", "b", "c")]
    tree = MerkleTree(contents, false_positive_rate=0.01)

    assert tree.verify_tree()
    assert tree.verify_content(TextContent("b"))

    proof = tree.get_multi_proof(TextContent("b"))
    assert verify_multi_proof(proof, root=tree.merkle_root())
"""
from .content import (
    Content,
    BytesContent,
    TextContent,
    CanonicalContent,
)
from .node import Node
from .merkle_tree import MerkleTree
from .merkle_proofs import (
    verify_tree,
    find_leaf_linear,
    find_leaf_bloom,
    find_leaf,
    verify_content,
    get_multi_proof,
    compute_root,
    verify_multi_proof,
    MerkleProver,
    MerkleVerifier,
)


__all__ = [
    # Content capability
    "Content",
    "BytesContent",
    "TextContent",
    "CanonicalContent",
    # Core types
    "Node",
    "MerkleTree",
    # Engine
    "verify_tree",
    "find_leaf_linear",
    "find_leaf_bloom",
    "find_leaf",
    "verify_content",
    "get_multi_proof",
    "compute_root",
    "verify_multi_proof",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]
