"""
Merkle Verification & Proof Engine

Operates on a built MerkleTree:
- verify_tree: recompute every digest from leaf content, compare the root
- find_leaf_linear / find_leaf_bloom: locate the leaf holding a content item
- verify_content: locate, then re-verify the leaf-to-root path
- get_multi_proof: locate, then record (sibling digest, direction) per level
- verify_multi_proof: independent root recomputation from a proof

Digest mismatches are reported as False, never raised. Capability failures
(Content hashing/equality, hash policy) propagate as exceptions.

Bloom-guided lookup prunes any internal node whose filter rejects the query
digest. When a filter accepts, the left subtree is searched first and the
right one only if the left yields no exact match, so the leaf returned is
the same one the linear scan finds: the first match in leaf order.
"""
from __future__ import annotations

import hashlib
import logging
from typing import TYPE_CHECKING, Any, Optional, Sequence

from bloomtree.crypto.hashing import HashPolicy, hash_concat
from bloomtree.merkle.content import CanonicalContent, Content, content_digest, content_equals
from bloomtree.merkle.node import Node
from bloomtree.schemas.errors import BloomDisabledException
from bloomtree.schemas.proof import SIBLING_LEFT, SIBLING_RIGHT, MultiProof, ProofStep

if TYPE_CHECKING:
    from bloomtree.merkle.merkle_tree import MerkleTree


logger = logging.getLogger(__name__)


# =============================================================================
# Recomputation
# =============================================================================

def recompute_subtree(node: Node, policy: HashPolicy) -> bytes:
    """
    Recompute a node's digest from the content of every leaf beneath it.

    Cached node_hash values are ignored entirely. Recursion depth equals
    the tree depth (log2 of the leaf count).
    """
    if node.is_leaf:
        return content_digest(node.content)
    left = recompute_subtree(node.left, policy)
    right = recompute_subtree(node.right, policy)
    return hash_concat(left, right, policy)


def recompute_node(node: Node, policy: HashPolicy) -> bytes:
    """
    Recompute a node's digest one level down.

    Leaves hash their content; internal nodes hash their children's
    cached digests.
    """
    if node.is_leaf:
        return content_digest(node.content)
    return hash_concat(node.left.node_hash, node.right.node_hash, policy)


def verify_tree(tree: "MerkleTree") -> bool:
    """
    Verify the whole tree against its cached root digest.

    Returns:
        True if the root recomputed from content matches, False otherwise
    """
    calculated = recompute_subtree(tree.root, tree.hash_policy)
    if calculated != tree.merkle_root():
        logger.warning(
            f"Tree verification failed: expected root {tree.merkle_root().hex()}, "
            f"computed {calculated.hex()}"
        )
        return False
    return True


# =============================================================================
# Lookup
# =============================================================================

def find_leaf_linear(tree: "MerkleTree", content: Content) -> Optional[Node]:
    """Scan leaves in order; return the first whose content equals ``content``."""
    for leaf in tree.leaves:
        if content_equals(leaf.content, content):
            return leaf
    return None


def _bloom_search(node: Node, content: Content, digest: bytes) -> Optional[Node]:
    if node.is_leaf:
        # Only an exact match distinguishes a hit from a false positive
        return node if content_equals(node.content, content) else None
    if not node.bloom.test(digest):
        return None
    found = _bloom_search(node.left, content, digest)
    if found is not None:
        return found
    return _bloom_search(node.right, content, digest)


def find_leaf_bloom(tree: "MerkleTree", content: Content) -> Optional[Node]:
    """
    Locate ``content`` by descending only into subtrees whose filter may hold it.

    Raises:
        BloomDisabledException: If the tree was built without Bloom filters
    """
    if not tree.bloom_enabled:
        raise BloomDisabledException()
    digest = content_digest(content)
    return _bloom_search(tree.root, content, digest)


def find_leaf(tree: "MerkleTree", content: Content) -> Optional[Node]:
    """Locate ``content`` with the strategy the tree was built for."""
    if tree.bloom_enabled:
        return find_leaf_bloom(tree, content)
    return find_leaf_linear(tree, content)


# =============================================================================
# Path verification & proofs
# =============================================================================

def verify_path(leaf: Node) -> bool:
    """
    Walk from ``leaf`` to the root, recomputing each ancestor from its
    children's recomputed digests and comparing with its cached digest.

    The hash policy is read from the tree that owns ``leaf``.
    """
    policy = leaf.tree.hash_policy
    ancestor = leaf.parent
    while ancestor is not None:
        left = recompute_node(ancestor.left, policy)
        right = recompute_node(ancestor.right, policy)
        if hash_concat(left, right, policy) != ancestor.node_hash:
            logger.warning(f"Path verification failed at node {ancestor.node_hash.hex()}")
            return False
        ancestor = ancestor.parent
    return True


def verify_content(tree: "MerkleTree", content: Content) -> bool:
    """
    True if ``content`` is in the tree and every ancestor of its leaf
    is consistent with its children. Absent content returns False.
    """
    leaf = find_leaf(tree, content)
    if leaf is None:
        logger.debug("Content not found in tree")
        return False
    return verify_path(leaf)


def extract_multi_proof(tree: "MerkleTree", leaf: Node) -> MultiProof:
    """Record the sibling digest and direction at every level above ``leaf``."""
    steps: list[ProofStep] = []
    current = leaf
    ancestor = current.parent
    while ancestor is not None:
        if ancestor.left is current:
            steps.append(ProofStep(sibling=ancestor.right.node_hash, direction=SIBLING_RIGHT))
        else:
            steps.append(ProofStep(sibling=ancestor.left.node_hash, direction=SIBLING_LEFT))
        current = ancestor
        ancestor = ancestor.parent
    return MultiProof(leaf_hash=leaf.node_hash, steps=steps, root=tree.merkle_root())


def get_multi_proof(tree: "MerkleTree", content: Content) -> Optional[MultiProof]:
    """
    Build the multi-proof for ``content``.

    Returns:
        MultiProof, or None if the content is not in the tree
    """
    leaf = find_leaf(tree, content)
    if leaf is None:
        return None
    return extract_multi_proof(tree, leaf)


def compute_root(
    leaf_hash: bytes,
    steps: Sequence[ProofStep],
    policy: HashPolicy = hashlib.sha256,
) -> bytes:
    """Fold a leaf digest with proof steps, bottom-up, into a root digest."""
    current = leaf_hash
    for step in steps:
        if step.direction == SIBLING_RIGHT:
            current = hash_concat(current, step.sibling, policy)
        else:
            current = hash_concat(step.sibling, current, policy)
    return current


def verify_multi_proof(
    proof: MultiProof,
    policy: HashPolicy = hashlib.sha256,
    root: Optional[bytes] = None,
) -> bool:
    """
    Verify a proof without access to the tree.

    Args:
        proof: Proof to check
        policy: Hash policy the tree was built with
        root: Trusted root; defaults to the root recorded in the proof

    Returns:
        True if the recomputed root matches
    """
    expected = proof.root if root is None else root
    return compute_root(proof.leaf_hash, proof.steps, policy) == expected


# =============================================================================
# Convenience wrappers
# =============================================================================

class MerkleProver:
    """
    Convenience class for generating multi-proofs.

    Example:
        >>> proof = MerkleProver.prove(tree, TextContent("c"))
        >>> MerkleVerifier.verify(proof)
        True
    """

    @staticmethod
    def prove(tree: "MerkleTree", content: Content) -> Optional[MultiProof]:
        """Multi-proof for ``content`` in ``tree``, or None if absent."""
        return get_multi_proof(tree, content)

    @staticmethod
    def prove_object(
        tree: "MerkleTree",
        obj: Any,
        hash_policy: HashPolicy = hashlib.sha256,
    ) -> Optional[MultiProof]:
        """
        Multi-proof for a structured object stored as CanonicalContent.

        Args:
            tree: Tree holding CanonicalContent leaves
            obj: Object to prove
            hash_policy: Policy the CanonicalContent leaves were built with
                (CanonicalContent defaults to SHA-256)
        """
        return get_multi_proof(tree, CanonicalContent(obj, hash_policy=hash_policy))


class MerkleVerifier:
    """Convenience class for verifying multi-proofs."""

    @staticmethod
    def verify(
        proof: MultiProof,
        policy: HashPolicy = hashlib.sha256,
        root: Optional[bytes] = None,
    ) -> bool:
        return verify_multi_proof(proof, policy, root)

    @staticmethod
    def verify_content_in_root(
        content: Content,
        proof: MultiProof,
        root: bytes,
        policy: HashPolicy = hashlib.sha256,
    ) -> bool:
        """
        Verify that ``content`` is committed under ``root``.

        The leaf digest is recomputed from the content, so a proof for a
        different item fails even if the proof itself is consistent.
        """
        leaf_hash = content_digest(content)
        if leaf_hash != proof.leaf_hash:
            return False
        return compute_root(leaf_hash, proof.steps, policy) == root


__all__ = [
    "recompute_subtree",
    "recompute_node",
    "verify_tree",
    "find_leaf_linear",
    "find_leaf_bloom",
    "find_leaf",
    "verify_path",
    "verify_content",
    "extract_multi_proof",
    "get_multi_proof",
    "compute_root",
    "verify_multi_proof",
    "MerkleProver",
    "MerkleVerifier",
]
