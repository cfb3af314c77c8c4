"""
Merkle Tree Implementation
Binary hash tree over Content items, optionally indexed by per-node Bloom filters.

This module provides:
- Deterministic tree construction from an ordered content sequence
- Root digest access and whole-tree rebuild
- Tree verification, content verification and multi-proof extraction
  (delegated to merkle_proofs)

Commitment Rules (Hard Contracts):
1. Leaf hashing: leaf = content.hash()
2. Parent hashing: parent = policy(left || right)
3. Odd leaf count: the last leaf is duplicated once (is_dup=True)
4. Odd internal level: the last node is paired with itself
5. Empty contents: EmptyContentsException, never an empty tree

Bloom Rules (when enabled):
- (m, k) = estimate_parameters(len(contents), false_positive_rate)
- Leaf filter holds exactly the leaf's own digest
- Internal filter = left filter | right filter

Determinism Notes:
- Leaf order is the caller's order; siblings are always (earlier, later)
- This module never sorts contents
"""
from __future__ import annotations

import hashlib
import logging
from typing import TYPE_CHECKING, Optional, Sequence

from bloomtree.bloom import BloomFilter, estimate_parameters
from bloomtree.crypto.hashing import HashPolicy, hash_concat
from bloomtree.merkle import merkle_proofs
from bloomtree.merkle.content import Content, content_digest
from bloomtree.merkle.node import Node
from bloomtree.schemas.errors import EmptyContentsException
from bloomtree.schemas.proof import MultiProof

if TYPE_CHECKING:
    from bloomtree.config.runtime import TreeConfig


logger = logging.getLogger(__name__)


class MerkleTree:
    """
    Merkle tree over an ordered sequence of Content items.

    Example:
        >>> tree = MerkleTree([TextContent("a"), TextContent("b")])
        >>> tree.verify_tree()
        True
        >>> tree_bf = MerkleTree(contents, false_positive_rate=0.01)
        >>> tree_bf.verify_content(TextContent("a"))
        True
    """

    def __init__(
        self,
        contents: Sequence[Content],
        hash_policy: HashPolicy = hashlib.sha256,
        false_positive_rate: Optional[float] = None,
    ) -> None:
        """
        Build the tree.

        Args:
            contents: Ordered, non-empty content sequence
            hash_policy: Factory of fresh hash accumulators (default SHA-256)
            false_positive_rate: Enables Bloom acceleration at this target rate

        Raises:
            EmptyContentsException: If contents is empty
            ValueError: If false_positive_rate is outside (0, 1)
            ContentHashingException / HashPolicyException: On hashing failures
        """
        contents = list(contents)
        if not contents:
            raise EmptyContentsException()

        self._hash_policy = hash_policy
        self._false_positive_rate = false_positive_rate
        self._bloom_enabled = false_positive_rate is not None
        self._bloom_m = 0
        self._bloom_k = 0
        if self._bloom_enabled:
            self._bloom_m, self._bloom_k = estimate_parameters(len(contents), false_positive_rate)

        root, leaves = self._build_tree_with_contents(contents)
        self._root = root
        self._leaves = leaves
        self._root_hash = root.node_hash

    @classmethod
    def from_config(cls, contents: Sequence[Content], config: "TreeConfig") -> "MerkleTree":
        """Build a tree using a TreeConfig's hash policy and Bloom settings."""
        return cls(
            contents,
            hash_policy=config.hash_policy,
            false_positive_rate=config.false_positive_rate if config.enable_bloom else None,
        )

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def _new_bloom(self, digest: bytes) -> BloomFilter:
        return BloomFilter(self._bloom_m, self._bloom_k).add(digest)

    def _build_leaves(self, contents: list[Content]) -> list[Node]:
        leaves: list[Node] = []
        for index, content in enumerate(contents):
            leaf = Node(node_hash=content_digest(content, leaf_index=index), is_leaf=True, content=content)
            leaf.tree = self
            if self._bloom_enabled:
                leaf.bloom = self._new_bloom(leaf.node_hash)
            leaves.append(leaf)

        # Duplicate the last leaf if there is an odd number of them
        if len(leaves) % 2 == 1:
            last = leaves[-1]
            dup = Node(node_hash=last.node_hash, is_leaf=True, is_dup=True, content=last.content)
            dup.tree = self
            if self._bloom_enabled:
                dup.bloom = self._new_bloom(dup.node_hash)
            leaves.append(dup)

        return leaves

    def _build_internal_nodes(self, level: list[Node]) -> Node:
        while True:
            next_level: list[Node] = []
            for i in range(0, len(level), 2):
                left = level[i]
                # Odd level: pair the last node with itself
                right = level[i + 1] if i + 1 < len(level) else left

                parent = Node(node_hash=hash_concat(left.node_hash, right.node_hash, self._hash_policy))
                parent.left = left
                parent.right = right
                parent.tree = self
                if self._bloom_enabled:
                    parent.bloom = left.bloom.copy().merge(right.bloom)

                left.parent = parent
                right.parent = parent
                next_level.append(parent)

            if len(next_level) == 1:
                return next_level[0]
            level = next_level

    def _build_tree_with_contents(self, contents: list[Content]) -> tuple[Node, list[Node]]:
        if not contents:
            raise EmptyContentsException()
        leaves = self._build_leaves(contents)
        root = self._build_internal_nodes(leaves)
        bloom_desc = f"m={self._bloom_m} k={self._bloom_k}" if self._bloom_enabled else "off"
        logger.debug(
            f"Built Merkle tree: {len(contents)} contents, {len(leaves)} leaves, bloom {bloom_desc}"
        )
        return root, leaves

    def rebuild(self) -> None:
        """
        Rebuild the whole tree from the current leaves' contents.

        The duplicate leaf's content is included, as stored. The tree is
        replaced only if the rebuild succeeds.
        """
        contents = [leaf.content for leaf in self._leaves]
        root, leaves = self._build_tree_with_contents(contents)
        self._root = root
        self._leaves = leaves
        self._root_hash = root.node_hash

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def root(self) -> Node:
        return self._root

    @property
    def root_hash(self) -> bytes:
        return self._root_hash

    def merkle_root(self) -> bytes:
        """Return the cached root digest."""
        return self._root_hash

    @property
    def leaves(self) -> list[Node]:
        """Leaf nodes in order, including the duplicate if any."""
        return list(self._leaves)

    @property
    def hash_policy(self) -> HashPolicy:
        return self._hash_policy

    @property
    def bloom_enabled(self) -> bool:
        return self._bloom_enabled

    @property
    def bloom_parameters(self) -> Optional[tuple[int, int]]:
        """(m, k) shared by every node filter, or None when disabled."""
        if not self._bloom_enabled:
            return None
        return self._bloom_m, self._bloom_k

    @property
    def depth(self) -> int:
        """Number of levels from leaves to root, inclusive."""
        depth = 1
        node = self._leaves[0]
        while node.parent is not None:
            node = node.parent
            depth += 1
        return depth

    def __len__(self) -> int:
        return len(self._leaves)

    # ------------------------------------------------------------------
    # Verification & proofs
    # ------------------------------------------------------------------

    def verify_tree(self) -> bool:
        """Recompute every digest from content and compare with the cached root."""
        return merkle_proofs.verify_tree(self)

    def find_leaf(self, content: Content) -> Optional[Node]:
        """Locate the leaf holding ``content`` (Bloom-guided when enabled)."""
        return merkle_proofs.find_leaf(self, content)

    def verify_content(self, content: Content) -> bool:
        """True if ``content`` is in the tree and its path to the root is intact."""
        return merkle_proofs.verify_content(self, content)

    def get_merkle_multi_proof(self, content: Content) -> Optional[MultiProof]:
        """Sibling digests and directions from the content's leaf to the root."""
        return merkle_proofs.get_multi_proof(self, content)

    get_multi_proof = get_merkle_multi_proof

    def __str__(self) -> str:
        return "".join(f"{leaf}\n" for leaf in self._leaves)

    def __repr__(self) -> str:
        bloom = f", bloom=(m={self._bloom_m}, k={self._bloom_k})" if self._bloom_enabled else ""
        return f"MerkleTree(leaves={len(self._leaves)}, root={self._root_hash.hex()[:16]}...{bloom})"


__all__ = ["MerkleTree"]
