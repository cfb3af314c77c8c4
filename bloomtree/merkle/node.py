"""
Merkle Tree Node

A node is either a leaf (one content item, no children) or an internal
node (exactly two children, no content). Back references to the parent
and to the owning tree are weak: the tree owns the graph top-down.
"""
from __future__ import annotations

import weakref
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from bloomtree.bloom import BloomFilter
from bloomtree.merkle.content import Content

if TYPE_CHECKING:
    from bloomtree.merkle.merkle_tree import MerkleTree


@dataclass(eq=False)
class Node:
    """
    One node of a MerkleTree.

    Attributes:
        node_hash: Content digest (leaf) or policy(left || right) (internal)
        is_leaf: True for leaves
        is_dup: True only for the synthetic copy of the last leaf
        content: The leaf's content item (None for internal nodes)
        left, right: Children of an internal node
        bloom: Filter over every leaf digest below this node, when enabled
    """

    node_hash: bytes
    is_leaf: bool = False
    is_dup: bool = False
    content: Optional[Content] = None
    left: Optional["Node"] = None
    right: Optional["Node"] = None
    bloom: Optional[BloomFilter] = None
    _parent_ref: Optional[weakref.ReferenceType] = field(default=None, init=False, repr=False)
    _tree_ref: Optional[weakref.ReferenceType] = field(default=None, init=False, repr=False)

    @property
    def parent(self) -> Optional["Node"]:
        """The parent node, or None for the root."""
        return self._parent_ref() if self._parent_ref is not None else None

    @parent.setter
    def parent(self, node: Optional["Node"]) -> None:
        self._parent_ref = weakref.ref(node) if node is not None else None

    @property
    def tree(self) -> "MerkleTree":
        """The owning tree."""
        tree = self._tree_ref() if self._tree_ref is not None else None
        if tree is None:
            raise ReferenceError("node is detached from its tree")
        return tree

    @tree.setter
    def tree(self, tree: "MerkleTree") -> None:
        self._tree_ref = weakref.ref(tree)

    @property
    def is_root(self) -> bool:
        return self._parent_ref is None

    def __str__(self) -> str:
        return f"{self.is_leaf} {self.is_dup} {self.node_hash.hex()} {self.content}"

    def __repr__(self) -> str:
        kind = "leaf" if self.is_leaf else "internal"
        dup = ", dup" if self.is_dup else ""
        return f"Node({kind}{dup}, hash={self.node_hash.hex()[:16]}...)"


__all__ = ["Node"]
