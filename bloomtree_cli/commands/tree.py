"""
bloomtree CLI - Tree Commands

root:   print the Merkle root of a file's lines
verify: rebuild-and-verify the tree, optionally one item's inclusion

Usage:
    bloomtree root items.txt [--bloom-fp 0.01] [--json]
    bloomtree verify items.txt [--item "line"] [--json]
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace
from pathlib import Path

from bloomtree.config import TreeConfig
from bloomtree.crypto.hashing import to_hex
from bloomtree.merkle import MerkleTree, TextContent


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def resolve_tree_config(args: Namespace) -> TreeConfig:
    """Apply --hash / --bloom-fp / --no-bloom on top of the loaded config."""
    base: TreeConfig = args.runtime_config.tree
    enable_bloom = base.enable_bloom
    rate = base.false_positive_rate
    if getattr(args, "bloom_fp", None) is not None:
        enable_bloom = True
        rate = args.bloom_fp
    if getattr(args, "no_bloom", False):
        enable_bloom = False
    return TreeConfig(
        hash_algorithm=getattr(args, "hash", None) or base.hash_algorithm,
        enable_bloom=enable_bloom,
        false_positive_rate=rate,
    )


def load_contents(path: str | Path, config: TreeConfig) -> list[TextContent]:
    """Read one TextContent per non-empty line."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")
    policy = config.hash_policy
    lines = path.read_text(encoding="utf-8").splitlines()
    return [TextContent(line, hash_policy=policy) for line in lines if line]


def build_tree(args: Namespace) -> tuple[MerkleTree, TreeConfig]:
    """Build the tree described by the command's arguments."""
    config = resolve_tree_config(args)
    contents = load_contents(args.input, config)
    logger.info(f"Building tree over {len(contents)} items from {args.input}")
    return MerkleTree.from_config(contents, config), config


def root_cmd(args: Namespace) -> int:
    """Handle root command."""
    merkle_tree, config = build_tree(args)
    root = to_hex(merkle_tree.merkle_root())

    if args.json:
        print(json.dumps({
            "root": root,
            "leaves": len(merkle_tree),
            "depth": merkle_tree.depth,
            "hash_algorithm": config.hash_algorithm,
            "bloom": list(merkle_tree.bloom_parameters) if merkle_tree.bloom_enabled else None,
        }, indent=2))
    else:
        print(root)
    return EXIT_SUCCESS


def verify_cmd(args: Namespace) -> int:
    """Handle verify command."""
    merkle_tree, config = build_tree(args)

    tree_ok = merkle_tree.verify_tree()
    item_ok = None
    if args.item is not None:
        item_ok = merkle_tree.verify_content(TextContent(args.item, hash_policy=config.hash_policy))

    ok = tree_ok and item_ok is not False
    if args.json:
        result = {"root": to_hex(merkle_tree.merkle_root()), "tree_ok": tree_ok}
        if item_ok is not None:
            result["item_ok"] = item_ok
        result["ok"] = ok
        print(json.dumps(result, indent=2))
    else:
        print(f"Tree: {'OK' if tree_ok else 'FAILED'}")
        if item_ok is not None:
            print(f"Item: {'INCLUDED' if item_ok else 'NOT INCLUDED'}")

    return EXIT_SUCCESS if ok else EXIT_VERIFICATION_FAILED
