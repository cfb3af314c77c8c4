"""
bloomtree CLI - Proof Commands

prove:       emit the multi-proof for one item as JSON
check-proof: verify a saved multi-proof against an item and a root

Usage:
    bloomtree prove items.txt "line" --out proof.json
    bloomtree check-proof proof.json "line" [--root 0x...]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from pathlib import Path

from bloomtree.crypto.hashing import from_hex, get_hash_policy, to_hex
from bloomtree.merkle import MerkleVerifier, TextContent
from bloomtree.schemas.proof import MultiProof
from bloomtree_cli.commands.tree import build_tree


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def prove_cmd(args: Namespace) -> int:
    """Handle prove command."""
    merkle_tree, config = build_tree(args)
    multi_proof = merkle_tree.get_multi_proof(TextContent(args.item, hash_policy=config.hash_policy))

    if multi_proof is None:
        print(f"Item not found: {args.item!r}", file=sys.stderr)
        return EXIT_VERIFICATION_FAILED

    payload = multi_proof.to_json()
    if args.out:
        Path(args.out).write_text(payload + "\n", encoding="utf-8")
        logger.info(f"Wrote proof with {len(multi_proof)} steps to {args.out}")
        print(f"Proof written to {args.out}")
    else:
        print(payload)
    return EXIT_SUCCESS


def check_proof_cmd(args: Namespace) -> int:
    """Handle check-proof command."""
    path = Path(args.proof_path)
    if not path.exists():
        raise FileNotFoundError(f"Proof file not found: {path}")
    multi_proof = MultiProof.from_json(path.read_text(encoding="utf-8"))

    algorithm = args.hash or args.runtime_config.tree.hash_algorithm
    policy = get_hash_policy(algorithm)
    root = from_hex(args.root) if args.root else multi_proof.root

    ok = MerkleVerifier.verify_content_in_root(
        TextContent(args.item, hash_policy=policy),
        multi_proof,
        root,
        policy,
    )

    if args.json:
        print(json.dumps({"ok": ok, "root": to_hex(root), "steps": len(multi_proof)}, indent=2))
    else:
        print("Proof: VALID" if ok else "Proof: INVALID")
    return EXIT_SUCCESS if ok else EXIT_VERIFICATION_FAILED
