"""
bloomtree CLI - Main Entry Point

Parses command-line arguments and dispatches to subcommands.
Each non-empty line of an input file is one TextContent item.

Usage:
    python -m bloomtree_cli root items.txt [--bloom-fp P] [--hash ALG] [--json]
    python -m bloomtree_cli verify items.txt [--bloom-fp P] [--item TEXT]
    python -m bloomtree_cli prove items.txt "<item>" [--out proof.json]
    python -m bloomtree_cli check-proof proof.json "<item>" [--root 0x...]
    python -m bloomtree_cli config --init

Environment Variables:
    BLOOMTREE_HASH_ALGORITHM      Hash policy (default: sha256)
    BLOOMTREE_ENABLE_BLOOM        Enable Bloom acceleration (default: false)
    BLOOMTREE_FALSE_POSITIVE_RATE Bloom target false positive rate (default: 0.01)
    BLOOMTREE_LOG_LEVEL           Log level (default: INFO)
    BLOOMTREE_LOG_FILE            Optional log file
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from bloomtree.config import RuntimeConfig, get_default_config_template
from bloomtree_cli.commands import proof, tree


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )


def _add_tree_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--bloom-fp",
        type=float,
        default=None,
        help="Enable Bloom acceleration with this false positive rate (overrides config)",
    )
    parser.add_argument(
        "--no-bloom",
        action="store_true",
        default=False,
        help="Disable Bloom acceleration (overrides config)",
    )
    parser.add_argument(
        "--hash",
        type=str,
        default=None,
        help="Hash algorithm (sha256, sha512, sha3_256, blake2b, blake2s)",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="bloomtree",
        description="Build Merkle trees over text lines, verify them, and produce inclusion proofs.",
    )
    parser.add_argument(
        "--version", action="version", version="%(prog)s 0.1.0"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to a YAML configuration file",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- root command ---
    root_parser = subparsers.add_parser(
        "root",
        help="Print the Merkle root of a file's lines",
    )
    root_parser.add_argument("input", type=str, help="Text file, one item per line")
    _add_tree_options(root_parser)
    root_parser.add_argument("--json", action="store_true", default=False, help="JSON output")
    root_parser.set_defaults(func=tree.root_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Build a tree and verify it (optionally verify one item's inclusion)",
    )
    verify_parser.add_argument("input", type=str, help="Text file, one item per line")
    verify_parser.add_argument("--item", type=str, default=None, help="Also verify inclusion of this item")
    _add_tree_options(verify_parser)
    verify_parser.add_argument("--json", action="store_true", default=False, help="JSON output")
    verify_parser.set_defaults(func=tree.verify_cmd)

    # --- prove command ---
    prove_parser = subparsers.add_parser(
        "prove",
        help="Produce a multi-proof for one item",
    )
    prove_parser.add_argument("input", type=str, help="Text file, one item per line")
    prove_parser.add_argument("item", type=str, help="Item to prove")
    prove_parser.add_argument("--out", "-o", type=str, default=None, help="Write the proof JSON here")
    _add_tree_options(prove_parser)
    prove_parser.set_defaults(func=proof.prove_cmd)

    # --- check-proof command ---
    check_parser = subparsers.add_parser(
        "check-proof",
        help="Verify a saved multi-proof without the tree",
    )
    check_parser.add_argument("proof_path", type=str, help="Proof JSON produced by 'prove'")
    check_parser.add_argument("item", type=str, help="Item the proof is for")
    check_parser.add_argument("--root", type=str, default=None, help="Trusted root (0x hex); defaults to the proof's root")
    check_parser.add_argument("--hash", type=str, default=None, help="Hash algorithm the tree was built with")
    check_parser.add_argument("--json", action="store_true", default=False, help="JSON output")
    check_parser.set_defaults(func=proof.check_proof_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage configuration",
    )
    config_parser.add_argument("--init", action="store_true", default=False, help="Create a template configuration file")
    config_parser.add_argument("--show", action="store_true", default=False, help="Show current configuration")
    config_parser.add_argument("--path", type=str, default="bloomtree.yaml", help="Path for config file (default: bloomtree.yaml)")
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("You can also use environment variables (BLOOMTREE_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.runtime_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Usage: bloomtree config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def load_config(config_path: Path | None) -> RuntimeConfig:
    """Load YAML config if given, then overlay environment variables."""
    if config_path is not None:
        return RuntimeConfig.from_yaml(config_path).with_env_overrides()
    return RuntimeConfig.from_env()


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Returns:
        Exit code (0=success, 1=error, 2=verification failed / not found)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    log_level = args.log_level or config.logging.level
    setup_logging(level=log_level, log_file=config.logging.log_file)

    args.runtime_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if log_level.upper() == "DEBUG":
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
