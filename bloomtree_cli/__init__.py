"""
bloomtree CLI

Command-line interface over bloomtree Merkle trees.

Usage:
    python -m bloomtree_cli root items.txt
    python -m bloomtree_cli prove items.txt "item" --out proof.json
    python -m bloomtree_cli check-proof proof.json "item"
"""

__version__ = "0.1.0"
