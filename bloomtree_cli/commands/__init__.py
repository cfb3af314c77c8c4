"""
CLI command modules.
"""

from bloomtree_cli.commands import proof, tree

__all__ = ["proof", "tree"]
