"""
Test fixtures package for bloomtree tests.

This package provides factory functions for creating test objects:
- common.py: content and tree factories, misbehaving and counting content types

Usage:
    from fixtures import make_text_contents, make_tree

    def test_something():
        tree = make_tree(5, false_positive_rate=0.01)
"""

from .common import (
    make_text_contents,
    make_tree,
    make_letter_tree,
    FailingHashContent,
    FailingEqualsContent,
    CountingContent,
)

__all__ = [
    "make_text_contents",
    "make_tree",
    "make_letter_tree",
    "FailingHashContent",
    "FailingEqualsContent",
    "CountingContent",
]
