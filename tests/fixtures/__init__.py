"""
Test fixtures package for merkle_audit tests.

This package provides factory functions for creating test objects.

Usage:
    from fixtures import make_leaf_hashes, make_tree

    def test_something():
        tree = make_tree(5)
"""

from .common import (
    flip_byte,
    make_leaf_hashes,
    make_runtime_config,
    make_tree,
)

__all__ = [
    "make_leaf_hashes",
    "flip_byte",
    "make_tree",
    "make_runtime_config",
]
