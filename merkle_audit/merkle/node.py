"""
Merkle - Tree Nodes

A Node is a single tree vertex. Children are owned by their parent
top-down; the parent link is a weak back-reference so the node graph
never holds a reference cycle.

Hash policy (must match across implementations for proofs to agree):
1. Leaf: the caller-supplied hash, stored unchanged.
2. Two children: H(left.hash + right.hash).
3. Only a left child ("carry" node): left.hash unchanged, no hashing.
   A trailing unpaired node is promoted to the next level as-is rather
   than being duplicated or hashed with itself.
"""
from __future__ import annotations

import weakref
from typing import Optional

from merkle_audit.crypto.hashing import HashFunction, hash_concat, sha256, to_hex
from merkle_audit.schemas.errors import InvalidHashException


class Node:
    """
    A vertex in a Merkle tree.

    Nodes compare by identity: two leaves carrying the same hash are
    still distinct positions in the tree.

    Attributes:
        hash: The node hash (opaque bytes)
        left: Left child, None for leaves
        right: Right child, None for leaves and carry nodes
    """

    def __init__(
        self,
        hash: bytes,
        left: Optional[Node] = None,
        right: Optional[Node] = None,
    ) -> None:
        self.hash = hash
        self.left = left
        self.right = right
        self._parent_ref: Optional[weakref.ref[Node]] = None

    @classmethod
    def new_leaf(cls, hash: bytes) -> Node:
        """
        Create a leaf from a caller-supplied hash.

        The hash content is not inspected beyond being non-empty bytes.

        Raises:
            InvalidHashException: If the hash is empty or not bytes
        """
        if not isinstance(hash, (bytes, bytearray)):
            raise InvalidHashException(
                f"Leaf hash must be bytes, got {type(hash).__name__}",
                details={"type": type(hash).__name__},
            )
        if len(hash) == 0:
            raise InvalidHashException("Leaf hash must not be empty")
        return cls(bytes(hash))

    @classmethod
    def new_parent(
        cls,
        left: Node,
        right: Optional[Node] = None,
        hash_function: HashFunction = sha256,
    ) -> Node:
        """
        Create the parent of one or two nodes and wire their parent links.

        With both children the hash is H(left.hash + right.hash). Without a
        right child the parent is a carry node whose hash is left.hash.
        """
        if right is not None:
            parent = cls(hash_concat(left.hash, right.hash, hash_function), left, right)
            right._attach(parent)
        else:
            parent = cls(left.hash, left, None)
        left._attach(parent)
        return parent

    @property
    def parent(self) -> Optional[Node]:
        """The parent node, or None for the root and for unbuilt leaves."""
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    def _attach(self, parent: Node) -> None:
        self._parent_ref = weakref.ref(parent)

    def detach(self) -> None:
        """Drop the parent link (used when this node becomes a root)."""
        self._parent_ref = None

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    @property
    def is_carry(self) -> bool:
        """True for a pass-through parent holding only a left child."""
        return self.left is not None and self.right is None

    def __repr__(self) -> str:
        kind = "leaf" if self.is_leaf else ("carry" if self.is_carry else "node")
        return f"Node({kind}, hash={to_hex(self.hash)[:18]})"


__all__ = ["Node"]
