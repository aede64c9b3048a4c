"""
Merkle - Tree Construction
Recursive folding of leaves into a single root, plus the tree-level
audit proof API.

Construction Rules (Hard Contracts):
1. Leaves are caller-supplied hashes; order is significant and
   duplicates are distinct positions
2. Each layer is paired left-to-right: (n[0], n[1]), (n[2], n[3]), ...
3. Parent hash: H(left + right)
4. Odd layer: the trailing node gets a carry parent whose hash is the
   node's own hash (no duplication, no self-hashing)
5. Single leaf: the leaf is the root
6. Empty input: EmptyInputException

Determinism Notes:
- Tree shape is a fixed function of leaf count; hashes depend on leaf order
- This module never sorts leaves
- Every leaf sits exactly compute_tree_height(len(leaves)) hops below the root
"""
from __future__ import annotations

import logging
from typing import Any, Iterable, Optional, Sequence, Union

from merkle_audit.config.runtime import RuntimeConfig, get_default_config
from merkle_audit.crypto.hashing import HashFunction, hash_canonical, to_hex
from merkle_audit.merkle.merkle_proofs import ProofHash, build_audit_trail, verify_audit
from merkle_audit.merkle.node import Node
from merkle_audit.schemas.errors import (
    EmptyInputException,
    ForeignNodeException,
    LeafNotFoundException,
    MerkleAuditException,
    NoParentException,
)


logger = logging.getLogger(__name__)


def compute_tree_height(num_leaves: int) -> int:
    """
    Number of parent hops from any leaf to the root.

    Equals ceil(log2(num_leaves)); 0 for a single leaf (and for an
    empty tree).
    """
    if num_leaves <= 1:
        return 0
    return (num_leaves - 1).bit_length()


class MerkleTree:
    """
    A Merkle tree over an ordered sequence of leaf hashes.

    Build once, then query. Changing the leaf set means appending and
    rebuilding; a rebuild replaces the whole node graph under root.
    A built tree is safe to read from several threads, but appends and
    rebuilds must be serialized by the caller.

    Attributes:
        root: Root node, None until built
        leaves: Leaf nodes in insertion order
        hash_function: Hash used to combine children and replay proofs
        strict_leaf_lookup: Raise LeafNotFoundException for unknown
            targets instead of returning an empty trail

    Example:
        >>> tree = MerkleTree.from_hashes([sha256(b"a"), sha256(b"b")])
        >>> tree.verify(tree.root_hash, sha256(b"a"))
        True
    """

    def __init__(
        self,
        hash_function: Optional[HashFunction] = None,
        strict_leaf_lookup: Optional[bool] = None,
        config: Optional[RuntimeConfig] = None,
    ) -> None:
        if hash_function is None or strict_leaf_lookup is None:
            config = config or get_default_config()
            if hash_function is None:
                hash_function = config.tree.hash_function()
            if strict_leaf_lookup is None:
                strict_leaf_lookup = config.tree.strict_leaf_lookup

        self.hash_function: HashFunction = hash_function
        self.strict_leaf_lookup: bool = strict_leaf_lookup
        self.root: Optional[Node] = None
        self.leaves: list[Node] = []

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_hashes(cls, hashes: Iterable[bytes], **kwargs: Any) -> MerkleTree:
        """Create leaves from raw hashes and build the tree."""
        tree = cls(**kwargs)
        for leaf_hash in hashes:
            tree.append_leaf(leaf_hash)
        tree.build_tree()
        return tree

    @classmethod
    def from_objects(cls, objects: Iterable[Any], **kwargs: Any) -> MerkleTree:
        """
        Hash objects canonically with the tree's hash function, then build.

        See merkle_audit.crypto.hashing.hash_canonical for the encoding.
        """
        tree = cls(**kwargs)
        for obj in objects:
            tree.append_leaf(hash_canonical(obj, tree.hash_function))
        tree.build_tree()
        return tree

    def append_leaf(self, leaf: Union[Node, bytes]) -> Node:
        """
        Append a leaf to be built into the tree by the next build_tree().

        Accepts a Node or a raw hash (wrapped with Node.new_leaf).
        """
        if not isinstance(leaf, Node):
            leaf = Node.new_leaf(leaf)
        self.leaves.append(leaf)
        return leaf

    def build_tree(self, leaves: Optional[Sequence[Node]] = None) -> Node:
        """
        Fold leaves into parent layers until one root remains.

        Args:
            leaves: Nodes to build from; defaults to the appended leaves

        Returns:
            The root node (also stored on self.root)

        Raises:
            EmptyInputException: If there are no leaves
            TypeError: If an element is not a Node
            ForeignNodeException: If a node is wired into another tree

        A failed build leaves the tree and its parent links as they were.
        """
        nodes = list(self.leaves if leaves is None else leaves)
        if not nodes:
            raise EmptyInputException()
        for node in nodes:
            if not isinstance(node, Node):
                raise TypeError(f"Tree leaves must be Node instances, got {type(node).__name__}")
            if not self._owns(node):
                raise ForeignNodeException(node_hash=to_hex(node.hash))

        saved_links = [node._parent_ref for node in nodes]
        try:
            root = self._fold(nodes)
        except Exception:
            for node, parent_ref in zip(nodes, saved_links):
                node._parent_ref = parent_ref
            logger.warning(f"Merkle tree build over {len(nodes)} leaves failed; parent links restored")
            raise
        root.detach()

        self.root = root
        self.leaves = nodes
        logger.debug(
            f"Built Merkle tree: {len(nodes)} leaves, height {self.height}, "
            f"root {to_hex(root.hash)}"
        )
        return root

    def _owns(self, node: Node) -> bool:
        """True if node is unattached or hangs under this tree's root."""
        top = node
        while top.parent is not None:
            top = top.parent
        return top is node or top is self.root

    def _fold(self, nodes: list[Node]) -> Node:
        if len(nodes) == 1:
            return nodes[0]

        parents: list[Node] = []
        for i in range(0, len(nodes), 2):
            left = nodes[i]
            right = nodes[i + 1] if i + 1 < len(nodes) else None
            parents.append(Node.new_parent(left, right, self.hash_function))

        return self._fold(parents)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def root_hash(self) -> bytes:
        """
        Hash of the root node.

        Raises:
            EmptyInputException: If the tree has not been built
        """
        if self.root is None:
            raise EmptyInputException("Merkle tree has not been built")
        return self.root.hash

    @property
    def height(self) -> int:
        return compute_tree_height(len(self.leaves))

    def __len__(self) -> int:
        return len(self.leaves)

    def find_leaf(self, target_hash: bytes) -> Optional[Node]:
        """Return the first leaf whose hash equals target_hash, else None."""
        for leaf in self.leaves:
            if leaf.hash == target_hash:
                return leaf
        return None

    # ------------------------------------------------------------------
    # Audit proofs
    # ------------------------------------------------------------------

    def audit_proof(self, target_hash: bytes) -> list[ProofHash]:
        """
        Build the audit trail needed to recompute the root from target_hash.

        Returns:
            Trail entries in leaf-to-root order. When strict lookup is off
            and no leaf matches, an empty trail.

        Raises:
            LeafNotFoundException: If strict lookup is on and no leaf matches
            NoParentException: If the matching leaf has no parent (it is
                the root of a single-leaf tree, or the tree is unbuilt)
            ParentMismatchException: If the node graph is inconsistent
        """
        leaf = self.find_leaf(target_hash)

        if leaf is None:
            if self.strict_leaf_lookup:
                raise LeafNotFoundException(target_hash=to_hex(target_hash))
            logger.debug(f"No leaf matches {to_hex(target_hash)}; returning empty trail")
            return []

        if leaf.parent is None:
            raise NoParentException(leaf_hash=to_hex(leaf.hash))

        return build_audit_trail([], leaf.parent, leaf)

    def build_audit_trail(
        self,
        trail: list[ProofHash],
        parent: Optional[Node],
        child: Node,
    ) -> list[ProofHash]:
        """Walk parent links upward from child; see merkle_proofs.build_audit_trail."""
        return build_audit_trail(trail, parent, child)

    def verify_audit(
        self,
        root_hash: bytes,
        target_hash: bytes,
        trail: Sequence[ProofHash],
    ) -> bool:
        """Replay trail with this tree's hash function and compare to root_hash."""
        return verify_audit(root_hash, target_hash, trail, self.hash_function)

    def verify(self, root_hash: bytes, target_hash: bytes) -> bool:
        """
        Check that target_hash is a leaf of this tree under root_hash.

        Any failure to generate the proof (unknown leaf, single-leaf tree,
        structural error) yields False. Call audit_proof() and
        verify_audit() separately to tell those cases apart.
        """
        try:
            trail = self.audit_proof(target_hash)
        except MerkleAuditException as e:
            logger.debug(f"Audit proof unavailable for {to_hex(target_hash)}: {e.code}")
            return False

        return self.verify_audit(root_hash, target_hash, trail)


__all__ = [
    "MerkleTree",
    "compute_tree_height",
]
