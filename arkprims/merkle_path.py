"""Merkle path checking driven by explicit branching bits.

A ``PathBits`` carries the branching decisions of a Merkle path as
booleans, together with the sibling digests. The leaf position can be
replaced by a caller-supplied little-endian bit vector before checking,
so a verifier can bind a path to the leaf index it expects.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

from arkprims.merkle import MerkleConfig, Path

__all__ = ["PathBits"]


def _order(is_right: bool, computed: Any, sibling: Any) -> tuple[Any, Any]:
    """Return (left, right); ``computed`` is the right child when ``is_right``."""
    if is_right:
        return sibling, computed
    return computed, sibling


@dataclass
class PathBits:
    """A Merkle authentication path with explicit branching bits.

    ``path[i]`` is ``True`` iff the ``i``-th on-path inner node, counted from
    the top, is a right child. ``auth_path[i]`` is that node's sibling.
    ``leaf_sibling`` is the sibling of the leaf and ``leaf_is_right_child``
    tells whether the leaf itself is a right child.
    """

    path: list[bool]
    auth_path: tuple[Any, ...]
    leaf_sibling: Any
    leaf_is_right_child: bool = field(default=False)

    def __post_init__(self) -> None:
        self.path = [bool(bit) for bit in self.path]
        self.auth_path = tuple(self.auth_path)
        self.leaf_is_right_child = bool(self.leaf_is_right_child)

    @classmethod
    def from_path(cls, path: Path) -> PathBits:
        """Build branching bits from a ``Path`` produced by a Merkle tree."""
        positions = path.position_list()
        return cls(
            path=positions[:-1],
            auth_path=path.auth_path,
            leaf_sibling=path.leaf_sibling_hash,
            leaf_is_right_child=path.leaf_index & 1 == 1,
        )

    def set_leaf_position(self, leaf_index: Iterable[bool]) -> None:
        """Set the leaf position from little-endian bits.

        The lowest bit says whether the leaf is a right child; the remaining
        bits are padded with ``False`` or truncated to the path length.
        """
        bits = [bool(bit) for bit in leaf_index]
        if not bits:
            raise ValueError("leaf index must contain at least one bit")
        depth = len(self.auth_path)
        upper = bits[1 : depth + 1]
        upper.extend([False] * (depth - len(upper)))
        self.leaf_is_right_child = bits[0]
        self.path = upper[::-1]

    def get_leaf_position(self) -> list[bool]:
        """Return the leaf position as little-endian bits."""
        return [self.leaf_is_right_child, *reversed(self.path)]

    def calculate_root(self, config: MerkleConfig, leaf: Any) -> Any:
        """Compute the root reached by hashing ``leaf`` along this path."""
        claimed = config.leaf_hash(leaf)
        left, right = _order(self.leaf_is_right_child, claimed, self.leaf_sibling)
        current = config.two_to_one_hash(
            config.leaf_inner_converter(left), config.leaf_inner_converter(right)
        )
        for bit, sibling in zip(reversed(self.path), reversed(self.auth_path)):
            left, right = _order(bit, current, sibling)
            current = config.compress(left, right)
        return current

    def verify_membership(self, config: MerkleConfig, root: Any, leaf: Any) -> bool:
        """Return whether ``leaf`` on this path leads to ``root``."""
        return self.calculate_root(config, leaf) == root

    def update_leaf(
        self, config: MerkleConfig, old_root: Any, old_leaf: Any, new_leaf: Any
    ) -> Any:
        """Check ``old_leaf`` against ``old_root``, then return the root with ``new_leaf``.

        Raises ``ValueError`` if ``old_leaf`` is not a member under ``old_root``.
        """
        if not self.verify_membership(config, old_root, old_leaf):
            raise ValueError("old leaf is not a member of the tree with the given root")
        return self.calculate_root(config, new_leaf)

    def update_and_check(
        self,
        config: MerkleConfig,
        old_root: Any,
        new_root: Any,
        old_leaf: Any,
        new_leaf: Any,
    ) -> bool:
        """Return whether replacing ``old_leaf`` by ``new_leaf`` yields ``new_root``."""
        return self.update_leaf(config, old_root, old_leaf, new_leaf) == new_root