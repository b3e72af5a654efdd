"""Fixed-height Merkle trees with authentication paths and in-place leaf updates."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Sequence

__all__ = ["MerkleConfig", "identity_converter", "Path", "MerkleTree"]


def identity_converter(item: Any) -> Any:
    """Hand a leaf digest, unchanged in value, to the two-to-one hash.

    A shallow copy is returned so that a hash function which mutates its
    input cannot alter the digest stored in the tree.
    """
    return copy.copy(item)


@dataclass(frozen=True)
class MerkleConfig:
    """The hash functions that define a Merkle tree.

    * ``leaf_hash`` maps a leaf to a leaf digest.
    * ``two_to_one_hash`` combines two converted leaf digests into an inner digest.
    * ``compress`` combines two inner digests; defaults to ``two_to_one_hash``.
    * ``leaf_inner_converter`` turns a leaf digest into two-to-one hash input.
    * ``empty_leaf_digest`` is the digest used for every leaf of a blank tree.
    """

    leaf_hash: Callable[[Any], Any]
    two_to_one_hash: Callable[[Any, Any], Any]
    compress: Callable[[Any, Any], Any] | None = None
    leaf_inner_converter: Callable[[Any], Any] = identity_converter
    empty_leaf_digest: Any = field(default=bytes(32))

    def __post_init__(self) -> None:
        if self.compress is None:
            object.__setattr__(self, "compress", self.two_to_one_hash)

    def _hash_leaves(self, left: Any, right: Any) -> Any:
        return self.two_to_one_hash(
            self.leaf_inner_converter(left), self.leaf_inner_converter(right)
        )


def _select(index: int, computed: Any, sibling: Any) -> tuple[Any, Any]:
    """Order ``computed`` and ``sibling`` as (left, right) by the low bit of ``index``."""
    if index & 1 == 0:
        return computed, sibling
    return sibling, computed


def _is_root(index: int) -> bool:
    return index == 0


def _is_left_child(index: int) -> bool:
    return index % 2 == 1


def _parent(index: int) -> int:
    if index <= 0:
        raise ValueError("the root has no parent")
    return (index - 1) >> 1


def _sibling(index: int) -> int:
    if index <= 0:
        raise ValueError("the root has no sibling")
    return index + 1 if _is_left_child(index) else index - 1


def _leaf_position_in_tree(index: int, height: int) -> int:
    return index + (1 << (height - 1)) - 1


@dataclass(frozen=True)
class Path:
    """Authentication path for one leaf.

    ``auth_path`` holds the siblings of the on-path inner nodes ordered from
    the layer below the root down to the layer above the leaves.
    """

    leaf_sibling_hash: Any
    auth_path: tuple[Any, ...]
    leaf_index: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "auth_path", tuple(self.auth_path))

    def position_list(self) -> list[bool]:
        """Leaf index as booleans, most significant first; ``True`` marks a right child."""
        return [
            (self.leaf_index >> i) & 1 != 0
            for i in reversed(range(len(self.auth_path) + 1))
        ]

    def verify(self, config: MerkleConfig, root: Any, leaf: Any) -> bool:
        """Return whether ``leaf`` at ``leaf_index`` hashes up to ``root``."""
        claimed = config.leaf_hash(leaf)
        left, right = _select(self.leaf_index, claimed, self.leaf_sibling_hash)
        current = config._hash_leaves(left, right)

        index = self.leaf_index >> 1
        for sibling in reversed(self.auth_path):
            left, right = _select(index, current, sibling)
            current = config.compress(left, right)
            index >>= 1

        return current == root


class MerkleTree:
    """A complete binary Merkle tree whose leaf count is a power of two, at least two."""

    def __init__(
        self,
        config: MerkleConfig,
        leaf_nodes: list[Any],
        non_leaf_nodes: list[Any],
        height: int,
    ) -> None:
        self._config = config
        self._leaf_nodes = leaf_nodes
        self._non_leaf_nodes = non_leaf_nodes
        self._height = height

    @classmethod
    def new(cls, config: MerkleConfig, leaves: Iterable[Any]) -> MerkleTree:
        """Build a tree by hashing each of ``leaves``."""
        return cls.from_leaf_digests(config, [config.leaf_hash(leaf) for leaf in leaves])

    @classmethod
    def blank(cls, config: MerkleConfig, height: int) -> MerkleTree:
        """Build a tree of ``height`` whose leaf digests are all ``empty_leaf_digest``."""
        if height < 2:
            raise ValueError(f"height must be at least 2, got {height}")
        digests = [config.empty_leaf_digest] * (1 << (height - 1))
        return cls.from_leaf_digests(config, digests)

    @classmethod
    def from_leaf_digests(
        cls, config: MerkleConfig, leaf_digests: Sequence[Any]
    ) -> MerkleTree:
        """Build a tree from precomputed leaf digests."""
        leaves = list(leaf_digests)
        count = len(leaves)
        if count < 2 or count & (count - 1):
            raise ValueError(
                f"number of leaves must be a power of two greater than one, got {count}"
            )

        layer = [config._hash_leaves(l, r) for l, r in zip(leaves[0::2], leaves[1::2])]
        layers = [layer]
        while len(layer) > 1:
            layer = [config.compress(l, r) for l, r in zip(layer[0::2], layer[1::2])]
            layers.append(layer)

        non_leaf_nodes = [node for level in reversed(layers) for node in level]
        return cls(config, leaves, non_leaf_nodes, count.bit_length())

    def root(self) -> Any:
        """Return the root digest."""
        return self._non_leaf_nodes[0]

    def height(self) -> int:
        """Return the number of layers, leaves included."""
        return self._height

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._leaf_nodes):
            raise IndexError(f"leaf index {index} out of range")

    def generate_proof(self, index: int) -> Path:
        """Return the authentication path of the leaf at ``index``."""
        self._check_index(index)
        sibling_hash = self._leaf_nodes[index ^ 1]

        path = []
        current = _parent(_leaf_position_in_tree(index, self._height))
        while not _is_root(current):
            path.append(self._non_leaf_nodes[_sibling(current)])
            current = _parent(current)
        path.reverse()

        return Path(leaf_sibling_hash=sibling_hash, auth_path=tuple(path), leaf_index=index)

    def _updated_path(self, index: int, new_leaf: Any) -> tuple[Any, list[Any]]:
        """Hash ``new_leaf`` and recompute the inner nodes above it, bottom to top."""
        config = self._config
        new_hash = config.leaf_hash(new_leaf)
        left, right = _select(index, new_hash, self._leaf_nodes[index ^ 1])
        bottom_to_top = [config._hash_leaves(left, right)]

        current = _parent(_leaf_position_in_tree(index, self._height))
        while not _is_root(current):
            sibling = self._non_leaf_nodes[_sibling(current)]
            if _is_left_child(current):
                combined = config.compress(bottom_to_top[-1], sibling)
            else:
                combined = config.compress(sibling, bottom_to_top[-1])
            bottom_to_top.append(combined)
            current = _parent(current)

        return new_hash, bottom_to_top

    def _apply(self, index: int, new_hash: Any, bottom_to_top: list[Any]) -> None:
        self._leaf_nodes[index] = new_hash
        current = _leaf_position_in_tree(index, self._height)
        for node in bottom_to_top:
            current = _parent(current)
            self._non_leaf_nodes[current] = node

    def update(self, index: int, new_leaf: Any) -> None:
        """Replace the leaf at ``index`` and recompute the nodes above it."""
        self._check_index(index)
        new_hash, bottom_to_top = self._updated_path(index, new_leaf)
        self._apply(index, new_hash, bottom_to_top)

    def check_update(self, index: int, new_leaf: Any, asserted_new_root: Any) -> bool:
        """Update the leaf only if the resulting root equals ``asserted_new_root``."""
        self._check_index(index)
        new_hash, bottom_to_top = self._updated_path(index, new_leaf)
        if bottom_to_top[-1] != asserted_new_root:
            return False
        self._apply(index, new_hash, bottom_to_top)
        return True