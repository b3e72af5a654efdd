import hashlib
import random

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from arkprims.merkle import MerkleConfig, MerkleTree, Path, identity_converter

PRIME = (1 << 127) - 1


def _sha(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


def _bytes_config() -> MerkleConfig:
    # Leaf digests are integers; the converter turns them into bytes for the inner hash.
    return MerkleConfig(
        leaf_hash=lambda leaf: int.from_bytes(_sha(b"leaf" + bytes(leaf)), "big"),
        two_to_one_hash=lambda left, right: _sha(left + right),
        compress=lambda left, right: _sha(b"node" + left + right),
        leaf_inner_converter=lambda digest: digest.to_bytes(32, "big"),
        empty_leaf_digest=0,
    )


def _field_hash(*values: int) -> int:
    payload = b"".join(v.to_bytes(16, "big") for v in values)
    return int.from_bytes(_sha(payload), "big") % PRIME


def _field_config() -> MerkleConfig:
    return MerkleConfig(
        leaf_hash=lambda leaf: _field_hash(*leaf),
        two_to_one_hash=lambda left, right: _field_hash(left, right),
        empty_leaf_digest=0,
    )


def _random_bytes(rng: random.Random) -> bytes:
    return bytes(rng.getrandbits(8) for _ in range(32))


def _random_field_leaf(rng: random.Random, width: int) -> tuple[int, ...]:
    return tuple(rng.randrange(PRIME) for _ in range(width))


def _check_bytes_tree(leaves, updates):
    config = _bytes_config()
    leaves = list(leaves)
    tree = MerkleTree.new(config, leaves)
    root = tree.root()
    for i, leaf in enumerate(leaves):
        assert tree.generate_proof(i).verify(config, root, leaf)

    for i, value in updates:
        tree.update(i, value)
        leaves[i] = value
    root = tree.root()
    for i, leaf in enumerate(leaves):
        assert tree.generate_proof(i).verify(config, root, leaf)
    assert root == MerkleTree.new(config, leaves).root()


def test_bytes_tree_good_root():
    rng = random.Random(0)
    _check_bytes_tree(
        [_random_bytes(rng) for _ in range(2)],
        [(0, _random_bytes(rng)), (1, _random_bytes(rng))],
    )
    _check_bytes_tree(
        [_random_bytes(rng) for _ in range(4)], [(3, _random_bytes(rng))]
    )
    _check_bytes_tree(
        [_random_bytes(rng) for _ in range(128)],
        [(i, _random_bytes(rng)) for i in (2, 3, 5, 111, 127)],
    )


def test_field_tree_good_root_and_wrong_root():
    rng = random.Random(1)
    config = _field_config()
    leaves = [_random_field_leaf(rng, 3) for _ in range(128)]
    tree = MerkleTree.new(config, leaves)
    root = tree.root()
    for i, leaf in enumerate(leaves):
        assert tree.generate_proof(i).verify(config, root, leaf)

    wrong_root = (root + 1) % PRIME
    assert not tree.generate_proof(0).verify(config, wrong_root, leaves[0])

    for i in (2, 3, 5, 111, 127):
        value = _random_field_leaf(rng, 3)
        tree.update(i, value)
        leaves[i] = value
    root = tree.root()
    for i, leaf in enumerate(leaves):
        assert tree.generate_proof(i).verify(config, root, leaf)


def test_compress_defaults_to_two_to_one_hash():
    config = _field_config()
    assert config.compress is config.two_to_one_hash


def test_height_and_auth_path_length():
    config = _field_config()
    tree = MerkleTree.new(config, [(i,) for i in range(8)])
    assert tree.height() == 4
    proof = tree.generate_proof(5)
    assert len(proof.auth_path) == tree.height() - 2
    assert proof.leaf_index == 5


def test_two_leaf_tree_has_empty_auth_path():
    config = _field_config()
    tree = MerkleTree.new(config, [(1,), (2,)])
    assert tree.height() == 2
    proof = tree.generate_proof(1)
    assert proof.auth_path == ()
    assert proof.leaf_sibling_hash == config.leaf_hash((1,))


def test_position_list_is_big_endian():
    path = Path(leaf_sibling_hash=0, auth_path=[1, 2], leaf_index=5)
    assert path.position_list() == [True, False, True]
    assert Path(0, (), 2).position_list() == [False]


def test_proof_fails_for_wrong_leaf():
    config = _field_config()
    leaves = [(i, i + 1) for i in range(4)]
    tree = MerkleTree.new(config, leaves)
    proof = tree.generate_proof(2)
    assert not proof.verify(config, tree.root(), leaves[3])


def test_proof_fails_for_wrong_index():
    config = _field_config()
    leaves = [(i,) for i in range(4)]
    tree = MerkleTree.new(config, leaves)
    proof = tree.generate_proof(1)
    moved = Path(proof.leaf_sibling_hash, proof.auth_path, 3)
    assert not moved.verify(config, tree.root(), leaves[1])


def test_blank_matches_default_digests():
    config = _bytes_config()
    blank = MerkleTree.blank(config, 3)
    explicit = MerkleTree.from_leaf_digests(config, [0] * 4)
    assert blank.height() == 3
    assert blank.root() == explicit.root()


def test_blank_rejects_small_height():
    with pytest.raises(ValueError):
        MerkleTree.blank(_bytes_config(), 1)


@pytest.mark.parametrize("count", [0, 1, 3, 6])
def test_rejects_bad_leaf_count(count):
    with pytest.raises(ValueError):
        MerkleTree.new(_field_config(), [(i,) for i in range(count)])


def test_index_out_of_range():
    tree = MerkleTree.new(_field_config(), [(i,) for i in range(4)])
    with pytest.raises(IndexError):
        tree.generate_proof(4)
    with pytest.raises(IndexError):
        tree.update(-1, (9,))
    with pytest.raises(IndexError):
        tree.check_update(7, (9,), tree.root())


def test_check_update_rejects_wrong_root():
    config = _field_config()
    tree = MerkleTree.new(config, [(i,) for i in range(4)])
    old_root = tree.root()
    assert tree.check_update(1, (99,), (old_root + 1) % PRIME) is False
    assert tree.root() == old_root


def test_check_update_accepts_correct_root():
    config = _field_config()
    leaves = [(i,) for i in range(4)]
    tree = MerkleTree.new(config, leaves)
    expected = MerkleTree.new(config, [(0,), (99,), (2,), (3,)]).root()
    assert tree.check_update(1, (99,), expected) is True
    assert tree.root() == expected
    assert tree.generate_proof(1).verify(config, expected, (99,))


def test_update_changes_root():
    config = _field_config()
    tree = MerkleTree.new(config, [(i,) for i in range(4)])
    before = tree.root()
    tree.update(0, (42,))
    assert tree.root() != before
    assert tree.root() == MerkleTree.new(config, [(42,), (1,), (2,), (3,)]).root()


@settings(max_examples=25, deadline=None)
@given(
    st.integers(min_value=1, max_value=5).flatmap(
        lambda k: st.lists(
            st.binary(min_size=0, max_size=16), min_size=1 << k, max_size=1 << k
        )
    )
)
def test_every_proof_verifies(leaves):
    config = _bytes_config()
    tree = MerkleTree.new(config, leaves)
    root = tree.root()
    assert all(
        tree.generate_proof(i).verify(config, root, leaf) for i, leaf in enumerate(leaves)
    )