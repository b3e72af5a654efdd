# arkprims

Small, dependency-free cryptographic building blocks written in plain Python.

## What is inside

- `arkprims.blake2s`: BLAKE2s over 32-bit words.
  - `compress(h, m, t, f)` is the compression function: an 8-word state, a
    16-word message block, the byte offset counter and the final-block flag;
    it returns the new 8-word state.
  - `evaluate_blake2s(data)` hashes `bytes` with the default parameters
    (unkeyed, 32-byte digest) and returns the eight state words.
  - `evaluate_blake2s_with_parameters(data, parameters)` does the same with a
    custom 8-word parameter block.
  - `ParameterBlock` is a frozen dataclass holding digest length, key length,
    fan-out, depth, leaf length, node offset, XOF digest length, node depth,
    inner length, an 8-byte salt and an 8-byte personalization. Its values are
    range-checked on construction. `parameters()` gives the eight
    little-endian words and `evaluate(data)` returns `digest_length` bytes.
- `arkprims.prf`: the abstract `PRF` interface and `Blake2sPRF`, which hashes a
  32-byte seed followed by a 32-byte input with BLAKE2s-256 and returns 32
  bytes. Seeds or inputs of another length raise `ValueError`.
- `arkprims.merkle`: Merkle trees of fixed height.
  - `MerkleConfig` names the hashes: `leaf_hash`, `two_to_one_hash`,
    `compress` (defaults to `two_to_one_hash`), `leaf_inner_converter`
    (defaults to `identity_converter`) and `empty_leaf_digest` (defaults to 32
    zero bytes).
  - `MerkleTree.new(config, leaves)`, `MerkleTree.from_leaf_digests(config,
    digests)` and `MerkleTree.blank(config, height)` build trees. The number of
    leaves must be a power of two and at least two, otherwise `ValueError`.
  - `root()`, `height()`, `generate_proof(index)`, `update(index, new_leaf)`
    and `check_update(index, new_leaf, asserted_new_root)`, which changes the
    tree only if the new root matches. An index out of range raises
    `IndexError`.
  - `Path` holds the leaf sibling, the authentication path (top to bottom) and
    the leaf index; `Path.verify(config, root, leaf)` returns a `bool`, and
    `Path.position_list()` gives the index bits, most significant first.
- `arkprims.merkle_path`: `PathBits`, a path held as explicit branching bits.
  `PathBits.from_path(path)` builds one from a `Path`. `set_leaf_position(bits)`
  takes little-endian bits, padding or truncating to the path length, and
  `get_leaf_position()` returns them. `calculate_root`, `verify_membership`,
  `update_leaf` (raises `ValueError` if the old leaf is not a member) and
  `update_and_check` work from the bits rather than from the index.
- `arkprims.input_packing`: moves prime-field elements, given as integers,
  between two fields. `embedding_capacity(source_modulus, target_modulus)`
  gives how many bits fit into each target element. `repack_input(elements,
  field_modulus, target_modulus)` packs big-endian bit strings into target
  elements; `from_field_elements(elements, field_modulus, target_modulus)`
  splits target elements back into little-endian bit groups. Elements outside
  their field raise `ValueError`.

## Install

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from arkprims.prf import Blake2sPRF

out = Blake2sPRF().evaluate(bytes(32), bytes(range(32)))
assert len(out) == 32
```

A Merkle tree needs a configuration that names its hashes:

```python
import hashlib
from arkprims.merkle import MerkleConfig, MerkleTree

config = MerkleConfig(
    leaf_hash=lambda leaf: hashlib.sha256(b"\x00" + leaf).digest(),
    two_to_one_hash=lambda left, right: hashlib.sha256(b"\x01" + left + right).digest(),
)

leaves = [bytes([i]) * 30 for i in range(4)]
tree = MerkleTree.new(config, leaves)
proof = tree.generate_proof(2)
assert proof.verify(config, tree.root(), leaves[2])
```

## What it does not do

The package computes hashes, trees and bit conversions directly on Python
values. It does not build constraint systems or circuits, does not produce or
check proofs, and ships no hash functions for Merkle trees beyond what a
`MerkleConfig` is given. There is no command-line tool.