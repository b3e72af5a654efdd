"""BLAKE2s compression and hashing over 32-bit words, with a configurable parameter block."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import Sequence

__all__ = [
    "compress",
    "evaluate_blake2s",
    "evaluate_blake2s_with_parameters",
    "ParameterBlock",
]

_MASK = 0xFFFFFFFF
_BLOCK_BYTES = 64

_R1, _R2, _R3, _R4 = 16, 12, 8, 7

_IV = (
    0x6A09E667,
    0xBB67AE85,
    0x3C6EF372,
    0xA54FF53A,
    0x510E527F,
    0x9B05688C,
    0x1F83D9AB,
    0x5BE0CD19,
)

_SIGMA = (
    (0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13, 14, 15),
    (14, 10, 4, 8, 9, 15, 13, 6, 1, 12, 0, 2, 11, 7, 5, 3),
    (11, 8, 12, 0, 5, 2, 15, 13, 10, 14, 3, 6, 7, 1, 9, 4),
    (7, 9, 3, 1, 13, 12, 11, 14, 2, 6, 5, 10, 4, 0, 15, 8),
    (9, 0, 5, 7, 2, 4, 10, 15, 14, 1, 11, 12, 6, 8, 3, 13),
    (2, 12, 6, 10, 0, 11, 8, 3, 4, 13, 7, 5, 15, 14, 1, 9),
    (12, 5, 1, 15, 14, 13, 4, 10, 0, 7, 6, 3, 9, 2, 8, 11),
    (13, 11, 7, 14, 12, 1, 3, 9, 5, 0, 15, 4, 8, 6, 2, 10),
    (6, 15, 14, 9, 11, 3, 0, 8, 12, 2, 13, 7, 1, 4, 10, 5),
    (10, 2, 8, 4, 7, 6, 1, 5, 15, 11, 9, 14, 3, 12, 13, 0),
)

# Working-vector indices (a, b, c, d) for the eight G applications of a round.
_G_LANES = (
    (0, 4, 8, 12),
    (1, 5, 9, 13),
    (2, 6, 10, 14),
    (3, 7, 11, 15),
    (0, 5, 10, 15),
    (1, 6, 11, 12),
    (2, 7, 8, 13),
    (3, 4, 9, 14),
)

_DEFAULT_PARAMETERS = (0x01010000 ^ 32, 0, 0, 0, 0, 0, 0, 0)


def _rotr(x: int, n: int) -> int:
    return ((x >> n) | (x << (32 - n))) & _MASK


def _mix(v: list[int], a: int, b: int, c: int, d: int, x: int, y: int) -> None:
    v[a] = (v[a] + v[b] + x) & _MASK
    v[d] = _rotr(v[d] ^ v[a], _R1)
    v[c] = (v[c] + v[d]) & _MASK
    v[b] = _rotr(v[b] ^ v[c], _R2)
    v[a] = (v[a] + v[b] + y) & _MASK
    v[d] = _rotr(v[d] ^ v[a], _R3)
    v[c] = (v[c] + v[d]) & _MASK
    v[b] = _rotr(v[b] ^ v[c], _R4)


def compress(h: Sequence[int], m: Sequence[int], t: int, f: bool) -> list[int]:
    """Apply the compression function F to state ``h`` and message block ``m``.

    ``t`` is the byte offset counter and ``f`` marks the final block.
    Returns the new 8-word state.
    """
    if len(h) != 8:
        raise ValueError(f"state must hold 8 words, got {len(h)}")
    if len(m) != 16:
        raise ValueError(f"message block must hold 16 words, got {len(m)}")

    state = [word & _MASK for word in h]
    block = [word & _MASK for word in m]

    v = state + list(_IV)
    v[12] ^= t & _MASK
    v[13] ^= (t >> 32) & _MASK
    if f:
        v[14] ^= _MASK

    for sigma in _SIGMA:
        for lane, (a, b, c, d) in enumerate(_G_LANES):
            _mix(v, a, b, c, d, block[sigma[2 * lane]], block[sigma[2 * lane + 1]])

    return [word ^ v[i] ^ v[i + 8] for i, word in enumerate(state)]


def _block_words(block: bytes) -> list[int]:
    return list(struct.unpack("<16I", block.ljust(_BLOCK_BYTES, b"\0")))


def evaluate_blake2s_with_parameters(
    data: bytes, parameters: Sequence[int]
) -> list[int]:
    """Hash ``data`` with the given 8-word parameter block; return the 8 state words."""
    if len(parameters) != 8:
        raise ValueError(f"parameter block must hold 8 words, got {len(parameters)}")
    if any(not 0 <= p <= _MASK for p in parameters):
        raise ValueError("parameter words must be unsigned 32-bit integers")

    data = bytes(data)
    h = [iv ^ p for iv, p in zip(_IV, parameters)]

    blocks = [data[i : i + _BLOCK_BYTES] for i in range(0, len(data), _BLOCK_BYTES)]
    if not blocks:
        blocks = [b""]

    for i, block in enumerate(blocks[:-1]):
        h = compress(h, _block_words(block), (i + 1) * _BLOCK_BYTES, False)
    return compress(h, _block_words(blocks[-1]), len(data), True)


def evaluate_blake2s(data: bytes) -> list[int]:
    """Unkeyed BLAKE2s with a 32-byte digest; return the 8 state words."""
    return evaluate_blake2s_with_parameters(data, _DEFAULT_PARAMETERS)


def _check_range(name: str, value: int, low: int, high: int) -> None:
    if not low <= value <= high:
        raise ValueError(f"{name} must be within [{low}, {high}], got {value}")


@dataclass(frozen=True)
class ParameterBlock:
    """A BLAKE2s parameter block describing the hash configuration."""

    digest_length: int = 32
    key_length: int = 0
    fan_out: int = 1
    depth: int = 1
    leaf_length: int = 0
    node_offset: int = 0
    xof_digest_length: int = 0
    node_depth: int = 0
    inner_length: int = 0
    salt: bytes = field(default=bytes(8))
    personalization: bytes = field(default=bytes(8))

    def __post_init__(self) -> None:
        _check_range("digest_length", self.digest_length, 1, 32)
        for name in ("key_length", "fan_out", "depth", "node_depth", "inner_length"):
            _check_range(name, getattr(self, name), 0, 0xFF)
        _check_range("leaf_length", self.leaf_length, 0, _MASK)
        _check_range("node_offset", self.node_offset, 0, _MASK)
        _check_range("xof_digest_length", self.xof_digest_length, 0, 0xFFFF)
        object.__setattr__(self, "salt", bytes(self.salt))
        object.__setattr__(self, "personalization", bytes(self.personalization))
        if len(self.salt) != 8:
            raise ValueError(f"salt must be 8 bytes, got {len(self.salt)}")
        if len(self.personalization) != 8:
            raise ValueError(
                f"personalization must be 8 bytes, got {len(self.personalization)}"
            )

    def parameters(self) -> tuple[int, ...]:
        """Return the parameter block as eight little-endian 32-bit words."""
        first = int.from_bytes(
            bytes([self.digest_length, self.key_length, self.fan_out, self.depth]),
            "little",
        )
        fourth = int.from_bytes(
            bytes(
                [
                    self.xof_digest_length & 0xFF,
                    self.xof_digest_length >> 8,
                    self.node_depth,
                    self.inner_length,
                ]
            ),
            "little",
        )
        salt = struct.unpack("<2I", self.salt)
        personalization = struct.unpack("<2I", self.personalization)
        return (first, self.leaf_length, self.node_offset, fourth, *salt, *personalization)

    def evaluate(self, data: bytes) -> bytes:
        """Hash ``data`` under this parameter block, returning ``digest_length`` bytes."""
        words = evaluate_blake2s_with_parameters(data, self.parameters())
        return struct.pack("<8I", *words)[: self.digest_length]