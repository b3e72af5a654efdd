"""Repacking of public inputs between two prime fields.

A proof over a field with modulus ``p`` may be checked inside a circuit
over another field with modulus ``q``. Its public inputs are then moved
across by writing every element as a fixed-width big-endian bit string,
concatenating the strings, and cutting the result into chunks small
enough to fit in an element of the other field.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Sequence

__all__ = ["embedding_capacity", "repack_input", "from_field_elements"]


def _check_modulus(name: str, modulus: int) -> None:
    if modulus < 2:
        raise ValueError(f"{name} must be at least 2, got {modulus}")


def _elements_in(elements: Iterable[int], modulus: int) -> list[int]:
    values = [int(value) for value in elements]
    for value in values:
        if not 0 <= value < modulus:
            raise ValueError(f"element {value} is not in the field of modulus {modulus}")
    return values


def _big_endian_bits(value: int, width: int) -> Iterator[bool]:
    return ((value >> shift) & 1 == 1 for shift in reversed(range(width)))


def _chunks(bits: Sequence[bool], size: int) -> Iterator[Sequence[bool]]:
    return (bits[start : start + size] for start in range(0, len(bits), size))


def _from_big_endian(bits: Iterable[bool]) -> int:
    value = 0
    for bit in bits:
        value = (value << 1) | int(bit)
    return value


def embedding_capacity(source_modulus: int, target_modulus: int) -> int:
    """Number of bits that fit in one element of the target field.

    Every bit string of that length must denote an integer below the target
    modulus. When both moduli have the same bit length and the target is
    not smaller than the source, the full width is usable; otherwise one
    bit less than the target's bit length.
    """
    _check_modulus("source modulus", source_modulus)
    _check_modulus("target modulus", target_modulus)
    target_bits = target_modulus.bit_length()
    if target_bits == source_modulus.bit_length() and target_modulus >= source_modulus:
        return target_bits
    return target_bits - 1


def repack_input(
    elements: Iterable[int], field_modulus: int, target_modulus: int
) -> list[int]:
    """Pack elements of the field ``field_modulus`` into elements of ``target_modulus``.

    Each element is written as a big-endian bit string as wide as
    ``field_modulus``; the concatenation is cut into chunks of
    :func:`embedding_capacity` bits, each read back as a big-endian integer.
    The last chunk may be shorter.
    """
    _check_modulus("field modulus", field_modulus)
    _check_modulus("target modulus", target_modulus)
    values = _elements_in(elements, field_modulus)
    width = field_modulus.bit_length()
    capacity = embedding_capacity(field_modulus, target_modulus)

    bits = [bit for value in values for bit in _big_endian_bits(value, width)]
    return [_from_big_endian(chunk) for chunk in _chunks(bits, capacity)]


def from_field_elements(
    elements: Iterable[int], field_modulus: int, target_modulus: int
) -> list[list[bool]]:
    """Split elements of ``target_modulus`` into bit groups for the field ``field_modulus``.

    Each element is written as a big-endian bit string as wide as
    ``target_modulus``; the concatenation is cut into chunks of
    ``embedding_capacity(target_modulus, field_modulus)`` bits. Every chunk
    is returned in little-endian order. The last chunk may be shorter.
    """
    _check_modulus("field modulus", field_modulus)
    _check_modulus("target modulus", target_modulus)
    values = _elements_in(elements, target_modulus)
    width = target_modulus.bit_length()
    capacity = embedding_capacity(target_modulus, field_modulus)

    bits = [bit for value in values for bit in _big_endian_bits(value, width)]
    return [list(reversed(chunk)) for chunk in _chunks(bits, capacity)]