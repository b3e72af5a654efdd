"""BLAKE2s, a BLAKE2s PRF, Merkle trees, bit-path checking and field-element input repacking."""

__version__ = "0.1.0"
__all__ = ["blake2s", "prf", "merkle", "merkle_path", "input_packing"]