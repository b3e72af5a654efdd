"""Pseudorandom functions keyed by a seed."""

from __future__ import annotations

import hashlib
from abc import ABC, abstractmethod

__all__ = ["PRF", "Blake2sPRF"]


class PRF(ABC):
    """A pseudorandom function mapping a seed and an input to an output."""

    @abstractmethod
    def evaluate(self, seed: bytes, input_data: bytes) -> bytes:
        """Evaluate the function on ``input_data`` under ``seed``."""


class Blake2sPRF(PRF):
    """PRF computing BLAKE2s-256 over a 32-byte seed followed by a 32-byte input."""

    SEED_SIZE = 32
    INPUT_SIZE = 32
    OUTPUT_SIZE = 32

    def evaluate(self, seed: bytes, input_data: bytes) -> bytes:
        seed = bytes(seed)
        input_data = bytes(input_data)
        if len(seed) != self.SEED_SIZE:
            raise ValueError(f"seed must be {self.SEED_SIZE} bytes, got {len(seed)}")
        if len(input_data) != self.INPUT_SIZE:
            raise ValueError(
                f"input must be {self.INPUT_SIZE} bytes, got {len(input_data)}"
            )
        return hashlib.blake2s(seed + input_data).digest()