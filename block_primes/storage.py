"""
Flag storage for the sieve.

A storage is any callable taking a size and returning a BitField.  A set flag
means "composite".  All strategies are interchangeable; they only differ in how
much memory one flag costs:

  byte  : numpy bool_ array, 1 byte per flag
  bit   : numpy uint8 array packed little-endian, 1 bit per flag
  torch : torch.bool tensor on a CPU/CUDA/MPS device (needs the torch extra)
"""

from functools import partial

import numpy as np


class BitField:
    """Composite flags for offsets 0..size-1."""

    def __init__(self, size: int):
        if size < 0:
            raise ValueError(f"size must be >= 0, got {size}")
        self.size = size

    def mark(self, start: int, step: int = 1, stop: int | None = None) -> None:
        raise NotImplementedError

    def is_marked(self, offset: int) -> bool:
        raise NotImplementedError

    def unmarked(self) -> np.ndarray:
        """Ascending int64 offsets of every flag still clear."""
        raise NotImplementedError

    def __len__(self):
        return self.size


class ByteField(BitField):
    def __init__(self, size: int):
        super().__init__(size)
        self.flags = np.zeros(size, dtype=np.bool_)

    def mark(self, start, step=1, stop=None):
        self.flags[start:stop:step] = True  # vectorized strided set

    def is_marked(self, offset):
        return bool(self.flags[offset])

    def unmarked(self):
        return np.flatnonzero(~self.flags).astype(np.int64)


class PackedBitField(BitField):
    def __init__(self, size: int):
        super().__init__(size)
        self.bits = np.zeros((size + 7) // 8, dtype=np.uint8)

    def mark(self, start, step=1, stop=None):
        stop = self.size if stop is None else min(stop, self.size)
        if start >= stop:
            return
        idx = np.arange(start, stop, step, dtype=np.int64)
        masks = np.left_shift(1, idx & 7).astype(np.uint8)
        if step >= 8:
            # every index lands in a different byte
            self.bits[idx >> 3] |= masks
        else:
            np.bitwise_or.at(self.bits, idx >> 3, masks)

    def is_marked(self, offset):
        if not 0 <= offset < self.size:
            raise IndexError(offset)
        return bool((self.bits[offset >> 3] >> (offset & 7)) & 1)

    def unmarked(self):
        flags = np.unpackbits(self.bits, count=self.size, bitorder="little")
        return np.flatnonzero(flags == 0).astype(np.int64)


STORAGES = ("byte", "bit", "torch")


def get_storage(name: str, device: str | None = None):
    """Resolve a storage name to a callable size -> BitField."""
    if name == "byte":
        return ByteField
    if name == "bit":
        return PackedBitField
    if name == "torch":
        from .torch_storage import TorchField, pick_device

        return partial(TorchField, device=pick_device(device))
    raise ValueError(f"unknown storage {name!r}, expected one of {', '.join(STORAGES)}")
