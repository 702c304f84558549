"""
Sieving kernels: the base sieve up to sqrt(n), the block partitioner and the
per-block segmented sieve.

Boundary convention: the base sieve covers [2, sqrt_n] and blocks cover
(sqrt_n, n].  A block is described half-open, [range_start, range_end).
"""

import logging
import math
from typing import NamedTuple

import numpy as np

from .errors import InvalidBound
from .storage import ByteField

logger = logging.getLogger(__name__)


class BlockDescriptor(NamedTuple):
    block_index: int
    range_start: int
    range_end: int  # exclusive


class BlockResult(NamedTuple):
    block_index: int
    primes: np.ndarray


def sieve_base(limit: int, storage=ByteField) -> np.ndarray:
    """Classic sieve up to 'limit' (inclusive), returns primes as a read-only int64 array."""
    if limit < 2:
        primes = np.array([], dtype=np.int64)
    else:
        field = storage(limit + 1)
        for p in range(2, math.isqrt(limit) + 1):
            if not field.is_marked(p):
                field.mark(p * p, p)
        offsets = field.unmarked()
        primes = offsets[offsets >= 2]
    primes.flags.writeable = False
    return primes


def partition(sqrt_n: int, n: int, block_size: int) -> list[BlockDescriptor]:
    """
    Split (sqrt_n, n] into contiguous blocks of block_size values; the last block
    may be shorter.  Indices start at 1, slot 0 belongs to the base primes.
    """
    if block_size < 1:
        raise InvalidBound(f"block_size must be >= 1, got {block_size}")
    blocks = []
    low = sqrt_n + 1
    idx = 1
    while low <= n:
        high_exclusive = min(low + block_size, n + 1)
        blocks.append(BlockDescriptor(idx, low, high_exclusive))
        low = high_exclusive
        idx += 1
    return blocks


def sieve_block(descriptor: BlockDescriptor, base_primes, storage=ByteField) -> BlockResult:
    """
    Sieve [range_start, range_end) with base_primes.

    Only the private BitField is written, so any number of calls may share the
    same base_primes concurrently.
    """
    idx, low, high = descriptor
    field = storage(high - low)

    if low < 2:
        field.mark(0, 1, 2 - low)

    for p in base_primes:
        p = int(p)
        p2 = p * p
        if p2 >= high:
            break
        # first multiple in [low, high)
        start = max(p2, ((low + p - 1) // p) * p)
        field.mark(start - low, p)

    primes = low + field.unmarked()
    logger.debug("block %d [%d, %d): %d primes", idx, low, high, primes.size)
    return BlockResult(idx, primes)
