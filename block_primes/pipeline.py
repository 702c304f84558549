"""Entry points: sieve every prime up to n in parallel blocks."""

import logging
import math

import numpy as np

from .errors import InvalidBound
from .results import ResultTable, finalize
from .scheduler import run_all
from .sieve import partition, sieve_base
from .storage import get_storage

logger = logging.getLogger(__name__)

DEFAULT_STORAGE = "byte"
DEFAULT_EXECUTOR = "thread"


def compute_blocks(n: int, block_size: int, *, storage=DEFAULT_STORAGE, workers: int | None = None,
                   executor: str = DEFAULT_EXECUTOR, device: str | None = None) -> ResultTable:
    """
    Run the full pipeline and return the populated ResultTable: slot 0 holds the
    primes <= isqrt(n), slot k the primes of block k.

    'storage' is a name ("byte", "bit", "torch") or a callable size -> BitField.
    """
    if n < 2:
        raise InvalidBound(f"n must be >= 2, got {n}")
    if block_size < 1:
        raise InvalidBound(f"block_size must be >= 1, got {block_size}")
    if isinstance(storage, str):
        storage = get_storage(storage, device)

    sqrt_n = math.isqrt(n)
    base_primes = sieve_base(sqrt_n, storage)
    descriptors = partition(sqrt_n, n, block_size)
    logger.info("n=%d: %d base primes <= %d, %d blocks of %d",
                n, base_primes.size, sqrt_n, len(descriptors), block_size)

    table = ResultTable(len(descriptors) + 1)
    table[0] = base_primes
    run_all(descriptors, base_primes, table, storage=storage, workers=workers, executor=executor)
    return table


def compute_primes(n: int, block_size: int, **kwargs) -> np.ndarray:
    """All primes <= n, ascending, as an int64 array.  Takes the same options as compute_blocks."""
    return finalize(compute_blocks(n, block_size, **kwargs))
