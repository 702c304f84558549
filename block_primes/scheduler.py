"""
Dispatch one sieve unit per block onto a worker pool and join on all of them.

Every unit is submitted up front; the pool queues whatever it cannot start yet.
The only synchronisation point is the final wait, which also publishes the
slot writes made by worker threads.
"""

import logging
import os
from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor, wait

from .errors import WorkerFault
from .sieve import sieve_block
from .storage import ByteField

logger = logging.getLogger(__name__)

EXECUTORS = {
    "thread": ThreadPoolExecutor,
    "process": ProcessPoolExecutor,
}


def _sieve_into(result_table, descriptor, base_primes, storage):
    """Thread unit: sieve one block and write its own slot."""
    res = sieve_block(descriptor, base_primes, storage)
    result_table[res.block_index] = res.primes


def pool_size(workers: int | None = None) -> int:
    if workers is None:
        return os.cpu_count() or 1
    if workers < 1:
        raise ValueError(f"workers must be >= 1, got {workers}")
    return workers


def run_all(descriptors, base_primes, result_table, *, storage=ByteField,
            workers: int | None = None, executor: str = "thread") -> None:
    """
    Sieve every descriptor concurrently into result_table[descriptor.block_index].

    Returns once every unit has finished.  If any unit raised, WorkerFault is
    raised for the lowest faulting block after the rest have run to completion;
    the table is then only partially populated.
    """
    try:
        pool_cls = EXECUTORS[executor]
    except KeyError:
        raise ValueError(f"unknown executor {executor!r}, expected one of {', '.join(EXECUTORS)}") from None
    workers = pool_size(workers)
    logger.info("sieving %d blocks on %d %s workers", len(descriptors), workers, executor)

    with pool_cls(max_workers=workers) as ex:
        if executor == "thread":
            futures = {ex.submit(_sieve_into, result_table, d, base_primes, storage): d
                       for d in descriptors}
        else:
            # results come back over IPC, the parent fills the slots
            futures = {ex.submit(sieve_block, d, base_primes, storage): d
                       for d in descriptors}
        wait(futures)

    faults = sorted(((d.block_index, fut.exception()) for fut, d in futures.items()
                     if fut.exception() is not None), key=lambda f: f[0])
    if faults:
        for block_index, exc in faults:
            logger.error("block %d faulted: %r", block_index, exc)
        block_index, first = faults[0]
        raise WorkerFault(block_index, len(faults)) from first

    if executor != "thread":
        for fut in futures:
            res = fut.result()
            result_table[res.block_index] = res.primes
