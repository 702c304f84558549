"""Write-once result table and the final in-order concatenation."""

import numpy as np

from .errors import IncompleteResults, SlotAlreadyWritten


class ResultTable:
    """
    Pre-sized slots, one per block; slot 0 holds the base primes.

    Every slot is written exactly once by exactly one unit of work.  Slots are
    disjoint, so concurrent writers never need a lock.
    """

    def __init__(self, slot_count: int):
        if slot_count < 1:
            raise ValueError(f"slot_count must be >= 1, got {slot_count}")
        self._slots: list[np.ndarray | None] = [None] * slot_count

    def __len__(self):
        return len(self._slots)

    def __getitem__(self, index: int) -> np.ndarray | None:
        return self._slots[index]

    def __setitem__(self, index: int, primes) -> None:
        if self._slots[index] is not None:
            raise SlotAlreadyWritten(index)
        self._slots[index] = np.asarray(primes, dtype=np.int64)

    def __iter__(self):
        return iter(self._slots)

    def missing(self) -> list[int]:
        return [i for i, s in enumerate(self._slots) if s is None]

    def is_complete(self) -> bool:
        return all(s is not None for s in self._slots)


def finalize(result_table: ResultTable, base_primes=None) -> np.ndarray:
    """Concatenate slot 0 (or base_primes) and blocks 1..M; the result is ascending."""
    missing = result_table.missing()
    if base_primes is not None and missing and missing[0] == 0:
        missing = missing[1:]
    if missing:
        raise IncompleteResults(missing)

    head = result_table[0] if base_primes is None else np.asarray(base_primes, dtype=np.int64)
    parts = [head]
    parts.extend(result_table[i] for i in range(1, len(result_table)))
    return np.concatenate(parts)
