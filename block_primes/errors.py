"""Exceptions raised by the block sieve pipeline."""


class SieveError(Exception):
    """Base class for every error raised by block_primes."""


class InvalidBound(SieveError, ValueError):
    """Raised before any work is scheduled when n or block_size is out of range."""


class WorkerFault(SieveError):
    """A block-sieve unit failed; the original exception is chained as __cause__."""

    def __init__(self, block_index: int, fault_count: int = 1):
        self.block_index = block_index
        self.fault_count = fault_count
        msg = f"sieve of block {block_index} failed"
        if fault_count > 1:
            msg += f" ({fault_count} blocks faulted)"
        super().__init__(msg)


class SlotAlreadyWritten(SieveError):
    def __init__(self, index: int):
        self.index = index
        super().__init__(f"result slot {index} already written")


class IncompleteResults(SieveError):
    def __init__(self, missing: list[int]):
        self.missing = missing
        super().__init__(f"{len(missing)} result slot(s) never written, first is {missing[0]}")
