"""Segmented Sieve of Eratosthenes, sieved in parallel blocks."""

from .errors import IncompleteResults, InvalidBound, SieveError, SlotAlreadyWritten, WorkerFault
from .pipeline import compute_blocks, compute_primes
from .results import ResultTable, finalize
from .scheduler import run_all
from .sieve import BlockDescriptor, BlockResult, partition, sieve_base, sieve_block
from .storage import BitField, ByteField, PackedBitField, get_storage

__version__ = "0.1.0"

__all__ = [
    "BitField",
    "BlockDescriptor",
    "BlockResult",
    "ByteField",
    "IncompleteResults",
    "InvalidBound",
    "PackedBitField",
    "ResultTable",
    "SieveError",
    "SlotAlreadyWritten",
    "WorkerFault",
    "compute_blocks",
    "compute_primes",
    "finalize",
    "get_storage",
    "partition",
    "run_all",
    "sieve_base",
    "sieve_block",
]
