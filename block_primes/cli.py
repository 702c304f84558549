#!/usr/bin/env python3
"""
Benchmark the block sieve with each flag storage.

Examples:
  # primes up to 1e8, blocks of 100 * 1024 values, byte flags then bit flags
  python -m block_primes --limit 100000000 --block-size 100

  # only the packed bit storage, 4 worker threads
  python -m block_primes --limit 10000000 --storage bit --workers 4
"""

import argparse
import logging
import sys
import time

from .errors import SieveError
from .pipeline import DEFAULT_EXECUTOR, compute_primes
from .scheduler import EXECUTORS
from .storage import STORAGES

BLOCK_UNIT = 1024


def timed(fn, *args, **kwargs):
    t0 = time.perf_counter()
    out = fn(*args, **kwargs)
    t1 = time.perf_counter()
    return out, (t1 - t0)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="block-primes",
                                 description="Parallel segmented sieve, one task per block.")
    ap.add_argument("--limit", type=int, default=100_000_000, help="Generate all primes <= LIMIT.")
    ap.add_argument("--block-size", type=int, default=100,
                    help=f"Block size in units of {BLOCK_UNIT} values (default: 100).")
    ap.add_argument("--storage", action="append", choices=STORAGES,
                    help="Flag storage to time; repeatable (default: byte and bit).")
    ap.add_argument("--workers", type=int, default=0,
                    help="Pool size (default: os.cpu_count()).")
    ap.add_argument("--executor", choices=sorted(EXECUTORS), default=DEFAULT_EXECUTOR,
                    help=f"Worker pool kind (default: {DEFAULT_EXECUTOR}).")
    ap.add_argument("--device", default="auto", help="Torch device for --storage torch (default: auto).")
    ap.add_argument("-v", "--verbose", action="store_true", help="Log per-block progress.")
    return ap


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format="%(message)s")

    storages = args.storage or ["byte", "bit"]
    workers = args.workers if args.workers and args.workers > 0 else None  # None -> use cpu_count()
    block_size = args.block_size * BLOCK_UNIT

    print(f"Mode: primes <= {args.limit:,} | Block size: {block_size:,} | "
          f"Workers: {workers or 'auto'} | Executor: {args.executor}")

    for name in storages:
        try:
            primes, elapsed = timed(compute_primes, args.limit, block_size, storage=name,
                                    workers=workers, executor=args.executor, device=args.device)
        except SieveError as e:
            print(f"error: {e}", file=sys.stderr)
            return 1

        print(f"\nTime using {name} storage: {elapsed * 1000:.0f} ms")
        print(f"Found {primes.size:,} prime numbers.")
        print("First 10 primes:", ", ".join(map(str, primes[:10].tolist())))
        print("Last 10 primes:", ", ".join(map(str, primes[-10:].tolist())))
    return 0


if __name__ == "__main__":
    sys.exit(main())
