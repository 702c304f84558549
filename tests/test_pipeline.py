import pytest

from block_primes import InvalidBound, compute_blocks, compute_primes
from block_primes.storage import PackedBitField

PRIMES_TO_100 = [2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41, 43, 47,
                 53, 59, 61, 67, 71, 73, 79, 83, 89, 97]


def test_primes_to_100():
    assert compute_primes(100, 10).tolist() == PRIMES_TO_100


@pytest.mark.parametrize("n", [2, 3, 4, 5, 24, 25, 26, 97, 121, 1000])
def test_small_bounds(n, reference):
    assert compute_primes(n, 3).tolist() == reference(n)


def test_independent_of_block_size():
    n = 300
    expected = compute_primes(n, n).tolist()
    for block_size in range(1, n + 1):
        assert compute_primes(n, block_size, workers=4).tolist() == expected


@pytest.mark.parametrize("storage", ["byte", "bit", PackedBitField])
def test_storage_variants_agree(storage, reference):
    assert compute_primes(20_000, 1024, storage=storage).tolist() == reference(20_000)


def test_torch_storage_variant(reference):
    pytest.importorskip("torch")
    assert compute_primes(5000, 512, storage="torch", device="cpu").tolist() == reference(5000)


def test_process_executor_matches_threads():
    threaded = compute_primes(50_000, 4096)
    assert compute_primes(50_000, 4096, executor="process", workers=2).tolist() == threaded.tolist()


def test_repeatable():
    assert compute_primes(10_000, 100).tolist() == compute_primes(10_000, 100).tolist()


def test_compute_blocks_slots():
    table = compute_blocks(30, 5)
    # isqrt(30) == 5, blocks cover (5, 30]
    assert len(table) == 6
    assert [s.tolist() for s in table] == [[2, 3, 5], [7], [11, 13], [17, 19], [23], [29]]


@pytest.mark.parametrize("n,block_size", [(1, 10), (0, 1), (-5, 1), (100, 0), (100, -1)])
def test_invalid_bounds(n, block_size):
    with pytest.raises(InvalidBound):
        compute_primes(n, block_size)


def test_invalid_bound_is_value_error():
    with pytest.raises(ValueError):
        compute_primes(1, 1)
