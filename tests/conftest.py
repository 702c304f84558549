import pytest


def naive_primes(n):
    return [k for k in range(2, n + 1) if all(k % d for d in range(2, int(k ** 0.5) + 1))]


@pytest.fixture
def reference():
    return naive_primes
