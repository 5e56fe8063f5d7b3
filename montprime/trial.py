# montprime/trial.py
# Optional cheap pre-check: look for a small prime divisor before running MR.

from __future__ import annotations
from functools import lru_cache
from typing import Optional, Tuple


@lru_cache(maxsize=8)
def small_primes(limit: int = 10000) -> Tuple[int, ...]:
    """All primes <= limit (plain sieve of Eratosthenes)."""
    if limit < 2:
        return ()
    sieve = bytearray([1]) * (limit + 1)
    sieve[0] = sieve[1] = 0
    for p in range(2, int(limit**0.5) + 1):
        if sieve[p]:
            sieve[p*p:limit+1:p] = bytes(((limit - p*p) // p) + 1)
    return tuple(p for p in range(2, limit + 1) if sieve[p])


def small_divisor(n: int, limit: int = 10000) -> Optional[int]:
    """
    Smallest prime p <= limit with p | n and p < n, or None.
    A small prime n itself has no such divisor.
    """
    for p in small_primes(limit):
        if p * p > n:
            break
        if n % p == 0:
            return p
    return None
