# montprime/numutil.py
# Small integer helpers shared by the Montgomery engine and the MR tester.

from __future__ import annotations


def bit_length(n: int) -> int:
    """Bits in the canonical binary form of n. 0 is written "0", so it counts as 1."""
    return n.bit_length() or 1


def two_multiplicity(n: int) -> int:
    """Largest k with 2^k | n (0 for n == 0)."""
    if n == 0: return 0
    return (n & -n).bit_length() - 1  # lowest set bit


def gcd(a: int, b: int) -> int:
    """Binary (Stein) gcd of two non-negative ints; no division anywhere."""
    if a < 0 or b < 0:
        raise ValueError("gcd operands must be non-negative")
    if a == b: return a
    if a == 0: return b
    if b == 0: return a

    # shared factors of two come back at the end
    shared = 0
    while not ((a | b) & 1):
        a >>= 1
        b >>= 1
        shared += 1

    while a != b:
        while not (a & 1): a >>= 1
        while not (b & 1): b >>= 1
        if b > a:
            a, b = b, a
        elif a == b:
            break
        a -= b  # odd - odd, so a is even (or zero) again

    return b << shared
