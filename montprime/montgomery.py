# montprime/montgomery.py
# Division-free modular arithmetic (Montgomery form) for a fixed odd modulus.
# - context construction: r = 2^shift, r^-1 mod base, base^-1 mod r
# - REDC multiply / square with a single correction step
# - right-to-left square-and-multiply exponentiation

from __future__ import annotations
from dataclasses import dataclass

from .errors import InvalidModulus
from .numutil import bit_length

# ---------- Context ----------

@dataclass(frozen=True)
class ReductionContext:
    """
    Precomputed constants for Montgomery arithmetic modulo ``base``.

    base      odd modulus
    shift     exponent of the auxiliary modulus, r = 2^shift
    r         smallest power of two used here that exceeds base (2^(bits+1))
    r_inv     r^-1 mod base
    base_inv  base^-1 mod r, so t - m*base is a multiple of r in REDC
    """
    base: int
    shift: int
    r: int
    r_inv: int
    base_inv: int

    @property
    def mask(self) -> int:
        return self.r - 1


def invert_pow2(exp: int, base: int) -> int:
    """
    Inverse of 2^exp modulo an odd base (right-shift inversion).
    Start from 1 and halve exp times, adding base first whenever the
    accumulator is odd so the halving stays exact.
    """
    inv = 1
    for _ in range(exp):
        if inv & 1:
            inv += base
        inv >>= 1
    return inv


def reduction_context_for(base: int) -> ReductionContext:
    """Build the Montgomery context for an odd modulus. Raises InvalidModulus otherwise."""
    if not (base & 1):
        raise InvalidModulus(f"modulus must be odd, got {base}")

    shift = bit_length(base) + 1
    r = 1 << shift
    r_inv = invert_pow2(shift, base)
    # r*r_inv - 1 = k*base exactly, and k is -base^-1 mod r
    base_inv = r - ((r_inv * r - 1) // base) % r
    return ReductionContext(base=base, shift=shift, r=r, r_inv=r_inv, base_inv=base_inv)

# ---------- Conversions ----------

def reduce(n: int, ctx: ReductionContext) -> int:
    """Montgomery form of n: n*r mod base."""
    return (n << ctx.shift) % ctx.base


def inv_reduce(n: int, ctx: ReductionContext) -> int:
    """Ordinary value of the Montgomery-form n: n*r^-1 mod base."""
    return (n * ctx.r_inv) % ctx.base

# ---------- Arithmetic (operands already in Montgomery form) ----------

def mul(a: int, b: int, ctx: ReductionContext) -> int:
    """Montgomery product a*b*r^-1 mod base (REDC)."""
    if a == 0 or b == 0:
        return 0
    mask = ctx.mask
    t = a * b
    m = ((t & mask) * ctx.base_inv) & mask
    u = (t - m * ctx.base) >> ctx.shift  # exact; u in (-base, 2*base)
    if u < 0:
        u += ctx.base
    elif u >= ctx.base:
        u -= ctx.base
    return u


def sqr(n: int, ctx: ReductionContext) -> int:
    return mul(n, n, ctx)


def mont_pow(n: int, exp: int, ctx: ReductionContext) -> int:
    """
    n^exp in Montgomery form. ``n`` is Montgomery-form, ``exp`` is a plain
    non-negative exponent. Bits of exp are consumed least significant first.
    """
    if exp < 0:
        raise ValueError("exponent must be non-negative")
    result = reduce(1, ctx)
    x = n
    for i in range(bit_length(exp)):
        if (exp >> i) & 1:
            result = mul(result, x, ctx)
        x = sqr(x, ctx)
    return result
