import dataclasses
import random

import pytest

from montprime import InvalidModulus
from montprime.montgomery import (
    inv_reduce, invert_pow2, mont_pow, mul, reduce, reduction_context_for, sqr,
)

SMALL_MODULI = [3, 5, 7, 9, 15, 21, 91, 97, 255, 561]
BIG_MODULI = [65537, 2**61 - 1, 2**127 - 1, (2**89 - 1) * (2**107 - 1), 10**50 + 151]


@pytest.mark.parametrize("base", SMALL_MODULI + BIG_MODULI)
def test_context_invariants(base):
    ctx = reduction_context_for(base)
    assert ctx.base == base
    assert ctx.r == 1 << ctx.shift
    assert ctx.shift == base.bit_length() + 1
    assert ctx.r > base
    assert (ctx.r_inv * ctx.r) % base == 1
    assert (base * ctx.base_inv) % ctx.r == 1
    assert 0 <= ctx.base_inv < ctx.r


@pytest.mark.parametrize("base", [0, 2, 4, 100, 2**64])
def test_even_modulus_rejected(base):
    with pytest.raises(InvalidModulus):
        reduction_context_for(base)


def test_context_is_frozen():
    ctx = reduction_context_for(97)
    with pytest.raises(dataclasses.FrozenInstanceError):
        ctx.base = 99


def test_invert_pow2():
    for base in SMALL_MODULI + BIG_MODULI:
        for exp in (0, 1, 5, 64):
            assert (invert_pow2(exp, base) * pow(2, exp, base)) % base == 1 % base


@pytest.mark.parametrize("base", SMALL_MODULI)
def test_round_trip_exhaustive(base):
    ctx = reduction_context_for(base)
    for x in range(base):
        assert inv_reduce(reduce(x, ctx), ctx) == x


@pytest.mark.parametrize("base", SMALL_MODULI)
def test_mul_homomorphism_exhaustive(base):
    ctx = reduction_context_for(base)
    for a in range(base):
        for b in range(0, base, max(1, base // 17)):
            p = mul(reduce(a, ctx), reduce(b, ctx), ctx)
            assert 0 <= p < base
            assert inv_reduce(p, ctx) == (a * b) % base


@pytest.mark.parametrize("base", BIG_MODULI)
def test_mul_and_sqr_random(base):
    rng = random.Random(base)
    ctx = reduction_context_for(base)
    for _ in range(200):
        a, b = rng.randrange(base), rng.randrange(base)
        assert inv_reduce(mul(reduce(a, ctx), reduce(b, ctx), ctx), ctx) == (a * b) % base
        assert inv_reduce(sqr(reduce(a, ctx), ctx), ctx) == (a * a) % base


def test_mul_by_zero_short_circuits():
    ctx = reduction_context_for(97)
    assert mul(0, reduce(5, ctx), ctx) == 0
    assert mul(reduce(5, ctx), 0, ctx) == 0


@pytest.mark.parametrize("base", SMALL_MODULI + BIG_MODULI)
def test_pow_matches_builtin(base):
    rng = random.Random(base ^ 0x5EED)
    ctx = reduction_context_for(base)
    for _ in range(40):
        a = rng.randrange(base)
        e = rng.choice([0, 1, 2, 3, rng.randrange(2**16), rng.randrange(2**200)])
        assert inv_reduce(mont_pow(reduce(a, ctx), e, ctx), ctx) == pow(a, e, base)


def test_pow_zero_exponent_is_montgomery_one():
    ctx = reduction_context_for(91)
    for a in (0, 1, 45, 90):
        assert mont_pow(reduce(a, ctx), 0, ctx) == reduce(1, ctx)


def test_pow_rejects_negative_exponent():
    ctx = reduction_context_for(91)
    with pytest.raises(ValueError):
        mont_pow(reduce(2, ctx), -1, ctx)
