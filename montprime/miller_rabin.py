# montprime/miller_rabin.py
# Miller-Rabin probable-prime test running on the Montgomery engine.
# - candidate parsing (int / decimal str / bytes / gmpy2.mpz)
# - bounded rejection sampling of bases from a pluggable bit source
# - the round loop, short-circuiting on the first witness

from __future__ import annotations
import random
from dataclasses import dataclass, asdict, replace
from typing import Callable, Optional

import gmpy2

from .config import MillerRabinConfig
from .errors import InvalidInput, SamplingExhausted
from .montgomery import reduction_context_for, reduce, mont_pow, sqr
from .numutil import bit_length, two_multiplicity
from .trial import small_divisor

RandBits = Callable[[int], int]

_SYSTEM_RANDOM = random.SystemRandom()

# ---------- Input ----------

def parse_candidate(value) -> int:
    """Normalize a candidate to a non-negative int, or raise InvalidInput."""
    if isinstance(value, bool):
        raise InvalidInput("booleans are not candidates")
    if isinstance(value, (bytes, bytearray)):
        try:
            value = value.decode("ascii")
        except UnicodeDecodeError:
            raise InvalidInput("candidate bytes are not ASCII digits") from None
    if isinstance(value, str):
        s = value.strip()
        if not (s.isascii() and s.isdigit()):
            raise InvalidInput(f"not a non-negative decimal integer: {value[:40]!r}")
        # mpz parses without the int() digit-count limit
        return int(gmpy2.mpz(s))
    if isinstance(value, int):
        n = value
    elif isinstance(value, gmpy2.mpz):
        n = int(value)
    else:
        raise InvalidInput(f"unsupported candidate type: {type(value).__name__}")
    if n < 0:
        raise InvalidInput(f"candidate must be non-negative, got {n}")
    return n

# ---------- Result ----------

@dataclass(frozen=True)
class MillerRabinResult:
    n: int
    probable_prime: bool
    witness: Optional[int] = None
    divisor: Optional[int] = None
    rounds: int = 0

    def to_dict(self) -> dict:
        """JSON-friendly view; big ints go out as decimal strings."""
        d = asdict(self)
        for k in ("n", "witness", "divisor"):
            if d[k] is not None:
                d[k] = str(gmpy2.mpz(d[k]))
        return d

# ---------- Bases ----------

def sample_base(n: int, randbits: RandBits, max_tries: int = 1000) -> int:
    """Uniform base in [2, n-2]: draw bit_length(n) random bits until one lands in range."""
    nbits = bit_length(n)
    for _ in range(max_tries):
        a = randbits(nbits)
        if 2 <= a <= n - 2:
            return a
    raise SamplingExhausted(f"no base in [2, {n-2}] after {max_tries} draws")

# ---------- Test ----------

def miller_rabin(n, num_rounds: Optional[int] = None, *,
                 config: Optional[MillerRabinConfig] = None,
                 randbits: Optional[RandBits] = None) -> MillerRabinResult:
    """
    Run the Miller-Rabin test on ``n`` and return the verdict.

    ``num_rounds`` overrides ``config.rounds``; with neither set the count
    scales with the size of n. ``randbits(k)`` must return k random bits and
    defaults to the OS generator. Raises InvalidInput for unusable n or
    options, SamplingExhausted if the bit source never yields a valid base.
    """
    n = parse_candidate(n)
    config = config or MillerRabinConfig()
    if num_rounds is not None:
        config = replace(config, rounds=num_rounds)
    randbits = randbits or _SYSTEM_RANDOM.getrandbits
    rounds = config.rounds_for(bit_length(n))

    # small special cases
    if n < 2:
        return MillerRabinResult(n, False, rounds=rounds)
    if n < 4:
        return MillerRabinResult(n, True, rounds=rounds)
    if not (n & 1):
        # r = 0 and 2^(n-1) mod n is even, so 2 is a strong witness
        return MillerRabinResult(n, False, witness=2, rounds=rounds)

    if config.trial_division:
        p = small_divisor(n, config.trial_limit)
        if p is not None:
            return MillerRabinResult(n, False, divisor=p, rounds=rounds)

    n_sub = n - 1
    r = two_multiplicity(n_sub)  # n-1 = d * 2^r
    d = n_sub >> r

    ctx = reduction_context_for(n)
    one = reduce(1, ctx)
    minus_one = reduce(n_sub, ctx)

    for _ in range(rounds):
        base = sample_base(n, randbits, config.max_sample_tries)

        x = mont_pow(reduce(base, ctx), d, ctx)
        if x == one or x == minus_one:
            continue  # base^d = +/-1 (mod n)

        for _j in range(r):
            x = sqr(x, ctx)
            if x == one:
                # a nontrivial square root of 1 turned up
                return MillerRabinResult(n, False, witness=base, rounds=rounds)
            if x == minus_one:
                break
        else:
            return MillerRabinResult(n, False, witness=base, rounds=rounds)

    return MillerRabinResult(n, True, rounds=rounds)


def is_probable_prime(n, num_rounds: Optional[int] = None) -> bool:
    return miller_rabin(n, num_rounds).probable_prime
