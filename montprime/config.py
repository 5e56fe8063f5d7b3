# montprime/config.py
# Tunables for the primality tester, with environment overrides.

from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Optional

from .errors import InvalidInput


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = (os.getenv(name) or "").strip()
    return int(raw) if raw else default


def _env_flag(name: str, default: bool = False) -> bool:
    raw = (os.getenv(name) or "").strip().lower()
    if not raw:
        return default
    return raw in ("1", "true", "yes", "on")


PRIME_ROUNDS           = _env_int("PRIME_ROUNDS", None)      # None -> scale with size
PRIME_MAX_SAMPLE_TRIES = _env_int("PRIME_MAX_SAMPLE_TRIES", 1000)
PRIME_TRIAL_DIVISION   = _env_flag("PRIME_TRIAL_DIVISION", False)
PRIME_TRIAL_LIMIT      = _env_int("PRIME_TRIAL_LIMIT", 10000)
PRIME_MAX_BITS         = _env_int("PRIME_MAX_BITS", 8192)    # HTTP input cap
PRIME_WORKERS          = _env_int("PRIME_WORKERS", None)     # None -> executor default
PRIME_JOB_TIMEOUT      = _env_int("PRIME_JOB_TIMEOUT", 60*60)
REDIS_URL              = os.getenv("REDIS_URL", "redis://localhost:6379/0")

# (max bits, rounds); adversarial inputs are assumed, so rounds never shrink with size
_ROUND_TIERS = [
    (64,   12),
    (512,  20),
    (2048, 32),
]
_ROUNDS_BEYOND = 40


def default_rounds(bits: int) -> int:
    """Round count used when the caller does not pick one."""
    for max_bits, rounds in _ROUND_TIERS:
        if bits <= max_bits:
            return rounds
    return _ROUNDS_BEYOND


@dataclass(frozen=True)
class MillerRabinConfig:
    """
    Options for one Miller-Rabin run.

    rounds            bases to try; None picks default_rounds(bit_length(n))
    max_sample_tries  draws allowed per base before SamplingExhausted
    trial_division    look for a small prime divisor first
    trial_limit       largest prime tried by the pre-check
    """
    rounds: Optional[int] = None
    max_sample_tries: int = 1000
    trial_division: bool = False
    trial_limit: int = 10000

    def __post_init__(self):
        if self.rounds is not None and (isinstance(self.rounds, bool)
                                        or not isinstance(self.rounds, int)
                                        or self.rounds < 1):
            raise InvalidInput(f"rounds must be a positive integer, got {self.rounds!r}")
        if self.max_sample_tries < 1:
            raise InvalidInput("max_sample_tries must be >= 1")
        if self.trial_limit < 2:
            raise InvalidInput("trial_limit must be >= 2")

    def rounds_for(self, bits: int) -> int:
        return self.rounds if self.rounds is not None else default_rounds(bits)


def default_config() -> MillerRabinConfig:
    """Config assembled from the PRIME_* environment variables."""
    return MillerRabinConfig(
        rounds=PRIME_ROUNDS,
        max_sample_tries=PRIME_MAX_SAMPLE_TRIES,
        trial_division=PRIME_TRIAL_DIVISION,
        trial_limit=PRIME_TRIAL_LIMIT,
    )

# ---------- Request values (HTTP params, job args) ----------

def parse_flag(raw) -> bool:
    """Truthy words ("1", "true", "yes", "on") or a real bool; anything else is False."""
    if isinstance(raw, bool):
        return raw
    return str(raw if raw is not None else "").strip().lower() in ("1", "true", "yes", "on")


def parse_rounds(raw) -> Optional[int]:
    """Round count from a request: None/"" -> None, else a positive integer or InvalidInput."""
    if raw is None or raw == "":
        return None
    if isinstance(raw, bool) or not isinstance(raw, (int, str)):
        raise InvalidInput(f"rounds must be a positive integer, got {raw!r}")
    s = str(raw).strip()
    if not (s.isascii() and s.isdigit()) or int(s) < 1:
        raise InvalidInput(f"rounds must be a positive integer, got {raw!r}")
    return int(s)


def check_bits(bits: int) -> None:
    """Reject candidates wider than PRIME_MAX_BITS."""
    if bits > PRIME_MAX_BITS:
        raise InvalidInput(f"n too large (max {PRIME_MAX_BITS} bits)")


def request_config(rounds=None, trial=None) -> MillerRabinConfig:
    """default_config() with a request's rounds/trial values layered on top."""
    base = default_config()
    parsed = parse_rounds(rounds)
    return MillerRabinConfig(
        rounds=parsed if parsed is not None else base.rounds,
        max_sample_tries=base.max_sample_tries,
        trial_division=parse_flag(trial) or base.trial_division,
        trial_limit=base.trial_limit,
    )
