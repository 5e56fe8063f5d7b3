# montprime/errors.py
from __future__ import annotations


class PrimalityError(ValueError):
    """Base class for everything montprime raises on bad input."""


class InvalidModulus(PrimalityError):
    """A Montgomery context was requested for an even modulus."""


class InvalidInput(PrimalityError):
    """A candidate (or round count / option) is not a usable non-negative integer."""


class SamplingExhausted(PrimalityError):
    """The rejection sampler gave up before drawing a base in [2, n-2]."""
