from .config import MillerRabinConfig, default_config, default_rounds
from .errors import InvalidInput, InvalidModulus, PrimalityError, SamplingExhausted
from .executor import test_primality, test_many
from .miller_rabin import MillerRabinResult, is_probable_prime, miller_rabin, parse_candidate
from .montgomery import ReductionContext, reduction_context_for
__all__ = [
    "MillerRabinConfig", "default_config", "default_rounds",
    "InvalidInput", "InvalidModulus", "PrimalityError", "SamplingExhausted",
    "test_primality", "test_many",
    "MillerRabinResult", "is_probable_prime", "miller_rabin", "parse_candidate",
    "ReductionContext", "reduction_context_for",
]
