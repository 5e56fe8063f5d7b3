import pytest

from montprime import InvalidInput, config
from prime_worker import primality_job


def test_job_outside_rq():
    out = primality_job("97", rounds=4)
    assert out["n"] == "97"
    assert out["probable_prime"] is True
    assert out["rounds"] == 4
    assert out["bits"] == 7
    assert out["elapsed_ms"] >= 0


def test_job_trial_division():
    out = primality_job(91, trial=True)
    assert out["probable_prime"] is False
    assert out["divisor"] == "7"


def test_job_bad_input():
    with pytest.raises(InvalidInput):
        primality_job("12x")


def test_job_enforces_size_cap(monkeypatch):
    monkeypatch.setattr(config, "PRIME_MAX_BITS", 64)
    assert primality_job(str(2**64 - 59))["probable_prime"] is True
    with pytest.raises(InvalidInput):
        primality_job(str(2**127 - 1))


def test_job_trial_string_false():
    out = primality_job("91", rounds="20", trial="false")
    assert out["divisor"] is None
    assert out["witness"] is not None
