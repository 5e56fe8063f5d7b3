import concurrent.futures

import pytest

from montprime import InvalidInput, MillerRabinConfig, MillerRabinResult, executor


def test_future_resolves_to_result():
    fut = executor.test_primality("7919", 5)
    assert isinstance(fut, concurrent.futures.Future)
    res = fut.result(timeout=30)
    assert res == MillerRabinResult(7919, True, rounds=5)


def test_composite_through_future():
    res = executor.test_primality(91, 1, randbits=lambda k: 2).result(timeout=30)
    assert res.witness == 2


@pytest.mark.parametrize("raw,rounds", [("not a number", None), (-7, None), (97, 0)])
def test_bad_input_rejects_future(raw, rounds):
    fut = executor.test_primality(raw, rounds)
    assert fut.done()
    assert isinstance(fut.exception(), InvalidInput)
    with pytest.raises(InvalidInput):
        fut.result()


def test_explicit_executor_and_config():
    cfg = MillerRabinConfig(trial_division=True)
    with concurrent.futures.ThreadPoolExecutor(max_workers=4) as pool:
        futs = [executor.test_primality(n, config=cfg, executor=pool) for n in (91, 97, 2**127 - 1)]
        results = [f.result(timeout=30) for f in futs]
    assert results[0].divisor == 7
    assert results[1].probable_prime and results[2].probable_prime


def test_round_count_overrides_config():
    cfg = MillerRabinConfig(rounds=2, trial_division=True)
    res = executor.test_primality(97, 7, config=cfg).result(timeout=30)
    assert res.rounds == 7


def test_many_on_process_pool():
    out = dict(executor.test_many([97, "91", "abc", 4, 2**89 - 1], 10, config=MillerRabinConfig(trial_division=True), workers=2))
    assert out[97].probable_prime
    assert out[91].divisor == 7
    assert isinstance(out["abc"], InvalidInput)
    assert out[4].witness == 2 or out[4].divisor == 2
    assert out[2**89 - 1].probable_prime


def test_many_validates_rounds_first():
    with pytest.raises(InvalidInput):
        list(executor.test_many([97], 0))


def test_many_carries_whole_config_to_workers():
    n = 1009 * 1013
    low = dict(executor.test_many([n], config=MillerRabinConfig(rounds=3, trial_division=True, trial_limit=1000), workers=1))
    assert low[n].divisor is None
    assert low[n].rounds == 3
    high = dict(executor.test_many([n], config=MillerRabinConfig(trial_division=True, trial_limit=1009), workers=1))
    assert high[n].divisor == 1009
