# montprime/executor.py
# Future-returning entry points around the synchronous tester.

from __future__ import annotations
import concurrent.futures
import os
import threading
from dataclasses import replace
from typing import Iterable, Iterator, Optional, Tuple, Union

from . import config as _cfg
from .config import MillerRabinConfig
from .errors import InvalidInput
from .miller_rabin import MillerRabinResult, RandBits, miller_rabin, parse_candidate

_POOL: Optional[concurrent.futures.ThreadPoolExecutor] = None
_POOL_LOCK = threading.Lock()


def _shared_pool() -> concurrent.futures.ThreadPoolExecutor:
    global _POOL
    with _POOL_LOCK:
        if _POOL is None:
            _POOL = concurrent.futures.ThreadPoolExecutor(
                max_workers=_cfg.PRIME_WORKERS, thread_name_prefix="montprime")
        return _POOL


def _rejected(exc: BaseException) -> concurrent.futures.Future:
    f: concurrent.futures.Future = concurrent.futures.Future()
    f.set_exception(exc)
    return f


def test_primality(n, num_rounds: Optional[int] = None, *,
                   config: Optional[MillerRabinConfig] = None,
                   randbits: Optional[RandBits] = None,
                   executor: Optional[concurrent.futures.Executor] = None,
                   ) -> concurrent.futures.Future:
    """
    Start a Miller-Rabin test and return a Future for its MillerRabinResult.

    Input and option errors never raise here: they come back as a future
    whose exception() is InvalidInput. The computation itself cannot be
    cancelled once a worker has picked it up.
    """
    try:
        n = parse_candidate(n)
        if num_rounds is not None:
            config = replace(config or MillerRabinConfig(), rounds=num_rounds)
    except InvalidInput as e:
        return _rejected(e)
    pool = executor or _shared_pool()
    return pool.submit(miller_rabin, n, config=config, randbits=randbits)

test_primality.__test__ = False  # not a pytest test despite the name


def _run_one(n: int, config: MillerRabinConfig) -> MillerRabinResult:
    # runs in a worker process with its own OS-backed bit source
    return miller_rabin(n, config=config)


def test_many(candidates: Iterable, num_rounds: Optional[int] = None, *,
              config: Optional[MillerRabinConfig] = None,
              workers: Optional[int] = None,
              ) -> Iterator[Tuple[object, Union[MillerRabinResult, InvalidInput]]]:
    """
    Test many candidates on a process pool, yielding (n, result) as each finishes.
    Every option in ``config`` (trial limit, sample tries) reaches the workers.
    Unparsable candidates are yielded as (raw, InvalidInput) instead of stopping the batch.
    """
    config = config or MillerRabinConfig()
    if num_rounds is not None:
        config = replace(config, rounds=num_rounds)  # validate before spawning anything

    parsed = []
    for raw in candidates:
        try:
            parsed.append(parse_candidate(raw))
        except InvalidInput as e:
            yield raw, e

    if not parsed:
        return
    num_workers = min(len(parsed), workers or os.cpu_count() or 1)
    with concurrent.futures.ProcessPoolExecutor(max_workers=num_workers) as pool:
        futures = {pool.submit(_run_one, n, config): n for n in parsed}
        for future in concurrent.futures.as_completed(futures):
            yield futures[future], future.result()

test_many.__test__ = False
