import time
from rq import get_current_job

from montprime import config, miller_rabin, parse_candidate
from montprime.numutil import bit_length

# ---- tiny helpers -----------------------------------------------------------

def _set_meta(**kv):
    job = get_current_job()
    if job is None:  # called directly, not from an rq worker
        return
    job.meta.update(kv)
    job.save_meta()

# ---- Public RQ job -----------------------------------------------------------

def primality_job(N, rounds=None, trial=False):
    """
    Miller-Rabin (Montgomery) test for one candidate, run by an rq worker.
    Returns: dict with n, probable_prime, witness, divisor, rounds, bits, elapsed_ms
    Bad or oversized input raises InvalidInput, which rq records as a failed job.
    """
    n = parse_candidate(N)
    bits = bit_length(n)
    config.check_bits(bits)
    cfg = config.request_config(rounds, trial)
    _set_meta(stage="testing", bits=bits, rounds=cfg.rounds_for(bits))

    t0 = time.time()
    res = miller_rabin(n, config=cfg)
    ms = int((time.time() - t0) * 1000)
    print("job n_bits", bits, "rounds", res.rounds, "prime", res.probable_prime, "ms", ms, flush=True)

    _set_meta(stage="done", elapsed_ms=ms, probable_prime=res.probable_prime)
    out = res.to_dict()
    out.update(bits=bits, elapsed_ms=ms)
    return out
