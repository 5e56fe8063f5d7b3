import time
from flask import Blueprint, request, jsonify
from redis import Redis
from rq import Queue
from rq.job import Job
from rq.exceptions import NoSuchJobError

from montprime import InvalidInput, config, parse_candidate
from montprime.numutil import bit_length

prime_bp = Blueprint("prime_bp", __name__)

# Redis / RQ
redis_conn = Redis.from_url(config.REDIS_URL)
prime_q = Queue("prime", connection=redis_conn, default_timeout=config.PRIME_JOB_TIMEOUT)

# ------------------ helpers ------------------
def _limits() -> dict:
    cfg = config.default_config()
    return {
        "max_bits": config.PRIME_MAX_BITS,
        "rounds": cfg.rounds if cfg.rounds is not None else "auto",
        "trial_division": cfg.trial_division,
        "trial_limit": cfg.trial_limit,
    }

def _job_dict(job: Job) -> dict:
    meta = job.meta or {}
    status = job.get_status()
    d = {
        "job_id": job.id,
        "status": status,
        "bits": meta.get("bits"),
        "rounds": meta.get("rounds"),
        "stage": meta.get("stage", "queued"),
        "elapsed_ms": meta.get("elapsed_ms"),
        "enqueued_at": job.enqueued_at.isoformat() if job.enqueued_at else None,
        "wait_sec": (max(0.0, job.started_at.timestamp() - job.enqueued_at.timestamp())
                     if job.started_at and job.enqueued_at else None),
    }
    if status == "finished":
        d["result"] = job.return_value()
    elif status == "failed":
        # last line of the traceback is the InvalidInput / SamplingExhausted message
        lines = (job.exc_info or "").strip().splitlines()
        d["error"] = lines[-1] if lines else None
    return d

# ------------------ API ------------------
@prime_bp.get("/api/health")
def health():
    ok, msg = True, "ok"
    try:
        redis_conn.ping()
    except Exception as e:
        ok, msg = False, f"redis error: {e.__class__.__name__}"
    return jsonify({"ok": ok, "msg": msg, "queue": {"name": prime_q.name, "size": prime_q.count},
                    "limits": _limits(), "time": int(time.time())})

@prime_bp.post("/api/prime/submit")
def prime_submit():
    data = request.get_json(silent=True) or {}
    try:
        n = parse_candidate(str(data.get("N", "")).strip())
    except InvalidInput:
        return jsonify({"error": "Provide N as a non-negative integer string."}), 400
    bits = bit_length(n)
    try:
        config.check_bits(bits)
        cfg = config.request_config(data.get("rounds"), data.get("trial"))
    except InvalidInput as e:
        return jsonify({"error": str(e)}), 400

    rounds = cfg.rounds_for(bits)
    job = prime_q.enqueue("prime_worker.primality_job", str(data["N"]).strip(), rounds, cfg.trial_division,
                          meta={"bits": bits, "rounds": rounds, "stage": "queued", "submitted": time.time()})
    ids = prime_q.get_job_ids()
    pos = ids.index(job.id) + 1 if job.id in ids else 1
    return jsonify({"job_id": job.id, "status": job.get_status(), "bits": bits, "rounds": rounds,
                    "trial_division": cfg.trial_division, "queue_position": pos})

@prime_bp.get("/api/job/<job_id>")
def job_status(job_id):
    try:
        job = Job.fetch(job_id, connection=redis_conn)
    except NoSuchJobError:
        return jsonify({"error": "unknown job"}), 404
    return jsonify(_job_dict(job))

@prime_bp.post("/api/job/<job_id>/abort")
def job_abort(job_id):
    try:
        job = Job.fetch(job_id, connection=redis_conn)
    except NoSuchJobError:
        return jsonify({"error": "unknown job"}), 404
    if job.get_status() == "started":
        # a running test cannot be interrupted; only queued jobs are cancellable
        return jsonify({"error": "job already running", "job_id": job_id}), 409
    job.cancel()
    return jsonify({"ok": True, "job_id": job_id, "status": job.get_status()})
