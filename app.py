import time
from flask import Flask, request, jsonify

from prime_api import prime_bp
from montprime import InvalidInput, config, miller_rabin, parse_candidate
from montprime.numutil import bit_length

app = Flask(__name__)
app.register_blueprint(prime_bp)


def _error(msg, code=400):
    d = jsonify({"status": "error", "error": msg})
    d.status_code = code
    return d


@app.route("/api/primality", methods=["GET", "POST"])
def primality_endpoint():
    t0 = time.time()
    if request.method == "POST":
        data = request.get_json(silent=True) or request.form
    else:
        data = request.args

    try:
        n = parse_candidate(str(data.get("n", "")).strip())
    except InvalidInput:
        return _error("invalid n")
    bits = bit_length(n)
    try:
        config.check_bits(bits)
    except InvalidInput as e:
        return _error(str(e))

    try:
        cfg = config.request_config(data.get("rounds"), data.get("trial"))
    except InvalidInput:
        return _error("invalid rounds")

    res = miller_rabin(n, config=cfg)
    d = jsonify({"status": "ok", "bits": bits, **res.to_dict()})
    d.headers["X-Compute-ms"] = str(int((time.time()-t0)*1000))
    return d


@app.get("/healthz")
def healthz():
    return jsonify({"ok": True, "time": int(time.time())})


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=8080)
