#!/usr/bin/env python3
import csv, os, random
import requests
from sympy import isprime, randprime

BASE = (os.getenv("MONTPRIME_URL", "http://127.0.0.1:8080") or "http://127.0.0.1:8080").rstrip("/")
TIMEOUT = float(os.getenv("READ_TIMEOUT", "12"))

session = requests.Session()
session.headers.update({"User-Agent": "montprime-quick-suite"})

def primality(n, **params):
    r = session.get(f"{BASE}/api/primality", params={"n": str(n), **params}, timeout=TIMEOUT)
    r.raise_for_status()
    return r.json()

def rnd_k_digit(k):
    return random.randrange(10**(k-1), 10**k)

def cases():
    # Hand-picked sanity
    yield 97, True
    yield 91, False
    yield 561, False          # Carmichael
    yield 2**521 - 1, True    # Mersenne prime
    # A grab-bag across digit ranges
    for k in [2, 4, 8, 16, 32, 64]:
        for _ in range(5):
            p = int(randprime(10**(k-1), 10**k))
            yield p, True
            n = rnd_k_digit(k)
            yield n, isprime(n)
    # semiprimes are the hard composites for a probable-prime test
    for k in [10, 20, 40]:
        yield int(randprime(10**(k-1), 10**k)) * int(randprime(10**(k-1), 10**k)), False

def main():
    fails = []
    total = ok = 0
    for n, expect in cases():
        total += 1
        try:
            res = primality(n)
        except requests.RequestException as e:
            fails.append({"n": n, "expect": expect, "reason": f"HTTP: {e}"})
            continue
        got = res.get("probable_prime")
        if got != expect:
            fails.append({"n": n, "expect": expect, "reason": f"got probable_prime={got}"})
        elif not got and res.get("witness") is None and n > 3:
            fails.append({"n": n, "expect": expect, "reason": "composite without witness"})
        else:
            ok += 1

    print("\n=== QUICK SUITE SUMMARY ===")
    print(f"Total: {total} | ok: {ok} | fails: {len(fails)}")
    if fails:
        fn = "quick_suite_failures.csv"
        with open(fn, "w", newline="") as f:
            w = csv.DictWriter(f, fieldnames=["n", "expect", "reason"])
            w.writeheader()
            for row in fails:
                w.writerow(row)
        print(f"Wrote failure details to {fn}")
    return 1 if fails else 0

if __name__ == "__main__":
    raise SystemExit(main())
