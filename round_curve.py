#!/usr/bin/env python3
# round_curve.py: empirical false-positive rate of MR on a composite vs round count

import argparse, random
import numpy as np
from sympy import isprime

from montprime import miller_rabin

def false_positive_rates(n: int, max_rounds: int, trials: int, seed=None) -> np.ndarray:
    """rates[k-1] = fraction of `trials` runs with k rounds that called n prime."""
    rng = random.Random(seed)
    rates = np.zeros(max_rounds, dtype=float)
    for k in range(1, max_rounds + 1):
        hits = sum(miller_rabin(n, k, randbits=rng.getrandbits).probable_prime for _ in range(trials))
        rates[k-1] = hits / trials
    return rates

def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("N", type=int, nargs="?", default=65, help="odd composite to test")
    ap.add_argument("--max-rounds", type=int, default=6)
    ap.add_argument("--trials", type=int, default=2000)
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--plot", action="store_true", help="save a log-scale plot next to the table")
    args = ap.parse_args()

    if isprime(args.N):
        ap.error(f"{args.N} is prime; the curve is only meaningful for composites")

    rates = false_positive_rates(args.N, args.max_rounds, args.trials, args.seed)
    ks = np.arange(1, args.max_rounds + 1)
    bound = 4.0 ** -ks
    print(f"n={args.N} trials={args.trials}")
    for k, rate, b in zip(ks, rates, bound):
        print(f"  rounds={k:2d}  fp_rate={rate:.5f}  bound={b:.5f}")

    if args.plot:
        import matplotlib.pyplot as plt
        plt.figure(figsize=(7,5))
        # zero rates vanish on a log axis; floor them at one hit
        plt.semilogy(ks, np.maximum(rates, 1.0 / args.trials), "o-", label="observed")
        plt.semilogy(ks, bound, "--", label="4^-k bound")
        plt.title(f"Miller-Rabin false positives for n={args.N}")
        plt.xlabel("rounds"); plt.ylabel("false positive rate")
        plt.legend()
        plt.tight_layout()
        plt.savefig(f"round_curve_{args.N}.png")

if __name__ == "__main__":
    main()
