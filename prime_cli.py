import sys, argparse, random
from montprime import InvalidInput, MillerRabinConfig, default_config, miller_rabin, test_many

def render(n, res) -> str:
    if res.probable_prime:
        return f"{n}\tprime"
    if res.divisor is not None:
        return f"{n}\tcomposite\tdivisor={res.divisor}"
    if res.witness is not None:
        return f"{n}\tcomposite\twitness={res.witness}"
    return f"{n}\tcomposite"

def process(raw, cfg, randbits) -> int:
    try:
        res = miller_rabin(raw, config=cfg, randbits=randbits)
    except InvalidInput as e:
        print(f"# skip: {raw} ({e})", file=sys.stderr); return 1
    print(render(res.n, res), flush=True)
    return 0

def inputs(args):
    if args.N:
        yield from args.N
        return
    for line in sys.stdin:
        line = line.strip()
        if line: yield line

def main(argv=None):
    ap = argparse.ArgumentParser(description="Miller-Rabin (Montgomery) probable-prime test")
    ap.add_argument("--rounds", type=int, default=None, help="bases per candidate (default scales with size)")
    ap.add_argument("--trial", action="store_true", help="try small prime divisors first")
    ap.add_argument("--seed", type=int, default=None, help="seed the base sampler (reproducible runs)")
    ap.add_argument("--workers", type=int, default=0, help="test candidates on N processes")
    ap.add_argument("N", nargs="*", help="integers to test (else read from stdin)")
    args = ap.parse_args(argv)

    base = default_config()
    try:
        cfg = MillerRabinConfig(
            rounds=args.rounds if args.rounds is not None else base.rounds,
            max_sample_tries=base.max_sample_tries,
            trial_division=args.trial or base.trial_division,
            trial_limit=base.trial_limit,
        )
    except InvalidInput as e:
        ap.error(str(e))

    rc = 0
    if args.workers > 0:
        if args.seed is not None:
            print("# note: --seed is ignored with --workers", file=sys.stderr)
        for n, res in test_many(inputs(args), config=cfg, workers=args.workers):
            if isinstance(res, InvalidInput):
                print(f"# skip: {n} ({res})", file=sys.stderr); rc |= 1; continue
            print(render(n, res), flush=True)
        return rc

    randbits = random.Random(args.seed).getrandbits if args.seed is not None else None
    for raw in inputs(args):
        rc |= process(raw, cfg, randbits)
    return rc

if __name__ == "__main__":
    raise SystemExit(main())
