"""
Write a file of random secrets (one per line) for batch runs.

Usage:
    python -m script.generate_secrets --out packages/datasets/data/secrets.txt \
        --count 500 --min-len 1 --max-len 18 --seed 123
"""

import argparse

from packages.datasets import random_secrets, write_lines, validate_secrets, pretty_summary
from packages.oracle import MAX_LENGTH


def main():
    ap = argparse.ArgumentParser(description="Generate random secrets.")
    ap.add_argument("--out", required=True, help="output .txt file")
    ap.add_argument("--count", type=int, default=500)
    ap.add_argument("--min-len", type=int, default=1)
    ap.add_argument("--max-len", type=int, default=MAX_LENGTH)
    ap.add_argument("--seed", type=int, default=123)
    ap.add_argument("--unique", action="store_true", help="drop repeated secrets (keeps first)")
    args = ap.parse_args()

    secrets = random_secrets(args.count, min_len=args.min_len, max_len=args.max_len, seed=args.seed)
    if args.unique:
        secrets = list(dict.fromkeys(secrets))

    path = write_lines(secrets, args.out)
    print(pretty_summary(validate_secrets(path)))
    print(f"Wrote: {path}")


if __name__ == "__main__":
    main()
