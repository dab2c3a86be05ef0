from __future__ import annotations

import argparse
import sys


def register(sub: argparse._SubParsersAction) -> None:
    p = sub.add_parser("new-developer", help="Issue a public/secret key pair for a developer.")
    p.add_argument("slug", help="Developer identifier, conventionally [0-9A-Za-z./]+ (no '@').")
    p.add_argument("--length", type=int, default=32, help="Generated password length (default: 32).")
    p.add_argument("--rounds", type=int, default=12, help="bcrypt cost factor (default: 12).")
    p.set_defaults(_fn=_run)


def _run(args: argparse.Namespace) -> int:
    from bootgate.security.issuance import new_developer

    if not args.slug or "@" in args.slug:
        print("bootgate: ERROR - slug must be non-empty and may not contain '@'", file=sys.stderr, flush=True)
        return 2
    if not 1 <= args.length <= 72 or not 4 <= args.rounds <= 31:
        print("bootgate: ERROR - --length must be 1..72 and --rounds 4..31", file=sys.stderr, flush=True)
        return 2

    keys = new_developer(args.slug, length=args.length, rounds=args.rounds)
    print("Public key (add to bootstrap settings):")
    print(f"  {keys.public_key}")
    print("Secret key (give to the developer):")
    print(f"  {keys.secret_key}")
    print("Secret key (URL encoded, set as the debug cookie value):")
    print(f"  {keys.secret_key_urlencoded}", flush=True)
    return 0
