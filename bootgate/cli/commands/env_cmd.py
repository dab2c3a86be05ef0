from __future__ import annotations

import argparse
import json
import sys


def register(sub: argparse._SubParsersAction) -> None:
    p = sub.add_parser("env", help="Load a dotenv file and print the type-coerced values as JSON.")
    p.add_argument("path", help="Path to the dotenv file.")
    p.set_defaults(_fn=_run)


def _run(args: argparse.Namespace) -> int:
    from pathlib import Path

    from bootgate.infra.envfile import load_env

    if not Path(args.path).exists():
        print(f"bootgate: ERROR - env file not found: {args.path}", file=sys.stderr, flush=True)
        return 2
    values = load_env(args.path)
    print(json.dumps(values, ensure_ascii=False, indent=2, sort_keys=True), flush=True)
    return 0
