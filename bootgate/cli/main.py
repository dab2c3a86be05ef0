from __future__ import annotations

import argparse
import sys
from typing import Sequence

from bootgate.cli.commands import env_cmd, new_developer_cmd, resolve_cmd
from bootgate.errors import BootgateError
from bootgate.infra.logging_std import configure_logging


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="bootgate",
        description="bootgate CLI (new-developer, resolve, env).",
    )
    p.add_argument("--log-level", default="WARNING", help="Root log level (default: WARNING)")
    sub = p.add_subparsers(dest="command", required=True)

    new_developer_cmd.register(sub)
    resolve_cmd.register(sub)
    env_cmd.register(sub)

    return p


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    configure_logging(level=args.log_level)

    fn = getattr(args, "_fn", None)
    if fn is None:
        parser.print_help()
        return 2

    try:
        rc = fn(args)
        return 0 if rc is None else int(rc)

    except KeyboardInterrupt:
        print("bootgate: CANCELLED (KeyboardInterrupt)", file=sys.stderr, flush=True)
        return 130

    except BootgateError as e:
        print(f"bootgate: ERROR - {type(e).__name__}: {e}", file=sys.stderr, flush=True)
        return 2
