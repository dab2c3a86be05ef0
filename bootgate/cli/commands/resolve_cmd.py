from __future__ import annotations

import argparse
import json


def register(sub: argparse._SubParsersAction) -> None:
    p = sub.add_parser(
        "resolve",
        help="Run the bootstrap sequence for a simulated request and print the outcome as JSON.",
    )
    p.add_argument("--settings", default=None, help="Settings YAML (default: $BOOTGATE_SETTINGS or ./bootstrap.yaml).")
    p.add_argument("--host", default=None, help="Request host; omit to resolve as a CLI process.")
    p.add_argument("--path", default="/", help="Request path (query string allowed).")
    p.add_argument("--ip", default=None, help="Client IP address.")
    p.add_argument("--cookie", default=None, help="Debug cookie value (slug@password).")
    p.add_argument("--env", dest="env", default=None, help="Environment for CLI-mode resolution.")
    p.set_defaults(_fn=_run)


def _run(args: argparse.Namespace) -> int:
    from bootgate.configurator import Configurator
    from bootgate.environment import describe_rules
    from bootgate.infra.settings import load_settings
    from bootgate.request import RequestInfo, RuntimeMode

    settings = load_settings(args.settings)
    cfg = Configurator.from_settings(settings)

    if args.host:
        cookies = {cfg.cookie_name: args.cookie} if args.cookie is not None else {}
        request = RequestInfo(
            mode=RuntimeMode.HTTP,
            cookies=cookies,
            client_ip=args.ip,
            host=args.host,
            path=args.path,
        )
    else:
        request = RequestInfo.from_cli(["--env", args.env] if args.env else [])

    result = cfg.bootstrap(request)
    print(json.dumps({
        "mode": request.mode.value,
        "debug_mode": result.debug_mode,
        "environment": result.environment,
        "parameters": dict(result.parameters),
        "fragments": [str(p) for p in result.fragments],
        "rules": describe_rules(cfg.environments.rules),
        "config": result.config,
    }, ensure_ascii=False, indent=2, default=str), flush=True)
    return 0
