from __future__ import annotations

import logging
from typing import Any, FrozenSet

_DEFAULT_FMT = "%(asctime)s %(levelname)s %(name)s | %(message)s"

# key names whose values carry proof of identity
SENSITIVE_KEYS: FrozenSet[str] = frozenset({"cookie", "secret", "secret_key", "password", "password_hash"})
REDACTED = "<redacted>"


def configure_logging(*, level: str = "INFO", fmt: str = _DEFAULT_FMT) -> None:
    """
    Called by the CLI entry point (or the host app) once. Importing bootgate
    never installs handlers; a root logger that already has handlers is left alone.
    """
    root = logging.getLogger()
    if root.handlers:
        return
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=fmt)


def format_kv(**kv: Any) -> str:
    parts = []
    for k in sorted(kv):
        if k.lower() in SENSITIVE_KEYS and kv[k] is not None:
            parts.append(f"{k}={REDACTED}")
        else:
            parts.append(f"{k}={kv[k]!r}")
    return " ".join(parts)


def log_kv(logger: logging.Logger, msg: str, *, level: int = logging.INFO, **kv: Any) -> None:
    """`msg | k1=v1 k2=v2` with keys sorted and cookie/secret/password values redacted."""
    if not logger.isEnabledFor(level):
        return
    if not kv:
        logger.log(level, msg)
        return
    logger.log(level, "%s | %s", msg, format_kv(**kv))
