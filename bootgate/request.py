# bootgate/request.py
"""
Request facts consumed by the resolvers.

The hosting layer owns the real request; bootgate only needs the cookie jar,
the client address, the host/path pair and (for CLI processes) argv.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from enum import Enum
from http.cookies import CookieError, SimpleCookie
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple
from urllib.parse import unquote_plus


class RuntimeMode(str, Enum):
    CLI = "cli"
    HTTP = "http"


def parse_cookie_header(header: Optional[str]) -> Dict[str, str]:
    """
    Cookie values are URL-decoded, so the URL-encoded secret key printed by
    `bootgate new-developer` is the value to set. Raw `;`, `"` and `\\` never
    survive a Cookie header intact.
    """
    if not header:
        return {}
    jar: SimpleCookie = SimpleCookie()
    try:
        jar.load(header)
    except CookieError:
        return {}
    return {k: unquote_plus(morsel.value) for k, morsel in jar.items()}


@dataclass(frozen=True)
class RequestInfo:
    mode: RuntimeMode
    argv: Tuple[str, ...] = ()
    cookies: Mapping[str, Any] = field(default_factory=dict)
    client_ip: Optional[str] = None
    host: Optional[str] = None
    path: Optional[str] = None

    @classmethod
    def from_cli(cls, argv: Optional[Sequence[str]] = None) -> "RequestInfo":
        args = tuple(sys.argv[1:] if argv is None else argv)
        return cls(mode=RuntimeMode.CLI, argv=args)

    @classmethod
    def from_wsgi(cls, environ: Mapping[str, Any]) -> "RequestInfo":
        host = environ.get("HTTP_HOST") or environ.get("SERVER_NAME") or None
        path = environ.get("SCRIPT_NAME", "") + environ.get("PATH_INFO", "")
        query = environ.get("QUERY_STRING")
        if query:
            path = f"{path}?{query}"
        return cls(
            mode=RuntimeMode.HTTP,
            cookies=parse_cookie_header(environ.get("HTTP_COOKIE")),
            client_ip=environ.get("REMOTE_ADDR") or None,
            host=host,
            path=path or "/",
        )

    def cookie(self, name: str) -> Any:
        return self.cookies.get(name)
