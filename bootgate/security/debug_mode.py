# bootgate/security/debug_mode.py
"""
Debug-mode decision procedure.

Order is fixed and short-circuits:

1. explicit bool wins over everything (including a valid cookie)
2. CLI processes have no cookies -> default flag (or UnsupportedModeError)
3. no developers registered -> default flag
4. no cookie / cookie not a str -> off
5. cookie without '@' -> off (never raises)
6. unknown slug -> off
7. IP allow-list, unless the developer is IP-independent
8. bcrypt verification

Developer convenience, not a production auth boundary: timing may reveal
whether a slug exists.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

import deal

from bootgate.errors import MalformedKeyError, UnsupportedModeError
from bootgate.infra.logging_std import log_kv
from bootgate.request import RuntimeMode
from bootgate.security.credentials import CredentialStore
from bootgate.security.ipmatch import IpAllowList
from bootgate.security.keys import split_key, verify_password

logger = logging.getLogger(__name__)

AUTO = "auto"
DEFAULT_COOKIE_NAME = "bootgate-debug"

Explicit = Union[bool, str, None]


class CliPolicy(str, Enum):
    DEFAULT = "default"
    RAISE = "raise"


@dataclass(frozen=True, slots=True)
class DebugDecision:
    enabled: bool
    reason: str


def _is_explicit(value: Explicit) -> bool:
    return isinstance(value, bool)


class DebugModeResolver:
    def __init__(
        self,
        credentials: CredentialStore,
        allow_list: Optional[IpAllowList] = None,
        *,
        default: bool = False,
        cli_policy: CliPolicy = CliPolicy.DEFAULT,
    ) -> None:
        self.credentials = credentials
        self.allow_list = allow_list if allow_list is not None else IpAllowList()
        self.default = bool(default)
        self.cli_policy = CliPolicy(cli_policy)

    @deal.pre(
        lambda self, explicit=AUTO, *, cookie=None, mode=RuntimeMode.HTTP, client_ip=None: (
            explicit is None or isinstance(explicit, bool) or explicit == AUTO
        ),
        message="explicit must be True, False or 'auto'",
    )
    @deal.post(lambda result: isinstance(result, DebugDecision), message="returns DebugDecision")
    @deal.raises(UnsupportedModeError, deal.PreContractError)
    def decide(
        self,
        explicit: Explicit = AUTO,
        *,
        cookie: Any = None,
        mode: RuntimeMode = RuntimeMode.HTTP,
        client_ip: Optional[str] = None,
    ) -> DebugDecision:
        decision = self._decide(explicit, cookie, RuntimeMode(mode), client_ip)
        log_kv(logger, "debug mode resolved", level=logging.DEBUG, enabled=decision.enabled, reason=decision.reason, cookie=cookie)
        return decision

    def resolve(
        self,
        explicit: Explicit = AUTO,
        *,
        cookie: Any = None,
        mode: RuntimeMode = RuntimeMode.HTTP,
        client_ip: Optional[str] = None,
    ) -> bool:
        return self.decide(explicit, cookie=cookie, mode=mode, client_ip=client_ip).enabled

    def _decide(
        self,
        explicit: Explicit,
        cookie: Any,
        mode: RuntimeMode,
        client_ip: Optional[str],
    ) -> DebugDecision:
        if _is_explicit(explicit):
            return DebugDecision(bool(explicit), "EXPLICIT")

        if mode is RuntimeMode.CLI:
            if self.cli_policy is CliPolicy.RAISE:
                raise UnsupportedModeError("debug cookie proof is HTTP-only; pass an explicit debug value in CLI mode")
            return DebugDecision(self.default, "CLI_DEFAULT")

        if len(self.credentials) == 0:
            return DebugDecision(self.default, "NO_DEVELOPERS")

        if cookie is None or not isinstance(cookie, str):
            return DebugDecision(False, "NO_COOKIE")

        try:
            slug, password = split_key(cookie)
        except MalformedKeyError:
            return DebugDecision(False, "MALFORMED_COOKIE")

        developer = self.credentials.lookup(slug)
        if developer is None:
            return DebugDecision(False, "UNKNOWN_DEVELOPER")

        if not developer.ip_independent and not self.allow_list.allows(client_ip):
            return DebugDecision(False, "IP_NOT_ALLOWED")

        if verify_password(password, developer.password_hash):
            return DebugDecision(True, "VERIFIED")
        return DebugDecision(False, "PASSWORD_MISMATCH")
