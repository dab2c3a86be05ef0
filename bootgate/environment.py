# bootgate/environment.py
"""
Environment resolution.

explicit value > CLI `--env` flag > ordered URL rules (first match wins).

Rules are a tagged variant:
  LiteralRule  -> path-segment-aware prefix match on host+path
  RegexRule    -> re.search on host+path (or host only)

Order is the caller's; ties are resolved by list order, never by specificity.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Pattern, Sequence, Tuple, Union

import deal

from bootgate.errors import MissingEnvironmentError, NoEnvironmentMatchError, SettingsError
from bootgate.infra.logging_std import log_kv
from bootgate.request import RequestInfo, RuntimeMode

logger = logging.getLogger(__name__)

ENV_FLAG = "--env"
MATCH_URL = "url"
MATCH_HOST = "host"


@dataclass(frozen=True, slots=True)
class LiteralRule:
    prefix: str
    target: str

    def __post_init__(self) -> None:
        # request hosts are compared lower-cased; the path part stays case-sensitive
        host, sep, rest = self.prefix.partition("/")
        object.__setattr__(self, "prefix", host.lower() + sep + rest)

    def matches(self, request_url: str) -> bool:
        return (request_url + "/").startswith(self.prefix.rstrip("/") + "/")


@dataclass(frozen=True)
class RegexRule:
    pattern: str
    target: str
    _compiled: Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_compiled", re.compile(self.pattern))

    def matches(self, subject: str) -> bool:
        return self._compiled.search(subject) is not None


EnvironmentRule = Union[LiteralRule, RegexRule]


def rule_from_pattern(pattern: str, target: str) -> EnvironmentRule:
    """Config-text form: a leading '^' marks a regex, anything else is a literal prefix."""
    if pattern.startswith("^"):
        try:
            return RegexRule(pattern, target)
        except re.error as exc:
            raise SettingsError(f"invalid environment regex {pattern!r}: {exc}") from exc
    return LiteralRule(pattern, target)


def find_env_flag(args: Sequence[str], flag: str = ENV_FLAG) -> Optional[str]:
    """
    `--env prod` or `--env=prod`. First occurrence wins; a trailing `--env`
    with no value counts as absent.
    """
    prefix = flag + "="
    it = iter(args)
    for arg in it:
        if arg == flag:
            return next(it, None)
        if arg.startswith(prefix):
            return arg[len(prefix):]
    return None


def strip_port(host: str) -> str:
    host = host.strip()
    if host.startswith("["):
        # [::1]:8080 -> [::1]
        end = host.find("]")
        return host[: end + 1] if end != -1 else host
    if host.count(":") == 1:
        return host.split(":", 1)[0]
    return host


def build_request_url(host: Optional[str], path: Optional[str]) -> Tuple[str, str]:
    """Returns (request_url, bare_host): port and query string stripped, host lower-cased."""
    bare_host = strip_port(host or "").lower()
    bare_path = (path or "").split("?", 1)[0]
    if bare_path and not bare_path.startswith("/"):
        bare_path = "/" + bare_path
    return bare_host + bare_path, bare_host


class EnvironmentResolver:
    def __init__(
        self,
        rules: Iterable[EnvironmentRule] = (),
        *,
        default: Optional[str] = None,
        env_required: bool = True,
        match_on: str = MATCH_URL,
    ) -> None:
        if match_on not in (MATCH_URL, MATCH_HOST):
            raise ValueError(f"match_on must be {MATCH_URL!r} or {MATCH_HOST!r}, got {match_on!r}")
        self.rules: Tuple[EnvironmentRule, ...] = tuple(rules)
        self.default = default
        self.env_required = env_required
        self.match_on = match_on

    @classmethod
    def from_patterns(cls, patterns: Iterable[Tuple[str, str]], **kwargs) -> "EnvironmentResolver":
        return cls([rule_from_pattern(p, t) for p, t in patterns], **kwargs)

    @deal.post(lambda result: isinstance(result, str) and result != "", message="environment name is a non-empty str")
    @deal.raises(MissingEnvironmentError, NoEnvironmentMatchError)
    def resolve(
        self,
        *,
        explicit: Optional[str] = None,
        mode: RuntimeMode = RuntimeMode.HTTP,
        cli_args: Sequence[str] = (),
        host: Optional[str] = None,
        path: Optional[str] = None,
    ) -> str:
        if explicit:
            return explicit

        if RuntimeMode(mode) is RuntimeMode.CLI:
            return self._resolve_cli(cli_args)
        return self._resolve_http(host, path)

    def resolve_request(self, request: RequestInfo, explicit: Optional[str] = None) -> str:
        return self.resolve(
            explicit=explicit,
            mode=request.mode,
            cli_args=request.argv,
            host=request.host,
            path=request.path,
        )

    def _resolve_cli(self, cli_args: Sequence[str]) -> str:
        value = find_env_flag(cli_args)
        if value:
            return value
        if self.env_required or not self.default:
            raise MissingEnvironmentError(f"CLI run needs {ENV_FLAG} <name> or {ENV_FLAG}=<name>")
        return self.default

    def match(self, host: Optional[str], path: Optional[str]) -> Optional[EnvironmentRule]:
        request_url, bare_host = build_request_url(host, path)
        for rule in self.rules:
            if isinstance(rule, RegexRule):
                subject = bare_host if self.match_on == MATCH_HOST else request_url
                if rule.matches(subject):
                    return rule
            elif rule.matches(request_url):
                return rule
        return None

    def _resolve_http(self, host: Optional[str], path: Optional[str]) -> str:
        rule = self.match(host, path)
        if rule is not None:
            log_kv(logger, "environment rule matched", level=logging.DEBUG, target=rule.target, rule=rule)
            return rule.target
        request_url, _ = build_request_url(host, path)
        if self.default:
            log_kv(logger, "no environment rule matched, using default", level=logging.DEBUG, url=request_url, default=self.default)
            return self.default
        raise NoEnvironmentMatchError(request_url)


def describe_rules(rules: Iterable[EnvironmentRule]) -> List[str]:
    out: List[str] = []
    for r in rules:
        if isinstance(r, RegexRule):
            out.append(f"regex {r.pattern} -> {r.target}")
        else:
            out.append(f"prefix {r.prefix} -> {r.target}")
    return out
