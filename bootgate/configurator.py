# bootgate/configurator.py
"""
Configurator: runs the bootstrap sequence end to end.

    cfg = Configurator.from_settings(load_settings("bootstrap.yaml"))
    result = cfg.bootstrap(RequestInfo.from_wsgi(environ))
    result.debug_mode, result.environment, result.parameters, result.config

Sequence: developers registered -> debug mode -> environment -> fragments of
that environment -> context frozen.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence, Tuple

from bootgate.config.accumulator import ConfigAccumulator
from bootgate.context import BootstrapContext
from bootgate.environment import EnvironmentResolver, rule_from_pattern
from bootgate.infra.logging_std import log_kv
from bootgate.infra.settings import BootstrapSettings
from bootgate.request import RequestInfo
from bootgate.security.debug_mode import AUTO, DEFAULT_COOKIE_NAME, CliPolicy, DebugModeResolver, Explicit

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BootResult:
    debug_mode: bool
    environment: str
    parameters: Mapping[str, str]
    config: Dict[str, Any]
    fragments: Tuple[Path, ...] = ()


class Configurator:
    def __init__(
        self,
        context: Optional[BootstrapContext] = None,
        *,
        environments: Optional[EnvironmentResolver] = None,
        default_debug: bool = False,
        cookie_name: str = DEFAULT_COOKIE_NAME,
        cli_policy: CliPolicy = CliPolicy.DEFAULT,
        fragments: Optional[Mapping[str, Sequence[str]]] = None,
    ) -> None:
        self.context = context if context is not None else BootstrapContext()
        self.environments = environments if environments is not None else EnvironmentResolver()
        self.default_debug = default_debug
        self.cookie_name = cookie_name
        self.cli_policy = cli_policy
        self.fragments: Dict[str, Tuple[str, ...]] = {k: tuple(v) for k, v in (fragments or {}).items()}
        self._debug: Explicit = AUTO
        self._environment: Optional[str] = None

    @classmethod
    def from_settings(cls, settings: BootstrapSettings) -> "Configurator":
        context = BootstrapContext(
            config=ConfigAccumulator(settings.config_dir, extension=settings.config_extension),
        )
        context.set_ips(settings.ips)
        cfg = cls(
            context,
            environments=EnvironmentResolver(
                [rule_from_pattern(e.pattern, e.target) for e in settings.environments],
                default=settings.default_environment,
                env_required=settings.env_required,
                match_on=settings.match_on,
            ),
            default_debug=settings.default_debug,
            cookie_name=settings.cookie_name,
            cli_policy=settings.cli_policy,
            fragments=settings.fragments,
        )
        for dev in settings.developers:
            cfg.add_developer(dev.public_key, dev.ip_independent)
        cfg.set_debug_mode(settings.debug)
        return cfg

    # --- bootstrap-phase writes ---

    def add_developer(self, public_key: str, ip_independent: bool = False) -> "Configurator":
        self.context.credentials.add_developer(public_key, ip_independent)
        return self

    def set_ips(self, ips: Iterable[str]) -> "Configurator":
        self.context.set_ips(ips)
        return self

    def set_debug_mode(self, value: Explicit = AUTO) -> "Configurator":
        self._debug = AUTO if value is None else value
        return self

    def set_environment(self, name: Optional[str]) -> "Configurator":
        self._environment = name
        return self

    def add_config(self, fragment_id: str) -> "Configurator":
        self.context.config.add_fragment(fragment_id)
        return self

    # --- resolution ---

    def debug_resolver(self) -> DebugModeResolver:
        return DebugModeResolver(
            self.context.credentials,
            self.context.allow_list,
            default=self.default_debug,
            cli_policy=self.cli_policy,
        )

    def resolve_debug_mode(self, request: RequestInfo) -> bool:
        return self.debug_resolver().resolve(
            self._debug,
            cookie=request.cookie(self.cookie_name),
            mode=request.mode,
            client_ip=request.client_ip,
        )

    def resolve_environment(self, request: RequestInfo) -> str:
        return self.environments.resolve_request(request, explicit=self._environment)

    def bootstrap(self, request: RequestInfo) -> BootResult:
        debug_mode = self.resolve_debug_mode(request)
        environment = self.resolve_environment(request)
        for fragment_id in self.fragments.get(environment, ()):
            self.add_config(fragment_id)
        config = self.context.config.load()
        self.context.freeze()

        log_kv(
            logger,
            "bootstrap complete",
            debug=debug_mode,
            environment=environment,
            fragments=len(self.context.config.paths),
            mode=request.mode.value,
        )
        return BootResult(
            debug_mode=debug_mode,
            environment=environment,
            parameters=dict(self.context.config.parameters),
            config=config,
            fragments=self.context.config.paths,
        )
