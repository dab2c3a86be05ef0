# bootgate/context.py
"""
Bootstrap context: the one owner of process-wide bootstrap state.

Built by bootstrap code, handed by reference to the resolvers, frozen once
bootstrap is done. Nothing in bootgate keeps module-level registries.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

from bootgate.config.accumulator import ConfigAccumulator
from bootgate.errors import BootstrapFrozenError
from bootgate.security.credentials import CredentialStore
from bootgate.security.ipmatch import IpAllowList


@dataclass
class BootstrapContext:
    credentials: CredentialStore = field(default_factory=CredentialStore)
    allow_list: IpAllowList = field(default_factory=IpAllowList)
    config: ConfigAccumulator = field(default_factory=ConfigAccumulator)
    frozen: bool = False

    def set_ips(self, entries: Iterable[str]) -> None:
        if self.frozen:
            raise BootstrapFrozenError("IP allow-list is frozen")
        self.allow_list = IpAllowList(entries)

    def freeze(self) -> None:
        self.credentials.freeze()
        self.config.freeze()
        self.frozen = True

    def reset(self, *, config: Optional[ConfigAccumulator] = None) -> None:
        """Test-harness hook: back to an empty, writable context."""
        self.credentials.reset()
        self.allow_list = IpAllowList()
        if config is not None:
            self.config = config
        else:
            self.config.reset()
        self.frozen = False
