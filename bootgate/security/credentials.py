# bootgate/security/credentials.py
"""
In-memory registry of developers allowed to unlock debug mode.

Lifecycle: filled during bootstrap, frozen, then only read. A duplicate slug
is rejected (DuplicateDeveloperError) so a stale key can never silently shadow
a rotated one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterator, Optional, Tuple

import deal

from bootgate.errors import BootstrapFrozenError, DuplicateDeveloperError, MalformedKeyError
from bootgate.infra.logging_std import log_kv
from bootgate.security.keys import split_key

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DeveloperRecord:
    slug: str
    password_hash: str
    ip_independent: bool = False


class CredentialStore:
    def __init__(self) -> None:
        self._records: Dict[str, DeveloperRecord] = {}
        self._frozen = False

    @deal.pre(lambda self, public_key, ip_independent=False: isinstance(public_key, str), message="public key must be str")
    @deal.raises(MalformedKeyError, DuplicateDeveloperError, BootstrapFrozenError, deal.PreContractError)
    def add_developer(self, public_key: str, ip_independent: bool = False) -> DeveloperRecord:
        if self._frozen:
            raise BootstrapFrozenError("credential store is frozen")
        slug, password_hash = split_key(public_key)
        if slug in self._records:
            raise DuplicateDeveloperError(slug)
        record = DeveloperRecord(slug=slug, password_hash=password_hash, ip_independent=bool(ip_independent))
        self._records[slug] = record
        log_kv(logger, "developer registered", slug=slug, ip_independent=record.ip_independent)
        return record

    def lookup(self, slug: str) -> Optional[DeveloperRecord]:
        return self._records.get(slug)

    def slugs(self) -> Tuple[str, ...]:
        return tuple(self._records)

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def reset(self) -> None:
        """Test-harness hook: forget every developer and accept writes again."""
        self._records.clear()
        self._frozen = False

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, slug: object) -> bool:
        return slug in self._records

    def __iter__(self) -> Iterator[DeveloperRecord]:
        return iter(tuple(self._records.values()))
