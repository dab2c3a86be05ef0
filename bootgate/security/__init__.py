"""Developer keys, credential registry and the debug-mode decision."""

from __future__ import annotations

from .credentials import CredentialStore, DeveloperRecord
from .debug_mode import AUTO, CliPolicy, DebugDecision, DebugModeResolver
from .ipmatch import IpAllowList
from .issuance import DeveloperKeys, new_developer
from .keys import generate_password, make_public, make_secret, split_key, verify_password

__all__ = [
    "AUTO",
    "CliPolicy",
    "CredentialStore",
    "DebugDecision",
    "DebugModeResolver",
    "DeveloperKeys",
    "DeveloperRecord",
    "IpAllowList",
    "generate_password",
    "make_public",
    "make_secret",
    "new_developer",
    "split_key",
    "verify_password",
]
