# bootgate/errors.py
"""
Bootgate error taxonomy.

Every error here is fatal for bootstrap: nothing retries them, the CLI prints
them and exits non-zero. Malformed cookies are NOT errors; they resolve to
"debug mode off" inside the debug-mode resolver.
"""

from __future__ import annotations


class BootgateError(RuntimeError):
    pass


class MalformedKeyError(BootgateError, ValueError):
    """Credential string has no '@' separator."""


class DuplicateDeveloperError(BootgateError):
    def __init__(self, slug: str):
        super().__init__(f"developer already registered: {slug}")
        self.slug = slug


class UnsupportedModeError(BootgateError):
    """Cookie-based proof requested in a runtime mode that has no cookies."""


class MissingEnvironmentError(BootgateError):
    pass


class NoEnvironmentMatchError(BootgateError):
    def __init__(self, request_url: str):
        super().__init__(f"no environment rule matches {request_url!r}")
        self.request_url = request_url


class ConfigFileNotFoundError(BootgateError):
    def __init__(self, path: str):
        super().__init__(f"config fragment not found: {path}")
        self.path = path


class DuplicateNamespaceError(BootgateError):
    def __init__(self, namespace: str, existing: str, attempted: str):
        super().__init__(
            f"config namespace {namespace!r} already set to {existing!r}, refusing {attempted!r}"
        )
        self.namespace = namespace
        self.existing = existing
        self.attempted = attempted


class BootstrapFrozenError(BootgateError):
    """Write attempted after bootstrap finished."""


class InvalidIpPatternError(BootgateError, ValueError):
    pass


class SettingsError(BootgateError):
    pass
