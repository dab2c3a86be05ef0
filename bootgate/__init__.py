# bootgate/__init__.py
"""
bootgate - application bootstrap helper.

- security: developer keys, credential registry, debug-mode decision
- environment: environment resolution from explicit value / --env / URL rules
- config: fragment accumulation into a namespaced parameter table
- infra: settings, env files, logging
"""

from __future__ import annotations

__version__ = "1.0.0"

from .configurator import BootResult, Configurator
from .context import BootstrapContext
from .request import RequestInfo, RuntimeMode

__all__ = [
    "BootResult",
    "BootstrapContext",
    "Configurator",
    "RequestInfo",
    "RuntimeMode",
]
