from __future__ import annotations

from typing import Callable, Tuple

import pytest
from hypothesis import HealthCheck, settings

from bootgate.security.keys import make_public, make_secret

# bcrypt is slow on purpose; the suite uses the minimum cost factor and
# no per-example deadline.
settings.register_profile(
    "bootgate_stable",
    suppress_health_check=[HealthCheck.too_slow],
    deadline=None,
)

settings.load_profile("bootgate_stable")

FAST_ROUNDS = 4


@pytest.fixture
def issue_keys() -> Callable[[str, str], Tuple[str, str]]:
    """(slug, password) -> (public_key, secret_key) with a cheap bcrypt cost."""

    def _issue(slug: str, password: str) -> Tuple[str, str]:
        return make_public(slug, password, FAST_ROUNDS), make_secret(slug, password)

    return _issue
