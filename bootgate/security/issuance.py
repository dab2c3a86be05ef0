# bootgate/security/issuance.py
from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote_plus

import deal

from bootgate.security.keys import DEFAULT_ROUNDS, SEPARATOR, generate_password, make_public, make_secret


@dataclass(frozen=True, slots=True)
class DeveloperKeys:
    public_key: str
    secret_key: str
    secret_key_urlencoded: str


@deal.pre(lambda slug, length=32, rounds=DEFAULT_ROUNDS: bool(slug) and SEPARATOR not in slug, message="slug required, no '@'")
@deal.pre(lambda slug, length=32, rounds=DEFAULT_ROUNDS: 0 < length <= 72, message="password length 1..72")
@deal.raises(deal.PreContractError)
def new_developer(slug: str, length: int = 32, rounds: int = DEFAULT_ROUNDS) -> DeveloperKeys:
    """
    Issue a key pair for a new developer.

    The public key goes into the bootstrap settings (safe to commit); the
    secret key is handed to the developer privately. Its URL-encoded form is
    the debug cookie value, since cookie values are URL-decoded on read.
    Printing is the caller's job.
    """
    password = generate_password(length)
    secret = make_secret(slug, password)
    return DeveloperKeys(
        public_key=make_public(slug, password, rounds),
        secret_key=secret,
        secret_key_urlencoded=quote_plus(secret),
    )
