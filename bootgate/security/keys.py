# bootgate/security/keys.py
"""
Key codec for developer credentials.

    public key = slug@bcrypt(password)   (safe to commit)
    secret key = slug@password           (handed to the developer, sent as cookie)

Splitting always stops at the FIRST '@': passwords may contain '@'.
"""

from __future__ import annotations

import logging
import secrets
from typing import Tuple

import bcrypt
import deal

from bootgate.errors import MalformedKeyError

logger = logging.getLogger(__name__)

SEPARATOR = "@"
PRINTABLE_ASCII = "".join(chr(c) for c in range(ord("!"), ord("~") + 1))
BCRYPT_MAX_BYTES = 72
DEFAULT_ROUNDS = 12


@deal.pre(lambda key: isinstance(key, str), message="key must be str")
@deal.post(lambda result: len(result) == 2, message="returns (slug, rest)")
@deal.raises(MalformedKeyError, deal.PreContractError)
def split_key(key: str) -> Tuple[str, str]:
    slug, sep, rest = key.partition(SEPARATOR)
    if not sep:
        raise MalformedKeyError("key has no '@' separator")
    return slug, rest


def _hash(password: str, rounds: int) -> str:
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("ascii")


@deal.pre(lambda slug, password, rounds=DEFAULT_ROUNDS: SEPARATOR not in slug, message="slug may not contain '@'")
@deal.pre(
    lambda slug, password, rounds=DEFAULT_ROUNDS: 0 < len(password.encode("utf-8")) <= BCRYPT_MAX_BYTES,
    message="password must be 1..72 bytes",
)
@deal.pre(lambda slug, password, rounds=DEFAULT_ROUNDS: 4 <= rounds <= 31, message="bcrypt rounds 4..31")
@deal.post(lambda result: SEPARATOR in result, message="public key carries the separator")
@deal.raises(deal.PreContractError)
def make_public(slug: str, password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    return slug + SEPARATOR + _hash(password, rounds)


@deal.pre(lambda slug, password: SEPARATOR not in slug, message="slug may not contain '@'")
@deal.raises(deal.PreContractError)
def make_secret(slug: str, password: str) -> str:
    return slug + SEPARATOR + password


@deal.pre(lambda length=32, alphabet=PRINTABLE_ASCII: length > 0, message="length must be positive")
@deal.pre(lambda length=32, alphabet=PRINTABLE_ASCII: len(alphabet) > 1, message="alphabet too small")
@deal.post(lambda result: len(result) > 0)
@deal.raises(deal.PreContractError)
def generate_password(length: int = 32, alphabet: str = PRINTABLE_ASCII) -> str:
    return "".join(secrets.choice(alphabet) for _ in range(length))


@deal.post(lambda result: isinstance(result, bool), message="verify returns bool")
@deal.raises(deal.RaisesContractError)
def verify_password(password: str, password_hash: str) -> bool:
    """
    bcrypt checkpw (constant-time compare inside).

    Never raises for bad input: a hash that is not bcrypt, a password bcrypt
    refuses, or non-str input all verify as False.
    """
    if not isinstance(password, str) or not isinstance(password_hash, str):
        return False
    try:
        pw = password.encode("utf-8")
        hashed = password_hash.encode("ascii")
    except UnicodeEncodeError:
        return False
    if len(pw) > BCRYPT_MAX_BYTES:
        return False
    try:
        return bool(bcrypt.checkpw(pw, hashed))
    except ValueError:
        logger.debug("password hash rejected by bcrypt", exc_info=True)
        return False
