import deal
import pytest

from bootgate.errors import UnsupportedModeError
from bootgate.request import RuntimeMode
from bootgate.security.credentials import CredentialStore
from bootgate.security.debug_mode import AUTO, CliPolicy, DebugModeResolver
from bootgate.security.ipmatch import IpAllowList


@pytest.fixture
def store(issue_keys):
    s = CredentialStore()
    s.add_developer(issue_keys("alice", "s3cret@with@ats")[0])
    s.add_developer(issue_keys("roamer", "anywhere")[0], ip_independent=True)
    return s


@pytest.fixture
def resolver(store):
    return DebugModeResolver(store, IpAllowList(["127.0.0.1"]), default=False)


def test_explicit_false_beats_valid_cookie(resolver):
    assert resolver.resolve(False, cookie="alice@s3cret@with@ats", client_ip="127.0.0.1") is False


def test_explicit_true_beats_missing_cookie(resolver):
    dec = resolver.decide(True, cookie=None, client_ip="8.8.8.8")
    assert dec.enabled is True
    assert dec.reason == "EXPLICIT"


def test_explicit_wins_in_cli_mode_even_with_raise_policy(store):
    r = DebugModeResolver(store, cli_policy=CliPolicy.RAISE)
    assert r.resolve(True, mode=RuntimeMode.CLI) is True


def test_valid_cookie_from_allowed_ip(resolver):
    dec = resolver.decide(AUTO, cookie="alice@s3cret@with@ats", client_ip="127.0.0.1")
    assert dec.enabled is True
    assert dec.reason == "VERIFIED"


def test_none_explicit_means_auto(resolver):
    assert resolver.resolve(None, cookie="alice@s3cret@with@ats", client_ip="127.0.0.1") is True


def test_wrong_password(resolver):
    dec = resolver.decide(cookie="alice@nope", client_ip="127.0.0.1")
    assert dec.enabled is False
    assert dec.reason == "PASSWORD_MISMATCH"


def test_ip_restricted_developer_from_other_ip_never_authenticates(resolver):
    dec = resolver.decide(cookie="alice@s3cret@with@ats", client_ip="203.0.113.5")
    assert dec.enabled is False
    assert dec.reason == "IP_NOT_ALLOWED"


def test_ip_independent_developer_from_anywhere(resolver):
    assert resolver.resolve(cookie="roamer@anywhere", client_ip="203.0.113.5") is True


def test_empty_allow_list_means_no_ip_restriction(store):
    r = DebugModeResolver(store, IpAllowList())
    assert r.resolve(cookie="alice@s3cret@with@ats", client_ip="203.0.113.5") is True


@pytest.mark.parametrize(
    "cookie, reason",
    [
        (None, "NO_COOKIE"),
        (123, "NO_COOKIE"),
        (["alice@x"], "NO_COOKIE"),
        ("garbage-without-separator", "MALFORMED_COOKIE"),
        ("", "MALFORMED_COOKIE"),
        ("mallory@pw", "UNKNOWN_DEVELOPER"),
    ],
)
def test_bad_cookies_resolve_off_without_raising(resolver, cookie, reason):
    dec = resolver.decide(cookie=cookie, client_ip="127.0.0.1")
    assert dec.enabled is False
    assert dec.reason == reason


def test_no_developers_returns_default_regardless_of_cookie():
    for default in (True, False):
        r = DebugModeResolver(CredentialStore(), default=default)
        for cookie in (None, "x@y", "garbage"):
            dec = r.decide(AUTO, cookie=cookie, mode=RuntimeMode.HTTP)
            assert dec.enabled is default
            assert dec.reason == "NO_DEVELOPERS"


def test_cli_mode_returns_default(store):
    r = DebugModeResolver(store, default=True)
    dec = r.decide(cookie="alice@s3cret@with@ats", mode=RuntimeMode.CLI)
    assert dec.enabled is True
    assert dec.reason == "CLI_DEFAULT"


def test_cli_mode_raise_policy(store):
    r = DebugModeResolver(store, cli_policy=CliPolicy.RAISE)
    with pytest.raises(UnsupportedModeError):
        r.resolve(mode=RuntimeMode.CLI)


def test_resolution_is_pure(resolver, store):
    args = dict(cookie="alice@s3cret@with@ats", client_ip="127.0.0.1", mode=RuntimeMode.HTTP)
    first = resolver.decide(AUTO, **args)
    second = resolver.decide(AUTO, **args)
    assert first == second
    assert store.slugs() == ("alice", "roamer")


def test_invalid_explicit_value_is_contract_error(resolver):
    with pytest.raises(deal.PreContractError):
        resolver.resolve("yes")
