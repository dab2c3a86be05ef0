import pytest

from bootgate.environment import (
    EnvironmentResolver,
    LiteralRule,
    RegexRule,
    build_request_url,
    describe_rules,
    find_env_flag,
    rule_from_pattern,
    strip_port,
)
from bootgate.errors import MissingEnvironmentError, NoEnvironmentMatchError, SettingsError
from bootgate.request import RequestInfo, RuntimeMode


def _http(resolver: EnvironmentResolver, host: str, path: str = "/") -> str:
    return resolver.resolve(mode=RuntimeMode.HTTP, host=host, path=path)


# --- rule parsing ---

def test_rule_from_pattern_tags_regex_by_caret():
    assert isinstance(rule_from_pattern("^.*\\.dev$", "dev"), RegexRule)
    assert isinstance(rule_from_pattern("example.com", "prod"), LiteralRule)


def test_rule_from_pattern_bad_regex_is_settings_error():
    with pytest.raises(SettingsError, match="invalid environment regex"):
        rule_from_pattern("^(unclosed", "dev")


def test_describe_rules():
    rules = [LiteralRule("example.com", "prod"), RegexRule("^x$", "x")]
    assert describe_rules(rules) == ["prefix example.com -> prod", "regex ^x$ -> x"]


# --- literal prefix ---

@pytest.mark.parametrize("url_path", ["/app", "/app/sub", "/app/"])
def test_literal_prefix_matches_on_segment_boundary(url_path):
    r = EnvironmentResolver([LiteralRule("example.com/app", "production")])
    assert _http(r, "example.com", url_path) == "production"


def test_literal_prefix_does_not_match_partial_segment():
    r = EnvironmentResolver([LiteralRule("example.com/app", "production")])
    with pytest.raises(NoEnvironmentMatchError) as ei:
        _http(r, "example.com", "/application")
    assert ei.value.request_url == "example.com/application"


def test_literal_host_only_prefix_matches_any_path():
    r = EnvironmentResolver([LiteralRule("example.com", "production")])
    assert _http(r, "example.com", "/whatever/deep") == "production"
    with pytest.raises(NoEnvironmentMatchError):
        _http(r, "example.community", "/")


def test_literal_prefix_host_is_case_insensitive():
    r = EnvironmentResolver([LiteralRule("Example.COM/app", "production")])
    assert r.rules[0].prefix == "example.com/app"
    assert _http(r, "Example.com", "/app") == "production"
    assert _http(r, "EXAMPLE.COM:443", "/app/x") == "production"


def test_literal_prefix_path_stays_case_sensitive():
    r = EnvironmentResolver([LiteralRule("example.com/App", "production")])
    with pytest.raises(NoEnvironmentMatchError):
        _http(r, "example.com", "/app")


# --- regex ---

def test_regex_rule_on_staging_hosts():
    r = EnvironmentResolver([RegexRule(r"^.*\.staging\.example\.com$", "staging")], match_on="host")
    assert _http(r, "foo.staging.example.com", "/x") == "staging"
    with pytest.raises(NoEnvironmentMatchError):
        _http(r, "foo.example.com", "/x")


def test_regex_rule_sees_path_in_url_mode():
    r = EnvironmentResolver([RegexRule(r"^api\.example\.com/v[0-9]+/", "api")])
    assert _http(r, "api.example.com", "/v2/users") == "api"


def test_regex_in_url_mode_with_anchored_host_fails_when_path_present():
    r = EnvironmentResolver([RegexRule(r"^.*\.staging\.example\.com$", "staging")])
    assert _http(r, "foo.staging.example.com", "") == "staging"
    with pytest.raises(NoEnvironmentMatchError):
        _http(r, "foo.staging.example.com", "/x")


# --- ordering and defaults ---

def test_first_match_wins_not_most_specific():
    r = EnvironmentResolver([
        LiteralRule("example.com", "broad"),
        LiteralRule("example.com/admin", "narrow"),
    ])
    assert _http(r, "example.com", "/admin") == "broad"


def test_default_environment_when_nothing_matches():
    r = EnvironmentResolver([LiteralRule("example.com", "production")], default="development")
    assert _http(r, "localhost", "/") == "development"


def test_port_and_query_are_stripped():
    r = EnvironmentResolver([LiteralRule("example.com/app", "production")])
    assert _http(r, "EXAMPLE.com:8080", "/app?debug=1") == "production"


def test_explicit_environment_wins():
    r = EnvironmentResolver([LiteralRule("example.com", "production")])
    assert r.resolve(explicit="qa", host="example.com", path="/") == "qa"
    assert r.resolve(explicit="qa", mode=RuntimeMode.CLI) == "qa"


def test_invalid_match_on_rejected():
    with pytest.raises(ValueError):
        EnvironmentResolver(match_on="path")


# --- CLI ---

@pytest.mark.parametrize(
    "argv, expected",
    [
        (["--env", "prod"], "prod"),
        (["--env=prod"], "prod"),
        (["migrate", "--verbose", "--env", "stage", "--env", "other"], "stage"),
        (["--environment", "x", "--env=dev"], "dev"),
    ],
)
def test_find_env_flag(argv, expected):
    assert find_env_flag(argv) == expected


@pytest.mark.parametrize("argv", [[], ["--env"], ["--environment=x"], ["env", "prod"]])
def test_find_env_flag_absent(argv):
    assert find_env_flag(argv) is None


def test_cli_required_and_missing():
    r = EnvironmentResolver(default="development", env_required=True)
    with pytest.raises(MissingEnvironmentError):
        r.resolve(mode=RuntimeMode.CLI, cli_args=["migrate"])


def test_cli_optional_falls_back_to_default():
    r = EnvironmentResolver(default="development", env_required=False)
    assert r.resolve(mode=RuntimeMode.CLI, cli_args=[]) == "development"


def test_cli_optional_without_default_still_missing():
    r = EnvironmentResolver(env_required=False)
    with pytest.raises(MissingEnvironmentError):
        r.resolve(mode=RuntimeMode.CLI, cli_args=[])


def test_resolve_request_cli():
    r = EnvironmentResolver()
    assert r.resolve_request(RequestInfo.from_cli(["--env=prod"])) == "prod"


# --- url helpers ---

@pytest.mark.parametrize(
    "host, expected",
    [
        ("example.com:443", "example.com"),
        ("example.com", "example.com"),
        ("[::1]:8080", "[::1]"),
        ("[::1]", "[::1]"),
        ("::1", "::1"),
    ],
)
def test_strip_port(host, expected):
    assert strip_port(host) == expected


def test_build_request_url():
    assert build_request_url("Example.com:80", "app/x?y=1") == ("example.com/app/x", "example.com")
    assert build_request_url(None, None) == ("", "")
