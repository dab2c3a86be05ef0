from pathlib import Path

import pytest

from bootgate.infra.envfile import coerce_mapping, coerce_value, load_env


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("7", 7),
        ("0", 0),
        ("1234", 1234),
        ("3.14", 3.14),
        ("0.5", 0.5),
        ("TRUE", True),
        ("true", True),
        ("False", False),
    ],
)
def test_coerced(raw, expected):
    value = coerce_value(raw)
    assert value == expected
    assert type(value) is type(expected)


@pytest.mark.parametrize(
    "raw", ["007", "00", "hello", "", "-1", "1.", ".5", "1.2.3", "yes", "1e3", " 7", "7\n", "3.5\n", "true\n"]
)
def test_stays_string(raw):
    assert coerce_value(raw) == raw


def test_bare_key_becomes_empty_string():
    assert coerce_mapping({"A": None, "B": "2"}) == {"A": "", "B": 2}


def test_load_env_parses_and_coerces(tmp_path: Path):
    p = tmp_path / ".env"
    p.write_text(
        "# comment\n"
        "PORT=8080\n"
        "RATIO=0.75\n"
        "DEBUG=TRUE\n"
        "ZIP=007\n"
        'NAME="hello world"\n',
        encoding="utf-8",
    )
    assert load_env(p) == {"PORT": 8080, "RATIO": 0.75, "DEBUG": True, "ZIP": "007", "NAME": "hello world"}


def test_load_env_missing_file(tmp_path: Path):
    assert load_env(tmp_path / "nope.env") == {}


def test_load_env_escaped_newline_is_not_a_number(tmp_path: Path):
    p = tmp_path / ".env"
    p.write_text('A="7\\n"\nB=7\n', encoding="utf-8")
    assert load_env(p) == {"A": "7\n", "B": 7}
