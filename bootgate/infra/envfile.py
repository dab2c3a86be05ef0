from __future__ import annotations

import re
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

from dotenv import dotenv_values

EnvValue = Union[str, int, float, bool]

_INT_RE = re.compile(r"0|[1-9][0-9]*")
_FLOAT_RE = re.compile(r"[0-9]+\.[0-9]+")


def coerce_value(raw: str) -> EnvValue:
    """
    "7" -> 7, "007" -> "007", "3.14" -> 3.14, "TRUE" -> True, anything else stays str.
    """
    if _INT_RE.fullmatch(raw):
        return int(raw)
    if _FLOAT_RE.fullmatch(raw):
        return float(raw)
    low = raw.lower()
    if low == "true":
        return True
    if low == "false":
        return False
    return raw


def coerce_mapping(raw: Mapping[str, Optional[str]]) -> Dict[str, EnvValue]:
    # dotenv gives None for a bare `KEY` line
    return {k: coerce_value(v if v is not None else "") for k, v in raw.items()}


def load_env(path: Union[str, Path]) -> Dict[str, EnvValue]:
    """Reads a dotenv file and returns the coerced mapping. Missing file -> {}."""
    p = Path(path)
    if not p.exists():
        return {}
    return coerce_mapping(dotenv_values(p, encoding="utf-8"))
