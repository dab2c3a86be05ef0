# bootgate/config/loader.py
"""
Fragment loader: parses YAML fragment files and deep-merges them in order.

Later fragments override scalar keys of earlier ones; nested mappings merge
key by key; lists are replaced, not concatenated.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Protocol

import yaml

from bootgate.errors import SettingsError

logger = logging.getLogger(__name__)


class FragmentLoader(Protocol):
    def load(self, paths: Iterable[Path]) -> Dict[str, Any]: ...


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    out: Dict[str, Any] = dict(base)
    for k, v in override.items():
        if isinstance(v, Mapping) and isinstance(out.get(k), Mapping):
            out[k] = deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def read_yaml_mapping(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise SettingsError(f"invalid YAML in {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise SettingsError(f"YAML root of {path} is not a mapping")
    return data


class YamlFragmentLoader:
    def load(self, paths: Iterable[Path]) -> Dict[str, Any]:
        merged: Dict[str, Any] = {}
        for p in paths:
            merged = deep_merge(merged, read_yaml_mapping(Path(p)))
            logger.debug("config fragment merged | path=%s", p)
        return merged
