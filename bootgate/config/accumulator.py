# bootgate/config/accumulator.py
"""
Config accumulator.

Collects the fragment files of the active environment and the namespaced
parameters their ids carry:

    add("db/prod", ".../db/prod.yaml")   -> parameters["db"] == "prod"
    add("db/dev",  ".../db/dev.yaml")    -> DuplicateNamespaceError

Parsing is not done here; `load()` hands the collected paths to the
fragment loader.
"""

from __future__ import annotations

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

import deal

from bootgate.config.loader import FragmentLoader, YamlFragmentLoader
from bootgate.errors import BootstrapFrozenError, ConfigFileNotFoundError, DuplicateNamespaceError

logger = logging.getLogger(__name__)

NAMESPACE_SEPARATOR = "/"
DEFAULT_EXTENSION = ".yaml"

PathLike = Union[str, Path]


def split_fragment_id(fragment_id: str) -> Optional[Tuple[str, str]]:
    namespace, sep, value = fragment_id.partition(NAMESPACE_SEPARATOR)
    if not sep:
        return None
    return namespace, value


class ConfigAccumulator:
    def __init__(
        self,
        config_dir: Optional[PathLike] = None,
        *,
        extension: str = DEFAULT_EXTENSION,
        loader: Optional[FragmentLoader] = None,
    ) -> None:
        self.config_dir = Path(config_dir) if config_dir is not None else Path.cwd()
        self.extension = extension
        self.loader: FragmentLoader = loader if loader is not None else YamlFragmentLoader()
        self._parameters: Dict[str, str] = {}
        self._paths: List[Path] = []
        self._frozen = False

    def resolve_path(self, fragment_id: str) -> Path:
        return self.config_dir / f"{fragment_id}{self.extension}"

    @deal.pre(lambda self, fragment_id, resolved_path: bool(fragment_id), message="fragment id required")
    @deal.raises(ConfigFileNotFoundError, DuplicateNamespaceError, BootstrapFrozenError, deal.PreContractError)
    def add(self, fragment_id: str, resolved_path: PathLike) -> "ConfigAccumulator":
        if self._frozen:
            raise BootstrapFrozenError("config accumulator is frozen")
        path = Path(resolved_path)
        if not path.exists():
            raise ConfigFileNotFoundError(str(path))

        parts = split_fragment_id(fragment_id)
        if parts is not None:
            namespace, value = parts
            if namespace in self._parameters:
                raise DuplicateNamespaceError(namespace, self._parameters[namespace], value)
            self._parameters[namespace] = value

        self._paths.append(path)
        logger.info("config fragment added | id=%s path=%s", fragment_id, path)
        return self

    def add_fragment(self, fragment_id: str) -> "ConfigAccumulator":
        return self.add(fragment_id, self.resolve_path(fragment_id))

    def get(self, namespace: str) -> str:
        return self._parameters.get(namespace, "")

    @property
    def parameters(self) -> Mapping[str, str]:
        return MappingProxyType(self._parameters)

    @property
    def paths(self) -> Tuple[Path, ...]:
        return tuple(self._paths)

    def load(self) -> Dict[str, Any]:
        return self.loader.load(self._paths)

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def reset(self) -> None:
        """Test-harness hook."""
        self._parameters.clear()
        self._paths.clear()
        self._frozen = False
