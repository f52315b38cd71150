from __future__ import annotations
import os
import re
from abc import ABC, abstractmethod
from typing import Any, Mapping, TypeAlias


ConfigValue: TypeAlias = (
    str | int | float | bool | None | dict[str, "ConfigValue"] | list["ConfigValue"]
)


class ConfigPreprocessor(ABC):
    """
    Transforms raw config structures (dict/list/scalars) BEFORE pydantic validation.
    """

    @abstractmethod
    def process(self, data: ConfigValue) -> ConfigValue: ...


class EnvironmentPreprocessor(ConfigPreprocessor):
    """
    Resolves ${ENV_VAR} placeholders in string values. Unknown variables are
    left untouched so validation reports them.
    """

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = environ if environ is not None else os.environ
        self._pattern = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")

    def _replace(self, s: str) -> str:
        def replace(m: re.Match) -> str:
            return self._environ.get(m.group(1), m.group(0))

        return self._pattern.sub(replace, s)

    def process(self, data: ConfigValue) -> Any:
        if isinstance(data, dict):
            return {k: self.process(v) for k, v in data.items()}

        if isinstance(data, list):
            return [self.process(v) for v in data]

        if isinstance(data, str):
            return self._replace(data)

        return data
