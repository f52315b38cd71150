import json
import yaml
from typing import Any, Callable
from pathlib import Path

from httpsdk.config.models.client import ClientConfig
from httpsdk.config.preprocessor import ConfigPreprocessor, ConfigValue


class ConfigLoader:
    """
    Load + preprocess + validate client configs from YAML/JSON.

    - Preprocessors run on raw data before Pydantic validation.
    - Result is a fully validated ClientConfig
    """

    def __init__(self, preprocessors: list[ConfigPreprocessor] | None = None):
        self._preprocessors = preprocessors or []

    def add_preprocessor(self, preprocessor: ConfigPreprocessor) -> None:
        self._preprocessors.append(preprocessor)

    def from_yaml(self, source: str | Path) -> ClientConfig:
        data = self._load(source, parser=yaml.safe_load)
        return self._build(data)

    def from_json(self, source: str | Path) -> ClientConfig:
        data = self._load(source, parser=json.loads)
        return self._build(data)

    def _load(
        self,
        source: str | Path,
        *,
        parser: Callable[[str], Any],
    ) -> ConfigValue:
        text = self._read_source(source)
        return parser(text)

    def _read_source(self, source: str | Path) -> str:
        """
        Read source as text.
        If `source` is a file path, read it.
        Otherwise treat it as raw content.
        """
        if isinstance(source, Path):
            return source.read_text()

        # single-line strings may be paths; multi-line text never is
        if "\n" not in source:
            try:
                is_file = Path(source).is_file()
            except OSError:
                is_file = False
            if is_file:
                return Path(source).read_text()

        return source

    def _build(self, data: ConfigValue) -> ClientConfig:
        for pre in self._preprocessors:
            data = pre.process(data)

        return ClientConfig.model_validate(data or {})
