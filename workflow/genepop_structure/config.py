from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


class ConfigError(RuntimeError):
    """Raised when the converter configuration is invalid."""


@dataclass(frozen=True)
class ConverterConfig:
    data: Dict[str, Any]
    root: Path
    config_path: Path

    @classmethod
    def load(cls, path: Path | str) -> "ConverterConfig":
        config_path = Path(path).expanduser().resolve()
        if not config_path.exists():
            raise ConfigError(f"Config file not found: {config_path}")

        try:
            data = yaml.safe_load(config_path.read_text()) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Failed to parse YAML config {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ConfigError("Top-level YAML structure must be a mapping")

        root_ref = data.get("project_root", ".")
        root = (config_path.parent / root_ref).resolve()
        return cls(data=data, root=root, config_path=config_path)

    def get(self, *keys: str, default: Any = None) -> Any:
        node: Any = self.data
        for key in keys:
            if isinstance(node, dict) and key in node:
                node = node[key]
            else:
                return default
        return node

    def require(self, *keys: str) -> Any:
        value = self.get(*keys)
        if value is None:
            dotted = ".".join(keys)
            raise ConfigError(f"Missing required config key: {dotted}")
        return value

    def resolve_path(self, value: Optional[str], create_parent: bool = False) -> Optional[Path]:
        if value in (None, ""):
            return None
        path = Path(value)
        if not path.is_absolute():
            path = (self.root / path).resolve()
        if create_parent:
            path.parent.mkdir(parents=True, exist_ok=True)
        return path

    def path(self, *keys: str, create_parent: bool = False, default: Optional[str] = None) -> Optional[Path]:
        raw = self.get(*keys, default=default)
        return self.resolve_path(raw, create_parent=create_parent)


@dataclass(frozen=True)
class ConversionSettings:
    genepop: Path
    output: Optional[Path] = None
    popgroup: Optional[Path] = None
    locusnames: bool = False

    @classmethod
    def from_config(cls, config: ConverterConfig) -> "ConversionSettings":
        section = config.get("convert")
        if not isinstance(section, dict):
            raise ConfigError("convert must be a mapping of converter settings")

        config.require("convert", "genepop")
        locusnames = section.get("locusnames", False)
        if not isinstance(locusnames, bool):
            raise ConfigError("convert.locusnames must be true or false")

        return cls(
            genepop=config.path("convert", "genepop"),
            output=config.path("convert", "output"),
            popgroup=config.path("convert", "popgroup"),
            locusnames=locusnames,
        )


load_config = ConverterConfig.load
