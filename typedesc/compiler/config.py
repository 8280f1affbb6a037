"""typedesc.toml loading and validation."""
from __future__ import annotations

import re
import tomllib
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

from typedesc.internals.exceptions import ConfigError
from typedesc.semantics.passes.collect import DEFAULT_ATTRIBUTE

CONFIG_NAME = "typedesc.toml"

ATTRIBUTE_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@dataclass
class GenerateConfig:
    attribute: str = DEFAULT_ATTRIBUTE
    output_dir: Optional[str] = None
    manifest: bool = True

    def validate(self, path: str) -> None:
        if not isinstance(self.attribute, str) or not ATTRIBUTE_PATTERN.match(self.attribute):
            raise ConfigError(path=path, reason=f"attribute must be an identifier, got {self.attribute!r}")
        if self.output_dir is not None and not isinstance(self.output_dir, str):
            raise ConfigError(path=path, reason="output_dir must be a string")
        if not isinstance(self.manifest, bool):
            raise ConfigError(path=path, reason="manifest must be true or false")


def load_config(directory: Path | None = None, path: Path | None = None) -> GenerateConfig:
    """Load [generate] from typedesc.toml.

    An explicit `path` must exist; otherwise `directory` (default: cwd) is
    searched and defaults are used when no file is present.
    """
    if path is None:
        path = (directory or Path.cwd()) / CONFIG_NAME
        if not path.exists():
            return GenerateConfig()
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        raise ConfigError(path=str(path), reason="file not found") from None
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(path=str(path), reason=str(e)) from None
    return _parse_config(data, str(path))


def load_config_from_string(text: str, path: str = CONFIG_NAME) -> GenerateConfig:
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(path=path, reason=str(e)) from None
    return _parse_config(data, path)


def _parse_config(data: dict, path: str) -> GenerateConfig:
    unknown_sections = set(data) - {"generate"}
    if unknown_sections:
        raise ConfigError(path=path, reason=f"unknown section(s): {', '.join(sorted(unknown_sections))}")
    section = data.get("generate", {})
    known = {f.name for f in fields(GenerateConfig)}
    unknown_keys = set(section) - known
    if unknown_keys:
        raise ConfigError(path=path, reason=f"unknown key(s) in [generate]: {', '.join(sorted(unknown_keys))}")
    config = GenerateConfig(**section)
    config.validate(path)
    return config
