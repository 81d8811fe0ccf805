"""TOML config loading for slgen.toml."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

CONFIG_NAME = "slgen.toml"


@dataclass
class GenerateConfig:
    package: str = "spec"
    header: bool = True


@dataclass
class DiagnosticsConfig:
    color: bool = True


@dataclass
class SlgenConfig:
    generate: GenerateConfig = field(default_factory=GenerateConfig)
    diagnostics: DiagnosticsConfig = field(default_factory=DiagnosticsConfig)


def find_config(start_path: Path | None = None) -> Path | None:
    """Walk up directories to find slgen.toml; None if there is none."""
    path = (start_path or Path.cwd()).resolve()
    if path.is_file():
        path = path.parent
    while True:
        candidate = path / CONFIG_NAME
        if candidate.is_file():
            return candidate
        parent = path.parent
        if parent == path:
            return None
        path = parent


def load_config(path: Path | None) -> SlgenConfig:
    """Parse an slgen.toml file into an SlgenConfig; defaults when *path* is None."""
    config = SlgenConfig()
    if path is None:
        return config

    with open(path, "rb") as f:
        data = tomllib.load(f)

    if "generate" in data:
        gen = data["generate"]
        config.generate = GenerateConfig(
            package=gen.get("package", "spec"),
            header=gen.get("header", True),
        )

    if "diagnostics" in data:
        diag = data["diagnostics"]
        config.diagnostics = DiagnosticsConfig(
            color=diag.get("color", True),
        )

    return config
