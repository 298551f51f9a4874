"""
Configuration for subsheet.

Loaded from:
1. Defaults (this file)
2. Config file ($XDG_CONFIG_HOME/subsheet/config.toml or ~/.config/subsheet/config.toml)
3. Environment variables (SUBSHEET_*) override file
4. CLI flags override everything
"""

from __future__ import annotations

import contextlib
import logging
import os
import tomllib  # stdlib in 3.11+
from dataclasses import dataclass, field
from pathlib import Path

log = logging.getLogger(__name__)


@dataclass
class InputConfig:
    unwrap_markup: bool = True  # strip HTML around pasted JSON


@dataclass
class TopologyConfig:
    strict: bool = False  # raise on malformed entries instead of dropping them


@dataclass
class ExportConfig:
    output_file: str = "subscription_data.xlsx"


@dataclass
class Config:
    """Root config with all settings."""
    input: InputConfig = field(default_factory=InputConfig)
    topology: TopologyConfig = field(default_factory=TopologyConfig)
    export: ExportConfig = field(default_factory=ExportConfig)


def get_config_path() -> Path:
    """Get config file path, respecting XDG."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "subsheet" / "config.toml"
    return Path.home() / ".config" / "subsheet" / "config.toml"


def load_config(path: Path | None = None) -> Config:
    """Defaults, then the TOML file if it exists, then env vars."""
    config = Config()
    path = path or get_config_path()

    if path.exists():
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
            config = _apply_toml(config, data)
        except (OSError, tomllib.TOMLDecodeError, ValueError) as e:
            log.warning("ignoring config file %s: %s", path, e)

    return _apply_env(config)


def _apply_toml(config: Config, data: dict) -> Config:
    if "input" in data:
        i = data["input"]
        if "unwrap_markup" in i:
            config.input.unwrap_markup = bool(i["unwrap_markup"])

    if "topology" in data:
        t = data["topology"]
        if "strict" in t:
            config.topology.strict = bool(t["strict"])

    if "export" in data:
        e = data["export"]
        if "output_file" in e:
            config.export.output_file = str(e["output_file"])

    return config


def _apply_env(config: Config) -> Config:
    env_map: dict[str, tuple[str, str, type]] = {
        "SUBSHEET_UNWRAP_MARKUP": ("input", "unwrap_markup", bool),
        "SUBSHEET_STRICT": ("topology", "strict", bool),
        "SUBSHEET_OUTPUT_FILE": ("export", "output_file", str),
    }

    for env_key, (section, attr, conv) in env_map.items():
        val = os.environ.get(env_key)
        if val is not None:
            with contextlib.suppress(ValueError):
                # "true", "1", "yes" -> True
                converted = val.lower() in ("true", "1", "yes") if conv is bool else conv(val)
                setattr(getattr(config, section), attr, converted)

    return config


_config: Config | None = None


def get_config() -> Config:
    """Get the process-wide config, loading it on first use."""
    global _config
    if _config is None:
        _config = load_config()
    return _config
