"""Configuration loading for errgen (.errgen.yml)."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Set

import yaml

from .probe.runner import ProbeOptions
from .probe.snippets import DEFAULT_PROBES, Probe

CONFIG_FILENAME = ".errgen.yml"
_PROBE_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ProbeConfig:
    """Probe set and compiler invocation settings."""

    probes: List[Probe] = field(default_factory=lambda: list(DEFAULT_PROBES))
    options: ProbeOptions = field(default_factory=ProbeOptions)


@dataclass
class ErrgenConfig:
    """Represents the settings defined in .errgen.yml."""

    root: Path
    probe: ProbeConfig = field(default_factory=ProbeConfig)


def load_config(config_path: Path) -> ErrgenConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return ErrgenConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    probe = ProbeConfig()
    probe_data = _as_dict(data.get("probe"))
    if probe_data:
        defaults = ProbeOptions()
        probe.options = ProbeOptions(
            edition=_as_str(probe_data.get("edition")) or defaults.edition,
            crate_name=_as_str(probe_data.get("crate_name")) or defaults.crate_name,
        )
        if "probes" in probe_data:
            probe.probes = _parse_probes(probe_data.get("probes"), root)

    return ErrgenConfig(root=root, probe=probe)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _parse_probes(value: Any, root: Path) -> List[Probe]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigError("probe.probes must be a list")
    probes: List[Probe] = []
    seen: Set[str] = set()
    for position, raw in enumerate(value):
        entry = _as_dict(raw)
        name = _as_str(entry.get("name"))
        if not name:
            raise ConfigError(f"probe.probes[{position}] is missing a name")
        if not _PROBE_NAME.fullmatch(name):
            raise ConfigError(f"probe name '{name}' is not a valid cfg identifier")
        if name in seen:
            raise ConfigError(f"probe '{name}' is defined more than once")
        seen.add(name)
        snippet = _as_str(entry.get("snippet"))
        file_name = _as_str(entry.get("file"))
        if (snippet is None) == (file_name is None):
            raise ConfigError(
                f"probe '{name}' must define exactly one of 'snippet' or 'file'"
            )
        if file_name is not None:
            snippet = _read_snippet(root / file_name, name)
        probes.append(Probe(name=name, snippet=snippet or ""))
    return probes


def _read_snippet(path: Path, name: str) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"probe '{name}' snippet file {path} is unreadable: {exc}") from exc


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


__all__ = ["CONFIG_FILENAME", "ConfigError", "ErrgenConfig", "ProbeConfig", "load_config"]
