from __future__ import annotations

from copy import deepcopy
from pathlib import Path
from typing import Any, Mapping

import yaml
from dotenv import load_dotenv

from .defaults import DEFAULT_CONFIG
from .schema import AppConfig, EnvOverrides

_SECTION_KEYS: frozenset[str] = frozenset({"rules", "http", "search", "logging"})

# Flat key (env/CLI) -> (section, key) in the YAML layout.
_FLAT_KEYS: dict[str, tuple[str, str]] = {
    "rules_dir": ("rules", "rules_dir"),
    "http_timeout_seconds": ("http", "timeout_seconds"),
    "http_follow_redirects": ("http", "follow_redirects"),
    "http_verify_tls": ("http", "verify_tls"),
    "http_user_agent": ("http", "user_agent"),
    "http_accept_language": ("http", "accept_language"),
    "search_max_episode_items": ("search", "max_episode_items"),
    "search_channel_capacity": ("search", "channel_capacity"),
    "log_level": ("logging", "level"),
    "log_format": ("logging", "format"),
}


def _deep_merge(base: dict[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Merge ``override`` into ``base`` in place; nested dicts merge, anything else replaces."""
    for key, value in override.items():
        current = base.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            _deep_merge(current, value)
        else:
            base[key] = value
    return base


def _to_sections(data: Mapping[str, Any]) -> dict[str, Any]:
    """
    Bring one layer (defaults, YAML, env or CLI) into the sectioned shape.

    Sectioned blocks pass through; flat keys are folded into their section.
    Unknown keys are dropped.
    """
    out: dict[str, Any] = {
        section: dict(data[section])
        for section in _SECTION_KEYS
        if isinstance(data.get(section), Mapping)
    }

    for key in ("app_name", "environment"):
        if key in data:
            out[key] = data[key]

    for flat_key, (section, section_key) in _FLAT_KEYS.items():
        if flat_key in data:
            out.setdefault(section, {})[section_key] = data[flat_key]

    return out


def _read_yaml_config(config_path: Path) -> dict[str, Any]:
    parsed = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ValueError(f"Config YAML must be a mapping, got: {type(parsed)!r}")
    return parsed


def load_config(
    *,
    config_path: Path | None = None,
    dotenv_path: Path | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> AppConfig:
    """
    Build the final AppConfig.

    Precedence: defaults < YAML file < ANIMESEARCH_* env vars < CLI overrides.
    A given ``.env`` file feeds the env layer without replacing variables
    already set in the process. Nothing is written to disk.
    """
    if dotenv_path is not None:
        if not dotenv_path.exists():
            raise FileNotFoundError(dotenv_path)
        load_dotenv(dotenv_path, override=False)

    merged = _to_sections(deepcopy(DEFAULT_CONFIG))

    if config_path is not None:
        if not config_path.exists():
            raise FileNotFoundError(config_path)
        _deep_merge(merged, _to_sections(_read_yaml_config(config_path)))

    _deep_merge(merged, _to_sections(EnvOverrides().to_update_dict()))
    _deep_merge(merged, _to_sections(cli_overrides or {}))

    return AppConfig.model_validate(merged)
