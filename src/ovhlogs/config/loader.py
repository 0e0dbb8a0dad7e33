"""Configuration loading pipeline."""

from __future__ import annotations

import importlib
import json
import os
from pathlib import Path
from types import ModuleType
from typing import Any, Callable, Dict, Mapping, cast

from platformdirs import user_config_dir

from .schema import OvhLogsConfig, build_config, default_config

try:  # pragma: no cover
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib  # type: ignore[no-redef]

try:  # pragma: no cover
    yaml_module = importlib.import_module("yaml")
except ModuleNotFoundError:  # pragma: no cover
    yaml_module = None

yaml: ModuleType | None = yaml_module


_ENV_PREFIX = "OVHLOGS__"
# Single-underscore variable accepted for the stream token alone.
_LEGACY_TOKEN_ENV = "OVHLOGS_TOKEN"
_CONFIG_FILENAMES = ("ovhlogs.toml", "ovhlogs.yaml", "ovhlogs.yml")
# Values kept verbatim from the environment: tokens may look like numbers.
_STRING_KEYS = {("client", "token"), ("endpoint", "host"), ("defaults", "host")}
_TRUE_WORDS = {"true", "yes", "on"}
_FALSE_WORDS = {"false", "no", "off"}


def _read_mapping(path: Path) -> Dict[str, Any]:
    """Parse a TOML or YAML file into a mapping; missing files read as empty."""

    if not path.is_file():
        return {}
    if path.suffix == ".toml":
        with path.open("rb") as fh:
            data: Any = tomllib.load(fh)
    elif yaml is not None:
        with path.open("r", encoding="utf-8") as fh:
            data = cast(Callable[[Any], Any], yaml.safe_load)(fh)
    else:
        return {}
    if isinstance(data, Mapping):
        return {str(key): value for key, value in data.items()}
    return {}


def _merge(base: Dict[str, Any], incoming: Mapping[str, Any]) -> Dict[str, Any]:
    for key, value in incoming.items():
        existing = base.get(key)
        if isinstance(value, Mapping) and isinstance(existing, dict):
            _merge(existing, value)
        elif isinstance(value, Mapping):
            base[key] = _merge(dict(existing) if isinstance(existing, Mapping) else {}, value)
        else:
            base[key] = value
    return base


def _load_directory(directory: Path) -> Dict[str, Any]:
    data: Dict[str, Any] = {}
    if not directory.is_dir():
        return data
    for filename in _CONFIG_FILENAMES:
        payload = _read_mapping(directory / filename)
        if payload:
            data = _merge(data, payload)
    return data


def _load_user_config() -> Dict[str, Any]:
    return _load_directory(Path(user_config_dir("ovhlogs")))


def _load_local_config() -> Dict[str, Any]:
    return _load_directory(Path.cwd())


def _load_pyproject() -> Dict[str, Any]:
    data = _read_mapping(Path("pyproject.toml"))
    tool = data.get("tool", {})
    if not isinstance(tool, Mapping):
        return {}
    section = tool.get("ovhlogs", {})
    if isinstance(section, Mapping):
        return {str(key): value for key, value in section.items()}
    return {}


def _coerce_value(value: str) -> Any:
    """Interpret an environment value as a bool, number or JSON literal."""

    stripped = value.strip()
    lowered = stripped.lower()
    if lowered in _TRUE_WORDS:
        return True
    if lowered in _FALSE_WORDS:
        return False
    for convert in (int, float):
        try:
            return convert(stripped)
        except ValueError:
            continue
    if stripped[:1] in {"[", "{"}:
        try:
            return json.loads(stripped)
        except json.JSONDecodeError:
            return stripped
    return stripped


def _env_config() -> Dict[str, Any]:
    data: Dict[str, Any] = {}
    legacy_token = os.environ.get(_LEGACY_TOKEN_ENV, "").strip()
    if legacy_token:
        data["client"] = {"token": legacy_token}
    for env_key, raw_value in os.environ.items():
        if not env_key.startswith(_ENV_PREFIX):
            continue
        path = [segment.lower() for segment in env_key[len(_ENV_PREFIX) :].split("__")]
        target: Dict[str, Any] = data
        for segment in path[:-1]:
            target = cast(Dict[str, Any], target.setdefault(segment, {}))
        if tuple(path) in _STRING_KEYS:
            target[path[-1]] = raw_value.strip()
        else:
            target[path[-1]] = _coerce_value(raw_value)
    return data


def load_configuration(overrides: Dict[str, Any] | None = None) -> OvhLogsConfig:
    """Load configuration from supported sources in precedence order.

    Later layers win: user config dir, working directory files,
    ``[tool.ovhlogs]`` in pyproject.toml, environment, then ``overrides``.
    """

    layers = (
        _load_user_config(),
        _load_local_config(),
        _load_pyproject(),
        _env_config(),
        overrides or {},
    )
    merged = default_config()
    for layer in layers:
        _merge(merged, layer)
    return build_config(merged)
