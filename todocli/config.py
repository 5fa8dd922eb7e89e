"""Loading of the application configuration."""

from __future__ import annotations

import argparse
import json
import os
import sys
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

CONFIG_PATH_VARIABLE = "ConfigPath"


class ConfigError(Exception):
    """Raised when the configuration cannot be found or is invalid."""


@dataclass(frozen=True)
class MySQLConfig:
    """Connection settings for the MySQL database."""

    dbname: str
    host: str = "localhost"
    port: int = 3306
    user: str = "root"
    password: str = ""


@dataclass(frozen=True)
class Config:
    """Top-level application configuration."""

    env: str
    mysql: MySQLConfig


def find_config_path(argv: Sequence[str] | None = None, environ: Mapping[str, str] | None = None) -> str:
    """Return the configuration path from ``ConfigPath`` or a ``--config`` option."""
    environ = os.environ if environ is None else environ
    path = environ.get(CONFIG_PATH_VARIABLE, "")
    if path:
        return path

    parser = argparse.ArgumentParser(add_help=False, allow_abbrev=False, exit_on_error=False)
    parser.add_argument("-config", "--config", default="")
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        known, _ = parser.parse_known_args(args)
    except argparse.ArgumentError as exc:
        raise ConfigError(str(exc)) from exc
    if not known.config:
        raise ConfigError("Set the Configuration Path or use --config in the cli")
    return known.config


def _read_document(path: Path) -> dict[str, Any]:
    suffix = path.suffix.lower()
    try:
        text = path.read_text(encoding="utf-8")
        if suffix in (".yaml", ".yml"):
            data = yaml.safe_load(text)
        elif suffix == ".json":
            data = json.loads(text)
        else:
            raise ConfigError(f"Failed to load the config: file format '{suffix}' is not supported")
    except (OSError, yaml.YAMLError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Failed to load the config: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError("Failed to load the config: top level must be a mapping")
    return data


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


def _as_port(value: Any) -> int:
    if value is None or value == "":
        return 0
    if isinstance(value, bool):
        raise ConfigError(f"Failed to load the config: invalid port {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Failed to load the config: invalid port {value!r}") from exc


def _resolve(file_value: Any, environ: Mapping[str, str], variable: str | None, default: Any, convert) -> Any:
    """Pick a setting: an environment variable wins, then the file, then the default."""
    if variable is not None and variable in environ:
        return convert(environ[variable])
    value = convert(file_value)
    if not value and default is not None:
        return default
    return value


def load_config(path: str | os.PathLike[str], environ: Mapping[str, str] | None = None) -> Config:
    """Read the configuration file at ``path`` and apply environment overrides."""
    environ = os.environ if environ is None else environ
    config_path = Path(path)
    if not config_path.exists():
        raise ConfigError(f"Config file doesn't exist: {config_path}")

    data = _read_document(config_path)
    section = data.get("mysql") or {}
    if not isinstance(section, dict):
        raise ConfigError("Failed to load the config: 'mysql' must be a mapping")

    env = _resolve(data.get("env"), environ, "ENV", None, _as_text)
    mysql = MySQLConfig(
        host=_resolve(section.get("host"), environ, "HOST", "localhost", _as_text),
        port=_resolve(section.get("port"), environ, "PORT", 3306, _as_port),
        user=_resolve(section.get("user"), environ, "USER", "root", _as_text),
        password=_resolve(section.get("password"), environ, "PASSWORD", None, _as_text),
        dbname=_as_text(section.get("dbname")),
    )

    if not env:
        raise ConfigError('Failed to load the config: field "env" is required but the value is not provided')
    if not mysql.dbname:
        raise ConfigError('Failed to load the config: field "mysql.dbname" is required but the value is not provided')
    return Config(env=env, mysql=mysql)