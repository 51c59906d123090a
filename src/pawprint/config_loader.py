"""Load StaticConfig from pawprint.yaml / pawprint.toml if present.

Layers, lowest priority first:

1. ``StaticConfig`` defaults
2. the global ``static:`` section
3. the ``builds.<name>.static:`` section of the selected build
4. keyword overrides (CLI flags)

Each layer only overrides the keys it sets.  The ``paths:`` section sets
``sites_dir`` and ``cache_dir``.  Keys written in the legacy camelCase
form (``imageDirectoryTemplate``, ``useAbsolutePathes``, ...) are accepted.
"""

from __future__ import annotations

import re
import tomllib
from pathlib import Path

from pawprint._errors import ConfigError
from pawprint.config import StaticConfig

# Aliases that don't follow the plain camelCase -> snake_case rule
_ALIASES: dict[str, str] = {
    "use_absolute_pathes": "use_absolute_paths",
    "sites": "sites_dir",
    "cache": "cache_dir",
}

_FIELD_TYPES: dict[str, type] = {
    "sites_dir": str,
    "cache_dir": str,
    "export_path": str,
    "image_directory_template": str,
    "image_url_template": str,
    "video_directory_template": str,
    "video_url_template": str,
    "asset_directory_template": str,
    "asset_url_template": str,
    "svg_directory_template": str,
    "svg_url_template": str,
    "css_directory_template": str,
    "css_url_template": str,
    "js_directory_template": str,
    "js_url_template": str,
    "use_absolute_paths": bool,
    "prefix_path": str,
    "beautify": bool,
    "page_path_template": str,
    "workers": int,
    "copy_assets": dict,
}

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def load_config(
    root: Path,
    *,
    build: str | None = None,
    **overrides: object,
) -> StaticConfig:
    """Load StaticConfig from root, merging the config file layers.

    Looks for pawprint.yaml, pawprint.yml, or pawprint.toml in root.
    Overrides with a value of *None* are ignored so CLI defaults don't
    shadow file values.

    Raises:
        ConfigError: On unreadable files, unknown keys, wrong value types,
            or a ``build`` that the file does not define.

    """
    data = _read_config_file(root)

    merged: dict[str, object] = {}
    merged.update(_normalize(_section(data, "paths"), "paths"))
    merged.update(_normalize(_section(data, "static"), "static"))

    if build is not None:
        builds = _section(data, "builds")
        if build not in builds:
            msg = f"Unknown build {build!r}; configured builds: {sorted(builds) or 'none'}"
            raise ConfigError(msg)
        layer = builds[build]
        if not isinstance(layer, dict):
            msg = f"builds.{build} must be a mapping"
            raise ConfigError(msg)
        merged.update(_normalize(_section(layer, "paths"), f"builds.{build}.paths"))
        merged.update(_normalize(_section(layer, "static"), f"builds.{build}.static"))

    merged.update(
        _normalize({k: v for k, v in overrides.items() if v is not None}, "overrides"),
    )
    return StaticConfig(root=root, build=build, **merged)  # type: ignore[arg-type]


def _read_config_file(root: Path) -> dict[str, object]:
    """Read pawprint config from yaml/toml if present. Returns empty dict otherwise."""
    for name in ("pawprint.yaml", "pawprint.yml"):
        path = root / name
        if path.is_file():
            return _parse_yaml(path)
    toml_path = root / "pawprint.toml"
    if toml_path.is_file():
        return _parse_toml(toml_path)
    return {}


def _parse_yaml(path: Path) -> dict[str, object]:
    import yaml

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        msg = f"Failed to read {path}: {exc}"
        raise ConfigError(msg) from exc
    if not isinstance(data, dict):
        msg = f"{path} must contain a mapping at the top level"
        raise ConfigError(msg)
    return data


def _parse_toml(path: Path) -> dict[str, object]:
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        msg = f"Failed to read {path}: {exc}"
        raise ConfigError(msg) from exc


def _section(data: dict[str, object], name: str) -> dict[str, object]:
    value = data.get(name)
    if value is None:
        return {}
    if not isinstance(value, dict):
        msg = f"Config section {name!r} must be a mapping"
        raise ConfigError(msg)
    return value


def _normalize(values: dict[str, object], where: str) -> dict[str, object]:
    """Map raw keys onto StaticConfig field names and check value types."""
    result: dict[str, object] = {}
    for raw_key, value in values.items():
        key = _field_name(str(raw_key))
        expected = _FIELD_TYPES.get(key)
        if expected is None:
            msg = f"Unknown config key {where}.{raw_key}"
            raise ConfigError(msg)
        # bool is an int subclass
        wrong_bool = expected is int and isinstance(value, bool)
        if wrong_bool or not isinstance(value, expected):
            msg = (
                f"Config key {where}.{raw_key} must be {expected.__name__}, "
                f"got {type(value).__name__}"
            )
            raise ConfigError(msg)
        if expected is dict:
            value = {str(k): str(v) for k, v in value.items()}
        result[key] = value
    return result


def _field_name(key: str) -> str:
    snake = _CAMEL_BOUNDARY.sub("_", key).lower()
    return _ALIASES.get(snake, snake)
