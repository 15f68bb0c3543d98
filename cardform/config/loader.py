"""TOML configuration loader with deep merge support.

Looks for ``default.toml`` and ``{CARDFORM_ENV}.toml`` in the config directory
and merges the environment file over the defaults.
"""

import os
import tomllib
from pathlib import Path
from typing import Any

CONFIG_DIR_ENV = "CARDFORM_CONFIG_DIR"
ENVIRONMENT_ENV = "CARDFORM_ENV"
DEFAULT_ENVIRONMENT = "development"

# The project root ships config/default.toml next to the package
_PACKAGE_ROOT = Path(__file__).resolve().parents[2]


def get_config_dir() -> Path:
    """Get the configuration directory path.

    ``CARDFORM_CONFIG_DIR`` wins when set and must exist. Otherwise the first
    ``config/`` found walking up from the working directory is used, then the
    one beside the installed package.
    """
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        path = Path(override)
        if not path.is_dir():
            raise FileNotFoundError(f"Config directory not found: {override}")
        return path

    for parent in (Path.cwd(), *Path.cwd().parents):
        candidate = parent / "config"
        if (candidate / "default.toml").exists():
            return candidate

    return _PACKAGE_ROOT / "config"


def get_environment() -> str:
    """Get the current environment name, ``development`` when unset."""
    return os.environ.get(ENVIRONMENT_ENV, DEFAULT_ENVIRONMENT)


def load_toml(file_path: Path) -> dict[str, Any]:
    """Load a TOML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        tomllib.TOMLDecodeError: If the TOML syntax is invalid
    """
    if not file_path.is_file():
        raise FileNotFoundError(f"Configuration file not found: {file_path}")

    with file_path.open("rb") as f:
        return tomllib.load(f)


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return ``base`` updated with ``override``, merging nested tables.

    Neither argument is modified.
    """
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def load_config() -> dict[str, Any]:
    """Load and merge the TOML configuration.

    A missing ``default.toml`` yields an empty mapping so the pydantic
    defaults apply; the environment file is optional as well.
    """
    config_dir = get_config_dir()

    config: dict[str, Any] = {}
    default_path = config_dir / "default.toml"
    if default_path.is_file():
        config = load_toml(default_path)

    env_path = config_dir / f"{get_environment()}.toml"
    if env_path.is_file():
        config = deep_merge(config, load_toml(env_path))

    return config
