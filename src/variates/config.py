"""
Configuration for the variates package.

Settings are read from config/config.yaml under the resources root, with a few
environment overrides:

- VARIATES_ROOT: directory containing config/ and profiles/
- VARIATES_SEED: seed for the process-wide default source ("none" for entropy)
- VARIATES_LOG_LEVEL: log level used by the CLI

When running from source, resource/ at project root is used.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml


def get_resources_root() -> Path:
    """Return the root directory for config and profile resources.

    Resolution order:
    1. VARIATES_ROOT env var
    2. resource/ under directory containing pyproject.toml (when running from source)
    3. variates/resources/ next to this package (when installed)
    """
    env_root = os.environ.get("VARIATES_ROOT")
    if env_root:
        p = Path(env_root).resolve()
        if p.is_dir():
            return p
    here = Path(__file__).resolve().parent
    for candidate in [here, *here.parents]:
        if (candidate / "pyproject.toml").is_file():
            return candidate / "resource"
    return Path(__file__).resolve().parent / "resources"


_RESOURCES_ROOT = get_resources_root()
CONFIG_PATH = _RESOURCES_ROOT / "config" / "config.yaml"
PROFILES_DIR = _RESOURCES_ROOT / "profiles"

DEFAULT_COUNT = 10
DEFAULT_LOG_LEVEL = "WARNING"


def load_yaml(path: Path, default: Any = None) -> Any:
    """Load YAML file; return default on missing file or parse error."""
    if default is None:
        default = {}
    if not path.exists():
        return default
    try:
        with path.open(encoding="utf-8") as f:
            data: Any = yaml.safe_load(f)
    except (OSError, yaml.YAMLError):
        return default
    return data if isinstance(data, dict) else default


def _parse_seed(raw: Any) -> int | None:
    if raw is None:
        return None
    if isinstance(raw, bool):
        raise ValueError(f"Seed must be an integer, got {raw!r}")
    if isinstance(raw, int):
        return raw
    text = str(raw).strip().lower()
    if text in ("", "none", "null"):
        return None
    try:
        return int(text)
    except ValueError:
        raise ValueError(f"Seed must be an integer, got {raw!r}") from None


@dataclass
class Settings:
    """Resolved runtime settings."""

    seed: int | None = None
    default_count: int = DEFAULT_COUNT
    log_level: str = DEFAULT_LOG_LEVEL


def load_settings(config_path: Path | None = None) -> Settings:
    """Read config.yaml and apply environment overrides."""
    data = load_yaml(config_path or CONFIG_PATH)
    seed = _parse_seed(data.get("seed"))
    env_seed = os.environ.get("VARIATES_SEED")
    if env_seed is not None:
        seed = _parse_seed(env_seed)

    count = data.get("default_count", DEFAULT_COUNT)
    if not isinstance(count, int) or count < 0:
        count = DEFAULT_COUNT

    log_level = os.environ.get("VARIATES_LOG_LEVEL") or data.get("log_level") or DEFAULT_LOG_LEVEL
    return Settings(seed=seed, default_count=count, log_level=str(log_level).upper())
