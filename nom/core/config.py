"""
Configuration for nom.

Configuration is resolved once, at the process boundary, and passed to the
pipeline as a ``NomConfig``. Nothing below this layer reads the environment.

Precedence (lowest to highest):
    1. Built-in defaults
    2. YAML file (``--config PATH`` or ``<install_root>/config.yaml``)
    3. Environment variables (``NOM_HOME``, ``NOM_DIST_URL``, ``NOM_PLATFORM``)
    4. Explicit overrides from the command line

Example config.yaml:
    dist_url: https://nodejs.org/dist
    platform: linux-x64
    timeout: 60
    max_retries: 2
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .directory import get_install_root
from .exceptions import ConfigError
from .urls import NODE_DIST_URL

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.yaml"

ENV_HOME = "NOM_HOME"
ENV_DIST_URL = "NOM_DIST_URL"
ENV_PLATFORM = "NOM_PLATFORM"


@dataclass
class NomConfig:
    """Resolved settings for one nom invocation."""

    install_root: Path
    """Directory holding one subdirectory per installed version"""

    dist_url: str = NODE_DIST_URL
    """Base URL of the Node.js distribution server"""

    platform: Optional[str] = None
    """Artifact platform suffix; detected at runtime when None"""

    timeout: Optional[float] = None
    """Network timeout in seconds; None blocks indefinitely"""

    max_retries: int = 0
    """Extra fetch attempts after a network failure"""


def load_yaml_config(config_file: Path, required: bool = False) -> Dict[str, Any]:
    """
    Load and parse a YAML configuration file.

    Args:
        config_file: Path to YAML configuration file
        required: If True, raise error if file doesn't exist

    Returns:
        Configuration dictionary (empty dict if file doesn't exist and not required)

    Raises:
        ConfigError: If the file is required but missing, cannot be parsed,
            or does not contain a mapping
    """
    if not config_file.exists():
        if required:
            raise ConfigError(f"Configuration file not found: {config_file}")
        logger.debug(f"Config file not found (optional): {config_file}")
        return {}

    logger.debug(f"Loading configuration from {config_file}")

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_file}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read {config_file}: {e}") from e

    config = config or {}
    if not isinstance(config, dict):
        raise ConfigError(f"Configuration in {config_file} must be a mapping")
    return config


def _coerce_timeout(value: Any) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise ConfigError(f"timeout must be a positive number, got {value!r}")
    return float(value)


def _coerce_retries(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ConfigError(f"max_retries must be a non-negative integer, got {value!r}")
    return value


def build_config(values: Mapping[str, Any], install_root: Path) -> NomConfig:
    """
    Build a ``NomConfig`` from a raw mapping.

    Args:
        values: Raw settings (from YAML and/or environment)
        install_root: Install root to use when ``values`` has none

    Raises:
        ConfigError: If a value has the wrong type or an unknown key is present
    """
    known = {"install_root", "dist_url", "platform", "timeout", "max_retries"}
    unknown = set(values) - known
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")

    root = values.get("install_root") or install_root
    dist_url = values.get("dist_url") or NODE_DIST_URL
    platform = values.get("platform")

    if not isinstance(root, (str, Path)):
        raise ConfigError(f"install_root must be a path string, got {root!r}")
    if not isinstance(dist_url, str):
        raise ConfigError(f"dist_url must be a string, got {dist_url!r}")
    if platform is not None and not isinstance(platform, str):
        raise ConfigError(f"platform must be a string, got {platform!r}")

    return NomConfig(
        install_root=Path(root).expanduser(),
        dist_url=dist_url,
        platform=platform,
        timeout=_coerce_timeout(values.get("timeout")),
        max_retries=_coerce_retries(values.get("max_retries", 0)),
    )


def load_config(
    config_file: Optional[Path] = None,
    install_root: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> NomConfig:
    """
    Resolve configuration for this invocation.

    This is the only place the environment and the home directory are read.

    Args:
        config_file: Explicit config file (must exist). If None,
            ``<install_root>/config.yaml`` is used when present.
        install_root: Explicit install root (command-line override)
        environ: Environment mapping (``os.environ`` if None)

    Returns:
        Resolved NomConfig

    Raises:
        ConfigError: If the config file is invalid
        NoHomeDirectory: If no install root is given and no home is found
    """
    env = os.environ if environ is None else environ

    if install_root is not None:
        default_root = Path(install_root)
    elif env.get(ENV_HOME):
        default_root = Path(env[ENV_HOME])
    else:
        default_root = get_install_root()

    if config_file is not None:
        values = load_yaml_config(Path(config_file), required=True)
    else:
        values = load_yaml_config(default_root.expanduser() / CONFIG_FILENAME)

    values = dict(values)
    if env.get(ENV_HOME):
        values["install_root"] = env[ENV_HOME]
    if env.get(ENV_DIST_URL):
        values["dist_url"] = env[ENV_DIST_URL]
    if env.get(ENV_PLATFORM):
        values["platform"] = env[ENV_PLATFORM]
    if install_root is not None:
        values["install_root"] = str(install_root)

    config = build_config(values, default_root)
    logger.debug(f"Resolved configuration: {config}")
    return config
