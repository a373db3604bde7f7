"""
Run configuration for setup-taskfile.

Settings come from, in order of precedence: command-line arguments, action
inputs (INPUT_* variables), an optional YAML config file, and defaults taken
from the runner environment.

Example config file (.setup-taskfile.yaml):

    version: "3.46.4"
    tool-cache: /opt/hostedtoolcache
    api-url: https://github.example.com/api/v3
"""

import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from setup_taskfile.core.exceptions import ConfigurationError
from setup_taskfile.github.actions import RunnerEnvironment
from setup_taskfile.github.releases import DEFAULT_API_URL

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = ".setup-taskfile.yaml"
CONFIG_KEYS = ("version", "tool-cache", "api-url")


@dataclass(frozen=True)
class SetupConfig:
    """
    Settings for one setup run.

    Attributes:
        version: Requested version ('latest', '3.46.4' or 'v3.46.4')
        github_token: Token for the release API, or None
        tool_cache_dir: Root of the persistent tool cache
        temp_dir: Scratch directory for downloads and extraction
        api_url: GitHub REST API base URL
    """

    version: str
    github_token: Optional[str]
    tool_cache_dir: Path
    temp_dir: Path
    api_url: str = DEFAULT_API_URL


def get_global_cache_dir(environ: Mapping[str, str]) -> Path:
    """
    Get the per-user tool cache used outside a runner.

    Returns:
        - Windows: %USERPROFILE%\\.setup-taskfile\\tool-cache
        - Linux/macOS: ~/.setup-taskfile/tool-cache

    Raises:
        ConfigurationError: If USERPROFILE is not set on Windows
    """
    if os.name == "nt":  # Windows
        user_profile = environ.get("USERPROFILE")
        if not user_profile:
            raise ConfigurationError(
                "USERPROFILE environment variable is not set. "
                "Cannot determine global tool cache directory."
            )
        return Path(user_profile) / ".setup-taskfile" / "tool-cache"
    else:  # Linux/macOS
        return Path.home() / ".setup-taskfile" / "tool-cache"


def load_yaml_config(config_file: Path, required: bool = False) -> Dict[str, Any]:
    """
    Load and parse a YAML configuration file.

    Args:
        config_file: Path to YAML configuration file
        required: If True, raise error if file doesn't exist

    Returns:
        Configuration dictionary (empty dict if file doesn't exist and not required)

    Raises:
        ConfigurationError: If the file is required but missing, is not valid
            YAML, is not a mapping, has unknown keys or a non-string version
    """
    if not config_file.exists():
        if required:
            raise ConfigurationError(f"Configuration file not found: {config_file}")
        logger.debug(f"Config file not found (optional): {config_file}")
        return {}

    logger.debug(f"Loading configuration from {config_file}")

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.debug(f"Failed to parse YAML: {e}")
        raise ConfigurationError(f"Invalid YAML in {config_file}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Failed to read {config_file}: {e}") from e

    config = config or {}
    if not isinstance(config, dict):
        raise ConfigurationError(f"Configuration in {config_file} must be a mapping")

    if "github-token" in config:
        raise ConfigurationError(
            "github-token cannot be set in a config file; "
            "use the action input or GITHUB_TOKEN"
        )

    unknown = sorted(str(key) for key in config if key not in CONFIG_KEYS)
    if unknown:
        raise ConfigurationError(
            f"Unknown configuration keys in {config_file}: {', '.join(unknown)}"
        )

    # YAML reads an unquoted 3.40 as the float 3.4
    version = config.get("version")
    if version is not None and not isinstance(version, str):
        raise ConfigurationError(
            f"version in {config_file} must be a quoted string, "
            f"e.g. version: \"3.46.4\" (got {type(version).__name__} {version!r})"
        )

    return {key: str(value) for key, value in config.items() if value is not None}


def load_config(
    args=None,
    environment: Optional[RunnerEnvironment] = None,
    config_file: Optional[Path] = None,
) -> SetupConfig:
    """
    Build the run configuration.

    Args:
        args: Parsed command-line arguments (optional)
        environment: Runner environment (default: the current process)
        config_file: YAML config file; overrides args.config

    Returns:
        SetupConfig for the run

    Raises:
        ConfigurationError: If the config file cannot be used
    """
    environment = environment or RunnerEnvironment()
    environ = environment.environ

    if config_file is None and getattr(args, "config", None):
        config_file = Path(args.config)

    if config_file is not None:
        file_config = load_yaml_config(Path(config_file), required=True)
    else:
        file_config = load_yaml_config(Path(DEFAULT_CONFIG_FILE))

    def pick(arg_name: str, input_name: Optional[str], file_key: Optional[str]):
        value = getattr(args, arg_name, None)
        if value:
            return str(value)
        if input_name:
            value = environment.get_input(input_name)
            if value:
                return value
        if file_key:
            return file_config.get(file_key) or None
        return None

    version = pick("task_version", "version", "version") or "latest"
    github_token = pick("github_token", "github-token", None) or environ.get(
        "GITHUB_TOKEN"
    )

    tool_cache = (
        pick("tool_cache", None, "tool-cache")
        or environ.get("RUNNER_TOOL_CACHE")
        or get_global_cache_dir(environ)
    )
    temp_dir = (
        pick("temp_dir", None, None)
        or environ.get("RUNNER_TEMP")
        or Path(tempfile.gettempdir()) / "setup-taskfile"
    )
    api_url = (
        pick("api_url", None, "api-url")
        or environ.get("GITHUB_API_URL")
        or DEFAULT_API_URL
    )

    config = SetupConfig(
        version=version,
        github_token=github_token or None,
        tool_cache_dir=Path(tool_cache),
        temp_dir=Path(temp_dir),
        api_url=api_url,
    )

    logger.debug(
        f"Configuration: version={config.version}, "
        f"tool_cache={config.tool_cache_dir}, temp={config.temp_dir}, "
        f"api_url={config.api_url}, token={'set' if config.github_token else 'unset'}"
    )
    return config
