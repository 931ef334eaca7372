"""Configuration hierarchy and loading with environment variable support."""

import os
from pathlib import Path
from typing import Optional

from gitghost.models.config import GhostConfig
from gitghost.utils.logging import get_logger

logger = get_logger(__name__)


class ConfigError(Exception):
    """Configuration loading or validation error."""

    pass


def get_user_config_path() -> Path:
    """Get the path to the user-level config file.

    Returns:
        Path to ~/.git-ghost/config.yaml
    """
    return Path.home() / ".git-ghost" / "config.yaml"


def load_config(config_path: Optional[Path] = None) -> GhostConfig:
    """
    Load configuration with hierarchy: env vars > explicit file > user config > defaults.

    Priority order (highest to lowest):
    1. Environment variables (GIT_GHOST_*)
    2. Explicitly provided config_path parameter
    3. User-level config (~/.git-ghost/config.yaml)
    4. Built-in defaults

    Args:
        config_path: Optional explicit path to config file

    Returns:
        Loaded GhostConfig instance

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid
    """
    if config_path is not None and not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    if config_path is None:
        user_path = get_user_config_path()
        if user_path.exists():
            config_path = user_path

    if config_path is None:
        logger.debug("config_defaults_used")
        config = GhostConfig()
    else:
        try:
            config = GhostConfig.load(config_path)
        except Exception as e:
            raise ConfigError(f"Failed to load configuration from {config_path}: {e}") from e
        logger.debug("config_loaded", path=str(config_path))

    return _apply_env_overrides(config)


def _apply_env_overrides(config: GhostConfig) -> GhostConfig:
    """
    Apply environment variable overrides to configuration.

    Environment variables supported:
    - GIT_GHOST_GIT_PATH: Override git executable
    - GIT_GHOST_REMOTE: Override remote name
    - GIT_GHOST_TEMP_PREFIX: Override scratch directory prefix
    - GIT_GHOST_TEMP_DIR: Override scratch directory parent

    Args:
        config: Base configuration to override

    Returns:
        Configuration with environment variable overrides applied
    """
    if git_path := os.getenv("GIT_GHOST_GIT_PATH"):
        config.git.git_path = git_path

    if remote := os.getenv("GIT_GHOST_REMOTE"):
        config.git.remote = remote

    if prefix := os.getenv("GIT_GHOST_TEMP_PREFIX"):
        config.git.temp_dir_prefix = prefix

    if temp_dir := os.getenv("GIT_GHOST_TEMP_DIR"):
        config.git.temp_parent_dir = Path(temp_dir).expanduser().resolve()

    return config


def validate_config(config: GhostConfig) -> list[str]:
    """
    Validate configuration and return list of issues.

    Args:
        config: Configuration to validate

    Returns:
        List of validation error messages (empty if valid)
    """
    issues = []

    if not config.git.git_path:
        issues.append("Git executable path is empty")

    if not config.git.remote:
        issues.append("Git remote name is empty")

    if os.sep in config.git.temp_dir_prefix or "/" in config.git.temp_dir_prefix:
        issues.append(
            f"Temp directory prefix must not contain a path separator: "
            f"{config.git.temp_dir_prefix!r}"
        )

    parent = config.git.temp_parent_dir
    if parent is not None and not parent.is_dir():
        issues.append(f"Temp parent directory does not exist: {parent}")

    return issues
