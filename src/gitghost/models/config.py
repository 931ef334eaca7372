"""Pydantic configuration models for git-ghost."""

from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, field_validator


class GitConfig(BaseModel):
    """Git invocation configuration."""

    git_path: str = Field(default="git", description="Git executable to invoke")
    remote: str = Field(default="origin", description="Remote used for push and pull")
    temp_dir_prefix: str = Field(
        default="git-ghost-", description="Prefix for scratch clone directories"
    )
    temp_parent_dir: Optional[Path] = Field(
        default=None,
        description="Default parent for scratch clone directories (None = system temp dir)",
    )

    @field_validator("temp_parent_dir", mode="before")
    @classmethod
    def resolve_parent_dir(cls, v: Any) -> Any:
        """Resolve the parent directory to an absolute path."""
        if isinstance(v, (str, Path)) and str(v):
            return Path(v).expanduser().resolve()
        return v

    @field_validator("git_path", "remote")
    @classmethod
    def strip_value(cls, v: str) -> str:
        """Strip surrounding whitespace."""
        return v.strip()


class GhostConfig(BaseModel):
    """Root configuration for git-ghost."""

    version: str = Field(default="1.0", description="Config version")
    git: GitConfig = Field(default_factory=GitConfig)

    def save(self, path: Path) -> None:
        """
        Save configuration to a YAML file.

        Args:
            path: Path to save configuration file
        """
        path.parent.mkdir(parents=True, exist_ok=True)

        config_dict = self.model_dump(mode="json", exclude_none=True)

        with open(path, "w") as f:
            yaml.safe_dump(config_dict, f, default_flow_style=False, sort_keys=False)

    @classmethod
    def load(cls, path: Path) -> "GhostConfig":
        """
        Load configuration from a YAML file.

        Args:
            path: Path to configuration file

        Returns:
            Loaded GhostConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with open(path) as f:
            config_dict = yaml.safe_load(f) or {}

        if not isinstance(config_dict, dict):
            raise ValueError(f"Configuration must be a mapping, got {type(config_dict).__name__}")

        return cls(**config_dict)
