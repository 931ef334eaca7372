"""Git adapter for repository operations."""

from gitghost.adapters.git.repository import (
    GitCommandError,
    GitError,
    GitInvocationError,
    GitRepository,
    clone_from_config,
    create_temp_git_dir,
    run_git,
)
from gitghost.adapters.git.validation import GitValidator, Validator, validator_from_config

__all__ = [
    "GitCommandError",
    "GitError",
    "GitInvocationError",
    "GitRepository",
    "GitValidator",
    "Validator",
    "clone_from_config",
    "create_temp_git_dir",
    "run_git",
    "validator_from_config",
]
