"""Environment checks for the git executable and commit-ish existence."""

from abc import ABC, abstractmethod
from typing import Optional

from gitghost.adapters.git.repository import PathLike, run_git
from gitghost.models.config import GhostConfig


class Validator(ABC):
    """Checks run before trusting that git operations will succeed.

    Calling code takes a Validator instance rather than probing git itself,
    so test suites can pass a stand-in that never starts a process.
    """

    @abstractmethod
    def validate_git(self) -> None:
        """Ensure git is installed and executable.

        Raises:
            GitError: If the version query fails
        """
        pass

    @abstractmethod
    def validate_commitish(self, commitish: str) -> None:
        """Ensure a commit-ish resolves to an existing object.

        Args:
            commitish: Hash, branch name or tag

        Raises:
            GitError: If the object does not exist
        """
        pass


class GitValidator(Validator):
    """Validator backed by real git invocations."""

    def __init__(self, git_path: str = "git", repo_path: Optional[PathLike] = None) -> None:
        """
        Args:
            git_path: Git executable to probe
            repo_path: Repository to resolve commit-ishes in (default: process cwd)
        """
        self.git_path = git_path
        self.repo_path = repo_path

    def validate_git(self) -> None:
        """
        Probe the executable with ``git version``.

        Raises:
            GitInvocationError: If git cannot be started
            GitCommandError: If the version query exits non-zero
        """
        run_git(["version"], git_path=self.git_path)

    def validate_commitish(self, commitish: str) -> None:
        """
        Check the object exists with ``git cat-file -e``.

        Resolved in repo_path when set, otherwise in the repository
        containing the process working directory.

        Args:
            commitish: Hash, branch name or tag

        Raises:
            GitInvocationError: If git cannot be started
            GitCommandError: If the object does not exist
        """
        run_git(["cat-file", "-e", commitish], cwd=self.repo_path, git_path=self.git_path)


def validator_from_config(
    config: GhostConfig, repo_path: Optional[PathLike] = None
) -> GitValidator:
    """Build a GitValidator using the configured git executable."""
    return GitValidator(git_path=config.git.git_path, repo_path=repo_path)
