"""Git repository operations wrapper."""

import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import Optional, Union

from gitghost.models.config import GhostConfig
from gitghost.utils.logging import get_logger

logger = get_logger(__name__)

PathLike = Union[str, Path]


class GitError(Exception):
    """Git operation error."""

    pass


class GitInvocationError(GitError):
    """Git could not be started (not installed, permission denied)."""

    pass


class GitCommandError(GitError):
    """Git ran and exited with a non-zero status.

    The message is the captured stderr text verbatim, or ``exit status N``
    when git wrote nothing to stderr.
    """

    def __init__(self, args: list[str], returncode: int, stderr: str):
        self.command = args
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(stderr if stderr else f"exit status {returncode}")


def run_git(
    args: list[str],
    cwd: Optional[PathLike] = None,
    git_path: str = "git",
    capture_stdout: bool = False,
) -> Optional[str]:
    """
    Run a git command, capturing only its standard error.

    Args:
        args: Git command arguments (without 'git')
        cwd: Working tree to pin the command to with ``-C``
        git_path: Git executable to invoke
        capture_stdout: Return stdout instead of discarding it

    Returns:
        Captured stdout when capture_stdout is set, otherwise None

    Raises:
        GitInvocationError: If git cannot be started
        GitCommandError: If git exits with a non-zero status
    """
    cmd = [git_path]
    if cwd is not None:
        cmd += ["-C", str(cwd)]
    cmd += args

    logger.debug(
        "git_command_starting",
        command=" ".join(args),
        cwd=str(cwd) if cwd is not None else None,
    )

    try:
        result = subprocess.run(
            cmd,
            stdout=subprocess.PIPE if capture_stdout else subprocess.DEVNULL,
            stderr=subprocess.PIPE,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except OSError as e:
        logger.error("git_invocation_failed", git_path=git_path, error=str(e))
        raise GitInvocationError(f"Failed to run {git_path}: {e}") from e

    if result.returncode != 0:
        stderr = result.stderr or ""
        logger.error(
            "git_command_failed",
            command=" ".join(args),
            returncode=result.returncode,
            stderr=stderr[:500] if stderr else None,
        )
        raise GitCommandError(args, result.returncode, stderr)

    logger.debug(
        "git_command_completed",
        command=" ".join(args),
        returncode=result.returncode,
    )

    if capture_stdout:
        return str(result.stdout)
    return None


def create_temp_git_dir(
    parent_dir: Optional[PathLike],
    repo_url: str,
    branch: Optional[str] = None,
    git_path: str = "git",
    prefix: str = "git-ghost-",
) -> Path:
    """
    Clone a repository into a freshly allocated temporary directory.

    It is the caller's responsibility to remove the directory when no longer
    needed, e.g. ``shutil.rmtree(path)``. On clone failure the directory is
    removed before the error is raised.

    Args:
        parent_dir: Directory to create the clone under (None or "" = system temp dir)
        repo_url: Repository to clone
        branch: Branch to check out; ignored when empty
        git_path: Git executable to invoke
        prefix: Name prefix of the temporary directory

    Returns:
        Absolute path to the cloned working tree

    Raises:
        OSError: If the temporary directory cannot be created
        GitError: If the clone fails
    """
    # An empty parent means the system temp dir, not the process cwd
    dir_path = Path(tempfile.mkdtemp(prefix=prefix, dir=parent_dir or None)).resolve()
    logger.debug("git_temp_dir_created", path=str(dir_path))

    args = ["clone", "-q"]
    if branch:
        args += ["-b", branch]
    args += [repo_url, str(dir_path)]

    try:
        run_git(args, git_path=git_path)
    except BaseException:
        shutil.rmtree(dir_path, ignore_errors=True)
        logger.debug("git_temp_dir_removed", path=str(dir_path))
        raise

    logger.info("git_repository_cloned", repo_url=repo_url, branch=branch, path=str(dir_path))

    return dir_path


def clone_from_config(config: GhostConfig, repo_url: str, branch: Optional[str] = None) -> Path:
    """
    Clone into a scratch directory using the configured parent, prefix and executable.

    Args:
        config: Loaded configuration
        repo_url: Repository to clone
        branch: Branch to check out; ignored when empty

    Returns:
        Path to the cloned working tree, owned by the caller
    """
    return create_temp_git_dir(
        config.git.temp_parent_dir,
        repo_url,
        branch,
        git_path=config.git.git_path,
        prefix=config.git.temp_dir_prefix,
    )


class GitRepository:
    """Git operations bound to one working tree.

    Every operation is a direct git invocation pinned to the working tree
    with ``-C``. Calls against the same working tree must not overlap.
    """

    def __init__(
        self,
        repo_path: PathLike,
        git_path: str = "git",
        remote: str = "origin",
    ):
        """
        Initialize Git repository wrapper.

        Args:
            repo_path: Path to the working tree root
            git_path: Git executable to invoke
            remote: Remote used for push and pull
        """
        self.repo_path = Path(repo_path)
        self.git_path = git_path
        self.remote = remote
        self.logger = logger.bind(repo_path=str(self.repo_path))

    @classmethod
    def from_config(cls, repo_path: PathLike, config: GhostConfig) -> "GitRepository":
        """Build a repository wrapper using the configured executable and remote."""
        return cls(repo_path, git_path=config.git.git_path, remote=config.git.remote)

    def _run_git_command(self, args: list[str], capture_stdout: bool = False) -> Optional[str]:
        return run_git(
            args,
            cwd=self.repo_path,
            git_path=self.git_path,
            capture_stdout=capture_stdout,
        )

    def commit_file(self, filename: PathLike, message: str) -> None:
        """
        Stage and commit exactly one file.

        Args:
            filename: File path, relative to the working tree
            message: Commit message

        Raises:
            GitError: If staging or committing fails
        """
        self._run_git_command(["add", str(filename)])
        self._run_git_command(["commit", "-q", str(filename), "-m", message])

        self.logger.info("git_file_committed", filename=str(filename), message=message[:50])

    def push(self, refspec: str) -> None:
        """
        Push a refspec to the remote.

        Raises:
            GitError: If push fails
        """
        self._run_git_command(["push", self.remote, refspec])

        self.logger.info("git_refspec_pushed", refspec=refspec, remote=self.remote)

    def pull(self, refspec: str) -> None:
        """
        Pull a refspec from the remote.

        Raises:
            GitError: If pull fails
        """
        self._run_git_command(["pull", self.remote, refspec])

        self.logger.info("git_refspec_pulled", refspec=refspec, remote=self.remote)

    def commit_and_push(self, filename: PathLike, message: str, refspec: str) -> None:
        """
        Commit one file, then push. Nothing is pushed if the commit fails.

        Args:
            filename: File path, relative to the working tree
            message: Commit message
            refspec: Refspec to push

        Raises:
            GitError: From whichever step failed first
        """
        self.commit_file(filename, message)
        self.push(refspec)

    def create_orphan_branch(self, branch: str) -> None:
        """
        Switch the working tree onto a new branch with no history.

        Raises:
            GitError: If checkout fails
        """
        self._run_git_command(["checkout", "--orphan", branch])

        self.logger.info("git_orphan_branch_created", branch=branch)

    def head_commit(self) -> str:
        """
        Get the commit id HEAD points to.

        Returns:
            Full commit hash

        Raises:
            GitError: If HEAD cannot be resolved (e.g. unborn orphan branch)
        """
        output = self._run_git_command(["rev-parse", "HEAD"], capture_stdout=True)
        return (output or "").strip()
