"""Git repository backed by the git executable.

This module provides the Repository class, the concrete implementation of
:class:`crel.git.protocol.RepositoryProtocol`. Every operation shells out
to ``git -C <root>`` and returns a Result.

Usage:
    match Repository.open(Path(".")):
        case Ok(repo):
            head = repo.head_commit_id()
        case Err(e):
            print(f"Error: {e.message}")
"""

from __future__ import annotations

import os
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path

from crel.core.config import CommitSignature
from crel.core.result import Err, Ok, Result
from crel.platform.process import ProcessError
from crel.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0

__all__ = [
    "GitOperationError",
    "Repository",
]


@dataclass(frozen=True, slots=True)
class GitOperationError:
    """Error from a git operation.

    Attributes:
        command: The git subcommand that failed
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


class Repository:
    """Git repository abstraction.

    Attributes:
        path: Path to the work tree root
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    @classmethod
    def open(cls, path: Path) -> Result[Repository, GitOperationError]:
        """Open the repository containing path.

        Resolves the work tree root so relative version file paths are
        always taken from the top of the repository.
        """
        path = path.expanduser().resolve()
        if not path.is_dir():
            return Err(
                GitOperationError(
                    command="rev-parse --show-toplevel",
                    message=f"not a directory: {path}",
                )
            )
        result = run_process(
            ["git", "-C", str(path), "rev-parse", "--show-toplevel"],
            cwd=path,
            timeout=_GIT_TIMEOUT_SECONDS,
        )
        match result:
            case Err(e):
                return Err(_git_error("rev-parse --show-toplevel", e, f"not a git repository: {path}"))
            case Ok(stdout):
                return Ok(cls(Path(stdout.strip())))

    def head_commit_id(self) -> Result[str, GitOperationError]:
        """Return the full id of the commit HEAD points to."""
        return self._run_stripped(["rev-parse", "--verify", "HEAD^{commit}"], "HEAD has no commit")

    def is_working_tree_dirty(self) -> Result[bool, GitOperationError]:
        """Check for staged or unstaged changes to tracked files.

        Untracked files do not make the tree dirty.
        """
        result = self._run(["status", "--porcelain", "--untracked-files=no"])
        match result:
            case Err(e):
                return Err(_git_error("status", e, "git status failed"))
            case Ok(stdout):
                return Ok(stdout.strip() != "")

    def list_tag_references(self, pattern: str = "refs/tags") -> Result[list[str], GitOperationError]:
        """List full reference names under pattern (e.g. ``refs/tags/v1.0.0``)."""
        result = self._run(["for-each-ref", "--format=%(refname)", pattern])
        match result:
            case Err(e):
                return Err(_git_error("for-each-ref", e, "failed to list tags"))
            case Ok(stdout):
                return Ok([ln.strip() for ln in stdout.splitlines() if ln.strip()])

    def dereference_tag_to_commit(self, ref: str) -> Result[str, GitOperationError]:
        """Peel a tag reference (lightweight or annotated) to its commit id."""
        return self._run_stripped(
            ["rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}"],
            f"{ref} does not point to a commit",
        )

    def walk_ancestors(self, start_id: str) -> Result[Iterator[str], GitOperationError]:
        """Commit ids reachable from start_id, children before parents.

        The returned iterator is finite and can only be consumed once.
        """
        result = self._run(["rev-list", "--topo-order", start_id])
        match result:
            case Err(e):
                return Err(_git_error("rev-list", e, f"cannot walk history from {start_id}"))
            case Ok(stdout):
                return Ok(iter([ln.strip() for ln in stdout.splitlines() if ln.strip()]))

    def read_commit_message(self, commit_id: str) -> Result[str, GitOperationError]:
        result = self._run(["log", "-1", "--format=%B", commit_id])
        match result:
            case Err(e):
                return Err(_git_error("log", e, f"cannot read commit {commit_id}"))
            case Ok(stdout):
                return Ok(stdout)

    def create_annotated_tag(
        self,
        name: str,
        target: str,
        signer: CommitSignature,
        message: str,
    ) -> Result[str, GitOperationError]:
        """Create an annotated tag and return the tag object id."""
        result = self._run(["tag", "-a", name, target, "-m", message], signer=signer)
        if isinstance(result, Err):
            return Err(_git_error("tag", result.error, f"failed to create tag {name}"))
        return self._run_stripped(["rev-parse", "--verify", f"refs/tags/{name}"], "tag not found")

    def stage_paths(self, paths: Sequence[str]) -> Result[None, GitOperationError]:
        result = self._run(["add", "--", *paths])
        match result:
            case Err(e):
                return Err(_git_error("add", e, "failed to stage files"))
            case Ok(_):
                return Ok(None)

    def write_tree(self) -> Result[str, GitOperationError]:
        """Write the on-disk index as a tree object.

        A separate git process reads the index, so the tree always reflects
        the index as it is after staging.
        """
        return self._run_stripped(["write-tree"], "failed to write tree")

    def create_commit(
        self,
        parents: Sequence[str],
        tree: str,
        signer: CommitSignature,
        message: str,
    ) -> Result[str, GitOperationError]:
        """Create a commit object and move HEAD to it."""
        args = ["commit-tree", tree]
        for parent in parents:
            args += ["-p", parent]
        args += ["-m", message]
        created = self._run(args, signer=signer)
        if isinstance(created, Err):
            return Err(_git_error("commit-tree", created.error, "failed to create commit"))

        commit_id = created.value.strip()
        update = ["update-ref", "-m", f"commit: {message}", "HEAD", commit_id]
        if parents:
            update.append(parents[0])
        moved = self._run(update)
        if isinstance(moved, Err):
            return Err(_git_error("update-ref", moved.error, "failed to move HEAD"))
        return Ok(commit_id)

    def _run_stripped(self, args: list[str], fallback: str) -> Result[str, GitOperationError]:
        result = self._run(args)
        match result:
            case Err(e):
                return Err(_git_error(args[0], e, fallback))
            case Ok(stdout):
                return Ok(stdout.strip())

    def _run(
        self,
        args: list[str],
        *,
        signer: CommitSignature | None = None,
    ) -> Result[str, ProcessError]:
        """Run a git command in this repository."""
        env: dict[str, str] | None = None
        if signer is not None:
            env = {
                **os.environ,
                "GIT_AUTHOR_NAME": signer.name,
                "GIT_AUTHOR_EMAIL": signer.email,
                "GIT_COMMITTER_NAME": signer.name,
                "GIT_COMMITTER_EMAIL": signer.email,
            }
        return run_process(
            ["git", "-C", str(self.path), *args],
            cwd=self.path,
            env=env,
            timeout=_GIT_TIMEOUT_SECONDS,
        )


def _git_error(command: str, e: ProcessError, fallback: str) -> GitOperationError:
    return GitOperationError(
        command=command,
        message=e.detail or fallback,
        returncode=e.returncode,
    )
