"""Repository capability consumed by the release engine.

The engine never talks to git directly; it is handed something that
satisfies :class:`RepositoryProtocol`. :class:`crel.git.repository.Repository`
is the production implementation, tests use an in-memory fake.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from crel.core.result import Result

if TYPE_CHECKING:
    from crel.core.config import CommitSignature
    from crel.git.repository import GitOperationError

__all__ = ["RepositoryProtocol"]


class RepositoryProtocol(Protocol):
    """Read/write access to commit graph, refs and working tree status."""

    @property
    def path(self) -> Path:
        """Work tree root."""
        ...

    def head_commit_id(self) -> Result[str, GitOperationError]: ...

    def is_working_tree_dirty(self) -> Result[bool, GitOperationError]: ...

    def list_tag_references(self, pattern: str = "refs/tags") -> Result[list[str], GitOperationError]: ...

    def dereference_tag_to_commit(self, ref: str) -> Result[str, GitOperationError]: ...

    def walk_ancestors(self, start_id: str) -> Result[Iterator[str], GitOperationError]:
        """Ancestors of start_id (inclusive), reverse topological order."""
        ...

    def read_commit_message(self, commit_id: str) -> Result[str, GitOperationError]: ...

    def create_annotated_tag(
        self,
        name: str,
        target: str,
        signer: CommitSignature,
        message: str,
    ) -> Result[str, GitOperationError]: ...

    def stage_paths(self, paths: Sequence[str]) -> Result[None, GitOperationError]: ...

    def write_tree(self) -> Result[str, GitOperationError]: ...

    def create_commit(
        self,
        parents: Sequence[str],
        tree: str,
        signer: CommitSignature,
        message: str,
    ) -> Result[str, GitOperationError]: ...
