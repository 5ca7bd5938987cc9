"""Release commit and tag creation."""

from __future__ import annotations

from collections.abc import Sequence

from crel.core.config import CommitSignature, VersionFileRule
from crel.core.result import Err, Result
from crel.git.protocol import RepositoryProtocol
from crel.git.repository import GitOperationError

__all__ = ["RELEASE_COMMIT_MESSAGE", "commit_version_files", "tag_release"]

RELEASE_COMMIT_MESSAGE = "chore(release): created release {version}"


def tag_release(
    repo: RepositoryProtocol,
    version: str,
    signer: CommitSignature,
) -> Result[str, GitOperationError]:
    """Create annotated tag `version` at HEAD with an empty message."""
    head = repo.head_commit_id()
    if isinstance(head, Err):
        return head
    return repo.create_annotated_tag(version, head.value, signer, "")


def commit_version_files(
    repo: RepositoryProtocol,
    version: str,
    rules: Sequence[VersionFileRule],
    signer: CommitSignature,
) -> Result[str, GitOperationError]:
    """Commit exactly the version files on top of HEAD.

    The tree is written after staging from the on-disk index, so nothing
    staged earlier by a stale index snapshot sneaks in.
    """
    head = repo.head_commit_id()
    if isinstance(head, Err):
        return head

    paths = list(dict.fromkeys(rule.path for rule in rules))
    staged = repo.stage_paths(paths)
    if isinstance(staged, Err):
        return staged

    tree = repo.write_tree()
    if isinstance(tree, Err):
        return tree

    return repo.create_commit(
        [head.value],
        tree.value,
        signer,
        RELEASE_COMMIT_MESSAGE.format(version=version),
    )
