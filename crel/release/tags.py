"""Tag resolution.

Maps commits to the version tags pointing at them. Tag references are
listed and peeled once per run, then looked up per commit while walking
history.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from crel.core.result import Err, Ok, Result
from crel.git.protocol import RepositoryProtocol
from crel.git.repository import GitOperationError
from crel.release.semver import SemanticVersion, parse_tag_version

__all__ = [
    "TAG_REF_PREFIX",
    "TagCandidate",
    "TagResolver",
    "determine_current_version",
    "get_head_version",
    "parse_tag_name",
]

TAG_REF_PREFIX = "refs/tags/"


@dataclass(frozen=True, slots=True)
class TagCandidate:
    ref: str
    commit_id: str
    version: SemanticVersion

    @property
    def name(self) -> str:
        return self.ref.removeprefix(TAG_REF_PREFIX)

    @property
    def is_release(self) -> bool:
        return self.version.is_release


def parse_tag_name(name: str) -> SemanticVersion | None:
    """Parse a tag (short or full ref name) into a version, None if it is not one."""
    return parse_tag_version(name.removeprefix(TAG_REF_PREFIX))


class TagResolver:
    """Index of version tags by target commit.

    Tags whose name is not a version, or that do not peel to a commit, are
    left out silently.
    """

    def __init__(self, repo: RepositoryProtocol) -> None:
        self._repo = repo
        self._by_commit: dict[str, list[TagCandidate]] | None = None

    def resolve_tags_at(self, commit_id: str) -> Result[list[TagCandidate], GitOperationError]:
        """Every version tag whose target is commit_id."""
        index = self._index()
        if isinstance(index, Err):
            return index
        return Ok(list(index.value.get(commit_id, ())))

    def release_tags_at(self, commit_id: str) -> Result[list[TagCandidate], GitOperationError]:
        """Version tags at commit_id without prerelease or build metadata."""
        tags = self.resolve_tags_at(commit_id)
        if isinstance(tags, Err):
            return tags
        return Ok([t for t in tags.value if t.is_release])

    def _index(self) -> Result[dict[str, list[TagCandidate]], GitOperationError]:
        if self._by_commit is not None:
            return Ok(self._by_commit)

        refs = self._repo.list_tag_references("refs/tags")
        if isinstance(refs, Err):
            return refs

        by_commit: dict[str, list[TagCandidate]] = {}
        for ref in refs.value:
            version = parse_tag_name(ref)
            if version is None:
                continue
            target = self._repo.dereference_tag_to_commit(ref)
            if isinstance(target, Err):
                continue
            by_commit.setdefault(target.value, []).append(
                TagCandidate(ref=ref, commit_id=target.value, version=version)
            )

        self._by_commit = by_commit
        return Ok(by_commit)


def determine_current_version(tags: Sequence[TagCandidate]) -> TagCandidate:
    """Pick the highest precedence tag; ties go to the greatest ref name.

    Callers must pass at least one tag.
    """
    if not tags:
        raise AssertionError("determine_current_version called without tags")
    return max(tags, key=lambda t: (t.version.precedence(), t.ref))


def get_head_version(
    repo: RepositoryProtocol,
    resolver: TagResolver | None = None,
) -> Result[str | None, GitOperationError]:
    """Text of the winning release tag at HEAD, or None when HEAD is untagged."""
    head = repo.head_commit_id()
    if isinstance(head, Err):
        return head

    tags = (resolver or TagResolver(repo)).release_tags_at(head.value)
    if isinstance(tags, Err):
        return tags
    if not tags.value:
        return Ok(None)
    return Ok(determine_current_version(tags.value).version.text)
