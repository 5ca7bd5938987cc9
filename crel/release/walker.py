"""Commit walk and bump accumulation.

History is walked from a start commit towards the root until the first
commit carrying a release tag. Every commit before that boundary votes on
the bump severity.
"""

from __future__ import annotations

from dataclasses import dataclass

from crel.core.result import Err, Ok, Result
from crel.git.protocol import RepositoryProtocol
from crel.git.repository import GitOperationError
from crel.release.commits import BumpSeverity, classify
from crel.release.semver import ZERO_VERSION, SemanticVersion
from crel.release.tags import TagCandidate, TagResolver, determine_current_version

__all__ = ["BumpDetails", "derive_bump"]


@dataclass(frozen=True, slots=True)
class BumpDetails:
    """Outcome of a walk.

    Attributes:
        severity: Highest severity seen since the boundary
        base_version: Version of the boundary tag, 0.0.0 without one
        commit_count: Commits walked, boundary excluded
        boundary: Winning tag at the boundary commit, if any
    """

    severity: BumpSeverity
    base_version: SemanticVersion
    commit_count: int
    boundary: TagCandidate | None = None


def derive_bump(
    repo: RepositoryProtocol,
    resolver: TagResolver,
    start_commit: str,
) -> Result[BumpDetails, GitOperationError]:
    """Walk ancestry from start_commit (inclusive) to the nearest release tag.

    Returns as soon as a tagged commit is reached, so tags on unrelated
    branches or further back are never looked at.
    """
    walk = repo.walk_ancestors(start_commit)
    if isinstance(walk, Err):
        return walk

    severity = BumpSeverity.PATCH
    count = 0
    for commit_id in walk.value:
        tags = resolver.release_tags_at(commit_id)
        if isinstance(tags, Err):
            return tags
        if tags.value:
            boundary = determine_current_version(tags.value)
            return Ok(
                BumpDetails(
                    severity=severity,
                    base_version=boundary.version,
                    commit_count=count,
                    boundary=boundary,
                )
            )

        message = repo.read_commit_message(commit_id)
        if isinstance(message, Ok):
            severity = classify(message.value, severity)
        count += 1

    return Ok(BumpDetails(severity=severity, base_version=ZERO_VERSION, commit_count=count))
