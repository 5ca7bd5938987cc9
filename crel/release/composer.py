"""Next-version composition.

Usage:
    match derive_version(repo, is_release=False):
        case Ok(text):
            print(text)  # e.g. 1.3.0-4+a1b2c3d
        case Err(e):
            print(e.message)
"""

from __future__ import annotations

from dataclasses import dataclass

from crel.core.result import Err, Ok, Result
from crel.git.protocol import RepositoryProtocol
from crel.git.repository import GitOperationError
from crel.release.commits import BumpSeverity
from crel.release.semver import SemanticVersion
from crel.release.tags import TagResolver, get_head_version
from crel.release.walker import BumpDetails, derive_bump

__all__ = [
    "BUILD_ID_LENGTH",
    "VersionPlan",
    "apply_lead_v",
    "compose_next",
    "derive_version",
    "finalize",
    "plan_version",
]

BUILD_ID_LENGTH = 7


@dataclass(frozen=True, slots=True)
class VersionPlan:
    """A derived version and how it was reached.

    Attributes:
        text: Version to print (tag text verbatim when HEAD is released)
        clean: Working tree had no tracked changes
        head_tag: Release tag text at HEAD when it short-circuited the walk
        bump: Walk outcome, None when no walk was needed
    """

    text: str
    clean: bool
    head_tag: str | None = None
    bump: BumpDetails | None = None


def compose_next(
    base: SemanticVersion,
    severity: BumpSeverity,
    *,
    commit_count: int,
    commit_id: str,
) -> SemanticVersion:
    """Bump base by severity and attach walk metadata.

    The prerelease is the commit count and the build is the short commit id.
    """
    match severity:
        case BumpSeverity.MAJOR:
            bumped = SemanticVersion(base.major + 1, 0, 0)
        case BumpSeverity.MINOR:
            bumped = SemanticVersion(base.major, base.minor + 1, 0)
        case BumpSeverity.PATCH:
            bumped = SemanticVersion(base.major, base.minor, base.patch + 1)
        case _:
            raise AssertionError(f"unexpected bump severity: {severity}")
    return bumped.with_metadata(
        prerelease=(str(commit_count),),
        build=commit_id[:BUILD_ID_LENGTH],
    )


def finalize(version: SemanticVersion, is_release: bool) -> SemanticVersion:
    if not is_release:
        return version
    return version.with_metadata(prerelease=(), build="")


def plan_version(
    repo: RepositoryProtocol,
    *,
    is_release: bool,
) -> Result[VersionPlan, GitOperationError]:
    dirty = repo.is_working_tree_dirty()
    if isinstance(dirty, Err):
        return dirty
    clean = not dirty.value

    resolver = TagResolver(repo)
    if clean:
        head_version = get_head_version(repo, resolver)
        if isinstance(head_version, Err):
            return head_version
        if head_version.value is not None:
            return Ok(VersionPlan(text=head_version.value, clean=True, head_tag=head_version.value))

    head = repo.head_commit_id()
    if isinstance(head, Err):
        return head

    bump = derive_bump(repo, resolver, head.value)
    if isinstance(bump, Err):
        return bump

    details = bump.value
    version = compose_next(
        details.base_version,
        details.severity,
        commit_count=details.commit_count,
        commit_id=head.value,
    )
    version = finalize(version, is_release and clean)
    return Ok(VersionPlan(text=str(version), clean=clean, bump=details))


def derive_version(repo: RepositoryProtocol, *, is_release: bool) -> Result[str, GitOperationError]:
    """Next version for the repository as text."""
    plan = plan_version(repo, is_release=is_release)
    if isinstance(plan, Err):
        return plan
    return Ok(plan.value.text)


def apply_lead_v(text: str, lead_v: bool) -> str:
    """Prefix a `v` unless one (either case) is already there."""
    if lead_v and text[:1] not in ("v", "V"):
        return f"v{text}"
    return text
