from __future__ import annotations

from crel.core.result import Err, Ok
from crel.release.commits import BumpSeverity
from crel.release.semver import SemanticVersion
from crel.release.tags import TagResolver
from crel.release.walker import BumpDetails, derive_bump
from crel.test._fakes import FakeRepository


def _walk(repo: FakeRepository) -> BumpDetails:
    assert repo.head is not None
    result = derive_bump(repo, TagResolver(repo), repo.head)
    assert isinstance(result, Ok)
    return result.value


def test_fresh_history_without_tags() -> None:
    repo = FakeRepository()
    repo.commit("chore: z")
    repo.commit("fix: y")
    repo.commit("feat: x")

    details = _walk(repo)

    assert details.severity == BumpSeverity.MINOR
    assert details.commit_count == 3
    assert details.base_version == SemanticVersion(0, 0, 0)
    assert details.boundary is None


def test_stops_at_release_tag_and_excludes_boundary() -> None:
    repo = FakeRepository()
    repo.commit("feat!: ancient breaking change")
    repo.tag("v1.2.0")
    repo.commit("fix: a")
    repo.commit("docs: b")

    details = _walk(repo)

    assert details.severity == BumpSeverity.PATCH
    assert details.commit_count == 2
    assert details.base_version == SemanticVersion(1, 2, 0)
    assert details.boundary is not None and details.boundary.name == "v1.2.0"


def test_prerelease_tags_are_not_boundaries() -> None:
    repo = FakeRepository()
    repo.commit("feat: a")
    repo.tag("v1.0.0")
    repo.commit("fix: b")
    repo.tag("v1.0.1-rc.1")
    repo.commit("fix: c")

    details = _walk(repo)

    assert details.base_version == SemanticVersion(1, 0, 0)
    assert details.commit_count == 2


def test_highest_tag_on_boundary_commit_wins() -> None:
    repo = FakeRepository()
    repo.commit("feat: a")
    repo.tag("1.2.3")
    repo.tag("1.3.0")
    repo.tag("1.2.9")
    repo.commit("fix: b")

    assert _walk(repo).base_version == SemanticVersion(1, 3, 0)


def test_breaking_commit_anywhere_gives_major() -> None:
    repo = FakeRepository()
    repo.commit("feat: a")
    repo.tag("v0.4.0")
    repo.commit("fix(core): b\n\nBREAKING CHANGE: removed flag")
    repo.commit("feat: c")
    repo.commit("chore: d")

    details = _walk(repo)
    assert details.severity == BumpSeverity.MAJOR
    assert details.commit_count == 3


def test_non_conventional_and_unreadable_commits_are_counted_but_ignored() -> None:
    repo = FakeRepository()
    repo.commit("initial import")
    unreadable = repo.commit("feat!: would be major")
    repo.unreadable.add(unreadable)
    repo.commit("Merge pull request #3")

    details = _walk(repo)
    assert details.severity == BumpSeverity.PATCH
    assert details.commit_count == 3


def test_tag_on_diverged_branch_is_ignored() -> None:
    repo = FakeRepository()
    root = repo.commit("feat: root")
    repo.tag("v1.0.0")
    repo.commit("feat: side work")
    repo.tag("v5.0.0")
    main_tip = repo.commit("fix: mainline", parents=[root])

    details = derive_bump(repo, TagResolver(repo), main_tip)
    assert isinstance(details, Ok)
    assert details.value.base_version == SemanticVersion(1, 0, 0)
    assert details.value.commit_count == 1


def test_merge_walk_counts_both_sides_until_first_tag() -> None:
    repo = FakeRepository()
    base = repo.commit("feat: base")
    repo.tag("v2.0.0")
    left = repo.commit("fix: left", parents=[base])
    right = repo.commit("feat: right", parents=[base])
    repo.commit("Merge branch 'right'", parents=[left, right])

    details = _walk(repo)
    assert details.severity == BumpSeverity.MINOR
    assert details.base_version == SemanticVersion(2, 0, 0)


def test_walk_failure_propagates() -> None:
    repo = FakeRepository()
    head = repo.commit("feat: a")
    repo.failing.add("walk_ancestors")

    result = derive_bump(repo, TagResolver(repo), head)
    assert isinstance(result, Err)
    assert result.error.command == "rev-list"
