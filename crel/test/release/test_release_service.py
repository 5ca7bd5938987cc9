from __future__ import annotations

from pathlib import Path

from crel.core.config import CommitSignature, ReleaseConfig, VersionFileRule
from crel.core.result import Err, Ok
from crel.git.repository import GitOperationError
from crel.output.console import MockConsole
from crel.release.errors import VersionFilesFailed, VersionMatchError, VersionParseError
from crel.release.service import materialize_release
from crel.test._fakes import FakeRepository


def _config(*paths: str) -> ReleaseConfig:
    return ReleaseConfig(
        commit_signature=CommitSignature(name="bot", email="bot@example.com"),
        version_files=tuple(
            VersionFileRule(path=p, version_prefix='version = "', version_postfix='"') for p in paths
        ),
    )


def _repo(tmp_path: Path) -> FakeRepository:
    repo = FakeRepository(tmp_path)
    repo.commit("feat: a")
    return repo


def test_nothing_requested_is_a_no_op(tmp_path: Path) -> None:
    repo = _repo(tmp_path)
    console = MockConsole()

    result = materialize_release(
        repo, _config(), version="1.0.0", clean=True, bump_files=False, tag=False, console=console
    )

    assert isinstance(result, Ok)
    assert repo.events == []
    assert console.outputs == []


def test_commit_happens_before_tag(tmp_path: Path) -> None:
    (tmp_path / "a.toml").write_text('version = "0.1.0"\n', encoding="utf-8")
    repo = _repo(tmp_path)
    console = MockConsole()

    result = materialize_release(
        repo, _config("a.toml"), version="v0.2.0", clean=True, bump_files=True, tag=True, console=console
    )

    assert isinstance(result, Ok)
    assert repo.events == ["stage", "write-tree", "commit", "tag v0.2.0"]
    release_commit = repo.created_commits[0].id
    assert repo.created_tags[0].target == release_commit
    assert result.value.commit_id == release_commit
    assert result.value.patched_files == ("a.toml",)
    assert (tmp_path / "a.toml").read_text(encoding="utf-8") == 'version = "0.2.0"\n'
    assert "OK Tag created successfully! v0.2.0" in console.messages


def test_dirty_tree_skips_files_and_tag(tmp_path: Path) -> None:
    (tmp_path / "a.toml").write_text('version = "0.1.0"\n', encoding="utf-8")
    repo = _repo(tmp_path)
    console = MockConsole()

    result = materialize_release(
        repo, _config("a.toml"), version="0.2.0", clean=False, bump_files=True, tag=True, console=console
    )

    assert isinstance(result, Ok)
    assert result.value.skipped_dirty is True
    assert repo.events == []
    assert (tmp_path / "a.toml").read_text(encoding="utf-8") == 'version = "0.1.0"\n'
    assert console.has_warning()


def test_tag_only(tmp_path: Path) -> None:
    repo = _repo(tmp_path)
    head = repo.head

    result = materialize_release(
        repo, _config(), version="1.0.0", clean=True, bump_files=False, tag=True, console=MockConsole()
    )

    assert isinstance(result, Ok)
    assert repo.created_commits == []
    assert repo.created_tags[0].target == head


def test_version_file_failures_stop_before_commit(tmp_path: Path) -> None:
    (tmp_path / "a.toml").write_text('version = "0.1.0"\n', encoding="utf-8")
    (tmp_path / "b.toml").write_text("no version\n", encoding="utf-8")
    repo = _repo(tmp_path)

    result = materialize_release(
        repo,
        _config("a.toml", "b.toml", "c.toml"),
        version="0.2.0",
        clean=True,
        bump_files=True,
        tag=True,
        console=MockConsole(),
    )

    assert isinstance(result, Err)
    assert isinstance(result.error, VersionFilesFailed)
    assert len(result.error.errors) == 2
    assert isinstance(result.error.errors[0], VersionMatchError)
    assert repo.events == []
    assert (tmp_path / "a.toml").read_text(encoding="utf-8") == 'version = "0.2.0"\n'


def test_no_configured_files_warns_and_still_tags(tmp_path: Path) -> None:
    repo = _repo(tmp_path)
    console = MockConsole()

    result = materialize_release(
        repo, _config(), version="1.0.0", clean=True, bump_files=True, tag=True, console=console
    )

    assert isinstance(result, Ok)
    assert repo.events == ["tag 1.0.0"]
    assert any("no version_files" in m for m in console.messages)


def test_commit_failure_prevents_tag(tmp_path: Path) -> None:
    (tmp_path / "a.toml").write_text('version = "0.1.0"\n', encoding="utf-8")
    repo = _repo(tmp_path)
    repo.failing.add("create_commit")

    result = materialize_release(
        repo, _config("a.toml"), version="0.2.0", clean=True, bump_files=True, tag=True, console=MockConsole()
    )

    assert isinstance(result, Err)
    assert isinstance(result.error, GitOperationError)
    assert repo.created_tags == []


def test_invalid_version_writes_nothing(tmp_path: Path) -> None:
    (tmp_path / "a.toml").write_text('version = "0.1.0"\n', encoding="utf-8")
    repo = _repo(tmp_path)
    console = MockConsole()

    result = materialize_release(
        repo, _config("a.toml"), version="1.2", clean=True, bump_files=True, tag=True, console=console
    )

    assert result == Err(VersionParseError(text="1.2"))
    assert repo.events == []
    assert console.outputs == []
    assert (tmp_path / "a.toml").read_text(encoding="utf-8") == 'version = "0.1.0"\n'
