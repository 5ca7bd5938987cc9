"""Release materialization sequence.

Runs the optional steps after a version has been derived, in the order
that keeps the tag on the bump commit: patch files, commit them, tag.
"""

from __future__ import annotations

from dataclasses import dataclass

from crel.core.config import ReleaseConfig
from crel.core.result import Err, Ok, Result
from crel.git.protocol import RepositoryProtocol
from crel.output.console import ConsoleProtocol, Style
from crel.release.errors import MaterializeError, VersionFilesFailed
from crel.release.materialize import commit_version_files, tag_release
from crel.release.semver import parse_version
from crel.release.version_files import apply_version_files


@dataclass(frozen=True, slots=True)
class MaterializeReport:
    skipped_dirty: bool = False
    patched_files: tuple[str, ...] = ()
    commit_id: str | None = None
    tag_id: str | None = None


def materialize_release(
    repo: RepositoryProtocol,
    config: ReleaseConfig,
    *,
    version: str,
    clean: bool,
    bump_files: bool,
    tag: bool,
    console: ConsoleProtocol,
) -> Result[MaterializeReport, MaterializeError]:
    """Patch, commit and tag according to the requested steps.

    A dirty working tree skips every step: version files are not touched
    and no commit or tag is created. Any version file failure stops the run
    before the commit. A version that is not semver is rejected before
    anything is written.
    """
    if not (bump_files or tag):
        return Ok(MaterializeReport())

    parsed = parse_version(version)
    if isinstance(parsed, Err):
        return parsed

    if not clean:
        console.warning("working tree has uncommitted changes; skipping version files and tag")
        return Ok(MaterializeReport(skipped_dirty=True))

    patched: tuple[str, ...] = ()
    commit_id: str | None = None
    if bump_files:
        rules = config.version_files
        if not rules:
            console.warning("no version_files configured; nothing to bump")
        else:
            errors = apply_version_files(repo.path, version, rules)
            if errors:
                return Err(VersionFilesFailed(errors=tuple(errors)))
            patched = tuple(rule.path for rule in rules)
            console.success("Version files updated!")
            for path in patched:
                console.print(f"  {path}", Style.DIM)

            committed = commit_version_files(repo, version, rules, config.commit_signature)
            if isinstance(committed, Err):
                return committed
            commit_id = committed.value
            console.success(f"Release commit created {commit_id[:7]}")

    tag_id: str | None = None
    if tag:
        tagged = tag_release(repo, version, config.commit_signature)
        if isinstance(tagged, Err):
            return tagged
        tag_id = tagged.value
        console.success(f"Tag created successfully! {version}")

    return Ok(MaterializeReport(patched_files=patched, commit_id=commit_id, tag_id=tag_id))
