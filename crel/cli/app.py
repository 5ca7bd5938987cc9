from __future__ import annotations

from pathlib import Path
from typing import NoReturn

import typer

from crel import __version__
from crel.core.config import CONFIG_FILENAME, ReleaseConfig, load_config, load_config_or_default
from crel.core.errors import ErrorCode
from crel.core.result import Err, Result
from crel.git.repository import Repository
from crel.output.console import ConsoleProtocol, RichConsole, Style
from crel.output.errors import CrelError, error_exit_code, print_error
from crel.release.composer import VersionPlan, apply_lead_v, plan_version
from crel.release.service import materialize_release


app = typer.Typer(
    add_completion=False,
    no_args_is_help=False,
    rich_markup_mode="rich",
    help="Derive the next semantic version from conventional commits.",
)


def _exit_on_error[T](result: Result[T, CrelError], console: ConsoleProtocol) -> T:
    if isinstance(result, Err):
        _fail(result.error, console)
    return result.value


def _fail(error: CrelError, console: ConsoleProtocol) -> NoReturn:
    print_error(error, console)
    raise typer.Exit(code=error_exit_code(error))


def _load_config(
    config_path: Path | None,
    repo_root: Path,
    console: ConsoleProtocol,
) -> ReleaseConfig:
    if config_path is not None:
        return _exit_on_error(load_config(config_path), console)

    default_path = repo_root / CONFIG_FILENAME
    if not default_path.exists():
        console.info(f"{CONFIG_FILENAME} not found, using default configuration")
    return _exit_on_error(load_config_or_default(default_path), console)


def _print_plan(plan: VersionPlan, console: ConsoleProtocol) -> None:
    if plan.head_tag is not None:
        console.print(f"HEAD is tagged {plan.head_tag} and the tree is clean", Style.DIM)
        return
    bump = plan.bump
    if bump is None:
        return
    base = bump.boundary.name if bump.boundary is not None else f"{bump.base_version} (no release tag)"
    console.print(f"base: {base}", Style.DIM)
    console.print(f"bump: {bump.severity} over {bump.commit_count} commit(s)", Style.DIM)
    if not plan.clean:
        console.print("working tree is dirty", Style.DIM)


@app.command()
def main_command(
    path: Path = typer.Argument(Path("."), help="Path to the target git repository."),
    release: bool = typer.Option(
        False, "--release", "-r", help="Generate the final release version (no prerelease/build)."
    ),
    tag: bool = typer.Option(
        False, "--tag", "-t", help="Tag the current commit with the release version."
    ),
    lead_v: bool = typer.Option(
        False, "--lead-v", "-v", help="Prefix the generated version with a v (v2.1.3)."
    ),
    bump_files: bool = typer.Option(
        False, "--bump-files", "-f", help="Write the version into the configured version files."
    ),
    config_path: Path | None = typer.Option(
        None, "--config", "-c", help=f"Config file (default: <repo>/{CONFIG_FILENAME})."
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Show how the version was derived."),
    version: bool = typer.Option(False, "--version", help="Show crel version and exit."),
) -> None:
    """Print the next version; optionally bump version files and tag."""
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=int(ErrorCode.OK))

    console = RichConsole()

    repo = _exit_on_error(Repository.open(path), console)
    config = _load_config(config_path, repo.path, console)

    plan = _exit_on_error(plan_version(repo, is_release=release), console)
    if verbose:
        _print_plan(plan, console)

    text = apply_lead_v(plan.text, lead_v or config.lead_v)
    typer.echo(text)

    _exit_on_error(
        materialize_release(
            repo,
            config,
            version=text,
            clean=plan.clean,
            bump_files=bump_files,
            tag=tag,
            console=console,
        ),
        console,
    )


def main() -> None:
    app()
