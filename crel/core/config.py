"""Typed configuration loading and access.

The configuration lives in ``conventional_release.toml`` at the repository
root. It is parsed once per run into a frozen :class:`ReleaseConfig`.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .presets import PRESETS, preset_names
from .result import Err, Ok, Result
from .structured import StrDict, as_obj_list, as_str_dict, get_str, get_table

__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_SIGNATURE_EMAIL",
    "DEFAULT_SIGNATURE_NAME",
    "CommitSignature",
    "ConfigError",
    "ReleaseConfig",
    "VersionFileRule",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILENAME = "conventional_release.toml"

DEFAULT_SIGNATURE_NAME = "crel"
DEFAULT_SIGNATURE_EMAIL = "crel@localhost"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or is invalid."""

    message: str
    path: Path | None = None

    @property
    def hint(self) -> str | None:
        return str(self.path) if self.path is not None else None


@dataclass(frozen=True, slots=True)
class CommitSignature:
    """Identity used as tagger, author and committer for release objects."""

    name: str = DEFAULT_SIGNATURE_NAME
    email: str = DEFAULT_SIGNATURE_EMAIL

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"


@dataclass(frozen=True, slots=True)
class VersionFileRule:
    """A file whose version string gets rewritten on release.

    Attributes:
        path: File path relative to the repository root
        version_prefix: Literal text right before the version
        version_postfix: Literal text right after the version
        leading_v: Write the version as ``vX.Y.Z`` in this file
        preset: Preset name the rule was built from, if any
    """

    path: str
    version_prefix: str = ""
    version_postfix: str = ""
    leading_v: bool = False
    preset: str | None = None


def _default_rules() -> tuple[VersionFileRule, ...]:
    return ()


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    """Main configuration container."""

    lead_v: bool = False
    commit_signature: CommitSignature = field(default_factory=CommitSignature)
    version_files: tuple[VersionFileRule, ...] = field(default_factory=_default_rules)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Result[ReleaseConfig, ConfigError]:
        """Create a ReleaseConfig from a mapping (parsed TOML)."""
        lead_v = _get_bool(data, "lead_v", default=False)
        if lead_v is None:
            return Err(ConfigError("lead_v must be a boolean"))

        signature: StrDict = get_table(data, "commit_signature") or {}
        commit_signature = CommitSignature(
            name=get_str(signature, "name") or DEFAULT_SIGNATURE_NAME,
            email=get_str(signature, "email") or DEFAULT_SIGNATURE_EMAIL,
        )

        rules: list[VersionFileRule] = []
        raw_files = data.get("version_files")
        if raw_files is not None:
            entries = as_obj_list(raw_files)
            if entries is None:
                return Err(ConfigError("version_files must be an array of tables"))
            for index, entry in enumerate(entries):
                rule = _parse_version_file(entry, index=index)
                if isinstance(rule, Err):
                    return rule
                rules.append(rule.value)

        return Ok(
            cls(
                lead_v=lead_v,
                commit_signature=commit_signature,
                version_files=tuple(rules),
            )
        )


def _get_bool(table: Mapping[str, object], key: str, *, default: bool) -> bool | None:
    value = table.get(key, default)
    if not isinstance(value, bool):
        return None
    return value


def _parse_version_file(entry: object, *, index: int) -> Result[VersionFileRule, ConfigError]:
    where = f"version_files[{index}]"
    table = as_str_dict(entry)
    if table is None:
        return Err(ConfigError(f"{where} must be a table"))

    leading_v = _get_bool(table, "leading_v", default=False)
    if leading_v is None:
        return Err(ConfigError(f"{where}.leading_v must be a boolean"))

    path = get_str(table, "path")
    prefix = get_str(table, "version_prefix", strip=False)
    postfix = get_str(table, "version_postfix", strip=False)

    preset_name = get_str(table, "preset")
    if preset_name is not None:
        preset = PRESETS.get(preset_name)
        if preset is None:
            known = ", ".join(preset_names())
            return Err(ConfigError(f"{where}: unknown preset '{preset_name}' (known: {known})"))
        return Ok(
            VersionFileRule(
                path=path or preset.path,
                version_prefix=preset.version_prefix if prefix is None else prefix,
                version_postfix=preset.version_postfix if postfix is None else postfix,
                leading_v=leading_v,
                preset=preset_name,
            )
        )

    if path is None:
        return Err(ConfigError(f"{where}: path is required when no preset is given"))

    return Ok(
        VersionFileRule(
            path=path,
            version_prefix=prefix or "",
            version_postfix=postfix or "",
            leading_v=leading_v,
        )
    )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and syntax errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except IsADirectoryError:
        return Err(ConfigError(f"Config path is a directory: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[ReleaseConfig, ConfigError]:
    """Load and validate configuration from a TOML file.

    Args:
        path: Path to conventional_release.toml

    Returns:
        Ok(ReleaseConfig) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    return ReleaseConfig.from_dict(result.value).map_err(
        lambda e: ConfigError(e.message, path=path)
    )


def load_config_or_default(path: Path) -> Result[ReleaseConfig, ConfigError]:
    """Load config from file, or the default config if the file is absent.

    A file that exists but is invalid is still an error.
    """
    if not path.exists():
        return Ok(ReleaseConfig())
    return load_config(path)
