"""Narrowing helpers for parsed TOML.

``tomllib`` hands back plain dicts and lists typed as ``Any``; these
helpers check shapes at runtime and give the config parser precise types.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TypeGuard, cast

StrDict = dict[str, object]
ObjList = list[object]


def is_str_dict(obj: object) -> TypeGuard[StrDict]:
    if not isinstance(obj, dict):
        return False
    return all(isinstance(k, str) for k in cast(dict[object, object], obj))


def as_str_dict(obj: object) -> StrDict | None:
    return obj if is_str_dict(obj) else None


def as_obj_list(obj: object) -> ObjList | None:
    return cast(ObjList, obj) if isinstance(obj, list) else None


def get_str(table: Mapping[str, object], key: str, *, strip: bool = True) -> str | None:
    """String value at key, None when absent or not a string.

    With ``strip`` (the default) surrounding blanks are removed and a blank
    value counts as absent. Version prefixes and postfixes are read with
    ``strip=False`` because their whitespace is part of the match.
    """
    value = table.get(key)
    if not isinstance(value, str):
        return None
    if not strip:
        return value
    return value.strip() or None


def get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    return as_str_dict(table.get(key))
