"""Total accessors for loosely-typed parsed trees.

Parsed IaC documents are nested dicts/lists of scalars whose shape is not
under our control. These helpers never raise on a type mismatch; they
return an empty container or a default instead.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any


def as_dict(value: Any) -> dict[str, Any]:
    """Return *value* if it is a dict, else an empty dict."""
    return value if isinstance(value, dict) else {}


def as_list(value: Any) -> list[Any]:
    """Normalize a scalar / list / missing value to a list.

    ``None`` becomes ``[]``, a list is returned as-is and any other value is
    wrapped in a one-element list.
    """
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def get_dict(obj: Any, key: str) -> dict[str, Any]:
    """Return ``obj[key]`` when both are dicts, else ``{}``."""
    return as_dict(as_dict(obj).get(key))


def get_list(obj: Any, key: str) -> list[Any]:
    """Return ``obj[key]`` only when it is a list, else ``[]``."""
    value = as_dict(obj).get(key)
    return value if isinstance(value, list) else []


def get_str(obj: Any, key: str, default: str = "") -> str:
    """Return ``obj[key]`` as a string.

    Numbers and booleans are stringified, containers and missing/null values
    fall back to *default*.
    """
    value = as_dict(obj).get(key)
    if value is None or isinstance(value, (dict, list)):
        return default
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def get_path(obj: Any, *keys: str) -> Any:
    """Walk nested dicts; return ``None`` as soon as a step is missing."""
    current = obj
    for key in keys:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def iter_strings(value: Any) -> Iterator[str]:
    """Yield every string leaf in a nested structure, depth first."""
    if isinstance(value, str):
        yield value
    elif isinstance(value, dict):
        for item in value.values():
            yield from iter_strings(item)
    elif isinstance(value, list):
        for item in value:
            yield from iter_strings(item)


def truncate(text: str, limit: int) -> str:
    """Cut *text* to *limit* characters, appending ``...`` when cut."""
    return text[:limit] + "..." if len(text) > limit else text


def iter_interpolations(text: str) -> Iterator[str]:
    """Yield the inner text of each ``${...}`` in *text*, left to right.

    Scanning stops at the first ``${`` that is never closed, so the cost
    stays linear in the length of *text*.
    """
    start = text.find("${")
    while start != -1:
        end = text.find("}", start + 2)
        if end == -1:
            return
        yield text[start + 2:end]
        start = text.find("${", end + 1)
