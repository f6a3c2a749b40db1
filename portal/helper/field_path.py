"""Dotted field path helpers.

A dotted path like ``"files.@id"`` addresses a value nested inside a report record.
Resolution returns the ``ABSENT`` sentinel when the path cannot be followed, which keeps
"no such field" apart from JSON null and from an empty collection.
"""

from typing import Any
from urllib.parse import quote

PATH_SEPARATOR = "."

# characters encodeURIComponent leaves alone, plus ':' which the portal wants literal
_QUERY_SAFE_CHARS = "-_.!~*':"


class _Absent:
    """Marker for a value that is not present in a record."""

    _instance: "_Absent | None" = None

    def __new__(cls) -> "_Absent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT = _Absent()


def resolve_field_path(record: Any, path: str) -> Any:
    """Walk a dotted path through nested mappings.

    Mappings are indexed by key and lists by a decimal segment (e.g. ``"files.0"``).

    Args:
        record (Any): The record (usually a dict decoded from JSON).
        path (str): Dotted path, e.g. ``"replicates.library"``.

    Returns:
        Any: The value found at the path, or ``ABSENT`` if any step is missing.
    """
    value = record
    for part in path.split(PATH_SEPARATOR):
        if isinstance(value, dict):
            if part not in value:
                return ABSENT
            value = value[part]
        elif isinstance(value, list) and part.isdigit():
            index = int(part)
            if index >= len(value):
                return ABSENT
            value = value[index]
        else:
            return ABSENT
    return value


def get_length_field(path: str) -> str:
    """Return the parent of a dotted path, or the path itself when it has no separator.

    The report filter measures this parent: for ``"files.@id"`` the length of ``files`` counts.
    """
    if PATH_SEPARATOR not in path:
        return path
    return path[: path.rindex(PATH_SEPARATOR)]


def measure_length(value: Any) -> int | None:
    """Return the length of a list or string value, or None if it has no length."""
    if isinstance(value, (list, str)):
        return len(value)
    return None


def encode_query_value(value: str) -> str:
    """Encode text for use as a portal query-string value.

    Percent-encodes like ``encodeURIComponent``, except that ``(`` and ``)`` are escaped,
    ``:`` stays literal and spaces become ``+``.
    """
    return quote(value, safe=_QUERY_SAFE_CHARS).replace("%20", "+")
