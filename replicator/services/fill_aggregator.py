"""
Fill aggregation over submitted replicator rows.

Pure functions over the decoded payload slice of a replicator: one entry
per row, each a nested mapping of field names to string leaves.
"""

from typing import Any, Collection, Dict, Iterable, Mapping


def without_keys(data: Mapping[str, Any], names: Collection[str]) -> Dict[str, Any]:
    """Copy of ``data`` without the top-level keys in ``names``."""
    return {key: value for key, value in data.items() if key not in names}


def strip_keys_deep(value: Any, names: Collection[str]) -> Any:
    """Copy of ``value`` with keys in ``names`` removed at every depth."""
    if isinstance(value, Mapping):
        return {
            key: strip_keys_deep(item, names)
            for key, item in value.items()
            if key not in names
        }
    if isinstance(value, list):
        return [strip_keys_deep(item, names) for item in value]
    return value


def is_filled(value: Any) -> bool:
    """True if any leaf inside ``value`` is a non-empty string.

    Non-string leaves (e.g. uploaded files) count as filled when not None.
    """
    if isinstance(value, Mapping):
        return any(is_filled(item) for item in value.values())
    if isinstance(value, (list, tuple)):
        return any(is_filled(item) for item in value)
    if value is None:
        return False
    if isinstance(value, str):
        return len(value) > 0
    return True


def count_filled_rows(
    rows: Any,
    exclude: Iterable[str] = (),
    exclude_sub: Iterable[str] = (),
) -> int:
    """Count rows holding at least one non-empty value.

    Args:
        rows: Payload slice of a replicator (row name -> row data)
        exclude: Top-level keys to ignore (e.g. the replicator's own buttons)
        exclude_sub: Keys to ignore inside every row, at any depth

    Returns:
        Number of filled rows; 0 for an empty or non-mapping slice
    """
    if not isinstance(rows, Mapping):
        return 0

    exclude = set(exclude)
    exclude_sub = set(exclude_sub)

    filled = 0
    for row in without_keys(rows, exclude).values():
        if is_filled(strip_keys_deep(row, exclude_sub)):
            filled += 1
    return filled
