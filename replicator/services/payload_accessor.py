"""
Payload accessor: read a slice of a nested submitted payload by path.

Pure function, no tree access. Callers memoize the result per request.
"""

from typing import Any, Iterable, Mapping


def get_in(data: Any, path: Iterable[Any], default: Any = None) -> Any:
    """Walk ``data`` along ``path``.

    Args:
        data: Nested mapping (decoded request payload)
        path: Sequence of keys; converted to str
        default: Returned when any step is missing or hits a leaf

    Returns:
        The value at ``path`` or ``default``

    An empty path returns ``data`` itself.
    """
    current = data
    for key in path:
        if not isinstance(current, Mapping):
            return default
        key = str(key)
        if key not in current:
            return default
        current = current[key]
    return current
