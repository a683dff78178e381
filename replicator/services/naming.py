"""
Row name allocation for replicators.

Names are strings. Names made only of ASCII digits take part in max+1
allocation; any other name is allowed when requested explicitly.
"""

from typing import Any, Collection, Iterable, Optional

from replicator.exceptions import DuplicateNameError


def is_numeric_name(name: str) -> bool:
    return name.isascii() and name.isdigit()


def next_free_name(existing: Iterable[str]) -> str:
    """One past the highest numeric name, or "0" when there is none.

    >>> next_free_name(["0", "1", "3"])
    '4'
    >>> next_free_name(["home"])
    '0'
    """
    numbers = [int(name) for name in existing if is_numeric_name(name)]
    if not numbers:
        return "0"
    return str(max(numbers) + 1)


def allocate_name(
    existing: Iterable[str],
    created: Collection[str],
    requested: Optional[Any] = None,
) -> str:
    """Pick the name for a new row.

    Args:
        existing: Names of the live rows
        created: Names issued so far during this request (never shrinks)
        requested: Caller-supplied name, if any

    Returns:
        The name to use

    Raises:
        DuplicateNameError: If ``requested`` was already issued

    An automatic name that collides with an issued (since removed) row
    moves on to the next number instead of failing.
    """
    if requested is not None:
        name = str(requested)
        if name in created:
            raise DuplicateNameError(name)
        return name

    name = next_free_name(existing)
    while name in created:
        name = str(int(name) + 1)
    return name
