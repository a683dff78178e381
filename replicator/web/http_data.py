"""
Decode submitted form bodies into nested payloads.

Handles bracketed field names as posted by HTML forms:
- phones[0][number] = "123"   -> {"phones": {"0": {"number": "123"}}}
- tags[] = "a", tags[] = "b"  -> {"tags": ["a", "b"]}
- email = "x"                 -> {"email": "x"}
"""

import logging
import re
from typing import Any, Dict, Iterable, List, Optional, Tuple

from starlette.requests import Request


logger = logging.getLogger(__name__)

_SEGMENT = re.compile(r"\[([^\[\]]*)\]")

_BODYLESS_METHODS = ("GET", "HEAD", "OPTIONS")


class PayloadShapeError(ValueError):
    """Raised when field names describe conflicting structures."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Form field '{key}' conflicts with another field")


def split_key(key: str) -> List[str]:
    """Split ``a[b][c]`` into ``["a", "b", "c"]``; malformed keys stay whole."""
    head, bracket, rest = key.partition("[")
    if not bracket or not head:
        return [key]

    tail = bracket + rest
    segments = _SEGMENT.findall(tail)
    if "".join(f"[{segment}]" for segment in segments) != tail:
        return [key]
    return [head] + segments


def parse_form_items(items: Iterable[Tuple[str, Any]]) -> Dict[str, Any]:
    """
    Build a nested payload from (key, value) pairs.

    Args:
        items: Pairs as returned by FormData.multi_items()

    Returns:
        Nested dict; ``[]`` segments collect repeated values into lists

    Raises:
        PayloadShapeError: If one field is both a leaf and a structure
    """
    data: Dict[str, Any] = {}
    for key, value in items:
        _assign(data, split_key(key), value, key)
    return data


def _assign(data: Dict[str, Any], parts: List[str], value: Any, key: str) -> None:
    current: Any = data
    for index, part in enumerate(parts[:-1]):
        # Only the last segment may append to a list
        if part == "" or not isinstance(current, dict):
            raise PayloadShapeError(key)

        expected = list if parts[index + 1] == "" else dict
        child = current.get(part)
        if child is None:
            child = expected()
            current[part] = child
        elif not isinstance(child, expected):
            raise PayloadShapeError(key)
        current = child

    last = parts[-1]
    if last == "":
        current.append(value)
        return

    if isinstance(current.get(last), (dict, list)):
        raise PayloadShapeError(key)
    current[last] = value


async def read_http_data(request: Request) -> Optional[Dict[str, Any]]:
    """
    Decoded form body of ``request``, or None when nothing was submitted.

    Usable directly as a FastAPI dependency:
        async def edit(http_data = Depends(read_http_data)): ...
    """
    if request.method in _BODYLESS_METHODS:
        return None

    form = await request.form()
    items = list(form.multi_items())
    logger.debug(f"Decoding {len(items)} form fields for {request.url.path}")
    return parse_form_items(items)
