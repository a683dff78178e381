"""Starlette/FastAPI integration: request payload decoding."""

from replicator.web.http_data import (
    PayloadShapeError,
    parse_form_items,
    read_http_data,
    split_key,
)

__all__ = [
    "PayloadShapeError",
    "parse_form_items",
    "read_http_data",
    "split_key",
]
