"""Pure helpers used by replicators: payload access, naming, fill counting."""

from replicator.services.payload_accessor import get_in
from replicator.services.naming import allocate_name, next_free_name, is_numeric_name
from replicator.services.fill_aggregator import (
    count_filled_rows,
    is_filled,
    strip_keys_deep,
    without_keys,
)

__all__ = [
    "get_in",
    "allocate_name",
    "next_free_name",
    "is_numeric_name",
    "count_filled_rows",
    "is_filled",
    "strip_keys_deep",
    "without_keys",
]
