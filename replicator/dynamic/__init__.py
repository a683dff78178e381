"""Dynamic row replication for form trees."""

from replicator.dynamic.container import Replicator, RowFactory
from replicator.dynamic.bindings import (
    add_dynamic,
    add_remove_on_click,
    add_create_on_click,
    register,
    registered_names,
    reset_registration,
)

__all__ = [
    "Replicator",
    "RowFactory",
    "add_dynamic",
    "add_remove_on_click",
    "add_create_on_click",
    "register",
    "registered_names",
    "reset_registration",
]
