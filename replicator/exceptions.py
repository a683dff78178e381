"""Exceptions raised by replicators and their extension bindings."""

from typing import Any, Optional


class ReplicatorError(Exception):
    """Base class for replicator errors."""
    pass


class InvalidFactoryError(ReplicatorError, TypeError):
    """Row factory is not callable."""

    def __init__(self, factory: Any):
        self.factory = factory
        super().__init__(
            f"Replicator requires callable factory, {type(factory).__name__} given."
        )


class DuplicateNameError(ReplicatorError, ValueError):
    """Row name was already issued by this replicator during the request."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Container with name '{name}' already exists.")


class NotOwnedError(ReplicatorError, ValueError):
    """Row passed to remove() is not a child of the replicator."""

    def __init__(self, row_name: Optional[str], replicator_name: Optional[str]):
        self.row_name = row_name
        self.replicator_name = replicator_name
        super().__init__(
            f"Given component {row_name} is not children of {replicator_name}."
        )


class ExtensionReplacedError(ReplicatorError):
    """Extension method name was retired by a later registration."""

    def __init__(self, name: str, replaced_by: Optional[str] = None):
        self.name = name
        self.replaced_by = replaced_by
        msg = f"Extension method '{name}' is no longer registered"
        if replaced_by:
            msg += f"; use '{replaced_by}' instead"
        super().__init__(msg)
