"""
Extension method registry for form components.

Maps (owner class, method name) pairs to plain functions taking the
component as first argument. Component.__getattr__ resolves unknown
attributes through this registry, walking the instance's MRO, so an
extension installed on Container is visible on every subclass.

Retired names stay in the registry as tombstones: resolving one raises
ExtensionReplacedError instead of a plain AttributeError.
"""

import logging
from typing import Any, Callable, Dict, Optional, Tuple, Type

from replicator.exceptions import ExtensionReplacedError


logger = logging.getLogger(__name__)


# Global extension registry
EXTENSION_REGISTRY: Dict[Tuple[type, str], Callable[..., Any]] = {}

# Retired names -> replacement name
RETIRED_EXTENSIONS: Dict[Tuple[type, str], Optional[str]] = {}


def extension_method(owner: Type, name: str, func: Callable[..., Any]) -> None:
    """
    Install ``func`` as method ``name`` on ``owner`` and its subclasses.

    Args:
        owner: Component class the method is installed on
        name: Method name
        func: Function receiving the component as first argument
    """
    if name.startswith("_"):
        raise ValueError(f"Extension method name must be public: {name!r}")
    RETIRED_EXTENSIONS.pop((owner, name), None)
    EXTENSION_REGISTRY[(owner, name)] = func
    logger.debug(f"Installed extension {owner.__name__}.{name}")


def retire_extension(owner: Type, name: str, replaced_by: Optional[str] = None) -> None:
    """Remove ``name`` from ``owner`` and make further use fail loudly."""
    EXTENSION_REGISTRY.pop((owner, name), None)
    RETIRED_EXTENSIONS[(owner, name)] = replaced_by
    logger.debug(f"Retired extension {owner.__name__}.{name} (replaced by {replaced_by})")


def resolve_extension(instance: Any, name: str) -> Optional[Callable[..., Any]]:
    """
    Find the extension ``name`` for ``instance``.

    Returns:
        The registered function, or None if no class in the MRO has one

    Raises:
        ExtensionReplacedError: If the nearest match is a retired name
    """
    for klass in type(instance).__mro__:
        key = (klass, name)
        if key in EXTENSION_REGISTRY:
            return EXTENSION_REGISTRY[key]
        if key in RETIRED_EXTENSIONS:
            raise ExtensionReplacedError(name, RETIRED_EXTENSIONS[key])
    return None


def clear_extensions() -> None:
    """Forget every installed and retired extension."""
    EXTENSION_REGISTRY.clear()
    RETIRED_EXTENSIONS.clear()
