"""
Extension bindings for replicators.

register() installs three extension methods:

- ``add_dynamic`` on every Container: factory shortcut for a Replicator
- ``add_remove_on_click`` on every SubmitButton: remove the button's row
- ``add_create_on_click`` on every SubmitButton: append a new row

Each name can be chosen by the caller (defaults come from settings).
Registering again under a different name retires the previous one, which
then raises ExtensionReplacedError when used.
"""

import logging
from typing import Callable, Dict, Optional

from replicator.core.config import get_settings
from replicator.dynamic.container import Replicator, RowFactory
from replicator.exceptions import NotOwnedError
from replicator.forms.component import Component, Container
from replicator.forms.controls import SubmitButton
from replicator.forms.extensions import clear_extensions, extension_method, retire_extension


logger = logging.getLogger(__name__)

RowCallback = Callable[[Replicator, Container], None]

# Binding key -> currently registered method name
_registered: Dict[str, Optional[str]] = {
    "dynamic": None,
    "remove": None,
    "create": None,
}


def _row_of(component: Component, replicator: Replicator) -> Container:
    """The row of ``replicator`` that contains ``component``."""
    node = component
    while node.parent is not replicator:
        node = node.parent
    return node


def add_dynamic(
    container: Container,
    name: str,
    factory: RowFactory,
    default_count: int = 0,
    force_default: bool = False,
) -> Replicator:
    """Add a Replicator under ``name``, sharing the container's current group."""
    control = Replicator(factory, default_count, force_default)
    control.current_group = container.current_group
    container.add_component(control, name)
    return control


def add_remove_on_click(button: SubmitButton, callback: Optional[RowCallback] = None) -> SubmitButton:
    """
    Make ``button`` remove the row it lives in.

    Args:
        button: Button placed inside a replicator row
        callback: Called with (replicator, row) before the row is removed
    """

    def on_click(clicked: SubmitButton) -> None:
        replicator = clicked.lookup(Replicator)
        row = _row_of(clicked, replicator)
        if not isinstance(row, Container):
            raise NotOwnedError(row.name, replicator.name)

        form = clicked.get_form(need=False)
        if form is not None:
            form.on_success = []

        if callback is not None:
            callback(replicator, row)
        replicator.remove(row)

    button.on_click.append(on_click)
    return button


def add_create_on_click(
    button: SubmitButton,
    allow_empty: bool = False,
    callback: Optional[RowCallback] = None,
) -> SubmitButton:
    """
    Make ``button`` append a new row to the closest replicator.

    Args:
        button: Button placed in (or below) a replicator
        allow_empty: Create even when some existing row is still empty
        callback: Called with (replicator, new row)
    """

    def on_click(clicked: SubmitButton) -> None:
        replicator = clicked.lookup(Replicator)
        if allow_empty or replicator.is_all_filled():
            row = replicator.create_one()
            logger.debug(f"Row '{row.name}' added to '{replicator.name}' on click")
            if callback is not None:
                callback(replicator, row)

        clicked.get_form().on_success = []

    button.on_click.append(on_click)
    return button


def register(
    method_name: Optional[str] = None,
    remove_method: Optional[str] = None,
    create_method: Optional[str] = None,
) -> None:
    """
    Install the replicator extension methods.

    Args:
        method_name: Name of the factory shortcut on containers
        remove_method: Name of the remove binding on submit buttons
        create_method: Name of the create binding on submit buttons
    """
    settings = get_settings()
    bindings = {
        "dynamic": (Container, method_name or settings.dynamic_method, add_dynamic),
        "remove": (SubmitButton, remove_method or settings.remove_method, add_remove_on_click),
        "create": (SubmitButton, create_method or settings.create_method, add_create_on_click),
    }

    for key, (owner, name, func) in bindings.items():
        previous = _registered[key]
        if previous is not None and previous != name:
            retire_extension(owner, previous, replaced_by=name)
        extension_method(owner, name, func)
        _registered[key] = name

    logger.info(
        f"Replicator extensions registered: {_registered['dynamic']}, "
        f"{_registered['remove']}, {_registered['create']}"
    )


def registered_names() -> Dict[str, Optional[str]]:
    return dict(_registered)


def reset_registration() -> None:
    """Forget every installed binding (tests)."""
    for key in _registered:
        _registered[key] = None
    clear_extensions()
