"""
Form replicator: dynamic, repeatable rows for form trees.

Quick start:
    from replicator import Form, register

    register()

    def phone_row(row):
        row.add_text("number")
        row.add_submit("remove").add_remove_on_click()

    form = Form("profile", http_data=payload)
    phones = form.add_dynamic("phones", phone_row, default_count=1)
    phones.add_submit("add").add_create_on_click()
    form.fire_events()
"""

from replicator.exceptions import (
    ReplicatorError,
    InvalidFactoryError,
    DuplicateNameError,
    NotOwnedError,
    ExtensionReplacedError,
)
from replicator.forms import (
    Component,
    Container,
    Control,
    ControlGroup,
    Form,
    SubmitButton,
    TextInput,
)
from replicator.dynamic import (
    Replicator,
    register,
    reset_registration,
)

__all__ = [
    "ReplicatorError",
    "InvalidFactoryError",
    "DuplicateNameError",
    "NotOwnedError",
    "ExtensionReplacedError",
    "Component",
    "Container",
    "Control",
    "ControlGroup",
    "Form",
    "SubmitButton",
    "TextInput",
    "Replicator",
    "register",
    "reset_registration",
]
