"""
Form tree: containers, controls, groups and the form root.

Provides the tree capabilities replicators build on: child add/remove,
lookup by type, submission detection, control groups and extension
methods.
"""

from replicator.forms.component import (
    Component,
    Container,
    ComponentExistsError,
    ComponentNotFoundError,
    ComponentNotAttachedError,
)
from replicator.forms.controls import Control, TextInput, SubmitButton
from replicator.forms.groups import ControlGroup
from replicator.forms.form import Form
from replicator.forms.extensions import (
    ExtensionReplacedError,
    extension_method,
    retire_extension,
    resolve_extension,
    clear_extensions,
)

__all__ = [
    "Component",
    "Container",
    "ComponentExistsError",
    "ComponentNotFoundError",
    "ComponentNotAttachedError",
    "Control",
    "TextInput",
    "SubmitButton",
    "ControlGroup",
    "Form",
    "ExtensionReplacedError",
    "extension_method",
    "retire_extension",
    "resolve_extension",
    "clear_extensions",
]
