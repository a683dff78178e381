"""Leaf controls of the form tree."""

import logging
from typing import Any, Callable, List, Optional

from replicator.forms.component import Component


logger = logging.getLogger(__name__)


class Control(Component):
    """A leaf field holding a single value."""

    joins_groups = True

    # Omitted controls are left out of get_values() and set_values()
    omitted = False

    def __init__(self, label: Optional[str] = None):
        super().__init__()
        self.label = label
        self.value: Any = None

    def on_attach(self, form) -> None:
        if form.is_submitted():
            self.load_http_data()

    def get_http_data(self) -> Any:
        """Submitted value at this control's path, or None."""
        from replicator.forms.form import Form

        form = self.get_form()
        return form.get_http_data(self.lookup_path(Form))

    def load_http_data(self) -> None:
        self.value = self.get_http_data()


class TextInput(Control):
    """Single-line text field."""

    def load_http_data(self) -> None:
        value = self.get_http_data()
        self.value = value if isinstance(value, str) else None


class SubmitButton(Control):
    """Submit-capable control with click handlers."""

    omitted = True

    def __init__(self, caption: Optional[str] = None):
        super().__init__(caption)
        self.on_click: List[Callable[["SubmitButton"], None]] = []

    def is_submitted_by(self) -> bool:
        """True if the current postback was triggered by this button."""
        from replicator.forms.form import Form

        form = self.get_form(need=False)
        if form is None or not form.is_submitted():
            return False
        return form.get_http_data(self.lookup_path(Form)) is not None

    def click(self) -> None:
        """Run the click handlers."""
        logger.debug(f"Button '{self.name}' clicked")
        for handler in list(self.on_click):
            handler(self)
