"""
Form: the root of a component tree.

Holds the decoded request payload, the form-wide control groups and the
success handlers for the current request.
"""

import logging
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union

from replicator.forms.component import Container
from replicator.forms.controls import SubmitButton
from replicator.forms.groups import ControlGroup
from replicator.services.payload_accessor import get_in


logger = logging.getLogger(__name__)


class Form(Container):
    """
    Root container for one request.

    Usage:
        form = Form("profile", http_data=await read_http_data(request))
        form.add_text("email")
        form.fire_events()

    The form counts as submitted exactly when ``http_data`` is not None.
    """

    def __init__(self, name: str = "form", http_data: Optional[Mapping[str, Any]] = None):
        super().__init__()
        self.name = name
        self._http_data = http_data
        self._groups: Dict[str, ControlGroup] = {}
        self.on_success: List[Callable[["Form"], None]] = []

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    def is_submitted(self) -> bool:
        return self._http_data is not None

    def get_http_data(self, path: Optional[Iterable[Any]] = None) -> Any:
        """
        Return the submitted payload, or the part of it at ``path``.

        Args:
            path: Component names below the form root

        Returns:
            Nested dict / leaf value, or None when nothing was submitted there
        """
        if self._http_data is None:
            return None if path is not None else {}
        if path is None:
            return self._http_data
        return get_in(self._http_data, path)

    @property
    def submitter(self) -> Optional[SubmitButton]:
        """The button that triggered the current postback, if any."""
        if not self.is_submitted():
            return None
        for button in self.get_components(True, SubmitButton):
            if button.is_submitted_by():
                return button
        return None

    def fire_events(self) -> None:
        """Run the submitting button's click handlers, then success handlers."""
        if not self.is_submitted():
            return

        button = self.submitter
        if button is not None:
            button.click()

        for handler in list(self.on_success):
            handler(self)

    # ------------------------------------------------------------------
    # Groups
    # ------------------------------------------------------------------

    def add_group(self, caption: Optional[str] = None, set_as_current: bool = True) -> ControlGroup:
        """
        Create and register a group.

        Args:
            caption: Group caption, also its key; auto-numbered when omitted
            set_as_current: Make it the form's insertion point for new controls

        Raises:
            ValueError: If a group with the same caption exists
        """
        key = caption if caption is not None else f"group-{len(self._groups)}"
        if key in self._groups:
            raise ValueError(f"Group '{key}' already exists")
        group = ControlGroup(caption)
        self._groups[key] = group
        if set_as_current:
            self.current_group = group
        return group

    def remove_group(self, group: Union[str, ControlGroup]) -> None:
        """
        Unregister a group.

        Raises:
            KeyError: If the group is not registered with this form
        """
        for key, registered in list(self._groups.items()):
            if registered is group or key == group:
                del self._groups[key]
                if self.current_group is registered:
                    self.current_group = None
                logger.debug(f"Removed group '{key}' from form '{self.name}'")
                return
        raise KeyError(f"Group {group!r} is not registered in form '{self.name}'")

    def get_group(self, caption: str) -> Optional[ControlGroup]:
        return self._groups.get(caption)

    def get_groups(self) -> List[ControlGroup]:
        return list(self._groups.values())

    def has_group(self, group: ControlGroup) -> bool:
        return any(registered is group for registered in self._groups.values())
