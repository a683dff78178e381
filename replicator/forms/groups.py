"""Control groups: form-wide, named sets of controls used for rendering."""

from typing import Iterable, Optional, Tuple

from replicator.forms.component import Component, Container


class ControlGroup:
    """
    Ordered set of controls, compared by identity.

    A control may belong to any number of groups. Groups are owned by the
    Form, not by the containers whose controls they reference.
    """

    def __init__(self, caption: Optional[str] = None):
        self.caption = caption
        self._controls: list = []

    def __repr__(self) -> str:
        return f"<ControlGroup caption={self.caption!r} controls={len(self._controls)}>"

    def add(self, *items) -> "ControlGroup":
        """Add controls; containers contribute every control they hold."""
        for item in items:
            if isinstance(item, Container):
                self.add(*(c for c in item.get_components(True) if c.joins_groups))
            elif isinstance(item, Component):
                if not self.contains(item):
                    self._controls.append(item)
            elif isinstance(item, Iterable) and not isinstance(item, (str, bytes)):
                self.add(*item)
            else:
                raise TypeError(f"Cannot add {type(item).__name__} to a control group")
        return self

    @property
    def controls(self) -> Tuple[Component, ...]:
        return tuple(self._controls)

    def contains(self, control: Component) -> bool:
        return any(c is control for c in self._controls)

    def detach_control(self, control: Component) -> bool:
        """Remove ``control`` from the group. Returns whether it was present."""
        for index, member in enumerate(self._controls):
            if member is control:
                del self._controls[index]
                return True
        return False
