"""
Replicator: a container that grows and shrinks repeated rows.

Rows are rebuilt from scratch on every request. When the replicator is
attached to a form, it reconciles its rows with either the submitted
payload (postback) or the configured default count (first render), so
rows end up with the same names they had when the form was submitted.

Usage:
    def phone_row(row):
        row.add_text("number")
        row.add_submit("remove").add_remove_on_click()

    phones = form.add_dynamic("phones", phone_row, default_count=1)
    phones.add_submit("add").add_create_on_click()
"""

import logging
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Type

from replicator.core.config import ReplicatorOptions
from replicator.core.logging import LogContext
from replicator.exceptions import InvalidFactoryError, NotOwnedError
from replicator.forms.component import Component, Container
from replicator.forms.controls import Control, SubmitButton
from replicator.forms.form import Form
from replicator.services.fill_aggregator import count_filled_rows
from replicator.services.naming import allocate_name


logger = logging.getLogger(__name__)

RowFactory = Callable[[Container], None]

_UNSET = object()


class Replicator(Container):
    """
    Dynamic container whose children ("rows") are created by a factory.

    Attributes:
        factory: Callback populating each new row
        default_count: Rows to create on first render
        force_default: Top up to default_count on postback too
        container_class: Concrete row type
    """

    def __init__(self, factory: RowFactory, default_count: int = 0, force_default: bool = False):
        super().__init__()
        self.set_factory(factory)

        options = ReplicatorOptions(default_count=default_count, force_default=force_default)
        self.default_count = options.default_count
        self.force_default = options.force_default
        self.container_class: Type[Container] = Container

        self._created: Dict[str, Container] = {}
        self._submitted_by = False
        self._http_data: Any = _UNSET

    def set_factory(self, factory: RowFactory) -> None:
        """
        Replace the row factory.

        Raises:
            InvalidFactoryError: If ``factory`` is not callable
        """
        if not callable(factory):
            raise InvalidFactoryError(factory)
        self.factory = factory

    @property
    def created_names(self) -> List[str]:
        """Names issued during this request, including removed rows."""
        return list(self._created)

    # ------------------------------------------------------------------
    # Reconciliation
    # ------------------------------------------------------------------

    def on_attach(self, form: Form) -> None:
        with LogContext(form=form.name, replicator=self.name):
            self.load_http_data()
            self.create_default()

    def load_http_data(self) -> None:
        """Recreate the rows present in the submitted payload, in payload order."""
        if not self.get_form().is_submitted():
            return

        data = self._get_http_data()
        if data is None:
            return
        if not isinstance(data, Mapping):
            logger.warning(
                f"Replicator '{self.name}' expected nested payload, got {type(data).__name__}"
            )
            return

        for name, value in data.items():
            if isinstance(value, Mapping) and self._is_free(name):
                self.create_one(name)
                logger.debug(f"Restored row '{name}' of '{self.name}' from payload")

    def create_default(self) -> None:
        """Create the default rows (first render) or top up to default_count."""
        if not self.default_count:
            return

        if not self.get_form().is_submitted():
            for index in range(self.default_count):
                if self._is_free(index):
                    self.create_one(index)
            logger.debug(f"Created {self.default_count} default rows in '{self.name}'")
        elif self.force_default:
            while len(self.get_containers()) < self.default_count:
                row = self.create_one()
                logger.debug(f"Topped up '{self.name}' with row '{row.name}'")

    def _is_free(self, name: Any) -> bool:
        name = str(name)
        return name not in self and name not in self._created

    def _get_http_data(self) -> Any:
        if self._http_data is _UNSET:
            self._http_data = self.get_form().get_http_data(self.lookup_path(Form))
        return self._http_data

    # ------------------------------------------------------------------
    # Row creation
    # ------------------------------------------------------------------

    def add_component(
        self,
        component: Component,
        name: Any,
        insert_before: Optional[str] = None,
    ) -> "Replicator":
        # Direct children never join the replicator's group; rows carry
        # their own current_group instead.
        group = self.current_group
        self.current_group = None
        try:
            super().add_component(component, name, insert_before)
        finally:
            self.current_group = group
        return self

    def create_container(self) -> Container:
        return self.container_class()

    def create_component(self, name: str) -> Container:
        row = self.create_container()
        row.current_group = self.current_group
        self.add_component(row, name, self._first_control_name())

        self.factory(row)

        self._created[row.name] = row
        return row

    def _first_control_name(self) -> Optional[str]:
        for control in self.get_components(False, Control):
            return control.name
        return None

    def create_one(self, name: Any = None) -> Container:
        """
        Create a row, auto-named when ``name`` is omitted.

        Raises:
            DuplicateNameError: If ``name`` was already issued this request
            ComponentExistsError: If a live child not created here uses ``name``
        """
        existing = [row.name for row in self.get_containers()]
        name = allocate_name(existing, self._created, name)
        return self.create_component(name)

    def add_container(self, name: Any) -> Container:
        """Add a bare row without running the factory."""
        container = self.container_class()
        container.current_group = self.current_group
        self.add_component(container, name)
        return container

    def set_values(self, values: Mapping[str, Any], erase: bool = False) -> "Replicator":
        form = self.get_form(need=False)
        if form is None or not form.is_submitted():
            for name, value in values.items():
                if isinstance(value, Mapping) and str(name) not in self:
                    self.create_one(name)
        super().set_values(values, erase)
        return self

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_containers(self, recursive: bool = False) -> List[Container]:
        return list(self.get_components(recursive, Container))

    def get_buttons(self, recursive: bool = False) -> List[SubmitButton]:
        return list(self.get_components(recursive, SubmitButton))

    def is_submitted_by(self) -> bool:
        """True if the postback came from a button inside this replicator."""
        if self._submitted_by:
            return True

        for button in self.get_buttons(True):
            if button.is_submitted_by():
                logger.debug(f"Replicator '{self.name}' submitted by '{button.name}'")
                self._submitted_by = True
                return True

        return False

    # ------------------------------------------------------------------
    # Removal
    # ------------------------------------------------------------------

    def remove(self, row: Container, clean_up_groups: bool = False) -> None:
        """
        Detach ``row`` and drop its controls from every form group.

        Args:
            row: A row of this replicator
            clean_up_groups: Also delete groups left empty, unless a live
                container still uses them as its insertion point

        Raises:
            NotOwnedError: If ``row`` is not a row (container child) of this
                replicator
        """
        if row.parent is not self or not isinstance(row, Container):
            raise NotOwnedError(row.name, self.name)

        # Keep track of the submission origin before its button disappears
        for button in row.get_components(True, SubmitButton):
            if button.is_submitted_by():
                self._submitted_by = True
                break

        form = self.get_form()
        components = list(row.get_components(True))
        self.remove_component(row)
        logger.debug(f"Removed row '{row.name}' from '{self.name}'")

        affected = []
        for group in form.get_groups():
            for control in components:
                if group.detach_control(control) and not any(g is group for g in affected):
                    affected.append(group)

        if clean_up_groups and affected:
            self._remove_orphaned_groups(form, affected)

    def _remove_orphaned_groups(self, form: Form, affected: Iterable) -> None:
        in_use = [form.current_group]
        in_use.extend(c.current_group for c in form.get_components(True, Container))

        for group in affected:
            if any(group is used for used in in_use):
                continue
            if not group.controls and form.has_group(group):
                form.remove_group(group)
                logger.debug(f"Removed empty group '{group.caption}' after row removal")

    # ------------------------------------------------------------------
    # Fill aggregation
    # ------------------------------------------------------------------

    def count_filled_without(
        self,
        exclude: Iterable[str] = (),
        exclude_sub: Iterable[str] = (),
    ) -> int:
        """Count submitted rows with at least one non-empty value."""
        return count_filled_rows(self._get_http_data(), exclude, exclude_sub)

    def is_all_filled(self, except_children: Iterable[str] = ()) -> bool:
        """
        True if every live row was submitted with some value.

        The replicator's own controls and every button inside the rows are
        ignored.
        """
        exclude = [control.name for control in self.get_components(False, Control)]

        exclude_sub = list(except_children)
        for row in self.get_containers():
            for button in row.get_components(True, SubmitButton):
                if button.name not in exclude_sub:
                    exclude_sub.append(button.name)

        filled = self.count_filled_without(exclude, exclude_sub)
        return filled == len(self.get_containers())
