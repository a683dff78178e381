"""
Component tree for form models.

A Form is the root Container; Containers own named child Components in
insertion order. Components become "attached" when they are reachable
from a Form: at that moment the tree calls on_attach(form) on every
component of the newly attached subtree, parents before children.
"""

import functools
import logging
from typing import Any, Dict, Iterator, List, Mapping, Optional, Type, TypeVar

from replicator.forms.extensions import resolve_extension


logger = logging.getLogger(__name__)

C = TypeVar("C", bound="Component")


class ComponentExistsError(ValueError):
    """Raised when a container already has a live child with the given name."""

    def __init__(self, container_name: Optional[str], name: str):
        self.container_name = container_name
        self.name = name
        super().__init__(f"Component with name '{name}' already exists in '{container_name}'")


class ComponentNotFoundError(KeyError):
    """Raised when a container has no child with the given name."""

    def __init__(self, container_name: Optional[str], name: str):
        self.container_name = container_name
        self.name = name
        super().__init__(f"Component with name '{name}' does not exist in '{container_name}'")


class ComponentNotAttachedError(RuntimeError):
    """Raised when a component has no ancestor of the requested type."""


class Component:
    """Base node of the form tree."""

    # Controls join the current group of the container they are added to
    joins_groups = False

    def __init__(self):
        self.name: Optional[str] = None
        self.parent: Optional["Container"] = None

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        func = resolve_extension(self, name)
        if func is None:
            raise AttributeError(
                f"'{type(self).__name__}' object has no attribute '{name}'"
            )
        return functools.partial(func, self)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self.name!r}>"

    def lookup(self, kind: Type[C], need: bool = True) -> Optional[C]:
        """
        Find the closest component of type ``kind``, starting with self.

        Raises:
            ComponentNotAttachedError: If not found and ``need`` is set
        """
        node: Optional[Component] = self
        while node is not None:
            if isinstance(node, kind):
                return node
            node = node.parent
        if need:
            raise ComponentNotAttachedError(
                f"Component '{self.name}' is not attached to '{kind.__name__}'"
            )
        return None

    def lookup_path(self, kind: Type["Component"], need: bool = True) -> Optional[List[str]]:
        """Names from the closest ``kind`` ancestor (exclusive) down to self."""
        path: List[str] = []
        node: Optional[Component] = self
        while node is not None:
            if isinstance(node, kind):
                path.reverse()
                return path
            path.append(node.name)
            node = node.parent
        if need:
            raise ComponentNotAttachedError(
                f"Component '{self.name}' is not attached to '{kind.__name__}'"
            )
        return None

    def get_form(self, need: bool = True):
        """Return the Form this component is attached to."""
        from replicator.forms.form import Form

        return self.lookup(Form, need=need)

    def on_attach(self, form) -> None:
        """Called once when the component becomes reachable from ``form``."""

    def _attach_subtree(self, form) -> None:
        self.on_attach(form)


class Container(Component):
    """Component owning named children."""

    def __init__(self):
        super().__init__()
        self._components: Dict[str, Component] = {}
        self.current_group = None

    # ------------------------------------------------------------------
    # Child management
    # ------------------------------------------------------------------

    def add_component(
        self,
        component: Component,
        name: Any,
        insert_before: Optional[str] = None,
    ) -> "Container":
        """
        Add ``component`` under ``name``.

        Args:
            component: Detached component
            name: Child name (converted to str)
            insert_before: Name of an existing child to insert in front of

        Raises:
            ComponentExistsError: If a live child already uses ``name``
        """
        name = str(name)
        if name in self._components:
            raise ComponentExistsError(self.name, name)
        if component.parent is not None:
            raise ValueError(
                f"Component '{component.name}' already has a parent '{component.parent.name}'"
            )
        node: Optional[Component] = self
        while node is not None:
            if node is component:
                raise ValueError("Circular reference detected while adding component")
            node = node.parent

        component.name = name
        component.parent = self

        if insert_before is not None and insert_before in self._components:
            reordered: Dict[str, Component] = {}
            for key, child in self._components.items():
                if key == insert_before:
                    reordered[name] = component
                reordered[key] = child
            self._components = reordered
        else:
            self._components[name] = component

        if self.current_group is not None and component.joins_groups:
            self.current_group.add(component)

        form = self.get_form(need=False)
        if form is not None:
            component._attach_subtree(form)

        return self

    def remove_component(self, component: Component) -> None:
        """Detach ``component`` from this container."""
        if component.parent is not self or self._components.get(component.name) is not component:
            raise ValueError(f"Component '{component.name}' is not a child of '{self.name}'")
        del self._components[component.name]
        component.parent = None

    def create_component(self, name: str) -> Optional[Component]:
        """Hook for on-demand child creation; return None to decline."""
        return None

    def get_component(self, name: Any, need: bool = True) -> Optional[Component]:
        """
        Return the child called ``name``.

        Missing children are offered to create_component() when ``need`` is set.

        Raises:
            ComponentNotFoundError: If the child is missing and cannot be created
        """
        name = str(name)
        component = self._components.get(name)
        if component is not None or not need:
            return component

        component = self.create_component(name)
        if component is None:
            raise ComponentNotFoundError(self.name, name)
        if component.parent is None:
            self.add_component(component, name)
        return component

    def get_components(
        self,
        recursive: bool = False,
        kind: Optional[Type[C]] = None,
    ) -> Iterator[C]:
        """Iterate children (depth-first, parents first), optionally filtered by type."""
        for component in list(self._components.values()):
            if kind is None or isinstance(component, kind):
                yield component
            if recursive and isinstance(component, Container):
                yield from component.get_components(True, kind)

    def __getitem__(self, name: Any) -> Component:
        return self.get_component(name)

    def __contains__(self, name: Any) -> bool:
        return str(name) in self._components

    def __iter__(self) -> Iterator[Component]:
        return iter(list(self._components.values()))

    def __len__(self) -> int:
        return len(self._components)

    def _attach_subtree(self, form) -> None:
        # Children added during on_attach were attached by add_component
        children = list(self._components.values())
        self.on_attach(form)
        for child in children:
            if child.parent is self:
                child._attach_subtree(form)

    # ------------------------------------------------------------------
    # Builders
    # ------------------------------------------------------------------

    def set_current_group(self, group) -> "Container":
        self.current_group = group
        return self

    def add_container(self, name: Any) -> "Container":
        container = Container()
        container.current_group = self.current_group
        self.add_component(container, name)
        return container

    def add_text(self, name: Any, label: Optional[str] = None):
        from replicator.forms.controls import TextInput

        control = TextInput(label)
        self.add_component(control, name)
        return control

    def add_submit(self, name: Any, caption: Optional[str] = None):
        from replicator.forms.controls import SubmitButton

        button = SubmitButton(caption)
        self.add_component(button, name)
        return button

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------

    def set_values(self, values: Mapping[str, Any], erase: bool = False) -> "Container":
        """Assign values to descendant controls, matching by name."""
        from replicator.forms.controls import Control

        for name, component in self._components.items():
            if isinstance(component, Control):
                if component.omitted:
                    continue
                if name in values:
                    component.value = values[name]
                elif erase:
                    component.value = None
            elif isinstance(component, Container):
                nested = values.get(name)
                if isinstance(nested, Mapping):
                    component.set_values(nested, erase)
                elif erase:
                    component.set_values({}, erase)
        return self

    def get_values(self) -> Dict[str, Any]:
        """Collect descendant control values into a nested dict."""
        from replicator.forms.controls import Control

        values: Dict[str, Any] = {}
        for name, component in self._components.items():
            if isinstance(component, Control):
                if not component.omitted:
                    values[name] = component.value
            elif isinstance(component, Container):
                values[name] = component.get_values()
        return values
