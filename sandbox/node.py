"""Scene graph nodes and the registry that builds components from scene data."""

import logging
import weakref

import numpy as np

from sandbox.component import ComponentType
from sandbox.mathutil import quat_to_euler
from sandbox.transform import Transform

logger = logging.getLogger(__name__)


class ComponentRegistry:
    """Creates components from serialized data and keeps them by id."""

    def __init__(self):
        self._factories = {}
        self._components = {}

    def register(self, component_type, factory):
        """Use ``factory()`` to build components of ``component_type``."""
        self._factories[ComponentType(int(component_type))] = factory

    def create(self, data):
        """Build, deserialize and store the component described by ``data``."""
        raw_type = int(data["componentType"])
        try:
            component_type = ComponentType(raw_type)
            factory = self._factories[component_type]
        except (ValueError, KeyError):
            raise ValueError(f"Unknown component type: {raw_type}") from None
        component = factory()
        component.deserialize(data)
        self._components[component.id] = component
        return component

    def get(self, component_id):
        """Return the stored component with ``component_id``."""
        try:
            return self._components[component_id]
        except KeyError:
            raise KeyError(f"no component with id {component_id}") from None


class Node:
    """A named scene object with a transform, components and child nodes."""

    def __init__(self, name="", node_id=0):
        self.name = name
        self.id = node_id
        self.enabled = True
        self.transform = Transform()
        self._children = []
        self._components = []
        self._parent = None

    @property
    def parent(self):
        return self._parent() if self._parent is not None else None

    @property
    def children(self):
        return tuple(self._children)

    @property
    def components(self):
        return tuple(self._components)

    @property
    def first_child(self):
        if not self._children:
            raise IndexError("node has no children")
        return self._children[0]

    def serialize(self):
        """Return the node, its components and children as plain data."""
        transform = self.transform
        rotation = np.degrees(quat_to_euler(transform.rotation))
        return {
            "NodeName": self.name,
            "NodeID": self.id,
            "transform": {
                "position": [float(v) for v in transform.position],
                "rotation": [float(v) for v in rotation],
                "scale": [float(v) for v in transform.scale],
            },
            "components": [component.serialize() for component in self._components],
            "children": [child.serialize() for child in self._children],
        }

    @classmethod
    def from_dict(cls, data, registry, index=None):
        """Build a node tree from ``data``; ``index`` collects nodes by id."""
        node = cls()
        if "NodeName" in data:
            node.name = str(data["NodeName"])
        if "NodeID" in data:
            node.id = int(data["NodeID"])
        if index is not None:
            index[node.id] = node

        if "transform" in data:
            transform_data = data["transform"]
            position = transform_data["position"]
            rotation = transform_data["rotation"]
            scale = transform_data["scale"]
            node.transform.set_position(position[:3])
            node.transform.set_rotation_euler(rotation[:3])
            node.transform.set_scale(scale[:3])

        for component_data in data.get("components", ()):
            if "componentType" in component_data:
                registry.create(component_data)
                node.add_component(registry.get(int(component_data["componentId"])))

        for child_data in data.get("children", ()):
            node.add_child(cls.from_dict(child_data, registry, index))
        return node

    def add_child(self, child):
        if child is None:
            return
        child._parent = weakref.ref(self)
        child.transform.set_parent(self.transform)
        self._children.append(child)

    def add_component(self, component):
        component.set_owner_transform(self.transform)
        component.set_owner_node(self)
        self._components.append(component)

    def _active_components(self):
        return [component for component in self._components if component.enabled]

    def init(self):
        if not self.enabled:
            return
        for component in self._active_components():
            component.init()
        for child in self._children:
            child.init()

    def input(self):
        if not self.enabled:
            return
        for component in self._active_components():
            component.input()
        for child in self._children:
            child.input()

    def update(self, dt):
        if not self.enabled:
            return
        for component in self._active_components():
            component.update(dt)
        for child in self._children:
            child.update(dt)

    def render(self, parent_world):
        """Draw components with ``parent_world`` and children with this node's world."""
        if not self.enabled:
            return
        world = self.transform.combine(parent_world)
        for component in self._active_components():
            component.render(parent_world)
        for child in self._children:
            child.render(world)

    def render_shadows(self, parent_world):
        if not self.enabled:
            return
        world = self.transform.combine(parent_world)
        for component in self._active_components():
            component.render_shadows(parent_world)
        for child in self._children:
            child.render_shadows(world)

    def update_transforms(self, parent_world):
        if not self.enabled:
            return
        world = self.transform.combine(parent_world)
        for child in self._children:
            child.update_transforms(world)

    def remove_child(self, child):
        """Remove ``child`` from this node or, failing that, from any descendant."""
        if child in self._children:
            self._children.remove(child)
            return
        for node in self._children:
            node.remove_child(child)

    def move_child_to_end(self, child):
        if child in self._children and self._children[-1] is not child:
            self._children.remove(child)
            self._children.append(child)

    def get_component(self, cls):
        """Return the first component that is an instance of ``cls``, or None."""
        return next((c for c in self._components if isinstance(c, cls)), None)

    def get_components(self, cls):
        """Return every component that is an instance of ``cls``."""
        return [c for c in self._components if isinstance(c, cls)]