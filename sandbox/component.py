"""Base class for behaviour attached to scene nodes."""

from enum import IntEnum


class ComponentType(IntEnum):
    """Kinds of component; the values are stored in scene files."""

    CAMERA = 0
    PLAYER_CONTROLLER = 1
    BLOCK_MANAGER = 2
    INSTANCE_RENDERER = 3
    AUDIO_SOURCE = 4
    MESH_RENDERER = 5
    ENEMY_AI = 6
    ANIMATION = 7
    CLOUD_MANAGER = 8
    TURRET = 9
    PARTICLE_GENERATOR = 10
    REFUEL_STATION = 11
    SHOVEL_CONTROLLER = 12
    SHOVEL_RENDERER = 13
    ROTATE = 14
    DISABLER = 15
    GLOWSTICK_MOVEMENT = 16
    PDA_CONTROLLER = 17
    TOP_LAYER_SNAP = 18
    COMPASS_CONTROLLER = 19


class Component:
    """A piece of behaviour owned by a node; subclasses override the hooks.

    The base hooks record which lifecycle stages have run, so that a scene
    can tell whether a component has been initiated, initialised, polled for
    input or drawn.
    """

    component_type = None

    def __init__(self):
        self.id = 0
        self.type = self.component_type
        self.enabled = True
        self.owner_transform = None
        self.owner_node = None
        self.initiated = False
        self.initialised = False
        self.input_frames = 0
        self.last_world = None
        self.last_shadow_world = None

    def serialize(self):
        return {
            "componentType": int(self.type) if self.type is not None else None,
            "componentId": self.id,
        }

    def deserialize(self, data):
        if "componentId" in data:
            self.id = int(data["componentId"])
        if "componentType" in data:
            self.type = ComponentType(int(data["componentType"]))

    def initiate(self):
        """Hook run once after the component has been created."""
        self.initiated = True

    def init(self):
        """Hook run when the scene is initialised."""
        self.initialised = True

    def input(self):
        """Hook run once per frame to read input; counts the frames polled."""
        self.input_frames += 1

    def update(self, dt):
        """Hook run once per frame with the frame time ``dt``."""

    def render(self, parent_world):
        """Hook run to draw the component; keeps the world matrix it was given."""
        self.last_world = parent_world

    def render_shadows(self, parent_world):
        """Hook run to draw into the shadow map; keeps the world matrix given."""
        self.last_shadow_world = parent_world

    def set_owner_transform(self, transform):
        self.owner_transform = transform

    def set_owner_node(self, node):
        self.owner_node = node

    def _require_transform(self):
        if self.owner_transform is None:
            raise RuntimeError("component has no owner transform")
        return self.owner_transform

    @property
    def owner_position(self):
        return self._require_transform().position

    @property
    def owner_rotation(self):
        return self._require_transform().rotation

    @property
    def owner_scale(self):
        return self._require_transform().scale