"""Component that drops its owner onto the top layer of the terrain."""

from sandbox.component import Component, ComponentType


class TopLayerSnap(Component):
    """Snaps the owner's height to the floor below it plus ``y_offset``.

    ``floor_height`` is a callable taking a position and returning the height
    of the top layer there.
    """

    component_type = ComponentType.TOP_LAYER_SNAP

    def __init__(self, y_offset=0.0, floor_height=None):
        super().__init__()
        self.y_offset = float(y_offset)
        self.floor_height = floor_height

    def serialize(self):
        return {"yOffset": self.y_offset}

    def deserialize(self, data):
        if "yOffset" in data:
            self.y_offset = float(data["yOffset"])
        super().deserialize(data)

    def _snap(self):
        if self.floor_height is None:
            raise RuntimeError("no floor height source set")
        transform = self._require_transform()
        floor = float(self.floor_height(transform.position))
        transform.set_position_axis(floor + self.y_offset, 1)

    def update(self, dt):
        """Snap once and then disable the component."""
        self._snap()
        self.enabled = False

    def reset(self):
        self._snap()