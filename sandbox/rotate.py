"""Component that spins its owner around an axis."""

import math

import numpy as np

from sandbox.component import Component, ComponentType
from sandbox.mathutil import angle_axis, normalize, quat_multiply, quat_rotate


class Rotate(Component):
    """Rotates the owner by ``speed`` degrees per second about a local axis."""

    component_type = ComponentType.ROTATE

    def __init__(self, axis=(0.0, 1.0, 0.0), speed=1.0):
        super().__init__()
        self.axis = np.array(axis, dtype=float)
        self.speed = float(speed)
        self.paused = False

    def serialize(self):
        return {
            "axis": {"x": float(self.axis[0]), "y": float(self.axis[1]), "z": float(self.axis[2])},
            "speed": self.speed,
        }

    def deserialize(self, data):
        if "axis" in data:
            axis = data["axis"]
            self.axis = np.array([axis["x"], axis["y"], axis["z"]], dtype=float)
        if "speed" in data:
            self.speed = float(data["speed"])
        super().deserialize(data)

    def update(self, dt):
        if not self.paused:
            self._apply_rotation(dt)

    def reset(self):
        self._require_transform().set_rotation_euler((0.0, -60.0, 0.0))

    def _apply_rotation(self, dt):
        transform = self._require_transform()
        angle = self.speed * dt
        current = transform.rotation
        axis = quat_rotate(current, self.axis)
        step = angle_axis(math.radians(angle), normalize(axis))
        transform.set_rotation(quat_multiply(step, current))