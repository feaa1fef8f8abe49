"""Position, rotation and scale of a scene object, with a cached matrix."""

import logging
import math

import numpy as np

from sandbox.mathutil import (
    FLT_EPSILON,
    angle_axis,
    normalize,
    quat_from_euler,
    quat_identity,
    quat_multiply,
    quat_to_euler,
    quat_to_matrix,
    scale_matrix,
    translation_matrix,
)

logger = logging.getLogger(__name__)

_LOCAL_FORWARD = np.array([0.0, 0.0, 1.0])


def _vec3(v):
    return np.array(v, dtype=float).reshape(3)


def _scale3(scale):
    arr = np.asarray(scale, dtype=float)
    if arr.ndim == 0:
        return np.full(3, float(arr))
    return arr.reshape(3).copy()


class Transform:
    """Local transform with an optional parent and a dirty-tracked matrix."""

    def __init__(self, position=None, rotation=None, scale=None):
        self._parent = None
        self._position = np.zeros(3) if position is None else _vec3(position)
        self._rotation = quat_identity() if rotation is None else np.array(rotation, dtype=float)
        self._scale = np.ones(3) if scale is None else _scale3(scale)
        self._ctm = np.eye(4)
        self._global_ctm = np.eye(4)
        self._dirty = True
        self.update_ctm()

    @property
    def position(self):
        return self._position.copy()

    @property
    def rotation(self):
        return self._rotation.copy()

    @property
    def scale(self):
        return self._scale.copy()

    @property
    def ctm(self):
        return self._ctm.copy()

    @property
    def global_ctm(self):
        return self._global_ctm.copy()

    @property
    def parent(self):
        return self._parent

    @property
    def is_dirty(self):
        return self._dirty

    def set_position(self, position):
        self._dirty = True
        self._position = _vec3(position)

    def set_position_axis(self, value, axis):
        """Set one coordinate; axes other than 0, 1 and 2 change nothing."""
        if axis in (0, 1, 2):
            self._position[axis] = value
        self._dirty = True

    def add_position(self, offset):
        self._position = self._position + _vec3(offset)
        self._dirty = True

    def add_position_axis(self, offset, axis):
        """Add to one coordinate; axes other than 0, 1 and 2 change nothing."""
        if axis in (0, 1, 2):
            self._position[axis] += offset
        self._dirty = True

    def set_rotation(self, rotation):
        self._dirty = True
        self._rotation = np.array(rotation, dtype=float)

    def set_rotation_euler(self, degrees):
        self._dirty = True
        self._rotation = quat_from_euler(np.radians(_vec3(degrees)))

    def add_rotation(self, rotation):
        self._dirty = True
        self._rotation = quat_multiply(self._rotation, rotation)

    def set_scale(self, scale):
        """Set the scale from a vector or from one number for all axes."""
        self._dirty = True
        self._scale = _scale3(scale)

    def set_parent(self, parent):
        self._parent = parent
        self._dirty = True

    def _look_along(self, direction):
        length = float(np.linalg.norm(direction))
        if length < FLT_EPSILON:
            return
        direction = direction / length
        if np.all(np.abs(_LOCAL_FORWARD + direction) < FLT_EPSILON):
            self._rotation = quat_from_euler((0.0, math.pi, 0.0))
            return
        if np.all(np.abs(_LOCAL_FORWARD - direction) < FLT_EPSILON):
            self._rotation = quat_identity()
            return
        axis = np.cross(_LOCAL_FORWARD, direction)
        angle = math.acos(min(1.0, max(-1.0, float(np.dot(_LOCAL_FORWARD, direction)))))
        self._rotation = angle_axis(angle, normalize(axis))
        self._dirty = True

    def look_at(self, direction):
        """Turn the local +Z axis towards ``direction``."""
        self._look_along(_vec3(direction))

    def look_at_position(self, position):
        """Turn the local +Z axis towards the point ``position``."""
        self._look_along(_vec3(position) - self._position)

    def global_position(self):
        return self._global_ctm[:3, 3].copy()

    def update_global_ctm(self):
        if self._parent is None:
            raise ValueError("transform has no parent")
        self.update_ctm()
        self._global_ctm = self._parent.ctm @ self._ctm

    def debug(self):
        """Log position, scale and rotation in degrees."""
        x, y, z = self._position
        logger.info("Logging position: (%s,%s,%s)", x, y, z)
        x, y, z = self._scale
        logger.info("Logging scale: (%s,%s,%s)", x, y, z)
        x, y, z = np.degrees(quat_to_euler(self._rotation))
        logger.info("Logging rotation: (%s,%s,%s)", x, y, z)

    def update_transform(self):
        if not self._dirty:
            return
        if self._parent is not None:
            self._parent.update_transform()
        self.update_ctm()
        self.combine(self._parent.ctm if self._parent is not None else np.eye(4))

    def update_ctm(self):
        if not self._dirty:
            return
        self._ctm = self.matrix()
        self._dirty = False

    def matrix(self):
        """Compute translation * rotation * scale from the current values."""
        return Transform.calculate_transform_matrix(self._position, self._rotation, self._scale)

    def combine(self, parent_ctm):
        self.update_ctm()
        self._global_ctm = np.asarray(parent_ctm, dtype=float) @ self._ctm
        return self._global_ctm.copy()

    @staticmethod
    def apply_transformation(vertices, transform):
        """Return each point of ``vertices`` transformed by the 4x4 ``transform``."""
        matrix = np.asarray(transform, dtype=float)
        return [(matrix @ np.append(_vec3(v), 1.0))[:3] for v in vertices]

    @staticmethod
    def calculate_transform_matrix(position, rotation, scale):
        return (translation_matrix(position)
                @ quat_to_matrix(rotation)
                @ scale_matrix(_scale3(scale)))

    @staticmethod
    def origin():
        return np.eye(4)

    @staticmethod
    def move_towards(current, target, max_distance_delta):
        """Step from ``current`` towards ``target`` by at most the given distance."""
        current = _vec3(current)
        target = _vec3(target)
        delta = target - current
        magnitude = float(np.linalg.norm(delta))
        if magnitude <= max_distance_delta or magnitude == 0.0:
            return target
        return current + delta / magnitude * max_distance_delta