"""Vector, quaternion and matrix helpers built on numpy.

Quaternions are arrays ``(w, x, y, z)``. Matrices are 4x4 arrays meant to be
applied as ``matrix @ column_vector``.
"""

import math

import numpy as np

FLT_EPSILON = 1.1920929e-07


def _vec(v):
    return np.asarray(v, dtype=float)


def normalize(v):
    """Return ``v`` scaled to unit length."""
    arr = _vec(v)
    length = float(np.linalg.norm(arr))
    if length == 0.0:
        raise ValueError("cannot normalize a zero-length vector")
    return arr / length


def quat_identity():
    """Return the identity rotation."""
    return np.array([1.0, 0.0, 0.0, 0.0])


def quat_multiply(a, b):
    """Return the Hamilton product ``a * b``."""
    aw, ax, ay, az = _vec(a)
    bw, bx, by, bz = _vec(b)
    return np.array([
        aw * bw - ax * bx - ay * by - az * bz,
        aw * bx + ax * bw + ay * bz - az * by,
        aw * by - ax * bz + ay * bw + az * bx,
        aw * bz + ax * by - ay * bx + az * bw,
    ])


def quat_rotate(q, v):
    """Rotate the vector ``v`` by the unit quaternion ``q``."""
    q = _vec(q)
    v = _vec(v)
    axis = q[1:]
    uv = np.cross(axis, v)
    uuv = np.cross(axis, uv)
    return v + (uv * q[0] + uuv) * 2.0


def quat_from_euler(radians):
    """Build a quaternion from pitch, yaw and roll angles in radians."""
    half = _vec(radians) * 0.5
    cx, cy, cz = np.cos(half)
    sx, sy, sz = np.sin(half)
    return np.array([
        cx * cy * cz + sx * sy * sz,
        sx * cy * cz - cx * sy * sz,
        cx * sy * cz + sx * cy * sz,
        cx * cy * sz - sx * sy * cz,
    ])


def quat_to_euler(q):
    """Return pitch, yaw and roll in radians for the quaternion ``q``."""
    w, x, y, z = _vec(q)
    roll = math.atan2(2.0 * (x * y + w * z), w * w + x * x - y * y - z * z)
    pitch_y = 2.0 * (y * z + w * x)
    pitch_x = w * w - x * x - y * y + z * z
    if abs(pitch_x) < FLT_EPSILON and abs(pitch_y) < FLT_EPSILON:
        pitch = 2.0 * math.atan2(x, w)
    else:
        pitch = math.atan2(pitch_y, pitch_x)
    yaw = math.asin(min(1.0, max(-1.0, -2.0 * (x * z - w * y))))
    return np.array([pitch, yaw, roll])


def quat_to_matrix(q):
    """Return the 4x4 rotation matrix of the quaternion ``q``."""
    w, x, y, z = _vec(q)
    xx, yy, zz = x * x, y * y, z * z
    xy, xz, yz = x * y, x * z, y * z
    wx, wy, wz = w * x, w * y, w * z
    columns = np.array([
        [1.0 - 2.0 * (yy + zz), 2.0 * (xy + wz), 2.0 * (xz - wy)],
        [2.0 * (xy - wz), 1.0 - 2.0 * (xx + zz), 2.0 * (yz + wx)],
        [2.0 * (xz + wy), 2.0 * (yz - wx), 1.0 - 2.0 * (xx + yy)],
    ])
    result = np.eye(4)
    result[:3, :3] = columns.T
    return result


def quat_from_matrix(m):
    """Extract the rotation quaternion from the upper 3x3 block of ``m``."""
    m = _vec(m)
    four_w = m[0, 0] + m[1, 1] + m[2, 2]
    four_x = m[0, 0] - m[1, 1] - m[2, 2]
    four_y = m[1, 1] - m[0, 0] - m[2, 2]
    four_z = m[2, 2] - m[0, 0] - m[1, 1]
    candidates = [four_w, four_x, four_y, four_z]
    biggest = max(range(4), key=lambda i: candidates[i])
    big = math.sqrt(candidates[biggest] + 1.0) * 0.5
    mult = 0.25 / big
    if biggest == 0:
        return np.array([big, (m[2, 1] - m[1, 2]) * mult,
                         (m[0, 2] - m[2, 0]) * mult, (m[1, 0] - m[0, 1]) * mult])
    if biggest == 1:
        return np.array([(m[2, 1] - m[1, 2]) * mult, big,
                         (m[1, 0] + m[0, 1]) * mult, (m[0, 2] + m[2, 0]) * mult])
    if biggest == 2:
        return np.array([(m[0, 2] - m[2, 0]) * mult, (m[1, 0] + m[0, 1]) * mult,
                         big, (m[2, 1] + m[1, 2]) * mult])
    return np.array([(m[1, 0] - m[0, 1]) * mult, (m[0, 2] + m[2, 0]) * mult,
                     (m[2, 1] + m[1, 2]) * mult, big])


def angle_axis(angle, axis):
    """Return the rotation of ``angle`` radians about ``axis``."""
    half = angle * 0.5
    return np.concatenate(([math.cos(half)], _vec(axis) * math.sin(half)))


def translation_matrix(offset):
    """Return a 4x4 matrix translating by ``offset``."""
    result = np.eye(4)
    result[:3, 3] = _vec(offset)
    return result


def scale_matrix(scale):
    """Return a 4x4 matrix scaling by ``scale`` per axis."""
    result = np.eye(4)
    result[0, 0], result[1, 1], result[2, 2] = _vec(scale)
    return result