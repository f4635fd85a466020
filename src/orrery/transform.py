"""
Live body transforms and the rotation helpers used to advance them.

Quaternions are stored scalar-first as ``[w, x, y, z]``.
"""

import numpy as np
from dataclasses import dataclass, field

Y_AXIS = np.array([0.0, 1.0, 0.0])
X_AXIS = np.array([1.0, 0.0, 0.0])


def rotation_y(angle: float) -> np.ndarray:
    """3x3 matrix rotating by ``angle`` radians about +Y (right-handed)."""
    c, s = np.cos(angle), np.sin(angle)
    return np.array([
        [c, 0.0, s],
        [0.0, 1.0, 0.0],
        [-s, 0.0, c],
    ])


def rotate_about_y(point, pivot, angle: float) -> np.ndarray:
    """Rotate ``point`` about the vertical axis through ``pivot``."""
    point = np.asarray(point, dtype=float)
    pivot = np.asarray(pivot, dtype=float)
    return pivot + rotation_y(angle) @ (point - pivot)


def quat_from_axis_angle(axis, angle: float) -> np.ndarray:
    """Unit quaternion for a rotation of ``angle`` radians about ``axis``."""
    axis = np.asarray(axis, dtype=float)
    norm = np.linalg.norm(axis)
    if norm == 0:
        raise ValueError("Rotation axis must be non-zero")
    half = 0.5 * angle
    return np.concatenate(([np.cos(half)], np.sin(half) * axis / norm))


def quat_rotate(q, v) -> np.ndarray:
    """Rotate vector ``v`` by unit quaternion ``q``."""
    q = np.asarray(q, dtype=float)
    v = np.asarray(v, dtype=float)
    u = q[1:]
    # v' = v + 2w(u x v) + 2u x (u x v)
    t = 2.0 * np.cross(u, v)
    return v + q[0] * t + np.cross(u, t)


# bodies are tilted upright so sphere textures are not drawn sideways
UPRIGHT = quat_from_axis_angle(X_AXIS, np.pi / 2)


@dataclass
class LiveTransform:
    """
    Mutable per-frame transform of one body.

    Attributes
    ----------
    position : np.ndarray
        Render-space position, shape (3,)
    orientation : np.ndarray
        Unit quaternion ``[w, x, y, z]``
    """
    position: np.ndarray
    orientation: np.ndarray = field(default_factory=lambda: UPRIGHT.copy())

    def __post_init__(self):
        self.position = np.asarray(self.position, dtype=float).reshape(3)
        self.orientation = np.asarray(self.orientation, dtype=float).reshape(4)

    def translate_around(self, pivot, angle: float):
        """
        Move the position about the vertical axis through ``pivot``.

        Only the position changes; orientation is left alone.
        """
        self.position = rotate_about_y(self.position, pivot, angle)

    def copy(self) -> 'LiveTransform':
        return LiveTransform(self.position.copy(), self.orientation.copy())

    def __eq__(self, other) -> bool:
        if not isinstance(other, LiveTransform):
            return NotImplemented
        return (np.allclose(self.position, other.position) and
                np.allclose(self.orientation, other.orientation))
