"""
Camera Targeting Controller
===========================

Derives a desired camera pose each frame from the selection state and the
selected body's live position, then moves the emitted pose toward it with
exponential smoothing so that retargeting glides instead of cutting.

Smoothing is frame-rate aware. For a frame of ``dt`` seconds and a smoothing
time constant ``s`` the interpolation factor is::

    alpha = 1 - exp(-8 * dt / s)

so for a fixed ``dt`` the remaining error shrinks by ``1 - alpha`` per frame.

While the same body stays locked, tracking is predictive: the emitted pose is
carried along by the body's displacement since the previous frame and only
the remaining offset is smoothed::

    shift = target_new - target_old            (desired targets)
    pose_new = desired_new + (1 - alpha) * (pose_old + shift - desired_new)

A body moving along its orbit is therefore framed exactly once the initial
offset has decayed, while a change of selection still glides.
"""

import math
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from .bodies import BodyId
from .config import config
from .propagator import OrbitalPropagator
from .transform import Y_AXIS
from .utils import validation_error

# Scale applied to dt / smoothness; a smoothness of s settles to ~0.03% in s seconds
SMOOTHNESS_MULT = 8.0


@dataclass(frozen=True, eq=False)
class CameraPose:
    """
    Camera placement as eye point, look-at target and up vector.

    Attributes
    ----------
    eye : np.ndarray
        Camera position, shape (3,)
    target : np.ndarray
        Point the camera looks at, shape (3,)
    up : np.ndarray
        Up direction, shape (3,)
    """
    eye: np.ndarray
    target: np.ndarray
    up: np.ndarray = field(default_factory=lambda: Y_AXIS.copy())

    def __post_init__(self):
        for name in ('eye', 'target', 'up'):
            value = np.array(getattr(self, name), dtype=float).reshape(3)
            value.flags.writeable = False
            object.__setattr__(self, name, value)
        if np.allclose(self.up, 0):
            raise ValueError("Camera up vector must be non-zero")

    def forward(self) -> np.ndarray:
        """Unit vector from eye toward target (zero if they coincide)."""
        direction = self.target - self.eye
        norm = np.linalg.norm(direction)
        if norm == 0:
            return np.zeros(3)
        return direction / norm

    def distance(self) -> float:
        """Eye-target distance."""
        return float(np.linalg.norm(self.target - self.eye))

    def look_at_matrix(self) -> np.ndarray:
        """
        Right-handed 4x4 view matrix (world to camera).

        Raises
        ------
        ValueError
            If eye and target coincide or the view direction is parallel
            to the up vector
        """
        f = self.forward()
        if not np.any(f):
            raise ValueError("Camera eye and target coincide")
        side = np.cross(f, self.up)
        norm = np.linalg.norm(side)
        if norm == 0:
            raise ValueError("Camera view direction is parallel to up vector")
        side /= norm
        up = np.cross(side, f)

        view = np.eye(4)
        view[0, :3] = side
        view[1, :3] = up
        view[2, :3] = -f
        view[:3, 3] = -view[:3, :3] @ self.eye
        return view

    def isclose(self, other: 'CameraPose', rtol: float = 1e-9,
                atol: float = 1e-9) -> bool:
        return (np.allclose(self.eye, other.eye, rtol=rtol, atol=atol) and
                np.allclose(self.target, other.target, rtol=rtol, atol=atol) and
                np.allclose(self.up, other.up, rtol=rtol, atol=atol))

    def __repr__(self):
        return (f"CameraPose(eye={self.eye.tolist()}, "
                f"target={self.target.tolist()}, up={self.up.tolist()})")


def overview_pose() -> CameraPose:
    """Fixed overview pose: eye at ``config.OVERVIEW_EYE``, looking at the Sun."""
    return CameraPose(eye=config.OVERVIEW_EYE, target=np.zeros(3), up=Y_AXIS)


def smoothing_factor(dt: float, smoothness: float) -> float:
    """
    Exponential interpolation factor for one frame.

    Parameters
    ----------
    dt : float
        Frame time [s], non-negative
    smoothness : float
        Time constant [s]; values at or below zero snap immediately

    Returns
    -------
    float
        Factor in [0, 1]; strictly inside (0, 1) for ``dt > 0`` and
        positive ``smoothness``
    """
    if smoothness <= 0:
        return 1.0
    return 1.0 - math.exp(-SMOOTHNESS_MULT * dt / smoothness)


class CameraController:
    """
    Stateful camera that lags toward the pose implied by the selection.

    Parameters
    ----------
    initial_pose : CameraPose, optional
        Starting emitted pose (default: the overview pose)

    Notes
    -----
    Framing factor, offset axis and smoothness values are read from
    ``orrery.config`` at construction.
    """

    def __init__(self, initial_pose: Optional[CameraPose] = None):
        self._framing = config.CAMERA_FRAMING_FACTOR
        self._axis = config.AXIS_INDEX
        self._eye_smoothness = config.EYE_SMOOTHNESS
        self._target_smoothness = config.TARGET_SMOOTHNESS
        self._overview = overview_pose()

        if self._framing <= 1:
            raise ValueError(
                f"Camera framing factor must exceed 1 to clear the body "
                f"surface, got {self._framing}"
            )

        self._predictive = config.PREDICTIVE_TRACKING
        self._pose = initial_pose if initial_pose is not None else self._overview
        self._desired = self._pose
        # selection the last update tracked; a mismatch disables prediction
        self._tracked: Optional[BodyId] = None

    # ========== DESIRED POSE ==========
    def desired_pose(self, selected: Optional[BodyId],
                     propagator: OrbitalPropagator) -> CameraPose:
        """
        Instantaneous camera placement for the current selection.

        When Idle this is the overview pose. When a body is locked the
        target is the body's position and the eye sits
        ``framing * scaled_radius`` away along the offset axis, on the same
        side of that axis as the body itself.
        """
        if selected is None:
            return self._overview

        position = propagator.position(selected)
        offset = np.zeros(3)
        offset[self._axis] = propagator.scaled_radius(selected) * self._framing
        if position[self._axis] < 0:
            offset[self._axis] = -offset[self._axis]
        return CameraPose(eye=position + offset, target=position, up=Y_AXIS)

    # ========== SMOOTHING ==========
    def update(self, dt: float, selected: Optional[BodyId],
               propagator: OrbitalPropagator) -> CameraPose:
        """
        Move the emitted pose one frame toward the desired pose.

        Parameters
        ----------
        dt : float
            Frame time [s]
        selected : BodyId or None
            Locked body, or None when Idle
        propagator : OrbitalPropagator
            Source of live body positions, already advanced this frame

        Returns
        -------
        CameraPose
            The new emitted pose
        """
        dt = float(dt)
        if not math.isfinite(dt) or dt < 0:
            validation_error(
                f"Camera frame time must be finite and non-negative, got {dt}"
            )
            return self._pose

        desired = self.desired_pose(selected, propagator)
        if self._predictive and selected is not None and selected == self._tracked:
            # body displacement since the previous frame
            shift = desired.target - self._desired.target
        else:
            shift = np.zeros(3)
        self._desired = desired
        self._tracked = selected

        eye_t = smoothing_factor(dt, self._eye_smoothness)
        target_t = smoothing_factor(dt, self._target_smoothness)

        eye = desired.eye + (1 - eye_t) * (self._pose.eye + shift - desired.eye)
        target = desired.target + (1 - target_t) * (self._pose.target + shift - desired.target)
        up = self._pose.up + eye_t * (self._desired.up - self._pose.up)
        norm = np.linalg.norm(up)
        up = up / norm if norm > 0 else self._desired.up

        self._pose = CameraPose(eye=eye, target=target, up=up)
        return self._pose

    def snap_to(self, pose: CameraPose):
        """Set the emitted pose immediately, without smoothing."""
        self._pose = pose
        self._desired = pose
        self._tracked = None

    # ========== PROPERTY ACCESS ==========
    @property
    def pose(self) -> CameraPose:
        """Current emitted (smoothed) pose."""
        return self._pose

    @property
    def desired(self) -> CameraPose:
        """Desired pose computed by the most recent update."""
        return self._desired

    @property
    def overview(self) -> CameraPose:
        return self._overview

    @property
    def framing_factor(self) -> float:
        return self._framing

    def __repr__(self):
        return f"CameraController(pose={self._pose!r})"
