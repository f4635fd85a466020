"""
Simulation Context
==================

Bundles the catalog, orbital propagator, selection state, event queue and
camera controller into one explicitly passed value, and runs the per-frame
pipeline in its fixed order::

    propagator.advance -> drain selection events -> camera.update

so the camera always reads positions already advanced for the current frame.
"""

import logging
import math
from typing import Optional

import numpy as np

from .bodies import BodyId, BodyRecord
from .camera import CameraController, CameraPose
from .catalog import Catalog, BodyRef
from .propagator import OrbitalPropagator
from .selection import Deselect, EventQueue, Pick, SelectionEvent, SelectionState

logger = logging.getLogger(__name__)


class Simulation:
    """
    Interactive solar system model: orbits, selection and camera.

    Parameters
    ----------
    catalog : Catalog, optional
        Body table (default: the built-in solar system)
    initial_pose : CameraPose, optional
        Starting camera pose (default: the overview pose)
    time_scale : float, optional
        Simulated orbital time units per second of frame time (default: 1.0).
        Only the propagator sees scaled time; camera smoothing always runs
        on the unscaled frame time so retargeting glides at any speed.

    Examples
    --------
    >>> sim = Simulation()
    >>> sim.pick('Jupiter')
    >>> sim.run(frames=120, dt=1 / 60)
    >>> sim.selected
    <BodyId.JUPITER: 'jupiter'>
    >>> sim.escape()
    >>> sim.tick(1 / 60)
    >>> sim.selected is None
    True
    """

    def __init__(self, catalog: Optional[Catalog] = None,
                 initial_pose: Optional[CameraPose] = None,
                 time_scale: float = 1.0):
        self._catalog = catalog if catalog is not None else Catalog()
        self._propagator = OrbitalPropagator(self._catalog)
        self._selection = SelectionState()
        self._events = EventQueue()
        self._camera = CameraController(initial_pose)
        self._frames = 0
        self._time_scale = 1.0
        self.time_scale = time_scale

    # ========== CORE INTERFACE ==========
    def advance_orbits(self, elapsed_time: float):
        """Advance every body's transform by ``elapsed_time`` simulated time units."""
        self._propagator.advance(elapsed_time)

    def apply_selection_event(self, event: SelectionEvent) -> bool:
        """
        Apply a Pick or Deselect immediately, bypassing the frame queue.

        Returns
        -------
        bool
            True if the selection changed
        """
        self._check_in_catalog(event)
        return self._selection.apply(event)

    def current_camera_pose(self) -> CameraPose:
        """Smoothed camera pose for the renderer."""
        return self._camera.pose

    def body_position(self, body: BodyRef) -> np.ndarray:
        return self._propagator.position(body)

    def body_scaled_radius(self, body: BodyRef) -> float:
        return self._propagator.scaled_radius(body)

    # ========== EVENTS ==========
    def post_event(self, event: SelectionEvent):
        """
        Queue an event for the next ``tick``.

        Raises
        ------
        KeyError
            If ``event`` picks a body that is not in the catalog
        """
        self._check_in_catalog(event)
        self._events.post(event)

    def _check_in_catalog(self, event: SelectionEvent):
        if isinstance(event, Pick) and event.body not in self._catalog:
            raise KeyError(f"No record for body '{event.body.value}'")

    def pick(self, ref: BodyRef):
        """Queue a Pick for a BodyId, body name or BodyRecord."""
        self.post_event(Pick(self._catalog.resolve(ref)))

    def escape(self):
        """Queue a Deselect (escape key)."""
        logger.info("Escape pressed")
        self.post_event(Deselect())

    # ========== FRAME PIPELINE ==========
    def tick(self, elapsed_time: float) -> CameraPose:
        """
        Run one frame: advance orbits, apply queued events, move the camera.

        Parameters
        ----------
        elapsed_time : float
            Frame time [s] since the previous frame. Orbits advance by
            ``elapsed_time * time_scale``; the camera smooths over
            ``elapsed_time``.

        Returns
        -------
        CameraPose
            The emitted camera pose for this frame
        """
        self._propagator.advance(elapsed_time * self._time_scale)
        event = self._events.drain()
        if event is not None:
            self.apply_selection_event(event)
        self._frames += 1
        return self._camera.update(elapsed_time, self._selection.current,
                                   self._propagator)

    def run(self, frames: int, dt: float) -> CameraPose:
        """
        Drive ``tick`` for ``frames`` frames of fixed frame time ``dt``.

        Returns
        -------
        CameraPose
            The emitted camera pose after the last frame
        """
        if frames < 0:
            raise ValueError(f"frames must be non-negative, got {frames}")
        pose = self._camera.pose
        for _ in range(frames):
            pose = self.tick(dt)
        return pose

    def reset(self):
        """Return bodies to their start positions, clear selection and camera."""
        self._propagator.reset()
        self._events.drain()
        self._selection.apply(Deselect())
        self._camera.snap_to(self._camera.overview)
        self._frames = 0

    # ========== PROPERTY ACCESS ==========
    @property
    def catalog(self) -> Catalog:
        return self._catalog

    @property
    def propagator(self) -> OrbitalPropagator:
        return self._propagator

    @property
    def camera(self) -> CameraController:
        return self._camera

    @property
    def selection(self) -> SelectionState:
        return self._selection

    @property
    def selected(self) -> Optional[BodyId]:
        """Locked body, or None when Idle."""
        return self._selection.current

    @property
    def selected_record(self) -> Optional[BodyRecord]:
        """Record of the locked body for the info panel, or None."""
        if self._selection.current is None:
            return None
        return self._catalog.record(self._selection.current)

    @property
    def time_scale(self) -> float:
        """Simulated orbital time units per second of frame time."""
        return self._time_scale

    @time_scale.setter
    def time_scale(self, value: float):
        value = float(value)
        if not math.isfinite(value) or value < 0:
            raise ValueError(f"time_scale must be finite and non-negative, got {value}")
        self._time_scale = value

    @property
    def frames(self) -> int:
        """Number of frames ticked since construction or reset."""
        return self._frames

    @property
    def pending_events(self) -> int:
        return len(self._events)

    def __repr__(self):
        return (f"Simulation({self._catalog!r}, {self._selection!r}, "
                f"frames={self._frames})")
