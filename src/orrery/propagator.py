"""
Orbital Propagator
==================

Advances every body's live transform once per frame.

Bodies follow fixed circular orbits in the XZ plane. The update is two-pass
so that a parent is always moved before its children:

1. Primaries (planets) rotate about the Sun at the origin.
2. Satellites (moons) are carried along with their parent's displacement
   and rotate about the parent's freshly updated position.

The update is incremental: each frame rotates the previous frame's position
instead of recomputing it from absolute time.
"""

import logging
import math
from typing import Dict, Optional

import numpy as np
import pandas as pd

from .bodies import BodyId
from .catalog import Catalog, BodyRef
from .config import config
from .scale import scaled_distance, scaled_radius, orbital_angular_velocity
from .transform import LiveTransform, rotation_y
from .utils import validation_error

logger = logging.getLogger(__name__)


class OrbitalPropagator:
    """
    Owner of the per-body LiveTransform table.

    Scaled radii, distances and angular velocities are computed from
    ``orrery.config`` once, at construction.

    Parameters
    ----------
    catalog : Catalog
        Body table to animate

    Examples
    --------
    >>> prop = OrbitalPropagator(Catalog())
    >>> prop.advance(1 / 60)
    >>> prop.position(BodyId.SUN)
    array([0., 0., 0.])
    """

    def __init__(self, catalog: Catalog):
        self._catalog = catalog
        self._primaries = catalog.primaries()
        self._satellites = catalog.satellites()

        self._radius: Dict[BodyId, float] = {}
        self._distance: Dict[BodyId, float] = {}
        self._omega: Dict[BodyId, float] = {}
        for record in catalog:
            self._radius[record.body] = scaled_radius(record, catalog)
            self._distance[record.body] = scaled_distance(record, catalog)
            if record.parent in catalog:
                self._omega[record.body] = orbital_angular_velocity(record, catalog)
            else:
                self._omega[record.body] = 0.0

        self._transforms: Dict[BodyId, LiveTransform] = {}
        self._elapsed = 0.0
        self.reset()

    # ========== STATE ==========
    def reset(self):
        """
        Place every body back at its initial transform.

        Each body starts on the +X axis at its scaled distance from its
        parent's initial position. A body whose parent is unknown starts at
        its scaled distance from the origin.
        """
        self._transforms = {}
        for body in self._catalog.ids():
            self._transforms[body] = LiveTransform(self._initial_position(body))
        self._elapsed = 0.0

    def _initial_position(self, body: BodyId, depth: int = 0) -> np.ndarray:
        if body == BodyId.SUN:
            return np.zeros(3)
        parent = self._catalog.parent_of(body)
        if parent == body or parent not in self._catalog or depth > 2:
            return np.array([self._distance[body], 0.0, 0.0])
        origin = self._initial_position(parent, depth + 1)
        return origin + np.array([self._distance[body], 0.0, 0.0])

    # ========== PROPAGATION ==========
    def advance(self, elapsed_time: float):
        """
        Advance every body by ``elapsed_time`` simulated time units.

        Parameters
        ----------
        elapsed_time : float
            Non-negative time since the previous frame

        Raises
        ------
        ValueError
            If ``elapsed_time`` is negative or not finite (only when
            ``config.STRICT_VALIDATION`` is True; otherwise the frame is
            skipped with a warning)
        """
        elapsed_time = float(elapsed_time)
        if not math.isfinite(elapsed_time) or elapsed_time < 0:
            validation_error(
                f"Elapsed time must be finite and non-negative, got {elapsed_time}"
            )
            return

        # Pass 1: primaries about the fixed Sun
        previous: Dict[BodyId, np.ndarray] = {}
        for body in self._primaries:
            transform = self._transforms[body]
            previous[body] = transform.position.copy()
            transform.translate_around(
                np.zeros(3), self._omega[body] * elapsed_time)

        # Pass 2: satellites about their parent's new position
        for body in self._satellites:
            parent = self._catalog.parent_of(body)
            if parent not in previous:
                logger.debug(
                    "Skipping %s: parent %s was not updated this frame",
                    body.value, parent.value
                )
                continue
            transform = self._transforms[body]
            offset = transform.position - previous[parent]
            transform.position = (self._transforms[parent].position +
                                  rotation_y(self._omega[body] * elapsed_time) @ offset)

        self._elapsed += elapsed_time

    # ========== PROPERTY ACCESS ==========
    @property
    def catalog(self) -> Catalog:
        return self._catalog

    @property
    def elapsed(self) -> float:
        """Total simulated time advanced since construction or reset."""
        return self._elapsed

    def transform(self, body: BodyRef) -> LiveTransform:
        """Current transform of ``body`` (a live reference, do not mutate)."""
        return self._transforms[self._catalog.resolve(body)]

    def position(self, body: BodyRef) -> np.ndarray:
        """Copy of the current position of ``body``."""
        return self.transform(body).position.copy()

    def scaled_radius(self, body: BodyRef) -> float:
        return self._radius[self._catalog.resolve(body)]

    def scaled_distance(self, body: BodyRef) -> float:
        return self._distance[self._catalog.resolve(body)]

    def angular_velocity(self, body: BodyRef) -> float:
        """Angular rate about the parent [rad per simulated time unit]."""
        return self._omega[self._catalog.resolve(body)]

    def separation(self, body: BodyRef) -> float:
        """Current distance between ``body`` and its parent."""
        body = self._catalog.resolve(body)
        parent = self._catalog.parent_of(body)
        return float(np.linalg.norm(
            self._transforms[body].position - self._transforms[parent].position))

    def check_separations(self, rtol: Optional[float] = None) -> Dict[BodyId, float]:
        """
        Return bodies whose parent separation drifted from their scaled
        distance by more than ``rtol`` (relative), mapped to the error.

        Parameters
        ----------
        rtol : float, optional
            Relative tolerance (default: ``config.DISTANCE_RTOL``)
        """
        if rtol is None:
            rtol = config.DISTANCE_RTOL
        drifted = {}
        for body in self._primaries + self._satellites:
            if self._catalog.parent_of(body) not in self._transforms:
                continue
            expected = self._distance[body]
            error = abs(self.separation(body) - expected)
            if error > rtol * expected:
                drifted[body] = error / expected
        return drifted

    def snapshot(self) -> pd.DataFrame:
        """
        Export the current body positions to a pandas DataFrame.

        Returns
        -------
        pd.DataFrame
            Columns x, y, z, parent and scaled_radius, indexed by BodyId value
        """
        rows = []
        for body, transform in self._transforms.items():
            rows.append({
                'id': body.value,
                'x': transform.position[0],
                'y': transform.position[1],
                'z': transform.position[2],
                'parent': self._catalog.parent_of(body).value,
                'scaled_radius': self._radius[body],
            })
        return pd.DataFrame(rows).set_index('id')

    def __repr__(self):
        return (f"OrbitalPropagator({len(self._transforms)} bodies, "
                f"elapsed={self._elapsed})")
