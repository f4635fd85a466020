"""
Unit and Scale Conversion
=========================

Maps physical units to render space and derives each body's orbital angular
rate.

Radii and distances use different scale factors: radii are exaggerated far
more than orbit sizes, otherwise everything except the Sun would be
sub-pixel. This is a visual compromise, not a physical model. The constants
involved live on ``orrery.config``.
"""

import math

from .bodies import BodyRecord
from .catalog import Catalog
from .config import config

# Astronomical unit [m]
ASTRO_UNIT_M = 149_597_870_700.0

# Gravitational constant [m^3 kg^-1 s^-2]
GRAV = 6.674_08e-11


def scaled_radius(body: BodyRecord, catalog: Catalog) -> float:
    """
    Render-space radius of ``body``.

    The Sun maps to ``config.SUN_RENDER_RADIUS``. Every other body is scaled
    by the same factor (``SUN_RENDER_RADIUS / sun_radius_km``) and then
    multiplied by ``config.RADIUS_EXAGGERATION``.

    Parameters
    ----------
    body : BodyRecord
        Body to scale
    catalog : Catalog
        Catalog providing the Sun's physical radius

    Returns
    -------
    float
        Radius in render units
    """
    if body.is_sun:
        return config.SUN_RENDER_RADIUS
    unit = config.SUN_RENDER_RADIUS / catalog.sun.radius_km
    return body.radius_km * unit * config.RADIUS_EXAGGERATION


def scaled_distance(body: BodyRecord, catalog: Catalog) -> float:
    """
    Render-space distance of ``body`` from its parent.

    ``distance_au * (sun_radius_km / config.DISTANCE_DIVISOR)``, independent
    of the radius exaggeration. Zero for the Sun.
    """
    return body.distance_au * (catalog.sun.radius_km / config.DISTANCE_DIVISOR)


def orbital_speed(body: BodyRecord, catalog: Catalog) -> float:
    """
    Mean circular orbital speed [m/s] of ``body`` around its parent.

    Uses ``v = sqrt(G * M_parent / r)`` with ``r`` the orbit radius in metres
    plus the body's own radius. Zero for the Sun.
    """
    if body.is_sun or body.distance_au == 0:
        return 0.0
    parent = catalog.record(body.parent)
    r = body.distance_au * ASTRO_UNIT_M + body.radius_km * 1000.0
    return math.sqrt(GRAV * parent.mass_kg / r)


def orbital_angular_velocity(body: BodyRecord, catalog: Catalog) -> float:
    """
    Angular rate of ``body`` around its parent [rad per simulated time unit].

    The circular orbital speed divided by ``config.ORBITAL_SPEED_DIVISOR``.
    The divisor is an empirical tunable that sets the pace of the animation;
    it has no physical derivation. The Sun does not orbit and returns 0.

    Examples
    --------
    >>> from orrery import Catalog, BodyId
    >>> catalog = Catalog()
    >>> round(orbital_angular_velocity(catalog.record(BodyId.EARTH), catalog), 3)
    2.979
    """
    return orbital_speed(body, catalog) / config.ORBITAL_SPEED_DIVISOR


def orbital_period(body: BodyRecord, catalog: Catalog) -> float:
    """
    Simulated time for one full orbit, or ``inf`` for the Sun.
    """
    omega = orbital_angular_velocity(body, catalog)
    if omega == 0:
        return math.inf
    return 2 * math.pi / omega
