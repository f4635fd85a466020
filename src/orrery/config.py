"""
Global Configuration for Orrery Package
=======================================

This module provides package-wide configuration settings that users can modify
to control render-space scaling, camera behavior, validation behavior and
default plotting options.

Examples
--------
View current configuration:

>>> import orrery
>>> print(orrery.config)

Modify settings:

>>> orrery.config.RADIUS_EXAGGERATION = 500.0  # Smaller planets
>>> orrery.config.EYE_SMOOTHNESS = 1.0  # Snappier camera

Reset to defaults:

>>> orrery.config.reset()

Temporarily modify settings:

>>> with orrery.temp_config(ORBITAL_SPEED_DIVISOR=1e5):
...     # Slower orbits for simulations built inside this block
...     sim = orrery.Simulation()

Notes
-----
Scale and camera settings are read when a Simulation (or its propagator and
camera controller) is constructed. Changing them afterwards only affects
objects built later.
"""

from dataclasses import dataclass, field
from contextlib import contextmanager
from typing import Tuple


@dataclass
class OrreryConfig:
    """
    Global configuration for Orrery package.

    Attributes
    ----------
    SUN_RENDER_RADIUS : float
        Scaled radius of the Sun in render units. Also the unit that other
        body radii are expressed in before exaggeration.
        Default: 100.0
    RADIUS_EXAGGERATION : float
        Size multiplier for every body except the Sun, so that small moons
        stay visible. A visual tunable, not a physical quantity.
        Default: 1000.0
    DISTANCE_DIVISOR : float
        One AU maps to ``SUN_RADIUS_KM / DISTANCE_DIVISOR`` render units.
        Default: 10.0 (69,570 units per AU)
    ORBITAL_SPEED_DIVISOR : float
        Circular orbital speed [m/s] is divided by this to give the angular
        rate [rad per simulated time unit].
        Default: 10,000.0
    CAMERA_FRAMING_FACTOR : float
        Camera distance from a locked body, in multiples of its scaled radius.
        Default: 3.0
    CAMERA_OFFSET_AXIS : str
        World axis ('x', 'y' or 'z') the locked camera is offset along.
        Default: 'z'
    OVERVIEW_EYE : tuple of float
        Eye position of the overview pose (target is the origin, up is +Y).
        Default: (0.0, 100.0, 100000.0)
    EYE_SMOOTHNESS : float
        Smoothing time constant for the camera eye [s]. Larger is laggier.
        Default: 2.5
    TARGET_SMOOTHNESS : float
        Smoothing time constant for the camera target [s].
        Default: 1.25
    PREDICTIVE_TRACKING : bool
        If True, a locked camera extrapolates the body's motion so the lag
        only applies to changes of selection, not to a body moving along
        its orbit.
        Default: True
    STRICT_VALIDATION : bool
        If True, validation failures raise exceptions.
        If False, validation failures issue warnings.
        Default: True
    DISTANCE_RTOL : float
        Relative tolerance used when checking parent/child separations.
        Default: 1e-3
    DEFAULT_ORBIT_POINTS : int
        Number of points used to draw an orbit track.
        Default: 128
    DEFAULT_BODY_COLOR : str
        Default color for planets and moons in plots.
        Default: 'lightblue'
    SUN_COLOR : str
        Color for the Sun in plots.
        Default: 'gold'
    DEFAULT_ORBIT_COLOR : str
        Color for orbit tracks in plots.
        Default: 'gray'
    HOST_OPACITY : float
        Surface opacity of bodies that have moons, so moons orbiting inside
        the exaggerated parent sphere stay visible.
        Default: 0.35
    DEFAULT_VIEW_EXTENT : float
        Half-width of the plotted scene box around the camera target,
        in multiples of the eye-target distance.
        Default: 2.0
    """

    # Render-space scaling
    SUN_RENDER_RADIUS: float = 100.0
    RADIUS_EXAGGERATION: float = 1000.0
    DISTANCE_DIVISOR: float = 10.0
    ORBITAL_SPEED_DIVISOR: float = 10_000.0

    # Camera behavior
    CAMERA_FRAMING_FACTOR: float = 3.0
    CAMERA_OFFSET_AXIS: str = 'z'
    OVERVIEW_EYE: Tuple[float, float, float] = field(
        default=(0.0, 100.0, 100_000.0))
    EYE_SMOOTHNESS: float = 2.5
    TARGET_SMOOTHNESS: float = 1.25
    PREDICTIVE_TRACKING: bool = True

    # Validation behavior
    STRICT_VALIDATION: bool = True
    DISTANCE_RTOL: float = 1e-3

    # Plotting defaults
    DEFAULT_ORBIT_POINTS: int = 128
    DEFAULT_BODY_COLOR: str = 'lightblue'
    SUN_COLOR: str = 'gold'
    DEFAULT_ORBIT_COLOR: str = 'gray'
    HOST_OPACITY: float = 0.35
    DEFAULT_VIEW_EXTENT: float = 2.0

    @property
    def AXIS_INDEX(self) -> int:
        """
        Index (0, 1, 2) of CAMERA_OFFSET_AXIS into a position vector.

        Raises
        ------
        ValueError
            If CAMERA_OFFSET_AXIS is not one of 'x', 'y', 'z'
        """
        axis = self.CAMERA_OFFSET_AXIS.lower()
        if axis not in ('x', 'y', 'z'):
            raise ValueError(
                f"CAMERA_OFFSET_AXIS must be 'x', 'y' or 'z', "
                f"got {self.CAMERA_OFFSET_AXIS!r}"
            )
        return 'xyz'.index(axis)

    def reset(self):
        """
        Reset all configuration values to package defaults.

        Examples
        --------
        >>> import orrery
        >>> orrery.config.RADIUS_EXAGGERATION = 10.0  # Modify
        >>> orrery.config.reset()  # Back to defaults
        >>> orrery.config.RADIUS_EXAGGERATION
        1000.0
        """
        defaults = OrreryConfig()
        for key in self.__dataclass_fields__:
            setattr(self, key, getattr(defaults, key))

    def __repr__(self):
        """Return formatted string showing all configuration values."""
        lines = ["OrreryConfig:"]
        lines.append("  Scaling:")
        lines.append(f"    SUN_RENDER_RADIUS = {self.SUN_RENDER_RADIUS}")
        lines.append(f"    RADIUS_EXAGGERATION = {self.RADIUS_EXAGGERATION}")
        lines.append(f"    DISTANCE_DIVISOR = {self.DISTANCE_DIVISOR}")
        lines.append(f"    ORBITAL_SPEED_DIVISOR = {self.ORBITAL_SPEED_DIVISOR}")
        lines.append("  Camera:")
        lines.append(f"    CAMERA_FRAMING_FACTOR = {self.CAMERA_FRAMING_FACTOR}")
        lines.append(f"    CAMERA_OFFSET_AXIS = '{self.CAMERA_OFFSET_AXIS}'")
        lines.append(f"    OVERVIEW_EYE = {self.OVERVIEW_EYE}")
        lines.append(f"    EYE_SMOOTHNESS = {self.EYE_SMOOTHNESS}")
        lines.append(f"    TARGET_SMOOTHNESS = {self.TARGET_SMOOTHNESS}")
        lines.append(f"    PREDICTIVE_TRACKING = {self.PREDICTIVE_TRACKING}")
        lines.append("  Behavior:")
        lines.append(f"    STRICT_VALIDATION = {self.STRICT_VALIDATION}")
        lines.append(f"    DISTANCE_RTOL = {self.DISTANCE_RTOL}")
        lines.append("  Plotting:")
        lines.append(f"    DEFAULT_ORBIT_POINTS = {self.DEFAULT_ORBIT_POINTS}")
        lines.append(f"    DEFAULT_BODY_COLOR = '{self.DEFAULT_BODY_COLOR}'")
        lines.append(f"    SUN_COLOR = '{self.SUN_COLOR}'")
        lines.append(f"    DEFAULT_ORBIT_COLOR = '{self.DEFAULT_ORBIT_COLOR}'")
        lines.append(f"    HOST_OPACITY = {self.HOST_OPACITY}")
        lines.append(f"    DEFAULT_VIEW_EXTENT = {self.DEFAULT_VIEW_EXTENT}")
        return "\n".join(lines)


# Global configuration instance
config = OrreryConfig()


@contextmanager
def temp_config(**kwargs):
    """
    Context manager for temporarily modifying configuration values.

    Configuration is automatically restored when the context exits,
    even if an exception occurs.

    Parameters
    ----------
    **kwargs
        Configuration attributes to temporarily modify.

    Examples
    --------
    >>> import orrery
    >>> with orrery.temp_config(RADIUS_EXAGGERATION=1.0):
    ...     # True relative sizes
    ...     sim = orrery.Simulation()
    >>> # Original config restored here
    >>> orrery.config.RADIUS_EXAGGERATION
    1000.0

    Raises
    ------
    AttributeError
        If an invalid configuration attribute is specified.
    """
    old_values = {}
    for key, value in kwargs.items():
        if not hasattr(config, key):
            raise AttributeError(
                f"OrreryConfig has no attribute '{key}'. "
                f"Valid attributes: {list(config.__dataclass_fields__.keys())}"
            )
        old_values[key] = getattr(config, key)
        setattr(config, key, value)

    try:
        yield config
    finally:
        for key, value in old_values.items():
            setattr(config, key, value)
