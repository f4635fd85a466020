"""
Utility functions and classes for the Orrery package.
"""

import math
import warnings
from time import perf_counter
from typing import Type, Optional
from .config import config


class FrameClock:
    """
    Wall-clock source of per-frame elapsed time for an interactive loop.

    Each call to ``tick()`` returns the wall-clock seconds since the previous
    call (or since construction / ``reset()`` for the first call), clamped to
    ``max_delta`` so that a stalled frame does not fling bodies across their
    orbits. Speeding up the orbits is the job of ``Simulation.time_scale``.

    Examples
    --------
    >>> from orrery.utils import FrameClock
    >>> clock = FrameClock()
    >>> while running:
    ...     sim.tick(clock.tick())

    >>> with FrameClock() as clock:
    ...     sim.run(frames=600, dt=1 / 60)
    >>> print(f"Took {clock.elapsed:.3f} seconds")
    """
    def __init__(self, max_delta: Optional[float] = 0.25):
        """
        Parameters
        ----------
        max_delta : float or None, optional
            Upper bound on a single returned delta [s] (default: 0.25).
            None disables clamping.
        """
        if max_delta is not None and max_delta < 0:
            raise ValueError(f"max_delta must be non-negative, got {max_delta}")
        self.max_delta = max_delta
        self.frames = 0
        self.elapsed = None
        self.reset()

    def reset(self):
        """Restart the clock from now."""
        self.start = perf_counter()
        self._last = self.start

    def tick(self) -> float:
        """Return the clamped wall time since the previous tick [s]."""
        now = perf_counter()
        delta = now - self._last
        self._last = now
        self.frames += 1
        if self.max_delta is not None:
            delta = min(delta, self.max_delta)
        return delta

    def __enter__(self):
        self.reset()
        return self

    def __exit__(self, *args):
        self.elapsed = perf_counter() - self.start


def validation_error(message: str, error_class: Type[Exception] = ValueError):
    """
    Raise error or warn based on config.STRICT_VALIDATION.

    This function provides consistent validation behavior across the package.
    When STRICT_VALIDATION is True (default), raises the specified exception.
    When False, issues a UserWarning instead and the caller skips the
    offending operation.

    Parameters
    ----------
    message : str
        Validation error message
    error_class : Type[Exception], optional
        Exception class to raise if STRICT_VALIDATION is True.
        Default: ValueError

    Raises
    ------
    Exception (of type error_class)
        If config.STRICT_VALIDATION is True

    Warns
    -----
    UserWarning
        If config.STRICT_VALIDATION is False

    Examples
    --------
    >>> from orrery.utils import validation_error
    >>> from orrery import config
    >>> config.STRICT_VALIDATION = True
    >>> validation_error("Invalid elapsed time")  # Raises ValueError

    >>> config.STRICT_VALIDATION = False
    >>> validation_error("Invalid elapsed time")  # Issues warning
    """
    if config.STRICT_VALIDATION:
        raise error_class(message)
    else:
        warnings.warn(message, UserWarning, stacklevel=3)


def scientific_notation(num: float, digits: int = 4) -> str:
    """
    Format a positive number as ``m.mmmmx10^e`` for the info panel.

    Parameters
    ----------
    num : float
        Value to format. Zero and negative values are formatted with
        ``str()`` unchanged.
    digits : int, optional
        Maximum significant digits after the decimal point (default: 4)

    Examples
    --------
    >>> scientific_notation(5.97237e24)
    '5.9724x10^24'
    >>> scientific_notation(0.00257)
    '2.57x10^-3'
    """
    if not math.isfinite(num) or num <= 0:
        return str(num)
    exp = math.floor(math.log10(num))
    mantissa = round(num / 10 ** exp, digits)
    # rounding can carry the mantissa up to 10
    if mantissa >= 10:
        mantissa /= 10
        exp += 1
    text = f"{mantissa:.{digits}f}".rstrip('0').rstrip('.')
    return f"{text}x10^{exp}"
