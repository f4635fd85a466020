"""
Selection State Machine
=======================

Tracks the single body the camera and info panel are locked to.

States are ``Idle`` (nothing selected) and ``Locked(body)``. Two events drive
the machine:

- ``Pick(body)``: ``Idle -> Locked(body)`` or ``Locked(a) -> Locked(body)``
- ``Deselect()``: ``Locked(_) -> Idle``; no-op when already Idle

Events are posted to an ``EventQueue`` and drained once per frame; when
several arrive in the same frame only the last one is applied.
"""

import logging
from collections import deque
from dataclasses import dataclass
from typing import Deque, Optional, Union

from .bodies import BodyId

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Pick:
    """A body was clicked or chosen from a list."""
    body: BodyId

    def __post_init__(self):
        if not isinstance(self.body, BodyId):
            object.__setattr__(self, 'body', BodyId.from_name(self.body))


@dataclass(frozen=True)
class Deselect:
    """The user cancelled the current selection (escape)."""


SelectionEvent = Union[Pick, Deselect]


class SelectionState:
    """
    At most one locked body, starting Idle.

    Examples
    --------
    >>> state = SelectionState()
    >>> state.apply(Pick(BodyId.EARTH))
    True
    >>> state.current
    <BodyId.EARTH: 'earth'>
    >>> state.apply(Deselect())
    True
    >>> state.is_idle
    True
    """

    def __init__(self):
        self._current: Optional[BodyId] = None

    def apply(self, event: SelectionEvent) -> bool:
        """
        Apply one event.

        Returns
        -------
        bool
            True if the state changed

        Raises
        ------
        TypeError
            If ``event`` is not a Pick or Deselect
        """
        if isinstance(event, Pick):
            if event.body == self._current:
                return False
            previous = self._current
            self._current = event.body
            if previous is None:
                logger.info("Selected %s", event.body.value)
            else:
                logger.info("Retargeted %s -> %s", previous.value, event.body.value)
            return True
        if isinstance(event, Deselect):
            if self._current is None:
                return False
            logger.info("Deselected %s", self._current.value)
            self._current = None
            return True
        raise TypeError(
            f"Selection event must be Pick or Deselect, got {type(event).__name__}"
        )

    @property
    def current(self) -> Optional[BodyId]:
        """The locked body, or None when Idle."""
        return self._current

    @property
    def is_idle(self) -> bool:
        return self._current is None

    def __repr__(self):
        if self._current is None:
            return "SelectionState(Idle)"
        return f"SelectionState(Locked({self._current.value}))"


class EventQueue:
    """
    Single-consumer queue of selection events, drained once per frame.
    """

    def __init__(self):
        self._events: Deque[SelectionEvent] = deque()

    def post(self, event: SelectionEvent):
        if not isinstance(event, (Pick, Deselect)):
            raise TypeError(
                f"Selection event must be Pick or Deselect, "
                f"got {type(event).__name__}"
            )
        self._events.append(event)

    def drain(self) -> Optional[SelectionEvent]:
        """
        Empty the queue and return the last event posted, or None.

        Earlier events are superseded: every transition lands in a state
        fully determined by its own event, so applying only the last one
        gives the same result as applying all of them in order.
        """
        if not self._events:
            return None
        last = self._events[-1]
        if len(self._events) > 1:
            logger.debug("Dropping %d superseded selection events",
                         len(self._events) - 1)
        self._events.clear()
        return last

    def __len__(self) -> int:
        return len(self._events)
