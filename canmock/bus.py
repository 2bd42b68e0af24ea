"""An in-memory CAN bus that routes frames between attached interfaces."""

from __future__ import annotations

import threading
import weakref
from collections import deque
from typing import Deque, Iterable, List, Optional

from canmock.filter import FilterError, IdMaskFilter, matches, validate_filters
from canmock.frame import MockFrame


class TransmitError(Exception):
    """A frame could not be sent because the interface is not on a bus."""


class MockInterfaceError(Exception):
    """Base error for attaching or configuring an interface."""


class BusAlreadyAttached(MockInterfaceError):
    """The interface is already attached to a live bus."""


class InvalidFilters(MockInterfaceError):
    """The supplied acceptance filters are invalid."""


class BusHandle:
    """A shared bus; frames sent on it reach every attached interface."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._interfaces: List[InterfaceHandle] = []

    def add_interface(self, filters: Iterable[IdMaskFilter]) -> "InterfaceHandle":
        """Create a new interface with ``filters`` and attach it to this bus."""
        filters = list(filters)
        try:
            validate_filters(filters)
        except FilterError as exc:
            raise InvalidFilters(str(exc)) from exc
        interface = InterfaceHandle(filters)
        interface.attach_to_bus(self)
        return interface

    def interface_count(self) -> int:
        """Number of interfaces attached to this bus."""
        with self._lock:
            return len(self._interfaces)

    def _attach(self, interface: "InterfaceHandle") -> None:
        with self._lock:
            self._interfaces.append(interface)

    def _deliver(self, frame: MockFrame) -> None:
        with self._lock:
            interfaces = list(self._interfaces)
        for interface in interfaces:
            interface._offer(frame)


class InterfaceHandle:
    """One node's view of the bus: a filtered receive queue plus transmit."""

    def __init__(self, filters: Iterable[IdMaskFilter] = ()) -> None:
        self._cond = threading.Condition()
        self._filters: List[IdMaskFilter] = list(filters)
        self._bus: Optional[weakref.ReferenceType[BusHandle]] = None
        self._received: Deque[MockFrame] = deque()

    @classmethod
    def new_unattached(cls, filters: Iterable[IdMaskFilter]) -> "InterfaceHandle":
        """Create an interface that is not yet on any bus."""
        return cls(filters)

    @property
    def filters(self) -> List[IdMaskFilter]:
        """A copy of the current acceptance filters."""
        with self._cond:
            return list(self._filters)

    def _live_bus(self) -> Optional[BusHandle]:
        return self._bus() if self._bus is not None else None

    def attach_to_bus(self, bus: BusHandle) -> None:
        """Attach to ``bus``; raises BusAlreadyAttached if already on a live bus."""
        with self._cond:
            if self._live_bus() is not None:
                raise BusAlreadyAttached("interface is already attached to a bus")
            self._bus = weakref.ref(bus)
        bus._attach(self)

    def transmit(self, frame: MockFrame) -> None:
        """Send ``frame`` to every interface on the bus, this one included."""
        with self._cond:
            bus = self._live_bus()
        if bus is None:
            raise TransmitError("interface is not attached to a bus")
        bus._deliver(frame)

    def _offer(self, frame: MockFrame) -> None:
        with self._cond:
            accepted = not self._filters or any(
                matches(f, frame.id) for f in self._filters
            )
            if accepted:
                self._received.append(frame)
                self._cond.notify_all()

    def received_frames(self) -> List[MockFrame]:
        """A snapshot of the frames queued for reception, oldest first."""
        with self._cond:
            return list(self._received)

    def set_filters(self, filters: Iterable[IdMaskFilter]) -> None:
        """Replace the acceptance filters; raises FilterError if any is invalid."""
        filters = list(filters)
        validate_filters(filters)
        with self._cond:
            self._filters = filters

    def pop_frame(self) -> Optional[MockFrame]:
        """Remove and return the oldest queued frame, or None if the queue is empty."""
        with self._cond:
            return self._received.popleft() if self._received else None

    def has_frames(self) -> bool:
        """Whether any frame is queued."""
        with self._cond:
            return bool(self._received)

    def wait_for_frame(self, timeout: Optional[float] = None) -> bool:
        """Block until a frame is queued or ``timeout`` seconds pass.

        With no timeout, waits indefinitely. Returns whether a frame is queued.
        """
        with self._cond:
            return self._cond.wait_for(lambda: bool(self._received), timeout)