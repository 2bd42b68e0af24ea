"""Combined, split, buffered and builder-made CAN endpoints over the mock bus."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Iterable, List, Sequence, Tuple, Union

from canmock.bus import (
    BusAlreadyAttached,
    BusHandle,
    InterfaceHandle,
    InvalidFilters,
    TransmitError,
)
from canmock.filter import FilterError, IdMaskFilter
from canmock.frame import MockFrame

Timeout = Union[float, int, timedelta]


class MockError(Exception):
    """Base error for the mock CAN backend."""


class BusNotAttachedError(MockError):
    """The interface is not attached to a bus."""


class BusAlreadyAttachedError(MockError):
    """The interface is already attached to a bus."""


class RecvTimeoutError(MockError):
    """No frame arrived before the timeout."""


class WouldBlockError(MockError):
    """No frame is queued and the call must not block."""


class InvalidFiltersError(MockError):
    """The acceptance filters are invalid."""


def _seconds(timeout: Timeout) -> float:
    if isinstance(timeout, timedelta):
        return timeout.total_seconds()
    return float(timeout)


def _send(iface: InterfaceHandle, frame: MockFrame) -> None:
    try:
        iface.transmit(frame)
    except TransmitError as exc:
        raise BusNotAttachedError(str(exc)) from exc


def _recv(iface: InterfaceHandle) -> MockFrame:
    frame = iface.pop_frame()
    if frame is not None:
        return frame
    iface.wait_for_frame(None)
    frame = iface.pop_frame()
    if frame is None:
        raise RecvTimeoutError("frame was taken by another reader")
    return frame


def _try_recv(iface: InterfaceHandle) -> MockFrame:
    frame = iface.pop_frame()
    if frame is None:
        raise WouldBlockError("no frame queued")
    return frame


def _recv_timeout(iface: InterfaceHandle, timeout: Timeout) -> MockFrame:
    frame = iface.pop_frame()
    if frame is not None:
        return frame
    if iface.wait_for_frame(_seconds(timeout)):
        frame = iface.pop_frame()
        if frame is not None:
            return frame
    raise RecvTimeoutError("no frame received before the timeout")


def _wait_not_empty(iface: InterfaceHandle) -> None:
    if iface.has_frames():
        return
    iface.wait_for_frame(None)


async def _async_recv(iface: InterfaceHandle) -> MockFrame:
    if iface.has_frames():
        return _recv(iface)
    return await asyncio.to_thread(_recv, iface)


async def _async_recv_timeout(iface: InterfaceHandle, timeout: Timeout) -> MockFrame:
    if iface.has_frames():
        return _recv_timeout(iface, timeout)
    return await asyncio.to_thread(_recv_timeout, iface, timeout)


async def _async_wait_not_empty(iface: InterfaceHandle) -> None:
    if iface.has_frames():
        return
    await asyncio.to_thread(_wait_not_empty, iface)


@dataclass
class MockTx:
    """Transmit half of a split endpoint."""

    iface: InterfaceHandle
    bus: BusHandle

    def send(self, frame: MockFrame) -> None:
        """Put ``frame`` on the bus."""
        _send(self.iface, frame)

    def try_send(self, frame: MockFrame) -> None:
        """Put ``frame`` on the bus without blocking; mock sends never block."""
        _send(self.iface, frame)

    def send_timeout(self, frame: MockFrame, timeout: Timeout) -> None:
        """Put ``frame`` on the bus; the timeout is irrelevant as sends are immediate."""
        _send(self.iface, frame)

    async def async_send(self, frame: MockFrame) -> None:
        """Asynchronous form of :meth:`send`."""
        _send(self.iface, frame)

    async def async_send_timeout(self, frame: MockFrame, timeout: Timeout) -> None:
        """Asynchronous form of :meth:`send_timeout`."""
        _send(self.iface, frame)


@dataclass
class MockRx:
    """Receive half of a split endpoint."""

    iface: InterfaceHandle
    bus: BusHandle

    def recv(self) -> MockFrame:
        """Return the next frame, waiting as long as it takes."""
        return _recv(self.iface)

    def try_recv(self) -> MockFrame:
        """Return the next frame, or raise WouldBlockError if none is queued."""
        return _try_recv(self.iface)

    def recv_timeout(self, timeout: Timeout) -> MockFrame:
        """Return the next frame, waiting at most ``timeout`` (seconds or timedelta)."""
        return _recv_timeout(self.iface, timeout)

    def wait_not_empty(self) -> None:
        """Block until at least one frame is queued."""
        _wait_not_empty(self.iface)

    async def async_recv(self) -> MockFrame:
        """Asynchronous form of :meth:`recv`."""
        return await _async_recv(self.iface)

    async def async_recv_timeout(self, timeout: Timeout) -> MockFrame:
        """Asynchronous form of :meth:`recv_timeout`."""
        return await _async_recv_timeout(self.iface, timeout)

    async def async_wait_not_empty(self) -> None:
        """Asynchronous form of :meth:`wait_not_empty`."""
        await _async_wait_not_empty(self.iface)


@dataclass
class MockBuffered:
    """An endpoint paired with caller-supplied transmit and receive buffers."""

    iface: InterfaceHandle
    tx: Sequence[MockFrame]
    rx: Sequence[MockFrame]


@dataclass
class MockCan:
    """A combined transmit/receive endpoint on a mock bus."""

    iface: InterfaceHandle
    bus: BusHandle

    @classmethod
    def new_with_bus(cls, bus: BusHandle, filters: Iterable[IdMaskFilter]) -> "MockCan":
        """Attach a new endpoint with ``filters`` to ``bus``."""
        try:
            iface = bus.add_interface(filters)
        except InvalidFilters as exc:
            raise InvalidFiltersError(str(exc)) from exc
        except BusAlreadyAttached as exc:
            raise BusAlreadyAttachedError(str(exc)) from exc
        return cls(iface=iface, bus=bus)

    @classmethod
    def open(cls, name: str) -> "MockCan":
        """Open an endpoint on a fresh private bus; ``name`` is ignored."""
        return cls.new_with_bus(BusHandle(), [])

    @classmethod
    def builder(cls) -> "MockBuilder":
        """Start building an endpoint on a fresh private bus."""
        return MockBuilder()

    def send(self, frame: MockFrame) -> None:
        """Put ``frame`` on the bus."""
        _send(self.iface, frame)

    def try_send(self, frame: MockFrame) -> None:
        """Put ``frame`` on the bus without blocking; mock sends never block."""
        _send(self.iface, frame)

    def send_timeout(self, frame: MockFrame, timeout: Timeout) -> None:
        """Put ``frame`` on the bus; the timeout is irrelevant as sends are immediate."""
        _send(self.iface, frame)

    async def async_send(self, frame: MockFrame) -> None:
        """Asynchronous form of :meth:`send`."""
        _send(self.iface, frame)

    async def async_send_timeout(self, frame: MockFrame, timeout: Timeout) -> None:
        """Asynchronous form of :meth:`send_timeout`."""
        _send(self.iface, frame)

    def recv(self) -> MockFrame:
        """Return the next frame, waiting as long as it takes."""
        return _recv(self.iface)

    def try_recv(self) -> MockFrame:
        """Return the next frame, or raise WouldBlockError if none is queued."""
        return _try_recv(self.iface)

    def recv_timeout(self, timeout: Timeout) -> MockFrame:
        """Return the next frame, waiting at most ``timeout`` (seconds or timedelta)."""
        return _recv_timeout(self.iface, timeout)

    def wait_not_empty(self) -> None:
        """Block until at least one frame is queued."""
        _wait_not_empty(self.iface)

    async def async_recv(self) -> MockFrame:
        """Asynchronous form of :meth:`recv`."""
        return await _async_recv(self.iface)

    async def async_recv_timeout(self, timeout: Timeout) -> MockFrame:
        """Asynchronous form of :meth:`recv_timeout`."""
        return await _async_recv_timeout(self.iface, timeout)

    async def async_wait_not_empty(self) -> None:
        """Asynchronous form of :meth:`wait_not_empty`."""
        await _async_wait_not_empty(self.iface)

    def split(self) -> Tuple[MockTx, MockRx]:
        """Split into transmit and receive halves sharing this interface."""
        return MockTx(self.iface, self.bus), MockRx(self.iface, self.bus)

    def set_filters(self, filters: Iterable[IdMaskFilter]) -> None:
        """Replace the acceptance filters."""
        try:
            self.iface.set_filters(filters)
        except FilterError as exc:
            raise InvalidFiltersError(str(exc)) from exc

    def modify_filters(self) -> None:
        """The mock has no filter bank to modify in place."""
        return None

    def is_transmitter_idle(self) -> bool:
        """Always true: mock transmission completes immediately."""
        return True

    def set_nonblocking(self, on: bool) -> None:
        """Accepted and ignored; the mock never blocks on send."""
        return None

    def buffered(self, tx: Sequence[MockFrame], rx: Sequence[MockFrame]) -> MockBuffered:
        """Wrap this endpoint together with the given buffers."""
        return MockBuffered(iface=self.iface, tx=tx, rx=rx)


@dataclass
class MockBuilder:
    """Builds a MockCan on its own bus."""

    bus: BusHandle = field(default_factory=BusHandle)
    filters: List[IdMaskFilter] = field(default_factory=list)

    def with_filters(self, filters: Iterable[IdMaskFilter]) -> "MockBuilder":
        """Use ``filters`` for the endpoint being built."""
        self.filters = list(filters)
        return self

    def build(self) -> MockCan:
        """Create the endpoint."""
        return MockCan.new_with_bus(self.bus, self.filters)