# canmock

An in-memory CAN bus for tests. A frame sent by one interface is delivered to
every interface attached to the same bus, the sender included, subject to
optional ID/mask acceptance filters. Delivery is immediate; there is no timing,
arbitration or error signalling.

## Installation

```
pip install canmock
```

## Frames and identifiers (`canmock.frame`)

```python
from canmock.frame import MockFrame, StandardId, ExtendedId

frame = MockFrame.new(StandardId(0x123), b"\x01\x02")
remote = MockFrame.new_remote(ExtendedId(0x1ABCDE00), 4)

frame.dlc()              # 2
frame.data()             # b"\x01\x02"
remote.is_remote_frame() # True
remote.is_extended()     # True
remote.data()            # b""
remote.dlc()             # 4
```

`StandardId` accepts 0..0x7FF and `ExtendedId` 0..0x1FFFFFFF; a value out of
range raises `ValueError`, a non-integer `TypeError`. Frames are frozen
dataclasses and compare by value.

## Filters (`canmock.filter`)

```python
from canmock.filter import IdMaskFilter, StandardMask, ExtendedMask, matches

only_0x123 = IdMaskFilter(StandardId(0x123), StandardMask(0x7FF))
matches(only_0x123, StandardId(0x123))  # True
matches(only_0x123, StandardId(0x321))  # False
```

An identifier passes a filter when its masked bits equal the masked filter id.
A filter never matches an identifier of the other kind (standard vs. extended).
`validate_filter` and `validate_filters` raise `FilterError` (a `ValueError`)
for a filter whose id and mask are of different kinds.

## Low-level bus (`canmock.bus`)

```python
from canmock.bus import BusHandle, InterfaceHandle

bus = BusHandle()
a = bus.add_interface([])
b = bus.add_interface([only_0x123])

a.transmit(frame)
assert b.pop_frame() == frame
assert a.received_frames() == [frame]
assert bus.interface_count() == 2
```

An interface with no filters receives everything. `InterfaceHandle` also has
`has_frames()`, `set_filters(filters)` (raises `FilterError`) and
`wait_for_frame(timeout)`, which blocks until a frame is queued, or until
`timeout` seconds have passed when one is given, and returns whether a frame is
queued.

`InterfaceHandle.new_unattached(filters)` makes an interface on no bus;
`transmit` on it raises `TransmitError`. `attach_to_bus(bus)` attaches it once;
a second attach raises `BusAlreadyAttached`. `add_interface` raises
`InvalidFilters` for bad filters. Both derive from `MockInterfaceError`.

## High-level endpoint (`canmock.can`)

```python
from canmock.can import MockCan, WouldBlockError

node = MockCan.open("loopback")   # fresh private bus; the name is ignored
node.send(frame)
assert node.recv() == frame

try:
    node.try_recv()
except WouldBlockError:
    pass

filtered = MockCan.builder().with_filters([only_0x123]).build()
tx, rx = MockCan.new_with_bus(bus, []).split()
```

`MockCan` offers `send`, `try_send`, `send_timeout`, `recv`, `try_recv`,
`recv_timeout` (seconds or a `datetime.timedelta`), `wait_not_empty`,
`set_filters`, `is_transmitter_idle` (always `True`), `set_nonblocking`
(accepted and ignored), `modify_filters` (returns `None`), `buffered(tx, rx)`
(returns a `MockBuffered` holding the interface and the given buffers) and the
coroutines `async_send`, `async_send_timeout`, `async_recv`,
`async_recv_timeout` and `async_wait_not_empty`. `split()` returns a `MockTx`
and a `MockRx` sharing the same interface.

Errors derive from `MockError`: `BusNotAttachedError`,
`BusAlreadyAttachedError`, `RecvTimeoutError`, `WouldBlockError` and
`InvalidFiltersError`.

## What it does not do

canmock talks to no real CAN adapter or socket, models no bus timing, and has
no command-line tool; it is a library for use from test code.