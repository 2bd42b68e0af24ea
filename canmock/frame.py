"""CAN identifiers and the in-memory frame type carried by the mock bus."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Union

STANDARD_ID_MAX = 0x7FF
EXTENDED_ID_MAX = 0x1FFF_FFFF


def _check_raw(raw: int, limit: int, kind: str) -> None:
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise TypeError(f"{kind} identifier must be an int, got {type(raw).__name__}")
    if not 0 <= raw <= limit:
        raise ValueError(f"{kind} identifier {raw:#x} is out of range 0..{limit:#x}")


@dataclass(frozen=True)
class StandardId:
    """An 11-bit CAN identifier."""

    raw: int

    def __post_init__(self) -> None:
        _check_raw(self.raw, STANDARD_ID_MAX, "standard")


@dataclass(frozen=True)
class ExtendedId:
    """A 29-bit CAN identifier."""

    raw: int

    def __post_init__(self) -> None:
        _check_raw(self.raw, EXTENDED_ID_MAX, "extended")


CanId = Union[StandardId, ExtendedId]


def _check_id(frame_id: object) -> None:
    if not isinstance(frame_id, (StandardId, ExtendedId)):
        raise TypeError(
            f"frame id must be a StandardId or ExtendedId, got {type(frame_id).__name__}"
        )


@dataclass(frozen=True)
class MockFrame:
    """A data or remote CAN frame.

    A data frame carries ``payload``; a remote frame carries ``remote_dlc``
    and no payload.
    """

    id: CanId
    payload: bytes = b""
    remote_dlc: Optional[int] = None

    @classmethod
    def new(cls, id: CanId, data: Union[bytes, bytearray, Iterable[int]]) -> "MockFrame":
        """Build a data frame with the given identifier and payload."""
        _check_id(id)
        return cls(id=id, payload=bytes(data))

    @classmethod
    def new_remote(cls, id: CanId, dlc: int) -> "MockFrame":
        """Build a remote frame requesting ``dlc`` bytes."""
        _check_id(id)
        if dlc < 0:
            raise ValueError("dlc must not be negative")
        return cls(id=id, remote_dlc=dlc)

    def is_extended(self) -> bool:
        """Whether the frame uses a 29-bit identifier."""
        return isinstance(self.id, ExtendedId)

    def is_remote_frame(self) -> bool:
        """Whether this is a remote frame."""
        return self.remote_dlc is not None

    def dlc(self) -> int:
        """Data length code: payload length, or the requested length of a remote frame."""
        if self.remote_dlc is not None:
            return self.remote_dlc
        return len(self.payload)

    def data(self) -> bytes:
        """Payload bytes; always empty for a remote frame."""
        if self.remote_dlc is not None:
            return b""
        return self.payload