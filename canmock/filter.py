"""Identifier/mask acceptance filters."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Union

from canmock.frame import CanId, ExtendedId, StandardId


@dataclass(frozen=True)
class StandardMask:
    """Mask applied to an 11-bit identifier."""

    value: int


@dataclass(frozen=True)
class ExtendedMask:
    """Mask applied to a 29-bit identifier."""

    value: int


IdMask = Union[StandardMask, ExtendedMask]


@dataclass(frozen=True)
class IdMaskFilter:
    """Accepts identifiers whose masked bits equal the masked filter id."""

    id: CanId
    mask: IdMask


class FilterError(ValueError):
    """A filter's identifier kind does not match its mask kind."""


def matches(filter: IdMaskFilter, match_id: CanId) -> bool:
    """Whether ``match_id`` passes ``filter``; mismatched kinds never match."""
    fid, mask = filter.id, filter.mask
    same_standard = (
        isinstance(fid, StandardId)
        and isinstance(mask, StandardMask)
        and isinstance(match_id, StandardId)
    )
    same_extended = (
        isinstance(fid, ExtendedId)
        and isinstance(mask, ExtendedMask)
        and isinstance(match_id, ExtendedId)
    )
    if not (same_standard or same_extended):
        return False
    return (match_id.raw & mask.value) == (fid.raw & mask.value)


def validate_filter(filter: IdMaskFilter) -> None:
    """Raise FilterError if the filter's id and mask are of different kinds."""
    if isinstance(filter.id, StandardId) and isinstance(filter.mask, StandardMask):
        return
    if isinstance(filter.id, ExtendedId) and isinstance(filter.mask, ExtendedMask):
        return
    raise FilterError("filter id and mask kinds do not match")


def validate_filters(filters: Iterable[IdMaskFilter]) -> None:
    """Validate every filter, raising FilterError on the first bad one."""
    for f in filters:
        validate_filter(f)