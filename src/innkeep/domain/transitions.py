"""Validated lifecycle transitions for bookings and room statuses."""

from __future__ import annotations

from typing import Mapping


class InvalidTransitionError(Exception):
    """Raised when a record is moved to a state its lifecycle does not allow."""

    def __init__(self, kind: str, current: str, requested: str) -> None:
        self.kind = kind
        self.current = current
        self.requested = requested
        super().__init__(f"Cannot move {kind} from '{current}' to '{requested}'")


def check_transition(
    table: Mapping[str, frozenset[str]],
    *,
    kind: str,
    current: str,
    requested: str,
) -> None:
    """Raise InvalidTransitionError unless current -> requested is in table.

    Staying in the same state is always allowed.
    """
    if current == requested:
        return
    if requested not in table.get(current, frozenset()):
        raise InvalidTransitionError(kind, current, requested)
