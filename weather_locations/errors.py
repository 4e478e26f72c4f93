"""Error taxonomy for the location list manager."""
from __future__ import annotations


class LocationListError(Exception):
    pass


class InvalidPosition(LocationListError, IndexError):
    """A move request referenced an index outside the current list."""

    def __init__(self, index: int, length: int, detail: str | None = None) -> None:
        self.index = index
        self.length = length
        message = f"position {index} is not valid for a list of length {length}"
        if detail:
            message += f" ({detail})"
        super().__init__(message)


class MoveNotApplicable(LocationListError):
    """No discrete move exists for the requested row (single-element list)."""


class StoreError(LocationListError):
    pass


class NetworkError(StoreError):
    """The location store could not be reached."""


class ServerError(StoreError):
    """The location store rejected a request; message is user-facing."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)
