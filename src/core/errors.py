"""Failure types raised by search services."""


class TransportFailure(Exception):
    """A search call was rejected or returned a non-success response.

    The listing controller does not distinguish network errors from
    server-side validation errors; both arrive as this one type.
    """

    def __init__(self, message: str | None = None, *, status: int | None = None) -> None:
        super().__init__(message or "search request failed")
        self.message = message
        self.status = status
