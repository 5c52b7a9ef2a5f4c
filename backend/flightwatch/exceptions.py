"""Domain errors raised by the flightwatch services.

Each one is a distinct, catchable failure. The HTTP layer maps them to
status codes in ``flightwatch.main``; nothing in the services retries.
"""


class FlightwatchError(Exception):
    """Base class for all domain errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NotFound(FlightwatchError):
    """A referenced user, flight search or alert does not exist."""

    def __init__(self, entity: str, entity_id: int):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} with id {entity_id} not found")


class InvalidTemporalRange(FlightwatchError):
    """Departure is not in the future, or return is not after departure."""


class Inactive(FlightwatchError):
    """A price write was attempted against a paused flight search."""

    def __init__(self, flight_search_id: int):
        self.flight_search_id = flight_search_id
        super().__init__(f"Flight search with id {flight_search_id} is not active")


class ReferentialViolation(FlightwatchError):
    """The store rejected a foreign key."""


class UniquenessViolation(FlightwatchError):
    """The store rejected a duplicate value, e.g. a user email."""
