"""Domain exceptions raised by the store, resolver and report client."""


class DormDeskError(Exception):
    """Base class for all DormDesk domain errors."""


class CapacityExceeded(DormDeskError):
    """Raised when a tenant is added to a full or nonexistent room."""

    def __init__(self, room_id: int, message: str = "Room is full or does not exist."):
        super().__init__(message)
        self.room_id = room_id


class NotFound(DormDeskError):
    """Raised when an entity that must exist is missing."""

    def __init__(self, entity: str, entity_id: str):
        super().__init__(f"{entity} not found: {entity_id}")
        self.entity = entity
        self.entity_id = entity_id


class InvalidInput(DormDeskError, ValueError):
    """Raised when operation arguments violate the data model."""


class ExternalServiceFailure(DormDeskError):
    """Raised when the external report generation service fails."""

    def __init__(self, message: str = "Failed to generate report from API.", original: Exception = None):
        super().__init__(message)
        self.original = original
