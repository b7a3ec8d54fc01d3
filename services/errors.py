class ServiceError(Exception):
    """Base class for service-layer errors."""


class DataAccessError(ServiceError):
    """Raised when the record store (DB) fails to answer a lookup."""
