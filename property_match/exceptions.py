"""Custom exception hierarchy for property-match."""


class PropertyMatchError(Exception):
    """Base exception for all property-match errors."""


class ValidationError(PropertyMatchError):
    """Raised when a record or input fails validation."""


class InvalidStatusTransitionError(ValidationError):
    """Raised when a status change is not allowed from the current status."""


class NotFoundError(PropertyMatchError):
    """Raised when an operation addresses a record that does not exist."""


class StoreUnavailableError(PropertyMatchError):
    """Raised when the backing store cannot be reached or a query fails."""


class ConfigurationError(PropertyMatchError):
    """Raised when configuration is invalid or missing."""


class NotificationError(PropertyMatchError):
    """Raised when a notification dispatch fails."""
