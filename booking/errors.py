"""Custom domain exceptions for the application."""

# Stable, machine-readable error codes for API consumers.
NOT_FOUND = "NOT_FOUND"
DUPLICATE_RESOURCE = "DUPLICATE_RESOURCE"
VALIDATION_ERROR = "VALIDATION_ERROR"
LOCATION_INACTIVE = "LOCATION_INACTIVE"
POLICY_VIOLATION = "POLICY_VIOLATION"
CONFIGURATION_ERROR = "CONFIGURATION_ERROR"


class DomainError(Exception):
    """Base exception for domain/business logic errors."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource does not exist."""

    pass


class DuplicateResourceError(DomainError):
    """Raised when attempting to create or update a resource that would violate a uniqueness constraint."""

    pass


class DomainValidationError(DomainError):
    """Raised when business rules or domain validation fail (e.g. inverted intervals, bad policy settings)."""

    pass


class LocationInactiveError(DomainError):
    """Raised when a booking is requested for a location that has not been activated."""

    pass


class PolicyViolationError(DomainError):
    """Raised when one or more booking policies reject a proposed booking.

    This is the expected, recoverable outcome of a refused booking. ``violations``
    holds the keys of every policy that rejected it, in evaluation order.
    """

    def __init__(self, violations: list[str], message: str | None = None):
        self.violations = list(violations)
        super().__init__(
            message
            or "Booking violates location policies: " + ", ".join(self.violations)
        )


class ConfigurationError(DomainError):
    """Raised when persisted policy configuration cannot be turned into live policies.

    Indicates a broken deployment or inconsistent data, never a bad request.
    """

    pass


class UnknownPolicyKeyError(ConfigurationError):
    """Raised when a policy key has no registered policy."""

    pass


class UnknownLocationTypeError(ConfigurationError):
    """Raised when a location type has no registered default policies."""

    pass
