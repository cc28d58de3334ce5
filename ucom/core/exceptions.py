class UcomException(Exception):
    """Base exception for the tenancy layer"""

    pass


class ConfigurationError(UcomException):
    """Raised when required configuration (e.g. DATABASE_URL) is missing"""

    pass


class UnauthorizedException(UcomException):
    """Raised when JWT validation fails"""

    pass


class NotFoundException(UcomException):
    """Raised when resource not found (or not visible to the current tenant)"""

    pass


class ValidationException(UcomException):
    """Raised for business logic validation errors"""

    pass


class ConflictException(UcomException):
    """Raised when a write collides with a unique key (e.g. a brand slug)"""

    pass


class TenantIsolationError(UcomException):
    """Raised when a write is rejected by a row-level security policy"""

    pass


class LineageViolationError(UcomException):
    """Raised when a row references a parent outside its tenant lineage"""

    pass


class MigrationError(UcomException):
    """Raised when schema or seed application fails"""

    pass
