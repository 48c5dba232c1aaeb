"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class ValidationError(DomainException):
    """Request input is missing or malformed"""

    pass


class InvalidOptionError(ValidationError):
    """Requested financing option is not one of the offered options"""

    pass


class NotFoundError(DomainException):
    """No homeowner, investor or contract matches the given key"""

    pass


class ConflictError(DomainException):
    """Operation conflicts with the current state of a record"""

    pass
