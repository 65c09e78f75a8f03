class DomainError(Exception):
    """Base exception for business rule violations."""

    code = "DOMAIN_ERROR"


class InvalidStateError(DomainError):
    """Raised when an operation is not allowed in the record's current state."""

    code = "INVALID_STATE"


class BreakLimitError(InvalidStateError):
    """Raised when a Standard break is requested after one was already taken that day."""

    code = "BREAK_LIMIT"


class InsufficientBalanceError(DomainError):
    """Raised when a leave would exceed the available balance."""

    code = "INSUFFICIENT_BALANCE"


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    code = "VALIDATION_ERROR"


class InvalidRangeError(ValidationError):
    """Raised for reversed date ranges or malformed time-of-day strings."""

    code = "INVALID_RANGE"


class MissingRequiredFieldError(ValidationError):
    """Raised when a field required by the record's type is absent."""

    code = "MISSING_REQUIRED_FIELD"
