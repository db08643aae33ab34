"""Custom application exceptions."""


class AppException(Exception):
    """Base application exception."""

    code = "app_error"

    def __init__(self, message: str, status_code: int = 500):
        """Initialize exception with message and status code."""
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class NotFoundException(AppException):
    """Resource not found exception."""

    code = "not_found"

    def __init__(self, message: str = "Resource not found"):
        """Initialize with 404 status code."""
        super().__init__(message, status_code=404)


class UnauthorizedException(AppException):
    """Unauthorized access exception."""

    code = "unauthorized"

    def __init__(self, message: str = "Unauthorized"):
        """Initialize with 401 status code."""
        super().__init__(message, status_code=401)


class ForbiddenException(AppException):
    """Forbidden access exception."""

    code = "forbidden"

    def __init__(self, message: str = "Forbidden"):
        """Initialize with 403 status code."""
        super().__init__(message, status_code=403)


class BadRequestException(AppException):
    """Bad request exception."""

    code = "bad_request"

    def __init__(self, message: str = "Bad request"):
        """Initialize with 400 status code."""
        super().__init__(message, status_code=400)


class ConflictException(AppException):
    """Conflict exception."""

    code = "conflict"

    def __init__(self, message: str = "Conflict"):
        """Initialize with 409 status code."""
        super().__init__(message, status_code=409)


class ValidationException(AppException):
    """Validation error exception."""

    code = "validation_error"

    def __init__(self, message: str = "Validation error"):
        """Initialize with 422 status code."""
        super().__init__(message, status_code=422)


class InvalidTimeZoneException(BadRequestException):
    """Zone name is not a known IANA identifier."""

    code = "invalid_time_zone"

    def __init__(self, message: str = "Invalid time zone"):
        super().__init__(message)


class InvalidDateTimeException(BadRequestException):
    """Date or date-time string could not be parsed."""

    code = "invalid_date_time"

    def __init__(self, message: str = "Invalid date-time"):
        super().__init__(message)


class UnknownReferenceException(BadRequestException):
    """Clinic location or patient id does not refer to an existing row."""

    code = "unknown_reference"

    def __init__(self, message: str = "Referenced record does not exist"):
        super().__init__(message)


class InvalidStatusException(ValidationException):
    """Appointment status outside scheduled/completed/cancelled."""

    code = "invalid_status"

    def __init__(self, message: str = "Invalid appointment status"):
        super().__init__(message)


class InvalidPhoneException(ValidationException):
    """Phone number is not a 10-digit Indian mobile number."""

    code = "invalid_phone"

    def __init__(self, message: str = "Invalid phone number"):
        super().__init__(message)


class InvalidNameException(ValidationException):
    """Patient name is blank or too long."""

    code = "invalid_name"

    def __init__(self, message: str = "Invalid patient name"):
        super().__init__(message)


class PersistenceException(AppException):
    """The database rejected or failed a read or write."""

    code = "persistence_error"

    def __init__(self, message: str = "Database error"):
        """Initialize with 503 status code."""
        super().__init__(message, status_code=503)
