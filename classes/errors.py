"""
Application exceptions. Each ApiError carries the HTTP status it maps to.
"""


class ApiError(Exception):
    """Base exception for errors that end a request with an envelope."""
    status_code = 500
    message = "Internal server error"

    def __init__(self, message=None, data=None):
        super().__init__(message or self.message)
        self.message = message or self.message
        self.data = data


class MalformedRequest(ApiError):
    """Request body could not be decoded into a JSON object."""
    status_code = 400
    message = "Invalid JSON data"


class ValidationError(ApiError):
    """One or more fields failed validation."""
    status_code = 400
    message = "Validation failed"

    def __init__(self, errors, message=None):
        if isinstance(errors, str):
            errors = [errors]
        super().__init__(message, data=list(errors))
        self.errors = self.data


class SecurityViolation(ApiError):
    """Input matched a known injection or script signature."""
    status_code = 403
    message = "Security violation"

    def __init__(self, reason, field=None):
        super().__init__(data="Request blocked for security reasons")
        self.reason = reason
        self.field = field


class NotFoundError(ApiError):
    status_code = 404
    message = "Not found"


class MethodNotAllowed(ApiError):
    status_code = 405
    message = "Method not allowed"


class RateLimitExceeded(ApiError):
    status_code = 429
    message = "Rate limit exceeded"

    def __init__(self, limit, retry_after, reset_at):
        super().__init__(data={
            "limit": limit,
            "retry_after": retry_after,
        })
        self.limit = limit
        self.retry_after = retry_after
        self.reset_at = reset_at


class EntityValidationError(ValueError):
    """Raised by a model when a value breaks one of its invariants."""


class QuizError(EntityValidationError):
    pass


class QuestionError(EntityValidationError):
    pass


class AnswerError(EntityValidationError):
    pass


class DependentRecordsExist(ApiError):
    """Row is still referenced by child rows and cannot be deleted."""
    status_code = 400
    message = "Record still has dependent records"
