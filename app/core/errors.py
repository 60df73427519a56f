"""Application error taxonomy. Each error knows its HTTP status and a stable code."""


class AppError(Exception):
    """Base class for errors rendered as JSON by the API exception handlers."""

    status_code: int = 500
    code: str = "InternalError"
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None, field: str | None = None) -> None:
        self.message = message or self.default_message
        self.field = field
        super().__init__(self.message)


class InvalidInputError(AppError):
    """Missing or malformed input."""

    status_code = 400
    code = "ValidationError"
    default_message = "Invalid request"


class InvalidStructure(InvalidInputError):
    code = "InvalidStructure"
    default_message = "Form structure must be an array of sections"


class CurrentPasswordIncorrect(InvalidInputError):
    code = "CurrentPasswordIncorrect"
    default_message = "Current password is incorrect"


class NoChanges(InvalidInputError):
    code = "NoChanges"
    default_message = "No changes to update"


class InvalidTemplateFile(InvalidInputError):
    code = "InvalidTemplateFile"
    default_message = "File must be a .docx document"


class AuthError(AppError):
    """Authentication failed; rendered as 401 with a Bearer challenge."""

    status_code = 401
    code = "AuthError"
    default_message = "Not authenticated"


class NoTokenProvided(AuthError):
    code = "NoTokenProvided"
    default_message = "No token provided"


class TokenExpired(AuthError):
    code = "TokenExpired"
    default_message = "Token expired"


class TokenInvalid(AuthError):
    code = "TokenInvalid"
    default_message = "Invalid token"


class InvalidCredentials(AuthError):
    code = "InvalidCredentials"
    default_message = "Invalid credentials"


class ForbiddenError(AppError):
    status_code = 403
    code = "Forbidden"
    default_message = "Forbidden"


class AdminRequired(ForbiddenError):
    code = "AdminRequired"
    default_message = "Admin access required"


class ReservedAccount(ForbiddenError):
    code = "ReservedAccount"
    default_message = "The reserved admin account cannot be deleted or renamed"


class NotFoundError(AppError):
    status_code = 404
    code = "NotFound"
    default_message = "Not found"


class UserNotFound(NotFoundError):
    code = "UserNotFound"
    default_message = "User not found"


class ServiceNotFound(NotFoundError):
    code = "ServiceNotFound"
    default_message = "Service not found"


class TemplateNotFound(NotFoundError):
    code = "TemplateNotFound"
    default_message = "No proposal template available"


class ConflictError(AppError):
    """Uniqueness violation. Reported as 400 to match the client contract."""

    status_code = 400
    code = "Conflict"
    default_message = "Resource already exists"


class DuplicateUser(ConflictError):
    code = "DuplicateUser"
    default_message = "Username or email already exists"


class EmailInUse(ConflictError):
    code = "EmailInUse"
    default_message = "Email is already in use"


class InternalError(AppError):
    """Unexpected store or infrastructure failure."""


class CatalogUpdateFailed(InternalError):
    code = "CatalogUpdateFailed"
    default_message = "Failed to update services"


class TemplateStorageError(InternalError):
    code = "TemplateStorageError"
    default_message = "Failed to store template"
