"""Domain-level exceptions.

Services raise these errors to express business rule violations.
Route handlers catch them and map to appropriate HTTP status codes.
Every DomainError carries a stable machine-readable ``code`` so callers
can branch on it instead of on message text.
"""


class DomainError(Exception):
    """Base class for all domain errors."""

    code = "DOMAIN_ERROR"
    message = "Domain error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class NotFoundError(DomainError):
    """Requested entity does not exist."""


class DuplicateError(DomainError):
    """Entity with the same unique key already exists."""


class ValidationError(DomainError):
    """Input violates a business validation rule."""


class AuthenticationError(DomainError):
    """Caller could not be authenticated."""


class UserNotFoundError(NotFoundError):
    code = "USER_NOT_FOUND"
    message = "User not found"


class UserAlreadyExistsError(DuplicateError):
    code = "USER_ALREADY_EXISTS"
    message = "User already exists"


class InvalidCredentialsError(AuthenticationError):
    """Unknown email or wrong password. The two cases are never distinguished."""

    code = "INVALID_CREDENTIALS"
    message = "Invalid email or password"


class InvalidTokenError(AuthenticationError):
    """Bad signature, expired, malformed or wrong algorithm. Never distinguished."""

    code = "INVALID_TOKEN"
    message = "Invalid token"


class UnauthorizedError(AuthenticationError):
    code = "UNAUTHORIZED"
    message = "Unauthorized access"


class InvalidEmailError(ValidationError):
    code = "INVALID_EMAIL"
    message = "Email is required"


class InvalidFirstNameError(ValidationError):
    code = "INVALID_FIRST_NAME"
    message = "First name is required"


class InvalidLastNameError(ValidationError):
    code = "INVALID_LAST_NAME"
    message = "Last name is required"


class InvalidBirthdayError(ValidationError):
    code = "INVALID_BIRTHDAY"
    message = "Invalid birthday format (YYYY-MM-DD)"


class PasswordHashError(DomainError):
    code = "PASSWORD_HASH_ERROR"
    message = "Failed to hash password"


class UserCreationError(DomainError):
    """Store write failed. Used for both create and update."""

    code = "USER_CREATION_ERROR"
    message = "Failed to create user"


class TokenGenerationError(DomainError):
    code = "TOKEN_GENERATION_ERROR"
    message = "Failed to generate token"


# ── adapter-level failures ───────────────────────────────────
# Raised by adapters behind the ports. IdentityService translates them
# into the catalog above; anything untranslated is an opaque 500.


class RepositoryError(Exception):
    """User store failed for a reason other than a missing record."""


class DuplicateEmailError(RepositoryError):
    """User store rejected a write because the email is already taken."""


class HashingFailure(Exception):
    """Password hasher could not produce a digest."""


class TokenSigningFailure(Exception):
    """Token service could not sign a token."""
