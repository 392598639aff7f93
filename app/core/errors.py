"""Error taxonomy for authentication, sessions and authorization.

Every error carries a stable ``code`` and an HTTP ``status_code``. Errors with
``user_facing = True`` are returned verbatim to API consumers; all others are
logged and surfaced as a generic internal error.
"""


class AccountsError(Exception):
    """Base class for errors raised by the accounts core."""

    status_code: int = 500
    code: str = "INTERNAL_SERVER_ERROR"
    user_facing: bool = False
    default_message: str = "An error occurred."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


# -- input validation -------------------------------------------------------


class InvalidUserInput(AccountsError):
    """Caller supplied input that fails a validation rule."""

    status_code = 400
    code = "BAD_USER_INPUT"
    user_facing = True
    default_message = "Invalid input."


class InvalidCredentialFormat(InvalidUserInput):
    code = "INVALID_CREDENTIAL_FORMAT"
    default_message = "Password does not meet requirements."


class InvalidEmail(InvalidUserInput):
    code = "INVALID_EMAIL"
    default_message = "Invalid email address."


class InvalidRole(InvalidUserInput):
    code = "INVALID_ROLE"
    default_message = "Invalid role."


class DuplicateEmail(AccountsError):
    status_code = 409
    code = "DUPLICATE_EMAIL"
    user_facing = True
    default_message = "A user with this email already exists."


class InvalidCredentials(AccountsError):
    """Unknown email and wrong password are deliberately indistinguishable."""

    status_code = 401
    code = "INVALID_CREDENTIALS"
    user_facing = True
    default_message = "Email or password incorrect"


# -- tokens -----------------------------------------------------------------


class TokenError(AccountsError):
    """A bearer token failed verification."""

    status_code = 401
    code = "INVALID_TOKEN"
    user_facing = True
    default_message = "Invalid token."


class TokenExpired(TokenError):
    code = "TOKEN_EXPIRED"
    default_message = "Token has expired."


class TokenMalformed(TokenError):
    code = "TOKEN_MALFORMED"


class TokenSignatureInvalid(TokenError):
    code = "TOKEN_SIGNATURE_INVALID"


class TokenMissingSubject(TokenError):
    code = "TOKEN_MISSING_SUBJECT"


class InvalidToken(TokenError):
    """Token verified but its session no longer exists."""


# -- sessions and users -------------------------------------------------------


class SessionNotFound(AccountsError):
    status_code = 404
    code = "SESSION_NOT_FOUND"
    user_facing = True
    default_message = "Failed to delete session."


class SessionCreationFailed(AccountsError):
    default_message = "Failed to create session."


class UserNotFound(AccountsError):
    status_code = 404
    code = "USER_NOT_FOUND"
    user_facing = True
    default_message = "User not found."


# -- authorization ----------------------------------------------------------


class Unauthenticated(AccountsError):
    status_code = 401
    code = "UNAUTHENTICATED"
    user_facing = True
    default_message = "Authentication required."


class Forbidden(AccountsError):
    status_code = 403
    code = "FORBIDDEN"
    user_facing = True
    default_message = "You do not have permission"


# -- startup ----------------------------------------------------------------


class KeyMaterialError(AccountsError):
    """Signing or verification key could not be loaded; fatal at startup."""

    default_message = "Unable to load token key material."
