"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class InteractionInvalidOrExpiredError(ValidationError):
    """Interaction is unknown, malformed, of the wrong type or past its expiry.

    A bad request rather than a failed proof: the caller referenced an
    authorization attempt that cannot be continued.
    """

    def __init__(self, message: str = "Interaction invalid or expired"):
        super().__init__(message)


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ConflictError(DomainError):
    """Raised when an identifier is already taken by an active user."""

    pass


class UnauthorizedError(DomainError):
    """Base for failed proofs of identity.

    Messages are generic per flow so callers cannot tell a wrong secret
    apart from a missing or expired challenge.
    """

    message = "Unauthorized"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)


class InvalidCredentialsError(UnauthorizedError):
    """Email/password pair did not match an active user."""

    message = "Invalid credentials"


class UnverifiedAccountError(UnauthorizedError):
    """Password was correct but no contact channel is verified yet."""

    message = "Please verify your email or phone number before logging in"


class InvalidOrExpiredCodeError(UnauthorizedError):
    """OTP did not match an active interaction."""

    message = "Invalid or expired code"


class ChallengeNotFoundError(UnauthorizedError):
    """No active wallet challenge exists for the address."""

    message = "Invalid wallet signature or expired challenge"


class SignatureInvalidError(UnauthorizedError):
    """Wallet signature did not verify against the challenge nonce."""

    message = "Invalid wallet signature or expired challenge"


class OAuthError(DomainError):
    """Base for authorization-code grant errors.

    Attributes:
        error: OAuth 2.0 error code reported to the client
    """

    error = "invalid_request"
    message = "Invalid request"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)


class InvalidClientError(OAuthError):
    """Unknown client_id, or bad client_secret for a confidential client."""

    error = "invalid_client"
    message = "Invalid client_id"


class InvalidRedirectUriError(OAuthError):
    """redirect_uri is not registered for the client."""

    error = "invalid_request"
    message = "Invalid redirect_uri"


class InvalidAuthorizationCodeError(OAuthError):
    """Authorization code is unknown, expired or already used."""

    error = "invalid_grant"
    message = "Invalid authorization code"


class ClientMismatchError(OAuthError):
    """Authorization code was issued to a different client."""

    error = "invalid_grant"
    message = "Client mismatch"


class UnsupportedGrantTypeError(OAuthError):
    """Token endpoint was called with a grant other than authorization_code."""

    error = "unsupported_grant_type"
    message = "Unsupported grant_type"
