"""
Domain error translation - AuthError to HTTPException.

Messages are deliberately generic where detail would help an attacker:
an invalid/expired token and a wrong code share one message, unknown
email and wrong password share another. Internal causes of crypto and
delivery failures are logged, never returned.
"""

import logging

from fastapi import HTTPException, status

from src.domain.exceptions import (
    AccountStateError,
    AuthError,
    CodeMismatch,
    DispatchError,
    DuplicateEmail,
    InvalidCredentials,
    InvalidOrExpiredToken,
    SessionIssuanceError,
    ValidationError,
)

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = "This email is already registered. Use a different email address."
INVALID_CODE_MESSAGE = "Your activation code has expired or is invalid. Please try again."
INVALID_CREDENTIALS_MESSAGE = (
    "Incorrect email or password. Please check your credentials and try again."
)
SESSION_FAILURE_MESSAGE = (
    "Oops! It looks like we're having a hiccup. Give it another go, "
    "or reach out if it's still acting up!"
)
DISPATCH_FAILURE_MESSAGE = (
    "An error occurred while sending the verification email. Please try again later."
)
INTERNAL_FAILURE_MESSAGE = "Uh-oh! Something went sideways. Try again soon!"


def to_http_exception(error: AuthError) -> HTTPException:
    """Map a domain error to its HTTP status and client-safe message."""
    if isinstance(error, ValidationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))
    if isinstance(error, DuplicateEmail):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=DUPLICATE_EMAIL_MESSAGE)
    if isinstance(error, (InvalidOrExpiredToken, CodeMismatch)):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_CODE_MESSAGE)
    if isinstance(error, InvalidCredentials):
        return HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_CREDENTIALS_MESSAGE
        )
    if isinstance(error, AccountStateError):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(error))
    if isinstance(error, SessionIssuanceError):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=SESSION_FAILURE_MESSAGE)
    if isinstance(error, DispatchError):
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=DISPATCH_FAILURE_MESSAGE
        )

    # CryptoError, ConfigurationError and anything unexpected
    logger.error("Request failed: %s: %s", type(error).__name__, error)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=INTERNAL_FAILURE_MESSAGE
    )
