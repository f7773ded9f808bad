"""
API v1 routes.

Defines REST endpoints for signup, account verification and signin.
"""

from fastapi import APIRouter, Depends, Request, Response, status

from src.api.dependencies import get_registrar, get_session_issuer
from src.api.errors import to_http_exception
from src.api.models import (
    AccountView,
    ErrorResponse,
    SigninRequest,
    SigninResponse,
    SignupRequest,
    SignupResponse,
    VerifyAccountRequest,
    VerifyAccountResponse,
)
from src.domain.accounts import capitalize
from src.domain.exceptions import AuthError
from src.domain.registration import AccountRegistrar
from src.domain.session import CookieDirective, SessionIssuer

router = APIRouter(prefix="/auth", tags=["v1"])


def apply_cookie(response: Response, cookie: CookieDirective) -> None:
    """Set the access token cookie as directed by the session issuer."""
    response.set_cookie(
        key=cookie.name,
        value=cookie.value,
        max_age=cookie.max_age,
        expires=cookie.expires,
        httponly=cookie.http_only,
        secure=cookie.secure,
        samesite=cookie.same_site,
    )


@router.post(
    "/signup",
    response_model=SignupResponse,
    status_code=status.HTTP_200_OK,
    responses={
        400: {"model": ErrorResponse, "description": "Missing fields or email already registered"},
        500: {"model": ErrorResponse, "description": "Token or email delivery failure"},
    },
    summary="Sign up a new user",
    description="Submit name, email and password. A verification code is emailed "
    "and an activation token is returned; nothing is stored until verification.",
)
async def signup(
    request_data: SignupRequest,
    registrar: AccountRegistrar = Depends(get_registrar),
) -> SignupResponse:
    """
    Begin signup and send the verification code.

    - **fname**, **lname**: User's names
    - **email**: Address that receives the code
    - **password**: Account password
    """
    try:
        token = registrar.signup(
            request_data.fname, request_data.lname, request_data.email, request_data.password
        )
    except AuthError as e:
        raise to_http_exception(e) from None
    return SignupResponse(
        message="Verification code sent successfully to your email address.",
        token=token,
    )


@router.post(
    "/verify-account",
    response_model=VerifyAccountResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid token, code or duplicate email"},
    },
    summary="Verify account with code",
    description="Submit the activation token from signup with the emailed code "
    "to create the account.",
)
async def verify_account(
    request_data: VerifyAccountRequest,
    registrar: AccountRegistrar = Depends(get_registrar),
) -> VerifyAccountResponse:
    """
    Create the account once token and code check out.

    - **activation_token**: Token returned by signup
    - **otp**: Verification code from the email
    """
    try:
        account = registrar.verify(request_data.activation_token, request_data.otp)
    except AuthError as e:
        raise to_http_exception(e) from None
    return VerifyAccountResponse(
        message=f"Success, {capitalize(account.first_name)}! Your account is now activated.",
        user=AccountView(**account.public_view()),
    )


@router.post(
    "/signin",
    response_model=SigninResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing email or password"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
        403: {"model": ErrorResponse, "description": "Account banned or disabled"},
    },
    summary="Sign in",
    description="Authenticate with email and password. Sets the user_access_token "
    "cookie; remember_me extends it to 7 days and caches the session.",
)
async def signin(
    request_data: SigninRequest,
    request: Request,
    response: Response,
    issuer: SessionIssuer = Depends(get_session_issuer),
) -> SigninResponse:
    """
    Authenticate and issue a session.

    - **email**, **password**: Credentials
    - **remember_me**: Persistent cookie and cached session
    """
    client_ip = request.client.host if request.client else None
    try:
        session = issuer.signin(
            request_data.email,
            request_data.password,
            remember_me=request_data.remember_me,
            client_ip=client_ip,
        )
    except AuthError as e:
        raise to_http_exception(e) from None

    apply_cookie(response, session.cookie)
    return SigninResponse(
        message=f"Welcome back {session.user['fname']}.",
        user=AccountView(**session.user),
        access_token=session.access_token,
    )
