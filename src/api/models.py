"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
Request fields default to empty so missing input reaches the domain and is
reported as a 400 validation error with a readable message.
"""

from typing import Literal

from pydantic import AliasChoices, BaseModel, Field


class SignupRequest(BaseModel):
    """Request model for signup."""

    fname: str = Field("", description="First name")
    lname: str = Field("", description="Last name")
    email: str = Field("", description="Email address to verify")
    password: str = Field("", description="Account password")


class SignupResponse(BaseModel):
    """Response model for a sent verification code."""

    status: Literal["success"] = "success"
    message: str
    token: str = Field(..., description="Activation token to submit with the code")


class VerifyAccountRequest(BaseModel):
    """Request model for account verification."""

    activation_token: str = Field(
        "",
        validation_alias=AliasChoices("activation_token", "activationToken"),
        description="Token returned by signup",
    )
    otp: str | int | None = Field(None, description="Verification code from the email")


class AccountView(BaseModel):
    """Public account fields."""

    id: str
    fname: str
    lname: str
    email: str
    role: str
    is_verified: bool
    created_at: str


class VerifyAccountResponse(BaseModel):
    """Response model for a created account."""

    status: Literal["success"] = "success"
    message: str
    user: AccountView


class SigninRequest(BaseModel):
    """Request model for signin."""

    email: str = ""
    password: str = ""
    remember_me: bool = Field(
        False,
        validation_alias=AliasChoices("remember_me", "rememberMe"),
        description="Keep the session for 7 days",
    )


class SigninResponse(BaseModel):
    """Response model for a successful signin."""

    status: Literal["success"] = "success"
    message: str
    user: AccountView
    access_token: str


class ErrorResponse(BaseModel):
    """Standard error response model."""

    detail: str
