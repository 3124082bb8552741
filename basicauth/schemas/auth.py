"""
Pydantic schemas for the register / login / forgot-password exchanges.
Attribute names are snake_case; the wire format uses camelCase aliases.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialising to camelCase and accepting either spelling."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RegisterRequest(CamelModel):
    """Account creation payload."""
    username: str = Field(..., min_length=1, description="Unique display name")
    email: str = Field(..., min_length=1, description="Login email address")
    password: str = Field(..., min_length=1, description="Plain-text password")
    security_question: str = Field(..., min_length=1, description="Recovery question")
    security_answer: str = Field(..., min_length=1, description="Answer to the recovery question")


class LoginRequest(CamelModel):
    """Credentials exchanged for a bearer token."""
    email: str = Field(..., min_length=1, description="Login email address")
    password: str = Field(..., min_length=1, description="Plain-text password")


class LoginResponse(CamelModel):
    """Bearer token returned by a successful login."""
    token: str = Field(..., description="Opaque session credential")


class ForgotPasswordRequest(CamelModel):
    """Password reset authorised by the security answer."""
    email: str = Field(..., min_length=1, description="Login email address")
    security_answer: str = Field(..., min_length=1, description="Answer to the recovery question")
    new_password: str = Field(..., min_length=1, description="Replacement password")
