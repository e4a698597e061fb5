"""Auth Schemas: login request and issued token."""

from pydantic import Field

from registry.schemas.company import CamelModel


class LoginRequest(CamelModel):
    # Blank values are rejected by the auth service as BadRequest, not here
    username: str = Field(max_length=100)
    password: str = Field(max_length=200)


class TokenResponse(CamelModel):
    token: str
    token_type: str = "bearer"
    expires_in: int
