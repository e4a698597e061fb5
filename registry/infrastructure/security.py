"""Access Tokens: JWT issuance and decoding, and the per-request caller context.

Invariants:
    - Tokens are signed with settings.jwt_secret and carry iss, aud, sub, role, exp
    - decode_access_token() raises UnauthorizedError for any invalid token
    - TokenCallerContext answers role questions from the decoded claims only

Design Decisions:
    - python-jose for signing/verification (HS256)
    - Issuance is a stub: no password store, role derived from the username
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from jose import jwt, JWTError

from registry.config import Settings
from registry.core.domain_types import Role
from registry.core.errors import BadRequestError, UnauthorizedError


@dataclass(frozen=True)
class TokenCallerContext:
    """CallerContext built from a verified access token."""
    subject: str
    roles: frozenset[str]
    elevated_role: str

    def has_elevated_role(self) -> bool:
        return self.elevated_role in self.roles


def role_for_username(username: str) -> Role:
    return Role.ADMIN if username.strip().lower() == "admin" else Role.USER


def create_access_token(
    subject: str, roles: list[str], settings: Settings,
) -> tuple[str, int]:
    """Return (token, lifetime in seconds)."""
    now = datetime.now(timezone.utc)
    ttl = timedelta(minutes=settings.access_token_ttl_minutes)
    payload = {
        "sub": subject,
        "jti": uuid.uuid4().hex,
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_audience,
        "role": roles,
        "iat": int(now.timestamp()),
        "exp": int((now + ttl).timestamp()),
    }
    token = jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    return token, int(ttl.total_seconds())


def login(username: str, password: str, settings: Settings) -> tuple[str, int]:
    """Issue a token for any non-blank credentials."""
    if not username or not username.strip() or not password or not password.strip():
        raise BadRequestError("Username and password must be provided.")
    role = role_for_username(username)
    return create_access_token(username.strip(), [role.value], settings)


def decode_access_token(token: str, settings: Settings) -> dict:
    try:
        return jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            issuer=settings.jwt_issuer,
        )
    except JWTError as e:
        raise UnauthorizedError("Invalid or expired access token", cause=e) from e


def caller_from_token(token: str, settings: Settings) -> TokenCallerContext:
    claims = decode_access_token(token, settings)
    role_claim = claims.get("role") or []
    if isinstance(role_claim, str):
        role_claim = [role_claim]
    return TokenCallerContext(
        subject=str(claims.get("sub", "")),
        roles=frozenset(role_claim),
        elevated_role=settings.elevated_role,
    )
