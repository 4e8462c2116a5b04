"""
Authentication for the FIAP API
Validates HS256 bearer tokens signed with JWT_SECRET and provides user context
"""
import time
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError, ExpiredSignatureError
from pydantic import BaseModel, Field

from fiap_api.core.config import settings


# Security scheme for bearer tokens (also documents the scheme in Swagger)
security = HTTPBearer(
    auto_error=False,
    bearerFormat="JWT",
    description=(
        "JWT Authorization Header - utilizado com Bearer Authentication. "
        "Informe somente o token; o prefixo 'Bearer' é adicionado automaticamente."
    ),
)


class TokenUser(BaseModel):
    """User data extracted from JWT token"""
    sub: Optional[str] = None
    name: Optional[str] = None
    role: Optional[str] = None
    claims: Dict[str, Any] = Field(default_factory=dict)


class AuthConfig:
    """Authentication configuration"""

    @staticmethod
    def get_secret() -> str:
        """Get the JWT_SECRET from settings"""
        secret = settings.JWT_SECRET
        if not secret:
            raise ValueError("JWT_SECRET environment variable is not set")
        return secret

    @staticmethod
    def get_jwt_algorithm() -> str:
        return settings.JWT_ALGORITHM


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"}
    )


def decode_token(token: str, secret: Optional[str] = None) -> dict:
    """
    Verify signature and lifetime of a bearer token and return its claims.

    Issuer and audience are not validated. A token without an ``exp`` claim is
    rejected, as is one whose ``exp`` is not strictly in the future.
    """
    secret = secret or AuthConfig.get_secret()
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[AuthConfig.get_jwt_algorithm()],
            options={"verify_aud": False, "require_exp": True}
        )
    except ExpiredSignatureError:
        raise _unauthorized("Token has expired")
    except JWTError as e:
        raise _unauthorized(f"Invalid token: {str(e)}")

    # jose accepts exp == now; the lifetime must be strictly in the future
    exp = payload.get("exp")
    if not isinstance(exp, (int, float)) or exp <= time.time():
        raise _unauthorized("Token has expired")

    return payload


def create_access_token(
    subject: str,
    expires_delta: Optional[timedelta] = timedelta(hours=1),
    secret: Optional[str] = None,
    **extra_claims
) -> str:
    """
    Mint a token accepted by decode_token.

    Pass ``expires_delta=None`` to omit the ``exp`` claim (such tokens are
    rejected by the API).
    """
    now = datetime.now(timezone.utc)
    claims = {"sub": subject, "iat": int(now.timestamp()), **extra_claims}
    if expires_delta is not None:
        claims["exp"] = int((now + expires_delta).timestamp())
    return jwt.encode(claims, secret or AuthConfig.get_secret(), algorithm=AuthConfig.get_jwt_algorithm())


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> TokenUser:
    """
    Dependency that extracts and validates the current user from JWT.

    Usage:
        @router.get("/protected")
        async def protected_route(user: TokenUser = Depends(get_current_user)):
            return {"message": f"Hello {user.sub}"}
    """
    if not credentials:
        raise _unauthorized("Authentication required")

    payload = decode_token(credentials.credentials)

    return TokenUser(
        sub=payload.get("sub") or payload.get("unique_name"),
        name=payload.get("name"),
        role=payload.get("role"),
        claims=payload
    )
