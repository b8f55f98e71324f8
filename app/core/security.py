"""Password hashing and JWT access tokens."""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

import bcrypt
import jwt

from app.config import settings
from app.core.exceptions import UnauthorizedError


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # hash armazenado com formato inválido
        return False


def create_access_token(
    subject: str,
    roles: List[str],
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Issue a signed token whose ``sub`` is the user id and ``scope`` its roles."""
    now = datetime.now(timezone.utc)
    expires_at = now + (expires_delta or timedelta(minutes=settings.jwt_expiration_minutes))
    claims = {
        "iss": settings.app_name,
        "sub": subject,
        "scope": " ".join(sorted(roles)),
        "iat": now,
        "exp": expires_at,
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> Dict[str, Any]:
    """Verify signature and expiry; return the claims.

    Raises:
        UnauthorizedError: token expired, tampered with or missing ``sub``.
    """
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "sub"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise UnauthorizedError("Access token expired") from exc
    except jwt.InvalidTokenError as exc:
        raise UnauthorizedError("Invalid access token", detail=str(exc)) from exc
    return claims


def token_roles(claims: Dict[str, Any]) -> List[str]:
    scope = claims.get("scope") or ""
    return [role for role in scope.split(" ") if role]
