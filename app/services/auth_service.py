"""User registration and credential checks."""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.config import settings
from app.core.exceptions import DuplicateError, UnauthorizedError
from app.core.logging import get_logger
from app.core.security import create_access_token, hash_password, verify_password
from app.models.user_model import Role, User
from app.schemas.auth_schema import LoginRequest, RegisterRequest, TokenResponse

logger = get_logger(__name__)

DEFAULT_ROLE = "USER"


async def get_or_create_role(db: AsyncSession, name: str) -> Role:
    role = (await db.execute(select(Role).where(Role.name == name))).scalar_one_or_none()
    if role is None:
        role = Role(name=name)
        db.add(role)
        await db.flush()
    return role


async def register_user(db: AsyncSession, payload: RegisterRequest) -> User:
    email = payload.email.strip().lower()
    existing = (await db.execute(select(User.id).where(User.email == email))).scalar_one_or_none()
    if existing is not None:
        raise DuplicateError(f"Email '{email}' is already registered")

    role = await get_or_create_role(db, DEFAULT_ROLE)
    user = User(name=payload.name, email=email, password=hash_password(payload.password), roles=[role])
    db.add(user)
    await db.flush()
    logger.info("User registered", extra={"user_id": user.id})
    return user


async def authenticate(db: AsyncSession, payload: LoginRequest) -> TokenResponse:
    email = payload.email.strip().lower()
    user = (await db.execute(
        select(User).options(selectinload(User.roles)).where(User.email == email)
    )).scalar_one_or_none()

    # mesma mensagem para email desconhecido e password errada
    if user is None or not verify_password(payload.password, user.password):
        raise UnauthorizedError("Invalid email or password")

    token = create_access_token(str(user.id), [role.name for role in user.roles])
    return TokenResponse(
        access_token=token,
        token_type="Bearer",
        expires_in=settings.jwt_expiration_minutes * 60,
    )
