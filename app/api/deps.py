"""API dependencies — database session, authentication and filter parameters.

Authentication uses a bearer JWT (``Authorization: Bearer <token>``) issued by
``POST /api/v1/auth/login``. The token subject is the user id and its
``scope`` claim lists the user's roles. Failures are raised as domain
exceptions so that the central error translator builds the response.
"""
import uuid
from dataclasses import dataclass
from decimal import Decimal
from typing import AsyncGenerator, Annotated, List, Optional

from fastapi import Depends, Query, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core.exceptions import UnauthorizedError
from app.core.security import decode_access_token, token_roles
from app.database import async_session_factory
from app.models.property_model import ListingType, PropertyType
from app.schemas.property_schema import PropertyFilter


# ---------------------------------------------------------------------------
# Database session dependency
# ---------------------------------------------------------------------------

async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield an async database session for request scope."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ---------------------------------------------------------------------------
# JWT authentication
# ---------------------------------------------------------------------------

_bearer_scheme = HTTPBearer(
    auto_error=False,  # False para devolver 401 no envelope de erro em vez do 403 do FastAPI
    description="JWT obtido em POST /api/v1/auth/login",
)


@dataclass(frozen=True)
class CurrentUser:
    id: uuid.UUID
    roles: List[str]


async def get_current_user(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Security(_bearer_scheme)],
) -> CurrentUser:
    """Valida o bearer token (assinatura e expiração).

    Raises:
        UnauthorizedError: token ausente, inválido ou expirado.
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Authentication required")

    claims = decode_access_token(credentials.credentials)
    try:
        user_id = uuid.UUID(str(claims["sub"]))
    except ValueError as exc:
        raise UnauthorizedError("Invalid token subject") from exc
    return CurrentUser(id=user_id, roles=token_roles(claims))


# Shorthand para usar nos endpoints
AuthenticatedUser = Annotated[CurrentUser, Depends(get_current_user)]


# ---------------------------------------------------------------------------
# Paging and filter query parameters
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PageParams:
    page: int
    size: int


def page_params(
    page: int = Query(0, ge=0, description="Zero-based page index"),
    size: int = Query(settings.default_page_size, ge=1, description=f"Page size, capped at {settings.max_page_size}"),
) -> PageParams:
    return PageParams(page=page, size=min(size, settings.max_page_size))


def property_filter_params(
    max_price: Optional[Decimal] = Query(None, alias="maxPrice"),
    city: Optional[str] = Query(None),
    state: Optional[str] = Query(None),
    property_type: Optional[PropertyType] = Query(None, alias="propertyType"),
    listing_type: Optional[ListingType] = Query(None, alias="listingType"),
    min_bedrooms: Optional[int] = Query(None, alias="minBedrooms"),
    min_bathrooms: Optional[int] = Query(None, alias="minBathrooms"),
    min_parking_spaces: Optional[int] = Query(None, alias="minParkingSpaces"),
    min_area: Optional[Decimal] = Query(None, alias="minArea"),
    max_area: Optional[Decimal] = Query(None, alias="maxArea"),
    is_furnished: Optional[bool] = Query(None, alias="isFurnished"),
    accepts_pets: Optional[bool] = Query(None, alias="acceptsPets"),
) -> PropertyFilter:
    return PropertyFilter(
        max_price=max_price,
        city=city,
        state=state,
        property_type=property_type,
        listing_type=listing_type,
        min_bedrooms=min_bedrooms,
        min_bathrooms=min_bathrooms,
        min_parking_spaces=min_parking_spaces,
        min_area=min_area,
        max_area=max_area,
        is_furnished=is_furnished,
        accepts_pets=accepts_pets,
    )
