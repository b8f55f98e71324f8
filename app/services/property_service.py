"""Property write operations and single-item lookups."""
import uuid
from typing import Optional, Union

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ForbiddenError, NotFoundError, ValidationError
from app.core.logging import get_logger
from app.models.property_model import ListingType, Property, PropertyStatus
from app.schemas.property_schema import (
    AddressSchema,
    PropertyForRentalCreate,
    PropertyForSaleCreate,
    PropertyUpdate,
)

logger = get_logger(__name__)

ADMIN_ROLE = "ADMIN"


def _apply_address(prop: Property, address: AddressSchema) -> None:
    prop.set_address(
        street=address.street,
        number=address.number,
        complement=address.complement,
        neighborhood=address.neighborhood,
        city=address.city,
        state=address.state,
        zipcode=address.zipcode,
    )


def _new_property(
    payload: Union[PropertyForSaleCreate, PropertyForRentalCreate],
    owner_id: uuid.UUID,
    listing_type: ListingType,
) -> Property:
    prop = Property(
        listing_type=listing_type,
        status=PropertyStatus.PUBLISHED,
        condo_fee=payload.condo_fee,
        property_tax=payload.property_tax,
        description=payload.description,
        property_type=payload.property_type,
        bedrooms=payload.bedrooms,
        bathrooms=payload.bathrooms,
        parking_spaces=payload.parking_spaces,
        area=payload.area,
        is_furnished=payload.is_furnished,
        accepts_pets=payload.accepts_pets,
        latitude=payload.latitude,
        longitude=payload.longitude,
        owner_id=owner_id,
    )
    _apply_address(prop, payload.address)
    return prop


async def get_property(db: AsyncSession, property_id: uuid.UUID) -> Property:
    prop = (await db.execute(select(Property).where(Property.id == property_id))).scalar_one_or_none()
    if prop is None:
        raise NotFoundError("Property", property_id)
    return prop


async def create_property_for_sale(
    db: AsyncSession,
    payload: PropertyForSaleCreate,
    owner_id: uuid.UUID,
) -> Property:
    prop = _new_property(payload, owner_id, ListingType.SALE)
    prop.sale_price = payload.sale_price
    prop.rent_price = None
    db.add(prop)
    await db.flush()
    await db.refresh(prop)
    logger.info("Sale property created", extra={"property_id": prop.id, "user_id": owner_id})
    return prop


async def create_property_for_rental(
    db: AsyncSession,
    payload: PropertyForRentalCreate,
    owner_id: uuid.UUID,
) -> Property:
    prop = _new_property(payload, owner_id, ListingType.RENT)
    prop.rent_price = payload.rent_price
    prop.sale_price = None
    db.add(prop)
    await db.flush()
    await db.refresh(prop)
    logger.info("Rental property created", extra={"property_id": prop.id, "user_id": owner_id})
    return prop


def ensure_can_modify(prop: Property, user_id: uuid.UUID, roles: list[str]) -> None:
    """Only the owner or an ADMIN may change or remove a property."""
    if prop.owner_id != user_id and ADMIN_ROLE not in roles:
        raise ForbiddenError("You are not allowed to modify this property")


async def update_property(
    db: AsyncSession,
    property_id: uuid.UUID,
    payload: PropertyUpdate,
    user_id: uuid.UUID,
    roles: Optional[list[str]] = None,
) -> Property:
    """Replace the mutable fields of a property; listing type and owner never change."""
    prop = await get_property(db, property_id)
    ensure_can_modify(prop, user_id, roles or [])

    if prop.listing_type == ListingType.SALE:
        if payload.sale_price is None:
            raise ValidationError("salePrice: Sale price is required for sale listings")
        prop.sale_price = payload.sale_price
        prop.rent_price = None
    else:
        if payload.rent_price is None:
            raise ValidationError("rentPrice: Rent price is required for rental listings")
        prop.rent_price = payload.rent_price
        prop.sale_price = None

    prop.description = payload.description
    prop.property_type = payload.property_type
    prop.bedrooms = payload.bedrooms
    prop.bathrooms = payload.bathrooms
    prop.parking_spaces = payload.parking_spaces
    prop.area = payload.area
    prop.is_furnished = payload.is_furnished
    prop.accepts_pets = payload.accepts_pets
    prop.condo_fee = payload.condo_fee
    prop.property_tax = payload.property_tax
    prop.latitude = payload.latitude
    prop.longitude = payload.longitude
    if payload.status is not None:
        prop.status = payload.status
    if payload.address is not None:
        _apply_address(prop, payload.address)

    await db.flush()
    await db.refresh(prop)
    logger.info("Property updated", extra={"property_id": prop.id, "user_id": user_id})
    return prop


async def delete_property(
    db: AsyncSession,
    property_id: uuid.UUID,
    user_id: uuid.UUID,
    roles: Optional[list[str]] = None,
) -> None:
    prop = await get_property(db, property_id)
    ensure_can_modify(prop, user_id, roles or [])
    await db.delete(prop)
    await db.flush()
    logger.info("Property deleted", extra={"property_id": property_id, "user_id": user_id})
