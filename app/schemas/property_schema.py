"""Pydantic schemas for Property API requests and responses."""
from datetime import datetime
from decimal import Decimal
from typing import Generic, List, Optional, TypeVar
from uuid import UUID

from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.models.property_model import ListingType, Property, PropertyStatus, PropertyType
from app.schemas.base_schema import CamelModel

T = TypeVar("T")


class AddressSchema(CamelModel):
    street: str = Field(..., min_length=1, max_length=255)
    number: str = Field(..., min_length=1, max_length=20)
    complement: Optional[str] = Field(None, max_length=255)
    neighborhood: str = Field(..., min_length=1, max_length=255)
    city: str = Field(..., min_length=1, max_length=255)
    state: str = Field(..., pattern=r"^[A-Z]{2}$", description="Two-letter state code, e.g. SP")
    zipcode: str = Field(..., pattern=r"^\d{1,8}$", description="Digits only, e.g. 01310930")


class AddressRead(CamelModel):
    street: Optional[str] = None
    number: Optional[str] = None
    complement: Optional[str] = None
    neighborhood: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zipcode: Optional[str] = None
    formatted_address: Optional[str] = None


class PropertyBase(CamelModel):
    """Fields shared by both creation payloads."""
    condo_fee: Decimal = Field(..., ge=0)
    property_tax: Optional[Decimal] = Field(None, ge=0)
    description: Optional[str] = Field(None, max_length=2000)
    property_type: PropertyType
    bedrooms: int = Field(..., ge=0)
    bathrooms: int = Field(..., ge=0)
    parking_spaces: int = Field(..., ge=0)
    area: Decimal = Field(..., gt=0)
    is_furnished: bool
    accepts_pets: bool
    address: AddressSchema
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)


class PropertyForSaleCreate(PropertyBase):
    sale_price: Decimal = Field(..., gt=0)


class PropertyForRentalCreate(PropertyBase):
    rent_price: Decimal = Field(..., gt=0)


class PropertyUpdate(CamelModel):
    """Generic update; the price matching the stored listing type is required."""
    rent_price: Optional[Decimal] = Field(None, gt=0)
    sale_price: Optional[Decimal] = Field(None, gt=0)
    condo_fee: Optional[Decimal] = Field(None, ge=0)
    property_tax: Optional[Decimal] = Field(None, ge=0)
    description: Optional[str] = Field(None, max_length=2000)
    property_type: PropertyType
    status: Optional[PropertyStatus] = None
    bedrooms: int = Field(..., ge=0)
    bathrooms: int = Field(..., ge=0)
    parking_spaces: int = Field(..., ge=0)
    area: Decimal = Field(..., gt=0)
    is_furnished: bool
    accepts_pets: bool
    address: Optional[AddressSchema] = None
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)


class PropertyRead(CamelModel):
    id: UUID
    created_at: datetime
    updated_at: datetime
    rent_price: Optional[Decimal] = None
    sale_price: Optional[Decimal] = None
    condo_fee: Optional[Decimal] = None
    property_tax: Optional[Decimal] = None
    description: Optional[str] = None
    property_type: PropertyType
    listing_type: ListingType
    status: Optional[PropertyStatus] = None
    bedrooms: int
    bathrooms: int
    parking_spaces: int
    area: Decimal
    is_furnished: bool
    accepts_pets: bool
    address: AddressRead
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    owner_id: UUID

    @classmethod
    def from_model(cls, prop: Property) -> "PropertyRead":
        return cls(
            id=prop.id,
            created_at=prop.created_at,
            updated_at=prop.updated_at,
            rent_price=prop.rent_price,
            sale_price=prop.sale_price,
            condo_fee=prop.condo_fee,
            property_tax=prop.property_tax,
            description=prop.description,
            property_type=prop.property_type,
            listing_type=prop.listing_type,
            status=prop.status,
            bedrooms=prop.bedrooms,
            bathrooms=prop.bathrooms,
            parking_spaces=prop.parking_spaces,
            area=prop.area,
            is_furnished=prop.is_furnished,
            accepts_pets=prop.accepts_pets,
            address=AddressRead(
                street=prop.addr_street,
                number=prop.addr_number,
                complement=prop.addr_complement,
                neighborhood=prop.addr_neighborhood,
                city=prop.addr_city,
                state=prop.addr_state,
                zipcode=prop.addr_zipcode,
                formatted_address=prop.addr_formatted,
            ),
            latitude=prop.latitude,
            longitude=prop.longitude,
            owner_id=prop.owner_id,
        )


class PropertyFilter(CamelModel):
    """Sparse search criteria; ``None`` means "no constraint" for that field.

    Unknown keys (e.g. ``minPrice`` emitted by the model) are ignored. Query
    params build it by field name; model answers are read by alias only.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    max_price: Optional[Decimal] = None
    city: Optional[str] = None
    state: Optional[str] = None
    property_type: Optional[PropertyType] = None
    listing_type: Optional[ListingType] = None
    min_bedrooms: Optional[int] = None
    min_bathrooms: Optional[int] = None
    min_parking_spaces: Optional[int] = None
    min_area: Optional[Decimal] = None
    max_area: Optional[Decimal] = None
    is_furnished: Optional[bool] = None
    accepts_pets: Optional[bool] = None


class PagedResponse(CamelModel, Generic[T]):
    """One page of results plus pagination metadata."""
    items: List[T]
    current_page: int
    page_size: int
    total_elements: int
    total_pages: int
    has_next: bool


class SemanticSearchRequest(CamelModel):
    text: str = Field(..., min_length=1, max_length=1000)


class SemanticSearchResponse(CamelModel):
    filter: PropertyFilter
    results: PagedResponse[PropertyRead]
