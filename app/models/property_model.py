"""Property SQLAlchemy model — a real estate listing for rent or sale."""
import enum
import uuid
from decimal import Decimal
from typing import Optional

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Enum,
    Float,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base, EntityColumns


class PropertyType(str, enum.Enum):
    APARTMENT = "APARTMENT"
    HOUSE = "HOUSE"
    STUDIO = "STUDIO"
    KITNET = "KITNET"
    COMMERCIAL = "COMMERCIAL"


class ListingType(str, enum.Enum):
    RENT = "RENT"
    SALE = "SALE"


class PropertyStatus(str, enum.Enum):
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    PAUSED = "PAUSED"


def _enum_column(enum_cls: type[enum.Enum]) -> Enum:
    return Enum(enum_cls, native_enum=False, length=20, validate_strings=True)


def format_address(
    street: Optional[str],
    number: Optional[str],
    neighborhood: Optional[str],
    city: Optional[str],
    state: Optional[str],
    zipcode: Optional[str],
) -> str:
    """Human readable address, e.g. ``Rua A 10, Centro, Campinas - SP, 13010000``."""
    return ", ".join([
        f"{street or ''} {number or ''}".strip(),
        neighborhood or "",
        f"{city or ''} - {state or ''}",
        zipcode or "",
    ])


class Property(EntityColumns, Base):
    __tablename__ = "properties"

    # Financial: only the price matching listing_type is set
    rent_price: Mapped[Optional[Decimal]] = mapped_column(Numeric(14, 2))
    sale_price: Mapped[Optional[Decimal]] = mapped_column(Numeric(14, 2))
    condo_fee: Mapped[Optional[Decimal]] = mapped_column(Numeric(14, 2))
    property_tax: Mapped[Optional[Decimal]] = mapped_column(Numeric(14, 2), comment="IPTU")

    description: Mapped[Optional[str]] = mapped_column(String(2000))

    property_type: Mapped[PropertyType] = mapped_column(_enum_column(PropertyType))
    listing_type: Mapped[ListingType] = mapped_column(_enum_column(ListingType))
    status: Mapped[PropertyStatus] = mapped_column(
        _enum_column(PropertyStatus), default=PropertyStatus.PUBLISHED
    )

    bedrooms: Mapped[int] = mapped_column(Integer)
    bathrooms: Mapped[int] = mapped_column(Integer)
    parking_spaces: Mapped[int] = mapped_column(Integer)
    area: Mapped[Decimal] = mapped_column(Numeric(12, 2), comment="m²")
    is_furnished: Mapped[bool] = mapped_column(Boolean)
    accepts_pets: Mapped[bool] = mapped_column(Boolean)

    # Embedded address
    addr_street: Mapped[Optional[str]] = mapped_column(String(255))
    addr_number: Mapped[Optional[str]] = mapped_column(String(20))
    addr_complement: Mapped[Optional[str]] = mapped_column(String(255))
    addr_neighborhood: Mapped[Optional[str]] = mapped_column(String(255))
    addr_city: Mapped[Optional[str]] = mapped_column(String(255))
    addr_state: Mapped[Optional[str]] = mapped_column(String(2), comment="SP, RJ...")
    addr_zipcode: Mapped[Optional[str]] = mapped_column(String(8), comment="digits only, e.g. 01310930")
    addr_formatted: Mapped[Optional[str]] = mapped_column(String(300))

    latitude: Mapped[Optional[float]] = mapped_column(Float)
    longitude: Mapped[Optional[float]] = mapped_column(Float)

    # Owner is set once at creation; join users explicitly when needed
    owner_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id"))

    __table_args__ = (
        Index("ix_properties_addr_city", "addr_city"),
        Index("ix_properties_addr_state", "addr_state"),
        Index("ix_properties_listing_type", "listing_type"),
        Index("ix_properties_property_type", "property_type"),
        Index("ix_properties_created_at", "created_at"),
        Index("ix_properties_owner_id", "owner_id"),
        CheckConstraint(
            "(listing_type = 'SALE' AND sale_price IS NOT NULL AND rent_price IS NULL)"
            " OR (listing_type = 'RENT' AND rent_price IS NOT NULL AND sale_price IS NULL)",
            name="ck_properties_price_matches_listing_type",
        ),
    )

    def set_address(
        self,
        street: Optional[str],
        number: Optional[str],
        complement: Optional[str],
        neighborhood: Optional[str],
        city: Optional[str],
        state: Optional[str],
        zipcode: Optional[str],
    ) -> None:
        """Replace the embedded address and re-derive ``addr_formatted``."""
        self.addr_street = street
        self.addr_number = number
        self.addr_complement = complement
        self.addr_neighborhood = neighborhood
        self.addr_city = city
        self.addr_state = state
        self.addr_zipcode = zipcode
        self.addr_formatted = format_address(street, number, neighborhood, city, state, zipcode)

    def __repr__(self) -> str:
        return f"<Property(id={self.id}, listing_type={self.listing_type}, city='{self.addr_city}')>"
