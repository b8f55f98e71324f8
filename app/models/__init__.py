"""SQLAlchemy models for the real estate backend."""
from app.models.property_model import ListingType, Property, PropertyStatus, PropertyType
from app.models.user_model import Role, User, user_roles

__all__ = [
    "ListingType",
    "Property",
    "PropertyStatus",
    "PropertyType",
    "Role",
    "User",
    "user_roles",
]
