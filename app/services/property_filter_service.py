"""Turns a sparse ``PropertyFilter`` into one SQL boolean expression.

Each criterion is a pure function of its value. Criteria whose value is
``None`` are skipped entirely; the remaining fragments are ANDed onto a
``true()`` base, so an empty filter matches every row.
"""
from typing import Any, Callable, List, Tuple

from sqlalchemy import and_, or_, true
from sqlalchemy.sql.elements import ColumnElement

from app.models.property_model import Property
from app.schemas.property_schema import PropertyFilter

Criterion = Callable[[Any], ColumnElement[bool]]


def _max_price(value) -> ColumnElement[bool]:
    # rent and sale listings are compared against whichever price they carry
    return or_(
        and_(Property.sale_price.isnot(None), Property.sale_price <= value),
        and_(Property.rent_price.isnot(None), Property.rent_price <= value),
    )


CRITERIA: List[Tuple[str, Criterion]] = [
    ("city", lambda v: Property.addr_city == v),
    ("state", lambda v: Property.addr_state == v),
    ("max_price", _max_price),
    ("property_type", lambda v: Property.property_type == v),
    ("listing_type", lambda v: Property.listing_type == v),
    ("min_bedrooms", lambda v: Property.bedrooms >= v),
    ("min_bathrooms", lambda v: Property.bathrooms >= v),
    ("min_parking_spaces", lambda v: Property.parking_spaces >= v),
    ("min_area", lambda v: Property.area >= v),
    ("max_area", lambda v: Property.area <= v),
    ("is_furnished", lambda v: Property.is_furnished == v),
    ("accepts_pets", lambda v: Property.accepts_pets == v),
]


def active_criteria(criteria: PropertyFilter) -> List[str]:
    """Names of the filter fields that will constrain the query, in order."""
    return [name for name, _ in CRITERIA if getattr(criteria, name) is not None]


def build_property_predicate(criteria: PropertyFilter) -> ColumnElement[bool]:
    predicate: ColumnElement[bool] = true()
    for name, criterion in CRITERIA:
        value = getattr(criteria, name)
        if value is None:
            continue
        predicate = and_(predicate, criterion(value))
    return predicate
