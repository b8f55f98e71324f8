"""Tests for the property predicate builder, run against SQLite."""
from decimal import Decimal

import pytest
from sqlalchemy import select, true
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.property_model import ListingType, Property, PropertyType
from app.schemas.property_schema import PropertyFilter
from app.services.property_filter_service import CRITERIA, active_criteria, build_property_predicate
from tests.factories import make_property


async def _matching_ids(db: AsyncSession, criteria: PropertyFilter) -> set:
    rows = await db.execute(select(Property.id).where(build_property_predicate(criteria)))
    return set(rows.scalars().all())


class TestPredicateShape:
    def test_empty_filter_is_tautology(self):
        assert build_property_predicate(PropertyFilter()).compare(true())

    def test_criteria_cover_every_filter_field(self):
        assert [name for name, _ in CRITERIA] == [
            "city", "state", "max_price", "property_type", "listing_type",
            "min_bedrooms", "min_bathrooms", "min_parking_spaces",
            "min_area", "max_area", "is_furnished", "accepts_pets",
        ]
        assert set(PropertyFilter.model_fields) == {name for name, _ in CRITERIA}

    def test_active_criteria_skips_nulls(self):
        criteria = PropertyFilter(city="Campinas", min_bedrooms=2, is_furnished=False)
        assert active_criteria(criteria) == ["city", "min_bedrooms", "is_furnished"]


@pytest.mark.asyncio
async def test_all_null_filter_matches_everything(db_session: AsyncSession, owner):
    props = [
        make_property(owner.id, ListingType.SALE, Decimal("900000"), minutes=1),
        make_property(owner.id, ListingType.RENT, Decimal("1500"), minutes=2, is_furnished=True),
        make_property(owner.id, ListingType.RENT, Decimal("4000"), minutes=3, addr_city="Sorocaba"),
    ]
    db_session.add_all(props)
    await db_session.commit()

    assert await _matching_ids(db_session, PropertyFilter()) == {p.id for p in props}


@pytest.mark.asyncio
async def test_max_price_checks_whichever_price_is_set(db_session: AsyncSession, owner):
    sale = make_property(owner.id, ListingType.SALE, Decimal("400000"), minutes=1)
    cheap_rent = make_property(owner.id, ListingType.RENT, Decimal("2500"), minutes=2)
    pricey_rent = make_property(owner.id, ListingType.RENT, Decimal("500000"), minutes=3)
    db_session.add_all([sale, cheap_rent, pricey_rent])
    await db_session.commit()

    assert await _matching_ids(db_session, PropertyFilter(max_price=Decimal("450000"))) == {sale.id, cheap_rent.id}
    assert await _matching_ids(db_session, PropertyFilter(max_price=Decimal("400000"))) == {sale.id, cheap_rent.id}
    assert await _matching_ids(db_session, PropertyFilter(max_price=Decimal("2499.99"))) == set()
    assert await _matching_ids(db_session, PropertyFilter(max_price=Decimal("3000"))) == {cheap_rent.id}


@pytest.mark.asyncio
async def test_location_is_exact_and_case_sensitive(db_session: AsyncSession, owner):
    campinas = make_property(owner.id, minutes=1)
    rio = make_property(owner.id, minutes=2, addr_city="Rio de Janeiro", addr_state="RJ")
    db_session.add_all([campinas, rio])
    await db_session.commit()

    assert await _matching_ids(db_session, PropertyFilter(city="Campinas")) == {campinas.id}
    assert await _matching_ids(db_session, PropertyFilter(city="campinas")) == set()
    assert await _matching_ids(db_session, PropertyFilter(state="RJ")) == {rio.id}
    assert await _matching_ids(db_session, PropertyFilter(city="Campinas", state="RJ")) == set()


@pytest.mark.asyncio
async def test_counts_area_and_amenities(db_session: AsyncSession, owner):
    small = make_property(owner.id, minutes=1, bedrooms=1, bathrooms=1, parking_spaces=0, area=Decimal("35"))
    family = make_property(
        owner.id, minutes=2, bedrooms=3, bathrooms=2, parking_spaces=2, area=Decimal("120"),
        is_furnished=True, accepts_pets=True, property_type=PropertyType.HOUSE,
    )
    db_session.add_all([small, family])
    await db_session.commit()

    assert await _matching_ids(db_session, PropertyFilter(min_bedrooms=3)) == {family.id}
    assert await _matching_ids(db_session, PropertyFilter(min_bathrooms=1)) == {small.id, family.id}
    assert await _matching_ids(db_session, PropertyFilter(min_parking_spaces=1)) == {family.id}
    assert await _matching_ids(db_session, PropertyFilter(min_area=Decimal("35"))) == {small.id, family.id}
    assert await _matching_ids(db_session, PropertyFilter(max_area=Decimal("35"))) == {small.id}
    assert await _matching_ids(db_session, PropertyFilter(min_area=Decimal("50"), max_area=Decimal("100"))) == set()
    assert await _matching_ids(db_session, PropertyFilter(is_furnished=False)) == {small.id}
    assert await _matching_ids(db_session, PropertyFilter(accepts_pets=True)) == {family.id}
    assert await _matching_ids(db_session, PropertyFilter(property_type=PropertyType.HOUSE)) == {family.id}


@pytest.mark.asyncio
async def test_listing_type_combined_with_max_price(db_session: AsyncSession, owner):
    sale = make_property(owner.id, ListingType.SALE, Decimal("3000"), minutes=1)
    rent = make_property(owner.id, ListingType.RENT, Decimal("3000"), minutes=2)
    db_session.add_all([sale, rent])
    await db_session.commit()

    criteria = PropertyFilter(listing_type=ListingType.RENT, max_price=Decimal("3000"))
    assert await _matching_ids(db_session, criteria) == {rent.id}
