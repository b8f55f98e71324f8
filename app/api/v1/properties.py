"""Properties API router — CRUD, filtered listing and AI search.
/api/v1/properties"""
from uuid import UUID

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import AuthenticatedUser, PageParams, get_db, page_params, property_filter_params
from app.api.responses import ok
from app.core.logging import get_logger
from app.schemas.base_schema import ApiResponse
from app.schemas.property_schema import (
    PagedResponse,
    PropertyFilter,
    PropertyForRentalCreate,
    PropertyForSaleCreate,
    PropertyRead,
    PropertyUpdate,
    SemanticSearchRequest,
    SemanticSearchResponse,
)
from app.services import property_service
from app.services.property_filter_service import active_criteria, build_property_predicate
from app.services.property_query_service import paginate_properties
from app.services.semantic_search_service import extract_filter

logger = get_logger(__name__)

router = APIRouter()

CLIENT_CLOSED_REQUEST = 499


@router.get("", response_model=ApiResponse[PagedResponse[PropertyRead]])
async def list_properties(
    db: AsyncSession = Depends(get_db),
    paging: PageParams = Depends(page_params),
    criteria: PropertyFilter = Depends(property_filter_params),
):
    """List properties, newest first, narrowed by any filter given as query params."""
    result = await paginate_properties(db, build_property_predicate(criteria), paging.page, paging.size)
    return ok(result, "Properties retrieved successfully")


@router.post("/search", response_model=ApiResponse[SemanticSearchResponse])
async def semantic_search(
    payload: SemanticSearchRequest,
    request: Request,
    db: AsyncSession = Depends(get_db),
    paging: PageParams = Depends(page_params),
):
    """Translate free text into a filter with the AI model, then run it.

    The session does not check out a connection until the first query, so
    nothing is held while the model call is in flight.
    """
    criteria = await extract_filter(payload.text)

    if await request.is_disconnected():
        logger.info("Client disconnected during AI search, abandoning request",
                    extra={"path": request.url.path})
        return Response(status_code=CLIENT_CLOSED_REQUEST)

    logger.info("AI search applying criteria %s", active_criteria(criteria))
    results = await paginate_properties(db, build_property_predicate(criteria), paging.page, paging.size)
    return ok(
        SemanticSearchResponse(filter=criteria, results=results),
        "AI search completed successfully",
    )


@router.get("/{property_id}", response_model=ApiResponse[PropertyRead])
async def get_property(property_id: UUID, db: AsyncSession = Depends(get_db)):
    prop = await property_service.get_property(db, property_id)
    return ok(PropertyRead.from_model(prop), "Property retrieved successfully")


@router.post("/sale", response_model=ApiResponse[PropertyRead], status_code=201)
async def create_property_for_sale(
    payload: PropertyForSaleCreate,
    user: AuthenticatedUser,
    db: AsyncSession = Depends(get_db),
):
    prop = await property_service.create_property_for_sale(db, payload, user.id)
    return ok(PropertyRead.from_model(prop), "Property created successfully")


@router.post("/rental", response_model=ApiResponse[PropertyRead], status_code=201)
async def create_property_for_rental(
    payload: PropertyForRentalCreate,
    user: AuthenticatedUser,
    db: AsyncSession = Depends(get_db),
):
    prop = await property_service.create_property_for_rental(db, payload, user.id)
    return ok(PropertyRead.from_model(prop), "Property created successfully")


@router.put("/{property_id}", response_model=ApiResponse[PropertyRead])
async def update_property(
    property_id: UUID,
    payload: PropertyUpdate,
    user: AuthenticatedUser,
    db: AsyncSession = Depends(get_db),
):
    """Replace a property's mutable fields (owner or ADMIN only)."""
    prop = await property_service.update_property(db, property_id, payload, user.id, user.roles)
    return ok(PropertyRead.from_model(prop), "Property updated successfully")


@router.delete("/{property_id}", response_model=ApiResponse[None])
async def delete_property(
    property_id: UUID,
    user: AuthenticatedUser,
    db: AsyncSession = Depends(get_db),
):
    """Hard delete (owner or ADMIN only)."""
    await property_service.delete_property(db, property_id, user.id, user.roles)
    return ok(None, "Property deleted successfully")
