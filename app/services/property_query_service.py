"""Paginated, read-only property queries."""
import math

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from app.config import settings
from app.core.logging import get_logger
from app.models.property_model import Property
from app.schemas.property_schema import PagedResponse, PropertyRead

logger = get_logger(__name__)


def page_metadata(total: int, page: int, size: int) -> dict:
    total_pages = math.ceil(total / size) if total > 0 else 0
    return {
        "current_page": page,
        "page_size": size,
        "total_elements": total,
        "total_pages": total_pages,
        "has_next": page + 1 < total_pages,
    }


async def paginate_properties(
    db: AsyncSession,
    predicate: ColumnElement[bool],
    page: int = 0,
    size: int = settings.default_page_size,
) -> PagedResponse[PropertyRead]:
    """Return page ``page`` (0-based) of properties matching ``predicate``.

    Newest first; ties on ``created_at`` break on ``id`` so repeated calls on
    unchanged data return the same order.
    """
    if page < 0:
        page = 0
    size = max(1, min(size, settings.max_page_size))

    total: int = (await db.execute(
        select(func.count(Property.id)).where(predicate)
    )).scalar_one()

    query = (
        select(Property)
        .where(predicate)
        .order_by(Property.created_at.desc(), Property.id.desc())
        .offset(page * size)
        .limit(size)
    )
    properties = (await db.execute(query)).scalars().all()

    logger.debug("Paged query returned %d of %d properties (page=%d, size=%d)",
                 len(properties), total, page, size)

    return PagedResponse[PropertyRead](
        items=[PropertyRead.from_model(p) for p in properties],
        **page_metadata(total, page, size),
    )
