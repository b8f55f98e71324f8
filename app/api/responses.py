# app/api/responses.py
from datetime import datetime, timezone
from typing import Any, Optional
from app.schemas.base_schema import ApiResponse

DEFAULT_SUCCESS_MESSAGE = "Operation completed successfully"


def ok(data: Any, message: Optional[str] = None) -> ApiResponse:
    """Wrap a successful response in the standard ApiResponse envelope."""
    return ApiResponse(
        success=True,
        message=message or DEFAULT_SUCCESS_MESSAGE,
        data=data,
        timestamp=datetime.now(timezone.utc),
    )
