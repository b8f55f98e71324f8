"""Error kinds map onto HTTP statuses in one place."""
import pytest
from starlette.requests import Request

from app.api.errors import _trace_id, status_for
from app.core.exceptions import (
    AIServiceError,
    DuplicateError,
    ErrorKind,
    ForbiddenError,
    InvalidResponseError,
    MalformedFilterError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from app.core.logging import correlation_id_var


@pytest.mark.parametrize("exc, status", [
    (NotFoundError("Property", "abc"), 404),
    (ValidationError("bad"), 400),
    (DuplicateError("dup"), 409),
    (MalformedFilterError("bad json"), 502),
    (InvalidResponseError("empty"), 502),
    (UnauthorizedError("no"), 401),
    (ForbiddenError("no"), 403),
    (AIServiceError("boom"), 500),
])
def test_status_for_kind(exc, status):
    assert status_for(exc.kind) == status


def test_unexpected_kind():
    assert status_for(ErrorKind.UNEXPECTED) == 500


def test_not_found_message():
    assert NotFoundError("Property", "abc").message == "Property abc not found"


def _bare_request() -> Request:
    return Request({"type": "http", "method": "GET", "path": "/", "headers": [], "query_string": b""})


def test_trace_id_prefers_request_state():
    request = _bare_request()
    request.state.trace_id = "from-middleware"
    token = correlation_id_var.set("from-context")
    try:
        assert _trace_id(request) == "from-middleware"
    finally:
        correlation_id_var.reset(token)


def test_trace_id_falls_back_to_logging_context():
    token = correlation_id_var.set("from-context")
    try:
        assert _trace_id(_bare_request()) == "from-context"
    finally:
        correlation_id_var.reset(token)


def test_trace_id_absent():
    token = correlation_id_var.set("")
    try:
        assert _trace_id(_bare_request()) is None
    finally:
        correlation_id_var.reset(token)
