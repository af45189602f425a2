"""Per-request correlation id shared by the access log and application logs."""

import re
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator

REQUEST_ID_HEADER = "X-Request-ID"

# Caller-supplied ids are echoed into logs and headers, so keep them short and plain
_VALID_REQUEST_ID = re.compile(r"^[A-Za-z0-9._:-]{1,128}$")

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)


def resolve_request_id(incoming: str | None) -> str:
    """Reuse the caller's request id when it is well formed, else mint one.

    Args:
        incoming: Value of the ``X-Request-ID`` request header, if any

    Returns:
        The trimmed incoming id, or a new 32-character hex id
    """
    candidate = (incoming or "").strip()
    if _VALID_REQUEST_ID.match(candidate):
        return candidate
    return uuid.uuid4().hex


@contextmanager
def request_scope(request_id: str) -> Iterator[str]:
    """Bind ``request_id`` for the duration of one request.

    The previous value is restored on exit, including when the handler raises.
    """
    token = _request_id.set(request_id)
    try:
        yield request_id
    finally:
        _request_id.reset(token)


def current_request_id() -> str | None:
    """Id of the request being handled, None outside a request."""
    return _request_id.get()
