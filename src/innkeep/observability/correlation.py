"""Correlation ID tracking for requests and background tasks."""

import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator

# Empty string means "no correlation ID bound".
correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="")

CORRELATION_ID_HEADER = "X-Correlation-ID"


def generate_correlation_id() -> str:
    return str(uuid.uuid4())


def get_correlation_id() -> str:
    return correlation_id_var.get()


@contextmanager
def correlation_scope(cid: str | None = None) -> Iterator[str]:
    """Bind a correlation ID for the enclosed block.

    Generates a new ID when cid is empty. The previous value is restored on
    exit, also when the block raises.
    """
    cid = cid or generate_correlation_id()
    token = correlation_id_var.set(cid)
    try:
        yield cid
    finally:
        correlation_id_var.reset(token)
