"""Small helpers shared by the client modules."""

from __future__ import annotations

import contextvars
import json
import secrets
from contextlib import contextmanager
from typing import Any, Iterator

_AUTH_CONTEXT_VALUE = "1"
_auth_context: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "auth_context", default=None
)


def generate_random_string(length: int) -> str:
    """Return a random lower-case hex string built from length // 2 random bytes."""
    return bytes_to_hex(secrets.token_bytes(length // 2))


def bytes_to_hex(data: bytes) -> str:
    """Return the lower-case hexadecimal form of data."""
    return bytes(data).hex()


def must_to_json(obj: Any) -> str:
    """Serialise obj as compact JSON, or return "{}" if it cannot be serialised."""
    try:
        return json.dumps(obj, separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError):
        return "{}"


@contextmanager
def auth_context() -> Iterator[None]:
    """Mark the enclosed code as running on behalf of an authentication request."""
    token = _auth_context.set(_AUTH_CONTEXT_VALUE)
    try:
        yield
    finally:
        _auth_context.reset(token)


def is_auth_context() -> bool:
    """Tell whether the current code runs inside auth_context()."""
    return _auth_context.get() == _AUTH_CONTEXT_VALUE