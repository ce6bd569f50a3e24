"""
Context variables shared by logging.

Two kinds of ids travel with the current task:
    request_id: set by the HTTP middleware for every API call.
    run_id:     set by a workflow run while its steps execute.

Both live in a single ContextVar holding a small dict, so asyncio tasks and
LangGraph executor threads (which copy the context) see the values bound by
their caller.

Functions:
    bind_context(**fields) -> contextmanager
    set_request_id(value) / get_request_id()
    current_context() -> dict
"""

from __future__ import annotations
import contextlib
import contextvars
from typing import Any, Dict, Iterator

_fields: contextvars.ContextVar[Dict[str, Any]] = contextvars.ContextVar(
    "log_context",
    default={},
)

@contextlib.contextmanager
def bind_context(**fields: Any) -> Iterator[None]:
    """
    Bind extra fields (e.g. run_id="...") for the duration of the block.

    None values are dropped; nested blocks see the union of outer and
    inner fields.
    """
    merged = {**_fields.get(), **{k: v for k, v in fields.items() if v is not None}}
    token = _fields.set(merged)
    try:
        yield
    finally:
        _fields.reset(token)

def current_context() -> Dict[str, Any]:
    """Return a copy of the fields bound in the current context."""
    return dict(_fields.get())

def set_request_id(value: str | None) -> None:
    """
    Set the request ID for the rest of the current context.

    Used by the HTTP middleware, where the handler runs inside the same task.
    """
    fields = dict(_fields.get())
    if value is None:
        fields.pop("request_id", None)
    else:
        fields["request_id"] = value
    _fields.set(fields)

def get_request_id() -> str | None:
    return _fields.get().get("request_id")

def get_run_id() -> str | None:
    return _fields.get().get("run_id")
