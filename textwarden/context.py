"""
Name: Log Context (ContextVars)

Responsibilities:
  - Carry request correlation (request id, method, path) into log records
  - Carry the chunk being analyzed so detector and parser logs name it
  - Scope chunk context to a single detection call

Collaborators:
  - middleware.py: Sets request fields at request start, clears at end
  - application.use_cases.analyze_text: Wraps each chunk in chunk_scope
  - logger.py: Reads current_log_context for enrichment

Constraints:
  - Values are strings; empty string means "unset" and is never logged
"""

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Dict, Iterator

request_id_var: ContextVar[str] = ContextVar("request_id", default="")
http_method_var: ContextVar[str] = ContextVar("http_method", default="")
http_path_var: ContextVar[str] = ContextVar("http_path", default="")

# R: Set by the dispatcher around each chunk detection
chunk_index_var: ContextVar[str] = ContextVar("chunk_index", default="")
chunk_offset_var: ContextVar[str] = ContextVar("chunk_offset", default="")

# R: Log field name -> context var
_LOG_FIELDS: Dict[str, ContextVar[str]] = {
    "request_id": request_id_var,
    "method": http_method_var,
    "path": http_path_var,
    "chunk_index": chunk_index_var,
    "chunk_offset": chunk_offset_var,
}


def current_log_context() -> Dict[str, str]:
    """R: Set fields only, keyed by their log field name."""
    return {name: value for name, var in _LOG_FIELDS.items() if (value := var.get())}


@contextmanager
def chunk_scope(index: int, origin_offset: int) -> Iterator[None]:
    """R: Tag log records emitted inside the block with the chunk position."""
    index_token = chunk_index_var.set(str(index))
    offset_token = chunk_offset_var.set(str(origin_offset))
    try:
        yield
    finally:
        chunk_offset_var.reset(offset_token)
        chunk_index_var.reset(index_token)


def clear_context() -> None:
    for var in _LOG_FIELDS.values():
        var.set("")
