"""Scoped logging context backed by contextvars.

Fields pushed here (resource_type, request_url, ...) are attached to every log
record emitted inside the scope by ContextualFilter. contextvars keeps
concurrent normalization calls from seeing each other's fields.
"""

from contextvars import ContextVar, Token
from typing import Any, Dict, Optional

_log_context: ContextVar[Dict[str, Any]] = ContextVar("resource_normalizer_log_context", default={})


def get_log_context() -> Dict[str, Any]:
    """Return a copy of the active logging context."""
    return dict(_log_context.get())


def push_log_context(**fields: Any) -> Token:
    """Merge fields into the active context.

    Returns:
        Token for pop_log_context() to restore the previous context
    """
    return _log_context.set({**_log_context.get(), **fields})


def pop_log_context(token: Token) -> None:
    """Restore the context captured by push_log_context()."""
    _log_context.reset(token)


def clear_log_context() -> None:
    """Drop every context field. Mostly useful in tests."""
    _log_context.set({})


class log_context:
    """Context manager that scopes logging fields to a block.

    Example:
        >>> with log_context(resource_type="article", request_url="/api/articles"):
        ...     logger.info("Normalizing")  # record carries both fields
    """

    def __init__(self, **fields: Any):
        self.fields = fields
        self.token: Optional[Token] = None

    def __enter__(self):
        self.token = push_log_context(**self.fields)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.token is not None:
            pop_log_context(self.token)
            self.token = None
        return False
