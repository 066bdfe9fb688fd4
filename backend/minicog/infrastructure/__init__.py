"""Infrastructure layer - cross-cutting support for external integrations."""

from .retry import (
    DEFAULT_INITIAL_WAIT,
    DEFAULT_MAX_ATTEMPTS,
    backoff_delay,
    retry_operation,
)

__all__ = [
    "DEFAULT_INITIAL_WAIT",
    "DEFAULT_MAX_ATTEMPTS",
    "backoff_delay",
    "retry_operation",
]
