"""Domain entities - objects with identity."""

from .session_state import SessionState

__all__ = ["SessionState"]
