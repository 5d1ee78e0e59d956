"""Session module driving analyses for the presentation layer."""

from .session import (
    AnalysisSession,
    InvalidTransitionError,
    SessionEvent,
    SessionState,
    transition,
)

__all__ = [
    "AnalysisSession",
    "SessionState",
    "SessionEvent",
    "InvalidTransitionError",
    "transition",
]
