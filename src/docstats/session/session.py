"""Analysis session state machine."""

from enum import Enum
from typing import Callable, Optional

from ..analyzer import (
    AnalysisError,
    AnalysisResult,
    CancellationToken,
    DocumentAnalyzer,
)
from ..utils.logging import get_logger

logger = get_logger(__name__)


class SessionState(str, Enum):
    """Lifecycle states of an analysis session."""

    IDLE = "idle"
    LOADING = "loading"
    RESULT = "result"
    ERROR = "error"


class SessionEvent(str, Enum):
    """Inputs that drive session transitions."""

    START = "start"
    SUCCEED = "succeed"
    FAIL = "fail"
    RESET = "reset"


class InvalidTransitionError(Exception):
    """Raised when an event is not accepted in the current state."""

    def __init__(self, state: SessionState, event: SessionEvent):
        self.state = state
        self.event = event
        super().__init__(f"Cannot apply '{event.value}' while session is '{state.value}'")


_TRANSITIONS: dict[tuple[SessionState, SessionEvent], SessionState] = {
    (SessionState.IDLE, SessionEvent.START): SessionState.LOADING,
    (SessionState.IDLE, SessionEvent.RESET): SessionState.IDLE,
    (SessionState.LOADING, SessionEvent.SUCCEED): SessionState.RESULT,
    (SessionState.LOADING, SessionEvent.FAIL): SessionState.ERROR,
    # Reset is ignored while an analysis is in flight
    (SessionState.LOADING, SessionEvent.RESET): SessionState.LOADING,
    (SessionState.RESULT, SessionEvent.START): SessionState.LOADING,
    (SessionState.RESULT, SessionEvent.RESET): SessionState.IDLE,
    (SessionState.ERROR, SessionEvent.START): SessionState.LOADING,
    (SessionState.ERROR, SessionEvent.RESET): SessionState.IDLE,
}


def transition(state: SessionState, event: SessionEvent) -> SessionState:
    """
    Compute the next session state.

    Args:
        state: Current state
        event: Incoming event

    Returns:
        The next state

    Raises:
        InvalidTransitionError: If the event is not defined for the state
    """
    try:
        return _TRANSITIONS[(state, event)]
    except KeyError:
        raise InvalidTransitionError(state, event) from None


StateListener = Callable[[SessionState, SessionState], None]


class AnalysisSession:
    """
    Drives one analysis at a time and holds its outcome for display.

    A failed analysis passes through ERROR and then returns to IDLE, keeping
    the error available in ``last_error`` until the next start or reset.
    """

    def __init__(
        self,
        analyzer: Optional[DocumentAnalyzer] = None,
        on_state_change: Optional[StateListener] = None,
    ):
        self.analyzer = analyzer or DocumentAnalyzer()
        self.on_state_change = on_state_change
        self.state = SessionState.IDLE
        self.result: AnalysisResult | None = None
        self.last_error: AnalysisError | None = None
        self._cancel_token: CancellationToken | None = None

    def _apply(self, event: SessionEvent):
        previous = self.state
        self.state = transition(previous, event)
        if self.state != previous:
            logger.debug(f"Session {previous.value} -> {self.state.value}")
            if self.on_state_change is not None:
                self.on_state_change(previous, self.state)

    def start(self, file_bytes: bytes, file_name: str) -> AnalysisResult | None:
        """
        Run an analysis, replacing any previous result or error.

        Args:
            file_bytes: Raw document bytes
            file_name: Name of the document

        Returns:
            The new AnalysisResult, or None if the analysis failed

        Raises:
            InvalidTransitionError: If an analysis is already in flight
            Exception: Unexpected failures are re-raised after the session
                returns to IDLE
        """
        self._apply(SessionEvent.START)
        self.result = None
        self.last_error = None
        self._cancel_token = CancellationToken()

        try:
            statistics = self.analyzer.analyze(file_bytes, file_name, self._cancel_token)
        except AnalysisError as e:
            self.last_error = e
            self._cancel_token = None
            self._apply(SessionEvent.FAIL)
            self._apply(SessionEvent.RESET)
            return None
        except Exception:
            self._cancel_token = None
            self._apply(SessionEvent.FAIL)
            self._apply(SessionEvent.RESET)
            raise

        self._cancel_token = None
        self.result = AnalysisResult(
            file_name=file_name,
            file_size_bytes=len(file_bytes),
            statistics=statistics,
        )
        self._apply(SessionEvent.SUCCEED)
        return self.result

    def cancel(self) -> bool:
        """Request cancellation of the in-flight analysis. Returns True if one was running."""
        if self.state is SessionState.LOADING and self._cancel_token is not None:
            self._cancel_token.cancel()
            return True
        return False

    def reset(self):
        """Return to IDLE, discarding the last result and error. Ignored while loading."""
        self._apply(SessionEvent.RESET)
        if self.state is SessionState.LOADING:
            logger.debug("Reset ignored while an analysis is loading")
            return
        self.result = None
        self.last_error = None

    @property
    def is_busy(self) -> bool:
        return self.state is SessionState.LOADING
