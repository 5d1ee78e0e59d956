"""Tests for the analysis session state machine."""

from unittest.mock import MagicMock

import pytest

from docstats.analyzer import (
    DOCXExtractor,
    DocumentAnalyzer,
    MalformedDocumentError,
    PDFContentProvider,
    PDFExtractor,
    Statistics,
    SupportedFormat,
    UnsupportedFormatError,
)
from docstats.session import (
    AnalysisSession,
    InvalidTransitionError,
    SessionEvent,
    SessionState,
    transition,
)


class TestTransition:
    """Tests for the transition function."""

    @pytest.mark.parametrize(
        "state, event, expected",
        [
            (SessionState.IDLE, SessionEvent.START, SessionState.LOADING),
            (SessionState.IDLE, SessionEvent.RESET, SessionState.IDLE),
            (SessionState.LOADING, SessionEvent.SUCCEED, SessionState.RESULT),
            (SessionState.LOADING, SessionEvent.FAIL, SessionState.ERROR),
            (SessionState.LOADING, SessionEvent.RESET, SessionState.LOADING),
            (SessionState.RESULT, SessionEvent.START, SessionState.LOADING),
            (SessionState.RESULT, SessionEvent.RESET, SessionState.IDLE),
            (SessionState.ERROR, SessionEvent.START, SessionState.LOADING),
            (SessionState.ERROR, SessionEvent.RESET, SessionState.IDLE),
        ],
    )
    def test_defined_transitions(self, state, event, expected):
        assert transition(state, event) is expected

    @pytest.mark.parametrize(
        "state, event",
        [
            (SessionState.LOADING, SessionEvent.START),
            (SessionState.IDLE, SessionEvent.SUCCEED),
            (SessionState.IDLE, SessionEvent.FAIL),
            (SessionState.RESULT, SessionEvent.SUCCEED),
            (SessionState.ERROR, SessionEvent.FAIL),
        ],
    )
    def test_undefined_transitions_rejected(self, state, event):
        with pytest.raises(InvalidTransitionError):
            transition(state, event)


def _analyzer_returning(stats=None, error=None):
    analyzer = MagicMock(spec=DocumentAnalyzer)
    if error is not None:
        analyzer.analyze.side_effect = error
    else:
        analyzer.analyze.return_value = stats
    return analyzer


class TestAnalysisSession:
    """Tests for AnalysisSession."""

    def test_initial_state(self):
        session = AnalysisSession(_analyzer_returning(Statistics()))

        assert session.state is SessionState.IDLE
        assert session.result is None
        assert session.last_error is None
        assert not session.is_busy

    def test_success(self):
        stats = Statistics(char_count=5, char_count_no_space=5, word_count=1)
        session = AnalysisSession(_analyzer_returning(stats))

        result = session.start(b"abc", "doc.pdf")

        assert session.state is SessionState.RESULT
        assert result is session.result
        assert result.file_name == "doc.pdf"
        assert result.file_size_bytes == 3
        assert result.statistics == stats

    def test_states_seen_by_listener(self):
        seen = []
        session = AnalysisSession(
            _analyzer_returning(Statistics()),
            on_state_change=lambda old, new: seen.append((old, new)),
        )
        session.start(b"abc", "doc.pdf")

        assert seen == [
            (SessionState.IDLE, SessionState.LOADING),
            (SessionState.LOADING, SessionState.RESULT),
        ]

    def test_failure_passes_through_error_to_idle(self):
        """Test that a failure is reported and the session is ready for a retry."""
        seen = []
        error = MalformedDocumentError(SupportedFormat.PDF, "broken")
        session = AnalysisSession(
            _analyzer_returning(error=error),
            on_state_change=lambda old, new: seen.append(new),
        )

        assert session.start(b"abc", "doc.pdf") is None

        assert seen == [SessionState.LOADING, SessionState.ERROR, SessionState.IDLE]
        assert session.state is SessionState.IDLE
        assert session.last_error is error
        assert session.result is None

    def test_unsupported_format_error(self):
        analyzer = DocumentAnalyzer(
            extractors={fmt: MagicMock() for fmt in SupportedFormat}
        )
        session = AnalysisSession(analyzer)

        session.start(b"abc", "image.png")

        assert isinstance(session.last_error, UnsupportedFormatError)

    def test_new_analysis_replaces_result(self):
        analyzer = _analyzer_returning(Statistics(word_count=1))
        session = AnalysisSession(analyzer)
        session.start(b"a", "first.pdf")

        analyzer.analyze.return_value = Statistics(word_count=2)
        result = session.start(b"bb", "second.docx")

        assert session.result is result
        assert result.file_name == "second.docx"
        assert result.statistics.word_count == 2

    def test_failure_clears_previous_result(self):
        analyzer = _analyzer_returning(Statistics(word_count=1))
        session = AnalysisSession(analyzer)
        session.start(b"a", "first.pdf")

        analyzer.analyze.side_effect = MalformedDocumentError(SupportedFormat.DOCX)
        session.start(b"b", "second.docx")

        assert session.result is None
        assert session.state is SessionState.IDLE

    def test_reset_after_result(self):
        """Test that reset returns to IDLE without retained statistics."""
        session = AnalysisSession(_analyzer_returning(Statistics(word_count=2)))
        session.start(b"abc", "test.pdf")

        session.reset()

        assert session.state is SessionState.IDLE
        assert session.result is None

    def test_reset_clears_error(self):
        session = AnalysisSession(
            _analyzer_returning(error=MalformedDocumentError(SupportedFormat.PDF))
        )
        session.start(b"abc", "doc.pdf")

        session.reset()

        assert session.last_error is None

    def test_reset_ignored_while_loading(self):
        session = AnalysisSession(_analyzer_returning(Statistics()))
        session.state = SessionState.LOADING

        session.reset()

        assert session.state is SessionState.LOADING

    def test_start_while_loading_rejected(self):
        session = AnalysisSession(_analyzer_returning(Statistics()))
        session.state = SessionState.LOADING

        with pytest.raises(InvalidTransitionError):
            session.start(b"abc", "doc.pdf")

    def test_cancel_without_analysis(self):
        session = AnalysisSession(_analyzer_returning(Statistics()))
        assert session.cancel() is False

    def test_cancel_during_analysis(self):
        """Test that cancel signals the token passed to the analyzer."""
        session = AnalysisSession(MagicMock(spec=DocumentAnalyzer))
        captured = {}

        def analyze(file_bytes, file_name, cancel_token):
            captured["requested"] = session.cancel()
            cancel_token.raise_if_cancelled()
            return Statistics()

        session.analyzer.analyze.side_effect = analyze
        session.start(b"abc", "doc.pdf")

        assert captured["requested"] is True
        assert session.state is SessionState.IDLE
        assert session.last_error is not None


class TestEndToEndSession:
    """Session driving real documents."""

    def test_minimal_pdf_then_reset(self, pdf_factory):
        session = AnalysisSession()
        result = session.start(pdf_factory(["Test Document"]), "test.pdf")

        assert result.statistics.word_count == 2
        assert result.statistics.image_count == 0

        session.reset()
        assert session.state is SessionState.IDLE
        assert session.result is None


class TestUnexpectedFailures:
    """Session recovery when a backend fails outside the error taxonomy."""

    def test_backend_runtime_error_is_malformed_and_retryable(self, fake_container_reader):
        """Test that a crashing PDF backend leaves the session ready for a retry."""

        class CrashingProvider(PDFContentProvider):
            def open_document(self, data):
                raise RuntimeError("backend crashed")

        analyzer = DocumentAnalyzer(
            extractors={
                SupportedFormat.PDF: PDFExtractor(CrashingProvider()),
                SupportedFormat.DOCX: DOCXExtractor(fake_container_reader(text="one two")),
            }
        )
        session = AnalysisSession(analyzer)

        assert session.start(b"x", "a.pdf") is None
        assert session.state is SessionState.IDLE
        assert isinstance(session.last_error, MalformedDocumentError)

        session.reset()
        assert session.state is SessionState.IDLE

        result = session.start(b"PK", "b.docx")
        assert result.statistics.word_count == 2
        assert session.state is SessionState.RESULT

    def test_analyzer_crash_reraised_after_leaving_loading(self):
        """Test that errors outside AnalysisError propagate but never strand the session."""
        seen = []
        session = AnalysisSession(
            _analyzer_returning(error=RuntimeError("boom")),
            on_state_change=lambda old, new: seen.append(new),
        )

        with pytest.raises(RuntimeError):
            session.start(b"x", "a.pdf")

        assert session.state is SessionState.IDLE
        assert seen == [SessionState.LOADING, SessionState.ERROR, SessionState.IDLE]

        session.analyzer.analyze.side_effect = None
        session.analyzer.analyze.return_value = Statistics(word_count=1)
        assert session.start(b"x", "a.pdf").statistics.word_count == 1
