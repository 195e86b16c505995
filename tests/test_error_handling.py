"""
Tests for error classification and reporting.
"""

import pytest

from sentence_audio_builder.errors import (
    ConcatenationError, ConfigurationError, ErrorCategory, ErrorHandler, ErrorSeverity,
    FilenameParseError, ProcessingError, SequenceConsistencyError, SynthesisError,
    TranslationError,
)


@pytest.fixture
def handler():
    return ErrorHandler()


class TestErrorClassification:
    """Test that raised exceptions map to the right category and code."""

    @pytest.mark.parametrize("error, category, code", [
        (TranslationError("timeout"), ErrorCategory.TRANSLATION, "TRANS_002"),
        (TranslationError("403 Forbidden"), ErrorCategory.TRANSLATION, "TRANS_001"),
        (SynthesisError("no voice"), ErrorCategory.SYNTHESIS, "SYNTH_001"),
        (FilenameParseError("bad", ["x.ogg"]), ErrorCategory.FILENAME_PARSING, "PARSE_001"),
        (SequenceConsistencyError("dup", pair_index=2), ErrorCategory.SEQUENCE_CONSISTENCY, "SEQ_001"),
        (ConcatenationError("/tmp/t.ogg"), ErrorCategory.CONCATENATION, "CONCAT_001"),
        (ConfigurationError("bad repeats"), ErrorCategory.CONFIGURATION, "CONFIG_001"),
        (ValueError("empty sentence"), ErrorCategory.CONFIGURATION, "CONFIG_001"),
        (FileExistsError("exists"), ErrorCategory.FILE_SYSTEM, "FS_001"),
    ])
    def test_handle_exception(self, handler, error, category, code):
        processed = handler.handle_exception(error)

        assert processed.category == category
        assert processed.error_code == code
        assert processed.severity == ErrorSeverity.ERROR
        assert processed.suggested_actions

    def test_unexpected_error_is_critical(self, handler):
        processed = handler.handle_exception(KeyError("voice"))

        assert processed.error_code == "UNEXPECTED_001"
        assert processed.severity == ErrorSeverity.CRITICAL
        assert "KeyError" in processed.details

    def test_context_carries_error_details(self, handler):
        parse = handler.handle_exception(FilenameParseError("bad", ["a.ogg", "b.ogg"]), {"stage": "decode"})
        sequence = handler.handle_exception(SequenceConsistencyError("dup", pair_index=4))
        concat = handler.handle_exception(ConcatenationError("/out/track.ogg", RuntimeError("boom")))

        assert parse.context == {"stage": "decode", "file_names": ["a.ogg", "b.ogg"]}
        assert sequence.context == {"pair_index": 4}
        assert concat.context == {"destination": "/out/track.ogg"}

    def test_concatenation_error_message(self):
        error = ConcatenationError("/out/track.ogg", RuntimeError("ffmpeg exited with status 1"))

        assert str(error) == "Failed to concatenate track at /out/track.ogg: ffmpeg exited with status 1"
        assert error.destination == "/out/track.ogg"


class TestErrorHandlerState:
    """Test recording and summarizing errors."""

    def make_error(self, severity):
        return ProcessingError(
            category=ErrorCategory.SYNTHESIS,
            severity=severity,
            message="Speech synthesis failed",
            details="",
            suggested_actions=["Try again"],
            error_code="SYNTH_001",
        )

    def test_errors_and_warnings_tracked_separately(self, handler):
        handler.add_error(self.make_error(ErrorSeverity.ERROR))
        handler.add_error(self.make_error(ErrorSeverity.CRITICAL))
        handler.add_error(self.make_error(ErrorSeverity.WARNING))
        handler.add_error(self.make_error(ErrorSeverity.INFO))

        summary = handler.get_error_summary()
        assert summary['error_count'] == 2
        assert summary['warning_count'] == 1
        assert summary['errors'][0] == {
            'code': "SYNTH_001",
            'category': "synthesis",
            'severity': "error",
            'message': "Speech synthesis failed",
            'suggested_actions': ["Try again"],
        }

    def test_clear_errors(self, handler):
        handler.add_error(self.make_error(ErrorSeverity.ERROR))
        handler.add_error(self.make_error(ErrorSeverity.WARNING))
        assert handler.has_errors() and handler.has_warnings()

        handler.clear_errors()

        assert not handler.has_errors()
        assert not handler.has_warnings()

    def test_processing_error_context_defaults_to_dict(self):
        assert self.make_error(ErrorSeverity.ERROR).context == {}
