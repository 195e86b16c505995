"""
Error handling system for the Sentence Audio Builder.

This module provides centralized error definitions, error classification,
and actionable error messages for every track-building stage.
"""

import logging
from enum import Enum
from typing import List, Optional, Dict, Any
from dataclasses import dataclass


class ErrorSeverity(Enum):
    """Error severity levels."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Categories of errors that can occur while building tracks."""
    TRANSLATION = "translation"
    SYNTHESIS = "synthesis"
    FILENAME_PARSING = "filename_parsing"
    SEQUENCE_CONSISTENCY = "sequence_consistency"
    CONCATENATION = "concatenation"
    CONFIGURATION = "configuration"
    FILE_SYSTEM = "file_system"


@dataclass
class ProcessingError:
    """Represents a processing error with context and guidance."""
    category: ErrorCategory
    severity: ErrorSeverity
    message: str
    details: str
    suggested_actions: List[str]
    error_code: str
    context: Dict[str, Any] = None

    def __post_init__(self):
        if self.context is None:
            self.context = {}


class AudioBuilderError(Exception):
    """Base exception for Sentence Audio Builder errors."""
    pass


class TranslationError(AudioBuilderError):
    """Raised when the translation service fails."""
    pass


class SynthesisError(AudioBuilderError):
    """Raised when the speech synthesis service fails."""
    pass


class FilenameParseError(AudioBuilderError):
    """Raised when generated fragment file names cannot be decoded."""

    def __init__(self, message: str, file_names: Optional[List[str]] = None):
        self.file_names = file_names or []
        super().__init__(message)


class SequenceConsistencyError(AudioBuilderError):
    """Raised when fragment ordering keys are duplicated, missing, or empty."""

    def __init__(self, message: str, pair_index: Optional[int] = None):
        self.pair_index = pair_index
        super().__init__(message)


class ConcatenationError(AudioBuilderError):
    """Raised when the concatenation engine fails to write a track."""

    def __init__(self, destination: str, cause: Optional[BaseException] = None):
        self.destination = str(destination)
        self.cause = cause
        message = f"Failed to concatenate track at {self.destination}"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)


class ConfigurationError(AudioBuilderError):
    """Raised when settings or call options are invalid."""
    pass


class ErrorHandler:
    """
    Centralized error handling and reporting system.

    Converts raised exceptions into ProcessingError records carrying
    actionable guidance, and keeps a summary for the command line.
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self.errors: List[ProcessingError] = []
        self.warnings: List[ProcessingError] = []

    def add_error(self, error: ProcessingError) -> None:
        """Add an error to the collection."""
        if error.severity in [ErrorSeverity.ERROR, ErrorSeverity.CRITICAL]:
            self.errors.append(error)
        elif error.severity == ErrorSeverity.WARNING:
            self.warnings.append(error)

        log_level = {
            ErrorSeverity.INFO: logging.INFO,
            ErrorSeverity.WARNING: logging.WARNING,
            ErrorSeverity.ERROR: logging.ERROR,
            ErrorSeverity.CRITICAL: logging.CRITICAL
        }[error.severity]

        self.logger.log(log_level, f"[{error.error_code}] {error.message}")
        if error.details:
            self.logger.log(log_level, f"Details: {error.details}")

    def has_errors(self) -> bool:
        """Check if any errors have been recorded."""
        return len(self.errors) > 0

    def has_warnings(self) -> bool:
        """Check if any warnings have been recorded."""
        return len(self.warnings) > 0

    def get_error_summary(self) -> Dict[str, Any]:
        """Get a summary of all errors and warnings."""
        return {
            'error_count': len(self.errors),
            'warning_count': len(self.warnings),
            'errors': [self._format_error_for_summary(e) for e in self.errors],
            'warnings': [self._format_error_for_summary(e) for e in self.warnings]
        }

    def _format_error_for_summary(self, error: ProcessingError) -> Dict[str, Any]:
        """Format error for summary display."""
        return {
            'code': error.error_code,
            'category': error.category.value,
            'severity': error.severity.value,
            'message': error.message,
            'suggested_actions': error.suggested_actions
        }

    def clear_errors(self) -> None:
        """Clear all recorded errors and warnings."""
        self.errors.clear()
        self.warnings.clear()

    def handle_exception(self, error: Exception, context: Dict[str, Any] = None) -> ProcessingError:
        """
        Classify a raised exception into a ProcessingError.

        Args:
            error: The exception raised during a track build
            context: Additional information about where it happened

        Returns:
            ProcessingError with category, code, and suggested actions
        """
        if isinstance(error, TranslationError):
            return self.handle_translation_error(error, context)
        if isinstance(error, SynthesisError):
            return self.handle_synthesis_error(error, context)
        if isinstance(error, FilenameParseError):
            return self.handle_filename_parse_error(error, context)
        if isinstance(error, SequenceConsistencyError):
            return self.handle_sequence_error(error, context)
        if isinstance(error, ConcatenationError):
            return self.handle_concatenation_error(error, context)
        if isinstance(error, (ConfigurationError, ValueError)):
            return self.handle_configuration_error(error, context)
        if isinstance(error, OSError):
            return ProcessingError(
                category=ErrorCategory.FILE_SYSTEM,
                severity=ErrorSeverity.ERROR,
                message="File system operation failed",
                details=str(error),
                suggested_actions=[
                    "Check that the output folder is writable",
                    "Ensure the sentence folder does not already exist",
                    "Verify there is enough free disk space"
                ],
                error_code="FS_001",
                context=context
            )

        return ProcessingError(
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.CRITICAL,
            message="Unexpected error while building tracks",
            details=f"{type(error).__name__}: {error}",
            suggested_actions=[
                "Run again with --verbose for detailed logs",
                "Report the issue with the log output"
            ],
            error_code="UNEXPECTED_001",
            context=context
        )

    def handle_translation_error(self, error: Exception, context: Dict[str, Any] = None) -> ProcessingError:
        """Handle translation service errors."""
        error_str = str(error).lower()

        if 'permission' in error_str or '403' in error_str or 'credentials' in error_str:
            return ProcessingError(
                category=ErrorCategory.TRANSLATION,
                severity=ErrorSeverity.ERROR,
                message="Translation API access denied",
                details=f"Authentication error: {error}",
                suggested_actions=[
                    "Set GOOGLE_APPLICATION_CREDENTIALS to a valid service account key file",
                    "Check that the Cloud Translation API is enabled for the project",
                    "Verify the configured project id"
                ],
                error_code="TRANS_001",
                context=context
            )

        return ProcessingError(
            category=ErrorCategory.TRANSLATION,
            severity=ErrorSeverity.ERROR,
            message="Translation failed",
            details=str(error),
            suggested_actions=[
                "Check your internet connection",
                "Verify the language code is supported",
                "Try again in a few moments"
            ],
            error_code="TRANS_002",
            context=context
        )

    def handle_synthesis_error(self, error: Exception, context: Dict[str, Any] = None) -> ProcessingError:
        """Handle speech synthesis errors."""
        return ProcessingError(
            category=ErrorCategory.SYNTHESIS,
            severity=ErrorSeverity.ERROR,
            message="Speech synthesis failed; the track was not assembled",
            details=str(error),
            suggested_actions=[
                "Check that the Text-to-Speech API is enabled for the project",
                "Verify the language code has an available voice",
                "Try again in a few moments"
            ],
            error_code="SYNTH_001",
            context=context
        )

    def handle_filename_parse_error(self, error: FilenameParseError,
                                    context: Dict[str, Any] = None) -> ProcessingError:
        """Handle malformed fragment names."""
        context = dict(context or {})
        context['file_names'] = list(error.file_names)
        return ProcessingError(
            category=ErrorCategory.FILENAME_PARSING,
            severity=ErrorSeverity.ERROR,
            message="Fragment file names could not be decoded",
            details=str(error),
            suggested_actions=[
                "Remove files that were not generated by this tool from the fragment folder",
                "Regenerate the fragments for this sentence"
            ],
            error_code="PARSE_001",
            context=context
        )

    def handle_sequence_error(self, error: SequenceConsistencyError,
                              context: Dict[str, Any] = None) -> ProcessingError:
        """Handle ordering and completeness errors."""
        context = dict(context or {})
        if error.pair_index is not None:
            context['pair_index'] = error.pair_index
        return ProcessingError(
            category=ErrorCategory.SEQUENCE_CONSISTENCY,
            severity=ErrorSeverity.ERROR,
            message="Fragment sequence is inconsistent",
            details=str(error),
            suggested_actions=[
                "Make sure at least one word and definition pair was entered",
                "Regenerate the fragments for this sentence"
            ],
            error_code="SEQ_001",
            context=context
        )

    def handle_concatenation_error(self, error: ConcatenationError,
                                   context: Dict[str, Any] = None) -> ProcessingError:
        """Handle concatenation engine failures."""
        context = dict(context or {})
        context['destination'] = error.destination
        return ProcessingError(
            category=ErrorCategory.CONCATENATION,
            severity=ErrorSeverity.ERROR,
            message="Audio concatenation failed",
            details=str(error),
            suggested_actions=[
                "Ensure ffmpeg is installed and available on PATH",
                "Check that every silence file exists in the silence folder",
                "Verify the destination folder is writable"
            ],
            error_code="CONCAT_001",
            context=context
        )

    def handle_configuration_error(self, error: Exception, context: Dict[str, Any] = None) -> ProcessingError:
        """Handle invalid settings or call options."""
        return ProcessingError(
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.ERROR,
            message="Invalid configuration",
            details=str(error),
            suggested_actions=[
                "Check the command line options",
                "Check the AUDIO_BUILDER_* environment variables"
            ],
            error_code="CONFIG_001",
            context=context
        )


# Global error handler instance
error_handler = ErrorHandler()
