"""
Configuration settings for the Sentence Audio Builder.
"""

import os
from pathlib import Path

from .errors import ConfigurationError


class Config:
    """Configuration class for application settings."""

    # Project paths
    PROJECT_ROOT = Path(__file__).parent.parent
    AUDIO_PARENT_DIR = Path(os.environ.get("AUDIO_BUILDER_OUTPUT_DIR", PROJECT_ROOT / "output"))
    SILENCE_DIR = Path(os.environ.get("AUDIO_BUILDER_SILENCE_DIR", PROJECT_ROOT / "silences"))

    # Audio settings
    AUDIO_EXTENSION = "ogg"
    ENGLISH_LANGUAGE_CODE = "en"

    # Google Cloud settings
    LANGUAGE_CODE = os.environ.get("AUDIO_BUILDER_LANGUAGE_CODE", "es")
    PROJECT_ID = os.environ.get("AUDIO_BUILDER_PROJECT_ID", "")
    TRANSLATION_API_TIMEOUT = 30  # seconds
    SYNTHESIS_API_TIMEOUT = 30  # seconds

    # Track settings
    # Environment value stays a string until validate() parses it
    NUMBER_OF_REPEATS = os.environ.get("AUDIO_BUILDER_REPEATS", 3)
    WORDS_TRACK_FILE_NAME = "2 - all words and definitions.ogg"
    SENTENCE_TRACK_PREFIX = "1"

    # Fragment generation settings
    MAX_GENERATION_WORKERS = 8

    @classmethod
    def ensure_directories(cls):
        """Create necessary directories if they don't exist."""
        for directory in [cls.AUDIO_PARENT_DIR, cls.SILENCE_DIR]:
            directory.mkdir(parents=True, exist_ok=True)

    @classmethod
    def validate(cls, require_project_id: bool = True):
        """
        Check the settings that every track build depends on.

        Args:
            require_project_id: Whether a Google Cloud project id must be set

        Raises:
            ConfigurationError: If a setting is unusable
        """
        if isinstance(cls.NUMBER_OF_REPEATS, str):
            try:
                cls.NUMBER_OF_REPEATS = int(cls.NUMBER_OF_REPEATS)
            except ValueError as e:
                raise ConfigurationError(
                    f"Number of repeats must be a positive integer, got {cls.NUMBER_OF_REPEATS!r}"
                ) from e

        if (isinstance(cls.NUMBER_OF_REPEATS, bool) or not isinstance(cls.NUMBER_OF_REPEATS, int)
                or cls.NUMBER_OF_REPEATS < 1):
            raise ConfigurationError(
                f"Number of repeats must be a positive integer, got {cls.NUMBER_OF_REPEATS!r}"
            )

        if not cls.LANGUAGE_CODE:
            raise ConfigurationError("A target language code is required")

        if require_project_id and not cls.PROJECT_ID:
            raise ConfigurationError(
                "Google Cloud project id not configured. "
                "Set AUDIO_BUILDER_PROJECT_ID or pass --project-id."
            )
