"""
Base service interfaces for the external collaborators.
"""

from abc import ABC, abstractmethod
from typing import List

from sentence_audio_builder.models import VoiceGender


class TranslationService(ABC):
    """Base interface for translation services."""

    @abstractmethod
    def translate(self, text: str, source_language: str, target_language: str) -> str:
        """
        Translate text between two languages.

        Args:
            text: Word, phrase or sentence to translate
            source_language: Language code of the text
            target_language: Language code to translate into

        Returns:
            Translated text

        Raises:
            TranslationError: If the translation cannot be obtained
        """
        pass


class SpeechSynthesisService(ABC):
    """Base interface for speech synthesis services."""

    @abstractmethod
    def synthesize(self, text: str, language_code: str, voice_gender: VoiceGender) -> bytes:
        """
        Synthesize speech for a piece of text.

        Args:
            text: Text to speak
            language_code: Language of the text
            voice_gender: Requested voice gender

        Returns:
            Encoded audio bytes (opaque to the caller)

        Raises:
            SynthesisError: If no audio could be produced
        """
        pass


class AudioConcatenator(ABC):
    """Base interface for the concatenation engine."""

    @abstractmethod
    def concatenate(self, file_paths: List[str], destination: str) -> None:
        """
        Join audio files end to end into a single file.

        Args:
            file_paths: Ordered audio file paths
            destination: Output file path

        Raises:
            ConcatenationError: If the output file could not be written
        """
        pass
