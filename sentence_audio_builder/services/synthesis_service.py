"""
Speech synthesis service backed by the Google Cloud Text-to-Speech API.
"""

import logging

from sentence_audio_builder.errors import SynthesisError
from sentence_audio_builder.models import VoiceGender
from sentence_audio_builder.services.base import SpeechSynthesisService


class GoogleSpeechSynthesisService(SpeechSynthesisService):
    """
    Speech synthesis using Google Cloud Text-to-Speech.

    Produces OGG Opus audio, matching the silence files and the
    production track format.
    """

    def __init__(self, timeout: float = None, client=None):
        """
        Initialize the synthesis service.

        Args:
            timeout: Per-request timeout in seconds
            client: Pre-built TextToSpeechClient (created if None)
        """
        from google.cloud import texttospeech
        from sentence_audio_builder.config import Config

        self.logger = logging.getLogger(__name__)
        self.texttospeech = texttospeech
        self.timeout = timeout or Config.SYNTHESIS_API_TIMEOUT
        self.client = client if client is not None else texttospeech.TextToSpeechClient()
        self.audio_config = texttospeech.AudioConfig(
            audio_encoding=texttospeech.AudioEncoding.OGG_OPUS
        )

    def synthesize(self, text: str, language_code: str, voice_gender: VoiceGender) -> bytes:
        """
        Synthesize speech for a piece of text.

        Args:
            text: Text to speak
            language_code: Language of the text
            voice_gender: Requested voice gender

        Returns:
            OGG Opus encoded audio bytes

        Raises:
            SynthesisError: On empty input, API failure, or empty audio
        """
        if not text or not text.strip():
            raise SynthesisError("Cannot synthesize empty or whitespace-only text")

        tts = self.texttospeech
        gender = {
            VoiceGender.MALE: tts.SsmlVoiceGender.MALE,
            VoiceGender.FEMALE: tts.SsmlVoiceGender.FEMALE,
        }[voice_gender]

        try:
            response = self.client.synthesize_speech(
                input=tts.SynthesisInput(text=text),
                voice=tts.VoiceSelectionParams(language_code=language_code, ssml_gender=gender),
                audio_config=self.audio_config,
                timeout=self.timeout,
            )
        except Exception as e:
            self.logger.error(f"Speech synthesis failed for '{text}' ({language_code}): {e}")
            raise SynthesisError(f"Text-to-Speech API error for '{text}': {e}") from e

        if not response.audio_content:
            raise SynthesisError(f"Text-to-Speech API returned no audio for '{text}'")

        return response.audio_content
