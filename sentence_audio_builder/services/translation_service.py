"""
Translation service backed by the Google Cloud Translation API.

Requires the google-cloud-translate library and valid credentials.
Set the GOOGLE_APPLICATION_CREDENTIALS environment variable to your
service account key file.
"""

import logging

from sentence_audio_builder.errors import TranslationError
from sentence_audio_builder.services.base import TranslationService


class GoogleTranslationService(TranslationService):
    """
    Translation service using the Google Cloud Translation API (v3).

    Requests are sent on behalf of a Google Cloud project, which must have
    the Cloud Translation API enabled.
    """

    def __init__(self, project_id: str, timeout: float = None, client=None):
        """
        Initialize the translation service.

        Args:
            project_id: Google Cloud project id used as the request parent
            timeout: Per-request timeout in seconds
            client: Pre-built TranslationServiceClient (created if None)
        """
        from sentence_audio_builder.config import Config

        self.logger = logging.getLogger(__name__)
        self.project_id = project_id
        self.timeout = timeout or Config.TRANSLATION_API_TIMEOUT

        if client is None:
            from google.cloud import translate_v3

            client = translate_v3.TranslationServiceClient()
        self.client = client
        self.logger.info(f"Google Cloud Translation service initialized for project {project_id}")

    @property
    def parent(self) -> str:
        return f"projects/{self.project_id}"

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
            TranslationError: On empty input, API failure, or an empty response
        """
        if not text or not text.strip():
            raise TranslationError("Cannot translate empty or whitespace-only text")

        try:
            response = self.client.translate_text(
                request={
                    "parent": self.parent,
                    "contents": [text],
                    "mime_type": "text/plain",
                    "source_language_code": source_language,
                    "target_language_code": target_language,
                },
                timeout=self.timeout,
            )
        except Exception as e:
            self.logger.error(f"Translation failed for '{text}': {e}")
            raise TranslationError(f"Translation API error for '{text}': {e}") from e

        if not response.translations:
            raise TranslationError(f"Translation API returned no translation for '{text}'")

        translated = response.translations[0].translated_text
        self.logger.debug(f"Translated '{text}' ({source_language} -> {target_language}): '{translated}'")
        return translated
