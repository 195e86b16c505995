"""
External collaborator interfaces: translation, speech synthesis, and concatenation.
"""

from sentence_audio_builder.services.base import (
    TranslationService,
    SpeechSynthesisService,
    AudioConcatenator
)

__all__ = [
    'TranslationService',
    'SpeechSynthesisService',
    'AudioConcatenator'
]
