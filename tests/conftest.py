"""
Pytest configuration and fixtures for the Sentence Audio Builder tests.

Provides mock collaborators (translation, synthesis, concatenation) so that
no test touches the network or ffmpeg.
"""

import threading
from pathlib import Path
from typing import Dict, List, Optional

import pytest
from hypothesis import settings, Verbosity

from sentence_audio_builder.audio.fragments import FragmentCodec
from sentence_audio_builder.audio.silence import PacingConfig, SilenceRegistry
from sentence_audio_builder.errors import ConcatenationError, SynthesisError, TranslationError
from sentence_audio_builder.models import VoiceGender
from sentence_audio_builder.services.base import (
    AudioConcatenator, SpeechSynthesisService, TranslationService,
)


settings.register_profile("audio_builder",
    max_examples=100,
    verbosity=Verbosity.normal,
    deadline=None
)
settings.load_profile("audio_builder")


def pytest_configure(config):
    config.addinivalue_line("markers", "property: property-based tests using Hypothesis")


class MockTranslationService(TranslationService):
    """Mock translation service returning a fixed table or a tagged echo."""

    def __init__(self, translations: Optional[Dict[str, str]] = None, fail_texts: List[str] = None):
        self.translations = translations or {}
        self.fail_texts = fail_texts or []
        self.calls = []

    def translate(self, text: str, source_language: str, target_language: str) -> str:
        self.calls.append((text, source_language, target_language))
        if text in self.fail_texts:
            raise TranslationError(f"Translation service unavailable for '{text}'")
        return self.translations.get(text, f"[{target_language}] {text}")


class MockSpeechSynthesisService(SpeechSynthesisService):
    """Mock synthesis service returning the text as bytes."""

    def __init__(self, fail_texts: List[str] = None):
        self.fail_texts = fail_texts or []
        self.calls = []
        self._lock = threading.Lock()

    def synthesize(self, text: str, language_code: str, voice_gender: VoiceGender) -> bytes:
        with self._lock:
            self.calls.append((text, language_code, voice_gender))
        if text in self.fail_texts:
            raise SynthesisError(f"Synthesis failed for '{text}'")
        return f"{language_code}:{text}".encode("utf-8")


class RecordingConcatenator(AudioConcatenator):
    """Records every concatenation request and which inputs existed at that time."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls = []
        self.existing_at_call = []

    def concatenate(self, file_paths: List[str], destination: str) -> None:
        self.calls.append((list(file_paths), destination))
        self.existing_at_call.append({p: Path(p).exists() for p in file_paths})
        if self.fail:
            raise ConcatenationError(destination, RuntimeError("ffmpeg exited with status 1"))
        Path(destination).write_bytes(b"track")


@pytest.fixture
def silence_registry(tmp_path):
    """Silence registry pointing at a (file-less) folder."""
    return SilenceRegistry(silence_dir=tmp_path / "silences", extension="ogg")


@pytest.fixture
def pacing():
    return PacingConfig()


@pytest.fixture
def codec(pacing):
    return FragmentCodec(pacing, extension="ogg")


@pytest.fixture
def translation():
    return MockTranslationService()


@pytest.fixture
def synthesis():
    return MockSpeechSynthesisService()


@pytest.fixture
def concatenator():
    return RecordingConcatenator()
