"""
Track production for a single sentence.

Creates the sentence output folder, the sentence repetition track, and the
words and definitions track, using the translation, synthesis and
concatenation services.
"""

import logging
import re
import shutil
from pathlib import Path
from typing import Optional

from .audio.fragments import FragmentCodec
from .audio.production import ProductionAssembler
from .audio.sentence_track import SentenceTrackBuilder
from .audio.sequence import SequenceAssembler
from .audio.silence import PacingConfig, SilenceRegistry
from .errors import ConfigurationError
from .generation.batch import ScratchDirectory
from .generation.fragments import FragmentGenerator
from .models import (
    ExplicitNaming, PrefixNaming, ProductionResult, Sentence, VoiceGender,
)
from .services.base import AudioConcatenator, SpeechSynthesisService, TranslationService


logger = logging.getLogger(__name__)


class AudioMaker:
    """
    Builds every audio track for one sentence.

    Fragments are staged in a scratch folder that is removed once the
    track has been written, whether or not the build succeeded.
    """

    def __init__(self,
                 sentence: Sentence,
                 translation: TranslationService,
                 synthesis: SpeechSynthesisService,
                 concatenator: AudioConcatenator,
                 silence_registry: SilenceRegistry,
                 language_code: str,
                 repeat_count: int,
                 audio_parent_dir: Path,
                 pacing: Optional[PacingConfig] = None,
                 english_language_code: str = "en",
                 max_workers: int = 8):
        """
        Args:
            sentence: Sentence being drilled
            translation: Translation service
            synthesis: Speech synthesis service
            concatenator: Concatenation engine
            silence_registry: Pre-built silence files
            language_code: Foreign language code
            repeat_count: Repetitions per sentence and per word pair
            audio_parent_dir: Folder holding one subfolder per sentence
            pacing: Pause policy (defaults if None)
            english_language_code: Language code for English text
            max_workers: Concurrent synthesis requests
        """
        if isinstance(repeat_count, bool) or not isinstance(repeat_count, int) or repeat_count < 1:
            raise ConfigurationError(f"Repeat count must be a positive integer, got {repeat_count!r}")

        self.sentence = sentence
        self.translation = translation
        self.language_code = language_code
        self.english_language_code = english_language_code
        self.repeat_count = repeat_count
        self.audio_parent_dir = Path(audio_parent_dir)

        pacing = pacing or PacingConfig()
        self.codec = FragmentCodec(pacing, extension=silence_registry.extension)
        self.generator = FragmentGenerator(synthesis, self.codec,
                                           english_language_code=english_language_code,
                                           max_workers=max_workers)
        self.sentence_builder = SentenceTrackBuilder(silence_registry, pacing)
        self.sequence_assembler = SequenceAssembler(silence_registry)
        self.production = ProductionAssembler(concatenator, extension=silence_registry.extension)

    @property
    def sentence_folder(self) -> Path:
        return self.audio_parent_dir / self.sentence.folder_name

    def make_sentence_folder(self) -> Path:
        """Create the sentence's output folder; it must not already exist."""
        self.sentence_folder.mkdir(parents=True)
        logger.info(f"Created sentence folder: {self.sentence_folder}")
        return self.sentence_folder

    def translate_sentence(self) -> str:
        """Translate the English sentence into the foreign language."""
        foreign = self.translation.translate(
            self.sentence.english_version, self.english_language_code, self.language_code
        )
        self.sentence.foreign_version = foreign
        return foreign

    def suggest_definition(self, foreign_phrase: str) -> str:
        """Machine translation of a foreign word, offered as its default definition."""
        return self.translation.translate(foreign_phrase, self.language_code, self.english_language_code)

    def make_sentence_track(self, prefix: str) -> ProductionResult:
        """
        Build the sentence repetition track, saved as '{prefix} - {folder}.ogg'.

        Raises:
            TranslationError: If the sentence cannot be translated
            SynthesisError: If either sentence fragment fails
        """
        foreign_text = self.sentence.foreign_version or self.translate_sentence()

        with ScratchDirectory(prefix="sentence-") as scratch:
            english_path, foreign_path = self.generator.generate_sentence_fragments(
                self.sentence.english_version, foreign_text, self.language_code, prefix, scratch,
                voice_gender=VoiceGender.MALE,
            )
            segments = self.sentence_builder.build(
                english_path, foreign_path, self.repeat_count,
                foreign_word_count=self.sentence.foreign_word_count,
            )
            return self.production.assemble(
                segments, self.sentence_folder, PrefixNaming(prefix), self.sentence.folder_name
            )

    def make_word_audio_file(self, file_name: str = "2 - all words and definitions.ogg") -> ProductionResult:
        """
        Build the words and definitions track from the sentence's pairs.

        The sentence is frozen first; no pairs can be added afterwards.

        Raises:
            SequenceConsistencyError: If the sentence has no pairs
            SynthesisError: If any fragment fails
        """
        self.sentence.freeze()
        pairs = list(self.sentence.foreign_phrase_definition_pairs)

        with ScratchDirectory(prefix="words-") as scratch:
            descriptors = self.generator.generate_word_fragments(
                pairs, self.language_code, self.repeat_count, scratch,
                voice_gender=VoiceGender.FEMALE,
            )
            segments = self.sequence_assembler.assemble(descriptors, verify_complete=True)
            return self.production.assemble(segments, self.sentence_folder, ExplicitNaming(file_name))

    def duplicate_track(self, prefix_matcher: str, copied_file_name: str) -> Path:
        """
        Copy the first track whose name starts with prefix_matcher.

        Args:
            prefix_matcher: Leading text of the source file name
            copied_file_name: Full name (with extension) of the copy

        Returns:
            Path of the copy

        Raises:
            FileNotFoundError: If no track in the sentence folder matches
        """
        matcher = re.compile(f"^{re.escape(prefix_matcher)}")
        source = next(
            (path for path in sorted(self.sentence_folder.iterdir())
             if path.is_file() and matcher.match(path.name)),
            None,
        )
        if source is None:
            raise FileNotFoundError(
                f"No track starting with '{prefix_matcher}' in {self.sentence_folder}"
            )

        destination = self.sentence_folder / copied_file_name
        shutil.copyfile(source, destination)
        logger.info(f"Copied {source.name} to {destination.name}")
        return destination
