"""
Speech fragment generation into a scratch folder.
"""

import logging
from pathlib import Path
from typing import List, Sequence, Tuple

from ..audio.fragments import FragmentCodec
from ..models import (
    ForeignPhraseDefinitionPair, FragmentDescriptor, FragmentSlot,
    VoiceGender, sanitize_file_name,
)
from ..services.base import SpeechSynthesisService
from .batch import PendingBatch


logger = logging.getLogger(__name__)


class FragmentGenerator:
    """
    Synthesizes fragments concurrently and writes them to a scratch folder.

    Descriptors are returned directly from generation, so callers do not
    have to re-read the folder to know the playback order.
    """

    def __init__(self, synthesis: SpeechSynthesisService, codec: FragmentCodec,
                 english_language_code: str = "en", max_workers: int = 8):
        self.synthesis = synthesis
        self.codec = codec
        self.english_language_code = english_language_code
        self.max_workers = max_workers

    def generate_word_fragments(self, pairs: Sequence[ForeignPhraseDefinitionPair],
                                foreign_language_code: str, repeat_count: int,
                                scratch_dir: Path,
                                voice_gender: VoiceGender = VoiceGender.FEMALE) -> List[FragmentDescriptor]:
        """
        Generate foreign word and definition fragments for every pair.

        Each pair is written repeat_count times; the pair index increments
        once per pair per repeat, starting at 1.

        Args:
            pairs: Gathered word and definition pairs, in order
            foreign_language_code: Language of the foreign phrases
            repeat_count: Repetitions of each pair
            scratch_dir: Folder to write fragments into
            voice_gender: Voice for both halves of each pair

        Returns:
            Descriptors for every written fragment

        Raises:
            SynthesisError: If any fragment fails; no descriptors are returned
        """
        jobs: List[Tuple[FragmentDescriptor, str, str]] = []
        pair_index = 1
        for pair in pairs:
            for _ in range(repeat_count):
                for slot, text, language in (
                    (FragmentSlot.FOREIGN_WORD, pair.foreign_phrase, foreign_language_code),
                    (FragmentSlot.DEFINITION, pair.english_definition, self.english_language_code),
                ):
                    file_name = self.codec.encode(pair_index, slot, pair.english_definition)
                    descriptor = self.codec.describe(
                        pair_index, slot, pair.english_definition, Path(scratch_dir) / file_name
                    )
                    jobs.append((descriptor, text, language))
                pair_index += 1

        with PendingBatch(max_workers=self.max_workers, name="words") as batch:
            for descriptor, text, language in jobs:
                batch.submit(self._write_fragment, text, language, voice_gender, descriptor.full_path)
            batch.wait_all()

        logger.info(f"Generated {len(jobs)} word fragments for {len(pairs)} pairs")
        return [descriptor for descriptor, _, _ in jobs]

    def generate_sentence_fragments(self, english_text: str, foreign_text: str,
                                    foreign_language_code: str, prefix: str,
                                    scratch_dir: Path,
                                    voice_gender: VoiceGender = VoiceGender.MALE) -> Tuple[Path, Path]:
        """
        Generate the English and foreign sentence fragments.

        Returns:
            (english_path, foreign_path)

        Raises:
            SynthesisError: If either fragment fails
        """
        extension = self.codec.extension
        english_path = Path(scratch_dir) / f"{prefix} - english - {sanitize_file_name(english_text)}.{extension}"
        foreign_path = Path(scratch_dir) / f"{prefix} - foreign - {sanitize_file_name(foreign_text)}.{extension}"

        with PendingBatch(max_workers=2, name="sentence") as batch:
            batch.submit(self._write_fragment, english_text, self.english_language_code,
                         voice_gender, english_path)
            batch.submit(self._write_fragment, foreign_text, foreign_language_code,
                         voice_gender, foreign_path)
            batch.wait_all()

        return english_path, foreign_path

    def _write_fragment(self, text: str, language_code: str, voice_gender: VoiceGender,
                        path: Path) -> Path:
        audio = self.synthesis.synthesize(text, language_code, voice_gender)
        path.write_bytes(audio)
        logger.debug(f"Wrote fragment {path.name} ({len(audio)} bytes)")
        return path
