"""
Tests for concurrent fragment generation.
"""

import threading
import time

import pytest
from pathlib import Path

from conftest import MockSpeechSynthesisService
from sentence_audio_builder.errors import SynthesisError
from sentence_audio_builder.generation.batch import PendingBatch, ScratchDirectory
from sentence_audio_builder.generation.fragments import FragmentGenerator
from sentence_audio_builder.models import ForeignPhraseDefinitionPair, FragmentSlot, VoiceGender


PAIRS = [
    ForeignPhraseDefinitionPair("gato", "cat"),
    ForeignPhraseDefinitionPair("perro", "dog"),
]


class TestPendingBatch:
    """Test the join-all barrier."""

    def test_results_in_submission_order(self):
        with PendingBatch(max_workers=4) as batch:
            for delay, value in [(0.05, "a"), (0.0, "b"), (0.02, "c")]:
                batch.submit(lambda d, v: (time.sleep(d), v)[1], delay, value)
            assert batch.wait_all() == ["a", "b", "c"]

    def test_waits_for_every_job_before_raising(self):
        finished = []

        def slow_job():
            time.sleep(0.1)
            finished.append("slow")

        def failing_job():
            raise SynthesisError("boom")

        with PendingBatch(max_workers=2) as batch:
            batch.submit(failing_job)
            batch.submit(slow_job)
            with pytest.raises(SynthesisError, match="boom"):
                batch.wait_all()
            assert finished == ["slow"]

    def test_cannot_submit_after_wait(self):
        with PendingBatch() as batch:
            batch.submit(lambda: 1)
            batch.wait_all()
            with pytest.raises(RuntimeError):
                batch.submit(lambda: 2)

    def test_len_counts_jobs(self):
        with PendingBatch() as batch:
            batch.submit(lambda: 1)
            batch.submit(lambda: 2)
            assert len(batch) == 2
            batch.wait_all()


class TestScratchDirectory:
    """Test scratch folder cleanup."""

    def test_removed_after_success(self, tmp_path):
        with ScratchDirectory(parent=tmp_path) as scratch:
            (scratch / "11 - foreign word - cat.ogg").write_bytes(b"audio")
            assert scratch.is_dir()
        assert not scratch.exists()

    def test_removed_after_failure(self, tmp_path):
        with pytest.raises(SynthesisError):
            with ScratchDirectory(parent=tmp_path) as scratch:
                (scratch / "partial.ogg").write_bytes(b"audio")
                raise SynthesisError("failed mid-batch")
        assert not scratch.exists()
        assert list(tmp_path.iterdir()) == []


class TestFragmentGenerator:
    """Test word and sentence fragment generation."""

    def test_word_fragments_written_and_described(self, codec, synthesis, tmp_path):
        generator = FragmentGenerator(synthesis, codec)
        descriptors = generator.generate_word_fragments(PAIRS, "es", repeat_count=1, scratch_dir=tmp_path)

        assert [d.ordering_key for d in descriptors] == [(1, 1), (1, 2), (2, 1), (2, 2)]
        for descriptor in descriptors:
            assert descriptor.full_path.is_file()
        assert descriptors[0].full_path.read_bytes() == b"es:gato"
        assert descriptors[1].full_path.read_bytes() == b"en:cat"

    def test_pair_index_increments_per_repeat(self, codec, synthesis, tmp_path):
        generator = FragmentGenerator(synthesis, codec)
        descriptors = generator.generate_word_fragments(PAIRS, "es", repeat_count=3, scratch_dir=tmp_path)

        foreign = [d for d in descriptors if d.slot is FragmentSlot.FOREIGN_WORD]
        assert [(d.pair_index, d.definition) for d in foreign] == [
            (1, "cat"), (2, "cat"), (3, "cat"), (4, "dog"), (5, "dog"), (6, "dog"),
        ]
        assert len(list(tmp_path.iterdir())) == 12

    def test_written_names_decode_to_same_descriptors(self, codec, synthesis, tmp_path):
        generator = FragmentGenerator(synthesis, codec)
        descriptors = generator.generate_word_fragments(PAIRS, "es", repeat_count=2, scratch_dir=tmp_path)

        decoded = codec.decode_directory(tmp_path).require_complete()
        assert sorted(decoded, key=lambda d: d.ordering_key) == descriptors

    def test_voice_gender_passed_through(self, codec, synthesis, tmp_path):
        FragmentGenerator(synthesis, codec).generate_word_fragments(
            PAIRS[:1], "es", repeat_count=1, scratch_dir=tmp_path
        )
        assert {call[2] for call in synthesis.calls} == {VoiceGender.FEMALE}

    def test_failed_fragment_fails_the_batch(self, codec, tmp_path):
        synthesis = MockSpeechSynthesisService(fail_texts=["dog"])
        generator = FragmentGenerator(synthesis, codec)

        with pytest.raises(SynthesisError, match="dog"):
            generator.generate_word_fragments(PAIRS, "es", repeat_count=1, scratch_dir=tmp_path)

    def test_requests_run_concurrently(self, codec, tmp_path):
        active = []
        peak = []
        lock = threading.Lock()

        class SlowSynthesis(MockSpeechSynthesisService):
            def synthesize(self, text, language_code, voice_gender):
                with lock:
                    active.append(text)
                    peak.append(len(active))
                time.sleep(0.05)
                with lock:
                    active.remove(text)
                return b"audio"

        FragmentGenerator(SlowSynthesis(), codec, max_workers=4).generate_word_fragments(
            PAIRS, "es", repeat_count=1, scratch_dir=tmp_path
        )
        assert max(peak) > 1

    def test_sentence_fragments(self, codec, synthesis, tmp_path):
        english, foreign = FragmentGenerator(synthesis, codec).generate_sentence_fragments(
            "I like cats.", "Me gustan los gatos.", "es", "1", tmp_path
        )

        assert english == tmp_path / "1 - english - I like cats.ogg"
        assert foreign == tmp_path / "1 - foreign - Me gustan los gatos.ogg"
        assert english.read_bytes() == b"en:I like cats."
        assert foreign.read_bytes() == b"es:Me gustan los gatos."
        assert {call[2] for call in synthesis.calls} == {VoiceGender.MALE}
