"""
Tests for core data models.
"""

import pytest
from pathlib import Path

from sentence_audio_builder.errors import ConfigurationError
from sentence_audio_builder.models import (
    ForeignPhraseDefinitionPair,
    FragmentDescriptor,
    FragmentSlot,
    OrderedSegment,
    Sentence,
    sanitize_file_name
)


class TestForeignPhraseDefinitionPair:
    """Test cases for ForeignPhraseDefinitionPair."""

    def test_pair_creation(self):
        pair = ForeignPhraseDefinitionPair("casa", "house")
        assert pair.foreign_phrase == "casa"
        assert pair.english_definition == "house"

    @pytest.mark.parametrize("foreign, definition", [
        ("", "house"),
        ("casa", ""),
        ("   ", "house"),
        ("casa", "\t"),
    ])
    def test_empty_fields_rejected(self, foreign, definition):
        with pytest.raises(ValueError):
            ForeignPhraseDefinitionPair(foreign, definition)

    def test_pair_is_immutable(self):
        pair = ForeignPhraseDefinitionPair("casa", "house")
        with pytest.raises(AttributeError):
            pair.english_definition = "home"


class TestSentence:
    """Test cases for Sentence."""

    def test_folder_name_is_sanitized(self):
        sentence = Sentence('Where is the "train" station?')
        assert sentence.folder_name == "Where is the train station"

    def test_folder_name_is_stable(self):
        assert Sentence("I like  cats.").folder_name == Sentence("I like  cats.").folder_name
        assert Sentence("I like  cats.").folder_name == "I like cats"

    def test_foreign_word_count(self):
        sentence = Sentence("I like cats")
        assert sentence.foreign_word_count == 0
        sentence.foreign_version = "me gustan los gatos"
        assert sentence.foreign_word_count == 4

    def test_unusable_sentence_rejected(self):
        with pytest.raises(ValueError):
            Sentence("???")
        with pytest.raises(ValueError):
            Sentence("  ")

    def test_add_pair_then_freeze(self):
        sentence = Sentence("I like cats")
        sentence.add_pair(ForeignPhraseDefinitionPair("gatos", "cats"))
        sentence.freeze()

        assert sentence.is_frozen
        assert len(sentence.foreign_phrase_definition_pairs) == 1
        with pytest.raises(ConfigurationError):
            sentence.add_pair(ForeignPhraseDefinitionPair("me", "me"))


class TestSanitizeFileName:
    """Test cases for file name sanitization."""

    def test_removes_unsafe_characters(self):
        assert sanitize_file_name('a/b\\c:d*e?f"g<h>i|j') == "abcdefghij"

    def test_collapses_whitespace_and_strips_trailing_dots(self):
        assert sanitize_file_name("  hello \n  world ...  ") == "hello world"

    def test_truncates(self):
        assert len(sanitize_file_name("x" * 300)) == 100
        assert sanitize_file_name("abcdef", max_length=3) == "abc"


class TestFragmentDescriptor:
    """Test cases for FragmentDescriptor."""

    def test_ordering_key(self):
        descriptor = FragmentDescriptor(
            pair_index=3, slot=FragmentSlot.DEFINITION, label="definition",
            definition="house", before_pause_padding=0, after_pause_padding=0,
            full_path=Path("/tmp/32 - definition - house.ogg")
        )
        assert descriptor.ordering_key == (3, 2)

    @pytest.mark.parametrize("pair_index", [0, -1])
    def test_non_positive_pair_index_rejected(self, pair_index):
        with pytest.raises(ValueError):
            FragmentDescriptor(
                pair_index=pair_index, slot=FragmentSlot.FOREIGN_WORD, label="foreign word",
                definition="house", before_pause_padding=0, after_pause_padding=0,
                full_path=Path("x.ogg")
            )

    def test_negative_padding_rejected(self):
        with pytest.raises(ValueError):
            FragmentDescriptor(
                pair_index=1, slot=FragmentSlot.FOREIGN_WORD, label="foreign word",
                definition="house", before_pause_padding=-1, after_pause_padding=0,
                full_path=Path("x.ogg")
            )


class TestFragmentSlot:
    """Test cases for FragmentSlot."""

    def test_labels(self):
        assert FragmentSlot.FOREIGN_WORD.label == "foreign word"
        assert FragmentSlot.DEFINITION.label == "definition"

    def test_from_label(self):
        assert FragmentSlot.from_label("definition") is FragmentSlot.DEFINITION
        with pytest.raises(ValueError):
            FragmentSlot.from_label("translation")


class TestOrderedSegment:
    """Test cases for OrderedSegment."""

    def test_speech_segment(self):
        segment = OrderedSegment.speech("/tmp/a.ogg")
        assert segment.path == Path("/tmp/a.ogg")
        assert not segment.is_silence

    def test_silence_segment(self):
        segment = OrderedSegment.silence(3, "/silences/3.ogg")
        assert segment.is_silence
        assert segment.silence_seconds == 3

    def test_zero_silence_rejected(self):
        with pytest.raises(ValueError):
            OrderedSegment.silence(0, "/silences/0.ogg")
