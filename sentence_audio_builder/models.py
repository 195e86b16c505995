"""
Core data models for the Sentence Audio Builder.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Union

from .errors import ConfigurationError, ConcatenationError


_UNSAFE_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')
_WHITESPACE = re.compile(r'\s+')
MAX_FOLDER_NAME_LENGTH = 100


def sanitize_file_name(text: str, max_length: int = MAX_FOLDER_NAME_LENGTH) -> str:
    """
    Make text safe to use as a file or folder name.

    Removes characters that are invalid on common filesystems, collapses
    whitespace, and strips trailing dots and spaces.

    Args:
        text: Arbitrary text (a sentence or a definition)
        max_length: Maximum length of the result

    Returns:
        Sanitized name (may be empty if nothing usable remains)
    """
    cleaned = _UNSAFE_FILENAME_CHARS.sub('', text)
    cleaned = _WHITESPACE.sub(' ', cleaned).strip()
    cleaned = cleaned[:max_length]
    return cleaned.rstrip(' .')


@dataclass(frozen=True)
class ForeignPhraseDefinitionPair:
    """A foreign phrase and its accepted English definition."""
    foreign_phrase: str
    english_definition: str

    def __post_init__(self):
        if not self.foreign_phrase or not self.foreign_phrase.strip():
            raise ValueError("Foreign phrase must not be empty")
        if not self.english_definition or not self.english_definition.strip():
            raise ValueError("English definition must not be empty")


@dataclass
class Sentence:
    """One learning unit: an English sentence and the words drilled from it."""
    english_version: str
    foreign_version: str = ""
    foreign_phrase_definition_pairs: List[ForeignPhraseDefinitionPair] = field(default_factory=list)
    _frozen: bool = field(default=False, repr=False, compare=False)

    def __post_init__(self):
        if not self.english_version or not self.english_version.strip():
            raise ValueError("Sentence text must not be empty")
        if not self.folder_name:
            raise ValueError(f"Sentence cannot be used as a folder name: {self.english_version!r}")

    @property
    def folder_name(self) -> str:
        """Stable output folder name derived from the English text."""
        return sanitize_file_name(self.english_version)

    @property
    def foreign_word_count(self) -> int:
        """Number of words in the translated sentence (0 until translated)."""
        return len(self.foreign_version.split())

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def add_pair(self, pair: ForeignPhraseDefinitionPair) -> None:
        """Append a gathered pair; only allowed before tracks are built."""
        if self._frozen:
            raise ConfigurationError(
                f"Sentence '{self.folder_name}' is already built; pairs cannot be added"
            )
        self.foreign_phrase_definition_pairs.append(pair)

    def freeze(self) -> None:
        """Mark the sentence as immutable once tracks are being built."""
        self._frozen = True


class FragmentSlot(Enum):
    """Which half of a pair a fragment represents."""
    FOREIGN_WORD = 1
    DEFINITION = 2

    @property
    def label(self) -> str:
        return _SLOT_LABELS[self]

    @classmethod
    def from_label(cls, label: str) -> "FragmentSlot":
        for slot, slot_label in _SLOT_LABELS.items():
            if slot_label == label:
                return slot
        raise ValueError(f"Unknown fragment label: {label!r}")


_SLOT_LABELS = {
    FragmentSlot.FOREIGN_WORD: "foreign word",
    FragmentSlot.DEFINITION: "definition",
}


class VoiceGender(Enum):
    """Voice gender requested from the speech synthesis service."""
    MALE = "male"
    FEMALE = "female"


@dataclass(frozen=True)
class FragmentDescriptor:
    """Ordering and pause metadata for one generated speech fragment."""
    pair_index: int
    slot: FragmentSlot
    label: str
    definition: str
    before_pause_padding: int
    after_pause_padding: int
    full_path: Path

    def __post_init__(self):
        if not isinstance(self.pair_index, int) or self.pair_index < 1:
            raise ValueError(f"Pair index must be a positive integer, got {self.pair_index!r}")
        if self.before_pause_padding < 0 or self.after_pause_padding < 0:
            raise ValueError("Pause padding must not be negative")

    @property
    def ordering_key(self):
        """Total playback order: pair index first, then slot."""
        return (self.pair_index, self.slot.value)


@dataclass(frozen=True)
class OrderedSegment:
    """A speech fragment or a fixed-duration silence, in playback order."""
    path: Path
    silence_seconds: int = 0

    @classmethod
    def speech(cls, path: Union[str, Path]) -> "OrderedSegment":
        return cls(path=Path(path))

    @classmethod
    def silence(cls, seconds: int, path: Union[str, Path]) -> "OrderedSegment":
        if seconds < 1:
            raise ValueError(f"Silence segments need a positive duration, got {seconds}")
        return cls(path=Path(path), silence_seconds=seconds)

    @property
    def is_silence(self) -> bool:
        return self.silence_seconds > 0


@dataclass
class ProductionTrack:
    """A fully ordered output file before concatenation."""
    save_path: Path
    segments: List[OrderedSegment]

    @property
    def file_paths(self) -> List[str]:
        return [str(segment.path) for segment in self.segments]


@dataclass(frozen=True)
class PrefixNaming:
    """Destination name derived as '{prefix} - {sentence folder}.{ext}'."""
    prefix: str


@dataclass(frozen=True)
class ExplicitNaming:
    """Destination name given verbatim, extension included."""
    file_name: str


NamingPolicy = Union[PrefixNaming, ExplicitNaming]


@dataclass
class ProductionResult:
    """Outcome of assembling one production track."""
    success: bool
    path: Path
    error: Optional[ConcatenationError] = None

