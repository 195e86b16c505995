"""
Silence registry and pacing policy.

Silence is never synthesized. A fixed folder holds one pre-built file per
whole-second duration, and every pause in a track refers to one of them.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from ..models import FragmentSlot, OrderedSegment
from .pauses import MAX_PAUSE_SECONDS


logger = logging.getLogger(__name__)


@dataclass
class SilenceRegistry:
    """Pre-built silence files addressable by duration (1-12 seconds)."""
    silence_dir: Path
    extension: str = "ogg"
    max_seconds: int = MAX_PAUSE_SECONDS

    def __post_init__(self):
        self.silence_dir = Path(self.silence_dir)

    @property
    def durations(self) -> List[int]:
        return list(range(1, self.max_seconds + 1))

    def path_for(self, seconds: int) -> Path:
        """
        Get the silence file for a duration.

        Args:
            seconds: Whole seconds of silence

        Returns:
            Path to the silence file

        Raises:
            ValueError: If no silence file exists for that duration
        """
        if seconds not in self.durations:
            raise ValueError(
                f"No silence file for {seconds}s; available durations are 1-{self.max_seconds}s"
            )
        return self.silence_dir / f"{seconds}.{self.extension}"

    def segment(self, seconds: int) -> OrderedSegment:
        return OrderedSegment.silence(seconds, self.path_for(seconds))

    def missing(self) -> List[Path]:
        """List silence files that are absent from the silence folder."""
        absent = [self.path_for(seconds) for seconds in self.durations
                  if not self.path_for(seconds).is_file()]
        if absent:
            logger.warning(
                f"{len(absent)} silence files missing from {self.silence_dir}: "
                + ", ".join(path.name for path in absent)
            )
        return absent


@dataclass(frozen=True)
class SlotPadding:
    """Silence inserted around one kind of fragment (0 = no pause)."""
    before: int = 0
    after: int = 0


@dataclass
class PacingConfig:
    """Centralized pause policy for every track type."""

    # Sentence track
    sentence_trailing_pause: int = 3
    inter_repeat_pause: int = 2

    # Word and definition track
    slot_padding: dict = field(default_factory=lambda: {
        FragmentSlot.FOREIGN_WORD: SlotPadding(before=1, after=3),
        FragmentSlot.DEFINITION: SlotPadding(before=0, after=0),
    })

    def __post_init__(self):
        for name in ("sentence_trailing_pause", "inter_repeat_pause"):
            self._check_duration(name, getattr(self, name), allow_zero=False)
        for slot, padding in self.slot_padding.items():
            self._check_duration(f"{slot.name} before", padding.before)
            self._check_duration(f"{slot.name} after", padding.after)

    def padding_for(self, slot: FragmentSlot) -> SlotPadding:
        return self.slot_padding.get(slot, SlotPadding())

    @staticmethod
    def _check_duration(name: str, seconds: int, allow_zero: bool = True) -> None:
        low = 0 if allow_zero else 1
        if not isinstance(seconds, int) or not low <= seconds <= MAX_PAUSE_SECONDS:
            raise ValueError(
                f"Pause '{name}' must be an integer between {low} and {MAX_PAUSE_SECONDS}, got {seconds!r}"
            )


def default_registry(silence_dir: Optional[Path] = None) -> SilenceRegistry:
    """Build the registry from Config unless a folder is given."""
    from ..config import Config

    return SilenceRegistry(
        silence_dir=silence_dir or Config.SILENCE_DIR,
        extension=Config.AUDIO_EXTENSION,
    )
