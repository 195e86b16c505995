"""
Segment ordering for sentence repetition tracks.
"""

import logging
from pathlib import Path
from typing import List, Union

from ..errors import ConfigurationError
from ..models import OrderedSegment
from .pauses import main_pause
from .silence import PacingConfig, SilenceRegistry


logger = logging.getLogger(__name__)


class SentenceTrackBuilder:
    """
    Sequences pre-generated English and foreign sentence audio.

    The first pass leaves a long pause, sized by the foreign word count,
    for the listener to attempt the translation. Repeats use the shorter
    inter-repeat pause.
    """

    def __init__(self, silence_registry: SilenceRegistry, pacing: PacingConfig = None):
        self.silence_registry = silence_registry
        self.pacing = pacing or PacingConfig()

    def build(self, english_fragment: Union[str, Path], foreign_fragment: Union[str, Path],
              repeat_count: int, foreign_word_count: int = 0) -> List[OrderedSegment]:
        """
        Build the ordered segment list for a sentence track.

        Args:
            english_fragment: Path to the English sentence audio
            foreign_fragment: Path to the foreign sentence audio
            repeat_count: Number of passes (positive)
            foreign_word_count: Words in the foreign sentence, sizes the main pause

        Returns:
            4 segments per pass: english, pause, foreign, trailing pause

        Raises:
            ConfigurationError: If repeat_count is not a positive integer
        """
        if isinstance(repeat_count, bool) or not isinstance(repeat_count, int) or repeat_count < 1:
            raise ConfigurationError(
                f"Repeat count must be a positive integer, got {repeat_count!r}"
            )

        english = OrderedSegment.speech(english_fragment)
        foreign = OrderedSegment.speech(foreign_fragment)
        trailing = self.silence_registry.segment(self.pacing.sentence_trailing_pause)

        # main_pause is at least 2 seconds, so it always maps to a silence file
        segments = [
            english,
            self.silence_registry.segment(main_pause(foreign_word_count)),
            foreign,
            trailing,
        ]

        repeat_pause = self.silence_registry.segment(self.pacing.inter_repeat_pause)
        for _ in range(repeat_count - 1):
            segments.extend([english, repeat_pause, foreign, trailing])

        logger.debug(f"Built sentence track with {repeat_count} passes ({len(segments)} segments)")
        return segments
