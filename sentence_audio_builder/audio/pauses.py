"""
Pause duration rules for sentence and word tracks.
"""

MAX_PAUSE_SECONDS = 12
"""Longest silence available in the silence registry."""

FIRST_WORD_LEAD_SECONDS = 2


def main_pause(foreign_word_count: int) -> int:
    """
    Pause between the English line and its foreign repetition.

    The first word gets a 2 second lead, plus one second per word
    thereafter, clamped to the longest available silence.

    Args:
        foreign_word_count: Number of words in the foreign sentence

    Returns:
        Pause duration in whole seconds, within [0, MAX_PAUSE_SECONDS]
    """
    _check_count(foreign_word_count)
    return min(FIRST_WORD_LEAD_SECONDS + foreign_word_count, MAX_PAUSE_SECONDS)


def inter_word_pause(word_count: int) -> int:
    """
    Reduced gap between plain-word repeats, without the leading credit.

    Neither the sentence track nor the words and definitions track applies
    this rule yet; word tracks take their gaps from PacingConfig slot padding.
    """
    _check_count(word_count)
    return min(max(word_count - 1, 0), MAX_PAUSE_SECONDS)


def _check_count(count: int) -> None:
    if isinstance(count, bool) or not isinstance(count, int):
        raise TypeError(f"Word count must be an integer, got {type(count).__name__}")
    if count < 0:
        raise ValueError(f"Word count must not be negative, got {count}")
