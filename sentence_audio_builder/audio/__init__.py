"""
Audio sequence assembly: pause rules, fragment naming, and track ordering.
"""

from .pauses import main_pause, inter_word_pause, MAX_PAUSE_SECONDS
from .silence import SilenceRegistry, PacingConfig, SlotPadding
from .fragments import FragmentCodec, DecodeReport
from .sequence import SequenceAssembler
from .sentence_track import SentenceTrackBuilder
from .production import ProductionAssembler, resolve_naming

__all__ = [
    'main_pause',
    'inter_word_pause',
    'MAX_PAUSE_SECONDS',
    'SilenceRegistry',
    'PacingConfig',
    'SlotPadding',
    'FragmentCodec',
    'DecodeReport',
    'SequenceAssembler',
    'SentenceTrackBuilder',
    'ProductionAssembler',
    'resolve_naming'
]
