"""
Playback sequence assembly for word and definition tracks.
"""

import logging
from collections import defaultdict
from pathlib import Path
from typing import Iterable, List, Union

from ..errors import SequenceConsistencyError
from ..models import FragmentDescriptor, FragmentSlot, OrderedSegment
from .fragments import FragmentCodec
from .silence import SilenceRegistry


logger = logging.getLogger(__name__)


class SequenceAssembler:
    """
    Orders decoded fragments and interleaves their silence padding.

    Fragments are sorted by (pair index, slot). Each fragment contributes
    an optional leading silence, its speech, and an optional trailing
    silence.
    """

    def __init__(self, silence_registry: SilenceRegistry):
        self.silence_registry = silence_registry

    def assemble(self, descriptors: Iterable[FragmentDescriptor],
                 verify_complete: bool = False) -> List[OrderedSegment]:
        """
        Build the ordered segment list for a word and definition track.

        Args:
            descriptors: Descriptors for every generated fragment
            verify_complete: Also require both slots for every pair index

        Returns:
            Ordered list of speech and silence segments

        Raises:
            SequenceConsistencyError: If there are no descriptors, or two
                share an ordering key, or (with verify_complete) a pair is
                missing one of its slots
        """
        descriptors = list(descriptors)
        if not descriptors:
            raise SequenceConsistencyError("Cannot assemble a track with no fragments")

        ordered = sorted(descriptors, key=lambda d: d.ordering_key)
        self._check_unique(ordered)
        if verify_complete:
            self._check_complete(ordered)

        segments: List[OrderedSegment] = []
        for descriptor in ordered:
            if descriptor.before_pause_padding != 0:
                segments.append(self.silence_registry.segment(descriptor.before_pause_padding))

            segments.append(OrderedSegment.speech(descriptor.full_path))

            if descriptor.after_pause_padding != 0:
                segments.append(self.silence_registry.segment(descriptor.after_pause_padding))

        logger.info(
            f"Assembled {len(ordered)} fragments into {len(segments)} segments"
        )
        return segments

    def assemble_directory(self, folder: Union[str, Path], codec: FragmentCodec,
                           verify_complete: bool = True) -> List[OrderedSegment]:
        """
        Decode a staged fragment folder and assemble it.

        Any malformed fragment name aborts the build with FilenameParseError.
        """
        descriptors = codec.decode_directory(folder).require_complete()
        return self.assemble(descriptors, verify_complete=verify_complete)

    def _check_unique(self, ordered: List[FragmentDescriptor]) -> None:
        previous = None
        for descriptor in ordered:
            if previous is not None and previous.ordering_key == descriptor.ordering_key:
                raise SequenceConsistencyError(
                    f"Duplicate fragment for pair {descriptor.pair_index} "
                    f"({descriptor.slot.label}): {previous.full_path} and {descriptor.full_path}",
                    pair_index=descriptor.pair_index,
                )
            previous = descriptor

    def _check_complete(self, ordered: List[FragmentDescriptor]) -> None:
        slots_by_pair = defaultdict(set)
        for descriptor in ordered:
            slots_by_pair[descriptor.pair_index].add(descriptor.slot)

        for pair_index, slots in slots_by_pair.items():
            missing = set(FragmentSlot) - slots
            if missing:
                labels = ", ".join(sorted(slot.label for slot in missing))
                raise SequenceConsistencyError(
                    f"Pair {pair_index} is missing its {labels} fragment",
                    pair_index=pair_index,
                )
