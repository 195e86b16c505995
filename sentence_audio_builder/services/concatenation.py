"""
Concatenation engine built on pydub (ffmpeg).
"""

import logging
from pathlib import Path
from typing import List

from pydub import AudioSegment

from sentence_audio_builder.errors import ConcatenationError
from sentence_audio_builder.services.base import AudioConcatenator


logger = logging.getLogger(__name__)


class PydubConcatenator(AudioConcatenator):
    """Joins audio files end to end and exports in the destination's format."""

    def __init__(self, codec: str = None, bitrate: str = None):
        """
        Args:
            codec: ffmpeg codec for export (ffmpeg default for the format if None)
            bitrate: Export bitrate, e.g. '64k'
        """
        self.codec = codec
        self.bitrate = bitrate

    def concatenate(self, file_paths: List[str], destination: str) -> None:
        if not file_paths:
            raise ConcatenationError(destination, ValueError("no input files"))

        destination = Path(destination)
        export_format = destination.suffix.lstrip('.').lower() or 'ogg'

        logger.info(f"ffmpeg build process started on file at: {destination}")
        try:
            combined = AudioSegment.empty()
            for file_path in file_paths:
                combined += AudioSegment.from_file(str(file_path))

            combined.export(
                str(destination),
                format=export_format,
                codec=self.codec,
                bitrate=self.bitrate,
            )
        except Exception as e:
            logger.error(f"Concatenation failed for {destination}: {e}")
            raise ConcatenationError(destination, e) from e

        logger.info(f"Successfully created file at: {destination} ({len(combined) / 1000:.1f}s)")
