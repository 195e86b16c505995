"""
Production track assembly: naming, concatenation, and result reporting.
"""

import logging
import threading
from pathlib import Path
from typing import List, Optional, Sequence, Set, Union

from ..errors import ConcatenationError, ConfigurationError, SequenceConsistencyError
from ..models import (
    ExplicitNaming, NamingPolicy, OrderedSegment, PrefixNaming,
    ProductionResult, ProductionTrack,
)
from ..services.base import AudioConcatenator


logger = logging.getLogger(__name__)


def resolve_naming(prefix: Optional[str] = None, file_name: Optional[str] = None) -> NamingPolicy:
    """
    Build a naming policy from keyword options.

    Exactly one of prefix or file_name must be given.

    Raises:
        ConfigurationError: If both or neither are supplied
    """
    if prefix is not None and file_name is not None:
        raise ConfigurationError("Specify either a prefix or an explicit file name, not both")
    if prefix is not None:
        return PrefixNaming(prefix)
    if file_name is not None:
        return ExplicitNaming(file_name)
    raise ConfigurationError("A prefix or an explicit file name is required")


class _DestinationLocks:
    """Tracks destinations (as resolved absolute paths) with a concatenation in progress."""

    def __init__(self):
        self._lock = threading.Lock()
        self._active: Set[Path] = set()

    def acquire(self, destination: Path) -> bool:
        with self._lock:
            if destination in self._active:
                return False
            self._active.add(destination)
            return True

    def release(self, destination: Path) -> None:
        with self._lock:
            self._active.discard(destination)


class ProductionAssembler:
    """
    Hands an ordered segment list to the concatenation engine.

    Concatenation failures are reported in the ProductionResult, never
    as success. Two concatenations may not write the same destination at
    the same time.
    """

    _destination_locks = _DestinationLocks()

    def __init__(self, concatenator: AudioConcatenator, extension: str = "ogg",
                 max_attempts: int = 1):
        """
        Args:
            concatenator: Concatenation engine
            extension: Extension used for prefix-named tracks
            max_attempts: Concatenation attempts per track (1 = no retry)
        """
        if max_attempts < 1:
            raise ConfigurationError(f"max_attempts must be at least 1, got {max_attempts}")
        self.concatenator = concatenator
        self.extension = extension
        self.max_attempts = max_attempts

    def destination_for(self, destination_dir: Union[str, Path], naming: NamingPolicy,
                        sentence_folder_name: str = "") -> Path:
        """
        Resolve the output path for a naming policy.

        Raises:
            ConfigurationError: If naming is not exactly one policy variant
        """
        destination_dir = Path(destination_dir)

        if isinstance(naming, PrefixNaming):
            if not sentence_folder_name:
                raise ConfigurationError("Prefix naming requires the sentence folder name")
            return destination_dir / f"{naming.prefix} - {sentence_folder_name}.{self.extension}"
        if isinstance(naming, ExplicitNaming):
            if not naming.file_name:
                raise ConfigurationError("Explicit naming requires a non-empty file name")
            return destination_dir / naming.file_name

        raise ConfigurationError(
            f"Naming policy must be PrefixNaming or ExplicitNaming, got {type(naming).__name__}"
        )

    def assemble(self, segments: Sequence[OrderedSegment], destination_dir: Union[str, Path],
                 naming: NamingPolicy, sentence_folder_name: str = "") -> ProductionResult:
        """
        Concatenate segments into a single production track.

        Args:
            segments: Ordered speech and silence segments
            destination_dir: Folder for the finished track
            naming: PrefixNaming or ExplicitNaming
            sentence_folder_name: Used by prefix naming

        Returns:
            ProductionResult with the final path, or the concatenation error

        Raises:
            ConfigurationError: If the naming policy is invalid
            SequenceConsistencyError: If there are no segments
        """
        destination = self.destination_for(destination_dir, naming, sentence_folder_name)

        if not segments:
            raise SequenceConsistencyError(f"No audio segments to write to {destination}")

        track = ProductionTrack(save_path=destination, segments=list(segments))
        return self.write(track)

    def write(self, track: ProductionTrack) -> ProductionResult:
        """Run the concatenation for a fully built track."""
        destination = track.save_path
        lock_key = destination.resolve()

        if not self._destination_locks.acquire(lock_key):
            error = ConcatenationError(
                destination, RuntimeError("another concatenation is writing this destination")
            )
            logger.error(str(error))
            return ProductionResult(success=False, path=destination, error=error)

        try:
            return self._concatenate_with_attempts(track.file_paths, destination)
        finally:
            self._destination_locks.release(lock_key)

    def _concatenate_with_attempts(self, file_paths: List[str], destination: Path) -> ProductionResult:
        last_error = None
        for attempt in range(1, self.max_attempts + 1):
            try:
                self.concatenator.concatenate(file_paths, str(destination))
            except ConcatenationError as e:
                last_error = e
            except Exception as e:
                last_error = ConcatenationError(destination, e)
            else:
                logger.info(f"Saved production track: {destination}")
                return ProductionResult(success=True, path=destination)

            logger.warning(
                f"Concatenation attempt {attempt}/{self.max_attempts} failed for {destination}: "
                f"{last_error.cause}"
            )

        return ProductionResult(success=False, path=destination, error=last_error)
