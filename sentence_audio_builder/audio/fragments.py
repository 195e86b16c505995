"""
Fragment file name encoding and decoding.

Generated fragments are staged in a scratch folder under names that carry
their playback order, e.g. ``31 - foreign word - house.ogg``: pair index 3,
slot 1 (the foreign word), label, and the definition for traceability.
Decoding turns such names back into FragmentDescriptor objects.
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Union

from ..errors import FilenameParseError
from ..models import FragmentDescriptor, FragmentSlot, sanitize_file_name
from .silence import PacingConfig


logger = logging.getLogger(__name__)


_FRAGMENT_NAME_RE = re.compile(
    r"^(?P<index>[1-9]\d*)(?P<slot>[12]) - (?P<label>foreign word|definition) - "
    r"(?P<definition>.*)\.(?P<ext>[A-Za-z0-9]+)$"
)

MAX_DEFINITION_NAME_LENGTH = 80


@dataclass
class DecodeReport:
    """Descriptors decoded from a folder, plus every name that failed."""
    descriptors: List[FragmentDescriptor] = field(default_factory=list)
    failures: List[str] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        return not self.failures

    def require_complete(self) -> List[FragmentDescriptor]:
        """
        Return the descriptors, or raise if any fragment failed to decode.

        Raises:
            FilenameParseError: Listing every malformed fragment name
        """
        if self.failures:
            raise FilenameParseError(
                f"{len(self.failures)} fragment name(s) could not be decoded: "
                + ", ".join(self.failures),
                file_names=self.failures,
            )
        return self.descriptors


class FragmentCodec:
    """
    Encodes fragment metadata into file names and decodes it back.

    Pause padding is not stored in the name; it is derived from the slot
    through the pacing policy so that it is defined in one place.
    """

    def __init__(self, pacing: PacingConfig = None, extension: str = "ogg"):
        self.pacing = pacing or PacingConfig()
        self.extension = extension

    def encode(self, pair_index: int, slot: FragmentSlot, definition: str) -> str:
        """
        Build the file name for a generated fragment.

        Args:
            pair_index: Positive pair index (one per pair per repeat)
            slot: Foreign word or definition
            definition: English definition of the pair

        Returns:
            File name such as '31 - foreign word - house.ogg'
        """
        if isinstance(pair_index, bool) or not isinstance(pair_index, int) or pair_index < 1:
            raise ValueError(f"Pair index must be a positive integer, got {pair_index!r}")

        safe_definition = sanitize_file_name(definition, MAX_DEFINITION_NAME_LENGTH)
        return f"{pair_index}{slot.value} - {slot.label} - {safe_definition}.{self.extension}"

    def describe(self, pair_index: int, slot: FragmentSlot, definition: str,
                 full_path: Union[str, Path]) -> FragmentDescriptor:
        """Build a descriptor directly, applying the slot's padding."""
        padding = self.pacing.padding_for(slot)
        return FragmentDescriptor(
            pair_index=pair_index,
            slot=slot,
            label=slot.label,
            definition=definition,
            before_pause_padding=padding.before,
            after_pause_padding=padding.after,
            full_path=Path(full_path),
        )

    def decode(self, file_name: str, folder: Union[str, Path] = ".") -> FragmentDescriptor:
        """
        Decode one fragment file name.

        Args:
            file_name: Bare file name (no directory part)
            folder: Folder the fragment lives in

        Returns:
            FragmentDescriptor with ordering, padding and full path

        Raises:
            FilenameParseError: If the name does not follow the fragment pattern
        """
        match = _FRAGMENT_NAME_RE.match(file_name)
        if not match:
            raise FilenameParseError(
                f"Not a fragment file name: '{file_name}'", file_names=[file_name]
            )

        if match.group('ext').lower() != self.extension.lower():
            raise FilenameParseError(
                f"Fragment '{file_name}' is not a .{self.extension} file",
                file_names=[file_name],
            )

        slot = FragmentSlot(int(match.group('slot')))
        label = match.group('label')
        if FragmentSlot.from_label(label) is not slot:
            raise FilenameParseError(
                f"Fragment '{file_name}' has slot {slot.value} but label '{label}'",
                file_names=[file_name],
            )

        return self.describe(
            pair_index=int(match.group('index')),
            slot=slot,
            definition=match.group('definition'),
            full_path=Path(folder) / file_name,
        )

    def decode_directory(self, folder: Union[str, Path]) -> DecodeReport:
        """
        Decode every fragment in a scratch folder.

        Malformed names are collected rather than skipped silently; callers
        decide whether to abort via DecodeReport.require_complete().
        """
        folder = Path(folder)
        report = DecodeReport()

        for path in sorted(folder.iterdir()):
            if not path.is_file() or path.name.startswith('.'):
                continue
            try:
                report.descriptors.append(self.decode(path.name, folder))
            except FilenameParseError:
                logger.error(f"Malformed fragment name in {folder}: {path.name}")
                report.failures.append(path.name)

        logger.debug(
            f"Decoded {len(report.descriptors)} fragments from {folder} "
            f"({len(report.failures)} failures)"
        )
        return report
