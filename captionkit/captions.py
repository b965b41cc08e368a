"""
Caption index builder for CaptionKit.

Parses transcript lines of the form ``<start>::<end>::<text>`` and expands
them into a per-second caption index that a player queries once per frame
with the current playback second.
"""

import codecs
import logging
import math
import os
from typing import Dict, Iterable, List, Optional, Tuple

from .errors import TranscriptFormatError
from .models import CaptionIndex, TranscriptEntry
from .utils import TRANSCRIPT_DELIMITER

logger = logging.getLogger(__name__)

# Shown when no caption index has been loaded at all
NOT_AVAILABLE = "N/A"


def parse_transcript_line(line: str) -> TranscriptEntry:
    """
    Parse one transcript line into a TranscriptEntry.

    Args:
        line: Raw line, ``<start_seconds>::<end_seconds>::<caption text>``

    Returns:
        Parsed TranscriptEntry (text kept verbatim, possibly empty)

    Raises:
        TranscriptFormatError: If the line does not have exactly three fields
            or a time field is not a finite decimal number

    Example:
        >>> parse_transcript_line("1.50::3.00::Hello")
        TranscriptEntry(start=1.5, end=3.0, text='Hello')
    """
    fields = line.rstrip("\r\n").split(TRANSCRIPT_DELIMITER)
    if len(fields) != 3:
        raise TranscriptFormatError(
            f"expected 3 fields separated by '{TRANSCRIPT_DELIMITER}', got {len(fields)}"
        )

    start_text, end_text, text = fields
    try:
        start = float(start_text)
        end = float(end_text)
    except ValueError:
        raise TranscriptFormatError(f"invalid time fields: {start_text!r}, {end_text!r}")

    if not (math.isfinite(start) and math.isfinite(end)):
        raise TranscriptFormatError(f"non-finite time fields: {start_text!r}, {end_text!r}")
    if start < 0:
        raise TranscriptFormatError(f"negative start time: {start_text!r}")

    return TranscriptEntry(start=start, end=end, text=text)


def parse_transcript(lines: Iterable[str]) -> Tuple[List[TranscriptEntry], List[Tuple[int, str]]]:
    """
    Parse transcript lines, skipping malformed ones.

    Blank lines are ignored. Every other line that fails to parse is logged
    as a warning and reported as ``(line_number, message)``; parsing
    continues with the next line.

    Args:
        lines: Ordered transcript lines

    Returns:
        Tuple of (entries in input order, warnings)
    """
    entries: List[TranscriptEntry] = []
    warnings: List[Tuple[int, str]] = []

    for line_number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            entries.append(parse_transcript_line(line))
        except TranscriptFormatError as e:
            logger.warning(f"Skipping malformed transcript line {line_number}: {e}")
            warnings.append((line_number, str(e)))

    return entries, warnings


def build_caption_index_from_entries(
    entries: Iterable[TranscriptEntry],
    warnings: Iterable[Tuple[int, str]] = (),
) -> CaptionIndex:
    """
    Expand transcript entries into a per-second caption index.

    Each entry covers the whole seconds ``floor(start)`` up to but not
    including ``floor(end)``. A second already owned by an earlier entry is
    not overwritten, so earlier lines win on overlap.

    Args:
        entries: Entries in transcript order
        warnings: Parse warnings to carry on the resulting index

    Returns:
        Completed CaptionIndex
    """
    captions: Dict[int, str] = {}
    overlaps = 0

    for entry in entries:
        for second in range(math.floor(entry.start), math.floor(entry.end)):
            if second in captions:
                overlaps += 1
                continue
            captions[second] = entry.text

    if overlaps:
        # Transcripts are expected to be non-overlapping; surface it for review
        logger.debug(f"Transcript overlap: {overlaps} second(s) kept their earlier caption")

    return CaptionIndex(captions=captions, warnings=tuple(warnings))


def build_caption_index(lines: Iterable[str]) -> CaptionIndex:
    """
    Build a caption index from raw transcript lines.

    Args:
        lines: Ordered transcript lines (``start::end::text``)

    Returns:
        CaptionIndex; malformed lines are skipped and listed in its warnings

    Example:
        >>> index = build_caption_index(["0.00::2.00::A", "2.00::5.00::B"])
        >>> [index.lookup(s) for s in range(6)]
        ['A', 'A', 'B', 'B', 'B', None]
    """
    entries, warnings = parse_transcript(lines)
    return build_caption_index_from_entries(entries, warnings)


def lookup(index: CaptionIndex, second: int) -> Optional[str]:
    """Return the caption covering a playback second, or None if absent."""
    return index.lookup(second)


def load_caption_index(path: str) -> Optional[CaptionIndex]:
    """
    Load a transcript file and build its caption index.

    Args:
        path: Path to a UTF-8 transcript file

    A leading UTF-8 byte order mark is ignored. A line that is not valid
    UTF-8 is skipped with a warning like any other malformed line.

    Returns:
        CaptionIndex, or None if the file does not exist
    """
    if not os.path.exists(path):
        logger.debug(f"No transcript at {path}, captions not available")
        return None

    with open(path, "rb") as f:
        raw = f.read()
    if raw.startswith(codecs.BOM_UTF8):
        raw = raw[len(codecs.BOM_UTF8):]

    lines: List[str] = []
    decode_warnings: List[Tuple[int, str]] = []
    for line_number, raw_line in enumerate(raw.splitlines(), start=1):
        try:
            lines.append(raw_line.decode("utf-8"))
        except UnicodeDecodeError as e:
            logger.warning(f"Skipping undecodable transcript line {line_number} in {path}: {e}")
            decode_warnings.append((line_number, f"invalid UTF-8: {e.reason}"))
            # Blank placeholder keeps the line numbers of later lines
            lines.append("")

    entries, warnings = parse_transcript(lines)
    index = build_caption_index_from_entries(entries, sorted(decode_warnings + warnings))
    logger.info(f"Loaded caption index from {path}: {len(index)} seconds covered")
    return index


class CaptionDisplay:
    """
    Presentation adapter for one caption text element.

    Distinguishes a second with no caption (empty text) from having no
    caption index at all (NOT_AVAILABLE).
    """

    def __init__(self, index: Optional[CaptionIndex] = None):
        self.index = index
        self.text = ""
        self.visible = True

    def set_caption_map(self, index: Optional[CaptionIndex]) -> None:
        self.index = index

    def text_for(self, second: int) -> str:
        if self.index is None or len(self.index) == 0:
            return NOT_AVAILABLE
        caption = self.index.lookup(second)
        return caption if caption is not None else ""

    def update(self, second: int) -> str:
        self.text = self.text_for(second)
        return self.text
