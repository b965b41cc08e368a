"""
Shared utility functions for CaptionKit.

Provides time formatting for the player's timestamp label, transcript line
serialization, and the per-language transcript path convention.
"""

import os
from typing import Optional

# Field delimiter of the transcript file format
TRANSCRIPT_DELIMITER = "::"
TRANSCRIPT_EXT = ".txt"


def format_clock(seconds: float) -> str:
    """
    Format seconds as M:SS for the player timestamp label.

    Minutes wrap at the hour, matching a TimeSpan's Minutes component.

    Args:
        seconds: Time in seconds

    Returns:
        Clock string such as "1:05"

    Example:
        >>> format_clock(65.4)
        '1:05'
    """
    total = int(max(0.0, seconds))
    minutes = (total // 60) % 60
    secs = total % 60
    return f"{minutes:d}:{secs:02d}"


def format_timestamp_label(current: float, total: float) -> str:
    """
    Build the "current / total" label shown next to the progress bar.

    Example:
        >>> format_timestamp_label(5, 125)
        '0:05 / 2:05'
    """
    return f"{format_clock(current)} / {format_clock(total)}"


def format_transcript_line(start: float, end: float, text: str) -> str:
    """
    Serialize one timed segment as a transcript line.

    Times are written with two decimals; text is written verbatim.

    Example:
        >>> format_transcript_line(0, 2.5, "Hello")
        '0.00::2.50::Hello'
    """
    return f"{start:.2f}{TRANSCRIPT_DELIMITER}{end:.2f}{TRANSCRIPT_DELIMITER}{text}"


def transcript_path(root: str, language: str, clip_name: str) -> str:
    """
    Get the transcript file path for a clip in a language.

    Layout: <root>/<language>/<clip_name>.txt

    Example:
        >>> transcript_path("captions", "English", "intro")
        'captions/English/intro.txt'
    """
    return os.path.join(root, language, f"{clip_name}{TRANSCRIPT_EXT}")


def clip_name_from_path(media_path: str) -> str:
    """Return the clip name (file stem) of a media path."""
    return os.path.splitext(os.path.basename(media_path))[0]


def sibling_path(media_path: str, ext: str) -> str:
    """Return media_path with its extension replaced by ext."""
    if not ext.startswith("."):
        ext = "." + ext
    return os.path.splitext(media_path)[0] + ext


def atomic_write_text(path: str, content: str, encoding: Optional[str] = "utf-8") -> None:
    """
    Write text to path through a temporary sibling file and a rename.

    Readers never observe a partially written file.
    """
    directory = os.path.dirname(path) or "."
    os.makedirs(directory, exist_ok=True)
    tmp_path = f"{path}.tmp"
    try:
        with open(tmp_path, "w", encoding=encoding) as f:
            f.write(content)
        os.replace(tmp_path, path)
    finally:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
