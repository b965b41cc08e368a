"""
Shared transcription utilities and backend interface.

Defines the minimal backend protocol and the helpers that turn backend
segments into transcript lines (``start::end::text``).
"""

from dataclasses import dataclass
from typing import Any, Iterable, List

from ..models import Segment, TranscriptResult
from ..utils import format_transcript_line


@dataclass
class TranscriptionBackend:
    """Base backend interface for transcription engines."""
    name: str

    def transcribe(self, audio_path: str, **kwargs: Any) -> TranscriptResult:
        raise NotImplementedError


def _get_attr(obj: Any, name: str, default: Any = None) -> Any:
    if isinstance(obj, dict):
        return obj.get(name, default)
    return getattr(obj, name, default)


def _clean_text(text: str) -> str:
    # One transcript line per segment
    return " ".join((text or "").split())


def normalize_segments(raw_segments: Iterable[Any]) -> List[Segment]:
    """Convert backend segments (objects or dicts) into Segment models."""
    segments: List[Segment] = []
    for segment in raw_segments or []:
        start = _get_attr(segment, "start", 0.0)
        end = _get_attr(segment, "end", 0.0)
        text = _clean_text(_get_attr(segment, "text", ""))
        segments.append(Segment(start=float(start), end=float(end), text=text))
    return segments


def format_transcript(result: TranscriptResult) -> str:
    """
    Serialize a transcription result as transcript file content.

    Timed segments become one ``start::end::text`` line each, with times
    written to two decimals. A result without segments falls back to its
    untimed full text.

    Example:
        >>> format_transcript(TranscriptResult(segments=[Segment(0, 1.5, "Hi")]))
        '0.00::1.50::Hi\\n'
    """
    if result.segments:
        lines = [format_transcript_line(s.start, s.end, s.text) for s in result.segments]
    else:
        lines = [result.text]
    return "".join(f"{line}\n" for line in lines)
