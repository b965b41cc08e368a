"""
Data models for CaptionKit.

Defines the core data structures used throughout the package.
"""

import os
from types import MappingProxyType
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional, Iterator, Mapping, Tuple


@dataclass(frozen=True)
class TranscriptEntry:
    """One parsed transcript line: a caption shown from start to end (seconds)."""
    start: float
    end: float
    text: str


@dataclass(frozen=True)
class CaptionIndex:
    """
    Per-second caption lookup table built from transcript entries.

    Keys are whole seconds. The mapping is copied into a read-only view on
    construction; a rebuild produces a new CaptionIndex.
    """
    captions: Mapping[int, str] = field(default_factory=dict)
    warnings: Tuple[Tuple[int, str], ...] = ()  # (line_number, message)

    def __post_init__(self) -> None:
        object.__setattr__(self, "captions", MappingProxyType(dict(self.captions)))
        object.__setattr__(self, "warnings", tuple(self.warnings))

    def lookup(self, second: int) -> Optional[str]:
        """Return the caption for a second, or None when no entry covers it."""
        return self.captions.get(second)

    def __len__(self) -> int:
        return len(self.captions)

    def __contains__(self, second: object) -> bool:
        return second in self.captions

    def __iter__(self) -> Iterator[int]:
        return iter(self.captions)


@dataclass
class Segment:
    """A timed segment returned by a transcription backend."""
    start: float
    end: float
    text: str


@dataclass
class TranscriptResult:
    """Transcription output: timed segments, or an untimed full-text block."""
    segments: List[Segment] = field(default_factory=list)
    text: str = ""
    language: Optional[str] = None


@dataclass
class GenerateConfig:
    """Configuration for the caption generation pipeline."""
    transcript_root: str
    languages: List[str] = field(default_factory=lambda: ["English"])  # index 0 = original
    ffmpeg_path: Optional[str] = "ffmpeg"  # None disables audio extraction
    api_key: Optional[str] = None
    audio_ext: str = ".mp3"
    transcription_model: str = "whisper-1"
    translation_model: str = "gpt-4o-mini"
    api_base: str = "https://api.openai.com/v1"
    timeout: int = 300
    delete_audio: bool = True

    def __post_init__(self) -> None:
        if not self.languages:
            raise ValueError("At least one language is required (index 0 = original)")
        if self.api_key is None:
            self.api_key = os.environ.get("OPENAI_API_KEY")

    @property
    def original_language(self) -> str:
        return self.languages[0]


@dataclass
class TranscribeConfig:
    """Configuration for audio transcription."""
    audio_path: str
    backend: str = "openai"
    model_name: Optional[str] = None  # backend default when None
    language: Optional[str] = None
    device: str = "auto"
    compute_type: str = "default"
    api_key: Optional[str] = None
    api_base: str = "https://api.openai.com/v1"
    timeout: int = 300
    backend_kwargs: Dict[str, Any] = field(default_factory=dict)
