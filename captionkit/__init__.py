"""
CaptionKit - Captions and Scrubbing for Media Players

A toolkit-agnostic library for the caption and progress-bar logic of a video
player, plus an offline pipeline that produces per-language transcripts.

Features:
- Parse ``start::end::text`` transcripts into a per-second caption index
- Map pointer positions on a scrub bar to normalized play positions
- Player controller with speed and caption-language selection
- Extract audio with ffmpeg, transcribe it, and translate the transcript

Example usage:
    >>> from captionkit import build_caption_index, pointer_to_normalized
    >>>
    >>> index = build_caption_index(["0.00::2.00::Hello", "2.00::4.50::World"])
    >>> index.lookup(3)
    'World'
    >>> pointer_to_normalized(50, 0, 200)
    0.25
"""

import logging

__version__ = "0.1.0"
__author__ = "CaptionKit Contributors"
__license__ = "MIT"

# Add NullHandler to prevent "No handler found" warnings
# Users should configure logging in their application if they want to see logs
logging.getLogger(__name__).addHandler(logging.NullHandler())

# Core utility functions
from .utils import (
    format_clock,
    format_timestamp_label,
    format_transcript_line,
    transcript_path,
)

# Caption index
from .captions import (
    NOT_AVAILABLE,
    parse_transcript_line,
    parse_transcript,
    build_caption_index,
    build_caption_index_from_entries,
    lookup,
    load_caption_index,
    CaptionDisplay,
)

# Progress mapping
from .progress import (
    pointer_to_normalized,
    normalized_to_fill_offset,
    clamp01,
    HoverAnimator,
    ProgressBar,
)

# Player controller
from .player import (
    PlaybackState,
    VideoPlayerManager,
    build_speed_options,
    build_language_options,
)

# Data models
from .models import (
    TranscriptEntry,
    CaptionIndex,
    Segment,
    TranscriptResult,
    GenerateConfig,
    TranscribeConfig,
)

# Errors
from .errors import (
    CaptionKitError,
    TranscriptFormatError,
    AudioExtractionError,
    TranscriptionError,
    TranslationError,
)

# Pipeline
from .audio import extract_audio
from .transcription import transcribe_to_transcript, transcribe_from_config, format_transcript
from .translation import TranslationClient
from .generator import CaptionGenerator, GenerationReport

__all__ = [
    # Version info
    "__version__",
    "__author__",
    "__license__",

    # Utility functions
    "format_clock",
    "format_timestamp_label",
    "format_transcript_line",
    "transcript_path",

    # Caption index
    "NOT_AVAILABLE",
    "parse_transcript_line",
    "parse_transcript",
    "build_caption_index",
    "build_caption_index_from_entries",
    "lookup",
    "load_caption_index",
    "CaptionDisplay",

    # Progress mapping
    "pointer_to_normalized",
    "normalized_to_fill_offset",
    "clamp01",
    "HoverAnimator",
    "ProgressBar",

    # Player controller
    "PlaybackState",
    "VideoPlayerManager",
    "build_speed_options",
    "build_language_options",

    # Models
    "TranscriptEntry",
    "CaptionIndex",
    "Segment",
    "TranscriptResult",
    "GenerateConfig",
    "TranscribeConfig",

    # Errors
    "CaptionKitError",
    "TranscriptFormatError",
    "AudioExtractionError",
    "TranscriptionError",
    "TranslationError",

    # Pipeline
    "extract_audio",
    "transcribe_to_transcript",
    "transcribe_from_config",
    "format_transcript",
    "TranslationClient",
    "CaptionGenerator",
    "GenerationReport",
]
