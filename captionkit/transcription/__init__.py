"""Transcription package with pluggable backends."""

import os
from typing import Any, Optional

from .base import TranscriptionBackend, format_transcript, normalize_segments
from .faster_whisper_backend import FasterWhisperBackend
from .openai_backend import OpenAIWhisperBackend
from ..models import TranscribeConfig, TranscriptResult

BACKENDS = ("openai", "faster-whisper")


def get_backend(
    backend: str = "openai",
    model_name: Optional[str] = None,
    device: str = "auto",
    compute_type: str = "default",
    api_key: Optional[str] = None,
    api_base: str = "https://api.openai.com/v1",
    timeout: int = 300,
) -> TranscriptionBackend:
    """
    Create a transcription backend by name.

    Raises:
        ValueError: If the backend name is not supported
    """
    if backend == "openai":
        return OpenAIWhisperBackend(
            api_key=api_key,
            model_name=model_name or "whisper-1",
            api_base=api_base,
            timeout=timeout,
        )
    if backend == "faster-whisper":
        return FasterWhisperBackend(
            model_name=model_name or "base",
            device=device,
            compute_type=compute_type,
        )
    raise ValueError(f"Unsupported transcription backend: {backend}")


def transcribe_audio(
    audio_path: str,
    backend: Any = "openai",
    language: Optional[str] = None,
    **backend_kwargs: Any,
) -> TranscriptResult:
    """
    Transcribe an audio file.

    Args:
        audio_path: Path to input audio file.
        backend: Backend name or an existing TranscriptionBackend instance.
        language: Optional spoken-language hint passed to the backend.
        **backend_kwargs: Extra kwargs passed to the backend's transcribe.

    Returns:
        TranscriptResult with timed segments (or untimed text).
    """
    if not os.path.exists(audio_path):
        raise FileNotFoundError(f"Audio file not found: {audio_path}")

    backend_impl = get_backend(backend) if isinstance(backend, str) else backend
    if language:
        backend_kwargs["language"] = language
    return backend_impl.transcribe(audio_path, **backend_kwargs)


def transcribe_to_transcript(
    audio_path: str,
    backend: Any = "openai",
    language: Optional[str] = None,
    **backend_kwargs: Any,
) -> str:
    """
    Transcribe audio and return transcript file content.

    Returns:
        ``start::end::text`` lines, one per segment, or the untimed text.
    """
    result = transcribe_audio(audio_path, backend=backend, language=language, **backend_kwargs)
    return format_transcript(result)


def transcribe_from_config(config: TranscribeConfig) -> str:
    """Transcribe audio using a TranscribeConfig object."""
    backend = get_backend(
        config.backend,
        model_name=config.model_name,
        device=config.device,
        compute_type=config.compute_type,
        api_key=config.api_key,
        api_base=config.api_base,
        timeout=config.timeout,
    )
    return transcribe_to_transcript(
        config.audio_path,
        backend=backend,
        language=config.language,
        **config.backend_kwargs,
    )


__all__ = [
    "BACKENDS",
    "TranscriptionBackend",
    "OpenAIWhisperBackend",
    "FasterWhisperBackend",
    "get_backend",
    "normalize_segments",
    "format_transcript",
    "transcribe_audio",
    "transcribe_to_transcript",
    "transcribe_from_config",
]
