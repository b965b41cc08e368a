"""Faster-Whisper backend adapter."""

from typing import Any

from .base import TranscriptionBackend, normalize_segments
from ..errors import TranscriptionError
from ..models import TranscriptResult


class FasterWhisperBackend(TranscriptionBackend):
    """Backend adapter for a local faster-whisper model."""

    def __init__(
        self,
        model_name: str = "base",
        device: str = "auto",
        compute_type: str = "default",
    ) -> None:
        super().__init__(name="faster-whisper")
        from faster_whisper import WhisperModel

        self.model = WhisperModel(model_name, device=device, compute_type=compute_type)

    def transcribe(self, audio_path: str, **kwargs: Any) -> TranscriptResult:
        """
        Transcribe an audio file with the local model.

        Raises:
            TranscriptionError: If the model fails while transcribing or
                decoding segments
        """
        try:
            segments, info = self.model.transcribe(audio_path, **kwargs)
            # faster-whisper yields segments lazily; decoding happens here
            normalized = normalize_segments(list(segments))
        except Exception as e:
            raise TranscriptionError(f"Transcription failed: {str(e)}") from e

        return TranscriptResult(
            segments=normalized,
            text=" ".join(s.text for s in normalized),
            language=getattr(info, "language", None),
        )
