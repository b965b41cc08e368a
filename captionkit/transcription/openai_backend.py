"""
OpenAI Whisper backend adapter.

Calls the hosted audio transcription endpoint and requests segment-level
timestamps (``verbose_json``).
"""

import logging
import os
from typing import Any, Optional

import requests

from .base import TranscriptionBackend, normalize_segments
from ..errors import TranscriptionError
from ..models import TranscriptResult

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://api.openai.com/v1"


class OpenAIWhisperBackend(TranscriptionBackend):
    """
    Backend adapter for the OpenAI audio transcription API.

    Args:
        api_key: OpenAI API key (default: OPENAI_API_KEY environment variable)
        model_name: Transcription model (default: whisper-1)
        api_base: API base URL
        timeout: Request timeout in seconds
        session: Optional requests session to reuse
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model_name: str = "whisper-1",
        api_base: str = DEFAULT_API_BASE,
        timeout: int = 300,
        session: Optional[requests.Session] = None,
    ) -> None:
        super().__init__(name="openai")
        self.api_key = api_key or os.environ.get("OPENAI_API_KEY")
        self.model_name = model_name
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def transcribe(self, audio_path: str, language: Optional[str] = None, **kwargs: Any) -> TranscriptResult:
        """
        Transcribe an audio file.

        Raises:
            TranscriptionError: If no API key is configured, the request fails,
                or the response is not valid JSON
        """
        if not self.api_key:
            raise TranscriptionError("No OpenAI API key configured")

        data = [
            ("model", self.model_name),
            ("response_format", "verbose_json"),
            ("timestamp_granularities[]", "segment"),
        ]
        if language:
            data.append(("language", language))
        for key, value in kwargs.items():
            data.append((key, str(value)))

        url = f"{self.api_base}/audio/transcriptions"
        logger.info(f"Requesting transcription of {audio_path} ({self.model_name})")

        try:
            with open(audio_path, "rb") as audio_file:
                response = self.session.post(
                    url,
                    headers={"Authorization": f"Bearer {self.api_key}"},
                    data=data,
                    files={"file": (os.path.basename(audio_path), audio_file)},
                    timeout=self.timeout,
                )
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            logger.error(f"Transcription request failed: {str(e)}")
            raise TranscriptionError(f"Transcription failed: {str(e)}") from e
        except ValueError as e:
            raise TranscriptionError(f"Transcription response is not JSON: {str(e)}") from e
        except OSError as e:
            raise TranscriptionError(f"Cannot read audio file {audio_path}: {str(e)}") from e

        segments = normalize_segments(payload.get("segments") or [])
        logger.info(f"Transcription returned {len(segments)} segments")
        return TranscriptResult(
            segments=segments,
            text=(payload.get("text") or "").strip(),
            language=payload.get("language"),
        )
