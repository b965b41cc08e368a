"""
Caption generation pipeline for CaptionKit.

Extracts a clip's audio, transcribes it, and writes one transcript file per
configured language under ``<transcript_root>/<language>/<clip>.txt``. The
first language is the clip's original language; the others are translated
from it. Existing transcript files are never overwritten, so re-running the
pipeline only fills in what is missing.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from .audio import audio_path_for, extract_audio, remove_audio
from .errors import AudioExtractionError, TranscriptionError, TranslationError
from .captions import parse_transcript
from .models import GenerateConfig
from .transcription import OpenAIWhisperBackend, TranscriptionBackend, format_transcript
from .translation import TranslationClient
from .utils import atomic_write_text, clip_name_from_path, transcript_path

logger = logging.getLogger(__name__)


@dataclass
class GenerationReport:
    """Outcome of one pipeline run."""
    clip_name: str
    written: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    failed: Dict[str, str] = field(default_factory=dict)  # path -> reason
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and not self.failed


class CaptionGenerator:
    """
    Generates per-language transcript files for video clips.

    Args:
        config: Pipeline configuration (languages, paths, API settings)
        transcriber: Transcription backend (default: OpenAI Whisper)
        translator: Translation client (default: OpenAI chat completions)
        extractor: Audio extraction callable ``(video_path, ffmpeg_path, audio_ext) -> audio_path``
    """

    def __init__(
        self,
        config: GenerateConfig,
        transcriber: Optional[TranscriptionBackend] = None,
        translator: Optional[TranslationClient] = None,
        extractor: Callable[..., str] = extract_audio,
    ):
        self.config = config
        self.transcriber = transcriber or OpenAIWhisperBackend(
            api_key=config.api_key,
            model_name=config.transcription_model,
            api_base=config.api_base,
            timeout=config.timeout,
        )
        self.translator = translator or TranslationClient(
            api_key=config.api_key,
            model=config.translation_model,
            api_base=config.api_base,
            timeout=config.timeout,
        )
        self.extractor = extractor

    def transcript_path(self, language: str, clip_name: str) -> str:
        return transcript_path(self.config.transcript_root, language, clip_name)

    def transcript_exists(self, language: str, clip_name: str) -> bool:
        return os.path.exists(self.transcript_path(language, clip_name))

    def generate(self, video_path: str, clip_name: Optional[str] = None) -> GenerationReport:
        """
        Run the full pipeline for one clip.

        If the original-language transcript already exists it is reused and
        no audio is extracted or transcribed; only missing translations are
        requested.

        Args:
            video_path: Source media file
            clip_name: Name used for transcript files (default: file stem)

        Returns:
            GenerationReport; external failures are reported there, not raised
        """
        clip_name = clip_name or clip_name_from_path(video_path)
        report = GenerationReport(clip_name=clip_name)
        original_path = self.transcript_path(self.config.original_language, clip_name)

        if os.path.exists(original_path):
            logger.info(f"Reusing existing transcript: {original_path}")
            with open(original_path, "r", encoding="utf-8-sig", errors="replace") as f:
                transcript = f.read()
        else:
            transcript = self._transcribe_clip(video_path, report)
            if transcript is None:
                return report

        self.write_transcripts(clip_name, transcript, report)
        return report

    def _transcribe_clip(self, video_path: str, report: GenerationReport) -> Optional[str]:
        extracted = False
        audio_path = audio_path_for(video_path, self.config.audio_ext)

        try:
            if os.path.exists(audio_path):
                # Audio already next to the clip is used as-is and never deleted
                logger.info(f"Using existing audio file: {audio_path}")
            elif self.config.ffmpeg_path:
                try:
                    audio_path = self.extractor(video_path, self.config.ffmpeg_path, self.config.audio_ext)
                    extracted = True
                except AudioExtractionError as e:
                    logger.error(f"Audio extraction failed, skipping transcription: {e}")
                    report.error = str(e)
                    return None
            else:
                report.error = f"Audio file not found and no ffmpeg configured: {audio_path}"
                logger.error(report.error)
                return None

            try:
                result = self.transcriber.transcribe(audio_path)
            except TranscriptionError as e:
                logger.error(f"Transcription failed: {e}")
                report.error = str(e)
                return None

            if not result.segments and not result.text.strip():
                report.error = f"Transcription returned no text: {audio_path}"
                logger.error(report.error)
                return None

            return format_transcript(result)
        finally:
            if extracted and self.config.delete_audio:
                remove_audio(audio_path)

    def write_transcripts(
        self,
        clip_name: str,
        transcript: str,
        report: Optional[GenerationReport] = None,
    ) -> GenerationReport:
        """
        Write the transcript for every configured language.

        The first language gets the transcript as-is; the others get a
        translation. Existing files are skipped with a warning. A failed
        translation, or one with no transcript lines when the original has
        some, is reported and leaves no file behind.
        """
        if report is None:
            report = GenerationReport(clip_name=clip_name)

        for i, language in enumerate(self.config.languages):
            path = self.transcript_path(language, clip_name)
            os.makedirs(os.path.dirname(path), exist_ok=True)

            if os.path.exists(path):
                logger.warning(f"File already exists: {path}")
                report.skipped.append(path)
                continue

            if i == 0:
                content = transcript
            else:
                try:
                    content = self.translator.translate(language, transcript)
                except TranslationError as e:
                    logger.error(f"{language} transcript not written: {e}")
                    report.failed[path] = str(e)
                    continue

                if not self._looks_like_transcript(content, transcript):
                    reason = f"{language} translation contains no transcript lines"
                    logger.error(f"{language} transcript not written: {reason}")
                    report.failed[path] = reason
                    continue

            atomic_write_text(path, content)
            logger.info(f"{language} transcript saved to: {path}")
            report.written.append(path)

        return report

    @staticmethod
    def _looks_like_transcript(translated: str, original: str) -> bool:
        # Untimed originals translate to untimed text
        original_entries, _ = parse_transcript(original.splitlines())
        if not original_entries:
            return bool(translated.strip())
        translated_entries, _ = parse_transcript(translated.splitlines())
        return bool(translated_entries)
