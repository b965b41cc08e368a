"""
Audio extraction for CaptionKit.

Runs an external ffmpeg binary to write a clip's audio track to a sibling
file (same base name, audio extension) for transcription.
"""

import logging
import os
import subprocess
from typing import List

from .errors import AudioExtractionError
from .utils import sibling_path

logger = logging.getLogger(__name__)

DEFAULT_AUDIO_EXT = ".mp3"


def audio_path_for(video_path: str, audio_ext: str = DEFAULT_AUDIO_EXT) -> str:
    """Path of the audio file extracted from video_path."""
    return sibling_path(video_path, audio_ext)


def build_ffmpeg_command(
    ffmpeg_path: str,
    video_path: str,
    audio_path: str,
    overwrite: bool = False,
) -> List[str]:
    """
    Build the ffmpeg argument list for an MP3 audio extraction.

    ffmpeg is told never to overwrite audio_path unless overwrite is set.

    Example:
        >>> build_ffmpeg_command("ffmpeg", "a.mp4", "a.mp3")
        ['ffmpeg', '-n', '-i', 'a.mp4', '-vn', '-acodec', 'libmp3lame', '-q:a', '2', 'a.mp3']
    """
    return [
        ffmpeg_path,
        "-y" if overwrite else "-n",
        "-i", video_path,
        "-vn",
        "-acodec", "libmp3lame",
        "-q:a", "2",
        audio_path,
    ]


def extract_audio(
    video_path: str,
    ffmpeg_path: str = "ffmpeg",
    audio_ext: str = DEFAULT_AUDIO_EXT,
    timeout: int = 600,
    overwrite: bool = False,
) -> str:
    """
    Extract the audio track of a media file with ffmpeg.

    Args:
        video_path: Source media file
        ffmpeg_path: ffmpeg executable name or path
        audio_ext: Extension of the audio file to write
        timeout: Seconds to wait for ffmpeg
        overwrite: Replace an existing audio file at the target path

    Returns:
        Path of the extracted audio file

    Raises:
        AudioExtractionError: If the source is missing, the target audio file
            already exists (without overwrite), ffmpeg cannot be run, exits
            with an error, or produces no output file
    """
    if not video_path or not os.path.exists(video_path):
        raise AudioExtractionError(f"Media file not found: {video_path}")

    audio_path = audio_path_for(video_path, audio_ext)
    if os.path.exists(audio_path) and not overwrite:
        raise AudioExtractionError(f"Audio file already exists: {audio_path}")

    command = build_ffmpeg_command(ffmpeg_path, video_path, audio_path, overwrite=overwrite)
    logger.info(f"Extracting audio: {video_path} -> {audio_path}")

    try:
        result = subprocess.run(command, capture_output=True, text=True, timeout=timeout)
    except (OSError, subprocess.SubprocessError) as e:
        raise AudioExtractionError(f"FFmpeg extraction failed: {e}") from e

    for line in result.stdout.splitlines():
        if line.strip():
            logger.debug(f"[ffmpeg] {line}")
    # ffmpeg writes its progress to stderr
    for line in result.stderr.splitlines():
        if line.strip():
            logger.debug(f"[ffmpeg] {line}")

    if result.returncode != 0:
        raise AudioExtractionError(
            f"FFmpeg extraction failed with exit code {result.returncode}: {video_path}"
        )
    if not os.path.exists(audio_path):
        raise AudioExtractionError(f"FFmpeg produced no audio file: {audio_path}")

    logger.info(f"Audio extracted to: {audio_path}")
    return audio_path


def remove_audio(audio_path: str) -> None:
    """Delete an extracted audio file if it exists."""
    if os.path.exists(audio_path):
        os.remove(audio_path)
        logger.debug(f"Removed temporary audio file: {audio_path}")
