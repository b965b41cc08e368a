"""
Video player controller for CaptionKit.

Holds playback state behind explicit callback registration (prepare
completed, per-frame update) and wires it to a scrub bar, caption displays,
and the playback-speed and caption-language option lists. Nothing here
depends on a UI toolkit; the host event loop drives ``tick()``.
"""

import logging
import math
from typing import Callable, List, Optional, Sequence, Tuple

from .captions import CaptionDisplay, load_caption_index
from .models import CaptionIndex
from .progress import ProgressBar
from .utils import format_timestamp_label, transcript_path

logger = logging.getLogger(__name__)

DEFAULT_SPEED_VALUES = [0.5, 0.75, 1.0, 1.5, 2.0]
DEFAULT_SCRUB_SECONDS = 5.0
CAPTIONS_OFF = "off"


def _format_speed(speed: float) -> str:
    # 1.0 -> "1x", 1.5 -> "1.5x"
    return f"{speed:g}x"


def build_speed_options(speeds: Sequence[float]) -> Tuple[List[str], Optional[int]]:
    """
    Build playback-speed dropdown labels.

    Args:
        speeds: Available playback speeds

    Returns:
        Tuple of (labels, index of the 1x entry or None)

    Example:
        >>> build_speed_options([0.5, 1.0, 2.0])
        (['0.5x', '1x', '2x'], 1)
    """
    labels = []
    default_index = None
    for i, speed in enumerate(speeds):
        labels.append(_format_speed(speed))
        if abs(speed - 1.0) < 0.001:
            default_index = i
    return labels, default_index


def build_language_options(languages: Sequence[str]) -> List[str]:
    """Caption-language dropdown labels: the languages followed by "off"."""
    return list(languages) + [CAPTIONS_OFF]


class PlaybackState:
    """
    Playback state of one clip with explicit lifecycle callbacks.

    ``mark_prepared()`` fires the prepare-completed callbacks once the clip's
    length is known; ``tick(dt)`` advances playback and fires the per-frame
    callbacks.
    """

    def __init__(self, clip_name: str = "", length: float = 0.0):
        self.clip_name = clip_name
        self.length = length
        self.time = 0.0
        self.is_playing = False
        self.is_prepared = False
        self.playback_speed = 1.0
        self.volume = 1.0
        self.muted = False
        self._prepared_callbacks: List[Callable[["PlaybackState"], None]] = []
        self._frame_callbacks: List[Callable[["PlaybackState"], None]] = []

    def on_prepare_completed(self, callback: Callable[["PlaybackState"], None]) -> None:
        self._prepared_callbacks.append(callback)

    def on_frame(self, callback: Callable[["PlaybackState"], None]) -> None:
        self._frame_callbacks.append(callback)

    def mark_prepared(self, length: Optional[float] = None) -> None:
        if length is not None:
            self.length = length
        self.is_prepared = True
        for callback in self._prepared_callbacks:
            callback(self)

    def play(self) -> None:
        self.is_playing = True

    def pause(self) -> None:
        self.is_playing = False

    def seek(self, seconds: float) -> None:
        self.time = max(0.0, min(self.length, seconds))

    def advance(self, dt: float) -> None:
        if not self.is_playing:
            return
        self.time += dt * self.playback_speed
        if self.time >= self.length:
            self.time = self.length
            self.is_playing = False

    def tick(self, dt: float) -> None:
        self.advance(dt)
        for callback in self._frame_callbacks:
            callback(self)

    @property
    def normalized_time(self) -> float:
        if self.length <= 0:
            return 0.0
        return self.time / self.length

    @property
    def current_second(self) -> int:
        return int(math.floor(self.time))


class VideoPlayerManager:
    """
    Coordinates playback, the scrub bar, and caption displays.

    Args:
        playback: PlaybackState of the current clip
        progress_bar: Scrub bar to keep in sync, optional
        captions: Caption displays updated every frame
        languages: Caption languages, index 0 = original language
        transcript_root: Root directory of per-language transcript folders
        speed_values: Playback speeds offered in the speed dropdown
        scrub_seconds: Seconds skipped by forward/backward
    """

    def __init__(
        self,
        playback: PlaybackState,
        progress_bar: Optional[ProgressBar] = None,
        captions: Optional[List[CaptionDisplay]] = None,
        languages: Sequence[str] = ("English",),
        transcript_root: Optional[str] = None,
        speed_values: Sequence[float] = DEFAULT_SPEED_VALUES,
        scrub_seconds: float = DEFAULT_SCRUB_SECONDS,
    ):
        if not languages:
            raise ValueError("At least one caption language is required")

        self.playback = playback
        self.progress_bar = progress_bar
        self.captions = list(captions or [])
        self.languages = list(languages)
        self.transcript_root = transcript_root
        self.speed_values = list(speed_values)
        self.scrub_seconds = scrub_seconds

        self.language = self.languages[0]
        self.language_options = build_language_options(self.languages)
        self.speed_options, self.speed_index = build_speed_options(self.speed_values)
        self.caption_index: Optional[CaptionIndex] = None
        self.timestamp = ""

        self._paused_before_drag = True
        self.dragging = False

        playback.on_prepare_completed(lambda _state: self.generate_caption_map())
        playback.on_frame(lambda _state: self.update())

        if progress_bar is not None:
            progress_bar.on_down(self.on_progress_bar_down)
            progress_bar.on_drag(self.on_progress_bar_drag)
            progress_bar.on_up(self.on_progress_bar_up)

    # Playback controls

    def play(self) -> None:
        self.playback.play()

    def pause(self) -> None:
        self.playback.pause()

    def forward(self) -> None:
        self.playback.seek(self.playback.time + self.scrub_seconds)
        self.update_progress_bar()

    def backward(self) -> None:
        self.playback.seek(self.playback.time - self.scrub_seconds)
        self.update_progress_bar()

    def set_volume(self, volume: float) -> None:
        self.playback.volume = volume

    def mute(self, state: bool) -> None:
        self.playback.muted = state

    # Dropdown callbacks

    def on_speed_selected(self, index: int) -> None:
        self.speed_index = index
        self.playback.playback_speed = self.speed_values[index]
        logger.debug(f"Playback speed set to {self.speed_options[index]}")

    def on_language_selected(self, index: int) -> None:
        self.language = self.language_options[index]
        visible = self.language != CAPTIONS_OFF
        for caption in self.captions:
            caption.visible = visible
        self.generate_caption_map()

    # Scrub bar

    def update_progress_bar(self) -> None:
        if self.progress_bar is not None:
            self.progress_bar.set_bar_progress(self.playback.normalized_time)

    def on_progress_bar_down(self, normalized: float) -> None:
        self._paused_before_drag = not self.playback.is_playing
        self.dragging = True
        self.playback.pause()
        self.update_video_position(normalized)

    def on_progress_bar_drag(self, normalized: float) -> None:
        self.update_video_position(normalized)

    def on_progress_bar_up(self, normalized: float) -> None:
        if not self._paused_before_drag:
            self.playback.play()
        self.dragging = False
        self.update_video_position(normalized)

    def update_video_position(self, normalized: float) -> None:
        self.playback.seek(normalized * self.playback.length)

    # Per-frame

    def timestamp_text(self) -> str:
        return format_timestamp_label(self.playback.time, self.playback.length)

    def update(self) -> None:
        if self.playback.is_playing:
            self.update_progress_bar()
        self.timestamp = self.timestamp_text()
        second = self.playback.current_second
        for caption in self.captions:
            caption.update(second)

    # Captions

    def current_transcript_path(self) -> Optional[str]:
        if self.transcript_root is None or self.language == CAPTIONS_OFF:
            return None
        return transcript_path(self.transcript_root, self.language, self.playback.clip_name)

    def generate_caption_map(self) -> Optional[CaptionIndex]:
        """
        Rebuild the caption index for the current clip and language.

        A missing transcript leaves the displays' current index in place.
        """
        path = self.current_transcript_path()
        if path is None:
            return None

        index = load_caption_index(path)
        if index is None:
            return None

        self.caption_index = index
        for caption in self.captions:
            caption.set_caption_map(index)
        return index
