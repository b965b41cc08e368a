import pytest

from captionkit.captions import NOT_AVAILABLE, CaptionDisplay
from captionkit.player import (
    PlaybackState,
    VideoPlayerManager,
    build_language_options,
    build_speed_options,
)
from captionkit.progress import ProgressBar
from captionkit.utils import format_timestamp_label


def _write_transcript(root, language, clip, content):
    directory = root / language
    directory.mkdir(parents=True, exist_ok=True)
    (directory / f"{clip}.txt").write_text(content, encoding="utf-8")


def _manager(tmp_path, **kwargs):
    playback = PlaybackState(clip_name="intro", length=100.0)
    bar = ProgressBar(rect_width=200)
    display = CaptionDisplay()
    manager = VideoPlayerManager(
        playback,
        progress_bar=bar,
        captions=[display],
        languages=["English", "Spanish"],
        transcript_root=str(tmp_path),
        **kwargs,
    )
    return manager, playback, bar, display


def test_build_speed_options_selects_1x():
    labels, default = build_speed_options([0.5, 0.75, 1.0, 1.5, 2.0])
    assert labels == ["0.5x", "0.75x", "1x", "1.5x", "2x"]
    assert default == 2


def test_build_speed_options_without_1x():
    assert build_speed_options([0.5, 2.0])[1] is None


def test_build_language_options_appends_off():
    assert build_language_options(["English", "French"]) == ["English", "French", "off"]


def test_prepare_completed_builds_caption_map(tmp_path):
    _write_transcript(tmp_path, "English", "intro", "0.00::2.00::Hello\n2.00::4.00::World\n")
    manager, playback, _bar, display = _manager(tmp_path)

    playback.mark_prepared()
    playback.play()
    playback.tick(2.5)

    assert manager.caption_index is not None
    assert display.text == "World"


def test_missing_transcript_shows_not_available(tmp_path):
    _, playback, _bar, display = _manager(tmp_path)
    playback.mark_prepared()
    playback.tick(0)
    assert display.text == NOT_AVAILABLE


def test_language_switch_rebuilds_and_off_hides(tmp_path):
    _write_transcript(tmp_path, "English", "intro", "0.00::5.00::Hello\n")
    _write_transcript(tmp_path, "Spanish", "intro", "0.00::5.00::Hola\n")
    manager, playback, _bar, display = _manager(tmp_path)
    playback.mark_prepared()

    manager.on_language_selected(1)
    playback.tick(0)
    assert display.text == "Hola"
    assert display.visible

    manager.on_language_selected(2)
    assert manager.language == "off"
    assert not display.visible


def test_speed_selection_changes_advance_rate(tmp_path):
    manager, playback, _bar, _display = _manager(tmp_path)
    manager.on_speed_selected(4)
    playback.play()
    playback.tick(1.0)
    assert playback.time == pytest.approx(2.0)


def test_forward_and_backward_scrub(tmp_path):
    manager, playback, bar, _display = _manager(tmp_path)
    manager.forward()
    assert playback.time == pytest.approx(5.0)
    assert bar.progress == pytest.approx(0.05)
    manager.backward()
    manager.backward()
    assert playback.time == 0.0


def test_drag_pauses_and_resumes_when_playing(tmp_path):
    manager, playback, bar, _display = _manager(tmp_path)
    playback.play()

    bar.on_pointer_down(100)
    assert not playback.is_playing
    assert manager.dragging
    assert playback.time == pytest.approx(50.0)

    bar.on_pointer_drag(150)
    assert playback.time == pytest.approx(75.0)

    bar.on_pointer_up(20)
    assert playback.is_playing
    assert not manager.dragging
    assert playback.time == pytest.approx(10.0)


def test_drag_stays_paused_when_paused_before(tmp_path):
    _, playback, bar, _display = _manager(tmp_path)
    bar.on_pointer_down(100)
    bar.on_pointer_up(100)
    assert not playback.is_playing


def test_playback_stops_at_end(tmp_path):
    _, playback, _bar, _display = _manager(tmp_path)
    playback.play()
    playback.tick(150)
    assert playback.time == 100.0
    assert not playback.is_playing


def test_timestamp_label(tmp_path):
    manager, playback, _bar, _display = _manager(tmp_path)
    playback.seek(65)
    playback.tick(0)
    assert manager.timestamp == "1:05 / 1:40"
    assert format_timestamp_label(0, 3600) == "0:00 / 0:00"


def test_requires_a_language():
    with pytest.raises(ValueError):
        VideoPlayerManager(PlaybackState(), languages=[])


def test_undecodable_transcript_does_not_break_prepare(tmp_path):
    directory = tmp_path / "English"
    directory.mkdir()
    (directory / "intro.txt").write_bytes(b"0.00::2.00::Hello\n2.00::4.00::caf\xe9\n")
    manager, playback, _bar, display = _manager(tmp_path)

    playback.mark_prepared()
    playback.tick(0)

    assert display.text == "Hello"
    assert len(manager.caption_index.warnings) == 1
