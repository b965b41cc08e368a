"""
Player loop example.

Drives a PlaybackState from a fixed-step loop, with a scrub bar and a caption
display wired through VideoPlayerManager.
"""

from captionkit import CaptionDisplay, PlaybackState, ProgressBar, VideoPlayerManager

FRAME = 1 / 30


def main():
    playback = PlaybackState(clip_name="intro", length=12.0)
    bar = ProgressBar(rect_width=400)
    display = CaptionDisplay()
    manager = VideoPlayerManager(
        playback,
        progress_bar=bar,
        captions=[display],
        languages=["English", "Spanish"],
        transcript_root="captions",
    )

    playback.mark_prepared()
    manager.on_speed_selected(manager.speed_options.index("1.5x"))
    manager.play()

    # Simulate a user dragging the playhead to the middle of the bar
    bar.on_pointer_down(200)
    bar.on_pointer_up(200)

    while playback.is_playing:
        playback.tick(FRAME)
        print(f"\r{manager.timestamp}  {display.text:<40}", end="")
    print()


if __name__ == "__main__":
    main()
