"""
Caption generation example.

Extracts audio with ffmpeg, transcribes it with OpenAI Whisper, and writes a
transcript per language under captions/<language>/<clip>.txt.
Requires OPENAI_API_KEY in the environment.
"""

import logging

from captionkit import CaptionGenerator, GenerateConfig


def main() -> None:
    logging.basicConfig(level=logging.INFO)

    config = GenerateConfig(
        transcript_root="captions",
        languages=["English", "Spanish", "French"],
        ffmpeg_path="ffmpeg",
    )
    generator = CaptionGenerator(config)
    report = generator.generate("local/intro.mp4")

    print(f"Written: {report.written}")
    print(f"Already present: {report.skipped}")
    if not report.ok:
        print(f"Failures: {report.error or report.failed}")


if __name__ == "__main__":
    main()
