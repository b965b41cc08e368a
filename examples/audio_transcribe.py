"""
Audio transcription example using the faster-whisper backend.

Prints transcript lines (start::end::text) without calling any web API.
"""

from captionkit import transcribe_to_transcript
from captionkit.transcription import get_backend


def main() -> None:
    audio_path = "local/audio.wav"  # Update to your audio file
    backend = get_backend("faster-whisper", model_name="base")
    print(transcribe_to_transcript(audio_path, backend=backend, language="en"), end="")


if __name__ == "__main__":
    main()
