"""Exception types raised by CaptionKit."""


class CaptionKitError(Exception):
    """Base class for CaptionKit errors."""


class TranscriptFormatError(CaptionKitError, ValueError):
    """A transcript line could not be parsed into start, end and text."""


class AudioExtractionError(CaptionKitError):
    """The external audio extraction process failed."""


class TranscriptionError(CaptionKitError):
    """The transcription service failed or returned an unusable response."""


class TranslationError(CaptionKitError):
    """The translation service failed or returned an unusable response."""
