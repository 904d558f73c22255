"""Exception hierarchy shared by the engines, trimmers, and CLI.

WHY: The CLI must tell setup failures (abort with exit code 1) apart from
per-segment failures (log and skip). Typed exceptions make that split
explicit instead of relying on message text.

HOW: WordTrimError is the common base. Each external collaborator raises
its own subclass, always chained (``raise ... from exc``) to the
underlying library error.

RULES:
- AudioLoadError, ModelLoadError → setup failures, abort the run
- VadError, TranscriptionError → per-segment failures, skip the segment
- TrimError → abort the run after a match was found
"""

from __future__ import annotations


class WordTrimError(Exception):
    """Base class for every error raised by word_trim."""


class AudioLoadError(WordTrimError):
    """Raised when the source recording cannot be decoded."""


class ModelLoadError(WordTrimError):
    """Raised when the speech or VAD model cannot be initialised.

    RULES:
    - Message includes the model path or name that failed
    """


class VadError(WordTrimError):
    """Raised when voice-activity detection fails for one chunk."""


class TranscriptionError(WordTrimError):
    """Raised when transcription of one speech segment fails."""


class TrimError(WordTrimError):
    """Raised when the trim tool fails or produces no output file.

    RULES:
    - returncode is None when the tool never ran (e.g. missing executable)
    """

    def __init__(self, message: str, returncode: int | None = None) -> None:
        self.returncode = returncode
        super().__init__(message)
