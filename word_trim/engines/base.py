"""Abstract interfaces for the audio loader, VAD, and transcription engines.

WHY: Model inference, VAD, and audio decoding are third-party
capabilities. The search core only needs a narrow contract from each,
and tests need to substitute fakes without loading real models.

HOW: Three ABCs. Implementations wrap a library, translate its output
into the IR dataclasses, and translate its exceptions into the
word_trim.errors hierarchy.

RULES:
- Every buffer is mono float32 at config.SAMPLE_RATE
- All returned times are integer centiseconds relative to the input buffer
- Loaders raise AudioLoadError, VAD raises VadError, transcription
  raises TranscriptionError, model construction raises ModelLoadError
- close() releases model resources; it is safe to call more than once
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

import numpy as np

from word_trim.core.ir import SpeechSegment, TranscribedSegment


class AudioLoader(ABC):
    """Decodes an audio file into a mono sample buffer."""

    @abstractmethod
    def load(self, path: str) -> np.ndarray:
        """Return mono float32 samples at SAMPLE_RATE.

        Raises:
            AudioLoadError: The file is missing or cannot be decoded.
        """


class VadEngine(ABC):
    """Voice-activity detector."""

    @abstractmethod
    def detect(self, samples: np.ndarray) -> list[SpeechSegment]:
        """Return speech segments in chronological order (may be empty).

        Raises:
            VadError: Detection failed for this buffer.
        """

    def close(self) -> None:
        """Release model resources."""


class TranscriptionEngine(ABC):
    """Speech-to-text engine with per-token start times.

    RULES:
    - special_boundary is the first control token id, or None when the
      engine only emits text tokens
    - transcribe() is blocking; no partial results, no cancellation
    """

    special_boundary: Optional[int] = None

    @abstractmethod
    def transcribe(self, samples: np.ndarray) -> list[TranscribedSegment]:
        """Transcribe a buffer into sub-segments of timed tokens.

        Raises:
            TranscriptionError: Inference failed for this buffer.
        """

    def close(self) -> None:
        """Release model resources."""
