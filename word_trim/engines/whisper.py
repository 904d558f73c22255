"""faster-whisper backed audio loader and transcription engine.

WHY: faster-whisper runs Whisper models on CPU with CTranslate2, decodes
any container/codec through PyAV, and reports word-level start times.
That covers the audio loader and the transcription engine contracts.

HOW: FasterWhisperLoader wraps ``faster_whisper.decode_audio``.
FasterWhisperEngine loads a WhisperModel once and transcribes each
speech segment with beam search and word timestamps. Each timed word is
reported as one regular Token; its t0 is the word start in centiseconds
relative to the slice that was transcribed.

RULES:
- Models run on CPU with int8 weights; cpu_threads = config.threads
- Beam search with config.beam_size, language None = auto-detect
- No context carried between segments (condition_on_previous_text=False)
- Blank outputs suppressed; faster-whisper's own VAD filter is off
  because segmentation is done upstream
- Library exceptions are re-raised as AudioLoadError / ModelLoadError /
  TranscriptionError
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import numpy as np
from faster_whisper import WhisperModel, decode_audio

from word_trim.config import CENTISECONDS_PER_SECOND, SAMPLE_RATE
from word_trim.core.ir import Token, TranscribedSegment
from word_trim.engines.base import AudioLoader, TranscriptionEngine
from word_trim.errors import AudioLoadError, ModelLoadError, TranscriptionError

logger = logging.getLogger(__name__)


class FasterWhisperLoader(AudioLoader):
    """Decode audio files to 16 kHz mono float32 with PyAV."""

    def load(self, path: str) -> np.ndarray:
        if not Path(path).is_file():
            raise AudioLoadError("Audio file not found: {}".format(path))
        try:
            samples = decode_audio(path, sampling_rate=SAMPLE_RATE)
        except Exception as e:
            raise AudioLoadError("Failed to read audio data from {}: {}".format(path, e)) from e
        logger.debug("Loaded %s: %d samples (%.2fs)", path, len(samples), len(samples) / SAMPLE_RATE)
        return samples


class FasterWhisperEngine(TranscriptionEngine):
    """Transcription engine on top of ``faster_whisper.WhisperModel``.

    WHY: Keeps every faster-whisper detail (model construction, decode
    options, result shape) out of the search core.

    RULES:
    - special_boundary stays None: word timings never include control tokens
    - A model that fails to load raises ModelLoadError from __init__
    """

    def __init__(
        self,
        model_path: str,
        *,
        threads: int,
        beam_size: int = 5,
        language: Optional[str] = None,
        device: str = "cpu",
        compute_type: str = "int8",
    ) -> None:
        self._beam_size = beam_size
        self._language = language
        logger.debug(
            "Loading faster-whisper model=%s, device=%s, compute_type=%s, threads=%d",
            model_path, device, compute_type, threads,
        )
        try:
            self._model: Optional[WhisperModel] = WhisperModel(
                model_path,
                device=device,
                compute_type=compute_type,
                cpu_threads=threads,
            )
        except Exception as e:
            raise ModelLoadError(
                "Failed to initialize whisper model from {}: {}".format(model_path, e)
            ) from e

    def transcribe(self, samples: np.ndarray) -> list[TranscribedSegment]:
        if self._model is None:
            raise TranscriptionError("Whisper model has been closed")
        try:
            segments, _info = self._model.transcribe(
                samples.astype(np.float32, copy=False),
                beam_size=self._beam_size,
                language=self._language,
                task="transcribe",
                word_timestamps=True,
                condition_on_previous_text=False,
                suppress_blank=True,
                vad_filter=False,
            )
            # segments is a lazy generator; decoding happens while iterating
            return [self._to_segment(seg) for seg in segments]
        except Exception as e:
            raise TranscriptionError(str(e)) from e

    @staticmethod
    def _to_segment(segment) -> TranscribedSegment:
        tokens = [
            Token(
                id=index,
                text=word.word,
                t0=int(round(word.start * CENTISECONDS_PER_SECOND)),
            )
            for index, word in enumerate(segment.words or [])
        ]
        return TranscribedSegment(text=segment.text, tokens=tokens)

    def close(self) -> None:
        self._model = None
