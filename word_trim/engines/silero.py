"""Silero voice-activity detection engine.

WHY: Transcribing silence is where most of the time goes on long
recordings, and Whisper tends to hallucinate text on it. Silero VAD is
small, fast on CPU, and returns speech regions in sample offsets.

HOW: Loads the bundled Silero model from the ``silero-vad`` package, or
a user-supplied model file (``.onnx`` through onnxruntime, anything else
as TorchScript). detect() runs ``get_speech_timestamps`` on the buffer
and converts sample offsets to centiseconds.

RULES:
- Input is mono float32 at SAMPLE_RATE
- Output segments are chronological, centiseconds, buffer-relative
- torch intra-op threads are capped at config.threads
- Load failures raise ModelLoadError, detection failures raise VadError
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import numpy as np
import torch
from silero_vad import get_speech_timestamps, load_silero_vad
from silero_vad.utils_vad import OnnxWrapper, init_jit_model

from word_trim.config import CENTISECONDS_PER_SECOND, SAMPLE_RATE
from word_trim.core.ir import SpeechSegment
from word_trim.engines.base import VadEngine
from word_trim.errors import ModelLoadError, VadError

logger = logging.getLogger(__name__)


def _load_model(model_path: Optional[str]) -> Any:
    if model_path is None:
        return load_silero_vad()
    path = Path(model_path)
    if not path.is_file():
        raise FileNotFoundError("VAD model not found: {}".format(path))
    if path.suffix.lower() == ".onnx":
        return OnnxWrapper(str(path))
    return init_jit_model(str(path))


def _samples_to_cs(sample: int, round_up: bool = False) -> int:
    scaled = sample * CENTISECONDS_PER_SECOND
    if round_up:
        return -(-scaled // SAMPLE_RATE)
    return scaled // SAMPLE_RATE


class SileroVadEngine(VadEngine):
    """VAD engine backed by the silero-vad package."""

    def __init__(self, model_path: Optional[str] = None, *, threads: int = 1) -> None:
        torch.set_num_threads(max(1, threads))
        try:
            self._model = _load_model(model_path)
        except Exception as e:
            raise ModelLoadError(
                "Failed to initialize VAD context from {}: {}".format(
                    model_path or "bundled silero model", e
                )
            ) from e
        logger.debug("Loaded Silero VAD model %s", model_path or "(bundled)")

    def detect(self, samples: np.ndarray) -> list[SpeechSegment]:
        if self._model is None:
            raise VadError("VAD model has been closed")
        try:
            audio = torch.from_numpy(np.ascontiguousarray(samples, dtype=np.float32))
            timestamps = get_speech_timestamps(
                audio,
                self._model,
                sampling_rate=SAMPLE_RATE,
                return_seconds=False,
            )
        except Exception as e:
            raise VadError(str(e)) from e

        return [
            SpeechSegment(t0=_samples_to_cs(ts["start"]), t1=_samples_to_cs(ts["end"], round_up=True))
            for ts in timestamps
        ]

    def close(self) -> None:
        self._model = None
