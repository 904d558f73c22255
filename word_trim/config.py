"""Configuration constants, environment defaults, and the search config.

WHY: The tool used to exist as several near-identical scripts that only
differed in hardcoded paths, thread counts, and whether chunking or VAD
was used. Collapsing them into one pipeline means all of those knobs must
live in one place, with defaults that can be overridden without editing
code.

HOW: python-dotenv loads the .env file on import. Defaults are
module-level constants read from the environment. SearchConfig is a
plain dataclass carrying the recognised options through the pipeline;
the CLI builds it from parsed arguments.

RULES:
- SAMPLE_RATE is fixed at 16 kHz (the rate the speech model expects)
- All defaults can be overridden via WORD_TRIM_* environment variables
- Integer environment values that fail to parse or fall below their
  minimum (threads and beam size >= 1, chunk seconds >= 0) raise ValueError
- chunk_seconds of None or 0 means "do not chunk"
- language of None means auto-detect
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

# Load .env from the project root (where the tool is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Audio constants
# ---------------------------------------------------------------------------

SAMPLE_RATE = 16000
"""Samples per second of every buffer handed to VAD and transcription."""

CENTISECONDS_PER_SECOND = 100
"""VAD segments and token timestamps are reported in hundredths of a second."""


def _env_int(
    name: str,
    default: Optional[int],
    minimum: Optional[int] = None,
) -> Optional[int]:
    """Read an integer environment variable.

    RULES:
    - Missing or blank → default
    - Non-integer → ValueError naming the variable
    - Below minimum → ValueError naming the variable and the bound
    """
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(
            "{} must be an integer, got {!r}".format(name, raw)
        ) from None
    if minimum is not None and value < minimum:
        raise ValueError(
            "{} must be at least {}, got {}".format(name, minimum, value)
        )
    return value


def _env_str(name: str, default: Optional[str]) -> Optional[str]:
    raw = os.getenv(name, "").strip()
    return raw or default


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

DEFAULT_OUTPUT_PATH = _env_str("WORD_TRIM_OUTPUT", "/tmp/trim-output.opus")
DEFAULT_MODEL = _env_str("WORD_TRIM_MODEL", "large-v3-turbo")
DEFAULT_VAD_MODEL = _env_str("WORD_TRIM_VAD_MODEL", None)
DEFAULT_THREADS = _env_int("WORD_TRIM_THREADS", os.cpu_count() or 1, minimum=1)
DEFAULT_BEAM_SIZE = _env_int("WORD_TRIM_BEAM_SIZE", 5, minimum=1)
DEFAULT_CHUNK_SECONDS = _env_int("WORD_TRIM_CHUNK_SECONDS", 30, minimum=0)
DEFAULT_LANGUAGE = _env_str("WORD_TRIM_LANGUAGE", None)


@dataclass
class SearchConfig:
    """Options for one word search run.

    WHY: One pipeline replaces the old per-variant entry points. The
    differences between those variants (chunking on/off, VAD on/off,
    model paths, thread counts) are now just field values.

    RULES:
    - use_vad: run voice-activity detection inside each chunk
    - chunk_seconds: window length in seconds; None or 0 disables chunking
    - model_path: faster-whisper model name or local model directory
    - vad_model_path: Silero ONNX/TorchScript file, None = bundled model
    - threads: CPU worker threads for transcription and VAD
    - beam_size: beam width for decoding
    - output_path: where the trimmed file is written
    - language: ISO 639-1 code, None = auto-detect
    """

    use_vad: bool = True
    chunk_seconds: Optional[int] = DEFAULT_CHUNK_SECONDS
    model_path: str = DEFAULT_MODEL
    vad_model_path: Optional[str] = DEFAULT_VAD_MODEL
    threads: int = DEFAULT_THREADS
    beam_size: int = DEFAULT_BEAM_SIZE
    output_path: str = DEFAULT_OUTPUT_PATH
    language: Optional[str] = DEFAULT_LANGUAGE

    @property
    def chunk_samples(self) -> Optional[int]:
        """Chunk length in samples, or None when chunking is disabled."""
        if not self.chunk_seconds or self.chunk_seconds <= 0:
            return None
        return self.chunk_seconds * SAMPLE_RATE
