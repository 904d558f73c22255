"""Chronological, first-match-wins word search over a recording.

WHY: Transcribing a whole recording at once is slow and wasteful when
the word usually appears early. Walking the audio in order and stopping
at the first hit bounds the cost to "everything up to the word", and it
is also the disambiguation rule: only the earliest occurrence counts.

HOW: The buffer is split into fixed windows (chunks) when chunking is
enabled. Inside each chunk, the VAD engine carves speech segments, or
the whole chunk is one segment when VAD is off. Each segment's samples
are transcribed; each transcribed sub-segment gets a fresh position map
and a substring search. The first hit is resolved to absolute seconds
and returned immediately.

RULES:
- Strictly sequential: chunk → segment → sub-segment → token order
- First hit returns; nothing after it is transcribed or searched
- VAD failure for a chunk → log a warning, skip the chunk
- Transcription failure for a segment → log a warning, skip the segment
- Failures are never retried
- Segments starting past the end of the buffer are skipped; segments
  running past the end are clamped; empty segments are skipped
"""

from __future__ import annotations

import logging
import math
from typing import Iterator, Optional

import numpy as np

from word_trim.config import CENTISECONDS_PER_SECOND, SAMPLE_RATE, SearchConfig
from word_trim.core.ir import SpeechSegment, WordMatch
from word_trim.core.matcher import (
    build_position_map,
    locate_word,
    normalize,
    resolve_timestamp,
)
from word_trim.engines.base import TranscriptionEngine, VadEngine
from word_trim.errors import TranscriptionError, VadError

logger = logging.getLogger(__name__)


def _iter_chunks(n_samples: int, chunk_samples: Optional[int]) -> Iterator[tuple[int, int]]:
    """Yield (start_sample, sample_count) windows covering the buffer."""
    if not chunk_samples:
        if n_samples > 0:
            yield 0, n_samples
        return
    for start in range(0, n_samples, chunk_samples):
        yield start, min(chunk_samples, n_samples - start)


def _whole_chunk_segment(sample_count: int) -> SpeechSegment:
    """A single segment spanning the entire chunk, for VAD-off runs."""
    t1 = math.ceil(sample_count * CENTISECONDS_PER_SECOND / SAMPLE_RATE)
    return SpeechSegment(t0=0, t1=t1)


def _segment_sample_range(
    chunk_offset_s: float,
    segment: SpeechSegment,
    n_samples: int,
) -> Optional[tuple[int, int]]:
    """Map a chunk-relative segment to an absolute (start, end) sample range.

    RULES:
    - Start at or past the buffer end → None
    - End past the buffer end → clamped
    - Empty range → None
    """
    t0_s = chunk_offset_s + segment.t0 / CENTISECONDS_PER_SECOND
    t1_s = chunk_offset_s + segment.t1 / CENTISECONDS_PER_SECOND

    sample_start = int(t0_s * SAMPLE_RATE)
    sample_count = int((t1_s - t0_s) * SAMPLE_RATE)

    if sample_start >= n_samples:
        return None
    if sample_start + sample_count > n_samples:
        sample_count = n_samples - sample_start
    if sample_count <= 0:
        return None
    return sample_start, sample_start + sample_count


def find_first_word(
    samples: np.ndarray,
    word: str,
    transcriber: TranscriptionEngine,
    vad: Optional[VadEngine] = None,
    config: Optional[SearchConfig] = None,
) -> Optional[WordMatch]:
    """Return the earliest occurrence of ``word`` in the recording, or None.

    WHY: This is the whole search policy in one place: chronological
    order, per-segment failure tolerance, and first match wins.

    HOW: See the module docstring. ``word`` is normalized once here, then
    compared against every sub-segment's normalized token stream.

    RULES:
    - config.use_vad without a VAD engine is a programming error (ValueError)
    - A word that normalizes to "" never matches

    Args:
        samples: Mono float32 samples of the full recording at SAMPLE_RATE.
        word: The word to look for, as typed by the user.
        transcriber: Engine that turns samples into timed tokens.
        vad: Voice-activity detector; required when config.use_vad is true.
        config: Search options; defaults to SearchConfig().

    Returns:
        WordMatch for the first hit, or None if the word never occurs.
    """
    config = config or SearchConfig()
    if config.use_vad and vad is None:
        raise ValueError("use_vad is enabled but no VAD engine was provided")

    target = normalize(word)
    if not target:
        logger.warning("Target word %r is empty after normalization", word)
        return None

    n_samples = len(samples)

    for chunk_start, chunk_count in _iter_chunks(n_samples, config.chunk_samples):
        chunk_offset_s = chunk_start / SAMPLE_RATE
        chunk = samples[chunk_start:chunk_start + chunk_count]

        if config.use_vad:
            try:
                segments = vad.detect(chunk)
            except VadError as e:
                logger.warning("VAD failed for chunk at %.2fs, skipping: %s", chunk_offset_s, e)
                continue
        else:
            segments = [_whole_chunk_segment(chunk_count)]

        logger.debug("Chunk at %.2fs: %d speech segment(s)", chunk_offset_s, len(segments))

        for segment in segments:
            sample_range = _segment_sample_range(chunk_offset_s, segment, n_samples)
            if sample_range is None:
                continue
            start, end = sample_range

            try:
                sub_segments = transcriber.transcribe(samples[start:end])
            except TranscriptionError as e:
                logger.warning(
                    "Failed to process segment at %.2fs, skipping: %s",
                    chunk_offset_s + segment.t0 / CENTISECONDS_PER_SECOND,
                    e,
                )
                continue

            for sub in sub_segments:
                stream, position_map = build_position_map(
                    sub.tokens, transcriber.special_boundary,
                )
                token_index = locate_word(stream, position_map, target)
                if token_index is None:
                    continue

                token = sub.tokens[token_index]
                start_s = resolve_timestamp(chunk_offset_s, segment.t0, token.t0)
                logger.debug(
                    "Matched %r in token %d (%r) at %.3fs",
                    target, token_index, token.text, start_s,
                )
                return WordMatch(
                    start_s=start_s,
                    chunk_offset_s=chunk_offset_s,
                    segment_t0=segment.t0,
                    token_index=token_index,
                    token_text=token.text or "",
                )

    return None
