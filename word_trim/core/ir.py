"""Dataclasses exchanged between the engines and the search core.

WHY: faster-whisper and Silero each return their own object shapes.
The search core should only see one small, well-typed vocabulary so
engines can be swapped or faked in tests.

HOW: Four dataclasses:
  Token              — one recognised unit of text with its start time
  SpeechSegment      — one VAD speech region
  TranscribedSegment — one sub-segment emitted by the transcription engine
  WordMatch          — the resolved first occurrence of the target word

RULES:
- Token.t0, SpeechSegment.t0/t1 are integer centiseconds, relative to
  the buffer they were produced from
- WordMatch.start_s is float seconds relative to the whole recording
- All of these are transient; nothing is kept after a search run
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Token:
    """A single token produced by the transcription engine.

    RULES:
    - id: engine token id; ids at or above the engine's special boundary
      are control tokens
    - text: raw token text, may be None or empty
    - t0: start time in centiseconds relative to the transcribed slice
    - special: True for control tokens the engine already flagged
    """

    id: int
    text: str | None
    t0: int
    special: bool = False


@dataclass
class SpeechSegment:
    """A speech interval ``[t0, t1)`` in centiseconds, as reported by VAD."""

    t0: int
    t1: int


@dataclass
class TranscribedSegment:
    """One recognised sub-segment: ordered tokens and the joined text."""

    text: str
    tokens: list[Token] = field(default_factory=list)


@dataclass
class WordMatch:
    """The first occurrence of the target word in the recording.

    WHY: Only start_s is needed to trim, but reporting where the hit came
    from (chunk, segment, token) makes a wrong cut easy to diagnose.

    RULES:
    - start_s: absolute seconds from the start of the recording
    - chunk_offset_s: start of the enclosing chunk in seconds
    - segment_t0: enclosing speech segment start, centiseconds, chunk-relative
    - token_index / token_text: the token owning the first matched character
    """

    start_s: float
    chunk_offset_s: float
    segment_t0: int
    token_index: int
    token_text: str
