"""Text normalization, token position mapping, word location, and
timestamp resolution.

WHY: The speech model splits words across tokens ("hel" + "lo") and
mixes in punctuation, spacing, and case. Comparing the user's word to
individual tokens would miss most hits. Instead, the normalized text of
all tokens in a sub-segment is concatenated into one stream, searched
once, and the hit is mapped back to the token that owns its first
character, whose start time is the answer.

HOW: Four pure functions:
  normalize          — keep ASCII alphanumerics, lowercased
  build_position_map — concatenate normalized token text, recording
                       the owning token index of every character
  locate_word        — leftmost substring search, mapped to a token index
  resolve_timestamp  — chunk offset + segment start + token start

RULES:
- Only ASCII letters and digits survive normalization; everything else
  (punctuation, whitespace, non-ASCII) is dropped, not replaced
- len(stream) == len(position_map) after every append
- Control tokens and empty tokens contribute zero characters
- An empty target never matches
- Matching is substring-based: "art" matches inside "start"
- Timestamps: centiseconds → seconds (value * 0.01)
"""

from __future__ import annotations

import re
from typing import Optional, Sequence

from word_trim.core.ir import Token

_NON_ALNUM_RE = re.compile(r"[^A-Za-z0-9]+")

_SECONDS_PER_CENTISECOND = 0.01


def normalize(text: str | None) -> str:
    """Reduce text to its canonical comparison form.

    HOW: Strip every character that is not an ASCII letter or digit,
    then lowercase what remains. Filtering happens before lowercasing so
    non-ASCII letters cannot lowercase into ASCII ones.

    RULES:
    - None and "" → ""
    - Idempotent: normalize(normalize(s)) == normalize(s)
    - Never longer than the input
    """
    if not text:
        return ""
    return _NON_ALNUM_RE.sub("", text).lower()


def is_control_token(token: Token, special_boundary: Optional[int] = None) -> bool:
    """True when the token is a special/control token rather than text."""
    if token.special:
        return True
    return special_boundary is not None and token.id >= special_boundary


def build_position_map(
    tokens: Sequence[Token],
    special_boundary: Optional[int] = None,
) -> tuple[str, list[int]]:
    """Build the normalized character stream and its position-to-token map.

    WHY: The word the user asked for may span several tokens. One
    concatenated stream lets a plain substring search find it, and the
    parallel map turns the hit offset back into a token.

    HOW: Walk tokens in order. Skip control tokens and tokens without
    text. For every other token, append each normalized character to the
    stream and the token's index to the map.

    RULES:
    - Indices in the map refer to positions in ``tokens`` (not token ids)
    - Every call starts from empty state; nothing carries over between
      sub-segments

    Args:
        tokens: Tokens of one transcribed sub-segment, in emission order.
        special_boundary: Engine's first control token id, if it has one.

    Returns:
        (stream, position_map) with equal lengths.
    """
    chars: list[str] = []
    position_map: list[int] = []

    for index, token in enumerate(tokens):
        if is_control_token(token, special_boundary):
            continue
        cleaned = normalize(token.text)
        if not cleaned:
            continue
        chars.append(cleaned)
        position_map.extend([index] * len(cleaned))

    return "".join(chars), position_map


def locate_word(stream: str, position_map: Sequence[int], target: str) -> Optional[int]:
    """Find the token owning the first character of the target word.

    RULES:
    - ``target`` must already be normalized by the caller
    - Empty target → None (never a trivial match at offset 0)
    - Leftmost occurrence wins; no fuzzy or best-match scoring
    - Returns position_map[offset] on a hit, None otherwise
    """
    if not target:
        return None
    offset = stream.find(target)
    if offset < 0:
        return None
    return position_map[offset]


def resolve_timestamp(chunk_offset_s: float, segment_t0: int, token_t0: int) -> float:
    """Convert a token start time into seconds from the recording start.

    WHY: The engine reports token times relative to the slice it was
    given. That slice is a VAD segment, offset inside a chunk, offset
    inside the recording. Dropping any level shifts the cut by a whole
    segment or chunk.

    RULES:
    - chunk_offset_s is already seconds
    - segment_t0 and token_t0 are centiseconds
    - resolve_timestamp(30.0, 250, 120) == 33.7
    """
    return (
        chunk_offset_s
        + segment_t0 * _SECONDS_PER_CENTISECOND
        + token_t0 * _SECONDS_PER_CENTISECOND
    )
