"""Trimmer registry — the "cut the audio" capability.

WHY: Cutting is done by an external tool, but the search logic should
be testable without spawning it. Callers pick a trimmer class by key
and tests pass in a fake instead.

HOW: TRIMMERS maps string keys to trimmer *classes* (not instances).

RULES:
- Values are BaseTrimmer subclasses
- Every trimmer listed here must be importable without side effects
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from word_trim.trimmers.ffmpeg import FFmpegTrimmer

if TYPE_CHECKING:
    from word_trim.trimmers.base import BaseTrimmer

TRIMMERS: dict[str, type[BaseTrimmer]] = {
    "ffmpeg": FFmpegTrimmer,
}
