"""Abstract base trimmer.

WHY: The search produces one number, a start time in seconds. Turning
that into a new audio file is a separate concern with its own failure
modes, so it lives behind a one-method interface.

HOW: BaseTrimmer is an ABC with a ``name`` property and a ``trim()``
method.

RULES:
- trim() writes ``output`` containing ``source`` from ``start_s`` onward
- trim() returns the path that was written
- Any failure raises TrimError; a run that fails to trim exits with 1
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path


class BaseTrimmer(ABC):
    """Abstract base for all trimmers.

    To add a new trimmer:
    1. Create a new file in trimmers/
    2. Subclass BaseTrimmer
    3. Implement trim() and name
    4. Register in TRIMMERS dict in trimmers/__init__.py
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable trimmer name, e.g. 'ffmpeg'."""

    @abstractmethod
    def trim(self, source: Path, start_s: float, output: Path) -> Path:
        """Write ``source`` from ``start_s`` seconds onward to ``output``.

        Args:
            source: The original recording.
            start_s: Absolute start time in seconds (fractional).
            output: Destination file; overwritten if it exists.

        Returns:
            The path of the written file.

        Raises:
            TrimError: The tool failed or produced no file.
        """
