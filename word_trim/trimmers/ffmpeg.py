"""ffmpeg-based trimmer.

WHY: ffmpeg can seek and stream-copy any container the loader can
decode, so the trimmed file keeps the source codec and quality.

HOW: Builds an argument list (no shell, so paths with quotes or spaces
are safe) and runs it with subprocess.run. stderr is captured and
included in the TrimError when ffmpeg exits non-zero.

RULES:
- Command: ffmpeg -hide_banner -loglevel error -nostdin -y -i SRC -ss T -c copy OUT
- The executable is resolved on PATH when not given explicitly
- The output's parent directory is created if missing
- Non-zero exit or missing output file → TrimError
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Optional, Sequence

from word_trim.errors import TrimError
from word_trim.trimmers.base import BaseTrimmer

logger = logging.getLogger(__name__)


def _resolve_executable(path: Optional[str], default: str) -> str:
    if path:
        return path
    resolved = shutil.which(default)
    if not resolved:
        raise TrimError("{} executable not found in PATH".format(default))
    return resolved


class FFmpegTrimmer(BaseTrimmer):
    """Cut a recording with ``ffmpeg -ss ... -c copy``."""

    def __init__(self, ffmpeg_executable: Optional[str] = None) -> None:
        self._ffmpeg_executable = ffmpeg_executable

    @property
    def name(self) -> str:
        return "ffmpeg"

    def build_command(self, source: Path, start_s: float, output: Path) -> list[str]:
        ffmpeg = _resolve_executable(self._ffmpeg_executable, "ffmpeg")
        return [
            ffmpeg,
            "-hide_banner",
            "-loglevel",
            "error",
            "-nostdin",
            "-y",
            "-i",
            str(source),
            "-ss",
            "{:.6f}".format(start_s),
            "-c",
            "copy",
            str(output),
        ]

    def _run(self, args: Sequence[str]) -> None:
        logger.debug("Running ffmpeg command: %s", " ".join(args))
        try:
            subprocess.run(args, check=True, stdout=subprocess.PIPE, stderr=subprocess.PIPE)
        except subprocess.CalledProcessError as e:
            detail = (e.stderr or b"").decode("utf-8", errors="replace").strip()
            raise TrimError(
                "Failed to trim audio using ffmpeg (exit {}): {}".format(e.returncode, detail),
                returncode=e.returncode,
            ) from e
        except OSError as e:
            raise TrimError("Failed to run ffmpeg: {}".format(e)) from e

    def trim(self, source: Path, start_s: float, output: Path) -> Path:
        try:
            output.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise TrimError(
                "Cannot create output directory {}: {}".format(output.parent, e)
            ) from e
        self._run(self.build_command(source, start_s, output))
        if not output.exists():
            raise TrimError("ffmpeg did not produce an output file at {}".format(output))
        return output
