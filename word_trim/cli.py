"""Command-line interface for Word Trim.

WHY: The tool is used from the terminal and from shell scripts: give it
a recording and a word, get back a recording that starts at that word.
The CLI wires together the full pipeline (audio loading, model setup,
chunked VAD search, trimming) behind a single command.

HOW: Uses argparse for the positional audio file and word plus the
model, thread, beam, chunking, VAD, and output options. Builds a
SearchConfig, loads the audio, constructs the engines, runs
find_first_word(), and hands the match to the trimmer. Status messages
go to stderr. Engines are always released before trimming starts.

RULES:
- Positional arguments: audio_file, word
- Exit 0: trimmed file written, or word not found (no file written)
- Exit 1: audio load, model load, or trim failure; empty target word
- Exit 130: interrupted by the user
- Status output goes to stderr (not stdout)
- Engine construction goes through the _create_* factories so tests can
  substitute fakes without loading models
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from word_trim.config import (
    DEFAULT_BEAM_SIZE,
    DEFAULT_CHUNK_SECONDS,
    DEFAULT_LANGUAGE,
    DEFAULT_MODEL,
    DEFAULT_OUTPUT_PATH,
    DEFAULT_THREADS,
    DEFAULT_VAD_MODEL,
    SearchConfig,
)
from word_trim.core.matcher import normalize
from word_trim.core.search import find_first_word
from word_trim.engines.base import AudioLoader, TranscriptionEngine, VadEngine
from word_trim.errors import AudioLoadError, ModelLoadError, TrimError
from word_trim.logging_setup import configure_logging
from word_trim.trimmers import TRIMMERS
from word_trim.trimmers.base import BaseTrimmer


def _status(msg: str) -> None:
    """Print a status message to stderr.

    RULES:
    - All status messages go to stderr
    - Always flush after writing
    """
    print(msg, file=sys.stderr, flush=True)


# ---------------------------------------------------------------------------
# Factories (patched in tests)
# ---------------------------------------------------------------------------


def _create_loader() -> AudioLoader:
    from word_trim.engines.whisper import FasterWhisperLoader

    return FasterWhisperLoader()


def _create_vad(config: SearchConfig) -> VadEngine:
    from word_trim.engines.silero import SileroVadEngine

    return SileroVadEngine(config.vad_model_path, threads=config.threads)


def _create_transcriber(config: SearchConfig) -> TranscriptionEngine:
    from word_trim.engines.whisper import FasterWhisperEngine

    return FasterWhisperEngine(
        config.model_path,
        threads=config.threads,
        beam_size=config.beam_size,
        language=config.language,
    )


def _create_trimmer() -> BaseTrimmer:
    return TRIMMERS["ffmpeg"]()


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


def _build_config(args: argparse.Namespace) -> SearchConfig:
    """Translate parsed arguments into a SearchConfig."""
    return SearchConfig(
        use_vad=args.vad,
        chunk_seconds=args.chunk_seconds or None,
        model_path=args.model,
        vad_model_path=args.vad_model,
        threads=args.threads,
        beam_size=args.beam_size,
        output_path=args.output,
        language=args.language,
    )


def _run_pipeline(args: argparse.Namespace) -> int:
    """Execute load → search → trim and return the process exit code.

    RULES:
    - The word is normalized once, before anything is loaded
    - A VAD engine that loaded is released if the whisper model fails
    - Engines are released before the trimmer runs
    """
    config = _build_config(args)
    target = normalize(args.word)
    if not target:
        print(
            "Error: Target word '{}' has no letters or digits to search for.".format(args.word),
            file=sys.stderr,
        )
        return 1

    audio_path = Path(args.audio_file)
    output_path = Path(config.output_path)

    # Step 1: Load audio
    _status("Loading audio from {}...".format(audio_path))
    try:
        samples = _create_loader().load(str(audio_path))
    except AudioLoadError as e:
        print("Error: {}".format(e), file=sys.stderr)
        return 1

    # Step 2: Initialise engines
    vad: Optional[VadEngine] = None
    transcriber: Optional[TranscriptionEngine] = None
    try:
        if config.use_vad:
            vad = _create_vad(config)
        transcriber = _create_transcriber(config)
    except ModelLoadError as e:
        print("Error: {}".format(e), file=sys.stderr)
        if vad is not None:
            vad.close()
        return 1

    # Step 3: Search
    _status("Searching for '{}'...".format(target))
    try:
        match = find_first_word(samples, target, transcriber, vad, config)
    finally:
        if vad is not None:
            vad.close()
        transcriber.close()

    if match is None:
        _status("Target word '{}' not detected. Not creating an output file.".format(target))
        return 0

    _status("Detected target word '{}' at {:.3f} seconds.".format(target, match.start_s))

    # Step 4: Trim
    trimmer = _create_trimmer()
    _status("Trimming audio and saving to {}...".format(output_path))
    try:
        trimmer.trim(audio_path, match.start_s, output_path)
    except TrimError as e:
        print("Error: {}".format(e), file=sys.stderr)
        return 1

    _status("Successfully created {}.".format(output_path))
    return 0


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError("expected an integer, got {!r}".format(value)) from None
    if number < 1:
        raise argparse.ArgumentTypeError("must be at least 1, got {}".format(number))
    return number


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError("expected an integer, got {!r}".format(value)) from None
    if number < 0:
        raise argparse.ArgumentTypeError("must not be negative, got {}".format(number))
    return number


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    WHY: Separating parser construction from main() makes the CLI
    testable: tests can inspect the parser without running the pipeline.

    RULES:
    - Positional: audio_file, word
    - Optional: --output, --model, --vad-model, --threads, --beam-size
    - Optional: --language, --chunk-seconds (0 disables), --vad/--no-vad, --verbose
    """
    parser = argparse.ArgumentParser(
        prog="word_trim",
        description="Find the first spoken occurrence of a word in an audio "
                    "file and write a copy of the audio starting at that word.",
    )

    parser.add_argument(
        "audio_file",
        help="Path to the audio file to search.",
    )

    parser.add_argument(
        "word",
        help="Word to look for (case and punctuation are ignored).",
    )

    parser.add_argument(
        "--output",
        default=DEFAULT_OUTPUT_PATH,
        help="Path of the trimmed output file (default: %(default)s).",
    )

    parser.add_argument(
        "--model",
        default=DEFAULT_MODEL,
        help="faster-whisper model name or local model directory (default: %(default)s).",
    )

    parser.add_argument(
        "--vad-model",
        default=DEFAULT_VAD_MODEL,
        help="Silero VAD model file (.onnx or TorchScript). Default: bundled model.",
    )

    parser.add_argument(
        "--threads",
        type=_positive_int,
        default=DEFAULT_THREADS,
        help="CPU threads for inference (default: %(default)s).",
    )

    parser.add_argument(
        "--beam-size",
        type=_positive_int,
        default=DEFAULT_BEAM_SIZE,
        help="Beam width for decoding (default: %(default)s).",
    )

    parser.add_argument(
        "--language",
        default=DEFAULT_LANGUAGE,
        help="Spoken language ISO 639-1 code. Default: auto-detect.",
    )

    parser.add_argument(
        "--chunk-seconds",
        type=_non_negative_int,
        default=DEFAULT_CHUNK_SECONDS,
        help="Process the recording in windows of this many seconds; "
             "0 disables chunking (default: %(default)s).",
    )

    parser.add_argument(
        "--vad",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Run voice-activity detection inside each chunk (default: %(default)s).",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show debug logging, including inference library output.",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    - Always exits through sys.exit with the pipeline's exit code
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        code = _run_pipeline(args)
    except KeyboardInterrupt:
        _status("\nCancelled by user.")
        code = 130
    sys.exit(code)


if __name__ == "__main__":
    main()
