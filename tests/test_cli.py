"""Tests for the command-line interface.

WHY: The CLI owns the exit-code contract that shell scripts rely on:
0 for success and for "word not found", 1 for setup and trim failures.
It also owns resource release when model setup fails halfway.

HOW: The _create_* factories in word_trim.cli are monkeypatched to
return fakes from fakes.py, so main() runs end to end without loading
models or spawning ffmpeg. Exit codes are read from SystemExit.

RULES:
- Every test writes output under tmp_path
- stderr is inspected with capsys for the operator-facing messages
"""

from __future__ import annotations

from pathlib import Path

import pytest

from word_trim import cli
from word_trim.config import SAMPLE_RATE
from word_trim.core.ir import SpeechSegment
from word_trim.errors import AudioLoadError, ModelLoadError, TrimError

from fakes import (
    FakeLoader,
    FakeTranscriber,
    FakeVad,
    RecordingTrimmer,
    make_segment,
    silence,
)


class Pipeline:
    """Holds the fakes wired into word_trim.cli for one test."""

    def __init__(self, monkeypatch, loader, transcriber, vad=None, trimmer=None):
        self.loader = loader
        self.transcriber = transcriber
        self.vad = vad or FakeVad([])
        self.trimmer = trimmer or RecordingTrimmer()
        self.configs = []

        def create_vad(config):
            self.configs.append(config)
            if isinstance(self.vad, Exception):
                raise self.vad
            return self.vad

        def create_transcriber(config):
            self.configs.append(config)
            if isinstance(self.transcriber, Exception):
                raise self.transcriber
            return self.transcriber

        monkeypatch.setattr(cli, "_create_loader", lambda: self.loader)
        monkeypatch.setattr(cli, "_create_vad", create_vad)
        monkeypatch.setattr(cli, "_create_transcriber", create_transcriber)
        monkeypatch.setattr(cli, "_create_trimmer", lambda: self.trimmer)


def _run(argv) -> int:
    with pytest.raises(SystemExit) as exc_info:
        cli.main(argv)
    return exc_info.value.code


@pytest.fixture
def audio_file(tmp_path: Path) -> Path:
    path = tmp_path / "recording.opus"
    path.write_bytes(b"not really audio")
    return path


class TestSuccess:
    def test_match_is_trimmed(self, monkeypatch, capsys, tmp_path, audio_file):
        output = tmp_path / "out" / "trimmed.opus"
        pipeline = Pipeline(
            monkeypatch,
            FakeLoader(silence(40)),
            FakeTranscriber([
                [make_segment((" warm", 10), (" up", 40))],
                [make_segment((" and", 20), (" Action!", 120))],
            ]),
            vad=FakeVad([[SpeechSegment(0, 200)], [SpeechSegment(250, 600)]]),
        )

        code = _run([str(audio_file), "ACTION", "--output", str(output)])

        assert code == 0
        assert len(pipeline.trimmer.requests) == 1
        source, start_s, out = pipeline.trimmer.requests[0]
        assert source == audio_file
        assert start_s == pytest.approx(33.7)
        assert out == output
        assert pipeline.vad.closed
        assert pipeline.transcriber.closed
        stderr = capsys.readouterr().err
        assert "Detected target word 'action' at 33.700 seconds." in stderr
        assert "Successfully created" in stderr

    def test_no_vad_skips_vad_engine(self, monkeypatch, tmp_path, audio_file):
        pipeline = Pipeline(
            monkeypatch,
            FakeLoader(silence(5)),
            FakeTranscriber([[make_segment((" go", 75))]]),
        )

        code = _run([str(audio_file), "go", "--no-vad", "--output", str(tmp_path / "o.opus")])

        assert code == 0
        assert pipeline.vad.calls == []
        assert pipeline.transcriber.calls == [5 * SAMPLE_RATE]
        assert pipeline.trimmer.requests[0][1] == pytest.approx(0.75)


class TestNotFound:
    def test_exit_zero_and_no_file(self, monkeypatch, capsys, tmp_path, audio_file):
        output = tmp_path / "never.opus"
        pipeline = Pipeline(
            monkeypatch,
            FakeLoader(silence(5)),
            FakeTranscriber([[make_segment((" nothing", 0))]]),
            vad=FakeVad([[SpeechSegment(0, 100)]]),
        )

        code = _run([str(audio_file), "missing", "--output", str(output)])

        assert code == 0
        assert not output.exists()
        assert pipeline.trimmer.requests == []
        assert "not detected" in capsys.readouterr().err


class TestFailures:
    def test_audio_load_failure(self, monkeypatch, capsys, audio_file):
        pipeline = Pipeline(
            monkeypatch,
            FakeLoader(error=AudioLoadError("cannot decode")),
            FakeTranscriber([]),
        )

        assert _run([str(audio_file), "word"]) == 1
        assert pipeline.configs == []
        assert "cannot decode" in capsys.readouterr().err

    def test_model_load_failure_releases_vad(self, monkeypatch, capsys, audio_file):
        pipeline = Pipeline(
            monkeypatch,
            FakeLoader(silence(5)),
            ModelLoadError("Failed to initialize whisper context from bad.bin"),
        )

        assert _run([str(audio_file), "word", "--model", "bad.bin"]) == 1
        assert pipeline.vad.closed
        assert "bad.bin" in capsys.readouterr().err

    def test_vad_model_load_failure(self, monkeypatch, capsys, audio_file):
        created = []
        pipeline = Pipeline(
            monkeypatch,
            FakeLoader(silence(5)),
            FakeTranscriber([]),
            vad=ModelLoadError("Failed to initialize VAD context from bad.onnx"),
        )
        monkeypatch.setattr(cli, "_create_transcriber", lambda config: created.append(config))

        assert _run([str(audio_file), "word", "--vad-model", "bad.onnx"]) == 1
        assert created == []
        assert pipeline.trimmer.requests == []
        assert "bad.onnx" in capsys.readouterr().err

    def test_trim_failure(self, monkeypatch, capsys, tmp_path, audio_file):
        Pipeline(
            monkeypatch,
            FakeLoader(silence(5)),
            FakeTranscriber([[make_segment((" word", 0))]]),
            trimmer=RecordingTrimmer(error=TrimError("ffmpeg exploded", returncode=1)),
        )

        code = _run([str(audio_file), "word", "--no-vad", "--output", str(tmp_path / "o.opus")])

        assert code == 1
        assert "ffmpeg exploded" in capsys.readouterr().err

    def test_word_without_letters_is_rejected(self, monkeypatch, capsys, audio_file):
        pipeline = Pipeline(monkeypatch, FakeLoader(silence(5)), FakeTranscriber([]))

        assert _run([str(audio_file), "?!"]) == 1
        assert pipeline.loader.paths == []
        assert "no letters or digits" in capsys.readouterr().err

    def test_keyboard_interrupt(self, monkeypatch, capsys, audio_file):
        Pipeline(monkeypatch, FakeLoader(error=KeyboardInterrupt()), FakeTranscriber([]))

        assert _run([str(audio_file), "word"]) == 130
        assert "Cancelled by user." in capsys.readouterr().err

    def test_interrupt_during_search_releases_engines(self, monkeypatch, capsys, audio_file):
        pipeline = Pipeline(
            monkeypatch,
            FakeLoader(silence(5)),
            FakeTranscriber([KeyboardInterrupt()]),
            vad=FakeVad([[SpeechSegment(0, 100)]]),
        )

        assert _run([str(audio_file), "word"]) == 130
        assert pipeline.vad.closed
        assert pipeline.transcriber.closed
        assert pipeline.trimmer.requests == []
        assert "Cancelled by user." in capsys.readouterr().err


class TestParser:
    def test_defaults(self):
        args = cli.build_parser().parse_args(["a.opus", "hello"])
        assert args.audio_file == "a.opus"
        assert args.word == "hello"
        assert args.vad is True
        assert args.verbose is False

    def test_config_from_flags(self):
        args = cli.build_parser().parse_args([
            "a.opus", "hello",
            "--output", "/tmp/x.opus",
            "--model", "tiny",
            "--vad-model", "/models/silero.onnx",
            "--threads", "3",
            "--beam-size", "2",
            "--language", "es",
            "--chunk-seconds", "0",
        ])
        config = cli._build_config(args)
        assert config.output_path == "/tmp/x.opus"
        assert config.model_path == "tiny"
        assert config.vad_model_path == "/models/silero.onnx"
        assert config.threads == 3
        assert config.beam_size == 2
        assert config.language == "es"
        assert config.chunk_seconds is None
        assert config.chunk_samples is None

    @pytest.mark.parametrize("flag,value", [
        ("--threads", "0"),
        ("--beam-size", "-1"),
        ("--threads", "many"),
        ("--chunk-seconds", "-5"),
    ])
    def test_invalid_numbers_are_rejected(self, flag, value):
        with pytest.raises(SystemExit) as exc_info:
            cli.build_parser().parse_args(["a.opus", "hello", flag, value])
        assert exc_info.value.code == 2

    def test_missing_word_is_rejected(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(["a.opus"])
