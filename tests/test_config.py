"""Tests for environment-driven defaults and SearchConfig."""

import importlib

import pytest

from word_trim import config
from word_trim.config import SAMPLE_RATE, SearchConfig


class TestEnvInt:
    def test_missing_uses_default(self, monkeypatch):
        monkeypatch.delenv("WORD_TRIM_TEST_INT", raising=False)
        assert config._env_int("WORD_TRIM_TEST_INT", 7) == 7

    def test_blank_uses_default(self, monkeypatch):
        monkeypatch.setenv("WORD_TRIM_TEST_INT", "  ")
        assert config._env_int("WORD_TRIM_TEST_INT", 7) == 7

    def test_parses_integer(self, monkeypatch):
        monkeypatch.setenv("WORD_TRIM_TEST_INT", " 12 ")
        assert config._env_int("WORD_TRIM_TEST_INT", 7) == 12

    def test_invalid_raises_with_name(self, monkeypatch):
        monkeypatch.setenv("WORD_TRIM_TEST_INT", "twelve")
        with pytest.raises(ValueError, match="WORD_TRIM_TEST_INT"):
            config._env_int("WORD_TRIM_TEST_INT", 7)

    def test_below_minimum_raises_with_bound(self, monkeypatch):
        monkeypatch.setenv("WORD_TRIM_TEST_INT", "0")
        with pytest.raises(ValueError, match="WORD_TRIM_TEST_INT must be at least 1, got 0"):
            config._env_int("WORD_TRIM_TEST_INT", 7, minimum=1)

    def test_minimum_is_inclusive(self, monkeypatch):
        monkeypatch.setenv("WORD_TRIM_TEST_INT", "0")
        assert config._env_int("WORD_TRIM_TEST_INT", 30, minimum=0) == 0


class TestEnvironmentDefaults:
    """Out-of-range defaults fail when the config is loaded, not mid-run."""

    @pytest.mark.parametrize("name,value", [
        ("WORD_TRIM_BEAM_SIZE", "0"),
        ("WORD_TRIM_THREADS", "-3"),
        ("WORD_TRIM_CHUNK_SECONDS", "-1"),
    ])
    def test_out_of_range_value_is_rejected(self, monkeypatch, name, value):
        monkeypatch.setenv(name, value)
        try:
            with pytest.raises(ValueError, match=name):
                importlib.reload(config)
        finally:
            monkeypatch.delenv(name)
            importlib.reload(config)


class TestEnvStr:
    def test_blank_uses_default(self, monkeypatch):
        monkeypatch.setenv("WORD_TRIM_TEST_STR", "")
        assert config._env_str("WORD_TRIM_TEST_STR", None) is None

    def test_value_is_stripped(self, monkeypatch):
        monkeypatch.setenv("WORD_TRIM_TEST_STR", " tiny ")
        assert config._env_str("WORD_TRIM_TEST_STR", "base") == "tiny"


class TestSearchConfig:
    def test_chunk_samples(self):
        assert SearchConfig(chunk_seconds=30).chunk_samples == 30 * SAMPLE_RATE

    @pytest.mark.parametrize("seconds", [None, 0, -1])
    def test_chunking_disabled(self, seconds):
        assert SearchConfig(chunk_seconds=seconds).chunk_samples is None

    def test_defaults_are_usable(self):
        cfg = SearchConfig()
        assert cfg.threads >= 1
        assert cfg.beam_size >= 1
        assert cfg.output_path
