from __future__ import annotations

import pytest

from healthmate import config


def test_pacing_defaults():
    assert config._int_setting("HEALTHMATE_UNSET_SETTING", "2", minimum=1) == 2


def test_pacing_reads_environment(monkeypatch):
    monkeypatch.setenv("CHAT_CHUNK_SIZE", "4")
    monkeypatch.setenv("CHAT_CHUNK_INTERVAL_MS", "0")

    assert config._int_setting("CHAT_CHUNK_SIZE", "2", minimum=1) == 4
    assert config._int_setting("CHAT_CHUNK_INTERVAL_MS", "50", minimum=0) == 0


@pytest.mark.parametrize("raw", ["0", "-3", "two", ""])
def test_chunk_size_must_be_positive_integer(monkeypatch, raw):
    monkeypatch.setenv("CHAT_CHUNK_SIZE", raw)

    with pytest.raises(RuntimeError, match="CHAT_CHUNK_SIZE"):
        config._int_setting("CHAT_CHUNK_SIZE", "2", minimum=1)


@pytest.mark.parametrize("raw", ["-1", "1.5"])
def test_chunk_interval_must_not_be_negative(monkeypatch, raw):
    monkeypatch.setenv("CHAT_CHUNK_INTERVAL_MS", raw)

    with pytest.raises(RuntimeError, match="CHAT_CHUNK_INTERVAL_MS"):
        config._int_setting("CHAT_CHUNK_INTERVAL_MS", "50", minimum=0)
