from __future__ import annotations

import os

import pytest

from oeis_client.config import ClientConfig, load_config


def test_load_config_env_parsing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OEIS_BASE_URL", "http://mirror.local")
    monkeypatch.setenv("OEIS_TIMEOUT", "2500")
    monkeypatch.setenv("OEIS_MAX_CONCURRENCY", "2")
    monkeypatch.setenv("OEIS_MAY_TRUNCATE", "no")
    monkeypatch.setenv("OEIS_RESPECT_SIGN", "off")
    monkeypatch.setenv("OEIS_MAX_SEQUENCE_TERMS", "10")
    monkeypatch.setenv("OEIS_PAGE_SIZE", "20")
    monkeypatch.setenv("OEIS_USER_AGENT", "tests/1.0")

    cfg = load_config()

    assert cfg.base_url == "http://mirror.local"
    assert cfg.timeout == 2500
    assert cfg.timeout_seconds == 2.5
    assert cfg.max_concurrency == 2
    assert cfg.may_truncate is False
    assert cfg.respect_sign is False
    assert cfg.max_sequence_terms == 10
    assert cfg.page_size == 20
    assert cfg.user_agent == "tests/1.0"


def test_defaults() -> None:
    cfg = ClientConfig()
    assert cfg.base_url == "https://oeis.org"
    assert cfg.timeout == 15_000
    assert cfg.max_concurrency == 5
    assert cfg.max_sequence_terms == 6
    assert cfg.page_size == 10


def test_invalid_bool_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OEIS_MAY_TRUNCATE", "maybe")
    with pytest.raises(ValueError):
        load_config()


def test_unknown_override_key_raises() -> None:
    with pytest.raises(TypeError):
        load_config(not_a_real_key=True)


def test_overrides_win_over_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OEIS_TIMEOUT", "2500")
    cfg = load_config(timeout=100)
    assert cfg.timeout == 100


def test_env_file_is_loaded(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("OEIS_MAX_CONCURRENCY", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("OEIS_MAX_CONCURRENCY=9\n", encoding="utf-8")

    cfg = load_config(env_path=str(env_file))

    assert cfg.max_concurrency == 9
    os.environ.pop("OEIS_MAX_CONCURRENCY", None)


def test_url_joins_paths() -> None:
    cfg = ClientConfig(base_url="https://oeis.org/")
    assert cfg.url("search") == "https://oeis.org/search"
    assert cfg.url("/A000045") == "https://oeis.org/A000045"
