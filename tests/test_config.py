"""Tests for YAML configuration loading."""

from __future__ import annotations

from pathlib import Path

from digest_watch.config import AppConfig, get_api_token, load_config


def test_load_config_without_path_returns_defaults():
    cfg = load_config(None)
    assert cfg == AppConfig()
    assert cfg.poll.interval_seconds == 30.0
    assert cfg.banner.auto_dismiss_seconds == 6.0
    assert cfg.poll.default_title == "New Digest Available"


def test_load_config_merges_sections(tmp_path: Path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "api:\n"
        "  base_url: https://chat.example.com\n"
        "poll:\n"
        "  interval_seconds: 5\n"
        "banner:\n"
        "  auto_dismiss_seconds: null\n"
        "unknown_section:\n"
        "  x: 1\n",
        encoding="utf-8",
    )

    cfg = load_config(str(path))

    assert cfg.api.base_url == "https://chat.example.com"
    assert cfg.api.timeout_seconds == 10.0
    assert cfg.poll.interval_seconds == 5
    assert cfg.poll.body == "Your daily news digest is ready. Tap to read."
    assert cfg.banner.auto_dismiss_seconds is None


def test_load_config_empty_file(tmp_path: Path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(str(path)) == AppConfig()


def test_loaded_configs_do_not_share_state():
    first = load_config(None)
    first.poll.interval_seconds = 1
    assert load_config(None).poll.interval_seconds == 30.0


def test_get_api_token_prefers_inline(monkeypatch):
    monkeypatch.setenv("DIGEST_API_TOKEN", "from-env")
    cfg = AppConfig().api
    assert get_api_token(cfg) == "from-env"
    cfg.token = "inline"
    assert get_api_token(cfg) == "inline"
