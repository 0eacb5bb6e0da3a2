"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- ApiConfig: Backend REST client settings
- PollConfig: Polling cadence and notification text
- BannerConfig: In-app banner behavior
- LoggingConfig: Logging behavior
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from typing import Any

import yaml


DEFAULT_TITLE = "New Digest Available"
DEFAULT_BODY = "Your daily news digest is ready. Tap to read."


@dataclass
class ApiConfig:
    """Configuration for the backend REST client.

    Attributes:
        base_url: Root URL of the chat backend
        token: Optional inline bearer token (overrides env var)
        token_env: Environment variable name containing the bearer token
        timeout_seconds: HTTP request timeout
        trust_env: Whether to respect system proxy settings
        user_agent: HTTP User-Agent header string
    """

    base_url: str = "http://localhost:3001"
    token: str | None = None
    token_env: str = "DIGEST_API_TOKEN"
    timeout_seconds: float = 10.0
    trust_env: bool = True
    user_agent: str = "digest-watch/0.1"


@dataclass
class PollConfig:
    """Configuration for the periodic digest check.

    Attributes:
        interval_seconds: Delay between ticks; the first tick runs immediately
        default_title: Banner title used when the new digest has no title
        body: Banner body text for new digests
    """

    interval_seconds: float = 30.0
    default_title: str = DEFAULT_TITLE
    body: str = DEFAULT_BODY


@dataclass
class BannerConfig:
    """Configuration for the in-app banner.

    Attributes:
        auto_dismiss_seconds: Hide a banner after this many seconds, or never if None
    """

    auto_dismiss_seconds: float | None = 6.0


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to write watch events to a JSONL file
        filename: Name of the log file
    """

    level: str = "INFO"
    console: bool = True
    file: bool = False
    filename: str = "digest-watch.jsonl"


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    api: ApiConfig = field(default_factory=ApiConfig)
    poll: PollConfig = field(default_factory=PollConfig)
    banner: BannerConfig = field(default_factory=BannerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    return _merge_config(AppConfig(), raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = _asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            data[key].update({k: v for k, v in value.items() if k in data[key]})
        else:
            data[key] = value
    return _fromdict(data)


def _asdict(cfg: AppConfig) -> dict[str, Any]:
    """Convert AppConfig to nested dictionary."""
    return {
        "api": {
            "base_url": cfg.api.base_url,
            "token": cfg.api.token,
            "token_env": cfg.api.token_env,
            "timeout_seconds": cfg.api.timeout_seconds,
            "trust_env": cfg.api.trust_env,
            "user_agent": cfg.api.user_agent,
        },
        "poll": {
            "interval_seconds": cfg.poll.interval_seconds,
            "default_title": cfg.poll.default_title,
            "body": cfg.poll.body,
        },
        "banner": {
            "auto_dismiss_seconds": cfg.banner.auto_dismiss_seconds,
        },
        "logging": {
            "level": cfg.logging.level,
            "console": cfg.logging.console,
            "file": cfg.logging.file,
            "filename": cfg.logging.filename,
        },
    }


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    return AppConfig(
        api=ApiConfig(**data["api"]),
        poll=PollConfig(**data["poll"]),
        banner=BannerConfig(**data["banner"]),
        logging=LoggingConfig(**data["logging"]),
    )


def get_api_token(cfg: ApiConfig) -> str | None:
    """Get bearer token from inline config or environment variable."""
    if cfg.token:
        return cfg.token
    return os.getenv(cfg.token_env)
