"""Client settings for the OEIS web service.

All settings can be overridden via environment variables, an optional
``.env`` file, or by passing values directly to ``ClientConfig``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

DEFAULT_BASE_URL = "https://oeis.org"
DEFAULT_USER_AGENT = "oeis-client/0.1.0"


def _parse_bool(value: str) -> bool:
    normalized = value.strip().lower()
    if normalized in {"1", "true", "t", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "f", "no", "n", "off"}:
        return False
    raise ValueError(f"Invalid boolean value: {value!r}")


@dataclass
class ClientConfig:
    """Connection and search defaults for the OEIS service."""

    base_url: str = DEFAULT_BASE_URL
    timeout: int = 15_000  # milliseconds
    max_concurrency: int = 5
    may_truncate: bool = True
    respect_sign: bool = True
    max_sequence_terms: int = 6
    page_size: int = 10
    user_agent: str = DEFAULT_USER_AGENT

    @property
    def timeout_seconds(self) -> float:
        return self.timeout / 1000

    def url(self, path: str) -> str:
        """Join *path* onto the base URL."""
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"


def load_config(env_path: Optional[str] = None, **overrides) -> ClientConfig:
    """Build a ClientConfig with env-var and keyword overrides.

    Resolution order (later wins):
      1. Dataclass defaults
      2. Variables from *env_path* (loaded with python-dotenv, never
         overriding variables already present in the process environment)
      3. Environment variables (``OEIS_BASE_URL``, etc.)
      4. Explicit keyword arguments

    Supported env vars:
      - OEIS_BASE_URL
      - OEIS_TIMEOUT  (milliseconds)
      - OEIS_MAX_CONCURRENCY
      - OEIS_MAY_TRUNCATE  ("true"/"false")
      - OEIS_RESPECT_SIGN  ("true"/"false")
      - OEIS_MAX_SEQUENCE_TERMS
      - OEIS_PAGE_SIZE
      - OEIS_USER_AGENT
    """
    if env_path is not None:
        load_dotenv(env_path)

    cfg = ClientConfig()

    # Env-var layer
    base_url = os.getenv("OEIS_BASE_URL")
    if base_url:
        cfg.base_url = base_url

    timeout = os.getenv("OEIS_TIMEOUT")
    if timeout:
        cfg.timeout = int(timeout)

    max_concurrency = os.getenv("OEIS_MAX_CONCURRENCY")
    if max_concurrency:
        cfg.max_concurrency = int(max_concurrency)

    may_truncate = os.getenv("OEIS_MAY_TRUNCATE")
    if may_truncate is not None:
        cfg.may_truncate = _parse_bool(may_truncate)

    respect_sign = os.getenv("OEIS_RESPECT_SIGN")
    if respect_sign is not None:
        cfg.respect_sign = _parse_bool(respect_sign)

    max_terms = os.getenv("OEIS_MAX_SEQUENCE_TERMS")
    if max_terms:
        cfg.max_sequence_terms = int(max_terms)

    page_size = os.getenv("OEIS_PAGE_SIZE")
    if page_size:
        cfg.page_size = int(page_size)

    user_agent = os.getenv("OEIS_USER_AGENT")
    if user_agent:
        cfg.user_agent = user_agent

    # Explicit overrides layer
    for key, value in overrides.items():
        if hasattr(cfg, key):
            setattr(cfg, key, value)
        else:
            raise TypeError(f"Unknown config key: {key!r}")

    return cfg
