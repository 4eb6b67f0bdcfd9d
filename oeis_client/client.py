"""Client factory for OEIS HTTP connections."""

from typing import Optional

import httpx

from .config import ClientConfig, load_config


def create_client(
    config: Optional[ClientConfig] = None,
    **overrides,
) -> httpx.Client:
    """Create and return an httpx client for the OEIS service.

    Args:
        config: An explicit :class:`ClientConfig`.  When ``None``,
            one is built via :func:`load_config` (env vars + *overrides*).
        **overrides: Passed to :func:`load_config` when *config* is ``None``.

    Returns:
        A configured :class:`httpx.Client`. The client is safe to share
        between worker threads.
    """
    if config is None:
        config = load_config(**overrides)

    return httpx.Client(
        headers={"User-Agent": config.user_agent},
        timeout=config.timeout_seconds,
        follow_redirects=True,
    )
