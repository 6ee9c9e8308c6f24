"""
HTTP client factory for the ledger API.

Centralizes how `httpx.Client` instances are built from settings: base URL,
bearer token, JSON headers and timeout. Requests are never retried here; a
failed call surfaces to the caller as a notice and the user decides whether
to try again.
"""

from __future__ import annotations

from typing import Dict, Optional

import httpx

from wager_history.config import Settings, get_settings


def build_headers(token: Optional[str]) -> Dict[str, str]:
    headers = {
        "Accept": "application/json",
        "Content-Type": "application/json",
    }
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def build_client(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> httpx.Client:
    """
    Create a configured synchronous client.

    Parameters
    ----------
    settings : Settings | None
        Source of base URL, token and timeout. Defaults to `get_settings()`.
    transport : httpx.BaseTransport | None
        Optional transport override (e.g. `httpx.MockTransport` in tests).

    Returns
    -------
    httpx.Client
        A client the caller is responsible for closing.
    """
    settings = settings or get_settings()
    return httpx.Client(
        base_url=settings.api_base_url.rstrip("/"),
        headers=build_headers(settings.api_token),
        timeout=httpx.Timeout(settings.api_timeout),
        transport=transport,
    )


__all__ = ["build_headers", "build_client"]
