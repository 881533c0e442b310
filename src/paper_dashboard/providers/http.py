"""Shared HTTP helpers for upstream providers."""

from typing import Any, Optional

import requests

from paper_dashboard.core.exceptions import UpstreamError


def _get(
    session: requests.Session,
    source: str,
    url: str,
    timeout: float,
    headers: Optional[dict] = None,
    params: Optional[dict] = None,
) -> requests.Response:
    try:
        response = session.get(url, headers=headers, params=params, timeout=timeout)
    except requests.Timeout as exc:
        raise UpstreamError(source, f"timed out after {timeout}s") from exc
    except requests.RequestException as exc:
        raise UpstreamError(source, str(exc)) from exc

    if not response.ok:
        raise UpstreamError(
            source,
            f"{response.status_code} {response.reason}",
            status_code=response.status_code,
        )
    return response


def get_json(
    session: requests.Session,
    source: str,
    url: str,
    timeout: float,
    headers: Optional[dict] = None,
    params: Optional[dict] = None,
) -> Any:
    """
    GET a URL and decode its JSON body.

    Timeouts, connection errors, non-2xx statuses and undecodable bodies are
    all raised as UpstreamError so callers deal with a single failure type.
    """
    response = _get(session, source, url, timeout, headers=headers, params=params)
    try:
        return response.json()
    except ValueError as exc:
        raise UpstreamError(source, "response body is not valid JSON") from exc


def get_text(
    session: requests.Session,
    source: str,
    url: str,
    timeout: float,
    params: Optional[dict] = None,
) -> str:
    """GET a URL and return its body as text, with the same failure mapping as get_json."""
    response = _get(session, source, url, timeout, params=params)
    return response.text
