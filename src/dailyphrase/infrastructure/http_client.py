"""Shared HTTP client utilities (requests).

Requests are made once; retrying is left to the backoff executor wrapping the
caller. Failures are translated into ``GenerationServiceError`` with messages
that name the cause ("network error", "timeout", "HTTP 503") so the default
retry predicate can classify them.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger(__name__)


class GenerationServiceError(Exception):
    """Call to the text generation service failed."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ServiceConnectionError(GenerationServiceError, ConnectionError):
    """The generation service could not be reached."""

    pass


def post_json(
    url: str,
    *,
    payload: Dict[str, Any],
    headers: Dict[str, str],
    timeout: float,
    params: Optional[Dict[str, str]] = None,
) -> Dict[str, Any]:
    """POST JSON and return the decoded JSON response

    Raises:
        GenerationServiceError: On network errors, timeouts, HTTP errors or
            a non-JSON response body
    """
    logger.debug(f"HTTP POST {url}")
    try:
        resp = requests.post(url, json=payload, headers=headers, params=params, timeout=timeout)
        resp.raise_for_status()
    except requests.exceptions.Timeout as e:
        raise GenerationServiceError(f"Request timeout calling {url}: {e}") from e
    except requests.exceptions.ConnectionError as e:
        raise ServiceConnectionError(f"Network error calling {url}: {e}") from e
    except requests.exceptions.HTTPError as e:
        status_code = e.response.status_code if e.response is not None else None
        reason = "rate limit exceeded" if status_code == 429 else (e.response.reason if e.response is not None else "")
        raise GenerationServiceError(f"HTTP {status_code} from {url}: {reason}", status_code=status_code) from e
    except requests.exceptions.RequestException as e:
        raise GenerationServiceError(f"HTTP request failed: {e}") from e

    try:
        return resp.json()
    except ValueError as e:
        raise GenerationServiceError(f"Response from {url} is not JSON: {e}") from e
