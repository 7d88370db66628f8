"""Webhook dispatcher: one POST of a snippet envelope."""

import logging
from typing import Any, Optional

import requests

from .config import DevstashSettings
from .errors import DeliveryError, TransportError, WebhookNotConfiguredError
from .models.envelope import SnippetEnvelope

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 10  # seconds


def build_headers(settings: DevstashSettings) -> dict[str, str]:
    """Request headers; Authorization carries the raw token when one is set."""
    headers = {"Content-Type": "application/json"}
    if settings.auth_token:
        headers["Authorization"] = settings.auth_token
    return headers


def dispatch(
    envelope: SnippetEnvelope,
    settings: DevstashSettings,
    session: Optional[Any] = None,
    timeout: float = REQUEST_TIMEOUT,
) -> requests.Response:
    """Send an envelope to the configured webhook.

    Exactly one attempt is made. There is no retry or queuing.

    Args:
        envelope: The envelope to send
        settings: Resolved webhook URL and auth token
        session: Optional object with a requests-style ``post`` method
        timeout: Seconds to wait for a response

    Returns:
        The webhook response (status < 400)

    Raises:
        WebhookNotConfiguredError: If no webhook URL is set (no request is made)
        TransportError: If the request fails before a response arrives
        DeliveryError: If the webhook answers with status >= 400
    """
    if not settings.webhook_url:
        raise WebhookNotConfiguredError()

    post = session.post if session is not None else requests.post

    logger.debug(f"POST {settings.webhook_url} (snippet {envelope.id})")
    try:
        response = post(
            settings.webhook_url,
            data=envelope.to_json().encode("utf-8"),
            headers=build_headers(settings),
            timeout=timeout,
        )
    except requests.Timeout as e:
        raise TransportError(f"Error sending request to webhook: timed out after {timeout}s ({e})")
    except requests.RequestException as e:
        raise TransportError(f"Error sending request to webhook: {e}")

    logger.debug(f"Webhook responded with status {response.status_code}")

    if response.status_code >= 400:
        raise DeliveryError(response.status_code, response.text or "")

    return response
