"""Send transactional email through the Resend HTTP API."""
from __future__ import annotations

import logging

import httpx

from careflow.core.config import Settings
from careflow.core.errors import UpstreamError

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT_SECONDS = 20


async def send_email(settings: Settings, to: str, subject: str, html: str) -> dict:
    """Submit one message and return the provider receipt, e.g. ``{"id": "..."}``."""
    headers = {
        "Authorization": f"Bearer {settings.require_email_provider_key()}",
        "Content-Type": "application/json",
    }
    payload = {
        "from": settings.email_sender,
        "to": [to],
        "subject": subject,
        "html": html,
    }
    async with httpx.AsyncClient(timeout=REQUEST_TIMEOUT_SECONDS) as client:
        resp = await client.post(f"{settings.email_provider_url}/emails", headers=headers, json=payload)

    if not resp.is_success:
        logger.error("Email provider error (%s): %s", resp.status_code, resp.text)
        raise UpstreamError(
            f"Email provider returned status {resp.status_code}",
            upstream_status=resp.status_code,
            upstream_body=resp.text,
        )
    return resp.json()
