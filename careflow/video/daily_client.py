"""Minimal client for the video provider's room API."""
from __future__ import annotations

import logging

import httpx

from careflow.core.config import Settings
from careflow.core.errors import UpstreamError

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT_SECONDS = 15


def build_room_payload(name: str, expires_at: int) -> dict:
    return {
        "name": name,
        "privacy": "public",
        "properties": {
            "exp": expires_at,
            "enable_chat": True,
            "enable_screenshare": True,
            "enable_knocking": False,
            "start_video_off": False,
            "start_audio_off": False,
        },
    }


async def create_room(settings: Settings, name: str, expires_at: int) -> dict:
    """Create a room and return the provider's room descriptor."""
    headers = {
        "Authorization": f"Bearer {settings.require_video_provider_key()}",
        "Content-Type": "application/json",
    }
    async with httpx.AsyncClient(timeout=REQUEST_TIMEOUT_SECONDS) as client:
        resp = await client.post(
            f"{settings.video_provider_url}/rooms",
            headers=headers,
            json=build_room_payload(name, expires_at),
        )

    if not resp.is_success:
        logger.error("Video provider rejected room %s (%s): %s", name, resp.status_code, resp.text)
        raise UpstreamError(
            "Failed to create video room",
            upstream_status=resp.status_code,
            upstream_body=resp.text,
        )
    return resp.json()
