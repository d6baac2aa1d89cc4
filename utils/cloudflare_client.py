"""Cloudflare Stream API client (transcoded videos and live inputs)."""

import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from core.errors import ExternalServiceError

logger = logging.getLogger(__name__)

SERVICE = "cloudflare"


class CloudflareStreamClient:
    def __init__(
        self,
        base_url: str,
        *,
        account_id: str,
        api_token: str,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.account_id = account_id
        self.api_token = api_token
        self.timeout = timeout
        self._transport = transport

    @property
    def _stream_path(self) -> str:
        return f"client/v4/accounts/{self.account_id}/stream"

    def _request(self, method: str, path: str, *, json: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        headers = {"Authorization": f"Bearer {self.api_token}"}
        try:
            with httpx.Client(base_url=self.base_url, timeout=self.timeout, transport=self._transport) as client:
                response = client.request(method, path, headers=headers, json=json)
                response.raise_for_status()
                return response.json() if response.content else {}
        except httpx.HTTPStatusError as e:
            logger.error(f"Cloudflare API error: {e.response.status_code} - {e.response.text}")
            raise ExternalServiceError(SERVICE, f"{method} {path} failed", e.response.status_code)
        except httpx.RequestError as e:
            logger.error(f"Cloudflare API unreachable: {e}")
            raise ExternalServiceError(SERVICE, f"{method} {path} unreachable")

    def delete_video(self, video_id: str) -> None:
        self._request("DELETE", f"{self._stream_path}/{video_id}")

    def create_live_input(self, *, publish_id: str) -> dict:
        body = {
            "deleteRecordingAfterDays": 30,
            "meta": {"name": publish_id},
            "recording": {
                "mode": "automatic",
                "requireSignedURLs": False,
                "timeoutSeconds": 0,
                "deleteRecordingAfterDays": 45,
            },
        }
        return self._request("POST", f"{self._stream_path}/live_inputs", json=body)

    def get_live_input(self, uid: str) -> dict:
        return self._request("GET", f"{self._stream_path}/live_inputs/{quote(uid, safe='')}")
