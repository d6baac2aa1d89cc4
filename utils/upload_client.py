"""HTTP client for the upload service (cloud storage cleanup).

Deletions are fire-and-forget: a failure is logged and the caller moves on.
"""

import logging
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger(__name__)


class UploadClient:
    def __init__(self, base_url: str, *, timeout: float = 10.0, transport: Optional[httpx.BaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _delete(self, path: str, id_token: str, body: Dict[str, Any]) -> None:
        try:
            with httpx.Client(base_url=self.base_url, timeout=self.timeout, transport=self._transport) as client:
                response = client.request("DELETE", path, headers={"id-token": id_token or ""}, json=body)
                response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning(f"Upload service cleanup failed | path={path} | body={body} | {e}")

    def delete_video(self, id_token: str, *, ref: str, publish_id: str, video_id: Optional[str] = None) -> None:
        self._delete("upload/video", id_token, {"ref": ref, "publishId": publish_id, "videoId": video_id})

    def delete_image(self, id_token: str, *, ref: str) -> None:
        if not ref:
            return
        self._delete("upload/image", id_token, {"ref": ref})
