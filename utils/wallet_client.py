"""HTTP client for the private wallet service.

Every call forwards the caller's id token in the ``id-token`` header; the
wallet service uses it to find the user and their custodial wallet.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from core.errors import ExternalServiceError, unauthenticated

logger = logging.getLogger(__name__)

SERVICE = "wallet"


class WalletClient:
    def __init__(self, base_url: str, *, timeout: float = 10.0, transport: Optional[httpx.BaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _request(self, method: str, path: str, id_token: str, *, json: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        headers = {"id-token": id_token or ""}
        try:
            with httpx.Client(base_url=self.base_url, timeout=self.timeout, transport=self._transport) as client:
                response = client.request(method, path, headers=headers, json=json)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 401:
                raise unauthenticated()
            logger.error(f"Wallet service error: {e.response.status_code} - {e.response.text}")
            raise ExternalServiceError(SERVICE, f"{method} {path} failed", e.response.status_code)
        except httpx.RequestError as e:
            logger.error(f"Wallet service unreachable: {e}")
            raise ExternalServiceError(SERVICE, f"{method} {path} unreachable")

    def verify_user(self, id_token: str) -> str:
        """The external auth uid behind ``id_token``."""
        return self._request("GET", "auth/verify", id_token)["uid"]

    def get_wallet_address(self, id_token: str) -> str:
        return self._request("GET", "wallet/address", id_token)["address"]

    def create_wallet(self, id_token: str) -> dict:
        """Returns ``{"address", "uid"}``."""
        return self._request("POST", "wallet/create", id_token)

    def get_balance(self, id_token: str, *, address: str) -> str:
        return self._request("GET", f"wallet/balance/{address}", id_token)["balance"]

    def calculate_tips(self, id_token: str, *, qty: int):
        return self._request("POST", "wallet/tips/calculate", id_token, json={"qty": qty})["tips"]

    def send_tips(self, id_token: str, *, to: str, qty: int) -> dict:
        """Returns ``{"from", "to", "amount", "fee"}``."""
        return self._request("POST", "wallet/tips/send", id_token, json={"to": to, "qty": qty})["result"]
