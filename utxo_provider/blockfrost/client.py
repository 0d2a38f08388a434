"""Async HTTP client for the Blockfrost REST API."""

import asyncio
import logging
from typing import Any, Dict, Optional

import httpx

from utxo_provider.errors import ApiError, FetchError
from utxo_provider.version import __version__

logger = logging.getLogger(__name__)

MAINNET_URL = "https://cardano-mainnet.blockfrost.io/api/v0"
PREPROD_URL = "https://cardano-preprod.blockfrost.io/api/v0"
PREVIEW_URL = "https://cardano-preview.blockfrost.io/api/v0"

CLIENT_VERSION = f"utxo-provider/{__version__}"


class BlockfrostClient:
    """
    Async client for the Blockfrost REST API.

    Error responses are classified here: API-reported errors raise ApiError
    (carrying the status code), transport failures raise FetchError. Every
    request goes through one semaphore, which bounds how many requests any
    fan-out can have in flight.
    """

    def __init__(
        self,
        url: str = MAINNET_URL,
        project_id: Optional[str] = None,
        max_concurrent_requests: int = 10,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if max_concurrent_requests < 1:
            raise ValueError(f"max_concurrent_requests must be >= 1, got {max_concurrent_requests}")
        self.url = url.rstrip("/")
        self.project_id = project_id or ""
        self.timeout = timeout
        self._transport = transport
        self._http: Optional[httpx.AsyncClient] = None
        self._semaphore = asyncio.Semaphore(max_concurrent_requests)

    def _get_headers(self) -> Dict[str, str]:
        return {"project_id": self.project_id, "client_version": CLIENT_VERSION}

    def _client(self) -> httpx.AsyncClient:
        if self._http is None:
            self._http = httpx.AsyncClient(
                base_url=self.url,
                headers=self._get_headers(),
                timeout=self.timeout,
                transport=self._transport,
            )
            logger.info(f"Opened Blockfrost client for {self.url}")
        return self._http

    async def close(self):
        if self._http:
            await self._http.aclose()
            self._http = None
            logger.info("Closed Blockfrost client")

    async def __aenter__(self):
        self._client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def _send_request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        content: Optional[bytes] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """Send a request and return the decoded JSON body."""
        async with self._semaphore:
            try:
                response = await self._client().request(
                    method, path, params=params, content=content, headers=headers,
                )
            except httpx.HTTPError as e:
                raise FetchError(f"Request failed: {method} {path}: {e}") from e

        try:
            body = response.json()
        except ValueError:
            body = None

        if response.is_error or (isinstance(body, dict) and "error" in body and "status_code" in body):
            status_code, message = response.status_code, None
            if isinstance(body, dict):
                status_code = body.get("status_code", status_code)
                message = body.get("message") or body.get("error")
            logger.debug(f"{method} {path} -> {status_code}: {message}")
            raise ApiError(status_code, message)

        if body is None:
            raise FetchError(f"Invalid JSON response: {method} {path}")
        return body

    async def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return await self._send_request("GET", path, params=params)

    async def post_cbor(self, path: str, body: bytes) -> Any:
        return await self._send_request(
            "POST", path, content=body, headers={"Content-Type": "application/cbor"},
        )
