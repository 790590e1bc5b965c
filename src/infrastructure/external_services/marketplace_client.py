"""HTTP client for the marketplace listings API."""
from typing import Any

import httpx
import structlog

from src.application.interfaces.listing_gateway import ListingGatewayError
from src.config import settings

logger = structlog.get_logger(__name__)


class MarketplaceClientError(ListingGatewayError):
    pass


class MarketplaceClient:
    """Thin HTTP wrapper around the marketplace REST API."""

    def __init__(
        self,
        base_url: str = settings.marketplace_api_url,
        api_token: str = settings.marketplace_api_token,
        timeout: float = settings.request_timeout_seconds,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._headers = {
            "Authorization": f"Bearer {api_token}",
            "Accept": "application/json",
        }

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._base_url,
            headers=self._headers,
            timeout=self._timeout,
            transport=self._transport,
        )

    async def get(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        return await self._request("GET", path, params=params)

    async def post(self, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        return await self._request("POST", path, json=payload)

    async def post_file(self, path: str, file: Any) -> dict[str, Any]:
        return await self._request("POST", path, files={"image": file})

    async def ping(self) -> None:
        await self._request("GET", "/health")

    async def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        async with self._client() as client:
            try:
                response = await client.request(method, path, **kwargs)
                response.raise_for_status()
            except httpx.HTTPStatusError as exc:
                logger.error(
                    "marketplace_request_failed",
                    method=method,
                    path=path,
                    status_code=exc.response.status_code,
                    response=exc.response.text,
                )
                raise MarketplaceClientError(
                    f"Marketplace API returned {exc.response.status_code}: {exc.response.text}",
                    status_code=exc.response.status_code,
                ) from exc
            except httpx.RequestError as exc:
                logger.error("marketplace_connection_failed", method=method, path=path, error=str(exc))
                raise MarketplaceClientError(f"Failed to reach marketplace API: {exc}") from exc

        if not response.content:
            return {}
        try:
            data = response.json()
        except ValueError as exc:
            logger.error(
                "marketplace_response_not_json",
                method=method,
                path=path,
                status_code=response.status_code,
                content_type=response.headers.get("content-type"),
            )
            raise MarketplaceClientError(
                f"Marketplace API returned a non-JSON body for {method} {path}",
                status_code=response.status_code,
            ) from exc
        if not isinstance(data, dict):
            logger.error("marketplace_response_not_object", method=method, path=path)
            raise MarketplaceClientError(
                f"Marketplace API returned {type(data).__name__} instead of an object "
                f"for {method} {path}",
                status_code=response.status_code,
            )

        logger.debug(
            "marketplace_request_ok",
            method=method,
            path=path,
            status_code=response.status_code,
        )
        return data
