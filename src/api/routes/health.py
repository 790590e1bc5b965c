import asyncio

import pika
from fastapi import APIRouter

from src.config import settings
from src.infrastructure.external_services.marketplace_client import (
    MarketplaceClient,
    MarketplaceClientError,
)

router = APIRouter(tags=["health"])


def _check_rabbitmq(rabbitmq_url: str) -> None:
    connection = pika.BlockingConnection(pika.URLParameters(rabbitmq_url))
    connection.close()


@router.get("/health")
async def health_check() -> dict:  # type: ignore[type-arg]
    """Liveness + dependency health check."""
    marketplace_status = "connected"
    try:
        await MarketplaceClient().ping()
    except MarketplaceClientError as exc:
        marketplace_status = f"error: {exc}"

    rabbitmq_status = "disabled"
    if settings.publish_events:
        rabbitmq_status = "connected"
        loop = asyncio.get_running_loop()
        try:
            # pika blocks; keep it off the event loop
            await loop.run_in_executor(None, _check_rabbitmq, settings.rabbitmq_url)
        except Exception as exc:
            rabbitmq_status = f"error: {exc}"

    healthy = marketplace_status == "connected" and rabbitmq_status in ("connected", "disabled")

    return {
        "status": "healthy" if healthy else "degraded",
        "marketplace_api": marketplace_status,
        "rabbitmq": rabbitmq_status,
    }
