"""
Order factory client.

Hands a persisted order to the external pizza factory, which fulfills it and
answers with a report URL and a signed verification token.
"""

from dataclasses import dataclass
from typing import Optional
import httpx
from app.core.config import settings
from app.core.logging_config import logger
from app.schemas.order import OrderResponse
from app.schemas.user import UserResponse


@dataclass
class FactoryResult:
    ok: bool
    report_url: Optional[str] = None
    jwt: Optional[str] = None


class FactoryClient:
    """Client for the pizza factory API."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None
    ):
        """
        Initialize factory client.

        Args:
            base_url: Factory root URL (defaults to FACTORY_URL)
            api_key: Factory API key (defaults to FACTORY_API_KEY)
            timeout: Request timeout in seconds
        """
        self.base_url = (base_url or settings.FACTORY_URL).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.FACTORY_API_KEY
        self.timeout = timeout or settings.FACTORY_TIMEOUT_SECONDS
        if not self.api_key:
            logger.warning("FACTORY_API_KEY not set. Order fulfillment will fail.")

    def submit_order(self, diner: UserResponse, order: OrderResponse) -> FactoryResult:
        """
        Send an order to the factory.

        Args:
            diner: User who placed the order
            order: Persisted order with its id and items

        Returns:
            FactoryResult; ``ok`` is False for non-2xx answers and transport
            errors, and ``report_url`` is relayed whenever the factory sent one
        """
        payload = {
            "diner": {"id": diner.id, "name": diner.name, "email": diner.email},
            "order": order.model_dump(mode="json", by_alias=True),
        }
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

        try:
            response = httpx.post(
                f"{self.base_url}/api/order",
                json=payload,
                headers=headers,
                timeout=self.timeout,
            )
        except httpx.HTTPError as e:
            logger.error(f"Factory request failed for order {order.id}: {type(e).__name__}: {e}")
            return FactoryResult(ok=False)

        try:
            body = response.json()
        except ValueError:
            body = {}

        if not response.is_success:
            logger.error(f"Factory rejected order {order.id}: status={response.status_code}")
        return FactoryResult(
            ok=response.is_success,
            report_url=body.get("reportUrl"),
            jwt=body.get("jwt"),
        )


# Create a singleton instance
factory_client = FactoryClient()
