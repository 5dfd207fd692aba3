from typing import Any, Dict, List, Optional
from urllib.parse import urlencode

import httpx

from config import BOOKING_API_TIMEOUT, BOOKING_API_URL
from utils.exceptions import RemoteApiError
from utils.logging_utils import setup_logger

logger = setup_logger(__name__)


def get_api_url(endpoint: str, base_url: str = BOOKING_API_URL, **params) -> str:
    """
    Build a URL on the remote booking API.

    Every call goes to one base URL and is routed by the ``endpoint`` query
    parameter, e.g. ``get_api_url("bookings", id="BK12345")``.
    """
    query = {"endpoint": endpoint}
    query.update({key: str(value) for key, value in params.items()})
    return f"{base_url}?{urlencode(query)}"


class BookingApiClient:
    """Thin async client for the remote booking API."""

    def __init__(self, base_url: str = BOOKING_API_URL, timeout: float = BOOKING_API_TIMEOUT,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url
        self.client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def _request(self, method: str, endpoint: str, json: Any = None, **params) -> Any:
        url = get_api_url(endpoint, self.base_url, **params)
        try:
            response = await self.client.request(method, url, json=json)
        except httpx.HTTPError as e:
            logger.error("Booking API %s %s failed: %s", method, endpoint, e)
            raise RemoteApiError("The booking service is unreachable. Please try again.") from e

        if response.is_error:
            try:
                body = response.json()
            except ValueError:
                body = None
            detail = body.get("error") if isinstance(body, dict) else None
            logger.error("Booking API %s %s returned %d: %s", method, endpoint, response.status_code, detail)
            raise RemoteApiError(detail or "The booking service rejected the request.")

        if not response.content:
            return None
        return response.json()

    async def list_bookings(self) -> List[Dict[str, Any]]:
        return await self._request("GET", "bookings") or []

    async def create_booking(self, row: Dict[str, Any]) -> Any:
        return await self._request("POST", "bookings", json=row)

    async def update_booking_status(self, booking_id: str, status: str) -> Any:
        return await self._request("POST", "update_booking_status", json={"id": booking_id, "status": status})

    async def update_booking(self, row: Dict[str, Any]) -> Any:
        return await self._request("PUT", "bookings", json=row)

    async def delete_booking(self, booking_id: str) -> Any:
        return await self._request("DELETE", "bookings", id=booking_id)

    async def close(self):
        await self.client.aclose()
