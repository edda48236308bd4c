"""
Capability interfaces for the peer services the user service talks to.

Each interface has one HTTP implementation backed by a shared
``httpx.AsyncClient``. Non-2xx answers raise ``httpx.HTTPStatusError`` and
transport problems raise ``httpx.RequestError``; neither is caught here. Tests
substitute their own implementations or drive these through
``httpx.MockTransport``.
"""
import logging
from abc import ABC, abstractmethod
from typing import List, Optional
from urllib.parse import quote

import httpx

from shared.exceptions import RemoteServiceError
from shared.trace import TRACE_HEADER
from user_service.metrics import REMOTE_CALLS
from user_service.schemas import Hotel, Rating

logger = logging.getLogger("user-service")


def _segment(value: str) -> str:
    """Percent-encode one path segment, slashes included."""
    return quote(str(value), safe="")


# ---------------------------------------------------------------------------
# Interfaces
# ---------------------------------------------------------------------------
class HotelService(ABC):
    @abstractmethod
    async def get_hotel(self, hotel_id: str) -> Hotel:
        ...


class RatingQuery(ABC):
    @abstractmethod
    async def get_ratings_by_user_id(self, user_id: str) -> List[Rating]:
        ...


class RatingService(ABC):
    """Write path on the rating service. Nothing in the read path uses it."""

    @abstractmethod
    async def create_rating(self, rating: Rating) -> Rating:
        ...

    @abstractmethod
    async def update_rating(self, rating_id: str, rating: Rating) -> Rating:
        ...

    @abstractmethod
    async def delete_rating(self, rating_id: str) -> None:
        ...


# ---------------------------------------------------------------------------
# HTTP implementations
# ---------------------------------------------------------------------------
class _HttpPeer:
    service_name = "peer"

    def __init__(self, client: httpx.AsyncClient, base_url: str, trace_id: Optional[str] = None):
        self.client = client
        self.base_url = base_url.rstrip("/")
        self.trace_id = trace_id

    async def _request(self, operation: str, method: str, path: str, **kwargs) -> httpx.Response:
        headers = kwargs.pop("headers", {})
        if self.trace_id:
            headers[TRACE_HEADER] = self.trace_id
        url = f"{self.base_url}{path}"
        try:
            response = await self.client.request(method, url, headers=headers, **kwargs)
            response.raise_for_status()
        except httpx.HTTPError as e:
            REMOTE_CALLS.labels(service=self.service_name, operation=operation, outcome="error").inc()
            logger.error(f"[TRACE {self.trace_id}] {method} {url} failed: {e}")
            raise
        REMOTE_CALLS.labels(service=self.service_name, operation=operation, outcome="ok").inc()
        return response

    def _json(self, response: httpx.Response):
        try:
            return response.json()
        except ValueError as e:
            raise RemoteServiceError(self.service_name, f"response is not JSON: {e}") from e


class HttpHotelService(_HttpPeer, HotelService):
    service_name = "hotel-service"

    async def get_hotel(self, hotel_id: str) -> Hotel:
        response = await self._request("get_hotel", "GET", f"/hotels/{_segment(hotel_id)}")
        payload = self._json(response)
        if not isinstance(payload, dict):
            raise RemoteServiceError(self.service_name, f"expected a hotel object for {hotel_id}, got {payload!r}")
        return Hotel.model_validate(payload)


class HttpRatingQuery(_HttpPeer, RatingQuery):
    service_name = "rating-service"

    async def get_ratings_by_user_id(self, user_id: str) -> List[Rating]:
        response = await self._request("get_ratings_by_user_id", "GET", f"/ratings/user/{_segment(user_id)}")
        payload = self._json(response)
        if not isinstance(payload, list):
            raise RemoteServiceError(self.service_name, f"expected a rating array for user {user_id}, got {payload!r}")
        return [Rating.model_validate(item) for item in payload]


class HttpRatingService(_HttpPeer, RatingService):
    service_name = "rating-service"

    async def create_rating(self, rating: Rating) -> Rating:
        body = rating.model_dump(by_alias=True, exclude={"rating_id"})
        response = await self._request("create_rating", "POST", "/ratings", json=body)
        return Rating.model_validate(self._json(response))

    async def update_rating(self, rating_id: str, rating: Rating) -> Rating:
        body = rating.model_dump(by_alias=True, include={"rating", "feedback"}, exclude_none=True)
        response = await self._request("update_rating", "PUT", f"/ratings/{_segment(rating_id)}", json=body)
        return Rating.model_validate(self._json(response))

    async def delete_rating(self, rating_id: str) -> None:
        await self._request("delete_rating", "DELETE", f"/ratings/{_segment(rating_id)}")
