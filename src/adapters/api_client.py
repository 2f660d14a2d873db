"""Client for the distribution invalidation API (v1beta1).

Responsibility:
- Perform one JSON request and hand back the decoded payload, or raise exactly
  one error of the `core.errors` taxonomy.
- No UI side effects: presenting the outcome is the handlers' job.
"""

from __future__ import annotations

import json
import logging
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import ValidationError as PydanticValidationError

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.models import DistributionCatalog, InvalidationRequest
from core.errors import ApiError, DecodeError, TransportError

logger = logging.getLogger(__name__)

DEFAULT_API_PREFIX = "/api/v1beta1/distributions"


def _error_message(method: str, url: str, response: httpx.Response) -> str:
    """Best-available diagnostic for a non-2xx response.

    Prefers the `status` string the server puts in its JSON error bodies.
    """

    text = response.text
    try:
        data = json.loads(text)
    except ValueError:
        data = None
    if isinstance(data, dict) and isinstance(data.get("status"), str):
        return data["status"]
    return (
        f"{method} {url} returned error: "
        f"{response.status_code} {response.reason_phrase}: {text}"
    )


class InvalidationApiClient:
    """Async access to the catalog, create and get endpoints."""

    def __init__(self, client: httpx.AsyncClient, *, api_prefix: str = DEFAULT_API_PREFIX) -> None:
        self._client = client
        self._prefix = api_prefix.rstrip("/")

    @classmethod
    def from_settings(
        cls,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "InvalidationApiClient":
        settings = settings or AppSettings()
        client = build_async_client(settings, transport=transport)
        return cls(client, api_prefix=settings.api_prefix)

    async def __aenter__(self) -> "InvalidationApiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # URLs

    def catalog_url(self) -> str:
        return self._prefix

    def invalidations_url(self, distribution: str) -> str:
        return f"{self._prefix}/{quote(distribution, safe='')}/invalidations"

    def invalidation_url(self, distribution: str, invalidation_id: str) -> str:
        return f"{self.invalidations_url(distribution)}/{quote(invalidation_id, safe='')}"

    # Generic request

    async def request(self, method: str, url: str, body: Any = None) -> Any:
        """Send one request and return its decoded JSON body.

        Raises:
            TransportError: the server could not be reached.
            ApiError: non-2xx status.
            DecodeError: 2xx status with a body that is not JSON.
        """

        method = method.upper()
        headers: dict[str, str] = {"Accept": "application/json"}
        content: bytes | None = None
        if body is not None:
            headers["Content-Type"] = "application/json"
            content = json.dumps(body).encode("utf-8")

        logger.debug("%s %s", method, url)
        try:
            response = await self._client.request(method, url, headers=headers, content=content)
        except httpx.RequestError as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise TransportError(f"{method} {url} failed: {exc}", cause=exc) from exc

        if not response.is_success:
            message = _error_message(method, url, response)
            logger.warning("%s %s returned %s: %s", method, url, response.status_code, message)
            raise ApiError(message, status_code=response.status_code)

        try:
            return response.json()
        except ValueError as exc:
            raise DecodeError(f"{method} {url} returned a body that is not valid JSON") from exc

    # Endpoints

    async def list_distributions(self) -> list[str]:
        url = self.catalog_url()
        data = await self.request("GET", url)
        try:
            catalog = DistributionCatalog.model_validate(data)
        except PydanticValidationError as exc:
            raise DecodeError(f"GET {url} returned an unexpected catalog: {exc}") from exc
        return catalog.distributions

    async def create_invalidation(self, distribution: str, paths: list[str]) -> Any:
        body = InvalidationRequest(paths=paths).model_dump(mode="json")
        return await self.request("POST", self.invalidations_url(distribution), body)

    async def get_invalidation(self, distribution: str, invalidation_id: str) -> Any:
        return await self.request("GET", self.invalidation_url(distribution, invalidation_id))
