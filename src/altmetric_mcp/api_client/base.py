"""Shared HTTP plumbing for the Altmetric API clients."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Final

import httpx

__all__ = ["AltmetricClient", "ApiRequestError", "MissingCredentialsError"]

LOGGER = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS: Final[float] = 30.0

QueryParams = list[tuple[str, str]]


class ApiRequestError(RuntimeError):
    """Raised when an Altmetric API call fails.

    The message never includes the upstream response body; that is logged
    instead.
    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class MissingCredentialsError(RuntimeError):
    """Raised when a client is used without its API key."""


class AltmetricClient(ABC):
    """Base class issuing authenticated GET requests against one API."""

    api_name: str = "Altmetric"

    def __init__(
        self,
        base_url: str,
        *,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base = base_url.rstrip("/")
        self._timeout = timeout_seconds
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self._base

    @abstractmethod
    def build_query(self, params: Mapping[str, object]) -> QueryParams:
        """Return the full query string, credentials included, for ``params``."""

    async def request(
        self, endpoint: str, params: Mapping[str, object] | None = None
    ) -> dict[str, Any]:
        """Call ``endpoint`` with ``params`` and return the decoded JSON body."""

        return await self._get_json(endpoint, self.build_query(params or {}))

    async def _get_json(self, endpoint: str, params: QueryParams) -> dict[str, Any]:
        """Issue a GET request and decode the JSON body.

        Args:
            endpoint: Absolute path below the base URL.
            params: Ordered query parameters; repeated names are preserved.

        Returns:
            Decoded JSON object.

        Raises:
            ApiRequestError: On transport failure, a non-2xx status, or a
                body that is not a JSON object.
        """

        url = f"{self._base}{endpoint}"
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.get(url, params=params)
        except httpx.HTTPError as exc:
            LOGGER.error(
                "%s API transport error",
                self.api_name,
                extra={"client": type(self).__name__, "endpoint": endpoint},
                exc_info=exc,
            )
            raise ApiRequestError("API request failed: could not reach the API") from exc

        if not response.is_success:
            LOGGER.error(
                "%s API error (%s): %s",
                self.api_name,
                response.status_code,
                response.text,
                extra={
                    "client": type(self).__name__,
                    "endpoint": endpoint,
                    "status_code": response.status_code,
                },
            )
            raise ApiRequestError(
                f"API request failed with status {response.status_code}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            LOGGER.error(
                "%s API returned a non-JSON body",
                self.api_name,
                extra={"client": type(self).__name__, "endpoint": endpoint},
                exc_info=exc,
            )
            raise ApiRequestError("API request failed: invalid JSON response") from exc

        if not isinstance(payload, dict):
            raise ApiRequestError("API request failed: unexpected response shape")
        return payload
