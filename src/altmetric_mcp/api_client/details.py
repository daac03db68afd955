"""Details Page API client."""

from __future__ import annotations

from collections.abc import Mapping

import httpx

from altmetric_mcp.api_client.base import (
    DEFAULT_TIMEOUT_SECONDS,
    AltmetricClient,
    MissingCredentialsError,
    QueryParams,
)
from altmetric_mcp.digest import format_scalar
from altmetric_mcp.settings import DEFAULT_DETAILS_API_BASE_URL, AltmetricSettings


class DetailsClient(AltmetricClient):
    """Query the public Details Page API, authenticated by an API key."""

    api_name = "Details"

    def __init__(
        self,
        api_key: str | None,
        base_url: str = DEFAULT_DETAILS_API_BASE_URL,
        *,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(base_url, timeout_seconds=timeout_seconds, transport=transport)
        self._api_key = api_key

    @classmethod
    def from_settings(
        cls,
        settings: AltmetricSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> DetailsClient:
        return cls(
            settings.details_api_key,
            settings.details_api_base_url,
            timeout_seconds=settings.request_timeout,
            transport=transport,
        )

    def build_query(self, params: Mapping[str, object]) -> QueryParams:
        """Return ``key`` followed by every parameter that has a value.

        Raises:
            MissingCredentialsError: If no API key is configured.
        """

        if not self._api_key:
            raise MissingCredentialsError(
                "ALTMETRIC_DETAILS_API_KEY is required for Details Page API calls"
            )
        query: QueryParams = [("key", self._api_key)]
        for name, value in params.items():
            if value is not None:
                query.append((name, format_scalar(value)))
        return query
