"""Explorer API client with digest-signed requests."""

from __future__ import annotations

import logging
from collections.abc import Mapping

import httpx

from altmetric_mcp.api_client.base import (
    DEFAULT_TIMEOUT_SECONDS,
    AltmetricClient,
    MissingCredentialsError,
    QueryParams,
)
from altmetric_mcp.digest import EXCLUDED_KEYS, compute_digest, format_scalar
from altmetric_mcp.settings import DEFAULT_EXPLORER_API_BASE_URL, AltmetricSettings

LOGGER = logging.getLogger(__name__)


class ExplorerClient(AltmetricClient):
    """Query the institutional Explorer API.

    Filters travel as ``filter[name]`` (or ``filter[name][]`` for lists)
    query parameters. Ordering and pagination parameters are sent bare. Every
    request carries a ``digest`` over the filters, even when there are none.
    """

    api_name = "Explorer"

    def __init__(
        self,
        api_key: str | None,
        api_secret: str | None,
        base_url: str = DEFAULT_EXPLORER_API_BASE_URL,
        *,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(base_url, timeout_seconds=timeout_seconds, transport=transport)
        self._api_key = api_key
        self._api_secret = api_secret

    @classmethod
    def from_settings(
        cls,
        settings: AltmetricSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> ExplorerClient:
        return cls(
            settings.explorer_api_key,
            settings.explorer_secret_value,
            settings.explorer_api_base_url,
            timeout_seconds=settings.request_timeout,
            transport=transport,
        )

    def build_query(self, params: Mapping[str, object]) -> QueryParams:
        """Return the signed query string for ``params``.

        Raises:
            MissingCredentialsError: If no API key is configured.
            InvalidSecretError: If the secret is missing or too short.
        """

        if not self._api_key:
            raise MissingCredentialsError(
                "ALTMETRIC_EXPLORER_API_KEY is required for Explorer API calls"
            )

        present = {name: value for name, value in params.items() if value is not None}
        query: QueryParams = [("key", self._api_key)]
        for name, value in present.items():
            if name in EXCLUDED_KEYS:
                query.append((name, format_scalar(value)))
            elif isinstance(value, (list, tuple)):
                query.extend((f"filter[{name}][]", format_scalar(item)) for item in value)
            else:
                query.append((f"filter[{name}]", format_scalar(value)))

        query.append(("digest", compute_digest(present, self._api_secret)))
        LOGGER.debug(
            "Signed Explorer request",
            extra={"filters": sorted(k for k in present if k not in EXCLUDED_KEYS)},
        )
        return query
