"""HTTP clients for the Altmetric Details Page and Explorer APIs."""

from __future__ import annotations

from altmetric_mcp.api_client.base import (
    AltmetricClient,
    ApiRequestError,
    MissingCredentialsError,
)
from altmetric_mcp.api_client.details import DetailsClient
from altmetric_mcp.api_client.explorer import ExplorerClient

__all__ = [
    "AltmetricClient",
    "ApiRequestError",
    "DetailsClient",
    "ExplorerClient",
    "MissingCredentialsError",
]
