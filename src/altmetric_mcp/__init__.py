"""Altmetric MCP - Altmetric Details Page and Explorer APIs as agent tools."""

from __future__ import annotations

from importlib import import_module
from typing import Any, TYPE_CHECKING

__version__ = "0.1.0"

__all__ = [
    "AltmetricSettings",
    "AltmetricTools",
    "InvalidSecretError",
    "canonical_string",
    "compute_digest",
]

if TYPE_CHECKING:
    from .digest import InvalidSecretError, canonical_string, compute_digest
    from .settings import AltmetricSettings
    from .tools import AltmetricTools


def __getattr__(name: str) -> Any:
    """Lazily import modules so the digest helpers load without the HTTP stack."""

    module_map = {
        "AltmetricSettings": "settings",
        "AltmetricTools": "tools",
        "InvalidSecretError": "digest",
        "canonical_string": "digest",
        "compute_digest": "digest",
    }

    if name not in module_map:
        raise AttributeError(name)

    module = import_module(f".{module_map[name]}", __name__)
    return getattr(module, name)
