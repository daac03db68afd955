"""Format checks for research output identifiers.

Only the identifier shape is checked. Whether the output exists is left to
the Details Page API.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Final

import idutils

__all__ = ["IDENTIFIER_TYPES", "InvalidIdentifierError", "validate_identifier"]

IDENTIFIER_TYPES: Final[tuple[str, ...]] = (
    "doi",
    "pmid",
    "arxiv",
    "id",
    "ads",
    "handle",
    "nct_id",
    "repec",
    "urn",
    "uri",
    "isbn",
    "ssrn",
    "dimensions_publication_id",
)

_ALTMETRIC_ID = re.compile(r"\d+")
_NCT = re.compile(r"NCT\d{8}", re.IGNORECASE)
_REPEC = re.compile(r"RePEc:[a-z]{3}:[a-z0-9]+:\S+", re.IGNORECASE)

# idutils has no RePEc scheme.
_CHECKERS: Final[dict[str, tuple[Callable[[str], object], str]]] = {
    "doi": (idutils.is_doi, "DOI"),
    "pmid": (idutils.is_pmid, "PubMed ID"),
    "arxiv": (idutils.is_arxiv, "arXiv ID"),
    "ads": (idutils.is_ads, "ADS Bibcode"),
    "handle": (idutils.is_handle, "Handle"),
    "repec": (_REPEC.fullmatch, "RePEc ID"),
    "urn": (idutils.is_urn, "URN"),
}


class InvalidIdentifierError(ValueError):
    """Raised when an identifier does not match its declared type."""


def validate_identifier(identifier: str, identifier_type: str) -> None:
    """Validate ``identifier`` against the format for ``identifier_type``.

    Types without a known format (``uri``, ``isbn``, ``ssrn`` and
    ``dimensions_publication_id``) are accepted as-is.

    Raises:
        InvalidIdentifierError: If the identifier is malformed.
    """

    if identifier_type == "id":
        if not _ALTMETRIC_ID.fullmatch(identifier):
            raise InvalidIdentifierError(
                f"Invalid Altmetric ID format: {identifier}. Must be numeric."
            )
        return

    if identifier_type == "nct_id":
        if not _NCT.fullmatch(identifier):
            raise InvalidIdentifierError(
                f"Invalid NCT ID format: {identifier}. Expected format: NCT########"
            )
        return

    checker = _CHECKERS.get(identifier_type)
    if checker is None:
        return
    is_valid, label = checker
    if not is_valid(identifier):
        raise InvalidIdentifierError(f"Invalid {label} format: {identifier}")
