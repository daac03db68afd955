"""Tool handlers mapping agent arguments onto Altmetric API calls.

Each handler renames agent-facing arguments to API parameter names, issues a
single request, and pairs the raw JSON payload with a short plain-text
summary for the agent.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote

from altmetric_mcp.api_client import DetailsClient, ExplorerClient
from altmetric_mcp.settings import AltmetricSettings
from altmetric_mcp.validators import validate_identifier

__all__ = ["AltmetricTools", "ToolResult"]

_EXPLORER_ROOT = "/explorer/api/research_outputs"


@dataclass(frozen=True, slots=True)
class ToolResult:
    """Outcome of a tool call: agent-readable summary plus the raw payload."""

    summary: str
    data: dict[str, Any] = field(default_factory=dict)


def _present(**arguments: object) -> dict[str, object]:
    """Keep only arguments the caller actually supplied (truthy values)."""

    return {name: value for name, value in arguments.items() if value}


def _quote_identifier(identifier: str) -> str:
    # Same reserved set as JavaScript's encodeURIComponent.
    return quote(identifier, safe="!*'()")


def _response_meta(data: dict[str, Any]) -> dict[str, Any]:
    meta = data.get("meta") or {}
    response = meta.get("response") if isinstance(meta, dict) else None
    return response if isinstance(response, dict) else {}


def _page_summary(
    data: dict[str, Any], page_number: int | None
) -> tuple[int, int, int, int]:
    """Return (shown, total, current page, total pages) for a paginated payload."""

    shown = len(data.get("data") or [])
    meta = _response_meta(data)
    total = meta.get("total-results") or shown
    total_pages = meta.get("total-pages") or 1
    return shown, total, page_number or 1, total_pages


def _scope_text(
    q: str | None, scope: str | None, timeframe: str | None = None, *, label: str = "for query"
) -> str:
    text = f' {label} "{q}"' if q else ""
    if scope:
        text += f" (scope: {scope})"
    if timeframe:
        text += f" in timeframe: {timeframe}"
    return text


class AltmetricTools:
    """Handlers for every tool exposed to the agent.

    Args:
        details: Client for the Details Page API.
        explorer: Client for the Explorer API.
    """

    def __init__(self, details: DetailsClient, explorer: ExplorerClient) -> None:
        self.details = details
        self.explorer = explorer

    @classmethod
    def from_settings(cls, settings: AltmetricSettings) -> AltmetricTools:
        return cls(
            DetailsClient.from_settings(settings),
            ExplorerClient.from_settings(settings),
        )

    # -- Details Page API -------------------------------------------------

    async def get_citation_counts(
        self, identifier: str, identifier_type: str = "doi"
    ) -> ToolResult:
        validate_identifier(identifier, identifier_type)
        endpoint = f"/v1/{identifier_type}/{_quote_identifier(identifier)}"
        data = await self.details.request(endpoint)

        summary = (
            f"Citation data for {identifier_type.upper()}: {identifier}\n"
            f"Title: {data.get('title') or 'Unknown title'}\n"
            f"Altmetric Score: {data.get('score') or 0}\n"
            f"Total mentions: {data.get('cited_by_accounts_count') or 0} unique sources, "
            f"{data.get('cited_by_posts_count') or 0} posts"
        )
        return ToolResult(summary, data)

    async def get_citation_details(
        self,
        identifier: str,
        identifier_type: str = "doi",
        include_sources: str | None = None,
        exclude_sources: str | None = None,
        post_types: str | None = None,
        include_sections: str | None = None,
    ) -> ToolResult:
        validate_identifier(identifier, identifier_type)
        endpoint = f"/v1/fetch/{identifier_type}/{_quote_identifier(identifier)}"
        params = _present(
            include_sources=include_sources,
            exclude_sources=exclude_sources,
            post_types=post_types,
            include_sections=include_sections,
        )
        data = await self.details.request(endpoint, params)

        citation = data.get("citation") or {}
        score_block = data.get("altmetric_score") or {}
        counts_total = (data.get("counts") or {}).get("total") or {}
        filters = []
        if include_sources:
            filters.append(f"including: {include_sources}")
        if exclude_sources:
            filters.append(f"excluding: {exclude_sources}")
        filter_text = f" ({', '.join(filters)})" if filters else ""

        summary = (
            f"Detailed citation data for {identifier_type.upper()}: {identifier}\n"
            f"Title: {citation.get('title') or 'Unknown title'}\n"
            f"Altmetric Score: {score_block.get('score') or data.get('score') or 0}\n"
            f"Total posts: {counts_total.get('posts_count') or 0}{filter_text}\n"
            "Full mention details included in structured data"
        )
        return ToolResult(summary, data)

    async def search_citations(
        self,
        timeframe: str = "1w",
        citation_type: str | None = None,
        nlmid: str | None = None,
        issns: str | None = None,
        subject: str | None = None,
        num_results: int | None = None,
        page: int | None = None,
    ) -> ToolResult:
        params = _present(
            citation_type=citation_type,
            nlmid=nlmid,
            issns=issns,
            scopus_subjects=subject,
            num_results=num_results,
            page=page,
        )
        data = await self.details.request(f"/v1/citations/{timeframe}", params)

        shown = len(data.get("results") or [])
        query = data.get("query") or {}
        filters = []
        if citation_type:
            filters.append(f"type: {citation_type}")
        if subject:
            filters.append(f"subject: {subject}")
        if nlmid:
            filters.append(f"journal NLMID: {nlmid}")
        if issns:
            filters.append(f"ISSN: {issns}")
        filter_text = f" (filters: {', '.join(filters)})" if filters else ""

        summary = (
            f"Citation search results for timeframe: {timeframe}{filter_text}\n"
            f"Showing {shown} results on page {query.get('page') or page or 1}\n"
            f"Total matching outputs: {query.get('total') or shown}"
        )
        return ToolResult(summary, data)

    # -- Explorer API -----------------------------------------------------

    async def explore_research_outputs(
        self,
        q: str | None = None,
        scope: str | None = None,
        title: str | None = None,
        published_after: str | None = None,
        published_before: str | None = None,
        timeframe: str | None = None,
        orcid: str | None = None,
        type: list[str] | None = None,
        journal_id: list[str] | None = None,
        author_id: list[str] | None = None,
        department_id: list[str] | None = None,
        order: str | None = None,
        page_number: int | None = None,
        page_size: int | None = None,
    ) -> ToolResult:
        filters = _present(
            q=q,
            scope=scope,
            title=title,
            published_after=published_after,
            published_before=published_before,
            timeframe=timeframe,
            orcid=orcid,
            type=type,
            journal_id=journal_id,
            author_id=author_id,
            department_id=department_id,
            order=order,
            **{"page[number]": page_number, "page[size]": page_size},
        )
        data = await self.explorer.request(_EXPLORER_ROOT, filters)

        shown, total, current, pages = _page_summary(data, page_number)
        summary = (
            f"Research outputs{_scope_text(q, scope, label='matching')}\n"
            f"Showing {shown} results on page {current} of {pages}\n"
            f"Total matching outputs: {total}"
        )
        return ToolResult(summary, data)

    async def explore_attention_summary(
        self,
        q: str | None = None,
        scope: str | None = None,
        published_after: str | None = None,
        published_before: str | None = None,
        timeframe: str | None = None,
        type: list[str] | None = None,
        journal_id: list[str] | None = None,
        author_id: list[str] | None = None,
    ) -> ToolResult:
        filters = _present(
            q=q,
            scope=scope,
            published_after=published_after,
            published_before=published_before,
            timeframe=timeframe,
            type=type,
            journal_id=journal_id,
            author_id=author_id,
        )
        data = await self.explorer.request(f"{_EXPLORER_ROOT}/attention", filters)

        sources = len(data.get("data") or [])
        summary = (
            f"Attention summary{_scope_text(q, scope, timeframe)}\n"
            f"{sources} attention sources tracked\n"
            "Aggregated mention data by source and date included in structured data"
        )
        return ToolResult(summary, data)

    async def explore_mentions(
        self,
        q: str | None = None,
        scope: str | None = None,
        mentioned_after: str | None = None,
        mentioned_before: str | None = None,
        countries: list[str] | None = None,
        timeframe: str | None = None,
        type: list[str] | None = None,
        page_number: int | None = None,
        page_size: int | None = None,
    ) -> ToolResult:
        filters = _present(
            q=q,
            scope=scope,
            mentioned_after=mentioned_after,
            mentioned_before=mentioned_before,
            countries=countries,
            timeframe=timeframe,
            type=type,
            **{"page[number]": page_number, "page[size]": page_size},
        )
        data = await self.explorer.request(f"{_EXPLORER_ROOT}/mentions", filters)

        shown, total, current, pages = _page_summary(data, page_number)
        summary = (
            f"Individual mentions{_scope_text(q, None, label='matching')}\n"
            f"Showing {shown} mentions on page {current} of {pages}\n"
            f"Total mentions: {total}"
        )
        return ToolResult(summary, data)

    async def explore_demographics(
        self,
        q: str | None = None,
        scope: str | None = None,
        published_after: str | None = None,
        published_before: str | None = None,
        timeframe: str | None = None,
        type: list[str] | None = None,
        journal_id: list[str] | None = None,
        author_id: list[str] | None = None,
    ) -> ToolResult:
        filters = _present(
            q=q,
            scope=scope,
            published_after=published_after,
            published_before=published_before,
            timeframe=timeframe,
            type=type,
            journal_id=journal_id,
            author_id=author_id,
        )
        data = await self.explorer.request(f"{_EXPLORER_ROOT}/demographics", filters)

        regions = len(data.get("data") or [])
        summary = (
            f"Demographics data{_scope_text(q, scope, timeframe)}\n"
            f"{regions} countries/regions with mention activity\n"
            "Geographic distribution by mention count and unique sources included "
            "in structured data"
        )
        return ToolResult(summary, data)

    async def explore_mention_sources(
        self,
        q: str | None = None,
        scope: str | None = None,
        mentioned_after: str | None = None,
        mentioned_before: str | None = None,
        timeframe: str | None = None,
        source_type: list[str] | None = None,
        countries: list[str] | None = None,
        page_number: int | None = None,
        page_size: int | None = None,
    ) -> ToolResult:
        filters = _present(
            q=q,
            scope=scope,
            mentioned_after=mentioned_after,
            mentioned_before=mentioned_before,
            timeframe=timeframe,
            source_type=source_type,
            countries=countries,
            **{"page[number]": page_number, "page[size]": page_size},
        )
        data = await self.explorer.request(f"{_EXPLORER_ROOT}/mention_sources", filters)

        shown, total, current, pages = _page_summary(data, page_number)
        mentions = _response_meta(data).get("total-mentions") or 0
        summary = (
            f"Mention sources{_scope_text(q, None, label='matching')}\n"
            f"Showing {shown} sources on page {current} of {pages}\n"
            f"Total sources: {total}, Total mentions: {mentions}"
        )
        return ToolResult(summary, data)

    async def explore_journals(
        self,
        q: str | None = None,
        journal_id: list[str] | None = None,
        issn: list[str] | None = None,
        subject: list[str] | None = None,
        publisher: str | None = None,
        order: str | None = None,
        page_number: int | None = None,
        page_size: int | None = None,
    ) -> ToolResult:
        filters = _present(
            q=q,
            journal_id=journal_id,
            issn=issn,
            subject=subject,
            publisher=publisher,
            order=order,
            **{"page[number]": page_number, "page[size]": page_size},
        )
        data = await self.explorer.request(f"{_EXPLORER_ROOT}/journals", filters)

        shown, total, current, pages = _page_summary(data, page_number)
        summary = (
            f"Journals{_scope_text(q, None, label='matching')}\n"
            f"Showing {shown} journals on page {current} of {pages}\n"
            f"Total journals: {total}"
        )
        return ToolResult(summary, data)
