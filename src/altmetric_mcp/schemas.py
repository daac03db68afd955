"""Pydantic models describing tool arguments.

The JSON schema of each model is published as the tool's ``inputSchema`` and
the same model validates incoming arguments before a handler runs.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

IdentifierType = Literal[
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
]
Timeframe = Literal["1d", "2d", "3d", "4d", "5d", "6d", "1w", "1m", "3m", "6m", "1y", "at"]
Scope = Literal["all", "institution"]

_SCOPE_DESCRIPTION = "Scope of search: all research or institutional only"
_QUERY_DESCRIPTION = "Search query for title, author, or journal"
_TIMEFRAME_DESCRIPTION = 'Timeframe for mentions (e.g., "1d", "1w", "1m", "3m", "6m", "1y")'
_PAGE_NUMBER_DESCRIPTION = "Page number (default: 1)"
_PAGE_SIZE_DESCRIPTION = "Results per page (max: 100, default: 25)"


class ToolArguments(BaseModel):
    """Base for tool argument models."""

    model_config = ConfigDict(extra="forbid", frozen=True)


class CitationCountsArgs(ToolArguments):
    identifier: str = Field(
        ...,
        min_length=1,
        title="Research Output Identifier",
        description=(
            'The identifier for the research output (e.g., DOI: "10.1038/nature12373", '
            'PubMed ID: "123456", arXiv ID: "1234.5678")'
        ),
    )
    identifier_type: IdentifierType = Field(
        default="doi",
        title="Identifier Type",
        description=(
            'The type of identifier being used. "id" refers to the Altmetric attention '
            "score ID."
        ),
    )


class CitationDetailsArgs(ToolArguments):
    identifier: str = Field(
        ...,
        min_length=1,
        title="Research Output Identifier",
        description=(
            'The identifier for the research output (e.g., DOI: "10.1038/nature12373", '
            'Altmetric ID: "123456")'
        ),
    )
    identifier_type: Literal["doi", "id"] = Field(
        default="doi",
        title="Identifier Type",
        description='The type of identifier being used. "id" refers to the Altmetric attention score ID.',
    )
    include_sources: str | None = Field(
        default=None,
        title="Include Sources",
        description='Comma-separated list of sources to include (e.g., "twitter,news,blogs").',
    )
    exclude_sources: str | None = Field(
        default=None,
        title="Exclude Sources",
        description='Comma-separated list of sources to exclude (e.g., "twitter,facebook").',
    )
    post_types: str | None = Field(
        default=None,
        title="Post Types",
        description='Filter by post types. Only "original_tweets" is supported.',
    )
    include_sections: str | None = Field(
        default=None,
        title="Include Sections",
        description=(
            "Comma-separated list of response sections to include. Available sections: "
            "counts, citation, altmetric_score, demographics, posts, images."
        ),
    )


class SearchCitationsArgs(ToolArguments):
    timeframe: Timeframe = Field(
        default="1w",
        title="Timeframe",
        description=(
            "Timeframe for citations. Options: 1d-6d (days), 1w (week), "
            "1m/3m/6m (months), 1y (year), at (all-time)"
        ),
    )
    citation_type: str | None = Field(
        default=None,
        title="Citation Source Type",
        description='Filter by citation source type (e.g., "twitter", "news", "policy")',
    )
    nlmid: str | None = Field(default=None, title="Journal NLM ID", description="Filter by journal NLM ID")
    issns: str | None = Field(
        default=None, title="Journal ISSNs", description="Filter by journal ISSN(s), comma-separated"
    )
    subject: str | None = Field(
        default=None, title="Subject Area", description="Filter by Scopus subject area"
    )
    num_results: int | None = Field(
        default=None,
        ge=1,
        title="Number of Results",
        description="Number of results to return (default: 100, max depends on API tier)",
    )
    page: int | None = Field(
        default=None, ge=1, title="Page Number", description="Page number for paginated results (default: 1)"
    )


class _ExplorerArgs(ToolArguments):
    q: str | None = Field(default=None, title="Search Query", description=_QUERY_DESCRIPTION)
    scope: Scope | None = Field(default=None, title="Search Scope", description=_SCOPE_DESCRIPTION)


class _PagedArgs(ToolArguments):
    page_number: int | None = Field(
        default=None, ge=1, title="Page Number", description=_PAGE_NUMBER_DESCRIPTION
    )
    page_size: int | None = Field(
        default=None, ge=1, le=100, title="Page Size", description=_PAGE_SIZE_DESCRIPTION
    )


class _PublishedArgs(_ExplorerArgs):
    published_after: str | None = Field(
        default=None, description="Filter by publication date (YYYY-MM-DD)"
    )
    published_before: str | None = Field(
        default=None, description="Filter by publication date (YYYY-MM-DD)"
    )
    timeframe: str | None = Field(default=None, title="Timeframe", description=_TIMEFRAME_DESCRIPTION)
    type: list[str] | None = Field(
        default=None, description='Filter by research output type (e.g., ["article", "dataset"])'
    )
    journal_id: list[str] | None = Field(default=None, description="Filter by journal IDs")
    author_id: list[str] | None = Field(
        default=None, description="Filter by author IDs from your Explorer instance"
    )


class _MentionedArgs(_ExplorerArgs):
    mentioned_after: str | None = Field(
        default=None, description="Filter by mention date (YYYY-MM-DD)"
    )
    mentioned_before: str | None = Field(
        default=None, description="Filter by mention date (YYYY-MM-DD)"
    )
    timeframe: str | None = Field(default=None, title="Timeframe", description=_TIMEFRAME_DESCRIPTION)
    countries: list[str] | None = Field(
        default=None, description='Filter by ISO 3166-2 country codes (e.g., ["US", "GB"])'
    )


class ResearchOutputsArgs(_PublishedArgs, _PagedArgs):
    title: str | None = Field(default=None, description="Search specifically in titles")
    orcid: str | None = Field(default=None, description="Filter by author ORCID identifier")
    department_id: list[str] | None = Field(
        default=None, description="Filter by department IDs from your Explorer instance"
    )
    order: str | None = Field(
        default=None, description='Sort order (e.g., "score_desc", "publication_date_desc")'
    )


class AttentionSummaryArgs(_PublishedArgs):
    pass


class DemographicsArgs(_PublishedArgs):
    pass


class MentionsArgs(_MentionedArgs, _PagedArgs):
    type: list[str] | None = Field(default=None, description="Filter by research output type")


class MentionSourcesArgs(_MentionedArgs, _PagedArgs):
    source_type: list[str] | None = Field(
        default=None, description='Filter by source type (e.g., ["news", "twitter", "policy"])'
    )


class JournalsArgs(_PagedArgs):
    q: str | None = Field(default=None, description="Search query for journal name or ISSN")
    journal_id: list[str] | None = Field(default=None, description="Filter by specific journal IDs")
    issn: list[str] | None = Field(default=None, description="Filter by ISSN(s)")
    subject: list[str] | None = Field(default=None, description="Filter by subject area")
    publisher: str | None = Field(default=None, description="Filter by publisher name")
    order: str | None = Field(
        default=None, description='Sort order (e.g., "name_asc", "output_count_desc")'
    )
