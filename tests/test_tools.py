"""Tests for tool handlers: argument renaming, requests and summaries."""

from __future__ import annotations

import pytest

from altmetric_mcp.api_client import DetailsClient, ExplorerClient
from altmetric_mcp.digest import compute_digest
from altmetric_mcp.tools import AltmetricTools
from altmetric_mcp.validators import InvalidIdentifierError


def _tools(details_recorder=None, explorer_recorder=None, secret="this-is-a-valid-secret-key"):
    details = DetailsClient(
        "details-key",
        transport=details_recorder.transport if details_recorder else None,
    )
    explorer = ExplorerClient(
        "explorer-key",
        secret,
        transport=explorer_recorder.transport if explorer_recorder else None,
    )
    return AltmetricTools(details, explorer)


async def test_get_citation_counts(recorder_factory) -> None:
    recorder = recorder_factory(
        {
            "title": "Quantum widgets",
            "score": 42.5,
            "cited_by_accounts_count": 7,
            "cited_by_posts_count": 11,
        }
    )
    tools = _tools(details_recorder=recorder)

    result = await tools.get_citation_counts("10.1038/nature12373")

    assert "10.1038%2Fnature12373" in str(recorder.last.url)
    assert recorder.last.url.params["key"] == "details-key"
    assert result.summary == (
        "Citation data for DOI: 10.1038/nature12373\n"
        "Title: Quantum widgets\n"
        "Altmetric Score: 42.5\n"
        "Total mentions: 7 unique sources, 11 posts"
    )
    assert result.data["score"] == 42.5


async def test_get_citation_counts_defaults_missing_fields(recorder_factory) -> None:
    recorder = recorder_factory({})
    tools = _tools(details_recorder=recorder)

    result = await tools.get_citation_counts("123", identifier_type="pmid")

    assert recorder.last.url.path == "/v1/pmid/123"
    assert "Title: Unknown title" in result.summary
    assert "Altmetric Score: 0" in result.summary
    assert "Total mentions: 0 unique sources, 0 posts" in result.summary


async def test_get_citation_counts_validates_before_request(recorder_factory) -> None:
    recorder = recorder_factory({})
    tools = _tools(details_recorder=recorder)

    with pytest.raises(InvalidIdentifierError, match="Invalid DOI format"):
        await tools.get_citation_counts("not-a-doi")
    assert recorder.requests == []


async def test_get_citation_details(recorder_factory) -> None:
    recorder = recorder_factory(
        {
            "citation": {"title": "Detailed"},
            "altmetric_score": {"score": 9},
            "counts": {"total": {"posts_count": 30}},
        }
    )
    tools = _tools(details_recorder=recorder)

    result = await tools.get_citation_details(
        "241939",
        identifier_type="id",
        include_sources="twitter,news",
        exclude_sources="facebook",
        include_sections="counts",
    )

    request = recorder.last
    assert request.url.path == "/v1/fetch/id/241939"
    assert request.url.params.multi_items() == [
        ("key", "details-key"),
        ("include_sources", "twitter,news"),
        ("exclude_sources", "facebook"),
        ("include_sections", "counts"),
    ]
    assert result.summary == (
        "Detailed citation data for ID: 241939\n"
        "Title: Detailed\n"
        "Altmetric Score: 9\n"
        "Total posts: 30 (including: twitter,news, excluding: facebook)\n"
        "Full mention details included in structured data"
    )


async def test_search_citations_renames_subject(recorder_factory) -> None:
    recorder = recorder_factory({"results": [{}, {}], "query": {"total": 120, "page": 2}})
    tools = _tools(details_recorder=recorder)

    result = await tools.search_citations(
        timeframe="1m", subject="oncology", citation_type="news", num_results=2, page=2
    )

    params = recorder.last.url.params
    assert recorder.last.url.path == "/v1/citations/1m"
    assert params["scopus_subjects"] == "oncology"
    assert "subject" not in params
    assert params["num_results"] == "2"
    assert result.summary == (
        "Citation search results for timeframe: 1m (filters: type: news, subject: oncology)\n"
        "Showing 2 results on page 2\n"
        "Total matching outputs: 120"
    )


async def test_explore_research_outputs(recorder_factory, secret) -> None:
    recorder = recorder_factory(
        {
            "data": [{}, {}, {}],
            "meta": {"response": {"total-results": 300, "total-pages": 100}},
        }
    )
    tools = _tools(explorer_recorder=recorder, secret=secret)

    result = await tools.explore_research_outputs(
        q="climate",
        scope="all",
        type=["article", "dataset"],
        order="score_desc",
        page_number=2,
        page_size=3,
    )

    params = recorder.last.url.params
    assert recorder.last.url.path == "/explorer/api/research_outputs"
    assert params["filter[q]"] == "climate"
    assert params["filter[scope]"] == "all"
    assert params.get_list("filter[type][]") == ["article", "dataset"]
    assert params["page[number]"] == "2"
    assert params["page[size]"] == "3"
    assert params["order"] == "score_desc"
    assert params["digest"] == compute_digest(
        {"q": "climate", "scope": "all", "type": ["article", "dataset"]}, secret
    )
    assert result.summary == (
        'Research outputs matching "climate" (scope: all)\n'
        "Showing 3 results on page 2 of 100\n"
        "Total matching outputs: 300"
    )


async def test_explore_research_outputs_without_filters(recorder_factory, secret) -> None:
    recorder = recorder_factory({"data": []})
    tools = _tools(explorer_recorder=recorder, secret=secret)

    result = await tools.explore_research_outputs()

    assert recorder.last.url.params.multi_items() == [
        ("key", "explorer-key"),
        ("digest", compute_digest({}, secret)),
    ]
    assert result.summary == (
        "Research outputs\nShowing 0 results on page 1 of 1\nTotal matching outputs: 0"
    )


async def test_explore_attention_summary(recorder_factory) -> None:
    recorder = recorder_factory({"data": [{}, {}]})
    tools = _tools(explorer_recorder=recorder)

    result = await tools.explore_attention_summary(q="bees", scope="institution", timeframe="1y")

    assert recorder.last.url.path == "/explorer/api/research_outputs/attention"
    assert result.summary.splitlines() == [
        'Attention summary for query "bees" (scope: institution) in timeframe: 1y',
        "2 attention sources tracked",
        "Aggregated mention data by source and date included in structured data",
    ]


async def test_explore_mentions(recorder_factory) -> None:
    recorder = recorder_factory(
        {"data": [{}], "meta": {"response": {"total-results": 5, "total-pages": 5}}}
    )
    tools = _tools(explorer_recorder=recorder)

    result = await tools.explore_mentions(q="bees", countries=["US", "GB"], page_number=4)

    params = recorder.last.url.params
    assert recorder.last.url.path == "/explorer/api/research_outputs/mentions"
    assert params.get_list("filter[countries][]") == ["US", "GB"]
    assert params["page[number]"] == "4"
    assert result.summary.splitlines() == [
        'Individual mentions matching "bees"',
        "Showing 1 mentions on page 4 of 5",
        "Total mentions: 5",
    ]


async def test_explore_demographics(recorder_factory) -> None:
    recorder = recorder_factory({"data": [{}, {}, {}]})
    tools = _tools(explorer_recorder=recorder)

    result = await tools.explore_demographics(journal_id=["j1"])

    assert recorder.last.url.path == "/explorer/api/research_outputs/demographics"
    assert recorder.last.url.params.get_list("filter[journal_id][]") == ["j1"]
    assert result.summary.splitlines()[:2] == [
        "Demographics data",
        "3 countries/regions with mention activity",
    ]


async def test_explore_mention_sources(recorder_factory) -> None:
    recorder = recorder_factory(
        {
            "data": [{}, {}],
            "meta": {
                "response": {"total-results": 40, "total-pages": 20, "total-mentions": 900}
            },
        }
    )
    tools = _tools(explorer_recorder=recorder)

    result = await tools.explore_mention_sources(source_type=["news", "policy"])

    assert recorder.last.url.path == "/explorer/api/research_outputs/mention_sources"
    assert recorder.last.url.params.get_list("filter[source_type][]") == ["news", "policy"]
    assert result.summary.splitlines() == [
        "Mention sources",
        "Showing 2 sources on page 1 of 20",
        "Total sources: 40, Total mentions: 900",
    ]


async def test_explore_journals(recorder_factory, secret) -> None:
    recorder = recorder_factory({"data": [{}]})
    tools = _tools(explorer_recorder=recorder, secret=secret)

    result = await tools.explore_journals(
        q="nature", issn=["0028-0836"], publisher="Springer", order="name_asc"
    )

    params = recorder.last.url.params
    assert recorder.last.url.path == "/explorer/api/research_outputs/journals"
    assert params.get_list("filter[issn][]") == ["0028-0836"]
    assert params["filter[publisher]"] == "Springer"
    assert params["order"] == "name_asc"
    assert params["digest"] == compute_digest(
        {"q": "nature", "issn": ["0028-0836"], "publisher": "Springer"}, secret
    )
    assert result.summary.splitlines()[0] == 'Journals matching "nature"'
