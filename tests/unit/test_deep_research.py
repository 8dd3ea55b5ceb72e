from unittest.mock import AsyncMock, MagicMock

import pytest

from domain.entities.audit_report import DeepResearchRequest
from domain.entities.web_search import (PLACEHOLDER_LINK, SearchQuery,
                                        SearchResultItem, WebSearchOutcome)
from domain.prompts.audit_prompts import DeepResearchOutput
from domain.services.web_search_service import GoogleCustomSearchClient
from domain.tools.web_search_tool import (WEB_SEARCH_TOOL_NAME,
                                          WEB_SEARCH_TOOL_SCHEMA,
                                          WebSearchToolDispatcher,
                                          parse_search_arguments)
from domain.use_cases.deep_research import DeepResearchUseCase, coerce_results


@pytest.fixture
def search_client():
    client = MagicMock(spec=GoogleCustomSearchClient)
    client.search = AsyncMock(
        return_value=WebSearchOutcome.ok(
            [SearchResultItem(title="LED Lighting", link="https://www.energy.gov", snippet="LEDs use less energy.")]
        )
    )
    return client


class TestWebSearchToolDispatcher:
    @pytest.mark.asyncio
    async def test_dispatches_search(self, search_client):
        dispatcher = WebSearchToolDispatcher(search_client)

        output = await dispatcher(WEB_SEARCH_TOOL_NAME, {"query": "LED lighting", "num_results": 5, "language_code": "vn"})

        assert output == {
            "results": [{"title": "LED Lighting", "link": "https://www.energy.gov", "snippet": "LEDs use less energy."}]
        }
        search_client.search.assert_awaited_once_with(SearchQuery("LED lighting", 5, "vn"))
        assert dispatcher.calls == 1

    @pytest.mark.asyncio
    async def test_unknown_tool(self, search_client):
        output = await WebSearchToolDispatcher(search_client)("delete_everything", {})
        assert "error" in output
        assert output["results"] == []
        search_client.search.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalid_arguments(self, search_client):
        output = await WebSearchToolDispatcher(search_client)(WEB_SEARCH_TOOL_NAME, {"query": "   "})
        assert output["results"] == []
        assert "query" in output["error"]

    @pytest.mark.asyncio
    async def test_soft_failure_passes_through(self, search_client):
        search_client.search.return_value = WebSearchOutcome.soft_failure("missing_api_key", "Config error", "Set key")
        output = await WebSearchToolDispatcher(search_client)(WEB_SEARCH_TOOL_NAME, {"query": "LED"})
        assert output == {"results": [{"title": "Config error", "link": PLACEHOLDER_LINK, "snippet": "Set key"}]}

    def test_parse_defaults_and_clamping(self):
        assert parse_search_arguments({"query": " heat pumps "}) == SearchQuery("heat pumps", 5, "en")
        assert parse_search_arguments({"query": "x", "num_results": 50}).num_results == 10
        assert parse_search_arguments({"query": "x", "num_results": "3"}).num_results == 3

    @pytest.mark.parametrize("arguments", [None, [], {"query": 5}, {"query": "x", "num_results": "many"}])
    def test_parse_rejects_bad_arguments(self, arguments):
        with pytest.raises(ValueError):
            parse_search_arguments(arguments)

    def test_schema_declares_query_required(self):
        function = WEB_SEARCH_TOOL_SCHEMA["function"]
        assert function["name"] == WEB_SEARCH_TOOL_NAME
        assert function["parameters"]["required"] == ["query"]


class TestCoerceResults:
    @pytest.mark.parametrize("output", [None, "text", [], {}, {"results": None}, {"results": "nope"}])
    def test_non_list_results(self, output):
        assert coerce_results(output) == []

    def test_skips_malformed_entries(self):
        output = {
            "results": [
                {"title": "ok", "link": "https://a.example.com", "snippet": "s"},
                {"title": "missing link", "snippet": "s"},
                "junk",
            ]
        }
        assert coerce_results(output) == [SearchResultItem("ok", "https://a.example.com", "s")]

    def test_skips_placeholder_and_empty_links(self):
        output = {
            "results": [
                {"title": "Web search failed", "link": PLACEHOLDER_LINK, "snippet": "missing key"},
                {"title": "blank", "link": "  ", "snippet": "s"},
                {"title": "ok", "link": "https://b.example.com", "snippet": "s"},
            ]
        }
        assert coerce_results(output) == [SearchResultItem("ok", "https://b.example.com", "s")]


class TestDeepResearchUseCase:
    @pytest.mark.asyncio
    async def test_execute_success(self, search_client):
        service = AsyncMock()
        service.generate_with_tools.return_value = {
            "results": [{"title": "LED Lighting", "link": "https://www.energy.gov", "snippet": "LEDs use less energy."}]
        }

        result = await DeepResearchUseCase(service, search_client).execute(
            DeepResearchRequest(input_text="Energy savings from LED lighting in offices", output_language="en")
        )

        assert result.results == [
            SearchResultItem(title="LED Lighting", link="https://www.energy.gov", snippet="LEDs use less energy.")
        ]
        prompt, output_model, tools, dispatcher = service.generate_with_tools.call_args[0]
        assert "Energy savings from LED lighting in offices" in prompt
        assert 'language_code set to "en"' in prompt
        assert "num_results set to 5" in prompt
        assert output_model is DeepResearchOutput
        assert tools == [WEB_SEARCH_TOOL_SCHEMA]
        assert isinstance(dispatcher, WebSearchToolDispatcher)
        assert dispatcher.client is search_client

    @pytest.mark.asyncio
    async def test_results_not_a_list(self, search_client):
        service = AsyncMock()
        service.generate_with_tools.return_value = {"results": None}

        result = await DeepResearchUseCase(service, search_client).execute(
            DeepResearchRequest(input_text="x", output_language="en")
        )

        assert result.results == []

    @pytest.mark.asyncio
    async def test_missing_output(self, search_client):
        service = AsyncMock()
        service.generate_with_tools.return_value = None

        result = await DeepResearchUseCase(service, search_client).execute(
            DeepResearchRequest(input_text="x", output_language="vn")
        )

        assert result.results == []

    @pytest.mark.asyncio
    async def test_llm_failure_is_absorbed(self, search_client):
        service = AsyncMock()
        service.generate_with_tools.side_effect = RuntimeError("503 overloaded")

        result = await DeepResearchUseCase(service, search_client).execute(
            DeepResearchRequest(input_text="x", output_language="en")
        )

        assert result.results == []
