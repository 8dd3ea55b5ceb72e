import logging
from typing import Any, List

from domain.entities.audit_report import DeepResearchRequest, DeepResearchResult
from domain.entities.web_search import PLACEHOLDER_LINK, SearchResultItem
from domain.prompts.audit_prompts import DEEP_RESEARCH_PROMPT
from domain.services.text_generation_service import TextGenerationService
from domain.services.web_search_service import GoogleCustomSearchClient
from domain.tools.web_search_tool import (WEB_SEARCH_TOOL_NAME,
                                          WEB_SEARCH_TOOL_SCHEMA,
                                          WebSearchToolDispatcher)

logger = logging.getLogger(__name__)

RESEARCH_NUM_RESULTS = 5


def coerce_results(output: Any) -> List[SearchResultItem]:
    """Turn the model's final JSON into result items.

    Anything other than an object with a ``results`` list yields an empty
    list. Malformed entries and entries without a usable link (empty or the
    soft-failure placeholder) are skipped.
    """
    if not isinstance(output, dict):
        return []
    raw_results = output.get("results")
    if not isinstance(raw_results, list):
        return []

    items = []
    for raw in raw_results:
        if not isinstance(raw, dict):
            continue
        title, link, snippet = raw.get("title"), raw.get("link"), raw.get("snippet")
        if not all(isinstance(value, str) for value in (title, link, snippet)):
            continue
        if not link.strip() or link == PLACEHOLDER_LINK:
            continue
        items.append(SearchResultItem(title=title, link=link, snippet=snippet))
    return items


class DeepResearchUseCase:
    """Find web resources related to a piece of report text.

    The LLM gets the web search tool, formulates its own query and reports
    the tool's results back. Never raises.
    """

    def __init__(self, text_generation_service: TextGenerationService, search_client: GoogleCustomSearchClient):
        self.text_generation_service = text_generation_service
        self.search_client = search_client

    async def execute(self, request: DeepResearchRequest) -> DeepResearchResult:
        prompt = DEEP_RESEARCH_PROMPT.render(
            input_text=request.input_text,
            output_language=request.output_language,
            tool_name=WEB_SEARCH_TOOL_NAME,
            num_results=str(RESEARCH_NUM_RESULTS),
        )
        dispatcher = WebSearchToolDispatcher(self.search_client)

        try:
            output = await self.text_generation_service.generate_with_tools(
                prompt, DEEP_RESEARCH_PROMPT.output_model, [WEB_SEARCH_TOOL_SCHEMA], dispatcher
            )
        except Exception as e:
            logger.error(f"Deep research flow failed: {str(e)}")
            return DeepResearchResult(results=[])

        results = coerce_results(output)
        logger.info(f"Deep research finished with {len(results)} results after {dispatcher.calls} tool calls")
        return DeepResearchResult(results=results)
