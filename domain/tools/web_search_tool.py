"""Web search exposed to the LLM as a callable tool.

``WEB_SEARCH_TOOL_SCHEMA`` is the OpenAI function-calling declaration;
``WebSearchToolDispatcher`` executes the calls the model asks for.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from domain.entities.web_search import SearchQuery
from domain.services.web_search_service import (MAX_RESULTS_PER_REQUEST,
                                                GoogleCustomSearchClient)

logger = logging.getLogger(__name__)

WEB_SEARCH_TOOL_NAME = "perform_web_search"

WEB_SEARCH_TOOL_SCHEMA: Dict[str, Any] = {
    "type": "function",
    "function": {
        "name": WEB_SEARCH_TOOL_NAME,
        "description": (
            "Performs a web search using the Google Custom Search JSON API and returns a list of "
            "relevant documents with titles, links, and snippets. "
            "Use this tool to find information on the internet for a given query."
        ),
        "parameters": {
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": "The search query string.",
                },
                "num_results": {
                    "type": "integer",
                    "description": "Number of search results to return, default 5.",
                    "default": 5,
                },
                "language_code": {
                    "type": "string",
                    "description": 'Language code for search results (e.g. "en", "vn"), default "en".',
                    "default": "en",
                },
            },
            "required": ["query"],
        },
    },
}


def parse_search_arguments(arguments: Any) -> SearchQuery:
    """Validate tool-call arguments. Raises ValueError when unusable."""
    if not isinstance(arguments, dict):
        raise ValueError("arguments must be an object")
    query = arguments.get("query")
    if not isinstance(query, str) or not query.strip():
        raise ValueError("query must be a non-empty string")

    try:
        num_results = int(arguments.get("num_results") or 5)
    except (TypeError, ValueError):
        raise ValueError("num_results must be an integer")
    num_results = max(1, min(num_results, MAX_RESULTS_PER_REQUEST))

    language_code = arguments.get("language_code") or "en"
    if not isinstance(language_code, str):
        raise ValueError("language_code must be a string")

    return SearchQuery(query=query.strip(), num_results=num_results, language_code=language_code)


class WebSearchToolDispatcher:
    """Runs tool calls requested by the LLM. Never raises."""

    def __init__(self, client: GoogleCustomSearchClient):
        self.client = client
        self.calls = 0

    async def __call__(self, name: str, arguments: Any) -> Dict[str, Any]:
        if name != WEB_SEARCH_TOOL_NAME:
            logger.warning(f"LLM requested unknown tool {name!r}")
            return {"error": f"Unknown tool: {name}", "results": []}

        try:
            query = parse_search_arguments(arguments)
        except ValueError as e:
            logger.warning(f"Invalid {WEB_SEARCH_TOOL_NAME} arguments {arguments!r}: {str(e)}")
            return {"error": f"Invalid arguments: {str(e)}", "results": []}

        self.calls += 1
        outcome = await self.client.search(query)
        return outcome.to_output()
