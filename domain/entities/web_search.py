from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

# Link used by synthetic error results; never present in a successful result list.
PLACEHOLDER_LINK = "#"


class LinkMode(str, Enum):
    """How result links are reported."""

    FULL = "full"
    HOMEPAGE = "homepage"


class SearchStatus(str, Enum):
    OK = "ok"
    SOFT_FAILURE = "soft_failure"


@dataclass(frozen=True)
class SearchQuery:
    query: str
    num_results: int = 5
    language_code: str = "en"


@dataclass(frozen=True)
class SearchResultItem:
    title: str
    link: str
    snippet: str

    def to_dict(self) -> Dict[str, str]:
        return {"title": self.title, "link": self.link, "snippet": self.snippet}


@dataclass(frozen=True)
class WebSearchOutcome:
    """Result of one web search.

    A soft failure still carries a well-formed result list: a single synthetic
    item describing the problem, with ``PLACEHOLDER_LINK`` as its link.
    """

    status: SearchStatus
    results: List[SearchResultItem] = field(default_factory=list)
    error: Optional[str] = None

    @classmethod
    def ok(cls, results: List[SearchResultItem]) -> "WebSearchOutcome":
        return cls(status=SearchStatus.OK, results=list(results))

    @classmethod
    def soft_failure(cls, error: str, title: str, snippet: str) -> "WebSearchOutcome":
        item = SearchResultItem(title=title, link=PLACEHOLDER_LINK, snippet=snippet)
        return cls(status=SearchStatus.SOFT_FAILURE, results=[item], error=error)

    @property
    def is_soft_failure(self) -> bool:
        return self.status == SearchStatus.SOFT_FAILURE

    def to_output(self) -> Dict[str, Any]:
        """The ``{"results": [...]}`` shape handed back to the LLM."""
        return {"results": [item.to_dict() for item in self.results]}
