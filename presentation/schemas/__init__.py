from .audit_schemas import (
    GenerationConfigSchema,
    RewriteRequest, RewriteResponse,
    ExpandRequest, ExpandResponse,
    SummarizeRequest, SummarizeResponse,
    ChangeToneRequest, ChangeToneResponse,
    DeepResearchRequest, DeepResearchResponse,
    WebSearchRequest, WebSearchResponse,
    SearchResultItemSchema,
)

__all__ = [
    "GenerationConfigSchema",
    "RewriteRequest", "RewriteResponse",
    "ExpandRequest", "ExpandResponse",
    "SummarizeRequest", "SummarizeResponse",
    "ChangeToneRequest", "ChangeToneResponse",
    "DeepResearchRequest", "DeepResearchResponse",
    "WebSearchRequest", "WebSearchResponse",
    "SearchResultItemSchema",
]
