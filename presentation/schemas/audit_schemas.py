from typing import List, Optional

from pydantic import BaseModel, Field

from domain.entities.audit_report import (ChangeToneRequest as ChangeToneEntity,
                                          DeepResearchRequest as DeepResearchEntity,
                                          ExpandRequest as ExpandEntity,
                                          RewriteRequest as RewriteEntity,
                                          SummarizeRequest as SummarizeEntity,
                                          Tone)
from domain.entities.generation_config import GenerationConfig
from domain.entities.web_search import SearchQuery


class GenerationConfigSchema(BaseModel):
    """LLMパラメータ (省略した項目はデフォルト値)"""

    temperature: Optional[float] = Field(None, description="温度パラメータ", ge=0.0, le=1.0)
    top_p: Optional[float] = Field(None, description="Top P", ge=0.0, le=1.0)
    top_k: Optional[int] = Field(None, description="Top K", ge=1, le=100)
    max_output_tokens: Optional[int] = Field(None, description="最大トークン数", ge=1, le=8192)

    def to_entity(self) -> GenerationConfig:
        return GenerationConfig(
            temperature=self.temperature,
            top_p=self.top_p,
            top_k=self.top_k,
            max_output_tokens=self.max_output_tokens,
        )


def _config_entity(config: Optional[GenerationConfigSchema]) -> Optional[GenerationConfig]:
    return config.to_entity() if config is not None else None


class RewriteRequest(BaseModel):
    text: str = Field(..., description="Report text to rewrite", min_length=1)
    output_language: str = Field("en", description='Output language code, e.g. "en" or "vn"', min_length=1)
    config: Optional[GenerationConfigSchema] = None

    def to_entity(self) -> RewriteEntity:
        return RewriteEntity(
            text=self.text, output_language=self.output_language, config=_config_entity(self.config)
        )


class RewriteResponse(BaseModel):
    rewritten_text: str


class ExpandRequest(BaseModel):
    text: str = Field(..., description="Report text to expand", min_length=1)
    output_language: str = Field("en", description='Output language code, e.g. "en" or "vn"', min_length=1)
    config: Optional[GenerationConfigSchema] = None

    def to_entity(self) -> ExpandEntity:
        return ExpandEntity(
            text=self.text, output_language=self.output_language, config=_config_entity(self.config)
        )


class ExpandResponse(BaseModel):
    expanded_text: str


class SummarizeRequest(BaseModel):
    report_section: str = Field(..., description="Report section to summarize", min_length=1)
    output_language: str = Field("en", description='Output language code, e.g. "en" or "vn"', min_length=1)
    config: Optional[GenerationConfigSchema] = None

    def to_entity(self) -> SummarizeEntity:
        return SummarizeEntity(
            report_section=self.report_section,
            output_language=self.output_language,
            config=_config_entity(self.config),
        )


class SummarizeResponse(BaseModel):
    summary: str


class ChangeToneRequest(BaseModel):
    report_text: str = Field(..., description="Report text to re-tone", min_length=1)
    tone: Tone = Field(..., description="Target tone")
    output_language: str = Field("en", description='Output language code, e.g. "en" or "vn"', min_length=1)
    config: Optional[GenerationConfigSchema] = None

    def to_entity(self) -> ChangeToneEntity:
        return ChangeToneEntity(
            report_text=self.report_text,
            tone=self.tone,
            output_language=self.output_language,
            config=_config_entity(self.config),
        )


class ChangeToneResponse(BaseModel):
    modified_report_text: str


class SearchResultItemSchema(BaseModel):
    title: str
    link: str
    snippet: str


class DeepResearchRequest(BaseModel):
    input_text: str = Field(..., description="Text to base the research on", min_length=1)
    output_language: str = Field("en", description="Language for the search and its results", min_length=1)

    def to_entity(self) -> DeepResearchEntity:
        return DeepResearchEntity(input_text=self.input_text, output_language=self.output_language)


class DeepResearchResponse(BaseModel):
    results: List[SearchResultItemSchema] = Field(default_factory=list)


class WebSearchRequest(BaseModel):
    query: str = Field(..., description="Search query", min_length=1)
    num_results: int = Field(5, description="Number of results", ge=1, le=10)
    language_code: str = Field("en", description="Language code for results", min_length=1)

    def to_entity(self) -> SearchQuery:
        return SearchQuery(query=self.query, num_results=self.num_results, language_code=self.language_code)


class WebSearchResponse(BaseModel):
    status: str
    results: List[SearchResultItemSchema] = Field(default_factory=list)
    error: Optional[str] = None
