from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from domain.entities.generation_config import GenerationConfig
from domain.entities.web_search import SearchResultItem


class Tone(str, Enum):
    """Tones offered by the change-tone flow."""

    PROFESSIONAL = "professional"
    FORMAL = "formal"
    EMPATHETIC = "empathetic"
    FRIENDLY = "friendly"
    HUMOROUS = "humorous"


@dataclass(frozen=True)
class RewriteRequest:
    text: str
    output_language: str
    config: Optional[GenerationConfig] = None


@dataclass(frozen=True)
class RewriteResult:
    rewritten_text: str


@dataclass(frozen=True)
class ExpandRequest:
    text: str
    output_language: str
    config: Optional[GenerationConfig] = None


@dataclass(frozen=True)
class ExpandResult:
    expanded_text: str


@dataclass(frozen=True)
class SummarizeRequest:
    report_section: str
    output_language: str
    config: Optional[GenerationConfig] = None


@dataclass(frozen=True)
class SummarizeResult:
    summary: str


@dataclass(frozen=True)
class ChangeToneRequest:
    report_text: str
    tone: Tone
    output_language: str
    config: Optional[GenerationConfig] = None


@dataclass(frozen=True)
class ChangeToneResult:
    modified_report_text: str


@dataclass(frozen=True)
class DeepResearchRequest:
    input_text: str
    output_language: str


@dataclass(frozen=True)
class DeepResearchResult:
    results: List[SearchResultItem] = field(default_factory=list)
