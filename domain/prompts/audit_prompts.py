"""Prompt templates for the audit-report flows.

Each ``AuditPrompt`` pairs a template with the pydantic model the LLM reply is
validated against.
"""

from dataclasses import dataclass
from typing import List, Type

from pydantic import BaseModel, Field

from domain.services.messages import MESSAGES, translate

WARNING_MARKER = "***"


class RewriteOutput(BaseModel):
    rewritten_text: str = Field(..., description="The rewritten text of the energy audit report.")


class ExpandOutput(BaseModel):
    expanded_text: str = Field(..., description="The expanded text with added details and suggestions.")


class SummarizeOutput(BaseModel):
    summary: str = Field(..., description="A concise summary of the report section.")


class ChangeToneOutput(BaseModel):
    modified_report_text: str = Field(..., description="The energy audit report text with the modified tone.")


class ResearchResultOutput(BaseModel):
    title: str = Field(..., description="The title of the search result.")
    link: str = Field(..., description="The link of the search result, exactly as returned by the search tool.")
    snippet: str = Field(..., description="A relevant snippet from the search result content.")


class DeepResearchOutput(BaseModel):
    results: List[ResearchResultOutput] = Field(
        default_factory=list, description="The search results returned by the web search tool."
    )


@dataclass(frozen=True)
class AuditPrompt:
    name: str
    template: str
    output_model: Type[BaseModel]

    def render(self, **fields: str) -> str:
        return self.template.format(**fields)


def format_warning(language: str) -> str:
    """The off-topic warning exactly as it must prefix an expansion."""
    return f"{WARNING_MARKER}{translate('expand_off_topic_warning', language)}{WARNING_MARKER}\n\n"


def normalize_warning_prefix(text: str) -> str:
    """Rewrite a known off-topic warning at the start of text into the exact prefix.

    Models sometimes drop or add newlines after the warning. Text without a
    known warning is returned unchanged.
    """
    for language, warning in MESSAGES["expand_off_topic_warning"].items():
        marked = f"{WARNING_MARKER}{warning}{WARNING_MARKER}"
        if text.startswith(marked):
            return format_warning(language) + text[len(marked):].lstrip()
    return text


REWRITE_PROMPT = AuditPrompt(
    name="rewrite_audit_report",
    template="""You are an expert in writing energy audit reports. Please rewrite the following text to improve its clarity and professionalism, while maintaining the original meaning.
Generate the response in the following language: {output_language}

Text to rewrite:
{text}""",
    output_model=RewriteOutput,
)

EXPAND_PROMPT = AuditPrompt(
    name="expand_audit_report",
    template="""You are a senior energy consultant with extensive experience in practical energy-saving solutions.

Step 1: Decide whether the original text below is related to energy audits (energy consumption, energy efficiency, building systems, equipment, utilities or energy-saving measures).
Step 2: If it is NOT related, the expanded text MUST begin with the warning below, wrapped in triple asterisks and followed by two newline characters, before the expansion:
- For English ("en"): ***{warning_en}***
- For Vietnamese ("vn"): ***{warning_vn}***
- For any other language: translate the English warning into that language and apply the same markup.
If the text IS related, do not add any warning.
Step 3: In every case, expand the original text by adding relevant details, suggestions, and context based on your expertise.

Generate the response in the following language: {output_language}.

Original Text: {text}

Expanded Text:""",
    output_model=ExpandOutput,
)

SUMMARIZE_PROMPT = AuditPrompt(
    name="summarize_audit_report",
    template="""You are an expert energy auditor. Please provide a concise summary of the following section of an energy audit report.
Generate the response in the following language: {output_language}.

Report Section:
{report_section}""",
    output_model=SummarizeOutput,
)

CHANGE_TONE_PROMPT = AuditPrompt(
    name="change_audit_report_tone",
    template="""You are an expert writing assistant. You will be provided with an energy audit report, a desired tone, and a desired output language.
You will rewrite the energy audit report to match the tone and language requested.

Report Text:
{report_text}

Tone: {tone}
Output Language: {output_language}

Rewrite the above report text accordingly.""",
    output_model=ChangeToneOutput,
)

DEEP_RESEARCH_PROMPT = AuditPrompt(
    name="deep_research",
    template="""You are an expert AI research assistant. Your primary task is to find highly relevant online resources based on the user's provided text.

1. Analyze the input: identify the core subject, key topics, and important keywords of the input text.
2. Formulate an effective query: build a concise search query for the '{tool_name}' tool. Do not pass the entire input text. Target the most essential concepts. For example, for a text about "energy savings from LED lighting in commercial buildings", a good query is "LED lighting energy efficiency commercial buildings".
3. Use the tool: call '{tool_name}' once with your query, num_results set to {num_results} and language_code set to "{output_language}".
4. Format the output: put the results returned by the tool into the 'results' field, keeping their title, link and snippet. If the tool returns no results, return an empty array for 'results'.

Input Text to Analyze:
{input_text}

Desired Language for Search Results: {output_language}""",
    output_model=DeepResearchOutput,
)


def render_expand_prompt(text: str, output_language: str) -> str:
    return EXPAND_PROMPT.render(
        text=text,
        output_language=output_language,
        warning_en=translate("expand_off_topic_warning", "en"),
        warning_vn=translate("expand_off_topic_warning", "vn"),
    )
