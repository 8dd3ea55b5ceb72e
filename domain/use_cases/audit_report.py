"""Use cases for rewriting, expanding, summarizing and re-toning report text.

Rewrite and change-tone let LLM errors propagate to the caller. Expand and
summarize absorb them and return an empty string.
"""

import logging

from domain.entities.audit_report import (ChangeToneRequest, ChangeToneResult,
                                          ExpandRequest, ExpandResult,
                                          RewriteRequest, RewriteResult,
                                          SummarizeRequest, SummarizeResult,
                                          Tone)
from domain.prompts.audit_prompts import (CHANGE_TONE_PROMPT, EXPAND_PROMPT,
                                          REWRITE_PROMPT, SUMMARIZE_PROMPT,
                                          normalize_warning_prefix,
                                          render_expand_prompt)
from domain.services.text_generation_service import TextGenerationService

logger = logging.getLogger(__name__)


class RewriteAuditReportUseCase:
    """報告書テキストのリライト"""

    def __init__(self, text_generation_service: TextGenerationService):
        self.text_generation_service = text_generation_service

    async def execute(self, request: RewriteRequest) -> RewriteResult:
        prompt = REWRITE_PROMPT.render(text=request.text, output_language=request.output_language)
        output = await self.text_generation_service.generate_structured(
            prompt, REWRITE_PROMPT.output_model, request.config
        )
        return RewriteResult(rewritten_text=output.rewritten_text)


class ExpandAuditReportUseCase:
    """報告書テキストの拡張 (エネルギー監査と無関係な入力には警告を付ける)"""

    def __init__(self, text_generation_service: TextGenerationService):
        self.text_generation_service = text_generation_service

    async def execute(self, request: ExpandRequest) -> ExpandResult:
        prompt = render_expand_prompt(request.text, request.output_language)
        try:
            output = await self.text_generation_service.generate_structured(
                prompt, EXPAND_PROMPT.output_model, request.config
            )
        except Exception as e:
            logger.error(f"Expand flow failed: {str(e)}")
            return ExpandResult(expanded_text="")

        if output is None or not isinstance(getattr(output, "expanded_text", None), str):
            logger.warning("Expand flow returned no usable output")
            return ExpandResult(expanded_text="")
        return ExpandResult(expanded_text=normalize_warning_prefix(output.expanded_text))


class SummarizeAuditReportUseCase:
    """報告書セクションの要約"""

    def __init__(self, text_generation_service: TextGenerationService):
        self.text_generation_service = text_generation_service

    async def execute(self, request: SummarizeRequest) -> SummarizeResult:
        prompt = SUMMARIZE_PROMPT.render(
            report_section=request.report_section, output_language=request.output_language
        )
        try:
            output = await self.text_generation_service.generate_structured(
                prompt, SUMMARIZE_PROMPT.output_model, request.config
            )
        except Exception as e:
            logger.error(f"Summarize flow failed: {str(e)}")
            return SummarizeResult(summary="")

        if output is None or not isinstance(getattr(output, "summary", None), str):
            logger.warning("Summarize flow returned no usable output")
            return SummarizeResult(summary="")
        return SummarizeResult(summary=output.summary)


class ChangeAuditReportToneUseCase:
    """報告書テキストのトーン変更"""

    def __init__(self, text_generation_service: TextGenerationService):
        self.text_generation_service = text_generation_service

    async def execute(self, request: ChangeToneRequest) -> ChangeToneResult:
        tone = Tone(request.tone).value
        prompt = CHANGE_TONE_PROMPT.render(
            report_text=request.report_text, tone=tone, output_language=request.output_language
        )
        output = await self.text_generation_service.generate_structured(
            prompt, CHANGE_TONE_PROMPT.output_model, request.config
        )
        return ChangeToneResult(modified_report_text=output.modified_report_text)
