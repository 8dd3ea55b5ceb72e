import logging
from typing import Tuple

from fastapi import APIRouter, Depends, HTTPException

from domain.services.messages import translate
from domain.services.text_generation_service import (TextGenerationService,
                                                     get_text_generation_service)
from domain.services.web_search_service import (GoogleCustomSearchClient,
                                                get_web_search_client)
from domain.use_cases.audit_report import (ChangeAuditReportToneUseCase,
                                           ExpandAuditReportUseCase,
                                           RewriteAuditReportUseCase,
                                           SummarizeAuditReportUseCase)
from domain.use_cases.deep_research import DeepResearchUseCase
from presentation.schemas.audit_schemas import (ChangeToneRequest,
                                                ChangeToneResponse,
                                                DeepResearchRequest,
                                                DeepResearchResponse,
                                                ExpandRequest, ExpandResponse,
                                                RewriteRequest,
                                                RewriteResponse,
                                                SearchResultItemSchema,
                                                SummarizeRequest,
                                                SummarizeResponse,
                                                WebSearchRequest,
                                                WebSearchResponse)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/audit", tags=["Audit Report"])


def error_detail(error: Exception, language: str) -> Tuple[int, str]:
    """Map a propagated flow error to an HTTP status and a localized message."""
    if isinstance(error, ValueError):
        return 400, str(error)

    message = str(error) or "Unknown error"
    status_code = getattr(error, "status_code", None)
    if status_code == 503 or "503" in message or "overloaded" in message.lower():
        return 503, translate("ai_service_overloaded", language)
    return 500, f"{translate('error_occurred', language)}: {message}"


async def get_rewrite_use_case(
    text_generation_service: TextGenerationService = Depends(get_text_generation_service),
) -> RewriteAuditReportUseCase:
    return RewriteAuditReportUseCase(text_generation_service)


async def get_expand_use_case(
    text_generation_service: TextGenerationService = Depends(get_text_generation_service),
) -> ExpandAuditReportUseCase:
    return ExpandAuditReportUseCase(text_generation_service)


async def get_summarize_use_case(
    text_generation_service: TextGenerationService = Depends(get_text_generation_service),
) -> SummarizeAuditReportUseCase:
    return SummarizeAuditReportUseCase(text_generation_service)


async def get_change_tone_use_case(
    text_generation_service: TextGenerationService = Depends(get_text_generation_service),
) -> ChangeAuditReportToneUseCase:
    return ChangeAuditReportToneUseCase(text_generation_service)


async def get_deep_research_use_case(
    text_generation_service: TextGenerationService = Depends(get_text_generation_service),
    search_client: GoogleCustomSearchClient = Depends(get_web_search_client),
) -> DeepResearchUseCase:
    return DeepResearchUseCase(text_generation_service, search_client)


@router.post("/rewrite", response_model=RewriteResponse, summary="Rewrite report text")
async def rewrite(request: RewriteRequest, use_case: RewriteAuditReportUseCase = Depends(get_rewrite_use_case)):
    """Improve clarity and professionalism while keeping the meaning."""
    try:
        result = await use_case.execute(request.to_entity())
    except Exception as e:
        logger.error(f"Rewrite failed: {str(e)}")
        status_code, detail = error_detail(e, request.output_language)
        raise HTTPException(status_code=status_code, detail=detail)
    return RewriteResponse(rewritten_text=result.rewritten_text)


@router.post("/expand", response_model=ExpandResponse, summary="Expand report text")
async def expand(request: ExpandRequest, use_case: ExpandAuditReportUseCase = Depends(get_expand_use_case)):
    """Expand a section with details and suggestions. Returns an empty text on failure."""
    result = await use_case.execute(request.to_entity())
    return ExpandResponse(expanded_text=result.expanded_text)


@router.post("/summarize", response_model=SummarizeResponse, summary="Summarize a report section")
async def summarize(
    request: SummarizeRequest, use_case: SummarizeAuditReportUseCase = Depends(get_summarize_use_case)
):
    """Concise summary of a section. Returns an empty summary on failure."""
    result = await use_case.execute(request.to_entity())
    return SummarizeResponse(summary=result.summary)


@router.post("/change-tone", response_model=ChangeToneResponse, summary="Change the tone of report text")
async def change_tone(
    request: ChangeToneRequest, use_case: ChangeAuditReportToneUseCase = Depends(get_change_tone_use_case)
):
    try:
        result = await use_case.execute(request.to_entity())
    except Exception as e:
        logger.error(f"Change tone failed: {str(e)}")
        status_code, detail = error_detail(e, request.output_language)
        raise HTTPException(status_code=status_code, detail=detail)
    return ChangeToneResponse(modified_report_text=result.modified_report_text)


@router.post("/deep-research", response_model=DeepResearchResponse, summary="Search for related documents")
async def deep_research(
    request: DeepResearchRequest, use_case: DeepResearchUseCase = Depends(get_deep_research_use_case)
):
    """Let the LLM formulate a query and search the web. Returns an empty list on failure."""
    result = await use_case.execute(request.to_entity())
    return DeepResearchResponse(results=[SearchResultItemSchema(**item.to_dict()) for item in result.results])


@router.post("/search", response_model=WebSearchResponse, summary="Web search")
async def search(
    request: WebSearchRequest, search_client: GoogleCustomSearchClient = Depends(get_web_search_client)
):
    """Run the web search tool directly."""
    outcome = await search_client.search(request.to_entity())
    return WebSearchResponse(
        status=outcome.status.value,
        results=[SearchResultItemSchema(**item.to_dict()) for item in outcome.results],
        error=outcome.error,
    )


# エクスポート用
audit_router = router
