"""Web-form endpoint: text in, ranked sources out."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from config.messages import MessageCatalog
from orchestrator.core import SourcePipeline
from server.dependencies import get_catalog, get_pipeline
from server.schemas.requests import SearchRequest
from server.schemas.responses import SearchResponseDTO
from server.utils import outcome_status_code
from tools.telegram.formatting import outcome_error_message
from utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["Search"])


@router.post("/search", response_model=SearchResponseDTO)
async def search_sources(
    request: SearchRequest,
    http_request: Request,
    pipeline: SourcePipeline = Depends(get_pipeline),
    catalog: MessageCatalog = Depends(get_catalog),
):
    """Find the most relevant sources for the submitted text."""
    request_id = getattr(http_request.state, "request_id", "unknown")

    outcome = await pipeline.run(
        request.text,
        extra_queries=request.extra_queries,
        source_type=request.source_type,
    )

    error_message = None if outcome.is_success else outcome_error_message(outcome, catalog)
    status_code = outcome_status_code(outcome)

    logger.info(
        "Web search request finished",
        extra={
            "extra_fields": {
                "request_id": request_id,
                "outcome": outcome.kind.value,
                "status_code": status_code,
            }
        },
    )

    body = SearchResponseDTO.from_outcome(outcome, error_message)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))
