"""
File detection API endpoints.

POST /api/files/process      - split a response into chat text + file candidates
POST /api/files/marker       - wrap content in a hidden FILE marker
POST /api/files/explanation  - chat note for a created document

Processing is limited per caller (X-User-ID header, else client host) by the
app's CallLimiter. The CPU-bound handlers are plain functions so FastAPI runs
them in its worker thread pool instead of on the event loop.
"""

from __future__ import annotations

from fastapi import APIRouter, Header, Request
from pydantic import BaseModel, ConfigDict, Field

from cleo.api.models import ErrorResponse, FileCandidateModel
from cleo.config import MAX_SCAN_CHARS
from cleo.files import create_file_marker, generate_file_explanation, process_response_for_files
from cleo.infrastructure.call_limiter import CallLimiter
from cleo.observability.logging import get_logger

router = APIRouter(
    prefix="/api/files",
    tags=["files"],
    responses={422: {"model": ErrorResponse}},
)
logger = get_logger(__name__)


# ============================================================================
# Request/Response Models
# ============================================================================


class ProcessRequest(BaseModel):
    """Assistant response to post-process."""

    response: str = Field(max_length=MAX_SCAN_CHARS)
    user_message: str | None = Field(default=None, max_length=20_000)
    skip_heuristics: bool = False


class ProcessResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    clean_response: str = Field(alias="cleanResponse")
    files: list[FileCandidateModel]


class MarkerRequest(BaseModel):
    content: str = Field(max_length=MAX_SCAN_CHARS)
    filename: str | None = Field(default=None, max_length=255)
    description: str | None = Field(default=None, max_length=500)


class MarkerResponse(BaseModel):
    marker: str


class ExplanationResponse(BaseModel):
    explanation: str


# ============================================================================
# Endpoints
# ============================================================================


def _caller_tag(request: Request, user_id: str | None) -> str:
    if user_id:
        return f"user:{user_id}"
    host = request.client.host if request.client else "anon"
    return f"ip:{host}"


@router.post(
    "/process",
    response_model=ProcessResponse,
    responses={429: {"model": ErrorResponse}},
)
def process_files(
    body: ProcessRequest,
    request: Request,
    x_user_id: str | None = Header(default=None),
) -> ProcessResponse:
    """
    Extract hidden-marker files or detect a file heuristically.

    Raises:
        CallLimitExceeded: Caller went over its call budget (mapped to 429)
    """
    limiter: CallLimiter = request.app.state.call_limiter
    limiter.check(_caller_tag(request, x_user_id))

    result = process_response_for_files(
        body.response,
        body.user_message,
        skip_heuristics=body.skip_heuristics,
    )
    return ProcessResponse(
        clean_response=result.clean_response,
        files=[FileCandidateModel.from_candidate(f) for f in result.files],
    )


@router.post("/marker", response_model=MarkerResponse)
def create_marker(body: MarkerRequest) -> MarkerResponse:
    return MarkerResponse(marker=create_file_marker(body.content, body.filename, body.description))


@router.post("/explanation", response_model=ExplanationResponse)
async def explain_file(body: FileCandidateModel) -> ExplanationResponse:
    return ExplanationResponse(explanation=generate_file_explanation(body.to_candidate()))
