from fastapi import APIRouter, File, UploadFile
from fastapi.responses import JSONResponse

from veoscope.models.analysis import (
    AnalysisFailure,
    AnalysisResponse,
    AnalysisState,
    ParseRequest,
    ParseResponse,
)
from veoscope.models.common import ErrorResponse
from veoscope.services import gemini as gemini_service
from veoscope.services.parser import parse_analysis
from veoscope.services.render import render_markdown
from veoscope.session import get_session

router = APIRouter(prefix="/api/analysis", tags=["analysis"])

ERROR_STATUS_CODES = {
    "format_error": 400,
    "validation_error": 415,
    "auth_error": 401,
    "rate_limit": 429,
    "remote_error": 502,
}


def run_upload(file: UploadFile, model: str | None = None):
    """Analyze an uploaded video, recording progress and outcome in the session."""
    session = get_session()
    session.begin(file.filename or "upload")
    try:
        result = gemini_service.analyze_video(file.file, file.content_type, model=model)
    except Exception as e:
        # Never leave the session stuck in flight
        session.finish(AnalysisFailure(error_code="remote_error", message=str(e)))
        raise
    return session.finish(result)


def failure_response(failure: AnalysisFailure) -> JSONResponse:
    return JSONResponse(
        status_code=ERROR_STATUS_CODES[failure.error_code],
        content=ErrorResponse(error_code=failure.error_code, message=failure.message).model_dump(),
    )


@router.post("", response_model=AnalysisResponse)
def analyze(file: UploadFile = File(...), model: str | None = None):
    state = run_upload(file, model)
    if state.status == "failed":
        return failure_response(state.error)
    return AnalysisResponse(
        text=state.result.text,
        model=state.result.model,
        mime_type=state.result.mime_type,
        parsed=state.parsed,
        rendered=render_markdown(state.result.text, state.parsed),
    )


@router.get("")
def current_analysis() -> AnalysisState:
    return get_session().current


@router.delete("")
def reset_analysis() -> AnalysisState:
    return get_session().reset()


@router.post("/parse")
def parse(request: ParseRequest) -> ParseResponse:
    parsed = parse_analysis(request.text)
    return ParseResponse(
        structured=parsed is not None,
        parsed=parsed,
        rendered=render_markdown(request.text, parsed),
    )
