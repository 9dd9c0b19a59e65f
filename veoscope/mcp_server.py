from fastmcp import FastMCP

from veoscope.config import get_settings
from veoscope.models.analysis import AnalysisFailure
from veoscope.services import gemini as gemini_service
from veoscope.services.parser import parse_analysis
from veoscope.services.render import render_markdown

mcp = FastMCP("Veoscope")

_ERROR_ACTIONS = {
    "auth_error": "Ask user to set GEMINI_API_KEY in .env and restart the server",
    "rate_limit": "Wait a moment and retry",
    "validation_error": "Pass the path of a video file (mp4, mov, webm, ...)",
}


def _failure_dict(failure: AnalysisFailure) -> dict:
    """Convert a failed analysis to an agent-friendly error dict."""
    error = {"error": failure.error_code, "message": failure.message}
    if failure.error_code in _ERROR_ACTIONS:
        error["action"] = _ERROR_ACTIONS[failure.error_code]
    return error


@mcp.tool
def video_analyze(path: str, model: str | None = None) -> dict:
    """Analyze a local video file with Gemini. Returns the raw analysis text plus, when the
    reply follows the expected layout, its three sections: global cohesion block, scene
    breakdown rows (timestamp, action, notes) and technical style analysis.
    Longer videos can take several minutes."""
    result = gemini_service.analyze_video_file(path, model=model)
    if isinstance(result, AnalysisFailure):
        return _failure_dict(result)
    parsed = parse_analysis(result.text)
    return {
        "analysis": result.text,
        "model": result.model,
        "structured": parsed is not None,
        "parsed": parsed.model_dump() if parsed else None,
        "rendered": render_markdown(result.text, parsed),
    }


@mcp.tool
def video_parse_analysis(text: str) -> dict:
    """Split an existing analysis text into its sections without calling Gemini.
    Returns structured=false and the text unchanged when no section headers are found."""
    parsed = parse_analysis(text)
    return {
        "structured": parsed is not None,
        "parsed": parsed.model_dump() if parsed else None,
        "rendered": render_markdown(text, parsed),
    }


@mcp.tool
def video_analysis_status() -> dict:
    """Check whether the Gemini API key is configured and which model is used."""
    settings = get_settings()
    configured = bool(settings.gemini_api_key)
    return {
        "gemini_configured": configured,
        "model": settings.gemini_model,
        "message": "Ready" if configured else "No API key: user should set GEMINI_API_KEY in .env",
    }
