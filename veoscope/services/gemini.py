"""Gemini video analysis service: encodes an uploaded video and asks Gemini for the three-part breakdown."""

import io
import logging
import time
from pathlib import Path
from typing import BinaryIO

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from veoscope.config import get_settings
from veoscope.exceptions import (
    AuthenticationError,
    FormatError,
    RateLimitError,
    RemoteCallError,
    ValidationError,
)
from veoscope.models.analysis import AnalysisFailure, AnalysisResult, AnalysisSuccess, EncodedMedia
from veoscope.services.encoding import encode_media, guess_mime_type
from veoscope.services.prompts import ANALYSIS_PROMPT

logger = logging.getLogger(__name__)


def _get_client() -> genai.Client:
    api_key = get_settings().require_gemini_api_key()
    return genai.Client(api_key=api_key)


def _handle_api_error(e: genai_errors.APIError):
    if e.code == 429:
        raise RateLimitError("Gemini API quota exceeded. Try again shortly.") from e
    if e.code in (401, 403):
        raise AuthenticationError(
            "Gemini API key was rejected. Check GEMINI_API_KEY in .env."
        ) from e
    raise RemoteCallError(f"Gemini API error: {e}") from e


def _is_video(mime_type: str) -> bool:
    return mime_type.startswith("video/")


def _validate(media: EncodedMedia):
    if not _is_video(media.mime_type):
        raise ValidationError("Invalid file type. Please upload a video file.")


def _generate_config() -> types.GenerateContentConfig:
    return types.GenerateContentConfig(
        thinking_config=types.ThinkingConfig(thinking_budget=get_settings().thinking_budget),
    )


def _generate_with_upload(
    client: genai.Client, video_bytes: bytes, mime_type: str, prompt: str, model: str
) -> types.GenerateContentResponse:
    """Send a video that is too large for an inline request through the File API."""
    settings = get_settings()
    uploaded_file = client.files.upload(
        file=io.BytesIO(video_bytes),
        config=types.UploadFileConfig(mime_type=mime_type),
    )
    try:
        # Poll until the file is ACTIVE (processing can take a moment)
        for _ in range(settings.file_poll_attempts):
            status = client.files.get(name=uploaded_file.name)
            if status.state == "ACTIVE":
                break
            time.sleep(settings.file_poll_interval)
        else:
            raise RemoteCallError("Gemini file upload timed out waiting for ACTIVE state")

        return client.models.generate_content(
            model=model,
            contents=[uploaded_file, prompt],
            config=_generate_config(),
        )
    finally:
        try:
            client.files.delete(name=uploaded_file.name)
        except genai_errors.APIError as e:
            logger.warning("Could not delete uploaded file %s: %s", uploaded_file.name, e)


def analyze_media(media: EncodedMedia, prompt: str = ANALYSIS_PROMPT, model: str | None = None) -> str:
    """Run the analysis prompt against an encoded video and return Gemini's raw reply.

    Raises ValidationError for non-video payloads before any client is created,
    and RemoteCallError (or a subclass) when the Gemini call fails.
    """
    _validate(media)
    model = model or get_settings().gemini_model
    client = _get_client()
    video_bytes = media.decoded()

    try:
        if len(video_bytes) > get_settings().inline_limit_mb * 1024 * 1024:
            response = _generate_with_upload(client, video_bytes, media.mime_type, prompt, model)
        else:
            # Small videos can be sent inline as bytes
            response = client.models.generate_content(
                model=model,
                contents=[
                    types.Part.from_bytes(data=video_bytes, mime_type=media.mime_type),
                    prompt,
                ],
                config=_generate_config(),
            )
        if not response.text:
            raise RemoteCallError("Gemini returned an empty response")
        return response.text
    except genai_errors.APIError as e:
        _handle_api_error(e)


def _failure(e: Exception) -> AnalysisFailure:
    if isinstance(e, FormatError):
        return AnalysisFailure(error_code="format_error", message=str(e))
    if isinstance(e, ValidationError):
        return AnalysisFailure(error_code="validation_error", message=str(e))
    if isinstance(e, AuthenticationError):
        return AnalysisFailure(error_code="auth_error", message=str(e))
    if isinstance(e, RateLimitError):
        return AnalysisFailure(error_code="rate_limit", message=str(e))
    return AnalysisFailure(error_code="remote_error", message=str(e))


def analyze_video(
    source: bytes | BinaryIO,
    mime_type: str | None,
    prompt: str = ANALYSIS_PROMPT,
    model: str | None = None,
) -> AnalysisResult:
    """Analyze a video and return a success or a tagged failure. Never raises for analysis errors."""
    try:
        model = model or get_settings().gemini_model
        media = encode_media(source, mime_type)
        text = analyze_media(media, prompt, model)
    except (FormatError, ValidationError) as e:
        logger.warning("Rejected video upload: %s", e)
        return _failure(e)
    except RemoteCallError as e:
        logger.exception("Error analyzing video")
        return _failure(e)
    except Exception as e:
        logger.exception("Unexpected error analyzing video")
        return _failure(e)
    return AnalysisSuccess(text=text, model=model, mime_type=media.mime_type)


def analyze_video_file(
    path: str | Path, prompt: str = ANALYSIS_PROMPT, model: str | None = None
) -> AnalysisResult:
    """Analyze a video stored on the local filesystem."""
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        logger.warning("Could not read video %s: %s", path, e)
        return AnalysisFailure(error_code="format_error", message=f"Could not read {path}: {e}")
    return analyze_video(data, guess_mime_type(path), prompt, model)


def analyze_video_text(
    source: bytes | BinaryIO,
    mime_type: str | None,
    prompt: str = ANALYSIS_PROMPT,
    model: str | None = None,
) -> str:
    """String form of analyze_video: the reply text, or a message prefixed with ``Error: ``."""
    return analyze_video(source, mime_type, prompt, model).as_text()
