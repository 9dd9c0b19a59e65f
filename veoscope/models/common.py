from pydantic import BaseModel


class ErrorResponse(BaseModel):
    error_code: str
    message: str


class StatusResponse(BaseModel):
    gemini_configured: bool
    model: str
    analysis_status: str
    message: str
