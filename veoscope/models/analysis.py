import base64
from datetime import datetime
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class EncodedMedia(BaseModel):
    model_config = ConfigDict(frozen=True)

    data: str  # base64 payload
    mime_type: str

    def decoded(self) -> bytes:
        return base64.b64decode(self.data)

    @property
    def size(self) -> int:
        return len(self.decoded())


class TableRow(BaseModel):
    timestamp: str
    action: str
    notes: str


class ParsedAnalysis(BaseModel):
    global_cohesion_block: str
    scene_breakdown: list[TableRow] = []
    technical_analysis: str


ErrorCode = Literal["format_error", "validation_error", "auth_error", "rate_limit", "remote_error"]


class AnalysisSuccess(BaseModel):
    status: Literal["succeeded"] = "succeeded"
    text: str
    model: str
    mime_type: str

    def as_text(self) -> str:
        return self.text


class AnalysisFailure(BaseModel):
    status: Literal["failed"] = "failed"
    error_code: ErrorCode
    message: str

    def as_text(self) -> str:
        return f"Error: {self.message}"


AnalysisResult = Annotated[Union[AnalysisSuccess, AnalysisFailure], Field(discriminator="status")]


# --- Session state ---

class IdleState(BaseModel):
    status: Literal["idle"] = "idle"


class InFlightState(BaseModel):
    status: Literal["in_flight"] = "in_flight"
    filename: str
    started_at: datetime


class SucceededState(BaseModel):
    status: Literal["succeeded"] = "succeeded"
    filename: str
    result: AnalysisSuccess
    parsed: ParsedAnalysis | None = None


class FailedState(BaseModel):
    status: Literal["failed"] = "failed"
    filename: str
    error: AnalysisFailure


AnalysisState = Annotated[
    Union[IdleState, InFlightState, SucceededState, FailedState],
    Field(discriminator="status"),
]


# --- API payloads ---

class AnalysisResponse(BaseModel):
    status: Literal["succeeded"] = "succeeded"
    text: str
    model: str
    mime_type: str
    parsed: ParsedAnalysis | None = None
    rendered: str


class ParseRequest(BaseModel):
    text: str


class ParseResponse(BaseModel):
    structured: bool
    parsed: ParsedAnalysis | None = None
    rendered: str
