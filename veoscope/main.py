import contextlib
import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.routing import Mount

from veoscope.config import get_settings
from veoscope.exceptions import AnalysisInProgressError, AuthenticationError
from veoscope.mcp_server import mcp
from veoscope.models.common import StatusResponse
from veoscope.routers.analysis import router as analysis_router
from veoscope.routers.pages import router as pages_router
from veoscope.session import get_session

logger = logging.getLogger(__name__)


# --- Localhost-only middleware ---

class LocalhostOnlyMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        client_host = request.client.host if request.client else None
        if client_host not in ("127.0.0.1", "::1", "localhost"):
            return JSONResponse(
                status_code=403,
                content={"error_code": "forbidden", "message": "Localhost access only"},
            )
        return await call_next(request)


# --- FastAPI app ---

api = FastAPI(title="Veoscope", version="0.1.0")
api.include_router(pages_router)
api.include_router(analysis_router)


@api.get("/api/status")
def api_status() -> StatusResponse:
    settings = get_settings()
    configured = bool(settings.gemini_api_key)
    return StatusResponse(
        gemini_configured=configured,
        model=settings.gemini_model,
        analysis_status=get_session().current.status,
        message="Ready" if configured else "Set GEMINI_API_KEY in .env",
    )


# --- Exception handlers ---

@api.exception_handler(AnalysisInProgressError)
async def in_progress_error_handler(request: Request, exc: AnalysisInProgressError):
    return JSONResponse(status_code=409, content={"error_code": "in_progress", "message": str(exc)})


# --- Starlette root app ---

mcp_app = mcp.http_app(path="/", stateless_http=True)


@contextlib.asynccontextmanager
async def lifespan(app: Starlette):
    # A missing Gemini key is fatal at startup
    get_settings().require_gemini_api_key()
    async with mcp_app.lifespan(app):
        yield


app = Starlette(
    middleware=[Middleware(LocalhostOnlyMiddleware)],
    routes=[
        Mount("/mcp", app=mcp_app),
        Mount("/", app=api),
    ],
    lifespan=lifespan,
)


def run():
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        settings.require_gemini_api_key()
    except AuthenticationError as e:
        logger.error("%s", e)
        raise SystemExit(1) from e
    uvicorn.run(
        "veoscope.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
