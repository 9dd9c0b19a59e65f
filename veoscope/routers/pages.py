from fastapi import APIRouter, File, UploadFile
from fastapi.responses import HTMLResponse, RedirectResponse

from veoscope.routers.analysis import run_upload
from veoscope.services.render import render_page
from veoscope.session import get_session

router = APIRouter(tags=["pages"])


@router.get("/", response_class=HTMLResponse)
def index() -> str:
    return render_page(get_session().current)


@router.post("/analyze")
def analyze_form(file: UploadFile = File(...)) -> RedirectResponse:
    run_upload(file)
    return RedirectResponse("/", status_code=303)
