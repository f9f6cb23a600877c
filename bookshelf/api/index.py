from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from jinja2 import TemplateError

from bookshelf.core.config import get_settings
from bookshelf.core.errors import RenderError
from bookshelf.schemas.page import IndexPage
from bookshelf.services.book_store import BookStore, get_store

router = APIRouter(tags=["index"])

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


@router.get("/", response_class=HTMLResponse, summary="인덱스 페이지 (이름 + DB 상태)")
def index(
    request: Request,
    name: Optional[str] = Query(None, description="표시할 이름, 비어 있으면 기본값"),
    store: BookStore = Depends(get_store),
):
    page = IndexPage(name=get_settings().default_display_name)
    if name:
        page.name = name
    page.db_status = store.is_reachable()

    try:
        return templates.TemplateResponse(request, "index.html", {"page": page})
    except TemplateError as e:
        raise RenderError(str(e)) from e
