from fastapi import APIRouter, Query

from app.schemas.views import PageResolution
from app.utils.pages import page_url, resolve_page

router = APIRouter()


@router.get(
    "/resolve",
    response_model=PageResolution,
    summary="Resolve page",
    description="Map a browser path to the page it shows; unknown paths show the dashboard",
    operation_id="resolve_page",
)
async def resolve(path: str = Query("/", description="Browser path, query string allowed")) -> PageResolution:
    page = resolve_page(path)
    return PageResolution(path=path, page=page, url=page_url(page))
