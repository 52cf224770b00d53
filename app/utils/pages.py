"""Client-side page routing.

Maps a browser path onto one of the known top-level pages.
"""

from typing import Tuple

DEFAULT_PAGE = "Dashboard"

PAGES: Tuple[str, ...] = (
    "Dashboard",
    "Leads",
    "Resources",
    "Admin",
    "Commissions",
    "Support",
)

_PAGES_BY_KEY = {page.lower(): page for page in PAGES}


def resolve_page(path: str) -> str:
    """Return the page a path points at.

    The last path segment (query string dropped, trailing slash ignored) is
    matched case-insensitively; anything unmatched is the dashboard.
    """
    path = (path or "").split("?", 1)[0].split("#", 1)[0]
    path = path.rstrip("/")
    segment = path.rsplit("/", 1)[-1]
    return _PAGES_BY_KEY.get(segment.lower(), DEFAULT_PAGE)


def page_url(page: str) -> str:
    return "/" + page.replace(" ", "-")
