"""Sales resources library (scripts, templates, training)."""

from typing import Any, List, Mapping, Optional, Sequence, Union

from app.core.exceptions import BackendError
from app.database.store import Row, RowStore
from app.repositories.entity_repository import EntityRepository, Tables
from app.schemas.views import ResourcesView
from app.utils.logging import get_logger

LOGGER = get_logger(__name__)

ALL = "all"


def split_tags(tags: Union[str, Sequence[str], None]) -> List[str]:
    """Normalize tags given as a comma separated string or a list."""
    if tags is None:
        return []
    if isinstance(tags, str):
        tags = tags.split(",")
    return [tag.strip() for tag in tags if tag and tag.strip()]


def matches_search(resource: Mapping[str, Any], term: str) -> bool:
    """Case-insensitive match against title, description and tags."""
    if not term:
        return True
    needle = term.lower()
    haystacks = [
        resource.get("title") or "",
        resource.get("description") or "",
        " ".join(resource.get("tags") or []),
    ]
    return any(needle in haystack.lower() for haystack in haystacks)


def search_resources(
    resources: Sequence[Mapping[str, Any]],
    term: str = "",
    category: str = ALL,
) -> List[Mapping[str, Any]]:
    return [
        resource
        for resource in resources
        if (category == ALL or resource.get("category") == category) and matches_search(resource, term)
    ]


def distinct_categories(resources: Sequence[Mapping[str, Any]]) -> List[str]:
    """Categories present in ``resources`` in first-seen order."""
    seen: List[str] = []
    for resource in resources:
        category = resource.get("category")
        if category and category not in seen:
            seen.append(category)
    return seen


class ResourceService:
    def __init__(self, store: RowStore):
        self.resources = EntityRepository(store, Tables.RESOURCES)

    async def browse(self, search: str = "", category: str = ALL) -> ResourcesView:
        """Get active resources, newest first, narrowed by search and category.

        Categories are taken from all active resources so the filter options
        do not shrink as the user narrows the list.
        """
        try:
            resources = await self.resources.filter({"is_active": True}, "-created_date")
        except BackendError as e:
            LOGGER.error(f"Error loading resources: {e}", exc_info=True)
            return ResourcesView()

        return ResourcesView(
            resources=search_resources(resources, search, category),
            categories=distinct_categories(resources),
        )

    async def add(self, values: Mapping[str, Any]) -> Optional[Row]:
        """Add a resource; tags given as a comma separated string are split."""
        payload = dict(values)
        payload["tags"] = split_tags(payload.get("tags"))
        payload.setdefault("is_active", True)
        return await self.resources.create(payload)
