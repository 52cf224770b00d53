"""Application branding and navigation configuration.

Exactly one ``app_configurations`` row is meant to exist. The resolver reads
it (lowest id wins if several exist) and inserts the default configuration
the first time it finds the collection empty.
"""

import asyncio
import copy
import weakref
from typing import Any, Dict, List, Mapping, Optional

from app.database.store import Row, RowStore
from app.repositories.entity_repository import EntityRepository, Tables
from app.utils.logging import get_logger
from app.utils.pages import page_url

LOGGER = get_logger(__name__)

DEFAULT_APP_NAME = "ByteBlitz Staff Hub"
DEFAULT_TAGLINE = "Digital Agency CRM"
DEFAULT_PRIMARY_COLOR = "#8B5CF6"
DEFAULT_SECONDARY_COLOR = "#EC4899"
DEFAULT_COMPANY_PHONE = "07359 735508"

DEFAULT_NAVIGATION_ITEMS: List[Dict[str, Any]] = [
    {"title": "Dashboard", "page": "Dashboard", "icon": "LayoutDashboard", "is_active": True, "order": 1},
    {"title": "Leads", "page": "Leads", "icon": "Users", "is_active": True, "order": 2},
    {"title": "Resources", "page": "Resources", "icon": "BookOpen", "is_active": True, "order": 3},
    {"title": "Commissions", "page": "Commissions", "icon": "TrendingUp", "is_active": True, "order": 4},
    {"title": "Support", "page": "Support", "icon": "MessageCircle", "is_active": True, "order": 5},
]

DEFAULT_EXTERNAL_TOOLS: List[Dict[str, Any]] = [
    {
        "title": "AI Assistant",
        "url": "https://ai.byteblitz.co.uk",
        "description": "Internal GPT assistant",
        "icon": "Brain",
        "is_active": True,
    },
    {
        "title": "Automation Hub",
        "url": "https://n8n.byteblitz.co.uk",
        "description": "Workflow automation",
        "icon": "Zap",
        "is_active": True,
    },
    {
        "title": "Email Campaigns",
        "url": "https://mautic.byteblitz.co.uk",
        "description": "Campaign management",
        "icon": "Mail",
        "is_active": True,
    },
    {
        "title": "CRM System",
        "url": "https://crm.byteblitz.co.uk",
        "description": "Client tracking",
        "icon": "Database",
        "is_active": True,
    },
    {
        "title": "Booking System",
        "url": "https://cal.byteblitz.co.uk",
        "description": "Schedule meetings",
        "icon": "Calendar",
        "is_active": True,
    },
]


def default_configuration() -> Dict[str, Any]:
    """Values inserted when no configuration row exists yet."""
    return {
        "app_name": DEFAULT_APP_NAME,
        "app_tagline": DEFAULT_TAGLINE,
        "primary_color": DEFAULT_PRIMARY_COLOR,
        "secondary_color": DEFAULT_SECONDARY_COLOR,
        "company_phone": DEFAULT_COMPANY_PHONE,
        "navigation_items": copy.deepcopy(DEFAULT_NAVIGATION_ITEMS),
        "external_tools": copy.deepcopy(DEFAULT_EXTERNAL_TOOLS),
    }


def navigation_items(config: Optional[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    """Active navigation items in display order.

    Only a missing list falls back to the defaults; a stored empty list means
    no navigation. Items without ``is_active`` count as active; items without
    ``order`` sort as 0. Ties keep their stored order.
    """
    items = (config or {}).get("navigation_items")
    if items is None:
        items = DEFAULT_NAVIGATION_ITEMS
    active = [dict(item) for item in items if item.get("is_active") is not False]
    return sorted(active, key=lambda item: item.get("order") or 0)


def external_tools(config: Optional[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    """Active external tools in stored order."""
    tools = (config or {}).get("external_tools")
    if tools is None:
        tools = DEFAULT_EXTERNAL_TOOLS
    return [dict(tool) for tool in tools if tool.get("is_active") is not False]


def shell(config: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Branding and navigation the application shell renders."""
    config = config or {}
    return {
        "app_name": config.get("app_name") or DEFAULT_APP_NAME,
        "app_tagline": config.get("app_tagline") or DEFAULT_TAGLINE,
        "logo_url": config.get("logo_url"),
        "favicon_url": config.get("favicon_url"),
        "primary_color": config.get("primary_color") or DEFAULT_PRIMARY_COLOR,
        "secondary_color": config.get("secondary_color") or DEFAULT_SECONDARY_COLOR,
        "company_phone": config.get("company_phone") or DEFAULT_COMPANY_PHONE,
        "company_email": config.get("company_email"),
        "custom_css": config.get("custom_css"),
        "navigation_items": [
            {
                "title": item.get("title"),
                "page": item.get("page"),
                "url": page_url(item.get("page") or ""),
                "icon": item.get("icon"),
            }
            for item in navigation_items(config)
        ],
        "external_tools": external_tools(config),
    }


class ConfigurationResolver:
    """Reads the effective configuration, creating the default on first use."""

    def __init__(self, store: RowStore, lock: Optional[asyncio.Lock] = None):
        """Initialize the resolver.

        Args:
            store: Row store holding ``app_configurations``
            lock: Lock serializing first-time creation; defaults to the one kept
                for ``store``
        """
        self.repository = EntityRepository(store, Tables.APP_CONFIGURATIONS)
        self._lock = lock or resolve_lock(store)

    async def resolve(self) -> Row:
        """Get the effective configuration row.

        Returns:
            The existing row with the lowest id, or the freshly inserted default

        Raises:
            BackendError: If the store fails
        """
        async with self._lock:
            configs = await self.repository.list("id")
            if configs:
                return configs[0]

            LOGGER.info("No app configuration found, creating default")
            created = await self.repository.create(default_configuration())
            if created is not None:
                return created

            configs = await self.repository.list("id")
            if configs:
                return configs[0]
            return default_configuration()

    async def save(self, values: Mapping[str, Any]) -> Optional[Row]:
        """Write changes to the effective configuration row."""
        current = await self.resolve()
        if current.get("id") is None:
            return await self.repository.create({**current, **values})
        return await self.repository.update(current["id"], values)


# One lock per store; a store lives on a single event loop
_RESOLVE_LOCKS: "weakref.WeakKeyDictionary[RowStore, asyncio.Lock]" = weakref.WeakKeyDictionary()


def resolve_lock(store: RowStore) -> asyncio.Lock:
    lock = _RESOLVE_LOCKS.get(store)
    if lock is None:
        lock = _RESOLVE_LOCKS[store] = asyncio.Lock()
    return lock
