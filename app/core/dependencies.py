"""Centralized dependency injection for the FastAPI application.

Factory functions that build services over the shared row store and auth
client. Tests swap any of them out through ``app.dependency_overrides``.
"""

from typing import Annotated

from fastapi import Depends

from app.core.auth_client import SupabaseAuthClient, get_auth_client
from app.database.session import get_store
from app.database.store import RowStore
from app.services.admin_service import AdminService
from app.services.announcement_service import AnnouncementService
from app.services.commission_service import CommissionService
from app.services.configuration_service import ConfigurationResolver
from app.services.dashboard_service import DashboardService
from app.services.lead_service import LeadService
from app.services.resource_service import ResourceService
from app.services.session_service import SessionResolver
from app.services.support_service import SupportService


async def get_session_resolver(
    store: Annotated[RowStore, Depends(get_store)],
    auth_client: Annotated[SupabaseAuthClient, Depends(get_auth_client)],
) -> SessionResolver:
    """Get the session resolver.

    Args:
        store: Row store from dependency injection
        auth_client: Auth service client from dependency injection

    Returns:
        SessionResolver: Resolver for the signed-in user
    """
    return SessionResolver(store, auth_client)


async def get_configuration_resolver(
    store: Annotated[RowStore, Depends(get_store)]
) -> ConfigurationResolver:
    return ConfigurationResolver(store)


async def get_dashboard_service(
    store: Annotated[RowStore, Depends(get_store)]
) -> DashboardService:
    return DashboardService(store)


async def get_lead_service(
    store: Annotated[RowStore, Depends(get_store)]
) -> LeadService:
    return LeadService(store)


async def get_resource_service(
    store: Annotated[RowStore, Depends(get_store)]
) -> ResourceService:
    return ResourceService(store)


async def get_commission_service(
    store: Annotated[RowStore, Depends(get_store)]
) -> CommissionService:
    return CommissionService(store)


async def get_support_service(
    store: Annotated[RowStore, Depends(get_store)]
) -> SupportService:
    return SupportService(store)


async def get_announcement_service(
    store: Annotated[RowStore, Depends(get_store)]
) -> AnnouncementService:
    return AnnouncementService(store)


async def get_admin_service(
    store: Annotated[RowStore, Depends(get_store)],
    auth_client: Annotated[SupabaseAuthClient, Depends(get_auth_client)],
) -> AdminService:
    """Get the admin service.

    Args:
        store: Row store from dependency injection
        auth_client: Auth service client, used for invitations

    Returns:
        AdminService: Service behind the admin panel
    """
    return AdminService(store, auth_client)
