from fastapi import APIRouter

from app.api.v1.endpoints import (
    admin,
    commissions,
    configuration,
    dashboard,
    leads,
    pages,
    resources,
    support,
    users,
)

# Create API router
api_router = APIRouter()

# Include routers
api_router.include_router(users.router, prefix="/users", tags=["User"])
api_router.include_router(configuration.router, prefix="/configuration", tags=["Configuration"])
api_router.include_router(pages.router, prefix="/pages", tags=["Pages"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["Dashboard"])
api_router.include_router(leads.router, prefix="/leads", tags=["Leads"])
api_router.include_router(resources.router, prefix="/resources", tags=["Resources"])
api_router.include_router(commissions.router, prefix="/commissions", tags=["Commissions"])
api_router.include_router(support.router, prefix="/support", tags=["Support"])
api_router.include_router(admin.router, prefix="/admin", tags=["Admin"])

__all__ = ["api_router"]
