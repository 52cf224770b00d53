from typing import Annotated

from fastapi import APIRouter, Depends

from app.core.auth import get_current_user, require_admin
from app.core.dependencies import get_configuration_resolver
from app.schemas.auth import CurrentUser
from app.schemas.entities import AppConfiguration, AppConfigurationUpdate
from app.schemas.views import ShellView
from app.services.configuration_service import ConfigurationResolver, shell
from app.utils.logging import get_logger

LOGGER = get_logger(__name__)

router = APIRouter()


@router.get(
    "/shell",
    response_model=ShellView,
    summary="Get application shell",
    description="Branding, active navigation and external tools for the signed-in user",
    operation_id="get_app_shell",
)
async def get_shell(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    resolver: Annotated[ConfigurationResolver, Depends(get_configuration_resolver)],
) -> ShellView:
    config = await resolver.resolve()
    return ShellView(**shell(config))


@router.get(
    "",
    response_model=AppConfiguration,
    summary="Get app configuration",
    description="Get the effective configuration row, creating the default if none exists",
    operation_id="get_app_configuration",
)
async def get_configuration(
    admin: Annotated[CurrentUser, Depends(require_admin)],
    resolver: Annotated[ConfigurationResolver, Depends(get_configuration_resolver)],
) -> AppConfiguration:
    return AppConfiguration(**await resolver.resolve())


@router.put(
    "",
    response_model=AppConfiguration,
    summary="Save app configuration",
    description="Save branding, navigation and external tools",
    operation_id="save_app_configuration",
)
async def save_configuration(
    payload: AppConfigurationUpdate,
    admin: Annotated[CurrentUser, Depends(require_admin)],
    resolver: Annotated[ConfigurationResolver, Depends(get_configuration_resolver)],
) -> AppConfiguration:
    LOGGER.info(f"Configuration saved by {admin.email}")
    saved = await resolver.save(payload.model_dump(exclude_unset=True))
    if saved is None:
        saved = await resolver.resolve()
    return AppConfiguration(**saved)
