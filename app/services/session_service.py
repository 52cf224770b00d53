"""Session/identity resolution.

The current user is the auth session's identity with the matching ``users``
profile row merged over it.
"""

from typing import Any, Dict, List, Mapping, Optional

from pydantic import ValidationError as PydanticValidationError

from app.core.auth_client import SupabaseAuthClient
from app.core.exceptions import BackendError
from app.database.store import Row, RowStore
from app.repositories.user_repository import UserRepository
from app.schemas.auth import AuthSession, CurrentUser
from app.utils.logging import get_logger

LOGGER = get_logger(__name__)


def merge_identity(session: AuthSession, profile: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Combine an auth session and a profile row into one user record.

    Later sources win: ``{id, email}`` from the session, then the session's
    user metadata, then the profile row.
    """
    merged: Dict[str, Any] = {"id": session.user.id, "email": session.user.email}
    merged.update(session.user.user_metadata or {})
    if profile:
        merged.update(profile)
    return merged


class SessionResolver:
    """Resolves "who is the current user" for a request."""

    def __init__(self, store: RowStore, auth_client: SupabaseAuthClient):
        """Initialize the resolver.

        Args:
            store: Row store holding the ``users`` profiles
            auth_client: Client for the authentication service
        """
        self.repository = UserRepository(store)
        self.auth_client = auth_client

    async def current_user(self, access_token: Optional[str]) -> Optional[CurrentUser]:
        """Get the signed-in user.

        Args:
            access_token: Bearer token from the request, if any

        Returns:
            The merged user record, or None when there is no active session

        Raises:
            BackendError: If the auth service itself fails
        """
        session = await self.auth_client.get_session(access_token)
        if session is None:
            return None

        profile: Optional[Row] = None
        try:
            profile = await self.repository.get_by_email(session.user.email)
        except BackendError as e:
            LOGGER.warning(f"Profile lookup failed for {session.user.email}, using auth identity only: {e}")

        # Profile and metadata are best-effort; the auth identity always resolves
        for candidate in (merge_identity(session, profile), merge_identity(session, None)):
            try:
                return CurrentUser(**candidate)
            except PydanticValidationError as e:
                LOGGER.warning(f"User record for {session.user.email} failed validation, dropping profile data: {e}")
        return CurrentUser(id=session.user.id, email=session.user.email)

    async def list_all(self) -> List[Row]:
        return await self.repository.list()

    async def update(self, id: Any, values: Mapping[str, Any]) -> Optional[Row]:
        """Update a profile row; None if it no longer exists."""
        return await self.repository.update(id, values)
