import httpx
import structlog

from storefront.core.application.ports import DataStorePort, Filter, IdentityPort, Query, Table
from storefront.core.domain.identity import Principal, Role, UserProfile
from storefront.core.exceptions import StorageUnavailableError
from storefront.infrastructure.configuration import SupabaseSettings

logger = structlog.get_logger()

_AUTH = "auth"


class GoTrueIdentity(IdentityPort):
    """Resolves Supabase access tokens via ``GET /auth/v1/user`` and reads the role from ``users``."""

    def __init__(
        self,
        settings: SupabaseSettings,
        data_store: DataStorePort,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        settings.validate_credentials()
        self._url = f"{settings.url.rstrip('/')}/auth/v1/user"  # type: ignore[union-attr]
        self._anon_key = settings.anon_key.get_secret_value()  # type: ignore[union-attr]
        self._client = client or httpx.AsyncClient(timeout=settings.timeout_seconds)
        self._store = data_store

    async def aclose(self) -> None:
        await self._client.aclose()

    async def resolve(self, token: str) -> Principal | None:
        try:
            response = await self._client.get(
                self._url, headers={"apikey": self._anon_key, "Authorization": f"Bearer {token}"}
            )
        except httpx.TransportError as exc:
            raise StorageUnavailableError(table=_AUTH, message=f"transport error: {exc}") from exc
        if response.status_code in (401, 403):
            return None
        if not response.is_success:
            raise StorageUnavailableError(
                table=_AUTH, message="identity provider rejected the lookup", status_code=response.status_code
            )
        user = response.json()
        user_id, email = str(user["id"]), user.get("email") or ""

        rows = await self._store.select(Table.USERS, Query.where(Filter.eq("id", user_id), limit=1))
        if not rows:
            logger.warning("Authenticated user has no profile row", user_id=user_id)
            return Principal(user_id=user_id, email=email, role=Role.CUSTOMER)
        profile = UserProfile.from_row(rows[0])
        return Principal(user_id=user_id, email=profile.email or email, role=profile.role, name=profile.name)
