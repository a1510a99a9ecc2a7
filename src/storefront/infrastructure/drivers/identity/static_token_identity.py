from storefront.core.application.ports import DataStorePort, Filter, IdentityPort, Query, Table
from storefront.core.domain.identity import Principal, UserProfile


class StaticTokenIdentity(IdentityPort):
    """Development identity: the bearer token is a user id from the ``users`` table."""

    def __init__(self, data_store: DataStorePort) -> None:
        self._store = data_store

    async def resolve(self, token: str) -> Principal | None:
        rows = await self._store.select(Table.USERS, Query.where(Filter.eq("id", token), limit=1))
        if not rows:
            return None
        profile = UserProfile.from_row(rows[0])
        return Principal(user_id=profile.id, email=profile.email, role=profile.role, name=profile.name)
