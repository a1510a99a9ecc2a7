from fastapi import Depends, Request, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from structlog.contextvars import bind_contextvars

from storefront.core.application.exceptions import AuthenticationError
from storefront.core.domain.identity import Principal
from storefront.infrastructure.resolution.container import StorefrontContainer

bearer_scheme = HTTPBearer(auto_error=False)


def get_container(request: Request) -> StorefrontContainer:
    return request.app.state.container


async def current_principal(
    credentials: HTTPAuthorizationCredentials | None = Security(bearer_scheme),
    container: StorefrontContainer = Depends(get_container),
) -> Principal | None:
    """Resolve the bearer token once per request; anonymous requests get ``None``."""
    if credentials is None:
        return None
    principal = await container.identity.resolve(credentials.credentials)
    if principal is None:
        raise AuthenticationError("Invalid or expired access token.")
    bind_contextvars(user_id=principal.user_id, user_role=principal.role.value)
    return principal
