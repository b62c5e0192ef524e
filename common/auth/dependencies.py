"""
FastAPI dependency factory for bearer-token auth.

Example:
    require_auth = create_auth_dependency(get_jwt_auth)
    CurrentUserId = Annotated[str, Depends(require_auth)]

    @router.get("/checkin/streak")
    async def get_streak(user_id: CurrentUserId): ...
"""

from typing import Callable, Optional
from fastapi import Header

from common.auth.base import AuthProvider
from common.utils.exceptions import UnauthorizedException


def create_auth_dependency(
    get_auth_provider: Callable[[], AuthProvider],
    header_name: str = "Authorization",
    scheme: str = "Bearer",
):
    """
    Build a dependency resolving the request's user id.

    The provider is looked up per request so it can be initialized after
    the routers are imported.
    """
    prefix = f"{scheme} "

    async def get_current_user_id(
        authorization: Optional[str] = Header(None, alias=header_name),
    ) -> str:
        if not authorization:
            raise UnauthorizedException("Missing authorization header")
        if not authorization.startswith(prefix):
            raise UnauthorizedException(f"Expected {scheme} token", code="INVALID_AUTH_SCHEME")

        token = authorization[len(prefix):].strip()
        if not token:
            raise UnauthorizedException("Token is empty", code="EMPTY_TOKEN")

        try:
            claims = await get_auth_provider().verify_token(token)
        except ValueError as e:
            raise UnauthorizedException(str(e), code="INVALID_TOKEN")

        user_id = claims.get("sub")
        if not user_id:
            raise UnauthorizedException("Token has no subject", code="INVALID_TOKEN")
        return user_id

    return get_current_user_id
