"""
JWT Authentication middleware.

Extracts the bearer token from the Authorization header, verifies it and
hands the resulting Identity to route handlers. Also provides the role and
verification gates that run between authentication and the handler.
"""

import logging
from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from shared.exceptions import AuthenticationError
from shared.models import Identity, UserRole
from modules.auth.exceptions import (
    InsufficientPermissionsError,
    MissingTokenError,
    ProviderNotVerifiedError,
)
from modules.auth.service import TokenCodec
from modules.services.interfaces import IProviderRepository

from ..dependencies import get_provider_repository, get_token_codec

logger = logging.getLogger(__name__)

# Bearer token extractor (returns None for a missing or non-Bearer header)
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    codec: TokenCodec = Depends(get_token_codec),
) -> Identity:
    """
    Dependency that requires authentication.

    Missing/malformed header, expired token and invalid token each fail
    with a distinct 401 message. Any other verification failure is a 500.

    Usage:
        @router.get("/protected")
        async def protected_route(identity: Identity = Depends(get_current_identity)):
            return {"user_id": identity.id}
    """
    if credentials is None:
        raise MissingTokenError()

    try:
        return codec.verify(credentials.credentials)
    except AuthenticationError:
        raise
    except Exception:
        logger.exception("Unexpected error while verifying token")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )


def require_role(role: UserRole):
    """
    Dependency factory: the caller must hold `role`.

    Args:
        role: Required account role

    Returns:
        Dependency function returning the caller's Identity
    """
    async def verify_role(
        identity: Identity = Depends(get_current_identity),
    ) -> Identity:
        if identity.role != role:
            raise InsufficientPermissionsError(role.value, identity.role.value)
        return identity

    return verify_role


require_service_provider = require_role(UserRole.SERVICE_PROVIDER)


async def require_verified(
    identity: Identity = Depends(require_service_provider),
    providers: IProviderRepository = Depends(get_provider_repository),
) -> Identity:
    """
    Dependency that requires a verified service provider.

    Tokens don't carry verification state, so it is read from the caller's
    provider profile; an admin verifying a provider takes effect without a
    new login.
    """
    profile = providers.get_by_user_id(identity.id)
    identity = identity.model_copy(
        update={"verified": bool(profile is not None and profile.verified)}
    )
    if not identity.verified:
        raise ProviderNotVerifiedError(identity.id)
    return identity


# Type aliases for cleaner route definitions
RequireAuth = Depends(get_current_identity)
RequireServiceProvider = Depends(require_service_provider)
RequireVerified = Depends(require_verified)
