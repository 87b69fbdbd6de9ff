from typing import Optional, Union
from fastapi import Depends, HTTPException
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from core import access_policy
from core.access_policy import RoleSpec
from core.errors import AuthenticationError, IdentityError, identity_http_error
from core.identity_provider import resolve_identity, resolve_optional_identity
from core.logging_config import logger
from core.roles import FINANCE_ACCESS, MASTER_ONLY, OPERATIONS_ACCESS
from models.enums import Feature
from models.identity import Identity


# Missing or non-Bearer credentials come back as None; the 401 is ours.
bearer_scheme = HTTPBearer(auto_error=False)


# ============================================================
# BEARER TOKEN (401 when absent)
# ============================================================
def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> str:
    if not credentials or not credentials.credentials:
        raise identity_http_error(AuthenticationError("Missing access token"))
    return credentials.credentials


# ============================================================
# CURRENT IDENTITY (Supabase token → profile → role)
# ============================================================
def get_current_identity(token: str = Depends(get_bearer_token)) -> Identity:
    try:
        return resolve_identity(token)
    except IdentityError as e:
        raise identity_http_error(e)


# ============================================================
# OPTIONAL IDENTITY (None = unresolved)
# ============================================================
def get_optional_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[Identity]:
    """
    Returns the Identity if a valid token was provided, None otherwise.
    Never raises.
    """
    if not credentials:
        return None
    return resolve_optional_identity(credentials.credentials)


def _deny(identity: Identity, detail: str):
    logger.info(f"Access denied for {identity.profile.email} ({identity.role}): {detail}")
    raise HTTPException(status_code=403, detail=detail)


# ============================================================
# ROLE CHECKER (basic role list guard)
# ============================================================
def requires_role(allowed_roles: RoleSpec):
    if isinstance(allowed_roles, str):
        label = [str(allowed_roles)]
    else:
        label = sorted(str(r) for r in allowed_roles)

    def checker(identity: Identity = Depends(get_current_identity)) -> Identity:
        if not access_policy.has_role(identity, allowed_roles):
            _deny(identity, f"Requires one of: {label}")
        return identity
    return checker


# ============================================================
# FEATURE CHECKER (visibility gate)
# ============================================================
def requires_feature(feature: Union[Feature, str]):
    """
    Usage:
        @router.get("/", dependencies=[Depends(requires_feature(Feature.vessels))])
    """

    def checker(identity: Identity = Depends(get_current_identity)) -> Identity:
        if not access_policy.can_access_feature(identity, feature):
            _deny(identity, f"No access to feature '{feature}'")
        return identity
    return checker


# ============================================================
# WRITE CHECKER (feature gate + read-only gate)
# ============================================================
def requires_write_access(feature: Union[Feature, str]):
    """
    Both gates, checked separately: the feature must be visible,
    and the identity must not be read-only.
    """
    view_checker = requires_feature(feature)

    def checker(identity: Identity = Depends(view_checker)) -> Identity:
        if access_policy.is_read_only(identity):
            _deny(identity, "Read-only access: changes are not allowed")
        return identity
    return checker


# ============================================================
# PRESET GUARDS
# ============================================================
master_only = requires_role(MASTER_ONLY)
finance_access = requires_role(FINANCE_ACCESS)
operations_access = requires_role(OPERATIONS_ACCESS)
