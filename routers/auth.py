from fastapi import APIRouter, HTTPException, Depends, Request
from pydantic import BaseModel, EmailStr

from core.access_policy import Capabilities, capabilities_for
from core.config import settings
from core.errors import BackendUnavailableError, IdentityError, identity_http_error
from core.identity_provider import sign_in, sign_out
from core.logging_config import logger
from core.rate_limiter import require_rate_limit
from dependencies.auth import get_bearer_token, get_current_identity
from models.identity import Identity, IdentityRead


router = APIRouter(
    prefix="/auth",
    tags=["Auth"],
)


# ============================================================
# MODELS
# ============================================================
class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: IdentityRead
    capabilities: Capabilities


# ============================================================
# LOGIN (SUPABASE AUTH + PROFILE)
# ============================================================
@router.post("/login", response_model=LoginResponse, summary="Authenticate user")
def login(payload: LoginRequest, request: Request):
    require_rate_limit(
        request,
        scope="login",
        max_requests=settings.LOGIN_RATE_LIMIT,
        window_seconds=settings.LOGIN_RATE_WINDOW_SECONDS,
    )

    email = payload.email.strip().lower()

    try:
        token, identity = sign_in(email, payload.password)
    except IdentityError as e:
        raise identity_http_error(e)

    return LoginResponse(
        access_token=token,
        user=IdentityRead.from_identity(identity),
        capabilities=capabilities_for(identity),
    )


# ============================================================
# LOGOUT
# ============================================================
@router.post("/logout", summary="Revoke the current session")
def logout(token: str = Depends(get_bearer_token)):
    try:
        sign_out(token)
    except BackendUnavailableError as e:
        raise identity_http_error(e)
    except IdentityError:
        raise HTTPException(502, "Sign-out could not be completed")

    logger.info("Session revoked")
    return {"success": True}


# ============================================================
# CURRENT USER
# ============================================================
@router.get("/me", response_model=IdentityRead, summary="Current authenticated user")
def read_me(identity: Identity = Depends(get_current_identity)):
    return IdentityRead.from_identity(identity)
