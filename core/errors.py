# core/errors.py

from fastapi import HTTPException, status

from core.logging_config import logger


# ============================================================
# Identity resolution errors
# ============================================================

class IdentityError(Exception):
    """The current request has no usable identity."""


class AuthenticationError(IdentityError):
    """Token missing, invalid or expired."""


class ProfileUnavailableError(IdentityError):
    """
    Session is valid but its profile row can't be resolved
    (missing, unknown role, or backend kept failing).
    The session has been signed out.
    """


class BackendUnavailableError(IdentityError):
    """Supabase isn't configured, so nobody can be resolved."""


def identity_http_error(error: IdentityError) -> HTTPException:
    if isinstance(error, BackendUnavailableError):
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Authentication backend unavailable",
        )

    detail = "Invalid or expired authentication token"
    if isinstance(error, ProfileUnavailableError):
        detail = "User profile unavailable; please sign in again"

    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


# ============================================================
# Supabase errors
# ============================================================

def extract_supabase_error(error: Exception) -> str:
    """
    Safely extract readable details from Supabase Python client errors.
    Handles:
      • PostgREST errors
      • GoTrue (Auth) errors
      • Generic Python exceptions
    """

    # Case 1: PostgREST / GoTrue errors carry .message
    message = getattr(error, "message", None)
    if message:
        return str(message)

    # Case 2: errors with args
    if error.args:
        return str(error.args[0])

    return str(error) or "Unknown Supabase error"


def handle_supabase_error(error: Exception, operation: str = "Database operation", status_code: int = 500) -> HTTPException:
    """
    Handle Supabase errors with consistent formatting.
    Returns HTTPException (doesn't raise) so caller can customize or re-raise.
    """
    error_detail = extract_supabase_error(error)
    logger.error(f"{operation}: {error_detail}")

    error_lower = error_detail.lower()
    if "duplicate" in error_lower or "unique" in error_lower:
        return HTTPException(status_code=400, detail=f"{operation}: Record already exists")
    elif "foreign key" in error_lower:
        return HTTPException(status_code=400, detail=f"{operation}: Invalid reference")
    elif "not found" in error_lower or "does not exist" in error_lower:
        return HTTPException(status_code=404, detail=f"{operation}: Resource not found")
    else:
        return HTTPException(status_code=status_code, detail=f"{operation} failed")
