# core/identity_provider.py

"""
Resolve Supabase sessions into Identities.

A session token is checked with Supabase Auth, then the matching row in
the profiles table supplies the role. Nothing is cached: every call goes
back to Supabase so a sign-out or role change shows up on the next request.
"""

import time
from typing import Optional, Tuple

from pydantic import ValidationError
from supabase import Client

from core.config import settings
from core.errors import (
    AuthenticationError,
    BackendUnavailableError,
    IdentityError,
    ProfileUnavailableError,
)
from core.logging_config import logger
from core.supabase_client import get_supabase_client
from models.identity import Identity, Profile


def _require_client() -> Client:
    client = get_supabase_client()
    if not client:
        raise BackendUnavailableError("Supabase client not configured")
    return client


# ============================================================
# Profile lookup (with retry on transient errors)
# ============================================================
def fetch_profile_row(client: Client, auth_user_id: str) -> Optional[dict]:
    """
    Returns the profile row, or None when no row exists.
    Backend errors are retried; when retries run out the last error is raised.
    """
    attempts = max(1, settings.PROFILE_FETCH_RETRIES)
    last_error: Optional[Exception] = None

    for attempt in range(1, attempts + 1):
        try:
            result = (
                client.table(settings.PROFILES_TABLE)
                .select("*")
                .eq("auth_user_id", auth_user_id)
                .is_("deleted_at", "null")
                .limit(1)
                .execute()
            )
            rows = result.data or []
            return rows[0] if rows else None
        except Exception as e:
            last_error = e
            logger.warning(
                f"Profile fetch failed for {auth_user_id} "
                f"(attempt {attempt}/{attempts}): {type(e).__name__}: {e}"
            )
            if attempt < attempts:
                time.sleep(settings.PROFILE_FETCH_BACKOFF_SECONDS * attempt)

    raise last_error


def _build_profile(row: dict) -> Profile:
    try:
        return Profile.model_validate(row)
    except ValidationError as e:
        raise ProfileUnavailableError(f"Invalid profile row: {e.error_count()} error(s)") from e


# ============================================================
# Forced sign-out
# ============================================================
def force_sign_out(client: Client, token: str, reason: str):
    """
    Revoke a session whose profile can't be resolved.
    Revocation failures are logged; the caller rejects the request anyway.
    """
    logger.warning(f"Forcing sign-out: {reason}")
    try:
        client.auth.admin.sign_out(token)
    except Exception as e:
        logger.error(f"Failed to revoke session during forced sign-out: {e}")


# ============================================================
# Resolve token → Identity
# ============================================================
def resolve_identity(token: str) -> Identity:
    if not token:
        raise AuthenticationError("Missing access token")

    client = _require_client()

    try:
        auth_resp = client.auth.get_user(token)
    except Exception as e:
        logger.info(f"Token rejected by Supabase Auth: {type(e).__name__}")
        raise AuthenticationError("Invalid or expired token") from e

    if not auth_resp or not auth_resp.user:
        raise AuthenticationError("Invalid or expired token")

    auth_user_id = auth_resp.user.id

    try:
        row = fetch_profile_row(client, auth_user_id)
    except Exception as e:
        force_sign_out(client, token, f"profile lookup kept failing for {auth_user_id}")
        raise ProfileUnavailableError("Profile lookup failed") from e

    if row is None:
        force_sign_out(client, token, f"no profile for {auth_user_id}")
        raise ProfileUnavailableError("Profile not found")

    try:
        profile = _build_profile(row)
    except ProfileUnavailableError:
        force_sign_out(client, token, f"unusable profile for {auth_user_id}")
        raise

    return Identity(access_token=token, profile=profile)


def resolve_optional_identity(token: Optional[str]) -> Optional[Identity]:
    """
    Same as resolve_identity, but every failure means "unresolved" (None).
    """
    if not token:
        return None
    try:
        return resolve_identity(token)
    except IdentityError:
        return None


# ============================================================
# Sign in / sign out
# ============================================================
def sign_in(email: str, password: str) -> Tuple[str, Identity]:
    client = _require_client()

    try:
        response = client.auth.sign_in_with_password(
            {"email": email, "password": password}
        )
    except Exception as e:
        logger.warning(f"Login attempt failed for {email}: {type(e).__name__}")
        raise AuthenticationError("Invalid email or password") from e

    if not response.session or not response.session.access_token:
        raise AuthenticationError("Invalid email or password")

    token = response.session.access_token
    identity = resolve_identity(token)

    logger.info(f"User {identity.profile.email} signed in as {identity.role}")
    return token, identity


def sign_out(token: str):
    client = _require_client()
    try:
        client.auth.admin.sign_out(token)
    except Exception as e:
        logger.warning(f"Sign-out failed: {type(e).__name__}: {e}")
        raise AuthenticationError("Sign-out failed") from e
