# models/identity.py

from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field

from models.enums import Role


# ===============================================================
# PROFILE (row in the profiles table)
# ===============================================================

class Profile(BaseModel):
    """
    Mirrors a row of the `profiles` table.
    The role lives here, not on the Supabase session.
    """
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int
    auth_user_id: str
    email: str
    role: Role

    name: Optional[str] = None
    full_name: Optional[str] = None
    company: Optional[str] = None
    department: Optional[str] = None
    phone: Optional[str] = None
    status: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def display_name(self) -> str:
        return self.full_name or self.name or self.email.split("@")[0]


# ===============================================================
# IDENTITY (session token + profile)
# ===============================================================

class Identity(BaseModel):
    """
    The resolved actor for one request.
    "Unresolved" is represented by None, never by a partial Identity.
    """
    model_config = ConfigDict(frozen=True)

    access_token: str = Field(repr=False)
    profile: Profile

    @property
    def role(self) -> Role:
        return self.profile.role


class IdentityRead(BaseModel):
    """
    Returned to API consumers (no token).
    """
    id: int
    auth_user_id: str
    email: str
    role: Role
    name: Optional[str] = None
    company: Optional[str] = None
    department: Optional[str] = None

    @classmethod
    def from_identity(cls, identity: Identity) -> "IdentityRead":
        profile = identity.profile
        return cls(
            id=profile.id,
            auth_user_id=profile.auth_user_id,
            email=profile.email,
            role=profile.role,
            name=profile.display_name,
            company=profile.company,
            department=profile.department,
        )
