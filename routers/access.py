# routers/access.py

from typing import Dict, List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from core import access_policy
from core.access_policy import Capabilities
from core.permissions import FEATURE_ACCESS
from dependencies.auth import get_optional_identity, master_only
from models.enums import Feature
from models.identity import Identity


router = APIRouter(
    prefix="/access",
    tags=["Access"],
)


class FeatureAccess(BaseModel):
    feature: str
    allowed: bool
    read_only: bool


# -----------------------------------------------------
# GET /access/capabilities
# Unresolved identity → all-false snapshot, not an error
# -----------------------------------------------------
@router.get("/capabilities", response_model=Capabilities, summary="What the current user may see and change")
def read_capabilities(identity: Optional[Identity] = Depends(get_optional_identity)):
    return access_policy.capabilities_for(identity)


# -----------------------------------------------------
# GET /access/features/{feature}
# -----------------------------------------------------
@router.get("/features/{feature}", response_model=FeatureAccess, summary="Check one feature")
def read_feature_access(
    feature: str,
    identity: Optional[Identity] = Depends(get_optional_identity),
):
    return FeatureAccess(
        feature=feature,
        allowed=access_policy.can_access_feature(identity, feature),
        read_only=access_policy.is_read_only(identity),
    )


# -----------------------------------------------------
# GET /access/matrix
# -----------------------------------------------------
@router.get(
    "/matrix",
    response_model=Dict[str, List[str]],
    summary="Feature → permitted roles",
    dependencies=[Depends(master_only)],
)
def read_matrix():
    return {
        feature.value: sorted(role.value for role in FEATURE_ACCESS.get(feature, frozenset()))
        for feature in Feature
    }
