# core/access_policy.py

"""
Role-based access policy for the shipyard dashboard.

Every function takes the current Identity explicitly (None while the
identity is unresolved) and answers with a plain bool. Nothing here does
I/O, caches, or raises: an unresolved identity, an unknown role or an
unmapped feature all come back as "denied".
"""

from typing import Iterable, List, Optional, Union

from pydantic import BaseModel

from core.permissions import FEATURE_ACCESS, READ_ONLY_ROLES
from core.roles import FULL_ACCESS, INVOICE_EDITORS
from models.enums import Feature, Role
from models.identity import Identity


RoleSpec = Union[Role, str, Iterable[Union[Role, str]]]


# -----------------------------------------------------
# Normalize "one role or many" into a set of Roles
# -----------------------------------------------------
def _normalize_roles(required_roles: RoleSpec) -> frozenset:
    if required_roles is None:
        return frozenset()

    if isinstance(required_roles, (Role, str)):
        candidates = [required_roles]
    else:
        try:
            candidates = list(required_roles)
        except TypeError:
            return frozenset()

    roles = set()
    for candidate in candidates:
        role = Role.parse(candidate) if isinstance(candidate, str) else None
        if role is not None:
            roles.add(role)
    return frozenset(roles)


def _resolved_role(identity: Optional[Identity]) -> Optional[Role]:
    if identity is None:
        return None
    return identity.role


# -----------------------------------------------------
# The three core checks
# -----------------------------------------------------
def has_role(identity: Optional[Identity], required_roles: RoleSpec) -> bool:
    role = _resolved_role(identity)
    if role is None:
        return False
    return role in _normalize_roles(required_roles)


def can_access_feature(identity: Optional[Identity], feature: Union[Feature, str]) -> bool:
    """Visibility gate. Unmapped features are denied for every role."""
    role = _resolved_role(identity)
    if role is None:
        return False

    key = Feature.parse(feature)
    if key is None:
        return False

    return role in FEATURE_ACCESS.get(key, frozenset())


def is_read_only(identity: Optional[Identity]) -> bool:
    """Mutation gate, independent of the feature matrix."""
    role = _resolved_role(identity)
    if role is None:
        return False
    return role in READ_ONLY_ROLES


# -----------------------------------------------------
# Derived checks
# -----------------------------------------------------
def can_mutate(identity: Optional[Identity], feature: Union[Feature, str]) -> bool:
    return can_access_feature(identity, feature) and not is_read_only(identity)


def can_edit_invoices(identity: Optional[Identity]) -> bool:
    return has_role(identity, INVOICE_EDITORS) and not is_read_only(identity)


def accessible_features(identity: Optional[Identity]) -> List[Feature]:
    return [feature for feature in Feature if can_access_feature(identity, feature)]


class Capabilities(BaseModel):
    """
    Snapshot of every derived flag for one identity.
    The dashboard uses it to hide screens and disable buttons.
    """
    resolved: bool
    role: Optional[Role] = None
    read_only: bool
    features: List[Feature]

    is_master: bool
    is_full_access: bool
    is_finance: bool
    can_access_invoices: bool
    can_edit_invoices: bool
    can_create_work_orders: bool
    can_edit_work_orders: bool
    can_view_reports: bool
    can_export_data: bool


def capabilities_for(identity: Optional[Identity]) -> Capabilities:
    return Capabilities(
        resolved=identity is not None,
        role=_resolved_role(identity),
        read_only=is_read_only(identity),
        features=accessible_features(identity),
        is_master=has_role(identity, Role.MASTER),
        is_full_access=has_role(identity, FULL_ACCESS),
        is_finance=has_role(identity, Role.FINANCE),
        can_access_invoices=can_access_feature(identity, Feature.invoices),
        can_edit_invoices=can_edit_invoices(identity),
        can_create_work_orders=can_mutate(identity, Feature.work_orders),
        can_edit_work_orders=can_mutate(identity, Feature.work_orders),
        can_view_reports=can_access_feature(identity, Feature.reports),
        can_export_data=can_access_feature(identity, Feature.export_data),
    )
