# tests/test_access_policy.py

"""
Tests for the role/feature access policy.
"""

import pytest
from unittest.mock import patch

from core.access_policy import (
    accessible_features,
    can_access_feature,
    can_edit_invoices,
    can_mutate,
    capabilities_for,
    has_role,
    is_read_only,
)
from core.permissions import FEATURE_ACCESS
from models.enums import Feature, Role
from tests.conftest import make_identity


R = Role
EXPECTED_MATRIX = {
    "dashboard": {R.MASTER, R.PPIC, R.PRODUCTION, R.OPERATION, R.ADMIN, R.FINANCE, R.MANAGER},
    "workOrders": {R.MASTER, R.PPIC, R.PRODUCTION, R.OPERATION, R.ADMIN, R.MANAGER},
    "workDetails": {R.MASTER, R.PPIC, R.PRODUCTION, R.OPERATION, R.ADMIN, R.MANAGER},
    "progress": {R.MASTER, R.PPIC, R.PRODUCTION, R.OPERATION, R.ADMIN, R.MANAGER},
    "verification": {R.MASTER, R.PPIC, R.PRODUCTION, R.OPERATION, R.ADMIN, R.MANAGER},
    "bastp": {R.MASTER, R.PPIC, R.PRODUCTION, R.OPERATION, R.ADMIN, R.FINANCE, R.MANAGER},
    "vessels": {R.MASTER, R.PPIC, R.PRODUCTION, R.OPERATION, R.ADMIN, R.MANAGER},
    "invoices": {R.MASTER, R.FINANCE, R.MANAGER},
    "userManagement": {R.MASTER},
    "systemSettings": {R.MASTER},
    "reports": {R.MASTER, R.PPIC, R.PRODUCTION, R.OPERATION, R.ADMIN, R.FINANCE, R.MANAGER},
    "exportData": {R.MASTER, R.PPIC, R.PRODUCTION, R.OPERATION, R.ADMIN, R.MANAGER},
    "activityLogs": {R.MASTER, R.MANAGER},
}


# -----------------------------------------------------
# Unresolved identity
# -----------------------------------------------------
@pytest.mark.parametrize("feature", list(Feature))
def test_unresolved_identity_cannot_access_any_feature(feature):
    assert can_access_feature(None, feature) is False
    assert can_access_feature(None, feature.value) is False


@pytest.mark.parametrize("role", list(Role))
def test_unresolved_identity_has_no_role(role):
    assert has_role(None, role) is False
    assert has_role(None, [role]) is False


def test_unresolved_identity_is_not_read_only():
    assert is_read_only(None) is False


def test_unresolved_capabilities_are_all_denied():
    caps = capabilities_for(None)

    assert caps.resolved is False
    assert caps.role is None
    assert caps.features == []
    flags = caps.model_dump(exclude={"resolved", "role", "features"})
    assert not any(flags.values())


# -----------------------------------------------------
# Unmapped features
# -----------------------------------------------------
@pytest.mark.parametrize("role", list(Role))
@pytest.mark.parametrize("feature", ["payroll", "WorkOrders", "", "invoice"])
def test_unmapped_feature_denied_for_every_role(role, feature):
    assert can_access_feature(make_identity(role), feature) is False


def test_non_string_feature_is_denied():
    master = make_identity(Role.MASTER)
    assert can_access_feature(master, None) is False
    assert can_access_feature(master, 42) is False
    assert can_access_feature(master, ["dashboard"]) is False


# -----------------------------------------------------
# Matrix fidelity
# -----------------------------------------------------
def test_matrix_covers_every_feature():
    assert {f.value for f in FEATURE_ACCESS} == set(EXPECTED_MATRIX)
    assert {f.value for f in Feature} == set(EXPECTED_MATRIX)


@pytest.mark.parametrize("feature", sorted(EXPECTED_MATRIX))
@pytest.mark.parametrize("role", list(Role))
def test_matrix_fidelity(feature, role):
    expected = role in EXPECTED_MATRIX[feature]
    assert can_access_feature(make_identity(role), feature) is expected


def test_finance_sees_invoices_but_not_work_orders():
    finance = make_identity(Role.FINANCE)

    assert can_access_feature(finance, "invoices") is True
    assert can_access_feature(finance, "workOrders") is False
    assert can_access_feature(finance, "userManagement") is False


# -----------------------------------------------------
# Read-only
# -----------------------------------------------------
@pytest.mark.parametrize("role", list(Role))
def test_read_only_only_for_manager(role):
    assert is_read_only(make_identity(role)) is (role == Role.MANAGER)


def test_master_is_not_read_only():
    master = make_identity(Role.MASTER)
    assert all(can_access_feature(master, f) for f in Feature)
    assert is_read_only(master) is False


# -----------------------------------------------------
# has_role
# -----------------------------------------------------
@pytest.mark.parametrize("role", list(Role))
def test_has_role_set_semantics(role):
    identity = make_identity(role)
    expected = role in (Role.MASTER, Role.MANAGER)

    assert has_role(identity, ["MASTER", "MANAGER"]) is expected
    assert has_role(identity, {Role.MASTER, Role.MANAGER}) is expected


@pytest.mark.parametrize("role", list(Role))
def test_has_role_singleton_matches_one_element_set(role):
    identity = make_identity(role)
    assert has_role(identity, "MASTER") == has_role(identity, ["MASTER"])
    assert has_role(identity, Role.MASTER) == has_role(identity, {Role.MASTER})


@pytest.mark.parametrize("required", [[], set(), "", "master", ["BOSS"], None, 5])
def test_has_role_malformed_input_is_false(required):
    assert has_role(make_identity(Role.MASTER), required) is False


# -----------------------------------------------------
# Purity
# -----------------------------------------------------
def test_repeated_calls_return_same_answers():
    manager = make_identity(Role.MANAGER)

    first = [
        (can_access_feature(manager, f), has_role(manager, Role.MANAGER), is_read_only(manager))
        for f in Feature
    ]
    second = [
        (can_access_feature(manager, f), has_role(manager, Role.MANAGER), is_read_only(manager))
        for f in Feature
    ]
    assert first == second
    assert capabilities_for(manager) == capabilities_for(manager)


def test_answers_follow_identity_changes():
    master = make_identity(Role.MASTER)
    assert can_access_feature(master, Feature.user_management) is True
    assert can_access_feature(None, Feature.user_management) is False
    assert can_access_feature(make_identity(Role.PPIC), Feature.user_management) is False


# -----------------------------------------------------
# Composed gates
# -----------------------------------------------------
def test_manager_can_view_work_orders_but_not_change_them():
    manager = make_identity(Role.MANAGER)

    assert can_access_feature(manager, "workOrders") is True
    assert is_read_only(manager) is True
    assert can_mutate(manager, "workOrders") is False


def test_can_mutate_requires_feature_access():
    finance = make_identity(Role.FINANCE)
    assert can_mutate(finance, Feature.invoices) is True
    assert can_mutate(finance, Feature.work_orders) is False


@pytest.mark.parametrize("role,expected", [
    (Role.MASTER, True),
    (Role.FINANCE, True),
    (Role.MANAGER, False),
    (Role.ADMIN, False),
    (Role.PPIC, False),
])
def test_invoice_edit_eligibility(role, expected):
    assert can_edit_invoices(make_identity(role)) is expected


def test_accessible_features_keeps_declaration_order():
    features = accessible_features(make_identity(Role.FINANCE))
    assert features == [
        Feature.dashboard,
        Feature.bastp,
        Feature.invoices,
        Feature.reports,
    ]


def test_manager_capabilities():
    caps = capabilities_for(make_identity(Role.MANAGER))

    assert caps.resolved is True
    assert caps.role == Role.MANAGER
    assert caps.read_only is True
    assert caps.can_access_invoices is True
    assert caps.can_edit_invoices is False
    assert caps.can_create_work_orders is False
    assert caps.can_view_reports is True
    assert caps.is_full_access is False
    assert Feature.user_management not in caps.features


def test_feature_missing_from_matrix_is_denied_for_master():
    trimmed = {f: roles for f, roles in FEATURE_ACCESS.items() if f != Feature.system_settings}
    master = make_identity(Role.MASTER)

    with patch("core.access_policy.FEATURE_ACCESS", trimmed):
        assert can_access_feature(master, Feature.system_settings) is False
        assert can_access_feature(master, "systemSettings") is False
        assert can_mutate(master, Feature.system_settings) is False
        assert Feature.system_settings not in accessible_features(master)
        assert can_access_feature(master, Feature.dashboard) is True
