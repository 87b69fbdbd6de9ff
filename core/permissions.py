from types import MappingProxyType

from models.enums import Feature, Role

# ============================================
# CENTRALIZED FEATURE → ROLES MAP
# ============================================
# Anything not listed here is denied for everyone.

_ALL_ROLES = (
    Role.MASTER, Role.PPIC, Role.PRODUCTION, Role.OPERATION,
    Role.ADMIN, Role.FINANCE, Role.MANAGER,
)

# Everybody except FINANCE
_OPERATIONS = (
    Role.MASTER, Role.PPIC, Role.PRODUCTION, Role.OPERATION,
    Role.ADMIN, Role.MANAGER,
)


FEATURE_ACCESS = MappingProxyType({

    # =====================================================
    # OVERVIEW
    # =====================================================
    Feature.dashboard: frozenset(_ALL_ROLES),
    Feature.reports: frozenset(_ALL_ROLES),

    # =====================================================
    # PRODUCTION FLOW — work orders down to verification
    # =====================================================
    Feature.work_orders: frozenset(_OPERATIONS),
    Feature.work_details: frozenset(_OPERATIONS),
    Feature.progress: frozenset(_OPERATIONS),
    Feature.verification: frozenset(_OPERATIONS),
    Feature.vessels: frozenset(_OPERATIONS),
    Feature.export_data: frozenset(_OPERATIONS),

    # =====================================================
    # BASTP — finance needs it to raise invoices
    # =====================================================
    Feature.bastp: frozenset(_ALL_ROLES),

    # =====================================================
    # INVOICES
    # =====================================================
    Feature.invoices: frozenset({Role.MASTER, Role.FINANCE, Role.MANAGER}),

    # =====================================================
    # SYSTEM
    # =====================================================
    Feature.user_management: frozenset({Role.MASTER}),
    Feature.system_settings: frozenset({Role.MASTER}),
    Feature.activity_logs: frozenset({Role.MASTER, Role.MANAGER}),
})


# Roles forced into view-only mode app-wide
READ_ONLY_ROLES = frozenset({Role.MANAGER})
