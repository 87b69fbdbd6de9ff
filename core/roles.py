from models.enums import Role

# ============================================
# PRESET ROLE GROUPS (used by the role guards)
# ============================================

# =====================================================
# MASTER ONLY — MANAGER rides along read-only
# =====================================================
MASTER_ONLY = frozenset({Role.MASTER, Role.MANAGER})


# =====================================================
# FINANCE ACCESS
# =====================================================
FINANCE_ACCESS = frozenset({Role.MASTER, Role.MANAGER, Role.FINANCE})


# =====================================================
# OPERATIONS ACCESS — everyone on the production floor
# =====================================================
OPERATIONS_ACCESS = frozenset({
    Role.MASTER,
    Role.MANAGER,
    Role.PPIC,
    Role.PRODUCTION,
    Role.OPERATION,
    Role.ADMIN,
})


# =====================================================
# FULL ACCESS — read/write on the production flow
# =====================================================
FULL_ACCESS = frozenset({
    Role.MASTER,
    Role.PPIC,
    Role.PRODUCTION,
    Role.OPERATION,
    Role.ADMIN,
})


# =====================================================
# INVOICE EDITORS
# =====================================================
INVOICE_EDITORS = frozenset({Role.MASTER, Role.FINANCE})
