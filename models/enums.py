from enum import Enum


class BaseStrEnum(str, Enum):
    """
    Base enum that serializes cleanly to a string
    and provides a .list() method for UI dropdowns.
    """

    def __str__(self):
        return str(self.value)

    @classmethod
    def list(cls):
        return [item.value for item in cls]

    @classmethod
    def parse(cls, value):
        """
        Return the member matching `value`, or None.
        Never raises; unknown strings simply map to None.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except (ValueError, TypeError):
            return None


# -----------------------------------------------------
# ROLE
# -----------------------------------------------------
class Role(BaseStrEnum):
    """Job function stored on the user's profile row."""

    MASTER = "MASTER"
    PPIC = "PPIC"
    PRODUCTION = "PRODUCTION"
    OPERATION = "OPERATION"
    ADMIN = "ADMIN"
    FINANCE = "FINANCE"
    MANAGER = "MANAGER"  # sees everything, changes nothing


# -----------------------------------------------------
# FEATURE
# -----------------------------------------------------
class Feature(BaseStrEnum):
    """Capability areas of the dashboard (tags match the frontend)."""

    dashboard = "dashboard"
    work_orders = "workOrders"
    work_details = "workDetails"
    progress = "progress"
    verification = "verification"
    bastp = "bastp"
    vessels = "vessels"
    invoices = "invoices"
    user_management = "userManagement"
    system_settings = "systemSettings"
    reports = "reports"
    export_data = "exportData"
    activity_logs = "activityLogs"
