# -------------------------
# Enums
# -------------------------
from .enums import (
    Feature,
    Role,
)

# -------------------------
# Identity Models
# -------------------------
from .identity import (
    Identity,
    IdentityRead,
    Profile,
)

# -------------------------
# Work Order Models
# -------------------------
from .work_order import WorkOrderCreate
