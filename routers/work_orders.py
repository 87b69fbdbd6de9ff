# routers/work_orders.py

from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from core.errors import handle_supabase_error
from core.logging_config import logger
from core.supabase_client import get_supabase_client
from core.utils import sanitize
from dependencies.auth import requires_feature, requires_write_access
from models.enums import Feature
from models.identity import Identity
from models.work_order import WorkOrderCreate


router = APIRouter(
    prefix="/work-orders",
    tags=["Work Orders"],
)


def _client():
    client = get_supabase_client()
    if not client:
        raise HTTPException(500, "Supabase client not configured")
    return client


# -----------------------------------------------------
# LIST (visible to every role with the feature, MANAGER included)
# -----------------------------------------------------
@router.get("", summary="List work orders")
def list_work_orders(
    vessel_id: Optional[int] = None,
    identity: Identity = Depends(requires_feature(Feature.work_orders)),
):
    client = _client()

    try:
        query = (
            client.table("work_order")
            .select("*, vessel:vessel_id (id, name, type, company)")
            .is_("deleted_at", "null")
        )
        if vessel_id is not None:
            query = query.eq("vessel_id", vessel_id)
        result = query.order("created_at", desc=True).execute()
    except Exception as e:
        raise handle_supabase_error(e, "Failed to list work orders")

    return {"data": result.data or []}


# -----------------------------------------------------
# CREATE (needs write access)
# -----------------------------------------------------
@router.post("", status_code=201, summary="Create a work order")
def create_work_order(
    payload: WorkOrderCreate,
    identity: Identity = Depends(requires_write_access(Feature.work_orders)),
):
    client = _client()

    row = sanitize(payload.model_dump(mode="json"))
    row["user_id"] = identity.profile.id

    try:
        result = client.table("work_order").insert(row).execute()
    except Exception as e:
        raise handle_supabase_error(e, "Failed to create work order")

    if not result.data:
        raise HTTPException(500, "Work order was not created")

    created = result.data[0]
    logger.info(f"Work order {created.get('id')} created by {identity.profile.email}")
    return created


# -----------------------------------------------------
# DELETE (soft, needs write access)
# -----------------------------------------------------
@router.delete("/{work_order_id}", summary="Soft-delete a work order")
def delete_work_order(
    work_order_id: int,
    identity: Identity = Depends(requires_write_access(Feature.work_orders)),
):
    client = _client()

    try:
        result = (
            client.table("work_order")
            .update({"deleted_at": datetime.now(timezone.utc).isoformat()})
            .eq("id", work_order_id)
            .is_("deleted_at", "null")
            .execute()
        )
    except Exception as e:
        raise handle_supabase_error(e, "Failed to delete work order")

    if not result.data:
        raise HTTPException(404, "Work order not found")

    logger.info(f"Work order {work_order_id} deleted by {identity.profile.email}")
    return {"success": True, "id": work_order_id}
