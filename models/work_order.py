# models/work_order.py

from typing import Optional
from datetime import date
from pydantic import BaseModel


class WorkOrderCreate(BaseModel):
    """
    Columns the dashboard sends when opening a work order.
    user_id is filled in from the identity, never from the client.
    """
    vessel_id: int
    shipyard_wo_number: str
    shipyard_wo_date: date
    customer_wo_number: Optional[str] = None
    customer_wo_date: Optional[date] = None
    wo_document_delivery_date: Optional[date] = None
