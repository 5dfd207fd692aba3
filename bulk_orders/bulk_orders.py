# bulk_orders/bulk_orders.py

from fastapi import APIRouter, Depends, Request
from typing import List

from auth.dependencies import get_current_admin, get_current_agent
from models.agency import Agent
from models.booking import Booking
from models.bulk_order import (
    BulkOrder,
    BulkOrderCreate,
    BulkOrderItem,
    BulkOrderItemRequest,
    BulkOrderStatusUpdate,
    ItemAssignment,
)

router = APIRouter(prefix="/api/bulk-orders", tags=["bulk-orders"])


# --- Agent Endpoints ---

@router.post("/items/quote", response_model=BulkOrderItem)
async def quote_item(item: BulkOrderItemRequest, request: Request, agent: Agent = Depends(get_current_agent)):
    """Price one line of a bulk order at agent rates."""
    return await request.app.bulk_orders.build_item(item)


@router.post("/", response_model=BulkOrder, status_code=201)
async def submit_order(order: BulkOrderCreate, request: Request, agent: Agent = Depends(get_current_agent)):
    return await request.app.bulk_orders.submit_order(agent.id, order.items)


@router.get("/mine", response_model=List[BulkOrder])
async def list_my_orders(request: Request, agent: Agent = Depends(get_current_agent)):
    return await request.app.bulk_orders.list_orders(agent.id)


@router.delete("/{order_id}")
async def delete_order(order_id: str, request: Request, agent: Agent = Depends(get_current_agent)):
    await request.app.bulk_orders.delete_order(order_id, agent.id)
    return {"message": "Bulk order record deleted"}


@router.post("/{order_id}/items/{item_id}/assign", response_model=Booking, status_code=201)
async def assign_item(order_id: str, item_id: str, assignment: ItemAssignment, request: Request,
                      agent: Agent = Depends(get_current_agent)):
    return await request.app.bulk_orders.assign_item(order_id, item_id, assignment, agent.id)


# --- Admin Endpoints ---

@router.get("/", response_model=List[BulkOrder])
async def list_orders(request: Request, admin: dict = Depends(get_current_admin)):
    return await request.app.bulk_orders.list_orders()


@router.patch("/{order_id}/status", response_model=BulkOrder)
async def update_order_status(order_id: str, body: BulkOrderStatusUpdate, request: Request,
                              admin: dict = Depends(get_current_admin)):
    return await request.app.bulk_orders.update_status(order_id, body.status)
