# invoices/invoices.py

from fastapi import APIRouter, Depends, Request
from typing import List, Optional

from auth.dependencies import get_current_admin, get_current_agent
from models.agency import Agent
from models.invoice import Invoice

router = APIRouter(prefix="/api/invoices", tags=["invoices"])


@router.get("/", response_model=List[Invoice])
async def list_invoices(request: Request, agent_id: Optional[str] = None, admin: dict = Depends(get_current_admin)):
    return await request.app.ledger.list_invoices(agent_id)


@router.get("/mine", response_model=List[Invoice])
async def list_my_invoices(request: Request, agent: Agent = Depends(get_current_agent)):
    return await request.app.ledger.list_invoices(agent.id)
