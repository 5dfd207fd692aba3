# agencies/agencies.py

from fastapi import APIRouter, Depends, Request
from typing import List

from auth.dependencies import get_current_admin, get_current_agent
from models.agency import Agent, AgentProfileCreate, AgentStatusUpdate, WalletTransaction
from models.booking import Booking
from models.invoice import Invoice

router = APIRouter(prefix="/api/agencies", tags=["agencies"])


# --- Agent Endpoints ---

@router.get("/me", response_model=Agent)
async def get_my_agency(agent: Agent = Depends(get_current_agent)):
    return agent


@router.put("/me/profile", response_model=Agent)
async def update_my_profile(profile: AgentProfileCreate, request: Request, agent: Agent = Depends(get_current_agent)):
    return await request.app.agencies.update_profile(agent.id, profile)


@router.get("/me/bookings", response_model=List[Booking])
async def get_my_bookings(request: Request, agent: Agent = Depends(get_current_agent)):
    """Bookings made by this agency, agent-assigned ones included."""
    return request.app.bookings.bookings_for_agency(agent.id)


# --- Admin Endpoints ---

@router.get("/", response_model=List[Agent])
async def list_agencies(request: Request, admin: dict = Depends(get_current_admin)):
    return await request.app.agencies.list_agencies()


@router.post("/", response_model=Agent, status_code=201)
async def add_agency(profile: AgentProfileCreate, request: Request, admin: dict = Depends(get_current_admin)):
    return await request.app.agencies.add_agency(profile)


@router.put("/{agent_id}", response_model=Agent)
async def update_agency(agent_id: str, profile: AgentProfileCreate, request: Request,
                        admin: dict = Depends(get_current_admin)):
    return await request.app.agencies.update_profile(agent_id, profile)


@router.patch("/{agent_id}/status", response_model=Agent)
async def update_agency_status(agent_id: str, body: AgentStatusUpdate, request: Request,
                               admin: dict = Depends(get_current_admin)):
    return await request.app.agencies.update_agent_status(agent_id, body.status)


@router.post("/{agent_id}/wallet", response_model=Invoice)
async def wallet_transaction(agent_id: str, body: WalletTransaction, request: Request,
                             admin: dict = Depends(get_current_admin)):
    """Manual credit or debit. Every accepted transaction produces exactly one invoice."""
    return await request.app.agencies.wallet_transaction(agent_id, body.amount, body.type, body.description)
