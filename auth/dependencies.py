from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from typing import Optional

from auth.jwt_handler import verify_token
from models.agency import Agent

bearer = HTTPBearer(auto_error=False)


async def get_token_payload(credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer)) -> dict:
    if credentials is None:
        raise HTTPException(status_code=401, detail="Authentication credentials were not provided.")
    payload = verify_token(credentials.credentials)
    if not payload:
        raise HTTPException(status_code=401, detail="Invalid token.")
    return payload


async def get_current_admin(payload: dict = Depends(get_token_payload)) -> dict:
    if payload["user_type"] != "admin":
        raise HTTPException(status_code=403, detail="Access forbidden: Admin role required.")
    return payload


async def get_current_agent(request: Request, payload: dict = Depends(get_token_payload)) -> Agent:
    if payload["user_type"] != "agent":
        raise HTTPException(status_code=403, detail="Access forbidden: Agent role required.")
    agent = await request.app.agencies.find_agency(payload["sub"])
    if not agent:
        raise HTTPException(status_code=404, detail="Agency not found.")
    if agent.status != "Active":
        raise HTTPException(status_code=403, detail="This agency account is inactive.")
    return agent


async def get_current_customer(request: Request, payload: dict = Depends(get_token_payload)) -> dict:
    if payload["user_type"] != "customer":
        raise HTTPException(status_code=403, detail="Access forbidden: Customer role required.")
    customer = await request.app.mongodb["customers"].find_one({"id": int(payload["sub"])}, {"_id": 0, "password": 0})
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found.")
    return customer


async def get_optional_customer(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
) -> Optional[dict]:
    """Guests may book without an account; a valid customer token links the booking."""
    if credentials is None:
        return None
    payload = verify_token(credentials.credentials)
    if not payload or payload["user_type"] != "customer":
        return None
    return await request.app.mongodb["customers"].find_one({"id": int(payload["sub"])}, {"_id": 0, "password": 0})
