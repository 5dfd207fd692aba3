from pydantic import BaseModel, EmailStr
from typing import Literal, Optional
from datetime import datetime

UserRole = Literal["admin", "agent", "customer"]


class CustomerBase(BaseModel):
    name: str
    email: EmailStr


class CustomerCreate(CustomerBase):
    password: str


class CustomerLogin(BaseModel):
    email: EmailStr
    password: str


class CustomerResponse(CustomerBase):
    id: int
    created_at: Optional[datetime] = None


class AgentLogin(BaseModel):
    agency_id: str
    password: str


class AdminLogin(BaseModel):
    admin_id: str
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    role: UserRole
    user_id: str


class LogoutResponse(BaseModel):
    message: str
    redirect_to: str
