from pydantic import BaseModel, EmailStr, Field
from typing import Literal, Optional

AgentStatus = Literal["Active", "Inactive"]


class AgentProfile(BaseModel):
    agency_name: str
    agency_id: str
    iata_code: str = ""
    contact_email: EmailStr
    contact_number: str = ""


class AgentProfileCreate(AgentProfile):
    password: Optional[str] = None


class Agent(BaseModel):
    id: str  # same as profile.agency_id
    profile: AgentProfile
    status: AgentStatus = "Active"
    wallet_balance: float = 0.0


class AgentStatusUpdate(BaseModel):
    status: AgentStatus


class WalletTransaction(BaseModel):
    amount: float = Field(gt=0)
    type: Literal["Credit", "Debit"]
    description: str = Field(min_length=1)
