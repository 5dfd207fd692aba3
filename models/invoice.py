from pydantic import BaseModel
from typing import Literal
from datetime import datetime

InvoiceType = Literal["Credit", "Debit"]


class Invoice(BaseModel):
    id: str
    agent_id: str
    agent_name: str
    amount: float
    type: InvoiceType
    description: str
    created_at: datetime

    model_config = {"frozen": True}
