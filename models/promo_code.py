from pydantic import BaseModel, Field
from typing import Literal


class PromoCode(BaseModel):
    code: str = Field(min_length=1)
    discount: float = Field(ge=0)
    type: Literal["percentage", "fixed"]
