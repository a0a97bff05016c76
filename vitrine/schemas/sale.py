from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Sale(BaseModel):
    id: str
    product_id: str
    product_name: str
    quantity: int = Field(ge=1)
    total_price: float = Field(ge=0)
    date: datetime

    model_config = ConfigDict(from_attributes=True, frozen=True)


class SaleCreate(BaseModel):
    product_id: str = Field(min_length=1)
    product_name: str
    quantity: int = Field(default=1, ge=1)
    total_price: float = Field(ge=0)
    date: Optional[datetime] = None

    model_config = ConfigDict(extra="forbid")
