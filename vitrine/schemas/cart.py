from typing import List

from pydantic import BaseModel, Field


class CartItem(BaseModel):
    id: str
    name: str
    price: str = ""


class HandoffRequest(BaseModel):
    items: List[CartItem] = Field(default_factory=list)


class HandoffResponse(BaseModel):
    count: int
    message: str
    url: str
