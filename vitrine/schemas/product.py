from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Product(BaseModel):
    id: str
    name: str
    price: str = ""
    image: str = ""
    stock: Optional[int] = Field(default=None, ge=0)
    in_showcase: bool = False
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True, frozen=True)

    @field_validator("image", "price", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return "" if value is None else value

    @field_validator("in_showcase", mode="before")
    @classmethod
    def _none_as_false(cls, value):
        return False if value is None else value

    @property
    def stock_count(self) -> int:
        return self.stock or 0


class ProductCreate(BaseModel):
    name: str = Field(min_length=1)
    price: str = Field(min_length=1)
    image: str = ""
    stock: Optional[int] = Field(default=None, ge=0)
    in_showcase: bool = False

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)


class ProductUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    price: Optional[str] = Field(default=None, min_length=1)
    image: Optional[str] = None
    stock: Optional[int] = Field(default=None, ge=0)
    in_showcase: Optional[bool] = None

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)
