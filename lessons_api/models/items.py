"""
Item schemas used by the items router.

Provides Pydantic models for:
- Item creation, replacement and partial update requests
- Item responses
- Purchase requests
- Error responses
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, ValidationInfo, field_validator


class Category(str, Enum):
    """Item categories."""
    ELECTRONICS = "electronics"
    BOOKS = "books"
    CLOTHING = "clothing"
    FOOD = "food"
    OTHER = "other"


def _strip(v):
    if isinstance(v, str):
        return v.strip()
    return v


# ============================================================================
# Pydantic Request Models
# ============================================================================


class ItemCreate(BaseModel):
    """Request body for creating or replacing an item."""
    name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Item name"
    )
    description: Optional[str] = Field(
        None,
        max_length=500,
        description="Free-form description"
    )
    price: float = Field(
        ...,
        gt=0,
        description="Unit price"
    )
    quantity: int = Field(
        default=0,
        ge=0,
        description="Units in stock"
    )
    category: Category = Field(
        default=Category.OTHER,
        description="Item category"
    )

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        """Strip surrounding whitespace before the length checks run."""
        return _strip(v)

    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "Mechanical keyboard",
                "description": "Tenkeyless, brown switches",
                "price": 89.9,
                "quantity": 5,
                "category": "electronics"
            }
        }
    }


class ItemUpdate(BaseModel):
    """Partial update; only fields that are set are applied."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    price: Optional[float] = Field(None, gt=0)
    quantity: Optional[int] = Field(None, ge=0)
    category: Optional[Category] = None

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return _strip(v)

    @field_validator("name", "price", "quantity", "category")
    @classmethod
    def reject_null(cls, v, info: ValidationInfo):
        """Only description may be cleared; the other fields are required on an item."""
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v

    model_config = {
        "json_schema_extra": {
            "example": {
                "price": 79.9,
                "quantity": 3
            }
        }
    }


class PurchaseRequest(BaseModel):
    """Number of units to take out of stock."""
    quantity: int = Field(
        default=1,
        ge=1,
        description="Units to purchase"
    )


# ============================================================================
# Pydantic Response Models
# ============================================================================


class Item(ItemCreate):
    """Stored item."""
    id: int = Field(
        ...,
        ge=1,
        description="Item ID"
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "id": 1,
                "name": "Mechanical keyboard",
                "description": "Tenkeyless, brown switches",
                "price": 89.9,
                "quantity": 5,
                "category": "electronics"
            }
        }
    }


class ErrorResponse(BaseModel):
    """Error response schema."""
    detail: str = Field(
        ...,
        min_length=1,
        description="Error message"
    )
    error_code: Optional[str] = Field(
        None,
        description="Error code"
    )
