"""Service catalogue schemas - Pydantic models for validation"""

from typing import Optional

from pydantic import BaseModel, field_validator


class ServiceForm(BaseModel):
    """Schema for adding or editing a service"""

    title: str
    category: Optional[str] = ""
    price: float
    duration: int

    @field_validator("title")
    @classmethod
    def validate_title(cls, v):
        if not v or not v.strip():
            raise ValueError("Service title is required")
        return v.strip()

    @field_validator("category")
    @classmethod
    def normalize_category(cls, v):
        return (v or "").strip()

    @field_validator("price")
    @classmethod
    def validate_price(cls, v):
        if v <= 0:
            raise ValueError("Price must be greater than 0")
        return v

    @field_validator("duration")
    @classmethod
    def validate_duration(cls, v):
        if v <= 0:
            raise ValueError("Duration must be greater than 0")
        return v

    def to_document(self) -> dict:
        return {
            "title": self.title,
            "category": self.category or "",
            "price": self.price,
            "duration": self.duration,
        }


class ServiceStatusResponse(BaseModel):
    """Schema for the result of enabling/disabling a service"""

    id: str
    isActive: bool
    message: str
